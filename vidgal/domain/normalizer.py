import logging
from typing import Any, Iterable, List, Mapping, Optional, Sequence

from .models import VideoEntry
from .paths import PathResolver, derive_name, safe_unquote

NAME_FIELDS = ("name", "file", "title")
POSTER_FIELDS = ("poster", "thumbnail")

logger = logging.getLogger(__name__)


def first_present(record: Mapping[str, Any], keys: Sequence[str]) -> Optional[str]:
    """Returns the first non-empty string value among keys, in priority order."""
    for key in keys:
        value = record.get(key)
        if isinstance(value, str) and value.strip():
            return value
    return None


class EntryNormalizer:
    """Converts raw manifest/listing records into VideoEntry objects.

    A raw record is either a bare path string or a loosely typed mapping.
    Anything that cannot produce a non-empty name and a URL maps to None;
    normalize() never raises.
    """

    def __init__(self, resolver: PathResolver):
        self.resolver = resolver

    def normalize(self, raw: Any) -> Optional[VideoEntry]:
        try:
            if isinstance(raw, str):
                return self._from_path(raw)
            if isinstance(raw, Mapping):
                return self._from_record(raw)
        except ValueError as exc:
            # Unencodable text (lone surrogates) or a model validation failure
            logger.debug(f"NORMALIZE: rejected {raw!r}: {exc}")
        return None

    def normalize_all(self, records: Iterable[Any]) -> List[VideoEntry]:
        entries: List[VideoEntry] = []
        rejected = 0
        for raw in records:
            entry = self.normalize(raw)
            if entry is None:
                rejected += 1
                continue
            entries.append(entry)
        if rejected:
            logger.debug(f"NORMALIZE: rejected {rejected} raw record(s)")
        return entries

    def _from_path(self, path: str) -> Optional[VideoEntry]:
        url = self.resolver.resolve(path)
        name = derive_name(url)
        if not name:
            return None
        return VideoEntry(name=name, url=url)

    def _from_record(self, record: Mapping[str, Any]) -> Optional[VideoEntry]:
        label = first_present(record, NAME_FIELDS)
        raw_url = first_present(record, ("url",)) or label
        if not raw_url:
            return None

        url = self.resolver.resolve(raw_url)
        name = safe_unquote(label).strip() if label else derive_name(url)
        if not name:
            return None

        return VideoEntry(
            name=name,
            url=url,
            poster=first_present(record, POSTER_FIELDS),
        )
