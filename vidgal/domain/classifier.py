import re
from typing import Iterable, List, Optional, Union

from .models import CatalogItem, VideoEntry

DEFAULT_SENSITIVE_PATTERN = "nsfw"


class Classifier:
    """Flags entries whose name or URL contains the sensitive marker.

    The flag is advisory: annotate() keeps every entry, in order.
    """

    def __init__(self, pattern: Union[str, re.Pattern] = DEFAULT_SENSITIVE_PATTERN):
        self.pattern = pattern if isinstance(pattern, re.Pattern) else re.compile(pattern, re.IGNORECASE)

    def _matches(self, value: Optional[str]) -> bool:
        return isinstance(value, str) and self.pattern.search(value) is not None

    def is_sensitive(self, entry: VideoEntry) -> bool:
        return self._matches(entry.name) or self._matches(entry.url)

    def annotate(self, entries: Iterable[VideoEntry]) -> List[CatalogItem]:
        return [CatalogItem(entry=entry, sensitive=self.is_sensitive(entry)) for entry in entries]
