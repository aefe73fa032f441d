import re
import unicodedata
from typing import Iterable, List, Tuple

from vidgal.domain.models import VideoEntry

_TOKEN = re.compile(r"(\d+)|(\D)")

# Collation ranks: spaces/punctuation < digit runs < letters
_RANK_SYMBOL = 0
_RANK_NUMBER = 1
_RANK_LETTER = 2


def dedupe_entries(entries: Iterable[VideoEntry]) -> List[VideoEntry]:
    """Drops entries whose URL matches an earlier one, ignoring case."""
    seen = set()
    deduped: List[VideoEntry] = []
    for entry in entries:
        if not entry or not entry.url:
            continue
        key = entry.url.lower()
        if key in seen:
            continue
        seen.add(key)
        deduped.append(entry)
    return deduped


def fold(name: str) -> str:
    """Case- and accent-folded form of name, so 'Éclair' and 'eclair' compare equal."""
    decomposed = unicodedata.normalize("NFKD", name)
    stripped = "".join(ch for ch in decomposed if not unicodedata.combining(ch))
    return stripped.casefold()


def collation_key(name: str) -> List[Tuple[int, int, str]]:
    """Per-character sort key where each digit run compares as one number.

    'clip one' < 'clip2' < 'clip10', like a browser's numeric localeCompare.
    """
    key: List[Tuple[int, int, str]] = []
    for match in _TOKEN.finditer(fold(name)):
        digits, char = match.groups()
        if digits is not None:
            key.append((_RANK_NUMBER, int(digits), ""))
        elif char.isalpha():
            key.append((_RANK_LETTER, 0, char))
        else:
            key.append((_RANK_SYMBOL, 0, char))
    return key


def sort_entries(entries: Iterable[VideoEntry]) -> List[VideoEntry]:
    """Stable sort by name; entries with equal keys keep their discovery order."""
    return sorted(entries, key=lambda entry: collation_key(entry.name))
