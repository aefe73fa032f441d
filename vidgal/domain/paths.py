import re
from urllib.parse import quote, unquote

ABSOLUTE_URL_PATTERN = re.compile(r"^https?:", re.IGNORECASE)
_LEADING_SEPARATORS = re.compile(r"^\.?[\\/]+")
_MALFORMED_ESCAPE = re.compile(r"%(?![0-9A-Fa-f]{2})")
_EXTENSION = re.compile(r"\.[a-z0-9]+$", re.IGNORECASE)
_WORD_SEPARATORS = re.compile(r"[-_]+")

# Characters a browser's encodeURIComponent leaves unescaped, besides A-Z a-z 0-9 - _ .
_COMPONENT_SAFE = "!~*'()"


def strict_unquote(value: str) -> str:
    """Percent-decode value, raising ValueError on a malformed escape or invalid UTF-8."""
    if _MALFORMED_ESCAPE.search(value):
        raise ValueError(f"Malformed percent-escape in {value!r}")
    return unquote(value, errors="strict")


def safe_unquote(value: str) -> str:
    try:
        return strict_unquote(value)
    except ValueError:
        return value


def encode_component(value: str) -> str:
    return quote(value, safe=_COMPONENT_SAFE)


def name_from_path(path: str) -> str:
    """Final path segment with any query string dropped."""
    without_query = path.split("?", 1)[0]
    return without_query.split("/")[-1]


def display_label(label: str) -> str:
    """Decoded label without extension, '-'/'_' runs turned into spaces."""
    cleaned = _WORD_SEPARATORS.sub(" ", safe_unquote(label))
    return _EXTENSION.sub("", cleaned).strip()


def derive_name(path: str) -> str:
    return display_label(name_from_path(path))


class PathResolver:
    """Turns raw manifest/listing paths into canonical URLs under base_dir.

    Absolute http(s) URLs pass through untouched. Anything else is rooted at
    base_dir and every segment after the first is decoded then re-encoded, so
    resolving an already resolved path returns it unchanged.

    Raises UnicodeEncodeError for text that has no UTF-8 form (lone surrogates).
    """

    def __init__(self, base_dir: str = "videos/"):
        self.base_dir = base_dir if base_dir.endswith("/") else f"{base_dir}/"
        self._encoded_base_dir = self._encode_path(self.base_dir)

    def resolve(self, raw_path: str) -> str:
        if ABSOLUTE_URL_PATTERN.match(raw_path):
            return raw_path

        sanitized = _LEADING_SEPARATORS.sub("", raw_path.strip())
        if not sanitized.startswith((self.base_dir, self._encoded_base_dir)):
            sanitized = f"{self.base_dir}{sanitized}"

        return self._encode_path(sanitized)

    @classmethod
    def _encode_path(cls, path: str) -> str:
        segments = path.split("/")
        return "/".join([segments[0]] + [cls._encode_segment(s) for s in segments[1:]])

    @staticmethod
    def _encode_segment(segment: str) -> str:
        try:
            decoded = strict_unquote(segment)
        except ValueError:
            # Malformed escape: treat the segment as literal text
            decoded = segment
        return encode_component(decoded)
