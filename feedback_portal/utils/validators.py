import re
from urllib.parse import urlparse

_WS_RE = re.compile(r"\s+")
_DIGITS_RE = re.compile(r"^\d+$")


def clean_str(val: str | None, max_len: int = 255) -> str | None:
    """
    Collapse whitespace, trim, enforce max length. Returns None if empty after cleaning.
    """
    if val is None:
        return None
    s = _WS_RE.sub(" ", str(val)).strip()
    if not s:
        return None
    return s[:max_len]


def clean_text(val: str | None, max_len: int = 5000) -> str:
    """Trim multi-line text (comments) without collapsing line breaks. None -> ''."""
    if val is None:
        return ""
    return str(val).strip()[:max_len]


def is_valid_base_url(val: str | None) -> bool:
    """http(s) URL with a host; used for the feedback link domains."""
    if not val:
        return False
    u = urlparse(val)
    return u.scheme in ("http", "https") and bool(u.netloc)


def parse_rating(val) -> int | None:
    """
    Accept 1..5 as int or digit string. Returns None for anything else.
    """
    if isinstance(val, bool) or val is None:
        return None
    if isinstance(val, float):
        if not val.is_integer():
            return None
        val = int(val)
    if isinstance(val, str):
        s = val.strip()
        if not _DIGITS_RE.match(s):
            return None
        val = int(s)
    if not isinstance(val, int):
        return None
    if 1 <= val <= 5:
        return val
    return None


def is_blank(val) -> bool:
    return val is None or (isinstance(val, str) and not val.strip())
