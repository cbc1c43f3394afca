import re
from typing import Optional, Tuple

VERSION_RE = re.compile(r"^\s*(\d+(?:\.\d+){0,3})\s*$")

Version = Tuple[int, ...]


def parse_version(v) -> Version:
    """
    Strict parse of a dotted numeric version: '16.0.14701.20164' -> (16, 0, 14701, 20164).
    Raises ValueError for anything that is not 1-4 purely numeric segments.
    """
    m = VERSION_RE.match(str(v)) if v is not None else None
    if not m:
        raise ValueError(f"not a numeric version: {v!r}")
    return tuple(int(p) for p in m.group(1).split("."))


def try_parse_version(v) -> Optional[Version]:
    try:
        return parse_version(v)
    except ValueError:
        return None


def version_key(v, width: int = 4) -> Version:
    """Normalize for comparison so '14701.20164' and '14701.20164.0.0' order the same."""
    parts = list(v) if isinstance(v, tuple) else list(parse_version(v))
    if len(parts) < width:
        parts += [0] * (width - len(parts))
    return tuple(parts)


def format_version(v: Optional[Version]) -> Optional[str]:
    if v is None:
        return None
    return ".".join(str(p) for p in v)
