import re
import sys
from dataclasses import dataclass, replace
from datetime import datetime
from typing import Callable, Dict, Iterable, List, Optional, Union

import requests

from office_config import CURRENT_RELEASE_URL, HTTP_TIMEOUT, LEGACY_RELEASE_URL
from office_errors import FetchError, ParseError, UnsupportedFamilyError
from html_table import extract_table
from office_versions import Version, try_parse_version, version_key

LEGACY = "legacy"
CURRENT = "current"

# Office major version -> family
FAMILY_ALIASES = {"15": LEGACY, "16": CURRENT}

DATE_PATTERNS = [
    "%B %d, %Y",
    "%b %d, %Y",
    "%Y %B %d",
    "%d %B %Y",
    "%d %b %Y",
    "%Y-%m-%d",
    "%m/%d/%Y",
]

_session = None


@dataclass(frozen=True)
class LegacyRelease:
    year: Optional[int]
    release_date: str                 # e.g. "November 14", no year
    version: Optional[Version]        # e.g. (15, 0, 5189, 1000)
    link: str
    released_on: Optional[datetime]


@dataclass(frozen=True)
class CurrentRelease:
    channel: str
    version: Union[int, str]          # 2110, or "20H2" style ids kept as text
    build: str                        # e.g. "14527.20276"
    release_date: Optional[datetime]
    supported_until: Optional[str]
    is_latest_build: bool = False


Release = Union[LegacyRelease, CurrentRelease]


def _get_session() -> requests.Session:
    # One session per process; TLS negotiation is left to requests/urllib3 defaults.
    global _session
    if _session is None:
        _session = requests.Session()
        _session.headers["User-Agent"] = (
            "Mozilla/5.0 (Windows NT 10.0; Win64; x64) AppleWebKit/537.36 "
            "(KHTML, like Gecko) Chrome/120.0 Safari/537.36"
        )
    return _session


def fetch_page(url: str, timeout: int = HTTP_TIMEOUT) -> str:
    try:
        r = _get_session().get(url, timeout=timeout)
        r.raise_for_status()
        return r.text
    except requests.RequestException as e:
        raise FetchError(f"failed to fetch {url}: {e}") from e


def resolve_family(family) -> str:
    key = str(family).strip().lower()
    key = FAMILY_ALIASES.get(key, key)
    if key not in (LEGACY, CURRENT):
        raise UnsupportedFamilyError(f"unsupported version family: {family!r} (use legacy/current or 15/16)")
    return key


def family_url(family) -> str:
    return LEGACY_RELEASE_URL if resolve_family(family) == LEGACY else CURRENT_RELEASE_URL


def _cell(record: Dict[str, str], *titles: str) -> str:
    for t in titles:
        if t in record:
            return record[t]
    return ""


def parse_release_date(text: str) -> Optional[datetime]:
    compact = re.sub(r"\s+", " ", text or "").strip()
    for pattern in DATE_PATTERNS:
        try:
            return datetime.strptime(compact, pattern)
        except ValueError:
            continue
    return None


# ---------------- legacy family ----------------

def _released_on(release_date: str, year: Optional[int]) -> Optional[datetime]:
    parts = release_date.split()
    if year is None or len(parts) != 2:
        return None
    month, day = parts
    for fmt in ("%B %d %Y", "%b %d %Y"):
        try:
            return datetime.strptime(f"{month} {day} {year}", fmt)
        except ValueError:
            continue
    return None


def coerce_legacy(records: Iterable[Dict[str, str]]) -> List[LegacyRelease]:
    """
    Year cells are only filled on the first row of each year, so a blank year
    reuses the previous row's resolved year. A row whose date cannot be turned
    into a timestamp keeps released_on=None and is reported, not dropped.
    """
    out = []
    year = None
    for rec in records:
        year_txt = _cell(rec, "Year", "Release year")
        if year_txt:
            try:
                year = int(year_txt)
            except ValueError:
                year = None
        release_date = _cell(rec, "Release date")
        version_txt = _cell(rec, "Version number", "Version")
        released_on = _released_on(release_date, year)
        if released_on is None:
            print(f"[WARN] cannot derive release timestamp from date={release_date!r} year={year} "
                  f"(version {version_txt or '?'})", file=sys.stderr)
        out.append(LegacyRelease(
            year=year,
            release_date=release_date,
            version=try_parse_version(version_txt),
            link=re.sub(r"\s+", "", _cell(rec, "More information", "Link")),
            released_on=released_on,
        ))
    return out


# ---------------- current family ----------------

def _channel_version(text: str) -> Union[int, str]:
    # ASCII digits only; a footnote superscript after the version keeps it as text
    return int(text) if re.fullmatch(r"[0-9]+", text) else text


def coerce_current(records: Iterable[Dict[str, str]]) -> List[CurrentRelease]:
    out = []
    for rec in records:
        supported = _cell(rec, "Version supported until", "Supported until")
        out.append(CurrentRelease(
            channel=_cell(rec, "Channel"),
            version=_channel_version(_cell(rec, "Version")),
            build=_cell(rec, "Build"),
            release_date=parse_release_date(_cell(rec, "Release date")),
            supported_until=supported or None,
        ))
    return out


def mark_latest_builds(releases: List[CurrentRelease]) -> List[CurrentRelease]:
    """
    Partition by channel and flag the highest build in each partition, comparing
    builds numerically ('16.0.10.0' > '16.0.9.0'). First maximum wins on ties.
    Unparsable builds never win; if nothing in a partition parses, its first row does.
    """
    groups: Dict[str, List[int]] = {}
    for i, r in enumerate(releases):
        groups.setdefault(r.channel, []).append(i)

    latest = set()
    for idxs in groups.values():
        best_i, best_key = idxs[0], None
        for i in idxs:
            parsed = try_parse_version(releases[i].build)
            if parsed is None:
                continue
            key = version_key(parsed)
            if best_key is None or key > best_key:
                best_i, best_key = i, key
        latest.add(best_i)

    return [replace(r, is_latest_build=(i in latest)) for i, r in enumerate(releases)]


# ---------------- builder ----------------

def build_catalog(family, fetch: Optional[Callable[[str], str]] = None) -> List[Release]:
    """
    Scrape the family's release table and return typed records.
      build_catalog("current") -> [CurrentRelease(channel="Monthly Enterprise Channel",
                                                   build="14527.20276", is_latest_build=True, ...), ...]
    FetchError/ParseError propagate; per-cell coercion failures become None.
    """
    fam = resolve_family(family)
    url = family_url(fam)
    html_text = (fetch or fetch_page)(url)
    records = list(extract_table(html_text, 0))

    if fam == LEGACY:
        if records and not any(t in records[0] for t in ("Version number", "Version")):
            raise ParseError(f"first table on {url} has no version column (got {list(records[0])})")
        catalog = coerce_legacy(records)
    else:
        if records and ("Channel" not in records[0] or "Build" not in records[0]):
            raise ParseError(f"first table on {url} has no Channel/Build columns (got {list(records[0])})")
        catalog = mark_latest_builds(coerce_current(records))

    print(f"[OK] {fam} catalog: {len(catalog)} release(s) from {url}")
    return catalog
