import sys
from dataclasses import dataclass, fields
from typing import Any, Callable, Dict, Iterable, Iterator, List, Optional, Sequence, Tuple

from channels import resolve_channel_name
from office_errors import InvalidInputError
from scrape_release_catalog import CURRENT, CurrentRelease, build_catalog
from office_versions import parse_version, version_key


@dataclass(frozen=True)
class Verdict:
    computer_name: str
    channel: str
    requires_update: Optional[bool]      # None when the channel has no known latest build
    expected_build: Optional[str]        # e.g. "14701.20164"
    observed_build: Optional[str]
    is_latest_version: Optional[bool]
    computer_id: Any


VERDICT_FIELDS = [f.name for f in fields(Verdict)]


def validate_observation(item: Dict[str, Any]) -> Tuple[str, Tuple[int, ...]]:
    """
    Returns (computer_name, parsed 4-part version) or raises InvalidInputError.
      {"computer_name": "PC1", "version": "16.0.14701.20164"} -> ("PC1", (16, 0, 14701, 20164))
    """
    if not isinstance(item, dict):
        raise InvalidInputError(f"observation must be a mapping, got {type(item).__name__}")
    name = item.get("computer_name")
    if not isinstance(name, str) or not name.strip():
        raise InvalidInputError(f"missing computer name in {item!r}")
    try:
        version = parse_version(item.get("version"))
    except ValueError as e:
        raise InvalidInputError(f"{name}: {e}") from e
    if len(version) != 4:
        raise InvalidInputError(f"{name}: expected major.minor.build.revision, got {item.get('version')!r}")
    return name, version


def observed_build(version: Sequence[int]) -> str:
    # Click-to-Run builds are published as "<build>.<revision>" (16.0.14701.20164 -> 14701.20164)
    return f"{version[2]}.{version[3]}"


def latest_build_for(catalog: Iterable[CurrentRelease], channel: str) -> Optional[str]:
    for rel in catalog:
        if rel.is_latest_build and rel.channel == channel:
            return rel.build
    return None


class UpdateChecker:
    """
    Compares installed Microsoft 365 Apps versions against the latest build the
    vendor publishes for a channel.

    The current-family catalog is scraped once, on first use, and reused for
    every evaluate() call on this instance.

    Invalid observations are skipped: each one is printed as a [WARN] line and
    kept in self.skipped as (item, reason). self.skipped is reset by every
    evaluate() call, so it only describes the latest run. With strict=True the first invalid
    observation raises InvalidInputError instead.
    """

    def __init__(self, catalog: Optional[List[CurrentRelease]] = None,
                 builder: Optional[Callable[[str], List[CurrentRelease]]] = None,
                 strict: bool = False):
        self._catalog = catalog
        self._builder = builder or build_catalog
        self.strict = strict
        self.skipped: List[Tuple[Any, str]] = []

    @property
    def catalog(self) -> List[CurrentRelease]:
        if self._catalog is None:
            self._catalog = self._builder(CURRENT)
        return self._catalog

    def evaluate(self, channel_or_guid, items: Iterable[Dict[str, Any]]) -> Iterator[Verdict]:
        self.skipped = []
        channel = resolve_channel_name(channel_or_guid)
        # Build (or fail) before the first verdict is produced
        catalog = self.catalog
        expected = latest_build_for(catalog, channel)
        if expected is None:
            print(f"[WARN] no latest build for channel {channel!r} in catalog; "
                  f"verdicts for it will be indeterminate", file=sys.stderr)
        return self._verdicts(channel, expected, items)

    def _verdicts(self, channel: str, expected: Optional[str], items) -> Iterator[Verdict]:
        for item in items:
            try:
                name, version = validate_observation(item)
            except InvalidInputError as e:
                if self.strict:
                    raise
                print(f"[WARN] Skipping observation: {e}", file=sys.stderr)
                self.skipped.append((item, str(e)))
                continue

            build = observed_build(version)
            is_latest = None
            if expected is not None:
                try:
                    is_latest = version_key(expected) <= version_key(build)
                except ValueError:
                    is_latest = None

            yield Verdict(
                computer_name=name,
                channel=channel,
                requires_update=None if is_latest is None else not is_latest,
                expected_build=expected,
                observed_build=build,
                is_latest_version=is_latest,
                computer_id=item.get("computer_id"),
            )
