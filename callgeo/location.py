"""
Alternate location lookups based on area-code datasets.

Some deployments maintain their own number-prefix → location table (for
example operator-specific or more granular data than libphonenumber ships).
Point `alternate_location_path` at such a table; without one there is no
alternate source and lookups always go through the offline geocoder.

Dataset format (JSON array):

    [{"prefix": "8610", "address": "Beijing", "source": "operator"}, ...]

Prefixes are digit strings without `+` or international `00`. The longest
matching prefix wins.
"""

from __future__ import annotations

import json
import logging
import re
from dataclasses import dataclass
from pathlib import Path
from typing import Iterable, Protocol

logger = logging.getLogger(__name__)

_NON_DIGIT = re.compile(r"\D+")


@dataclass(frozen=True, slots=True)
class AlternateLocation:
    address: str
    area_code: str
    source: str


class AlternateLocationSource(Protocol):
    def lookup(self, raw: str | None) -> AlternateLocation | None:
        ...


def number_key(raw: str | None) -> str:
    """Reduce a raw number to the digit string used for prefix matching."""

    if not raw:
        return ""
    s = raw.strip()
    if s.startswith("00"):
        s = s[2:]
    return _NON_DIGIT.sub("", s)


def _parse_entry(obj: dict[str, object]) -> AlternateLocation | None:
    prefix = number_key(str(obj.get("prefix") or ""))
    address = str(obj.get("address") or "").strip()
    if not prefix or not address:
        return None
    source = str(obj.get("source") or "unknown")
    return AlternateLocation(address=address, area_code=prefix, source=source)


def load_area_codes(path: Path) -> list[AlternateLocation]:
    """
    Load area-code entries from a JSON dataset.

    Raises:
        OSError: if the file cannot be read.
        ValueError: if the file is not a JSON array.
    """

    raw = json.loads(path.read_text(encoding="utf-8"))
    if not isinstance(raw, list):
        raise ValueError(f"{path} must contain a JSON array")

    entries: list[AlternateLocation] = []
    for item in raw:
        if isinstance(item, dict):
            entry = _parse_entry(item)
            if entry is not None:
                entries.append(entry)
    return entries


class PrefixLocationSource:
    """Longest-prefix lookup over an in-memory area-code table."""

    def __init__(self, entries: Iterable[AlternateLocation]) -> None:
        self._by_prefix: dict[str, AlternateLocation] = {}
        for entry in entries:
            # First entry for a prefix wins.
            self._by_prefix.setdefault(entry.area_code, entry)
        self._max_len = max((len(p) for p in self._by_prefix), default=0)

    def lookup(self, raw: str | None) -> AlternateLocation | None:
        key = number_key(raw)
        for size in range(min(len(key), self._max_len), 0, -1):
            hit = self._by_prefix.get(key[:size])
            if hit is not None:
                return hit
        return None


def load_alternate_source(path: Path | None) -> PrefixLocationSource | None:
    """
    Build the alternate source for a configured dataset path.

    No path means no alternate source. A dataset that is missing or unusable
    is logged and also yields no source.
    """

    if path is None:
        return None
    try:
        entries = load_area_codes(path)
    except (OSError, ValueError) as exc:
        logger.warning(
            "Alternate location dataset unavailable: %s", exc, extra={"source_path": str(path)}
        )
        return None
    return PrefixLocationSource(entries)
