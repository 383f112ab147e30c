"""Call-log record model."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any

# Column names used by the call-log store.
NUMBER = "number"
DATE = "date"
DURATION = "duration"
TYPE = "type"
COUNTRY_ISO = "countryiso"
GEOCODED_LOCATION = "geocoded_location"


@dataclass
class CallRecord:
    """
    A call-log entry that is being built for insertion.

    `country_iso` and `geocoded_location` are derived values filled in by
    `CallLogAnnotator`; everything else is owned by the caller.
    """

    number: str | None = None
    date: int | None = None
    duration: int | None = None
    call_type: int | None = None
    country_iso: str | None = None
    geocoded_location: str | None = None
    extras: dict[str, Any] = field(default_factory=dict)

    def to_dict(self) -> dict[str, Any]:
        return {
            **self.extras,
            NUMBER: self.number,
            DATE: self.date,
            DURATION: self.duration,
            TYPE: self.call_type,
            COUNTRY_ISO: self.country_iso,
            GEOCODED_LOCATION: self.geocoded_location,
        }

