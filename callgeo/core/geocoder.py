"""
Offline geocoding.

All lookups use metadata embedded in the `phonenumbers` library (derived from
libphonenumber) and perform no network I/O.
"""

from __future__ import annotations

from typing import Protocol

from phonenumbers import geocoder
from phonenumbers.phonenumber import PhoneNumber

from callgeo.core.locale import LocaleTag


class Geocoder(Protocol):
    def describe(self, parsed: PhoneNumber, locale: LocaleTag) -> str | None:
        ...


class OfflineGeocoder:
    """
    Describe where a number is registered, in the requested display locale.

    Notes:
        - The description may be a city, a state/province or just a country,
          depending on available metadata.
        - Numbers from the same region as `locale.region` get a more granular
          description (no country name appended), per libphonenumber rules.
        - No coverage yields `None` rather than an empty string.
    """

    def describe(self, parsed: PhoneNumber, locale: LocaleTag) -> str | None:
        description = geocoder.description_for_number(
            parsed, locale.language, script=locale.script, region=locale.region
        )
        return description or None
