"""Number parsing, locale handling and offline geocoding built on `phonenumbers`."""

from __future__ import annotations

from .geocoder import Geocoder, OfflineGeocoder
from .locale import EnvironmentLocale, LocaleSource, LocaleTag, StaticLocale, parse_locale
from .parser import NumberParser, PhoneNumberParser, sanitize_number

__all__ = [
    "Geocoder",
    "OfflineGeocoder",
    "EnvironmentLocale",
    "LocaleSource",
    "LocaleTag",
    "StaticLocale",
    "parse_locale",
    "NumberParser",
    "PhoneNumberParser",
    "sanitize_number",
]
