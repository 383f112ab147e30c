"""Current-country providers."""

from __future__ import annotations

import os
from typing import Mapping, Protocol

from callgeo.core.locale import LocaleSource

COUNTRY_ENV_VAR = "CALLGEO_COUNTRY_ISO"

# Marker for "country unknown"; still written to the record.
UNKNOWN_COUNTRY_ISO = ""


class CountryContext(Protocol):
    def current_iso(self) -> str:
        """Return the best-known current country ISO code. Must never block."""
        ...


class StaticCountryContext:
    def __init__(self, country_iso: str) -> None:
        self._country_iso = country_iso

    def current_iso(self) -> str:
        return self._country_iso


class EnvironmentCountryContext:
    """
    Country detection from the process environment.

    Resolution order:
    1. `CALLGEO_COUNTRY_ISO` environment variable,
    2. the configured default country,
    3. the region subtag of the current display locale,
    4. `UNKNOWN_COUNTRY_ISO`.
    """

    def __init__(
        self,
        *,
        default_iso: str | None = None,
        locale_source: LocaleSource | None = None,
        environ: Mapping[str, str] | None = None,
    ) -> None:
        self._default_iso = default_iso
        self._locale_source = locale_source
        self._environ = environ

    def current_iso(self) -> str:
        env = os.environ if self._environ is None else self._environ
        value = (env.get(COUNTRY_ENV_VAR) or "").strip()
        if value:
            return value.upper()
        if self._default_iso:
            return self._default_iso.strip().upper()
        if self._locale_source is not None:
            region = self._locale_source.current_locale().region
            if region and region.isalpha():
                return region
        return UNKNOWN_COUNTRY_ISO
