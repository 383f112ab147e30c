"""
Call-log annotation.

`CallLogAnnotator` fills in the derived columns of a call-log record right
before it is inserted:

- `country_iso`: the current country as reported by the country context,
- `geocoded_location`: where the number is registered, in the current display
  locale, or `None` when no location can be determined.

Annotation never raises. A missing location must not block insertion, so
every failure on the location path degrades to `None`.
"""

from __future__ import annotations

import logging
import threading
from pathlib import Path
from typing import Any, Callable, Generic, Iterable, TypeVar

from phonenumbers.phonenumber import PhoneNumber

from callgeo.config import CallgeoSettings, load_settings
from callgeo.core.geocoder import Geocoder, OfflineGeocoder
from callgeo.core.locale import EnvironmentLocale, LocaleSource
from callgeo.core.parser import NumberParser, PhoneNumberParser
from callgeo.country import CountryContext, EnvironmentCountryContext, UNKNOWN_COUNTRY_ISO
from callgeo.flags import ALTERNATE_LOCATION_FLAG, EnvironmentFeatureFlags, FeatureFlagStore
from callgeo.location import AlternateLocationSource, load_alternate_source
from callgeo.record import CallRecord

logger = logging.getLogger(__name__)

T = TypeVar("T")

_UNBUILT = object()


class SharedResource(Generic[T]):
    """
    A value built on first use and shared read-only afterwards.

    Construction is guarded so that concurrent first use builds exactly one
    instance, including a factory result of `None`. A factory that raises
    leaves the resource unbuilt.
    """

    def __init__(self, factory: Callable[[], T], *, instance: T | None = None) -> None:
        self._factory = factory
        self._instance: Any = _UNBUILT if instance is None else instance
        self._lock = threading.Lock()

    def get(self) -> T:
        instance = self._instance
        if instance is _UNBUILT:
            with self._lock:
                if self._instance is _UNBUILT:
                    self._instance = self._factory()
                instance = self._instance
        return instance


class CallLogAnnotator:
    """Adds the country ISO code and geocoded location to call-log records."""

    def __init__(
        self,
        *,
        country_context: CountryContext,
        flags: FeatureFlagStore,
        locale_source: LocaleSource,
        parser: NumberParser | None = None,
        geocoder: Geocoder | None = None,
        alternate_source: AlternateLocationSource | None = None,
        parser_factory: Callable[[], NumberParser] = PhoneNumberParser,
        geocoder_factory: Callable[[], Geocoder] = OfflineGeocoder,
        alternate_source_factory: Callable[[], AlternateLocationSource | None] | None = None,
    ) -> None:
        self._country_context = country_context
        self._flags = flags
        self._locale_source = locale_source
        self._parser = SharedResource(parser_factory, instance=parser)
        self._geocoder = SharedResource(geocoder_factory, instance=geocoder)
        self._alternate_source: SharedResource[AlternateLocationSource | None] = SharedResource(
            alternate_source_factory or (lambda: None), instance=alternate_source
        )

    @property
    def parser(self) -> NumberParser:
        return self._parser.get()

    @property
    def geocoder(self) -> Geocoder:
        return self._geocoder.get()

    def annotate(self, record: CallRecord) -> None:
        """Set `record.country_iso` and `record.geocoded_location`."""

        # Current country, so we know which country the number belongs to.
        country_iso = self.get_current_country_iso()
        record.country_iso = country_iso
        # Stored so the location does not have to be computed on display.
        record.geocoded_location = self.get_geocoded_location_for(record.number, country_iso)

    def annotate_many(self, records: Iterable[CallRecord]) -> list[CallRecord]:
        out: list[CallRecord] = []
        for record in records:
            self.annotate(record)
            out.append(record)
        return out

    def get_current_country_iso(self) -> str:
        try:
            return self._country_context.current_iso()
        except Exception:
            logger.warning("Country detection failed", exc_info=True)
            return UNKNOWN_COUNTRY_ISO

    def get_geocoded_location_for(self, number: str | None, country_iso: str) -> str | None:
        """
        Return the location description for `number`, or `None`.

        The alternate location source is consulted first when the
        `persist.env.phone.location` flag is on; a hit there wins. Otherwise
        the number is parsed under `country_iso` and described by the offline
        geocoder in the current display locale.
        """

        if self._alternate_location_enabled():
            alternate = self._lookup_alternate(number)
            if alternate is not None:
                return alternate

        parsed = self._parse(number, country_iso)
        try:
            locale = self._locale_source.current_locale()
        except Exception:
            logger.warning("Reading the display locale failed", exc_info=True)
            return None
        if parsed is None:
            return None

        try:
            return self.geocoder.describe(parsed, locale) or None
        except Exception:
            logger.warning(
                "Geocoding failed",
                exc_info=True,
                extra={"country_iso": country_iso, "locale": str(locale)},
            )
            return None

    def _alternate_location_enabled(self) -> bool:
        try:
            return self._flags.get_bool(ALTERNATE_LOCATION_FLAG, False)
        except Exception:
            logger.warning("Reading flag %s failed", ALTERNATE_LOCATION_FLAG, exc_info=True)
            return False

    def _lookup_alternate(self, number: str | None) -> str | None:
        try:
            source = self._alternate_source.get()
            if source is None:
                return None
            location = source.lookup(number)
        except Exception:
            logger.warning("Alternate location lookup failed", exc_info=True)
            return None
        if location is None:
            return None
        logger.debug("Alternate location hit", extra={"area_code": location.area_code})
        return location.address

    def _parse(self, number: str | None, country_iso: str) -> PhoneNumber | None:
        try:
            return self.parser.parse(number, country_iso)
        except Exception:
            logger.warning("Parsing failed", exc_info=True, extra={"country_iso": country_iso})
            return None


def build_annotator(
    settings: CallgeoSettings | None = None,
    *,
    country_context: CountryContext | None = None,
    locale_source: LocaleSource | None = None,
    flags: FeatureFlagStore | None = None,
    alternate_location_path: Path | None = None,
) -> CallLogAnnotator:
    """
    Wire a `CallLogAnnotator` from settings.

    Collaborators default to the environment-backed implementations; any of
    them can be pinned by passing it explicitly. `alternate_location_path`
    overrides the configured dataset path.
    """

    if settings is None:
        settings = load_settings()

    if locale_source is None:
        locale_source = EnvironmentLocale(default=settings.default_locale)
    if country_context is None:
        country_context = EnvironmentCountryContext(
            default_iso=settings.default_country_iso, locale_source=locale_source
        )
    if flags is None:
        flags = EnvironmentFeatureFlags(
            defaults={ALTERNATE_LOCATION_FLAG: settings.alternate_location_enabled}
        )

    path = alternate_location_path or settings.alternate_location_path
    return CallLogAnnotator(
        country_context=country_context,
        flags=flags,
        locale_source=locale_source,
        alternate_source_factory=lambda: load_alternate_source(path),
    )
