from __future__ import annotations

from callgeo.core.locale import StaticLocale
from callgeo.country import (
    UNKNOWN_COUNTRY_ISO,
    EnvironmentCountryContext,
    StaticCountryContext,
)


def test_static_country_context() -> None:
    assert StaticCountryContext("FR").current_iso() == "FR"


def test_environment_country_prefers_env_var() -> None:
    ctx = EnvironmentCountryContext(
        default_iso="us", locale_source=StaticLocale("de_DE"), environ={"CALLGEO_COUNTRY_ISO": "jp"}
    )
    assert ctx.current_iso() == "JP"


def test_environment_country_falls_back_to_default_then_locale() -> None:
    assert EnvironmentCountryContext(default_iso="us", environ={}).current_iso() == "US"
    ctx = EnvironmentCountryContext(locale_source=StaticLocale("de_DE"), environ={})
    assert ctx.current_iso() == "DE"


def test_environment_country_unknown() -> None:
    ctx = EnvironmentCountryContext(locale_source=StaticLocale("en"), environ={})
    assert ctx.current_iso() == UNKNOWN_COUNTRY_ISO
