from __future__ import annotations

from callgeo.flags import (
    ALTERNATE_LOCATION_FLAG,
    EnvironmentFeatureFlags,
    StaticFeatureFlags,
    env_var_for_flag,
    parse_bool,
)


def test_env_var_for_flag() -> None:
    assert env_var_for_flag(ALTERNATE_LOCATION_FLAG) == "PERSIST_ENV_PHONE_LOCATION"
    assert env_var_for_flag("a-b.c") == "A_B_C"


def test_parse_bool() -> None:
    assert parse_bool("Yes", False) is True
    assert parse_bool("0", True) is False
    assert parse_bool("maybe", True) is True
    assert parse_bool(None, False) is False


def test_environment_flags_read_fresh_each_call() -> None:
    env: dict[str, str] = {}
    flags = EnvironmentFeatureFlags(environ=env)
    assert flags.get_bool(ALTERNATE_LOCATION_FLAG, False) is False

    env["PERSIST_ENV_PHONE_LOCATION"] = "true"
    assert flags.get_bool(ALTERNATE_LOCATION_FLAG, False) is True

    env["PERSIST_ENV_PHONE_LOCATION"] = "off"
    assert flags.get_bool(ALTERNATE_LOCATION_FLAG, True) is False


def test_environment_flags_configured_default() -> None:
    flags = EnvironmentFeatureFlags(defaults={ALTERNATE_LOCATION_FLAG: True}, environ={})
    assert flags.get_bool(ALTERNATE_LOCATION_FLAG, False) is True
    assert flags.get_bool("other.flag", False) is False


def test_static_flags() -> None:
    flags = StaticFeatureFlags({ALTERNATE_LOCATION_FLAG: True})
    assert flags.get_bool(ALTERNATE_LOCATION_FLAG, False) is True
    assert flags.get_bool("missing", True) is True
