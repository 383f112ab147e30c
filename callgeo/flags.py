"""
Feature flags.

Flags are addressed by dotted property-style keys (e.g.
`persist.env.phone.location`) and read fresh on every call; nothing here
caches a value.
"""

from __future__ import annotations

import os
import re
from typing import Mapping, Protocol

ALTERNATE_LOCATION_FLAG = "persist.env.phone.location"

_TRUTHY = frozenset({"1", "true", "yes", "on", "y"})
_FALSY = frozenset({"0", "false", "no", "off", "n"})

_NON_ALNUM = re.compile(r"[^A-Za-z0-9]+")


def env_var_for_flag(key: str) -> str:
    """Map a flag key to its environment variable (`a.b-c` -> `A_B_C`)."""

    return _NON_ALNUM.sub("_", key).strip("_").upper()


def parse_bool(value: str | None, default: bool) -> bool:
    if value is None:
        return default
    v = value.strip().lower()
    if v in _TRUTHY:
        return True
    if v in _FALSY:
        return False
    return default


class FeatureFlagStore(Protocol):
    def get_bool(self, key: str, default: bool) -> bool:
        ...


class StaticFeatureFlags:
    def __init__(self, values: Mapping[str, bool] | None = None) -> None:
        self._values = dict(values or {})

    def get_bool(self, key: str, default: bool) -> bool:
        return self._values.get(key, default)


class EnvironmentFeatureFlags:
    """
    Flags backed by environment variables, with configured fallbacks.

    The environment variable wins when set to a recognized boolean; otherwise
    the configured value for the key is used, then the caller's default.
    """

    def __init__(
        self,
        *,
        defaults: Mapping[str, bool] | None = None,
        environ: Mapping[str, str] | None = None,
    ) -> None:
        self._defaults = dict(defaults or {})
        self._environ = environ

    def get_bool(self, key: str, default: bool) -> bool:
        env = os.environ if self._environ is None else self._environ
        fallback = self._defaults.get(key, default)
        return parse_bool(env.get(env_var_for_flag(key)), fallback)
