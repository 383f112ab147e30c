"""
Display locale handling.

The geocoded description is rendered in the user's display language, which
can change while the process is running. `EnvironmentLocale` therefore reads
the environment on every call and never caches a value.
"""

from __future__ import annotations

import os
import re
from dataclasses import dataclass
from typing import Mapping, Protocol

DEFAULT_LANGUAGE = "en"

# Checked in order; the first non-empty value wins.
LOCALE_ENV_VARS = ("CALLGEO_LOCALE", "LC_ALL", "LC_MESSAGES", "LANG")

_SEPARATORS = re.compile(r"[-_]")


@dataclass(frozen=True, slots=True)
class LocaleTag:
    """A language with optional script and region subtags (e.g. zh-Hant-TW)."""

    language: str
    script: str | None = None
    region: str | None = None

    def __str__(self) -> str:
        return "-".join(p for p in (self.language, self.script, self.region) if p)


def parse_locale(value: str | None, *, default: str = DEFAULT_LANGUAGE) -> LocaleTag:
    """
    Parse a POSIX or BCP 47 style locale string into a `LocaleTag`.

    Encoding (`.UTF-8`) and modifier (`@euro`) suffixes are ignored. `C` and
    `POSIX` are treated as unset and fall back to `default`.
    """

    raw = (value or "").strip()
    raw = raw.split(".", 1)[0].split("@", 1)[0]
    if not raw or raw.upper() in ("C", "POSIX"):
        fallback = (default or "").strip()
        if fallback and fallback.upper() not in ("C", "POSIX"):
            return parse_locale(fallback)
        return LocaleTag(language=DEFAULT_LANGUAGE)

    parts = [p for p in _SEPARATORS.split(raw) if p]
    language = parts[0].lower()
    script: str | None = None
    region: str | None = None
    for part in parts[1:]:
        if len(part) == 4 and part.isalpha():
            script = part.title()
        elif (len(part) == 2 and part.isalpha()) or (len(part) == 3 and part.isdigit()):
            region = part.upper()
    return LocaleTag(language=language, script=script, region=region)


class LocaleSource(Protocol):
    def current_locale(self) -> LocaleTag:
        ...


class EnvironmentLocale:
    """Locale source reading the process environment on every call."""

    def __init__(
        self, *, default: str = DEFAULT_LANGUAGE, environ: Mapping[str, str] | None = None
    ) -> None:
        self._default = default
        self._environ = environ

    def current_locale(self) -> LocaleTag:
        env = os.environ if self._environ is None else self._environ
        for name in LOCALE_ENV_VARS:
            value = env.get(name)
            if value:
                return parse_locale(value, default=self._default)
        return parse_locale(self._default)


class StaticLocale:
    def __init__(self, locale: LocaleTag | str) -> None:
        self._locale = locale if isinstance(locale, LocaleTag) else parse_locale(locale)

    def current_locale(self) -> LocaleTag:
        return self._locale
