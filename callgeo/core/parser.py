"""
Phone number parsing.

This module wraps `phonenumbers.parse` for call-log use:
- raw dialed/incoming strings are sanitized first (separators, `00` prefix),
- the current country ISO code is the default region for national numbers,
- any parse failure is returned as `None` instead of an exception.

Numbers are not validated beyond parseability; a parsed number with no
geocoding coverage simply produces no description later on.
"""

from __future__ import annotations

import logging
import re
from typing import Protocol

import phonenumbers
from phonenumbers import NumberParseException
from phonenumbers.phonenumber import PhoneNumber

logger = logging.getLogger(__name__)

_NON_DIALABLE = re.compile(r"[^\d+]+")


def sanitize_number(raw: str | None) -> str:
    """
    Normalize raw phone number input into a parse-friendly string.

    - Trims whitespace.
    - Removes common separators (spaces, dashes, parentheses, dots).
    - Converts an international dialing prefix `00` into `+`.

    This function does not validate; it only sanitizes input.
    """

    if raw is None:
        return ""
    s = raw.strip()
    if not s:
        return s

    s = _NON_DIALABLE.sub("", s)
    if s.startswith("00"):
        s = f"+{s[2:]}"
    return s


class NumberParser(Protocol):
    def parse(self, raw: str | None, country_iso: str) -> PhoneNumber | None:
        ...


class PhoneNumberParser:
    """
    `NumberParser` backed by libphonenumber metadata.

    Instances hold no mutable state and are safe to share between threads.
    """

    def parse(self, raw: str | None, country_iso: str) -> PhoneNumber | None:
        sanitized = sanitize_number(raw)
        if not sanitized:
            return None

        region = country_iso.upper() if country_iso else None
        try:
            return phonenumbers.parse(sanitized, region)
        except NumberParseException as exc:
            logger.debug("Unparseable number for region %s: %s", region, exc)
            return None
