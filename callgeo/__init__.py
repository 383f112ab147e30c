"""
callgeo - country and geocoded-location annotation for call-log records.

This package computes the two derived attributes a call-history entry carries
before it is stored: the current country ISO code and an offline geocoded
description of where the number is registered.
"""

from __future__ import annotations

__all__ = ["__version__"]

__version__ = "0.1.0"
