"""
Logging configuration.

callgeo uses standard library logging and never configures handlers from
library code. The CLI calls `configure_logging`.

Annotation code attaches call context through `extra=` (see
`CONTEXT_FIELDS`). Both formatters render that context: the plain one as
trailing `key=value` pairs, the JSON one as top-level keys.
"""

from __future__ import annotations

import json
import logging
import sys
from datetime import datetime, timezone
from typing import Any

CONTEXT_FIELDS = ("country_iso", "locale", "area_code", "record_count", "source_path")


def call_context(record: logging.LogRecord) -> dict[str, Any]:
    """Return the call context attached to a log record, in a stable order."""

    return {k: getattr(record, k) for k in CONTEXT_FIELDS if hasattr(record, k)}


class ContextFormatter(logging.Formatter):
    def formatMessage(self, record: logging.LogRecord) -> str:
        text = super().formatMessage(record)
        context = call_context(record)
        if not context:
            return text
        return text + " " + " ".join(f"{k}={v}" for k, v in context.items())


class JsonFormatter(logging.Formatter):
    def format(self, record: logging.LogRecord) -> str:
        payload: dict[str, Any] = {
            "ts": datetime.fromtimestamp(record.created, tz=timezone.utc).isoformat(),
            "level": record.levelname,
            "logger": record.name,
            "msg": record.getMessage(),
        }
        payload.update(call_context(record))
        if record.exc_info:
            payload["exc_info"] = self.formatException(record.exc_info)
        return json.dumps(payload, ensure_ascii=False, separators=(",", ":"), default=str)


def configure_logging(*, level: str = "INFO", json_logging: bool = False) -> None:
    """
    Configure root logging for CLI use.
    """

    root = logging.getLogger()
    root.setLevel(level.upper())

    # Replace existing handlers to avoid duplicate logs on repeated calls.
    for h in list(root.handlers):
        root.removeHandler(h)

    # stderr keeps stdout free for command output.
    handler = logging.StreamHandler(sys.stderr)
    if json_logging:
        handler.setFormatter(JsonFormatter())
    else:
        handler.setFormatter(ContextFormatter("%(asctime)s %(levelname)s %(name)s: %(message)s"))

    root.addHandler(handler)
