"""JSON log formatting.

One JSON object per line. The session and event set by
SessionContextFilter are top-level keys; values passed through
``extra=`` land under "context".
"""

from __future__ import annotations

import json
import logging
from datetime import datetime, timezone
from typing import Any

# Attributes every LogRecord has, plus those added by Formatter and
# SessionContextFilter; anything else on a record came from ``extra=``
_RECORD_ATTRS = frozenset(vars(logging.LogRecord("", 0, "", 0, "", (), None))) | {
    "message",
    "asctime",
    "session_id",
    "event_name",
    "session_tag",
}


class JSONFormatter(logging.Formatter):
    """Format log records as single-line JSON objects.

    Keys: timestamp (ISO-8601 UTC), level, logger, message; session and
    event when a session context is active; context for extras;
    exception for tracebacks.
    """

    def format(self, record: logging.LogRecord) -> str:
        created = datetime.fromtimestamp(record.created, tz=timezone.utc)
        entry: dict[str, Any] = {
            "timestamp": created.isoformat(),
            "level": record.levelname,
            "logger": record.name,
            "message": record.getMessage(),
        }

        session_id = getattr(record, "session_id", None)
        if session_id:
            entry["session"] = session_id
        event_name = getattr(record, "event_name", None)
        if event_name:
            entry["event"] = event_name

        extras = {
            key: value
            for key, value in vars(record).items()
            if key not in _RECORD_ATTRS and not key.startswith("_")
        }
        if extras:
            entry["context"] = extras

        if record.exc_info:
            entry["exception"] = self.formatException(record.exc_info)

        return json.dumps(entry, default=str)
