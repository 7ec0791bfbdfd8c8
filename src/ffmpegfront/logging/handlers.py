"""JSON log lines for ffmpegfront job logs.

Each record becomes one JSON object per line so a job log can be grepped or
loaded line by line. Job fields passed through ``extra=`` (the ffmpeg command
name, its exit status and timing) are lifted to top-level keys.
"""

from __future__ import annotations

import json
import logging
from datetime import datetime, timezone
from typing import Any

# Attributes set through ``extra=`` by the subprocess wrapper and job runner
JOB_FIELDS: tuple[str, ...] = (
    "command",
    "arg_count",
    "returncode",
    "elapsed_seconds",
    "timeout_seconds",
)


class JSONFormatter(logging.Formatter):
    """Format job log records as single-line JSON objects.

    Keys: ``timestamp`` (ISO-8601 UTC), ``level``, ``logger``, ``message``,
    any JOB_FIELDS present on the record, and ``exception`` when one was
    logged.
    """

    def format(self, record: logging.LogRecord) -> str:
        entry: dict[str, Any] = {
            "timestamp": datetime.fromtimestamp(
                record.created, tz=timezone.utc
            ).isoformat(),
            "level": record.levelname,
            "logger": record.name,
            "message": record.getMessage(),
        }

        for name in JOB_FIELDS:
            if hasattr(record, name):
                entry[name] = getattr(record, name)

        if record.exc_info:
            entry["exception"] = self.formatException(record.exc_info)

        return json.dumps(entry, default=str)
