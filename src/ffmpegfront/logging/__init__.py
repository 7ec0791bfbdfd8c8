"""Logging setup for ffmpegfront.

Provides configurable logging with text or JSON output to the job log file.
"""

from ffmpegfront.logging.config import configure_logging, resolve_log_path
from ffmpegfront.logging.handlers import JSONFormatter

__all__ = [
    "JSONFormatter",
    "configure_logging",
    "resolve_log_path",
]
