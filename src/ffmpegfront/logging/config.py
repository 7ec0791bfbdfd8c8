"""Logging configuration for ffmpegfront.

Provides configure_logging() to set up the package logger based on
LoggingConfig. The job log file is opened in append mode and never rotated.
"""

from __future__ import annotations

import logging
import sys
from pathlib import Path
from typing import TYPE_CHECKING

from ffmpegfront.logging.handlers import JSONFormatter

if TYPE_CHECKING:
    from ffmpegfront.config.models import LoggingConfig

PACKAGE_LOGGER = "ffmpegfront"

TEXT_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"
TEXT_DATEFMT = "%Y-%m-%dT%H:%M:%S%z"

_LEVEL_MAP: dict[str, int] = {
    "debug": logging.DEBUG,
    "info": logging.INFO,
    "warning": logging.WARNING,
    "error": logging.ERROR,
}


def resolve_log_path(log_file: Path | None, output_path: Path) -> Path:
    """Choose the job log file.

    The requested file is used when its directory exists; otherwise the log
    goes next to the output as ``<output>.log``.
    """
    fallback = output_path.with_name(f"{output_path.name}.log")
    if log_file is None:
        return fallback
    if not log_file.parent.is_dir():
        return fallback
    return log_file


def configure_logging(config: LoggingConfig) -> logging.Logger:
    """Configure the ffmpegfront package logger.

    Sets up handlers for file and/or stderr output with the configured
    formatter. A log file that cannot be opened is reported on stderr and
    logging continues on stderr.

    Args:
        config: Logging configuration.

    Returns:
        The configured package logger.
    """
    level = _LEVEL_MAP.get(config.level.casefold(), logging.INFO)

    package_logger = logging.getLogger(PACKAGE_LOGGER)
    package_logger.setLevel(level)
    package_logger.propagate = False

    for handler in package_logger.handlers[:]:
        package_logger.removeHandler(handler)
        handler.close()

    if config.format.casefold() == "json":
        formatter: logging.Formatter = JSONFormatter()
    else:
        formatter = logging.Formatter(TEXT_FORMAT, datefmt=TEXT_DATEFMT)

    file_handler_added = False
    if config.file:
        try:
            file_handler = logging.FileHandler(
                Path(config.file).expanduser(), mode="a", encoding="utf-8"
            )
            file_handler.setLevel(level)
            file_handler.setFormatter(formatter)
            package_logger.addHandler(file_handler)
            file_handler_added = True
        except OSError as e:
            # Log file unavailable - fall back to stderr
            sys.stderr.write(f"Warning: Could not open log file {config.file}: {e}\n")

    if config.include_stderr or not file_handler_added:
        stderr_handler = logging.StreamHandler(sys.stderr)
        stderr_handler.setLevel(level)
        stderr_handler.setFormatter(formatter)
        package_logger.addHandler(stderr_handler)

    return package_logger
