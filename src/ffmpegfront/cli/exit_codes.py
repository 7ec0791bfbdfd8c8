"""Exit codes for the ffmpegfront CLI.

Exit code ranges:
    0: Success
    1-9: General errors
    10-19: Validation errors (flags, settings, config)
    30-39: Tool/dependency errors
    40-49: Operation errors
    50-59: Analysis errors
"""

from enum import IntEnum


class ExitCode(IntEnum):
    """Exit codes for ffmpegfront."""

    # Success (0)
    SUCCESS = 0

    # General errors (1-9)
    GENERAL_ERROR = 1
    INTERRUPTED = 2

    # Validation errors (10-19)
    CONFIG_ERROR = 11

    # Tool/dependency errors (30-39)
    TOOL_NOT_AVAILABLE = 30

    # Operation errors (40-49)
    OPERATION_FAILED = 40

    # Analysis errors (50-59)
    ANALYSIS_ERROR = 50
