"""Core utilities shared by the encode pipeline."""

from ffmpegfront.core.subprocess_utils import CommandResult, run_command

__all__ = [
    "CommandResult",
    "run_command",
]
