"""Subprocess utilities for external tool invocation.

This module provides the subprocess wrapper used for both ffmpeg invocations
(the loudness analysis pass and the main encode), so encoding, timing and
error handling are consistent between them.
"""

from __future__ import annotations

import logging
import subprocess  # nosec B404 - subprocess is required for FFmpeg invocation
import time
from dataclasses import dataclass
from pathlib import Path
from typing import Any

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class CommandResult:
    """Outcome of a finished external command."""

    args: tuple[str, ...]
    returncode: int
    stdout: str
    stderr: str
    elapsed: float
    """Wall-clock seconds between launch and exit."""

    @property
    def success(self) -> bool:
        return self.returncode == 0

    @property
    def output(self) -> str:
        """Combined stdout and stderr text."""
        if self.stdout and self.stderr:
            return f"{self.stdout}\n{self.stderr}"
        return self.stdout or self.stderr


def run_command(
    args: list[str | Path],
    timeout: int | None = None,
    merge_stderr: bool = False,
    errors: str = "replace",
    log: logging.Logger | None = None,
    **kwargs: Any,
) -> CommandResult:
    """Run an external command to completion and capture its output.

    - Explicit UTF-8 decoding with error replacement
    - No timeout unless one is given; the call blocks until the child exits
    - Wall-clock timing of the child process

    Args:
        args: Command and arguments. Path objects are converted to strings.
        timeout: Timeout in seconds, or None to wait indefinitely.
        merge_stderr: Send stderr into stdout so the output is interleaved
            the way a terminal would show it.
        errors: Error handling mode for text decoding (default "replace").
        log: Logger to report on. Defaults to this module's logger.
        **kwargs: Additional subprocess.run arguments.

    Returns:
        CommandResult with exit code, captured text and elapsed time.

    Raises:
        FileNotFoundError: If the executable does not exist.
        subprocess.TimeoutExpired: If a timeout was given and exceeded.
    """
    log = log or logger
    str_args = [str(arg) for arg in args]
    command_name = str_args[0].split("/")[-1] if str_args else "unknown"

    log.debug(
        "Executing command: %s",
        " ".join(str_args),
        extra={"command": command_name, "arg_count": len(str_args)},
    )

    start_time = time.monotonic()
    try:
        result = subprocess.run(  # nosec B603 - arguments are built internally
            str_args,
            stdout=subprocess.PIPE,
            stderr=subprocess.STDOUT if merge_stderr else subprocess.PIPE,
            text=True,
            encoding="utf-8",
            errors=errors,
            timeout=timeout,
            **kwargs,
        )
    except subprocess.TimeoutExpired:
        elapsed = time.monotonic() - start_time
        log.warning(
            "Command timed out after %ss: %s",
            timeout,
            " ".join(str_args[:3]) + ("..." if len(str_args) > 3 else ""),
            extra={
                "command": command_name,
                "timeout_seconds": timeout,
                "elapsed_seconds": round(elapsed, 3),
            },
        )
        raise

    elapsed = time.monotonic() - start_time
    log.debug(
        "Command completed",
        extra={
            "command": command_name,
            "elapsed_seconds": round(elapsed, 3),
            "returncode": result.returncode,
        },
    )

    return CommandResult(
        args=tuple(str_args),
        returncode=result.returncode,
        stdout=result.stdout or "",
        stderr=result.stderr or "",
        elapsed=elapsed,
    )
