"""Job orchestration.

A job reads one settings document, builds the ffmpeg argument vector and
runs ffmpeg once. The optional loudness analysis pass always finishes before
the encode starts, since its measurements are part of the encode arguments.
"""

from __future__ import annotations

import logging
import shlex
from dataclasses import dataclass
from pathlib import Path

from ffmpegfront.config.models import FrontConfig
from ffmpegfront.core.subprocess_utils import run_command
from ffmpegfront.encode.command import build_ffmpeg_args
from ffmpegfront.encode.loudnorm import LoudnormMeasurement, measure_loudness
from ffmpegfront.exceptions import MeasurementError
from ffmpegfront.settings.loader import load_settings
from ffmpegfront.tools import require_ffmpeg

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class JobRequest:
    """Inputs of a single transcode job."""

    input_path: Path
    output_path: Path
    settings_path: Path
    args_only: bool = False


@dataclass
class JobResult:
    """Outcome of a transcode job."""

    args: list[str]
    """ffmpeg arguments, without the executable."""

    executed: bool = False
    returncode: int | None = None
    output: str = ""
    elapsed: float | None = None

    @property
    def success(self) -> bool:
        """True when ffmpeg was not run or exited cleanly."""
        return not self.executed or self.returncode == 0


def format_args(args: list[str]) -> str:
    """Render an argument vector as one shell-quoted line."""
    return shlex.join(args)


def run_job(
    request: JobRequest,
    config: FrontConfig | None = None,
    log: logging.Logger | None = None,
) -> JobResult:
    """Run a transcode job.

    Args:
        request: Input, output and settings paths.
        config: Runtime configuration; defaults apply when None.
        log: Job logger. Passed down to every component.

    Returns:
        JobResult describing the arguments and, unless args_only was
        requested, the finished ffmpeg run.

    Raises:
        SettingsValidationError: If the settings document is unusable.
        ResolutionError: If the video resolution is unknown.
        MeasurementError: If the loudness analysis pass fails.
        ToolNotFoundError: If ffmpeg cannot be found.
    """
    log = log or logger
    config = config or FrontConfig()

    settings = load_settings(request.settings_path)
    log.info("Loaded settings: %s", settings.model_dump(by_alias=True))

    def measure(input_path: str) -> LoudnormMeasurement:
        ffmpeg_path = require_ffmpeg(config.tools.ffmpeg)
        try:
            return measure_loudness(input_path, ffmpeg_path=ffmpeg_path, log=log)
        except MeasurementError as e:
            log.error("Loudnorm analysis failed: %s", e)
            log.error("Analysis output: %s", e.diagnostics)
            raise

    args = build_ffmpeg_args(
        settings,
        request.input_path,
        request.output_path,
        measure=measure,
        single_pass=config.behavior.loudnorm_single_pass,
        hardware_encoder=config.tools.hardware_encoder,
        log=log,
    )

    if request.args_only:
        log.info("Arguments only, not executing: %s", format_args(args))
        return JobResult(args=args)

    ffmpeg_path = require_ffmpeg(config.tools.ffmpeg)
    log.info("Executing with these arguments: %s", format_args(args))
    result = run_command([ffmpeg_path, *args], merge_stderr=True, log=log)

    log.info(
        "Finished with exit status: %d",
        result.returncode,
        extra={
            "returncode": result.returncode,
            "elapsed_seconds": round(result.elapsed, 3),
        },
    )
    if result.success:
        log.debug("Output: %s", result.output)
    else:
        log.error("Output: %s", result.output)
    log.info("Time elapsed: %.3fs", result.elapsed)

    return JobResult(
        args=args,
        executed=True,
        returncode=result.returncode,
        output=result.output,
        elapsed=result.elapsed,
    )
