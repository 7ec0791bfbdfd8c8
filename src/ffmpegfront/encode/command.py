"""FFmpeg command assembly.

The argument vector is assembled in a fixed section order:
input, overwrite flag, start offset, duration limit, audio, video, output.
The -ss/-t placement after -i makes them output options (accurate seek).
"""

from __future__ import annotations

import logging
from pathlib import Path

from ffmpegfront.encode.audio import Measurer, build_audio_args
from ffmpegfront.encode.loudnorm import LoudnormSinglePass
from ffmpegfront.encode.video import DEFAULT_HARDWARE_ENCODER, build_video_args
from ffmpegfront.settings.models import JobPlan, Settings

logger = logging.getLogger(__name__)


def build_time_args(plan: JobPlan) -> list[str]:
    """Start offset and duration limit arguments (whole seconds)."""
    args: list[str] = []
    if plan.skip_intro != 0:
        args.extend(["-ss", str(plan.skip_intro)])
    if plan.total_time != 0:
        args.extend(["-t", str(plan.total_time)])
    return args


def build_ffmpeg_args(
    settings: Settings | JobPlan,
    input_path: str | Path,
    output_path: str | Path,
    measure: Measurer | None = None,
    single_pass: LoudnormSinglePass = LoudnormSinglePass.OMIT,
    hardware_encoder: str = DEFAULT_HARDWARE_ENCODER,
    log: logging.Logger | None = None,
) -> list[str]:
    """Build the full ffmpeg argument vector, without the executable.

    Args:
        settings: Settings document or an already converted plan.
        input_path: Primary input media file.
        output_path: Output file; always the final argument.
        measure: Loudness analysis callable for two-pass loudnorm.
        single_pass: Handling of loudnorm without a measurement pass.
        hardware_encoder: Encoder used for the hardware video path.
        log: Logger receiving progress through the sections.

    Returns:
        Ordered argument list.

    Raises:
        ResolutionError: If the video resolution cannot be resolved.
        MeasurementError: If the loudness analysis fails.
    """
    log = log or logger
    plan = settings.to_plan() if isinstance(settings, Settings) else settings
    input_path = str(input_path)

    args = ["-i", input_path]

    if plan.overwrite:
        args.append("-y")

    log.debug("Parsing time options")
    args.extend(build_time_args(plan))

    log.debug("Parsing audio options. Args so far: %s", args)
    args.extend(
        build_audio_args(
            plan.audio, input_path, measure=measure, single_pass=single_pass, log=log
        )
    )

    log.debug("Parsing video options. Args so far: %s", args)
    args.extend(
        build_video_args(
            plan.video,
            plan.subtitles,
            input_path,
            hardware_encoder=hardware_encoder,
            log=log,
        )
    )

    # Output path must come last
    args.append(str(output_path))
    return args
