"""Video argument building for FFmpeg.

This module builds encoder selection, rate control and filter arguments for
the video stream, including the combined scale/subtitle filter chain.
"""

from __future__ import annotations

import logging
from pathlib import Path

from ffmpegfront.encode.resolution import resolve_resolution
from ffmpegfront.settings.models import (
    RateControl,
    StreamCopy,
    SubtitleBurnIn,
    VideoEncode,
    VideoPlan,
)

logger = logging.getLogger(__name__)

DEFAULT_HARDWARE_ENCODER = "h264_omx"
HARDWARE_PROFILE = "high"
SOFTWARE_PROFILE = "high10"


def build_video_args(
    plan: VideoPlan,
    subtitles: SubtitleBurnIn | None,
    input_path: str | Path,
    hardware_encoder: str = DEFAULT_HARDWARE_ENCODER,
    log: logging.Logger | None = None,
) -> list[str]:
    """Build FFmpeg arguments for the video stream.

    Args:
        plan: Video plan (stream copy or encode settings).
        subtitles: Subtitle burn-in request, or None.
        input_path: Primary input file, the default subtitle source.
        hardware_encoder: Encoder used when software encoding is off.
        log: Logger for warnings.

    Returns:
        List of FFmpeg arguments for video.

    Raises:
        ResolutionError: If the resolution setting cannot be resolved.
    """
    log = log or logger

    if isinstance(plan, StreamCopy):
        return ["-c:v", "copy"]

    args = build_codec_args(plan, hardware_encoder, log)

    video_filter = build_video_filter(plan.resolution, subtitles, input_path)
    if video_filter:
        args.extend(["-vf", video_filter])

    return args


def build_codec_args(
    plan: VideoEncode,
    hardware_encoder: str = DEFAULT_HARDWARE_ENCODER,
    log: logging.Logger | None = None,
) -> list[str]:
    """Build encoder and rate control arguments."""
    log = log or logger

    if not plan.software_encode:
        # Hardware encoders take no tuning knobs
        return ["-c:v", hardware_encoder, "-profile:v", HARDWARE_PROFILE]

    args = ["-profile:v", SOFTWARE_PROFILE]

    if plan.rate_control == RateControl.CBR:
        if plan.bitrate:
            args.extend(["-b:v", plan.bitrate])
            return args
        log.warning(
            "CBR mode requested without a videoBitrate; falling back to CRF %d",
            plan.quality,
        )

    args.extend(["-crf", str(plan.quality)])
    if plan.max_rate:
        args.extend(["-maxrate", plan.max_rate])
    if plan.buf_size:
        args.extend(["-bufsize", plan.buf_size])
    if plan.tune:
        args.extend(["-tune", plan.tune])
    return args


def build_video_filter(
    resolution: str,
    subtitles: SubtitleBurnIn | None,
    input_path: str | Path,
) -> str:
    """Build the video filter chain.

    Scale comes first, then subtitle burn-in. Both clauses go into a single
    comma-joined filtergraph since ffmpeg honours only one -vf per stream.

    Returns:
        The filter chain, or an empty string when no filter is needed.
    """
    clauses: list[str] = []

    if resolution:
        clauses.append(f"scale={resolve_resolution(resolution)}")

    if subtitles is not None:
        clauses.append(build_subtitle_filter(subtitles, input_path))

    return ",".join(clauses)


def build_subtitle_filter(subtitles: SubtitleBurnIn, input_path: str | Path) -> str:
    """Build the subtitles filter clause.

    The subtitle source is the explicit subtitle file when given, otherwise
    the primary input file (its first subtitle track is burned in).
    """
    source = subtitles.subtitle_file or str(input_path)
    clause = f"subtitles=filename='{escape_filter_path(source)}'"
    if subtitles.style:
        clause += f":force_style='{escape_filter_value(subtitles.style)}'"
    return clause


def _quote_option_value(value: str) -> str:
    """Escape an option value for both filtergraph parsing levels.

    The filter's option parser sees the text after the filtergraph parser has
    removed one level of quoting. It needs ``\\``, ``'`` and ``:`` escaped
    with a backslash. The whole value then sits inside single quotes at the
    filtergraph level, where only a quote needs the close-escape-reopen form.
    """
    value = value.replace("\\", "\\\\").replace("'", "\\'").replace(":", "\\:")
    return value.replace("'", "'\\''")


def escape_filter_value(value: str) -> str:
    """Escape a value for use inside single quotes in a filtergraph."""
    return _quote_option_value(value)


def escape_filter_path(path: str | Path) -> str:
    """Escape a file path for a quoted filter option.

    Backslashes become forward slashes first, so Windows paths need no
    separator escaping.
    """
    return _quote_option_value(str(path).replace("\\", "/"))
