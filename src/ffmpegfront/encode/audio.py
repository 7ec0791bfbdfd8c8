"""Audio argument building for FFmpeg.

This module builds the codec, channel, bitrate and loudness normalization
arguments for the audio stream.
"""

from __future__ import annotations

import logging
from collections.abc import Callable
from pathlib import Path

from ffmpegfront.encode.loudnorm import (
    LoudnormMeasurement,
    LoudnormSinglePass,
    measure_loudness,
    single_pass_filter_args,
)
from ffmpegfront.settings.models import AudioEncode, AudioPlan, StreamCopy

logger = logging.getLogger(__name__)

DEFAULT_AUDIO_CODEC = "aac"
DEFAULT_AUDIO_BITRATE = "192k"

Measurer = Callable[[str], LoudnormMeasurement]


def build_audio_args(
    plan: AudioPlan,
    input_path: str | Path,
    measure: Measurer | None = None,
    single_pass: LoudnormSinglePass = LoudnormSinglePass.OMIT,
    log: logging.Logger | None = None,
) -> list[str]:
    """Build FFmpeg arguments for the audio stream.

    Args:
        plan: Audio plan (stream copy or encode settings).
        input_path: Primary input file; analyzed when two-pass loudnorm
            is requested.
        measure: Callable running the loudness analysis pass. Defaults to
            measure_loudness with ffmpeg from PATH.
        single_pass: Handling of loudnorm without a measurement pass.
        log: Logger for progress messages.

    Returns:
        List of FFmpeg arguments for audio.

    Raises:
        MeasurementError: If the two-pass analysis fails.
    """
    log = log or logger

    if isinstance(plan, StreamCopy):
        return ["-c:a", "copy"]

    args = ["-c:a", plan.codec or DEFAULT_AUDIO_CODEC]

    if plan.channels:
        args.extend(["-ac", plan.channels])

    args.extend(["-b:a", plan.bitrate or DEFAULT_AUDIO_BITRATE])

    args.extend(_loudnorm_args(plan, str(input_path), measure, single_pass, log))
    return args


def _loudnorm_args(
    plan: AudioEncode,
    input_path: str,
    measure: Measurer | None,
    single_pass: LoudnormSinglePass,
    log: logging.Logger,
) -> list[str]:
    if not plan.wants_loudnorm:
        return []

    if plan.loudnorm_two_pass:
        if measure is None:
            measurement = measure_loudness(input_path, log=log)
        else:
            measurement = measure(input_path)
        return ["-filter:a", measurement.filter_expression()]

    log.info("Single-pass loudnorm requested; audio filter mode: %s", single_pass.value)
    return single_pass_filter_args(single_pass)
