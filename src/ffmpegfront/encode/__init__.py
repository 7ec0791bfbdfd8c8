"""FFmpeg argument building.

Translates a settings document into an ordered ffmpeg argument vector:
resolution presets, audio and video arguments, the combined video filter
chain and two-pass loudness normalization.
"""

from ffmpegfront.encode.audio import build_audio_args
from ffmpegfront.encode.command import build_ffmpeg_args, build_time_args
from ffmpegfront.encode.loudnorm import (
    LoudnormMeasurement,
    LoudnormSinglePass,
    extract_loudnorm_json,
    measure_loudness,
    parse_loudnorm_output,
)
from ffmpegfront.encode.resolution import RESOLUTION_MAP, resolve_resolution
from ffmpegfront.encode.video import (
    build_codec_args,
    build_subtitle_filter,
    build_video_args,
    build_video_filter,
)

__all__ = [
    "RESOLUTION_MAP",
    "LoudnormMeasurement",
    "LoudnormSinglePass",
    "build_audio_args",
    "build_codec_args",
    "build_ffmpeg_args",
    "build_subtitle_filter",
    "build_time_args",
    "build_video_args",
    "build_video_filter",
    "extract_loudnorm_json",
    "measure_loudness",
    "parse_loudnorm_output",
    "resolve_resolution",
]
