"""Shared test fixtures for ffmpegfront."""

import json
import logging
from collections.abc import Callable
from pathlib import Path
from typing import Any

import pytest

LOUDNORM_STDERR = """\
ffmpeg version 6.1.1 Copyright (c) 2000-2023 the FFmpeg developers
Input #0, matroska,webm, from 'in.mkv':
  Duration: 00:00:30.02, start: 0.000000, bitrate: 4513 kb/s
  Stream #0:1(eng): Audio: aac (LC), 48000 Hz, stereo, fltp (default)
Stream mapping:
  Stream #0:1 -> #0:0 (aac (native) -> pcm_s16le (native))
Press [q] to stop, [?] for help
Output #0, null, to 'pipe:':
size=N/A time=00:00:30.00 bitrate=N/A speed= 412x
video:0kB audio:5625kB subtitle:0kB other streams:0kB global headers:0kB
[Parsed_loudnorm_0 @ 0x5581f2b7e1c0]
{
\t"input_i" : "-27.61",
\t"input_tp" : "-4.47",
\t"input_lra" : "18.06",
\t"input_thresh" : "-39.20",
\t"output_i" : "-16.58",
\t"output_tp" : "-1.50",
\t"output_lra" : "14.78",
\t"output_thresh" : "-27.71",
\t"normalization_type" : "dynamic",
\t"target_offset" : "0.58"
}
"""


@pytest.fixture
def loudnorm_stderr() -> str:
    """Diagnostic output of a loudnorm analysis pass."""
    return LOUDNORM_STDERR


@pytest.fixture
def write_settings_file(tmp_path: Path) -> Callable[..., Path]:
    """Factory writing a settings document to a JSON file."""

    def _write(data: Any, name: str = "settings.json") -> Path:
        path = tmp_path / name
        path.write_text(json.dumps(data))
        return path

    return _write


@pytest.fixture
def copy_settings() -> dict[str, Any]:
    """Settings copying both streams with a trimmed time range."""
    return {
        "video": {"justCopy": True},
        "audio": {"justCopy": True},
        "time": {"timeSkipIntro": 10, "totalTime": 30},
    }


@pytest.fixture(autouse=True)
def reset_package_logger():
    """Save and restore the ffmpegfront logger between tests."""
    package_logger = logging.getLogger("ffmpegfront")
    original_handlers = package_logger.handlers[:]
    original_level = package_logger.level
    original_propagate = package_logger.propagate
    yield
    for handler in package_logger.handlers:
        if handler not in original_handlers:
            handler.close()
    package_logger.handlers[:] = original_handlers
    package_logger.setLevel(original_level)
    package_logger.propagate = original_propagate
