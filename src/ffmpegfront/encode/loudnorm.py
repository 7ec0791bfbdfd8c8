"""Two-pass loudness normalization support.

The first pass runs ffmpeg's loudnorm filter in analysis mode. ffmpeg prints
the measured statistics as a JSON object embedded in its diagnostic output,
for example::

    [Parsed_loudnorm_0 @ 0x55d7c8e0a340]
    {
        "input_i" : "-27.61",
        "input_tp" : "-4.47",
        ...
        "target_offset" : "0.25"
    }

The measured values parameterize the filter used by the real encode.
"""

from __future__ import annotations

import json
import logging
import platform
from dataclasses import dataclass
from enum import Enum
from pathlib import Path
from typing import Any

from ffmpegfront.core.subprocess_utils import run_command
from ffmpegfront.exceptions import MeasurementError

logger = logging.getLogger(__name__)

# EBU R128 targets used by both passes
TARGET_INTEGRATED = "-16"
TARGET_TRUE_PEAK = "-1.5"
TARGET_LRA = "11"

LOUDNORM_TARGETS = f"I={TARGET_INTEGRATED}:TP={TARGET_TRUE_PEAK}:LRA={TARGET_LRA}"
ANALYSIS_FILTER = f"loudnorm={LOUDNORM_TARGETS}:print_format=json"

_REQUIRED_FIELDS = (
    "input_i",
    "input_tp",
    "input_lra",
    "input_thresh",
    "target_offset",
)


class LoudnormSinglePass(Enum):
    """How to handle ``audioFilter: "loudnorm"`` without a measurement pass.

    - OMIT: emit no audio filter argument.
    - EMPTY: emit ``-filter:a`` with an empty value (historical behavior).
    - PLAIN: emit the loudnorm filter with targets only, letting ffmpeg
      normalize dynamically in a single pass.
    """

    OMIT = "omit"
    EMPTY = "empty"
    PLAIN = "plain"


@dataclass(frozen=True)
class LoudnormMeasurement:
    """Statistics reported by the loudnorm analysis pass.

    Values are kept as the numeric-formatted strings ffmpeg prints, since they
    are interpolated back into a filter expression verbatim.
    """

    input_i: str
    input_tp: str
    input_lra: str
    input_thresh: str
    target_offset: str
    output_i: str = ""
    output_tp: str = ""
    output_lra: str = ""
    output_thresh: str = ""
    normalization_type: str = ""

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> LoudnormMeasurement:
        """Build a measurement from the decoded analysis JSON.

        Raises:
            MeasurementError: If a required statistic is missing.
        """
        missing = [name for name in _REQUIRED_FIELDS if name not in data]
        if missing:
            raise MeasurementError(
                f"loudnorm statistics missing fields: {', '.join(missing)}",
                diagnostics=json.dumps(data),
            )
        return cls(
            input_i=str(data["input_i"]),
            input_tp=str(data["input_tp"]),
            input_lra=str(data["input_lra"]),
            input_thresh=str(data["input_thresh"]),
            target_offset=str(data["target_offset"]),
            output_i=str(data.get("output_i", "")),
            output_tp=str(data.get("output_tp", "")),
            output_lra=str(data.get("output_lra", "")),
            output_thresh=str(data.get("output_thresh", "")),
            normalization_type=str(data.get("normalization_type", "")),
        )

    def filter_expression(self) -> str:
        """Build the second-pass loudnorm filter from these measurements."""
        return (
            f"loudnorm={LOUDNORM_TARGETS}"
            f":measured_I={self.input_i}"
            f":measured_LRA={self.input_lra}"
            f":measured_TP={self.input_tp}"
            f":measured_thresh={self.input_thresh}"
            f":offset={self.target_offset}"
            ":linear=true"
        )


def single_pass_filter_args(mode: LoudnormSinglePass) -> list[str]:
    """Audio filter arguments for loudnorm without measured values."""
    if mode == LoudnormSinglePass.EMPTY:
        return ["-filter:a", ""]
    if mode == LoudnormSinglePass.PLAIN:
        return ["-filter:a", f"loudnorm={LOUDNORM_TARGETS}"]
    return []


def build_analysis_args(input_path: str | Path) -> list[str]:
    """Build ffmpeg arguments (without the executable) for the analysis pass."""
    null_output = "NUL" if platform.system() == "Windows" else "-"
    return [
        "-hide_banner",
        "-i",
        str(input_path),
        "-vn",
        "-af",
        ANALYSIS_FILTER,
        "-f",
        "null",
        null_output,
    ]


def _json_objects(text: str) -> list[dict[str, Any]]:
    """Return every JSON object embedded in text, in order.

    Decoding is attempted at each ``{``. A brace that does not start a valid
    object (a stray brace in a title or file name) is skipped.
    """
    decoder = json.JSONDecoder()
    objects: list[dict[str, Any]] = []
    index = text.find("{")
    while index != -1:
        try:
            data, end = decoder.raw_decode(text, index)
        except json.JSONDecodeError:
            index = text.find("{", index + 1)
            continue
        if isinstance(data, dict):
            objects.append(data)
        index = text.find("{", end)
    return objects


def extract_loudnorm_json(text: str) -> dict[str, Any]:
    """Extract the loudnorm statistics object from ffmpeg diagnostic text.

    ffmpeg prints the statistics at the end of the analysis run, so the last
    object carrying every required statistic wins. When no object is complete
    the last decodable one is returned and validation reports what is missing.

    Raises:
        MeasurementError: If no JSON object can be recovered.
    """
    objects = _json_objects(text)
    for data in reversed(objects):
        if all(name in data for name in _REQUIRED_FIELDS):
            return data

    if objects:
        return objects[-1]

    raise MeasurementError(
        "could not find loudnorm statistics in ffmpeg output", diagnostics=text
    )


def parse_loudnorm_output(text: str) -> LoudnormMeasurement:
    """Parse ffmpeg analysis-pass diagnostics into a measurement."""
    data = extract_loudnorm_json(text)
    try:
        return LoudnormMeasurement.from_dict(data)
    except MeasurementError as e:
        raise MeasurementError(str(e), diagnostics=text) from e


def measure_loudness(
    input_path: str | Path,
    ffmpeg_path: str | Path = "ffmpeg",
    log: logging.Logger | None = None,
) -> LoudnormMeasurement:
    """Run the loudnorm analysis pass on ``input_path``.

    Args:
        input_path: Media file to analyze.
        ffmpeg_path: ffmpeg executable.
        log: Logger for progress and diagnostics.

    Returns:
        The measured loudness statistics.

    Raises:
        MeasurementError: If ffmpeg fails or its output cannot be parsed.
        FileNotFoundError: If the ffmpeg executable does not exist.
    """
    log = log or logger
    log.info("Getting loudnorm 2 pass values for %s", input_path)

    result = run_command(
        [str(ffmpeg_path), *build_analysis_args(input_path)], log=log
    )
    if not result.success:
        raise MeasurementError(
            f"loudnorm analysis exited with status {result.returncode}",
            diagnostics=result.stderr,
            returncode=result.returncode,
        )

    measurement = parse_loudnorm_output(result.stderr)
    log.info(
        "Measured loudness: I=%s LUFS, TP=%s dBTP, LRA=%s LU, thresh=%s LUFS, "
        "offset=%s LU",
        measurement.input_i,
        measurement.input_tp,
        measurement.input_lra,
        measurement.input_thresh,
        measurement.target_offset,
    )
    return measurement
