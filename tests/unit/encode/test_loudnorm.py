"""Unit tests for the loudnorm analysis pass and its output parsing."""

import json
from pathlib import Path
from unittest.mock import patch

import pytest

from ffmpegfront.core.subprocess_utils import CommandResult
from ffmpegfront.encode.loudnorm import (
    ANALYSIS_FILTER,
    LoudnormMeasurement,
    LoudnormSinglePass,
    build_analysis_args,
    extract_loudnorm_json,
    measure_loudness,
    parse_loudnorm_output,
    single_pass_filter_args,
)
from ffmpegfront.exceptions import MeasurementError


def _result(returncode: int = 0, stderr: str = "") -> CommandResult:
    return CommandResult(
        args=("ffmpeg",), returncode=returncode, stdout="", stderr=stderr, elapsed=1.0
    )


class TestExtractLoudnormJson:
    """Tests for extract_loudnorm_json()."""

    def test_extracts_statistics(self, loudnorm_stderr: str) -> None:
        data = extract_loudnorm_json(loudnorm_stderr)

        assert data["input_i"] == "-27.61"
        assert data["target_offset"] == "0.58"

    def test_trailing_text_after_json(self, loudnorm_stderr: str) -> None:
        """Extra diagnostic lines after the object do not break extraction."""
        text = loudnorm_stderr + "[aost#0:0 @ 0x1] Terminating thread\nExiting\n\n"

        assert extract_loudnorm_json(text)["input_tp"] == "-4.47"

    def test_last_object_wins(self, loudnorm_stderr: str) -> None:
        text = 'metadata: {"input_i": "1"}\n' + loudnorm_stderr

        assert extract_loudnorm_json(text)["input_i"] == "-27.61"

    def test_braces_inside_strings(self) -> None:
        text = 'noise\n{"input_i": "-20.0", "note": "a } b {"}\n'

        assert extract_loudnorm_json(text)["note"] == "a } b {"

    def test_stray_brace_in_file_name(self, loudnorm_stderr: str) -> None:
        text = "Input #0, matroska, from '/media/{draft.mkv':\n" + loudnorm_stderr

        data = extract_loudnorm_json(text)

        assert data["input_lra"] == "18.06"

    def test_stray_brace_in_metadata_with_trailing_lines(
        self, loudnorm_stderr: str
    ) -> None:
        """ffmpeg 6+ prints muxer and size lines after the statistics."""
        banner, stats = loudnorm_stderr.split("[Parsed_loudnorm_0", 1)
        text = (
            banner
            + "  Metadata:\n    title           : Show {Extended Cut\n"
            + "[Parsed_loudnorm_0"
            + stats
            + "[out#0/null @ 0x5581f2b80a40] video:0KiB audio:5625KiB "
            "subtitle:0KiB other streams:0KiB global headers:0KiB\n"
            + "size=N/A time=00:00:30.00 bitrate=N/A speed= 412x\n"
        )

        measurement = parse_loudnorm_output(text)

        assert measurement.input_i == "-27.61"
        assert measurement.target_offset == "0.58"

    def test_later_unrelated_object_ignored(self, loudnorm_stderr: str) -> None:
        text = loudnorm_stderr + '[info] {"note": 1}\n'

        data = extract_loudnorm_json(text)

        assert data["input_thresh"] == "-39.20"

    def test_incomplete_object_returned_for_validation(self) -> None:
        text = '[info] {"note": 1}\n'

        assert extract_loudnorm_json(text) == {"note": 1}

    def test_no_json_raises_with_diagnostics(self) -> None:
        text = "Error opening input file in.mkv.\n"

        with pytest.raises(MeasurementError) as exc_info:
            extract_loudnorm_json(text)

        assert exc_info.value.diagnostics == text

    def test_malformed_json_raises(self) -> None:
        with pytest.raises(MeasurementError):
            extract_loudnorm_json('[Parsed_loudnorm_0]\n{ "input_i" : -27.61, }\n')


class TestLoudnormMeasurement:
    """Tests for LoudnormMeasurement."""

    def test_from_dict(self, loudnorm_stderr: str) -> None:
        measurement = parse_loudnorm_output(loudnorm_stderr)

        assert measurement == LoudnormMeasurement(
            input_i="-27.61",
            input_tp="-4.47",
            input_lra="18.06",
            input_thresh="-39.20",
            target_offset="0.58",
            output_i="-16.58",
            output_tp="-1.50",
            output_lra="14.78",
            output_thresh="-27.71",
            normalization_type="dynamic",
        )

    def test_missing_field_raises(self) -> None:
        text = json.dumps({"input_i": "-20.0", "input_tp": "-1.0"})

        with pytest.raises(MeasurementError, match="input_lra") as exc_info:
            parse_loudnorm_output(text)

        assert exc_info.value.diagnostics == text

    def test_filter_expression(self, loudnorm_stderr: str) -> None:
        measurement = parse_loudnorm_output(loudnorm_stderr)

        assert measurement.filter_expression() == (
            "loudnorm=I=-16:TP=-1.5:LRA=11"
            ":measured_I=-27.61:measured_LRA=18.06:measured_TP=-4.47"
            ":measured_thresh=-39.20:offset=0.58:linear=true"
        )


class TestSinglePassFilterArgs:
    """Tests for single_pass_filter_args()."""

    def test_omit(self) -> None:
        assert single_pass_filter_args(LoudnormSinglePass.OMIT) == []

    def test_empty(self) -> None:
        assert single_pass_filter_args(LoudnormSinglePass.EMPTY) == ["-filter:a", ""]

    def test_plain(self) -> None:
        assert single_pass_filter_args(LoudnormSinglePass.PLAIN) == [
            "-filter:a",
            "loudnorm=I=-16:TP=-1.5:LRA=11",
        ]


class TestMeasureLoudness:
    """Tests for measure_loudness()."""

    def test_analysis_args(self) -> None:
        args = build_analysis_args(Path("in.mkv"))

        assert args[args.index("-i") + 1] == "in.mkv"
        assert "-vn" in args
        assert args[args.index("-af") + 1] == ANALYSIS_FILTER
        assert ANALYSIS_FILTER.endswith("print_format=json")
        assert args[args.index("-f") + 1] == "null"

    def test_runs_ffmpeg_and_parses(self, loudnorm_stderr: str) -> None:
        with patch(
            "ffmpegfront.encode.loudnorm.run_command",
            return_value=_result(stderr=loudnorm_stderr),
        ) as mock_run:
            measurement = measure_loudness("in.mkv", ffmpeg_path="/opt/ffmpeg")

        cmd = mock_run.call_args.args[0]
        assert cmd[0] == "/opt/ffmpeg"
        assert cmd[1:] == build_analysis_args("in.mkv")
        assert measurement.input_i == "-27.61"

    def test_nonzero_exit_raises(self) -> None:
        with patch(
            "ffmpegfront.encode.loudnorm.run_command",
            return_value=_result(returncode=1, stderr="in.mkv: No such file"),
        ):
            with pytest.raises(MeasurementError) as exc_info:
                measure_loudness("in.mkv")

        assert exc_info.value.returncode == 1
        assert exc_info.value.diagnostics == "in.mkv: No such file"

    def test_unparsable_output_raises(self) -> None:
        with patch(
            "ffmpegfront.encode.loudnorm.run_command",
            return_value=_result(stderr="size=N/A time=00:00:30.00\n"),
        ):
            with pytest.raises(MeasurementError, match="loudnorm statistics"):
                measure_loudness("in.mkv")
