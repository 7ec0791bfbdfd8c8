"""Unit tests for audio argument building."""

from unittest.mock import MagicMock, patch

import pytest

from ffmpegfront.encode.audio import build_audio_args
from ffmpegfront.encode.loudnorm import LoudnormMeasurement, LoudnormSinglePass
from ffmpegfront.exceptions import MeasurementError
from ffmpegfront.settings.models import AudioEncode, StreamCopy

MEASUREMENT = LoudnormMeasurement(
    input_i="-27.61",
    input_tp="-4.47",
    input_lra="18.06",
    input_thresh="-39.20",
    target_offset="0.58",
)


@pytest.fixture
def measure() -> MagicMock:
    """Measurer returning a fixed measurement."""
    return MagicMock(return_value=MEASUREMENT)


class TestBuildAudioArgs:
    """Tests for build_audio_args()."""

    def test_stream_copy(self, measure: MagicMock) -> None:
        assert build_audio_args(StreamCopy(), "in.mkv", measure=measure) == [
            "-c:a",
            "copy",
        ]
        measure.assert_not_called()

    def test_defaults(self) -> None:
        assert build_audio_args(AudioEncode(), "in.mkv") == [
            "-c:a",
            "aac",
            "-b:a",
            "192k",
        ]

    def test_explicit_values(self) -> None:
        plan = AudioEncode(codec="libopus", channels="2", bitrate="128k")

        assert build_audio_args(plan, "in.mkv") == [
            "-c:a",
            "libopus",
            "-ac",
            "2",
            "-b:a",
            "128k",
        ]

    def test_other_filter_without_two_pass_emits_no_filter(
        self, measure: MagicMock
    ) -> None:
        plan = AudioEncode(filter="volume=2", loudnorm_two_pass=False)

        args = build_audio_args(plan, "in.mkv", measure=measure)

        assert "-filter:a" not in args
        measure.assert_not_called()

    def test_two_pass(self, measure: MagicMock) -> None:
        plan = AudioEncode(filter="loudnorm", loudnorm_two_pass=True)

        args = build_audio_args(plan, "in.mkv", measure=measure)

        measure.assert_called_once_with("in.mkv")
        assert args[-2:] == ["-filter:a", MEASUREMENT.filter_expression()]

    def test_two_pass_without_filter_name(self, measure: MagicMock) -> None:
        """loudnorm2Pass alone is enough to request normalization."""
        plan = AudioEncode(filter="", loudnorm_two_pass=True)

        args = build_audio_args(plan, "in.mkv", measure=measure)

        assert args.count("-filter:a") == 1
        measure.assert_called_once()

    @pytest.mark.parametrize(
        ("mode", "expected_tail"),
        [
            (LoudnormSinglePass.EMPTY, ["-filter:a", ""]),
            (LoudnormSinglePass.PLAIN, ["-filter:a", "loudnorm=I=-16:TP=-1.5:LRA=11"]),
        ],
    )
    def test_single_pass_modes(
        self, measure: MagicMock, mode: LoudnormSinglePass, expected_tail: list[str]
    ) -> None:
        plan = AudioEncode(filter="loudnorm", loudnorm_two_pass=False)

        args = build_audio_args(plan, "in.mkv", measure=measure, single_pass=mode)

        assert args[-2:] == expected_tail
        measure.assert_not_called()

    def test_single_pass_omit_is_default(self, measure: MagicMock) -> None:
        plan = AudioEncode(filter="loudnorm")

        args = build_audio_args(plan, "in.mkv", measure=measure)

        assert args == ["-c:a", "aac", "-b:a", "192k"]

    def test_measurement_error_propagates(self) -> None:
        measure = MagicMock(side_effect=MeasurementError("analysis failed"))
        plan = AudioEncode(loudnorm_two_pass=True)

        with pytest.raises(MeasurementError):
            build_audio_args(plan, "in.mkv", measure=measure)

    def test_default_measurer(self) -> None:
        plan = AudioEncode(loudnorm_two_pass=True)

        with patch(
            "ffmpegfront.encode.audio.measure_loudness", return_value=MEASUREMENT
        ) as mock_measure:
            args = build_audio_args(plan, "in.mkv")

        assert mock_measure.call_args.args[0] == "in.mkv"
        assert args[-1] == MEASUREMENT.filter_expression()
