"""Settings document models.

The settings document is a JSON object with five sections (video, audio,
subtitles, time, ready). These Pydantic models mirror it field-for-field
using the document's camelCase names; missing sections and fields take
zero values. ``Settings.to_plan()`` turns the independent boolean switches
into tagged stream plans so that stream copy and encode settings can never
both apply to the same stream.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Any

from pydantic import AliasChoices, BaseModel, ConfigDict, Field, model_validator


class _SectionModel(BaseModel):
    """Common configuration for settings sections."""

    model_config = ConfigDict(frozen=True, populate_by_name=True, extra="ignore")

    @model_validator(mode="before")
    @classmethod
    def drop_nulls(cls, data: Any) -> Any:
        """Treat JSON null like an absent field so it takes the zero value."""
        if isinstance(data, dict):
            return {key: value for key, value in data.items() if value is not None}
        return data


class VideoModel(_SectionModel):
    """Video section of a settings document."""

    software_encode: bool = Field(False, alias="softwareEncode")
    just_copy: bool = Field(False, alias="justCopy")
    resolution: str = ""
    mode: str = ""
    quality: int = 0
    tune: str = ""
    video_bitrate: str = Field("", alias="videoBitrate")
    video_max_rate: str = Field("", alias="videoMaxRate")
    video_buf_size: str = Field(
        "",
        alias="videoBufSize",
        validation_alias=AliasChoices("videoBufSize", "videoBufsize", "video_buf_size"),
    )


class AudioModel(_SectionModel):
    """Audio section of a settings document."""

    just_copy: bool = Field(False, alias="justCopy")
    audio_codec: str = Field("", alias="audioCodec")
    audio_channels: str = Field("", alias="audioChannels")
    audio_filter: str = Field("", alias="audioFilter")
    audio_bitrate: str = Field(
        "",
        alias="audioBitrate",
        validation_alias=AliasChoices("audioBitrate", "auidioBitrate", "audio_bitrate"),
    )
    loudnorm_2pass: bool = Field(False, alias="loudnorm2Pass")


class SubtitlesModel(_SectionModel):
    """Subtitles section of a settings document."""

    burn_in_subtitles: bool = Field(False, alias="burnInSubtitles")
    subtitle_file: str = Field("", alias="subtitleFile")
    subtitle_style: str = Field("", alias="subtitleStyle")


class TimeModel(_SectionModel):
    """Time section of a settings document (whole seconds)."""

    time_skip_intro: int = Field(0, alias="timeSkipIntro")
    total_time: int = Field(0, alias="totalTime")


class ReadyModel(_SectionModel):
    """Ready section. Only noOverwrite affects the command."""

    no_overwrite: bool = Field(False, alias="noOverwrite")
    completed: bool = False
    notes: str = ""


class Settings(_SectionModel):
    """A complete transcode job: one settings document."""

    video: VideoModel = Field(default_factory=VideoModel)
    audio: AudioModel = Field(default_factory=AudioModel)
    subtitles: SubtitlesModel = Field(default_factory=SubtitlesModel)
    time: TimeModel = Field(default_factory=TimeModel)
    ready: ReadyModel = Field(default_factory=ReadyModel)

    def to_plan(self) -> JobPlan:
        """Convert the document into a typed job plan."""
        return JobPlan(
            video=_video_plan(self.video),
            audio=_audio_plan(self.audio),
            subtitles=_subtitle_plan(self.subtitles),
            skip_intro=self.time.time_skip_intro,
            total_time=self.time.total_time,
            overwrite=not self.ready.no_overwrite,
        )


# =============================================================================
# Job plan types
# =============================================================================


class RateControl(Enum):
    """Software encode rate control mode."""

    CRF = "crf"
    CBR = "cbr"

    @classmethod
    def from_setting(cls, mode: str) -> RateControl:
        """Map the document's mode string; anything but "cbr" means CRF."""
        if mode.strip().casefold() == "cbr":
            return cls.CBR
        return cls.CRF


@dataclass(frozen=True)
class StreamCopy:
    """Copy the stream without re-encoding."""


@dataclass(frozen=True)
class VideoEncode:
    """Re-encode the video stream."""

    software_encode: bool
    resolution: str = ""
    rate_control: RateControl = RateControl.CRF
    quality: int = 0
    tune: str = ""
    bitrate: str = ""
    max_rate: str = ""
    buf_size: str = ""


@dataclass(frozen=True)
class AudioEncode:
    """Re-encode the audio stream."""

    codec: str = ""
    channels: str = ""
    filter: str = ""
    bitrate: str = ""
    loudnorm_two_pass: bool = False

    @property
    def wants_loudnorm(self) -> bool:
        """Whether a loudness normalization filter was requested at all."""
        return self.filter == "loudnorm" or self.loudnorm_two_pass


@dataclass(frozen=True)
class SubtitleBurnIn:
    """Render a subtitle track into the video pixels."""

    subtitle_file: str = ""
    """Subtitle source; empty means the primary input file."""

    style: str = ""
    """Raw force_style directive, e.g. 'FontName=ubuntu,Fontsize=24'."""


VideoPlan = StreamCopy | VideoEncode
AudioPlan = StreamCopy | AudioEncode


@dataclass(frozen=True)
class JobPlan:
    """Typed view of a settings document, consumed by the argument builders."""

    video: VideoPlan
    audio: AudioPlan
    subtitles: SubtitleBurnIn | None = None
    skip_intro: int = 0
    total_time: int = 0
    overwrite: bool = True


def _video_plan(video: VideoModel) -> VideoPlan:
    if video.just_copy:
        return StreamCopy()
    return VideoEncode(
        software_encode=video.software_encode,
        resolution=video.resolution.strip(),
        rate_control=RateControl.from_setting(video.mode),
        quality=video.quality,
        tune=video.tune,
        bitrate=video.video_bitrate,
        max_rate=video.video_max_rate,
        buf_size=video.video_buf_size,
    )


def _audio_plan(audio: AudioModel) -> AudioPlan:
    if audio.just_copy:
        return StreamCopy()
    return AudioEncode(
        codec=audio.audio_codec,
        channels=audio.audio_channels,
        filter=audio.audio_filter,
        bitrate=audio.audio_bitrate,
        loudnorm_two_pass=audio.loudnorm_2pass,
    )


def _subtitle_plan(subtitles: SubtitlesModel) -> SubtitleBurnIn | None:
    if not subtitles.burn_in_subtitles:
        return None
    return SubtitleBurnIn(
        subtitle_file=subtitles.subtitle_file,
        style=subtitles.subtitle_style,
    )
