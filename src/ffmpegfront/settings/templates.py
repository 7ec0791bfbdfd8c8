"""Canned settings documents.

The generic "template" document is meant to be edited by hand: its string
fields hold placeholder text describing what belongs there. The other presets
are ready to run.
"""

from __future__ import annotations

import logging

from ffmpegfront.settings.models import (
    AudioModel,
    ReadyModel,
    Settings,
    SubtitlesModel,
    TimeModel,
    VideoModel,
)

logger = logging.getLogger(__name__)

DEFAULT_TEMPLATE = "template"

_TV_AUDIO = AudioModel(
    just_copy=False,
    audio_codec="aac",
    audio_channels="2",
    audio_filter="loudnorm",
    audio_bitrate="192k",
    loudnorm_2pass=True,
)
_NO_SUBTITLES = SubtitlesModel(
    burn_in_subtitles=False,
    subtitle_file="no file",
    subtitle_style="no style",
)

TEMPLATES: dict[str, Settings] = {
    "template": Settings(
        video=VideoModel(
            software_encode=True,
            just_copy=False,
            resolution="ex-480p, 720p, 1080p, 4k",
            mode="crf or cbr",
            quality=23,
            tune="film, grain, animation are valid tunes",
            video_bitrate="ex-2000k",
            video_max_rate=(
                "ex: 4M, not really needed unless you plan to stream the video "
                "file over anything but lan, only needed with crf"
            ),
            video_buf_size="set this to about 1x-2x your maxrate, only needed with crf",
        ),
        audio=AudioModel(
            just_copy=True,
            audio_codec="ex-vorbis, lame, aac, flac",
            audio_channels="ex- 2, 5.1",
            audio_filter="ex- loudnorm, the only filter with special handling",
            audio_bitrate="ex- 200k",
            loudnorm_2pass=False,
        ),
        subtitles=SubtitlesModel(
            burn_in_subtitles=False,
            subtitle_file=(
                "ex-file.srt, file.mkv. The first subtitle track is burned in "
                "when given a video file. To burn in a different track, extract "
                "it from the video file and specify it here. Leave empty to use "
                "the input file."
            ),
            subtitle_style=(
                "styles look like this: "
                "'FontName=ubuntu,Fontsize=24,PrimaryColour=&H0000ff&' "
                "note that the colour hex is in BGR order"
            ),
        ),
        time=TimeModel(time_skip_intro=0, total_time=0),
        ready=ReadyModel(
            no_overwrite=False,
            completed=False,
            notes=(
                "if 'justCopy' is set as true on either audio or video settings, "
                "all other settings for that stream will be ignored. "
                "loudnorm2Pass is only meaningful when audioFilter is 'loudnorm'."
            ),
        ),
    ),
    "movie": Settings(
        video=VideoModel(
            software_encode=False,
            just_copy=True,
            resolution="unchanged",
            mode="none",
            quality=0,
            tune="none",
            video_bitrate="unchanged",
            video_max_rate="none",
            video_buf_size="none",
        ),
        audio=_TV_AUDIO,
        subtitles=_NO_SUBTITLES,
        time=TimeModel(time_skip_intro=0, total_time=0),
        ready=ReadyModel(
            no_overwrite=False,
            completed=True,
            notes=(
                "This is for movies. It leaves the video track untouched, "
                "while loudnorming the audio track"
            ),
        ),
    ),
    "tv-normal": Settings(
        video=VideoModel(
            software_encode=True,
            just_copy=False,
            resolution="720p",
            mode="crf",
            quality=23,
            tune="film",
            video_bitrate="doesnt matter",
            video_max_rate="2M",
            video_buf_size="3M",
        ),
        audio=_TV_AUDIO,
        subtitles=_NO_SUBTITLES,
        time=TimeModel(time_skip_intro=0, total_time=0),
        ready=ReadyModel(
            no_overwrite=False,
            completed=True,
            notes=(
                "This is for most TV shows. Maybe it was distributed with a "
                "higher bitrate than appropriate, or had an obnoxious intro"
            ),
        ),
    ),
    "tv-high": Settings(
        video=VideoModel(
            software_encode=True,
            just_copy=False,
            resolution="1080p",
            mode="crf",
            quality=21,
            tune="film",
            video_bitrate="doesnt matter",
            video_max_rate="4M",
            video_buf_size="6M",
        ),
        audio=_TV_AUDIO,
        subtitles=_NO_SUBTITLES,
        time=TimeModel(time_skip_intro=0, total_time=0),
        ready=ReadyModel(
            no_overwrite=False,
            completed=True,
            notes=(
                "This is for TV shows that need a high-quality video stream but "
                "were distributed with an excessive bitrate. It does a 10-bit "
                "software encode, which is far slower than the hardware encoder"
            ),
        ),
    ),
}

TEMPLATE_NAMES = tuple(TEMPLATES)


def make_template(name: str) -> Settings:
    """Return the canned settings document called ``name``.

    Unrecognized names fall back to the annotated generic template.
    """
    template = TEMPLATES.get(name)
    if template is None:
        logger.warning(
            "Unknown template '%s', using '%s'. Options: %s",
            name,
            DEFAULT_TEMPLATE,
            ", ".join(TEMPLATE_NAMES),
        )
        return TEMPLATES[DEFAULT_TEMPLATE]
    return template
