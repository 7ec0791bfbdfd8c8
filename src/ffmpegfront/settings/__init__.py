"""Settings documents: models, loading and canned templates."""

from ffmpegfront.settings.loader import (
    dump_settings,
    load_settings,
    load_settings_from_dict,
    write_settings,
)
from ffmpegfront.settings.models import (
    AudioEncode,
    AudioModel,
    JobPlan,
    RateControl,
    ReadyModel,
    Settings,
    StreamCopy,
    SubtitleBurnIn,
    SubtitlesModel,
    TimeModel,
    VideoEncode,
    VideoModel,
)
from ffmpegfront.settings.templates import (
    DEFAULT_TEMPLATE,
    TEMPLATE_NAMES,
    TEMPLATES,
    make_template,
)

__all__ = [
    # Models
    "AudioModel",
    "ReadyModel",
    "Settings",
    "SubtitlesModel",
    "TimeModel",
    "VideoModel",
    # Plan types
    "AudioEncode",
    "JobPlan",
    "RateControl",
    "StreamCopy",
    "SubtitleBurnIn",
    "VideoEncode",
    # Loader
    "dump_settings",
    "load_settings",
    "load_settings_from_dict",
    "write_settings",
    # Templates
    "DEFAULT_TEMPLATE",
    "TEMPLATE_NAMES",
    "TEMPLATES",
    "make_template",
]
