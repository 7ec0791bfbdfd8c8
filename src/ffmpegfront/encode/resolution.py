"""Resolution preset resolution for the scale filter."""

import re

from ffmpegfront.exceptions import ResolutionError

RESOLUTION_MAP: dict[str, str] = {
    "480p": "640:480",
    "720p": "1280:720",
    "1080p": "1920:1080",
    "4k": "3840:2160",
}

EXPLICIT_RESOLUTION_PATTERN = re.compile(r"^\d*:\d*$")


def resolve_resolution(resolution: str) -> str:
    """Resolve a resolution setting to an explicit ``w:h`` string.

    Explicit ``w:h`` values are returned unchanged; preset names are looked up
    in RESOLUTION_MAP.

    Raises:
        ResolutionError: If the value is neither explicit nor a known preset.
    """
    if EXPLICIT_RESOLUTION_PATTERN.fullmatch(resolution):
        return resolution

    try:
        return RESOLUTION_MAP[resolution]
    except KeyError:
        raise ResolutionError(resolution) from None
