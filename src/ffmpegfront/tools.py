"""External tool resolution."""

import logging
import shutil
from pathlib import Path

from ffmpegfront.exceptions import ToolNotFoundError

logger = logging.getLogger(__name__)


def require_ffmpeg(configured: Path | None = None) -> Path:
    """Locate the ffmpeg executable.

    Args:
        configured: Path from configuration, if any. Takes precedence over PATH.

    Returns:
        Path to ffmpeg.

    Raises:
        ToolNotFoundError: If ffmpeg cannot be found.
    """
    if configured is not None:
        if configured.is_file():
            return configured
        raise ToolNotFoundError(
            "ffmpeg", f"Configured path does not exist: {configured}"
        )

    found = shutil.which("ffmpeg")
    if found is None:
        raise ToolNotFoundError(
            "ffmpeg",
            "Install ffmpeg or set FFMPEGFRONT_FFMPEG_PATH to its location.",
        )
    logger.debug("Using ffmpeg from PATH: %s", found)
    return Path(found)
