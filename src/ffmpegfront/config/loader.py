"""Configuration loader with precedence handling.

Configuration is loaded with the following precedence (highest to lowest):
1. CLI arguments (passed directly to get_config)
2. Environment variables (FFMPEGFRONT_*)
3. Config file (~/.config/ffmpegfront/config.toml)
4. Default values

Environment variables:
- FFMPEGFRONT_CONFIG_PATH: Path to config file
- FFMPEGFRONT_FFMPEG_PATH: Path to ffmpeg executable
- FFMPEGFRONT_HARDWARE_ENCODER: Encoder for the hardware video path
- FFMPEGFRONT_LOG_LEVEL: debug, info, warning or error
- FFMPEGFRONT_LOG_FORMAT: text or json
- FFMPEGFRONT_LOUDNORM_SINGLE_PASS: omit, empty or plain
- FFMPEGFRONT_PROPAGATE_ENCODER_STATUS: exit non-zero when the encode fails
"""

from __future__ import annotations

import logging
import tomllib
from pathlib import Path
from typing import Any

from ffmpegfront.config.env import EnvReader
from ffmpegfront.config.models import (
    BehaviorConfig,
    FrontConfig,
    LoggingConfig,
    ToolPathsConfig,
)
from ffmpegfront.encode.loudnorm import LoudnormSinglePass
from ffmpegfront.exceptions import ConfigurationError

logger = logging.getLogger(__name__)

DEFAULT_CONFIG_DIR = Path.home() / ".config" / "ffmpegfront"
DEFAULT_CONFIG_FILE = DEFAULT_CONFIG_DIR / "config.toml"


def get_default_config_path(env: EnvReader | None = None) -> Path:
    """Get the config file path, honouring FFMPEGFRONT_CONFIG_PATH."""
    env = env or EnvReader()
    env_path = env.get_str("FFMPEGFRONT_CONFIG_PATH")
    if env_path:
        return Path(env_path).expanduser()
    return DEFAULT_CONFIG_FILE


def load_config_file(path: Path | None = None, env: EnvReader | None = None) -> dict:
    """Load configuration from a TOML file.

    Returns:
        Parsed configuration dict. Empty dict if the file doesn't exist.

    Raises:
        ConfigurationError: If the file exists but is not valid TOML.
    """
    if path is None:
        path = get_default_config_path(env)

    if not path.exists():
        logger.debug("Config file not found: %s", path)
        return {}

    try:
        with open(path, "rb") as f:
            config = tomllib.load(f)
    except tomllib.TOMLDecodeError as e:
        raise ConfigurationError(f"Invalid config file {path}: {e}") from e
    except OSError as e:
        raise ConfigurationError(f"Cannot read config file {path}: {e}") from e

    logger.debug("Loaded config from %s", path)
    return config


def _parse_single_pass(value: Any) -> LoudnormSinglePass:
    try:
        return LoudnormSinglePass(str(value).casefold())
    except ValueError:
        options = ", ".join(mode.value for mode in LoudnormSinglePass)
        raise ConfigurationError(
            f"loudnorm_single_pass must be one of {options}, got {value}"
        ) from None


def get_config(
    config_path: Path | None = None,
    env: EnvReader | None = None,
    # CLI overrides (highest precedence)
    ffmpeg_path: Path | None = None,
    log_level: str | None = None,
    log_file: Path | None = None,
    log_format: str | None = None,
    loudnorm_single_pass: str | None = None,
    propagate_encoder_status: bool | None = None,
) -> FrontConfig:
    """Get configuration with full precedence handling.

    Args:
        config_path: Path to config file (overrides FFMPEGFRONT_CONFIG_PATH).
        env: Environment reader; defaults to os.environ.
        ffmpeg_path: CLI override for the ffmpeg path.
        log_level: CLI override for the log level.
        log_file: CLI override for the log file.
        log_format: CLI override for the log format.
        loudnorm_single_pass: CLI override for single-pass loudnorm handling.
        propagate_encoder_status: CLI override for encoder exit status policy.

    Returns:
        FrontConfig with merged configuration.

    Raises:
        ConfigurationError: If the config file or a value is invalid.
    """
    env = env or EnvReader()
    file_config = load_config_file(config_path, env)

    tools_file = file_config.get("tools", {})
    logging_file = file_config.get("logging", {})
    behavior_file = file_config.get("behavior", {})

    file_ffmpeg = tools_file.get("ffmpeg")
    file_log_file = logging_file.get("file")

    single_pass = (
        loudnorm_single_pass
        or env.get_str("FFMPEGFRONT_LOUDNORM_SINGLE_PASS")
        or behavior_file.get("loudnorm_single_pass", LoudnormSinglePass.OMIT.value)
    )

    propagate = propagate_encoder_status
    if propagate is None:
        propagate = env.get_bool(
            "FFMPEGFRONT_PROPAGATE_ENCODER_STATUS",
            bool(behavior_file.get("propagate_encoder_status", True)),
        )

    try:
        return FrontConfig(
            tools=ToolPathsConfig(
                ffmpeg=(
                    ffmpeg_path
                    or env.get_path("FFMPEGFRONT_FFMPEG_PATH")
                    or (Path(file_ffmpeg).expanduser() if file_ffmpeg else None)
                ),
                hardware_encoder=(
                    env.get_str("FFMPEGFRONT_HARDWARE_ENCODER")
                    or tools_file.get("hardware_encoder", "h264_omx")
                ),
            ),
            logging=LoggingConfig(
                level=(
                    log_level
                    or env.get_str("FFMPEGFRONT_LOG_LEVEL")
                    or logging_file.get("level", "info")
                ),
                file=(
                    log_file
                    or (Path(file_log_file).expanduser() if file_log_file else None)
                ),
                format=(
                    log_format
                    or env.get_str("FFMPEGFRONT_LOG_FORMAT")
                    or logging_file.get("format", "text")
                ),
                include_stderr=bool(logging_file.get("include_stderr", False)),
            ),
            behavior=BehaviorConfig(
                loudnorm_single_pass=_parse_single_pass(single_pass),
                propagate_encoder_status=bool(propagate),
            ),
        )
    except ValueError as e:
        raise ConfigurationError(f"Invalid configuration: {e}") from e
