"""Configuration data models.

This module defines dataclasses for ffmpegfront runtime configuration.
"""

from dataclasses import dataclass, field
from pathlib import Path

from ffmpegfront.encode.loudnorm import LoudnormSinglePass


@dataclass
class ToolPathsConfig:
    """Configuration for the external encoder.

    If ffmpeg is not specified it is looked up in PATH.
    """

    ffmpeg: Path | None = None

    # Encoder for the hardware video path (softwareEncode = false)
    hardware_encoder: str = "h264_omx"

    def __post_init__(self) -> None:
        """Validate configuration."""
        if not self.hardware_encoder or not self.hardware_encoder.strip():
            raise ValueError("hardware_encoder must not be empty")


@dataclass
class LoggingConfig:
    """Configuration for job logging."""

    # Log level: debug, info, warning, error
    level: str = "info"

    # Log file path (None = stderr only)
    file: Path | None = None

    # Log format: text or json
    format: str = "text"

    # Also log to stderr when file is set
    include_stderr: bool = False

    def __post_init__(self) -> None:
        """Validate configuration."""
        valid_levels = {"debug", "info", "warning", "error"}
        if self.level.lower() not in valid_levels:
            raise ValueError(f"level must be one of {valid_levels}, got {self.level}")
        valid_formats = {"text", "json"}
        if self.format.lower() not in valid_formats:
            raise ValueError(
                f"format must be one of {valid_formats}, got {self.format}"
            )


@dataclass
class BehaviorConfig:
    """Configuration for policy choices in argument building and exit status."""

    # Handling of audioFilter "loudnorm" without loudnorm2Pass
    loudnorm_single_pass: LoudnormSinglePass = LoudnormSinglePass.OMIT

    # Make a failed encode a failed run (exit status OPERATION_FAILED)
    propagate_encoder_status: bool = True


@dataclass
class FrontConfig:
    """Main ffmpegfront configuration."""

    tools: ToolPathsConfig = field(default_factory=ToolPathsConfig)
    logging: LoggingConfig = field(default_factory=LoggingConfig)
    behavior: BehaviorConfig = field(default_factory=BehaviorConfig)
