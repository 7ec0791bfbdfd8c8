"""Configuration management for ffmpegfront.

Configuration is loaded with precedence handling:
1. CLI flags (highest priority)
2. Environment variables (FFMPEGFRONT_*)
3. Config file (~/.config/ffmpegfront/config.toml)
4. Default values (lowest priority)
"""

from ffmpegfront.config.env import EnvReader
from ffmpegfront.config.loader import (
    get_config,
    get_default_config_path,
    load_config_file,
)
from ffmpegfront.config.models import (
    BehaviorConfig,
    FrontConfig,
    LoggingConfig,
    ToolPathsConfig,
)

__all__ = [
    # Models
    "BehaviorConfig",
    "FrontConfig",
    "LoggingConfig",
    "ToolPathsConfig",
    # Loader
    "EnvReader",
    "get_config",
    "get_default_config_path",
    "load_config_file",
]
