"""Configuration management for gator."""

from .duration import parse_duration
from .loader import Config, default_config_path, load_config, save_config
from .models import ConfigModel, LoggingConfig, PollerConfig, PostgresConfig

__all__ = [
    "Config",
    "ConfigModel",
    "LoggingConfig",
    "PollerConfig",
    "PostgresConfig",
    "default_config_path",
    "load_config",
    "parse_duration",
    "save_config",
]
