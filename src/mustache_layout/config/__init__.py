"""Configuration file support for the command-line interface."""

from ._loader import CONFIG_FILE_NAME, find_config_file, read_toml_file
from ._models import (
    Config,
    LogFormat,
    LoggingConfig,
    LogLevel,
    RenderConfig,
    load_config,
)

__all__ = [
    "CONFIG_FILE_NAME",
    "Config",
    "LogFormat",
    "LogLevel",
    "LoggingConfig",
    "RenderConfig",
    "find_config_file",
    "load_config",
    "read_toml_file",
]
