# pyright: reportExplicitAny=false
"""Configuration models.

This module provides the Pydantic models for the ``mustache-layout.toml``
configuration file used by the command-line interface.
"""

from __future__ import annotations

from enum import StrEnum
from pathlib import Path
from typing import Any, ClassVar, Literal

from pydantic import BaseModel, ConfigDict, Field, ValidationError

from mustache_layout._loaders import AnyVarLoader, resolve_var_loader
from mustache_layout._options import ChainOptions
from mustache_layout.config._loader import find_config_file, read_toml_file
from mustache_layout.exceptions import ConfigLoadError


class LogLevel(StrEnum):
    """Log level threshold values.

    Values are ordered from most verbose (debug) to least verbose (error).
    """

    DEBUG = "debug"
    INFO = "info"
    WARNING = "warning"
    ERROR = "error"


class LogFormat(StrEnum):
    """Log output format values."""

    JSON = "json"
    TEXT = "text"


class LoggingConfig(BaseModel):
    """Logging configuration section.

    Attributes:
        level: Log level threshold.
        format: Log output format.
        file: Path to log file (empty logs to stderr).
    """

    model_config: ClassVar[ConfigDict] = ConfigDict(frozen=True, extra="ignore")

    level: LogLevel = LogLevel.INFO
    format: LogFormat = LogFormat.TEXT
    file: str = ""


class RenderConfig(BaseModel):
    """Render configuration section.

    Attributes:
        layouts: Layout files, outermost first.
        out_dir: Directory rendered files are written to.
        output_name: Fixed base name for rendered files, if any.
        output_extension: Extension of rendered files.
        var_loader: Built-in variable loader to use for every template.
        vars: Default variables declared on every template.
        scopes: Scope names keyed by layout path. An empty string disables
            inheritance of that layout's variables.
    """

    model_config: ClassVar[ConfigDict] = ConfigDict(frozen=True, extra="forbid")

    layouts: list[str] = Field(default_factory=list)
    out_dir: str = "dist"
    output_name: str | None = None
    output_extension: str = ".htm"
    var_loader: Literal["none", "toml", "yaml"] = "none"
    vars: dict[str, Any] = Field(default_factory=dict)
    scopes: dict[str, str] = Field(default_factory=dict)

    def loader(self) -> AnyVarLoader | None:
        return resolve_var_loader(self.var_loader)

    def chain_options(self, layout: str) -> ChainOptions:
        """Build the chain options for one configured layout."""
        if layout not in self.scopes:
            return ChainOptions()
        scope = self.scopes[layout]
        return ChainOptions(scope_name=scope if scope else False)


class Config(BaseModel):
    """Top-level configuration."""

    model_config: ClassVar[ConfigDict] = ConfigDict(frozen=True, extra="ignore")

    logging: LoggingConfig = Field(default_factory=LoggingConfig)
    render: RenderConfig = Field(default_factory=RenderConfig)
    source: Path | None = Field(default=None, exclude=True)

    @classmethod
    def from_dict(cls, data: dict[str, Any], *, source: Path | None = None) -> Config:
        """Validate a configuration dictionary.

        Raises:
            ConfigLoadError: If the data fails validation.
        """
        try:
            return cls.model_validate({**data, "source": source})
        except ValidationError as e:
            where = f" in {source}" if source is not None else ""
            msg = f"Invalid configuration{where}: {e}"
            raise ConfigLoadError(msg, path=source) from e


def load_config(path: Path | None = None, *, cwd: Path | None = None) -> Config:
    """Load configuration from a TOML file.

    Args:
        path: Explicit config file. Must exist when given.
        cwd: Directory searched for ``mustache-layout.toml`` when ``path`` is
            None.

    Returns:
        The loaded configuration, or defaults when no file is found.

    Raises:
        ConfigLoadError: If the file is missing, unparsable, or invalid.
    """
    config_path = path if path is not None else find_config_file(cwd)
    if config_path is None:
        return Config()
    try:
        data = read_toml_file(config_path)
    except FileNotFoundError as e:
        msg = f"Config file not found: {config_path}"
        raise ConfigLoadError(msg, path=config_path) from e
    except OSError as e:
        msg = f"Reading config file {config_path}: {e}"
        raise ConfigLoadError(msg, path=config_path) from e
    return Config.from_dict(data, source=config_path)
