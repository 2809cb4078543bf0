# pyright: reportAny=false, reportExplicitAny=false
"""TOML configuration file loading."""

from __future__ import annotations

import tomllib
from pathlib import Path
from typing import Any

from mustache_layout.exceptions import ConfigLoadError

CONFIG_FILE_NAME = "mustache-layout.toml"


def read_toml_file(path: Path) -> dict[str, Any]:
    """Read and parse a TOML file.

    Args:
        path: Path to the TOML file.

    Returns:
        Parsed TOML content as dictionary.

    Raises:
        FileNotFoundError: If the file does not exist.
        ConfigLoadError: If the file cannot be parsed.
    """
    try:
        with path.open("rb") as f:
            return tomllib.load(f)
    except tomllib.TOMLDecodeError as e:
        msg = f"Failed to parse TOML file: {e}"
        raise ConfigLoadError(
            msg,
            path=path,
            line=getattr(e, "lineno", None),
            column=getattr(e, "colno", None),
        ) from e


def find_config_file(start: Path | None = None) -> Path | None:
    """Locate the configuration file in a directory.

    Args:
        start: Directory to look in. Defaults to the working directory.

    Returns:
        Path to ``mustache-layout.toml`` if it exists, otherwise None.
    """
    directory = start if start is not None else Path.cwd()
    candidate = directory / CONFIG_FILE_NAME
    return candidate if candidate.is_file() else None
