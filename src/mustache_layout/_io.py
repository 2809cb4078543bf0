"""File reads for templates, partials, and variable files."""

from __future__ import annotations

from typing import TYPE_CHECKING

from mustache_layout.exceptions import TemplateReadError

if TYPE_CHECKING:
    from pathlib import Path


def read_text(path: Path) -> str:
    """Read a UTF-8 text file.

    Args:
        path: File to read.

    Returns:
        The decoded file contents.

    Raises:
        TemplateReadError: If the file is missing or cannot be read or decoded.
    """
    try:
        return path.read_text(encoding="utf-8")
    except (OSError, UnicodeDecodeError) as e:
        msg = f"Reading file {path}: {e}"
        raise TemplateReadError(msg, path=path) from e


def read_optional_text(path: Path) -> str | None:
    """Read a UTF-8 text file that is allowed to be absent.

    Returns:
        The decoded contents, or None if the file does not exist.

    Raises:
        TemplateReadError: For any failure other than the file being absent.
    """
    try:
        return path.read_text(encoding="utf-8")
    except FileNotFoundError:
        return None
    except (OSError, UnicodeDecodeError) as e:
        msg = f"Reading file {path}: {e}"
        raise TemplateReadError(msg, path=path) from e
