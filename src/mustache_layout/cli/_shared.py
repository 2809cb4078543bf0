"""Shared CLI utilities.

This module provides common utilities used across CLI command implementations:
- Standardized exit codes
- Console utilities for error handling
"""

from __future__ import annotations

from enum import IntEnum
from typing import TYPE_CHECKING, Never

from rich.markup import escape

if TYPE_CHECKING:
    from rich.console import Console

__all__ = [
    "ExitCode",
    "exit_with_error",
    "get_error_console",
    "parse_var",
    "print_error",
]


class ExitCode(IntEnum):
    """Standard exit codes for mustache-layout CLI commands."""

    SUCCESS = 0
    LOAD_ERROR = 1
    RENDER_ERROR = 2
    VALIDATION_ERROR = 3
    IO_ERROR = 4


def get_error_console() -> Console:
    """Get a Rich console configured for error output to stderr."""
    from rich.console import Console  # noqa: PLC0415

    return Console(stderr=True)


def print_error(message: str, *, console: Console | None = None) -> None:
    if console is None:
        console = get_error_console()
    console.print(f"[red]Error:[/red] {escape(message)}")


def exit_with_error(
    message: str,
    code: ExitCode = ExitCode.LOAD_ERROR,
    *,
    console: Console | None = None,
) -> Never:
    """Print an error message and exit with the specified code.

    Args:
        message: The error message to display.
        code: The exit code to use (defaults to LOAD_ERROR).
        console: Optional Rich console for output. If not provided,
            a new stderr console will be created.

    Raises:
        SystemExit: Always raised with the specified exit code.
    """
    print_error(message, console=console)
    raise SystemExit(code)


def parse_var(raw: str) -> tuple[str, str]:
    """Split a ``KEY=VALUE`` command-line variable.

    Raises:
        ValueError: If there is no ``=`` or the key is empty.
    """
    key, sep, value = raw.partition("=")
    key = key.strip()
    if not sep or not key:
        msg = f"Invalid variable {raw!r}; expected KEY=VALUE"
        raise ValueError(msg)
    return key, value
