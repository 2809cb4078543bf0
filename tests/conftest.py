"""Shared test fixtures for mustache-layout tests."""

from collections.abc import Callable
from pathlib import Path

import pytest
from rich.console import Console
from structlog.typing import FilteringBoundLogger

from mustache_layout import FileEntry, MustacheLayout
from mustache_layout.utils import create_logger


@pytest.fixture
def logger(monkeypatch: pytest.MonkeyPatch) -> FilteringBoundLogger:
    """A logger that only lets errors through to stderr."""
    monkeypatch.delenv("MUSTACHE_LAYOUT_DEBUG", raising=False)
    return create_logger(level="error")


@pytest.fixture
def layout(logger: FilteringBoundLogger) -> MustacheLayout:
    """A plugin instance with default options."""
    return MustacheLayout(logger=logger)


type MakeEntryFunc = Callable[..., FileEntry]


@pytest.fixture
def make_entry() -> MakeEntryFunc:
    """Return a factory creating buffer entries from text.

    Passing None as the contents creates a null entry.
    """

    def _make(
        path: str | Path, contents: str | None, *, base: Path | None = None
    ) -> FileEntry:
        data = contents.encode("utf-8") if contents is not None else None
        return FileEntry(path=Path(path), contents=data, base=base)

    return _make


@pytest.fixture
def console() -> Console:
    return Console(
        width=70,
        force_terminal=True,
        highlight=False,
        color_system=None,
        legacy_windows=False,
    )
