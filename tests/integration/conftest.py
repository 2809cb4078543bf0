from collections.abc import Callable
from pathlib import Path

import pytest
from rich.console import Console

from mustache_layout.cli import create_app


def pytest_collection_modifyitems(items: list[pytest.Item]) -> None:
    for item in items:
        if Path(item.path).is_relative_to(Path(__file__).parent):
            item.add_marker(pytest.mark.integration)


@pytest.fixture
def project(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> Path:
    """Create a small site and make it the working directory.

    Structure:
        tmp_path/
            layouts/
                site.mustache    # <html>{{title}}|{{> yield}}</html>
                site.toml        # title = "Example"
                post.mustache    # <article>{{> yield}}</article>
                _nav.mustache    # <nav>{{site.title}}</nav>
            pages/
                hello.mustache   # Hello {{site.title}}
                _part.mustache   # partial source, never rendered
                blog/
                    first.mustache
    """
    monkeypatch.delenv("MUSTACHE_LAYOUT_DEBUG", raising=False)
    monkeypatch.delenv("MUSTACHE_LAYOUT_LOG_LEVEL", raising=False)

    layouts = tmp_path / "layouts"
    layouts.mkdir()
    (layouts / "site.mustache").write_text("<html>{{title}}|{{> yield}}</html>")
    (layouts / "site.toml").write_text('title = "Example"\n')
    (layouts / "post.mustache").write_text("<article>{{> yield}}</article>")
    (layouts / "_nav.mustache").write_text("<nav>{{site.title}}</nav>")

    pages = tmp_path / "pages"
    (pages / "blog").mkdir(parents=True)
    (pages / "hello.mustache").write_text("Hello {{site.title}}")
    (pages / "_part.mustache").write_text("{{> yield}}")
    (pages / "blog" / "first.mustache").write_text("First {{> layouts/_nav}}")

    monkeypatch.chdir(tmp_path)
    return tmp_path


@pytest.fixture
def layout_cli(console: Console) -> Callable[..., None]:
    """Create CLI app for testing.

    Returns a callable that runs the CLI and suppresses SystemExit.
    Use layout_cli_with_exit_code when you need to check the exit code.
    """

    app = create_app(console=console, error_console=console)

    def _run(*args: str) -> None:
        """Run CLI app and suppress SystemExit from cyclopts."""

        try:
            app(args)
        except SystemExit:
            pass

    return _run


@pytest.fixture
def layout_cli_with_exit_code(console: Console) -> Callable[..., int]:
    """Create CLI app for testing that returns the exit code.

    Use this fixture when tests need to verify the exit code.
    """

    app = create_app(console=console, error_console=console)

    def _run(*args: str) -> int:
        """Run CLI app and return exit code (0 if no SystemExit)."""

        try:
            app(args)
        except SystemExit as e:
            return e.code if isinstance(e.code, int) else 1
        else:
            return 0

    return _run
