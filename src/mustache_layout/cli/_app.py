"""The command-line interface for mustache-layout."""
# ruff: noqa: TC003  # Path needed at runtime for cyclopts parameter parsing

from pathlib import Path
from typing import Annotated

from cyclopts import App, Parameter
from rich.console import Console

from ._render import check_command, render_command

_HELP = "Render Mustache templates through a chain of layouts."


def create_app(
    console: Console | None = None,
    error_console: Console | None = None,
    *,
    exit_on_error: bool = True,
) -> App:
    if console is None:
        console = Console()
    if error_console is None:
        error_console = Console(stderr=True)
    app = App(
        name="mustache-layout",
        help=_HELP,
        help_on_error=True,
        console=console,
        error_console=error_console,
        exit_on_error=exit_on_error,
    )

    @app.command(name="render")
    def _render(  # pyright: ignore[reportUnusedFunction]
        sources: Annotated[
            list[Path],
            Parameter(help="Template files or directories to render"),
        ],
        /,
        *,
        layout: Annotated[
            list[Path] | None,
            Parameter(
                name=["--layout", "-l"],
                help="Layout file, outermost first (repeatable)",
            ),
        ] = None,
        out_dir: Annotated[
            Path | None,
            Parameter(name=["--out-dir", "-o"], help="Output directory"),
        ] = None,
        output_name: Annotated[
            str | None,
            Parameter(name="--output-name", help="Fixed base name for output files"),
        ] = None,
        output_extension: Annotated[
            str | None,
            Parameter(name="--output-extension", help="Extension for output files"),
        ] = None,
        var: Annotated[
            list[str] | None,
            Parameter(
                name=["--var", "-v"],
                help="Variable declared on every template, as KEY=VALUE",
            ),
        ] = None,
        var_loader: Annotated[
            str | None,
            Parameter(
                name="--var-loader",
                help="Sidecar variable loader (none, toml, yaml)",
            ),
        ] = None,
        config: Annotated[
            Path | None, Parameter(name="--config", help="Path to config file")
        ] = None,
        verbose: Annotated[
            bool, Parameter(name="--verbose", help="Enable debug logging")
        ] = False,
    ) -> None:
        """Render templates through a layout chain

        Each source template is rendered, then wrapped by every layout from
        the innermost to the outermost. Files whose names start with an
        underscore are treated as partials and skipped.
        """
        render_command(
            sources,
            console=console,
            error_console=error_console,
            layouts=layout,
            out_dir=out_dir,
            output_name=output_name,
            output_extension=output_extension,
            variables=var,
            var_loader=var_loader,
            config_path=config,
            verbose=verbose,
        )

    @app.command(name="check")
    def _check(  # pyright: ignore[reportUnusedFunction]
        layouts: Annotated[
            list[Path] | None,
            Parameter(help="Layout files, outermost first"),
        ] = None,
        /,
        *,
        config: Annotated[
            Path | None, Parameter(name="--config", help="Path to config file")
        ] = None,
    ) -> None:
        """Load a layout chain and show its structure

        Reports every layout with its scope name and variable count, and
        fails if any layout cannot be read or has an invalid scope.
        """
        check_command(
            layouts or [],
            console=console,
            error_console=error_console,
            config_path=config,
        )

    return app


app = create_app()


def main() -> None:
    """Default entrypoint for the `mustache-layout` CLI."""
    app = create_app()
    app()


if __name__ == "__main__":
    main()
