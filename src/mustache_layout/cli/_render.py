# ruff: noqa: TC003  # Path needed at runtime for cyclopts parameter parsing
"""Render and check commands."""

from __future__ import annotations

from pathlib import Path
from typing import TYPE_CHECKING

from rich.markup import escape

from mustache_layout import (
    TEMPLATE_EXTENSION,
    ChainOptions,
    FileEntry,
    GlobalOptions,
    LayoutError,
    MustacheLayout,
    StreamOptions,
    Template,
    resolve_var_loader,
    scope_key,
)
from mustache_layout.config import Config, load_config
from mustache_layout.exceptions import ConfigLoadError
from mustache_layout.utils import open_logger

from ._shared import ExitCode, exit_with_error, parse_var, print_error

if TYPE_CHECKING:
    from collections.abc import Iterator, Sequence
    from contextlib import AbstractContextManager

    from rich.console import Console
    from structlog.typing import FilteringBoundLogger


def _load_config(config_path: Path | None, console: Console) -> Config:
    try:
        return load_config(config_path)
    except ConfigLoadError as e:
        exit_with_error(str(e), ExitCode.LOAD_ERROR, console=console)


def _open_logger(
    config: Config, *, verbose: bool
) -> AbstractContextManager[FilteringBoundLogger]:
    level = "debug" if verbose else config.logging.level.value
    return open_logger(
        level=level,
        log_format=config.logging.format.value,  # type: ignore[arg-type]
        log_file=config.logging.file,
    )


def build_chain(
    plugin: MustacheLayout,
    layouts: Sequence[Path],
    config: Config,
) -> Template:
    """Load layouts, outermost first, into a single chain.

    With no layouts the chain is a bare ``{{> yield}}`` literal, so pages render
    on their own.

    Raises:
        LayoutError: If a layout cannot be loaded.
    """
    if not layouts:
        return plugin.literal("{{> yield}}", ChainOptions(scope_name=False))

    first, *rest = layouts
    chain = plugin.load(first, config.render.chain_options(str(first)))
    for layout in rest:
        chain = chain.wrap(
            plugin.load(layout, config.render.chain_options(str(layout)))
        )
    return chain


def collect_entries(sources: Sequence[Path]) -> Iterator[FileEntry]:
    """Expand source arguments into pipeline entries.

    Directories contribute every template file below them, keeping their
    relative layout; files are taken as they are.
    """
    for source in sources:
        if source.is_dir():
            for path in sorted(source.rglob(f"*{TEMPLATE_EXTENSION}")):
                yield FileEntry.from_path(path, base=source)
        else:
            yield FileEntry.from_path(source, base=source.parent)


def render_command(
    sources: Sequence[Path],
    *,
    console: Console,
    error_console: Console,
    layouts: Sequence[Path] | None = None,
    out_dir: Path | None = None,
    output_name: str | None = None,
    output_extension: str | None = None,
    variables: Sequence[str] | None = None,
    var_loader: str | None = None,
    config_path: Path | None = None,
    verbose: bool = False,
) -> None:
    """Render source templates through a layout chain and write the results.

    Raises:
        SystemExit: With LOAD_ERROR, VALIDATION_ERROR, RENDER_ERROR, or
            IO_ERROR on failure. Missing sources exit with LOAD_ERROR before
            anything is rendered.
    """
    config = _load_config(config_path, error_console)
    render_config = config.render

    missing = [source for source in sources if not source.exists()]
    if missing:
        names = ", ".join(str(source) for source in missing)
        exit_with_error(
            f"Source not found: {names}", ExitCode.LOAD_ERROR, console=error_console
        )

    declared = dict(render_config.vars)
    try:
        declared.update(parse_var(raw) for raw in variables or ())
        loader = resolve_var_loader(var_loader or render_config.var_loader)
    except ValueError as e:
        exit_with_error(str(e), ExitCode.VALIDATION_ERROR, console=error_console)

    with _open_logger(config, verbose=verbose) as logger:
        plugin = MustacheLayout(
            GlobalOptions(var_loader=loader, vars=declared), logger=logger
        )

        layout_paths = list(layouts or ()) or [Path(p) for p in render_config.layouts]
        try:
            chain = build_chain(plugin, layout_paths, config)
        except LayoutError as e:
            exit_with_error(str(e), ExitCode.LOAD_ERROR, console=error_console)

        stream = chain.done(
            StreamOptions(
                output_name=output_name or render_config.output_name,
                output_extension=output_extension or render_config.output_extension,
            ),
            on_error=lambda e, _entry: print_error(str(e), console=error_console),
        )
        target = out_dir if out_dir is not None else Path(render_config.out_dir)

        written = 0
        try:
            for entry in stream.process(collect_entries(sources)):
                if not entry.is_buffer():
                    continue
                destination = target / entry.relative
                destination.parent.mkdir(parents=True, exist_ok=True)
                destination.write_bytes(bytes(entry.contents))  # type: ignore[arg-type]
                written += 1
                console.print(f"[green]✓[/green] {escape(str(destination))}")
        except LayoutError as e:
            exit_with_error(str(e), ExitCode.IO_ERROR, console=error_console)
        except OSError as e:
            msg = f"Writing output: {e}"
            exit_with_error(msg, ExitCode.IO_ERROR, console=error_console)

        if stream.errors:
            console.print(
                f"Rendered {written} file(s); [red]{len(stream.errors)} failed[/red]"
            )
            raise SystemExit(ExitCode.RENDER_ERROR)
        console.print(f"Rendered {written} file(s) to {escape(str(target))}")


def check_command(
    layouts: Sequence[Path],
    *,
    console: Console,
    error_console: Console,
    config_path: Path | None = None,
) -> None:
    """Load a layout chain and report its structure.

    Raises:
        SystemExit: With LOAD_ERROR if the configuration or a layout fails to
            load.
    """
    config = _load_config(config_path, error_console)
    layout_paths = list(layouts) or [Path(p) for p in config.render.layouts]
    if not layout_paths:
        exit_with_error(
            "No layouts given", ExitCode.VALIDATION_ERROR, console=error_console
        )

    with _open_logger(config, verbose=False) as logger:
        plugin = MustacheLayout(
            GlobalOptions(var_loader=config.render.loader()), logger=logger
        )
        try:
            chain = build_chain(plugin, layout_paths, config)
            nodes = list(reversed(list(chain.lineage())))
            scopes = [scope_key(node) for node in nodes]
        except LayoutError as e:
            exit_with_error(str(e), ExitCode.LOAD_ERROR, console=error_console)

    for depth, (node, scope) in enumerate(zip(nodes, scopes, strict=True)):
        scope_label = f"scope {scope}" if scope is not None else "no scope"
        console.print(
            f"{'  ' * depth}{escape(str(node.path))} "
            f"[dim]({scope_label}, {len(node.own_vars)} var(s))[/dim]"
        )
