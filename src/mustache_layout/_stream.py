"""Rendering of pipeline entries through a template chain."""

from __future__ import annotations

from typing import TYPE_CHECKING

from mustache_layout._paths import (
    TemplatePath,
    is_partial_source,
    is_template_file,
    output_path,
)
from mustache_layout._template import Template
from mustache_layout.exceptions import (
    LayoutError,
    RenderError,
    UnsupportedInputError,
)

if TYPE_CHECKING:
    from collections.abc import Callable, Iterable, Iterator

    from mustache_layout._entry import FileEntry
    from mustache_layout._options import StreamOptions

type ErrorHandler = Callable[[LayoutError, FileEntry], None]


class RenderStream:
    """Renders each pipeline entry inside a chain of layouts.

    For every accepted entry the stream creates the innermost template from the
    entry, renders it without wrapped content, then renders each layout from
    the innermost outward, passing each step's output as the next layout's
    ``{{> yield}}``.

    Attributes:
        parent: The innermost layout of the chain.
        options: Options for the templates created from entries.
        errors: Errors raised by entries processed with ``process``.
    """

    def __init__(
        self,
        parent: Template,
        options: StreamOptions,
        *,
        on_error: ErrorHandler | None = None,
    ) -> None:
        self.parent: Template = parent
        self.options: StreamOptions = options
        self.on_error: ErrorHandler | None = on_error
        self.errors: list[LayoutError] = []
        self.logger = parent.plugin.logger

    def render(self, entry: FileEntry) -> str:
        """Render an entry through the chain without modifying it.

        Raises:
            UnsupportedInputError: If the entry holds a stream.
            LayoutError: If any render step fails. Unexpected exceptions are
                wrapped in RenderError.
        """
        if entry.is_stream():
            msg = f"Streams are not supported: {entry.path}"
            raise UnsupportedInputError(msg, template=entry.path)

        try:
            leaf = Template.from_entry(
                self.parent.plugin, self.parent, entry, self.options
            )
            return leaf.render()
        except LayoutError:
            raise
        except Exception as e:
            msg = f"Error during rendering of {entry.path}: {e}"
            raise RenderError(msg, template=entry.path) from e

    def transform(self, entry: FileEntry) -> FileEntry | None:
        """Render one entry in place.

        Returns:
            The entry itself. Null entries and entries without the template
            extension are returned untouched. Partial sources (base name
            starting with ``_``) return None and are dropped from the output.

        Raises:
            LayoutError: If rendering fails; the entry is left unmodified.
        """
        if entry.is_null() or not is_template_file(entry.path):
            self.logger.debug("entry_passed_through", path=str(entry.path))
            return entry
        if is_partial_source(entry.path):
            self.logger.debug("entry_skipped", path=str(entry.path), reason="partial")
            return None

        output = self.render(entry)

        entry.contents = output.encode("utf-8")
        entry.path = output_path(
            TemplatePath.parse(entry.path),
            output_name=self.options.output_name,
            output_extension=self.options.output_extension,
        )
        self.logger.debug("entry_rendered", path=str(entry.path))
        return entry

    def process(self, entries: Iterable[FileEntry]) -> Iterator[FileEntry]:
        """Transform a sequence of entries, one at a time.

        A failing entry produces no output. Its error is logged, recorded in
        ``errors``, and passed to ``on_error``; the remaining entries are still
        processed.
        """
        for entry in entries:
            try:
                result = self.transform(entry)
            except LayoutError as e:
                self.errors.append(e)
                self.logger.error(
                    "entry_failed",
                    path=str(entry.path),
                    error=str(e),
                    error_type=type(e).__name__,
                )
                if self.on_error is not None:
                    self.on_error(e, entry)
                continue
            if result is not None:
                yield result

    __call__ = process
