"""Template nodes and chain construction."""

from __future__ import annotations

from typing import TYPE_CHECKING

from mustache_layout._context import effective_vars
from mustache_layout._expand import expand
from mustache_layout._io import read_text
from mustache_layout._loaders import load_vars
from mustache_layout._options import ChainOptions, StreamOptions, merge_options
from mustache_layout._partials import PartialResolver
from mustache_layout._paths import TemplatePath
from mustache_layout.exceptions import (
    LayoutError,
    LiteralTemplateError,
    RenderError,
    TemplateReadError,
)

if TYPE_CHECKING:
    from collections.abc import Iterator, Mapping
    from pathlib import Path
    from typing import Any

    from mustache_layout._entry import FileEntry
    from mustache_layout._loaders import AnyVarLoader, Bindings
    from mustache_layout._plugin import MustacheLayout
    from mustache_layout._stream import ErrorHandler, RenderStream


class Template:
    """One template in a layout chain.

    A template either comes from a file (``path`` is set) or is a literal
    string (``path`` is None). Literal templates cannot resolve file partials,
    load variables, or be reloaded.

    Chains are built outermost first: ``outer.wrap(inner)`` returns a copy of
    ``inner`` whose parent is ``outer``. The innermost template of a render is
    always created per pipeline entry by ``RenderStream``.

    Attributes:
        plugin: The plugin instance that created this template.
        contents: Raw, unexpanded template source.
        path: Origin of the template, or None for a literal.
        loaded_vars: Variables produced by variable loaders.
        declared_vars: Explicitly declared variables; override loaded ones.
        parent: The template this one is wrapped inside, if any.
        options: Options in effect for this link of the chain.
    """

    __slots__ = (
        "contents",
        "declared_vars",
        "loaded_vars",
        "options",
        "parent",
        "path",
        "plugin",
        "readers",
    )

    def __init__(
        self,
        *,
        plugin: MustacheLayout,
        contents: str,
        path: TemplatePath | None,
        options: ChainOptions,
        parent: Template | None = None,
        loaded_vars: Bindings | None = None,
        declared_vars: Bindings | None = None,
        readers: tuple[AnyVarLoader, ...] = (),
    ) -> None:
        """Don't call this directly; use ``load``, ``literal``, or ``from_entry``."""
        self.plugin: MustacheLayout = plugin
        self.contents: str = contents
        self.path: TemplatePath | None = path
        self.options: ChainOptions = options
        self.parent: Template | None = parent
        self.loaded_vars: Bindings = dict(loaded_vars or {})
        self.declared_vars: Bindings = dict(declared_vars or {})
        self.readers: tuple[AnyVarLoader, ...] = readers

    # -------------------------------------------------------------------------
    # Initializers
    # -------------------------------------------------------------------------

    @classmethod
    def load(
        cls,
        plugin: MustacheLayout,
        parent: Template | None,
        path: str | Path,
        options: ChainOptions,
    ) -> Template:
        """Load a template file.

        Args:
            plugin: The plugin instance creating the template.
            parent: The template that wraps the new one.
            path: Path of the ``.mustache`` file.
            options: Fully merged options for this link.

        Raises:
            TemplateReadError: If the file cannot be read.
            VarLoaderExecutionError: If the configured variable loader fails.
        """
        template_path = TemplatePath.parse(path)
        plugin.logger.debug("template_loading", path=str(template_path))
        contents = read_text(template_path.full)
        return cls(
            plugin=plugin,
            contents=contents,
            path=template_path,
            options=options,
            parent=parent,
            loaded_vars=load_vars(options.var_loader, template_path),
            declared_vars=dict(options.vars or {}),
        )

    @classmethod
    def literal(
        cls,
        plugin: MustacheLayout,
        contents: str,
        options: ChainOptions,
    ) -> Template:
        """Create a template from a string.

        Variable loaders are not run for literals since there is no path to
        derive a variable file from.
        """
        return cls(
            plugin=plugin,
            contents=contents,
            path=None,
            options=options,
            declared_vars=dict(options.vars or {}),
        )

    @classmethod
    def from_entry(
        cls,
        plugin: MustacheLayout,
        parent: Template | None,
        entry: FileEntry,
        options: ChainOptions,
    ) -> Template:
        """Create the innermost template of a render from a pipeline entry.

        Raises:
            TemplateReadError: If the entry's buffer is not valid UTF-8.
        """
        template_path = TemplatePath.parse(entry.path)
        plugin.logger.debug("template_from_entry", path=str(template_path))
        try:
            contents = entry.text()
        except UnicodeDecodeError as e:
            msg = f"Decoding {entry.path}: {e}"
            raise TemplateReadError(msg, path=entry.path) from e
        return cls(
            plugin=plugin,
            contents=contents,
            path=template_path,
            options=options,
            parent=parent,
            loaded_vars=load_vars(options.var_loader, template_path),
            declared_vars=dict(options.vars or {}),
        )

    def _copy(self, **changes: Any) -> Template:
        values: dict[str, Any] = {
            name: getattr(self, name) for name in self.__slots__
        }
        values.update(changes)
        return Template(**values)

    # -------------------------------------------------------------------------
    # Properties
    # -------------------------------------------------------------------------

    @property
    def own_vars(self) -> Bindings:
        """This template's variables, without inherited scopes."""
        return {**self.loaded_vars, **self.declared_vars}

    @property
    def full_path(self) -> Path | None:
        return self.path.full if self.path is not None else None

    def lineage(self) -> Iterator[Template]:
        """Iterate from this template outward through its ancestors."""
        node: Template | None = self
        while node is not None:
            yield node
            node = node.parent

    def __repr__(self) -> str:
        where = str(self.path) if self.path is not None else "<literal>"
        depth = sum(1 for _ in self.lineage())
        return f"Template({where!r}, depth={depth})"

    # -------------------------------------------------------------------------
    # Chain construction
    # -------------------------------------------------------------------------

    def wrap(self, child: Template, options: ChainOptions | None = None) -> Template:
        """Wrap this template around another template.

        Returns a copy of ``child`` whose parent is this template. Call ``wrap``
        from the outside in and finish with ``done()``::

            layout = MustacheLayout()
            site = layout.load("site.mustache")
            post = layout.load("post.mustache")
            stream = site.wrap(post).done()

        Args:
            child: A template obtained from the same ``MustacheLayout``.
            options: Overrides applied to the copy's options. Declared ``vars``
                are merged into the child's declared variables.

        Returns:
            A new template; neither this template nor ``child`` is modified.
        """
        if options is None:
            return child._copy(parent=self)
        return child._copy(
            parent=self,
            options=merge_options(ChainOptions, child.options, options),
            declared_vars={**child.declared_vars, **(options.vars or {})},
        )

    def with_vars(self, new_vars: Mapping[str, Any]) -> Template:
        """Return a copy with additional declared variables."""
        return self._copy(declared_vars={**self.declared_vars, **new_vars})

    def read_vars(self, reader: AnyVarLoader) -> Template:
        """Return a copy with variables loaded by ``reader`` added.

        The reader runs immediately and again on every ``reload()``.

        Raises:
            LiteralTemplateError: If this template is a literal.
            VarLoaderExecutionError: If the reader fails.
        """
        if self.path is None:
            msg = "Cannot read_vars on a template literal - no path to read from!"
            raise LiteralTemplateError(msg)
        loaded = load_vars(reader, self.path)
        self.plugin.logger.debug(
            "vars_loaded", path=str(self.path), keys=sorted(loaded)
        )
        return self._copy(
            loaded_vars={**self.loaded_vars, **loaded},
            readers=(*self.readers, reader),
        )

    def reload(self) -> None:
        """Re-read contents and loaded variables from disk in place.

        Raises:
            LiteralTemplateError: If this template is a literal.
            TemplateReadError: If the file cannot be read.
            VarLoaderExecutionError: If a variable loader fails.
        """
        if self.path is None:
            msg = "Cannot reload a template literal"
            raise LiteralTemplateError(msg)
        contents = read_text(self.path.full)
        loaded = load_vars(self.options.var_loader, self.path)
        for reader in self.readers:
            loaded.update(load_vars(reader, self.path))
        self.contents = contents
        self.loaded_vars = loaded
        self.plugin.logger.info("template_reloaded", path=str(self.path))

    def done(
        self,
        options: StreamOptions | None = None,
        *,
        on_error: ErrorHandler | None = None,
    ) -> RenderStream:
        """Finish the chain and create the stream that renders pipeline entries.

        Args:
            options: Options for the innermost templates, layered over the
                plugin's global options.
            on_error: Called with each error and the failing entry while
                processing entries.
        """
        from mustache_layout._stream import RenderStream  # noqa: PLC0415

        return RenderStream(
            self,
            merge_options(StreamOptions, self.plugin.options, options),
            on_error=on_error,
        )

    # -------------------------------------------------------------------------
    # Rendering
    # -------------------------------------------------------------------------

    def effective_vars(self) -> Bindings:
        """Own variables joined with the scoped variables of every ancestor."""
        return effective_vars(self)

    def render_step(self, wrapped: str | None = None) -> str:
        """Render this template alone, substituting ``wrapped`` for yield.

        Args:
            wrapped: Rendered output of the next inner template, or None.

        Returns:
            The rendered text.

        Raises:
            MissingYieldError: If the template yields and ``wrapped`` is None.
            RenderError: For any other failure during expansion.
        """
        resolver = PartialResolver(self, wrapped)
        try:
            return expand(
                self.contents, resolver.bindings(self.effective_vars()), resolver
            )
        except LayoutError:
            raise
        except Exception as e:
            where = self.path if self.path is not None else "template literal"
            msg = f"While rendering {where}: {e}"
            raise RenderError(msg, template=self.full_path) from e

    def render(self, wrapped: str | None = None) -> str:
        """Render this template and then every ancestor, inside out.

        Returns:
            The output of the outermost template.
        """
        output = self.render_step(wrapped)
        if self.parent is not None:
            for node in self.parent.lineage():
                output = node.render_step(output)
        return output

