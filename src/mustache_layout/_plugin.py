"""Top-level plugin object."""

from __future__ import annotations

from typing import TYPE_CHECKING

from mustache_layout._options import ChainOptions, GlobalOptions, merge_options
from mustache_layout._template import Template

if TYPE_CHECKING:
    from pathlib import Path

    from structlog.typing import FilteringBoundLogger


class MustacheLayout:
    """Creates template chains sharing a set of global options.

    Example:
        layout = MustacheLayout(GlobalOptions(var_loader=TomlVarLoader()))
        site = layout.load("layouts/site.mustache")
        post = layout.load("layouts/post.mustache", ChainOptions(scope_name="post"))

        stream = site.wrap(post).done(StreamOptions(output_extension=".html"))
        for entry in stream.process(entries):
            ...

    Attributes:
        options: Defaults for everything created by this instance. They can be
            overridden per template and per stream.
        logger: Structured logger shared by the templates and streams created
            by this instance. Defaults to a stderr logger showing warnings and
            errors unless MUSTACHE_LAYOUT_LOG_LEVEL asks for more.
    """

    def __init__(
        self,
        options: GlobalOptions | None = None,
        *,
        logger: FilteringBoundLogger | None = None,
    ) -> None:
        self.options: GlobalOptions = merge_options(GlobalOptions, options)
        if logger is None:
            from mustache_layout.utils import create_logger  # noqa: PLC0415

            logger = create_logger(default_level="warning")
        self.logger: FilteringBoundLogger = logger

    def chain_options(self, options: ChainOptions | None = None) -> ChainOptions:
        """Layer per-template options over this instance's defaults."""
        return merge_options(ChainOptions, self.options, options)

    def load(self, path: str | Path, options: ChainOptions | None = None) -> Template:
        """Load a ``.mustache`` file as a layout.

        The returned template can be chained into other layouts with ``wrap``;
        call ``done()`` on the innermost layout to create the render stream.

        Args:
            path: File path of the template.
            options: Options specific to this template.

        Raises:
            TemplateReadError: If the file cannot be read.
            VarLoaderExecutionError: If the variable loader fails.
        """
        template = Template.load(self, None, path, self.chain_options(options))
        self.logger.info("template_loaded", path=str(path))
        return template

    def literal(self, contents: str, options: ChainOptions | None = None) -> Template:
        """Create a layout from a string.

        A literal used as a layout must be given an explicit ``scope_name`` (or
        ``scope_name=False``) since it has no file name to default to.
        """
        return Template.literal(self, contents, self.chain_options(options))
