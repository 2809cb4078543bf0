r"""Nested Mustache layouts with scoped variable inheritance.

An outer layout wraps an inner template. The inner template is rendered first,
and its output replaces ``{{> yield}}`` in the layout. Variables of each layout
stay visible to the templates it wraps under a scope named after the layout
file, instead of being flattened into one namespace.

Basic usage:
    from mustache_layout import FileEntry, MustacheLayout

    layout = MustacheLayout()

    # site.mustache: <title>{{title}}</title><main>{{> yield}}</main>
    site = layout.load("layouts/site.mustache").with_vars({"title": "Example"})

    # post.mustache: <h1>{{site.title}}</h1>{{> yield}}
    post = layout.load("layouts/post.mustache")

    stream = site.wrap(post).done()
    for entry in stream.process([FileEntry.from_path("pages/hello.mustache")]):
        print(entry.path, entry.contents)

With variable files and scope options:
    from mustache_layout import (
        ChainOptions,
        GlobalOptions,
        MustacheLayout,
        StreamOptions,
        TomlVarLoader,
    )

    # Every template reads variables from <name>.toml beside it
    layout = MustacheLayout(GlobalOptions(var_loader=TomlVarLoader()))

    site = layout.load("site.mustache", ChainOptions(scope_name="layout"))
    stream = site.done(StreamOptions(output_extension=".html"))

Partials:
    {{> yield}}        rendered output of the wrapped template
    {{> ./nav}}        nav.mustache next to the referencing template
    {{> shared/nav}}   shared/nav.mustache relative to the working directory
"""

from ._context import effective_vars, merged_vars, scope_key
from ._entry import FileEntry
from ._expand import expand
from ._loaders import (
    AnyVarLoader,
    Bindings,
    TemplateValue,
    TomlVarLoader,
    VarLoader,
    YamlVarLoader,
    load_vars,
    resolve_var_loader,
)
from ._options import ChainOptions, GlobalOptions, StreamOptions, merge_options
from ._partials import PartialResolver
from ._paths import (
    DEFAULT_OUTPUT_EXTENSION,
    PARTIAL_PREFIX,
    RELATIVE_PARTIAL_MARKER,
    TEMPLATE_EXTENSION,
    YIELD_PARTIAL,
    TemplatePath,
)
from ._plugin import MustacheLayout
from ._stream import RenderStream
from ._template import Template
from .exceptions import (
    PLUGIN_NAME,
    ConfigLoadError,
    LayoutError,
    LiteralTemplateError,
    MissingYieldError,
    PartialReadError,
    RenderError,
    ScopeNameError,
    TemplateReadError,
    UnresolvablePartialError,
    UnsupportedInputError,
    VarLoaderExecutionError,
)

__all__ = [
    "DEFAULT_OUTPUT_EXTENSION",
    "PARTIAL_PREFIX",
    "PLUGIN_NAME",
    "RELATIVE_PARTIAL_MARKER",
    "TEMPLATE_EXTENSION",
    "YIELD_PARTIAL",
    "AnyVarLoader",
    "Bindings",
    "ChainOptions",
    "ConfigLoadError",
    "FileEntry",
    "GlobalOptions",
    "LayoutError",
    "LiteralTemplateError",
    "MissingYieldError",
    "MustacheLayout",
    "PartialReadError",
    "PartialResolver",
    "RenderError",
    "RenderStream",
    "ScopeNameError",
    "StreamOptions",
    "Template",
    "TemplatePath",
    "TemplateReadError",
    "TemplateValue",
    "TomlVarLoader",
    "UnresolvablePartialError",
    "UnsupportedInputError",
    "VarLoader",
    "VarLoaderExecutionError",
    "YamlVarLoader",
    "effective_vars",
    "expand",
    "load_vars",
    "merge_options",
    "merged_vars",
    "resolve_var_loader",
    "scope_key",
]
