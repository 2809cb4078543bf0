"""Partial lookup during template expansion."""

from __future__ import annotations

from typing import TYPE_CHECKING

from mustache_layout._io import read_text
from mustache_layout._paths import YIELD_PARTIAL, partial_file_path
from mustache_layout.exceptions import (
    MissingYieldError,
    PartialReadError,
    TemplateReadError,
    UnresolvablePartialError,
)

if TYPE_CHECKING:
    from mustache_layout._loaders import Bindings
    from mustache_layout._template import Template

# Bound to the wrapped text for the yield step; never parsed as a template.
YIELD_BINDING = "__mustache_layout_yield__"
YIELD_TAG = "{{{" + YIELD_BINDING + "}}}"


class PartialResolver:
    """Supplies partial sources for one render step of one template.

    Resolution order:
    1. ``yield`` returns a reference to the already rendered inner content,
       which ``bindings`` supplies unescaped and unparsed.
    2. Literal templates cannot resolve any other partial.
    3. Names starting with ``./`` are read relative to the template's directory.
    4. Any other name is read relative to the working directory.

    Partial files are read from disk on every reference.
    """

    __slots__ = ("template", "wrapped")

    def __init__(self, template: Template, wrapped: str | None) -> None:
        self.template: Template = template
        self.wrapped: str | None = wrapped

    def bindings(self, variables: Bindings) -> Bindings:
        """Return ``variables`` with the wrapped text bound for yield."""
        if self.wrapped is None:
            return variables
        return {**variables, YIELD_BINDING: self.wrapped}

    def __call__(self, name: str) -> str:
        template_path = self.template.path

        if name == YIELD_PARTIAL:
            if self.wrapped is None:
                where = template_path.full if template_path else "template literal"
                msg = f"No contents to yield in {where}"
                raise MissingYieldError(msg, template=self.template.full_path)
            return YIELD_TAG

        if template_path is None:
            msg = (
                f"Cannot render partial {name!r}: no directory name "
                "(is this a template literal?)"
            )
            raise UnresolvablePartialError(msg, partial=name)

        path = partial_file_path(name, template_path.dir)
        try:
            return read_text(path)
        except TemplateReadError as e:
            msg = (
                f"Loading partial {name!r} referenced in {template_path.full}: "
                f"{e.args[0]}"
            )
            raise PartialReadError(
                msg, partial=name, path=path, template=template_path.full
            ) from e
