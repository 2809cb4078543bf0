"""Variable bindings for a template and its ancestors."""

from __future__ import annotations

from typing import TYPE_CHECKING

from mustache_layout.exceptions import ScopeNameError

if TYPE_CHECKING:
    from mustache_layout._loaders import Bindings
    from mustache_layout._template import Template


def merged_vars(template: Template) -> Bindings:
    """Merge a template's loaded and declared variables.

    Declared variables override loaded ones key by key. The merge is shallow:
    nested mappings are replaced, not combined.
    """
    return {**template.loaded_vars, **template.declared_vars}


def scope_key(template: Template) -> str | None:
    """Return the name an ancestor's variables are exposed under.

    Returns:
        The configured scope name, the template's file name when no scope name
        is configured, or None when the template opts out of inheritance.

    Raises:
        ScopeNameError: If a literal template has no explicit scope name.
    """
    scope_name = template.options.scope_name
    if scope_name is False:
        return None
    if scope_name:
        return scope_name
    if template.path is None:
        msg = "A template literal used as a layout needs an explicit scope_name"
        raise ScopeNameError(msg)
    return template.path.name


def effective_vars(template: Template) -> Bindings:
    """Compose the bindings a template is rendered with.

    Bindings are layered as follows (later layers override earlier ones):
    1. One sub-mapping per ancestor, keyed by the ancestor's scope key. When
       two ancestors share a key, the outermost one wins.
    2. The template's own merged variables.

    Args:
        template: The template about to be rendered.

    Returns:
        A new bindings dictionary.
    """
    scopes: Bindings = {}
    ancestor = template.parent
    while ancestor is not None:
        key = scope_key(ancestor)
        if key is not None:
            scopes[key] = merged_vars(ancestor)
        ancestor = ancestor.parent
    return {**scopes, **merged_vars(template)}
