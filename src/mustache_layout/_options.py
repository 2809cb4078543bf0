"""Options for template chains and render streams."""

from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass, fields
from typing import TYPE_CHECKING, Any, Literal, TypeVar

if TYPE_CHECKING:
    from mustache_layout._loaders import AnyVarLoader

T = TypeVar("T", bound="GlobalOptions")


@dataclass(slots=True, frozen=True)
class GlobalOptions:
    """Defaults applied to every template created by a plugin instance.

    Attributes:
        var_loader: Loader providing per-template variables, merged under
            explicitly declared ``vars``.
        vars: Default bindings declared on every template.
    """

    var_loader: AnyVarLoader | None = None
    vars: Mapping[str, Any] | None = None


@dataclass(slots=True, frozen=True)
class ChainOptions(GlobalOptions):
    """Options for one link of a template chain.

    Attributes:
        scope_name: Name under which this template's variables are visible to
            inner templates. None uses the template's file name; False hides
            the template's variables from inner templates entirely.
    """

    scope_name: str | Literal[False] | None = None


@dataclass(slots=True, frozen=True)
class StreamOptions(ChainOptions):
    """Options for the innermost template rendered from each pipeline entry.

    Attributes:
        output_name: Base name of rendered files. Defaults to the input name.
        output_extension: Extension of rendered files. Defaults to ``.htm``.
    """

    output_name: str | None = None
    output_extension: str | None = None


def merge_options(
    target: type[T],
    *layers: GlobalOptions | None,
) -> T:
    """Merge option layers into a single options object.

    Later layers override earlier ones field by field; a field left at None in
    a later layer keeps the earlier value. ``vars`` mappings are merged
    shallowly rather than replaced.

    Args:
        target: Options class to build.
        layers: Option objects in increasing order of precedence.

    Returns:
        A new ``target`` instance.
    """
    names = {f.name for f in fields(target)}
    values: dict[str, Any] = {}
    merged_vars: dict[str, Any] = {}
    for layer in layers:
        if layer is None:
            continue
        for f in fields(layer):
            if f.name not in names:
                continue
            value = getattr(layer, f.name)
            if f.name == "vars":
                merged_vars.update(value or {})
            elif value is not None:
                values[f.name] = value
    return target(**values, vars=merged_vars)

