# pyright: reportAny=false, reportExplicitAny=false
"""Auxiliary variable loaders.

A variable loader supplies the bindings stored alongside a template, typically
in a sidecar file such as ``page.toml`` next to ``page.mustache``. Loaders come
in two forms:

- A ``VarLoader``: a ``path_for`` / ``parse`` pair. The sidecar file is read
  by this module; a missing file yields empty bindings.
- A plain callable taking the template's ``TemplatePath`` and returning a
  mapping. The callable does its own I/O.
"""

from __future__ import annotations

import tomllib
from collections.abc import Callable, Mapping
from dataclasses import dataclass
from typing import TYPE_CHECKING, Any, Protocol, runtime_checkable

import yaml

from mustache_layout._io import read_optional_text
from mustache_layout.exceptions import LayoutError, VarLoaderExecutionError

if TYPE_CHECKING:
    from pathlib import Path

    from mustache_layout._paths import TemplatePath

type TemplatePrimitive = str | int | float | bool | None
type TemplateValue = (
    TemplatePrimitive | list[TemplateValue] | dict[str, TemplateValue]
)
type Bindings = dict[str, Any]


@runtime_checkable
class VarLoader(Protocol):
    """Loads template variables from an auxiliary file."""

    def path_for(self, template: TemplatePath) -> Path:
        """Return the auxiliary file holding variables for ``template``."""
        ...

    def parse(self, text: str) -> Mapping[str, Any]:
        """Parse the auxiliary file's text into bindings."""
        ...


type VarReader = Callable[[TemplatePath], Mapping[str, Any]]
type AnyVarLoader = VarLoader | VarReader


@dataclass(slots=True, frozen=True)
class TomlVarLoader:
    """Reads variables from a TOML file beside the template.

    Attributes:
        suffix: Extension of the sidecar file.
    """

    suffix: str = ".toml"

    def path_for(self, template: TemplatePath) -> Path:
        return template.dir / (template.name + self.suffix)

    def parse(self, text: str) -> Mapping[str, Any]:
        return tomllib.loads(text)


@dataclass(slots=True, frozen=True)
class YamlVarLoader:
    """Reads variables from a YAML file beside the template."""

    suffix: str = ".yaml"

    def path_for(self, template: TemplatePath) -> Path:
        return template.dir / (template.name + self.suffix)

    def parse(self, text: str) -> Mapping[str, Any]:
        data = yaml.safe_load(text)
        if data is None:
            return {}
        if not isinstance(data, dict):
            msg = f"expected a mapping at the top level, got {type(data).__name__}"
            raise TypeError(msg)
        return data


def load_vars(loader: AnyVarLoader | None, template: TemplatePath) -> Bindings:
    """Run a variable loader for a template.

    Args:
        loader: The loader to run, or None for no loader.
        template: Path of the template the variables belong to.

    Returns:
        A new dictionary of bindings. Empty if there is no loader or the
        loader's sidecar file does not exist.

    Raises:
        TemplateReadError: If the sidecar file exists but cannot be read.
        VarLoaderExecutionError: If the loader or its parser raises, or does
            not return a mapping.
    """
    if loader is None:
        return {}

    if isinstance(loader, VarLoader):
        var_path = loader.path_for(template)
        text = read_optional_text(var_path)
        if text is None:
            return {}
        loaded = _call_loader(loader.parse, text, template=template, source=var_path)
    else:
        loaded = _call_loader(loader, template, template=template, source=None)

    if not isinstance(loaded, Mapping):
        msg = (
            f"While executing var loader for {template}: "
            f"expected a mapping, got {type(loaded).__name__}"
        )
        raise VarLoaderExecutionError(msg, path=template.full)
    return dict(loaded)


def _call_loader(
    fn: Callable[[Any], Any],
    arg: object,
    *,
    template: TemplatePath,
    source: Path | None,
) -> Any:
    try:
        return fn(arg)
    except LayoutError:
        raise
    except Exception as e:
        where = f" ({source})" if source is not None else ""
        msg = f"While executing var loader for {template}{where}: {e}"
        raise VarLoaderExecutionError(msg, path=template.full) from e


def resolve_var_loader(name: str) -> AnyVarLoader | None:
    """Look up a built-in loader by its configuration name.

    Args:
        name: One of ``"none"``, ``"toml"``, or ``"yaml"``.

    Raises:
        ValueError: If the name is unknown.
    """
    loaders: dict[str, AnyVarLoader | None] = {
        "none": None,
        "toml": TomlVarLoader(),
        "yaml": YamlVarLoader(),
    }
    try:
        return loaders[name]
    except KeyError:
        msg = f"Unknown var loader {name!r}; expected one of {sorted(loaders)}"
        raise ValueError(msg) from None
