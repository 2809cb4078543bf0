"""Mustache expansion backed by chevron."""

from __future__ import annotations

from collections.abc import Callable, Iterator, Mapping
from typing import TYPE_CHECKING, cast

if TYPE_CHECKING:
    from mustache_layout._loaders import Bindings

type PartialLoader = Callable[[str], str]


class _PartialLookup(Mapping[str, str]):
    """Mapping view that resolves partials on demand.

    chevron looks partials up by subscription; resolving lazily means each
    ``{{> name}}`` reads its source at the point of use and resolver errors
    propagate unchanged.
    """

    __slots__ = ("_load",)

    def __init__(self, load: PartialLoader) -> None:
        self._load = load

    def __getitem__(self, name: str) -> str:
        return self._load(name)

    def __iter__(self) -> Iterator[str]:
        return iter(())

    def __len__(self) -> int:
        return 0


def expand(text: str, bindings: Bindings, load_partial: PartialLoader) -> str:
    """Expand a Mustache template.

    Args:
        text: Template source.
        bindings: Variables visible to the template.
        load_partial: Called with the name of each referenced partial; returns
            the partial's source.

    Returns:
        The expanded text.
    """
    import chevron  # noqa: PLC0415

    return cast(
        "str",
        chevron.render(
            template=text,
            data=bindings,
            partials_dict=_PartialLookup(load_partial),
            partials_path=None,
        ),
    )
