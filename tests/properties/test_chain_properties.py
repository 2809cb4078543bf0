from hypothesis import given, strategies as st
from structlog.typing import FilteringBoundLogger

from mustache_layout import ChainOptions, MustacheLayout, Template
from mustache_layout.utils import create_logger

_LOGGER: FilteringBoundLogger = create_logger(level="error")

scope_names = st.from_regex(r"[a-z][a-z0-9_]{0,8}", fullmatch=True)
plain_text = st.text(
    alphabet=st.characters(
        categories=["L", "Nd"], max_codepoint=0x2FF, include_characters="{}<>&=#/ "
    ),
    max_size=20,
)


def _leaf(layout: MustacheLayout, body: str) -> Template:
    return layout.literal("{{{body}}}", ChainOptions(vars={"body": body}))


def _chain(layout: MustacheLayout, names: list[str]) -> Template:
    chain = layout.literal(
        f"<{names[0]}>{{{{> yield}}}}</{names[0]}>",
        ChainOptions(scope_name=names[0]),
    )
    for name in names[1:]:
        chain = chain.wrap(
            layout.literal(
                f"<{name}>{{{{> yield}}}}</{name}>", ChainOptions(scope_name=name)
            )
        )
    return chain


@given(names=st.lists(scope_names, min_size=1, max_size=6), body=plain_text)
def test_chain_of_depth_n_wraps_body_n_times(names: list[str], body: str) -> None:
    layout = MustacheLayout(logger=_LOGGER)
    chain = _chain(layout, names)

    output = chain.wrap(_leaf(layout, body)).render()

    opening = "".join(f"<{n}>" for n in names)
    closing = "".join(f"</{n}>" for n in reversed(names))
    assert output == opening + body + closing


@given(names=st.lists(scope_names, min_size=1, max_size=6), body=plain_text)
def test_rendering_is_idempotent(names: list[str], body: str) -> None:
    layout = MustacheLayout(logger=_LOGGER)
    leaf = _chain(layout, names).wrap(_leaf(layout, body))

    assert leaf.render() == leaf.render()


@given(
    names=st.lists(scope_names, min_size=1, max_size=5, unique=True),
    values=st.lists(plain_text, min_size=5, max_size=5),
)
def test_each_ancestor_is_visible_only_under_its_scope(
    names: list[str], values: list[str]
) -> None:
    layout = MustacheLayout(logger=_LOGGER)
    chain: Template | None = None
    for name, value in zip(names, values, strict=False):
        node = layout.literal(
            "{{> yield}}", ChainOptions(scope_name=name, vars={"value": value})
        )
        chain = node if chain is None else chain.wrap(node)
    assert chain is not None

    bindings = chain.wrap(layout.literal("")).effective_vars()

    assert set(bindings) == set(names)
    for name, value in zip(names, values, strict=False):
        assert bindings[name] == {"value": value}


@given(
    names=st.lists(scope_names, min_size=2, max_size=5, unique=True),
    data=st.data(),
)
def test_disabling_a_scope_removes_only_that_ancestor(
    names: list[str], data: st.DataObject
) -> None:
    hidden = data.draw(st.sampled_from(names))
    layout = MustacheLayout(logger=_LOGGER)
    chain: Template | None = None
    for name in names:
        scope = False if name == hidden else name
        node = layout.literal(
            "{{> yield}}", ChainOptions(scope_name=scope, vars={"n": name})
        )
        chain = node if chain is None else chain.wrap(node)
    assert chain is not None

    bindings = chain.wrap(layout.literal("")).effective_vars()

    assert set(bindings) == set(names) - {hidden}


@given(
    own=st.dictionaries(scope_names, plain_text, max_size=5),
    outer=st.dictionaries(scope_names, plain_text, max_size=5),
)
def test_own_vars_are_never_changed_by_ancestors(
    own: dict[str, str], outer: dict[str, str]
) -> None:
    layout = MustacheLayout(logger=_LOGGER)
    parent = layout.literal(
        "{{> yield}}", ChainOptions(scope_name="__outer", vars=outer)
    )
    leaf = parent.wrap(layout.literal("", ChainOptions(vars=own)))

    bindings = leaf.effective_vars()

    for key, value in own.items():
        assert bindings[key] == value
    assert bindings["__outer"] == outer
