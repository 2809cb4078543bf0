from pathlib import Path

import pytest

from mustache_layout.exceptions import (
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


class TestLayoutError:
    def test_message_is_prefixed_with_plugin_name(self) -> None:
        assert str(LayoutError("boom")) == f"[{PLUGIN_NAME}] boom"

    def test_args_keep_bare_message(self) -> None:
        assert LayoutError("boom").args == ("boom",)

    @pytest.mark.parametrize(
        "error_type",
        [
            TemplateReadError,
            VarLoaderExecutionError,
            LiteralTemplateError,
            ScopeNameError,
            ConfigLoadError,
            RenderError,
            MissingYieldError,
            UnsupportedInputError,
        ],
    )
    def test_all_errors_derive_from_layout_error(
        self, error_type: type[LayoutError]
    ) -> None:
        assert issubclass(error_type, LayoutError)


class TestRenderErrors:
    def test_render_error_carries_template(self) -> None:
        error = RenderError("x", template=Path("a.mustache"))
        assert error.template == Path("a.mustache")

    def test_missing_yield_is_render_error(self) -> None:
        assert issubclass(MissingYieldError, RenderError)

    def test_unresolvable_partial(self) -> None:
        error = UnresolvablePartialError("x", partial="nav")

        assert error.partial == "nav"
        assert error.template is None

    def test_partial_read_error(self) -> None:
        error = PartialReadError(
            "x",
            partial="./nav",
            path=Path("l/nav.mustache"),
            template=Path("l/site.mustache"),
        )

        assert error.partial == "./nav"
        assert error.path == Path("l/nav.mustache")
        assert error.template == Path("l/site.mustache")


class TestLoadErrors:
    def test_template_read_error_is_os_error(self) -> None:
        error = TemplateReadError("x", path=Path("a"))

        assert isinstance(error, OSError)
        assert error.path == Path("a")

    def test_config_load_error_location(self) -> None:
        error = ConfigLoadError("x", path=Path("c.toml"), line=3, column=7)

        assert (error.path, error.line, error.column) == (Path("c.toml"), 3, 7)
