"""mustache-layout exceptions."""

from __future__ import annotations

from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from pathlib import Path

PLUGIN_NAME = "mustache-layout"


class LayoutError(Exception):
    """Base exception for mustache-layout errors.

    Attributes:
        plugin: Name of the plugin that raised the error, used to tag failures
            reported to a pipeline.
    """

    plugin: str = PLUGIN_NAME

    def __str__(self) -> str:
        return f"[{self.plugin}] {super().__str__()}"


# =============================================================================
# Loading Exceptions
# =============================================================================


class TemplateReadError(LayoutError, OSError):
    """Raised when a template, partial, or variable file cannot be read."""

    def __init__(self, message: str, *, path: Path | None = None) -> None:
        """Initialize with error message and the path that failed."""
        super().__init__(message)
        self.path: Path | None = path


class VarLoaderExecutionError(LayoutError):
    """Raised when a variable loader or its parser raises.

    Attributes:
        path: Path of the template the loader was run for.
    """

    def __init__(self, message: str, *, path: Path | None = None) -> None:
        super().__init__(message)
        self.path: Path | None = path


class LiteralTemplateError(LayoutError):
    """Raised when a path-only operation is invoked on a literal template."""


class ScopeNameError(LayoutError):
    """Raised when an ancestor template has no usable scope name."""


class ConfigLoadError(LayoutError):
    """Raised when configuration cannot be loaded or parsed."""

    def __init__(
        self,
        message: str,
        *,
        path: Path | None = None,
        line: int | None = None,
        column: int | None = None,
    ) -> None:
        """Initialize with error message and optional location context."""
        super().__init__(message)
        self.path: Path | None = path
        self.line: int | None = line
        self.column: int | None = column


# =============================================================================
# Rendering Exceptions
# =============================================================================


class RenderError(LayoutError):
    """Raised when a render step fails.

    Attributes:
        template: Path of the template being rendered, or None for a literal.
    """

    def __init__(self, message: str, *, template: Path | None = None) -> None:
        """Initialize with error message and template context.

        Args:
            message: Human-readable error message.
            template: Path of the template being rendered.
        """
        super().__init__(message)
        self.template: Path | None = template


class MissingYieldError(RenderError):
    """Raised when `{{> yield}}` is rendered without wrapped content."""


class UnresolvablePartialError(RenderError):
    """Raised when a literal template references a file partial."""

    def __init__(self, message: str, *, partial: str) -> None:
        super().__init__(message)
        self.partial: str = partial


class PartialReadError(RenderError):
    """Raised when a referenced partial file cannot be read.

    Attributes:
        partial: The partial name as written in the template.
        path: The file the partial name resolved to.
    """

    def __init__(
        self,
        message: str,
        *,
        partial: str,
        path: Path,
        template: Path | None = None,
    ) -> None:
        super().__init__(message, template=template)
        self.partial: str = partial
        self.path: Path = path


class UnsupportedInputError(RenderError):
    """Raised for streamed (non-materialized) pipeline entries."""
