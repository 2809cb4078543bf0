"""Template path handling and file naming conventions."""

from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path

TEMPLATE_EXTENSION = ".mustache"
DEFAULT_OUTPUT_EXTENSION = ".htm"
PARTIAL_PREFIX = "_"
YIELD_PARTIAL = "yield"
RELATIVE_PARTIAL_MARKER = "./"


@dataclass(slots=True, frozen=True)
class TemplatePath:
    """Origin of a file-backed template.

    Attributes:
        full: The path as given by the caller.
        dir: Directory containing the template.
        name: File name without extension; the default scope key.
        ext: Extension including the leading dot.
    """

    full: Path
    dir: Path
    name: str
    ext: str

    @classmethod
    def parse(cls, path: str | Path) -> TemplatePath:
        """Decompose a path into its directory, name, and extension."""
        full = Path(path)
        return cls(full=full, dir=full.parent, name=full.stem, ext=full.suffix)

    @property
    def base(self) -> str:
        """File name including the extension."""
        return self.name + self.ext

    def __str__(self) -> str:
        return str(self.full)


def is_template_file(path: str | Path) -> bool:
    """Check whether a path carries the template extension."""
    return Path(path).suffix == TEMPLATE_EXTENSION


def is_partial_source(path: str | Path) -> bool:
    """Check whether a file is a partial source that must not render on its own."""
    return Path(path).name.startswith(PARTIAL_PREFIX)


def partial_file_path(name: str, template_dir: Path | None) -> Path:
    """Resolve a partial name to the file holding it.

    Names starting with ``./`` resolve against ``template_dir``; every other
    name resolves against the current working directory.

    Args:
        name: Partial name as written in ``{{> name}}``.
        template_dir: Directory of the template referencing the partial.

    Returns:
        Path of the partial file, with the template extension appended.
    """
    file_name = name + TEMPLATE_EXTENSION
    if template_dir is not None and name.startswith(RELATIVE_PARTIAL_MARKER):
        return template_dir / file_name
    return Path.cwd() / file_name


def output_path(
    source: TemplatePath,
    *,
    output_name: str | None = None,
    output_extension: str | None = None,
) -> Path:
    """Build the rendered file path for a source template.

    Args:
        source: The template the entry was loaded from.
        output_name: Base name of the rendered file. Defaults to the source name.
        output_extension: Extension of the rendered file. Defaults to ``.htm``.

    Returns:
        Output path located in the source directory.
    """
    name = output_name if output_name else source.name
    ext = output_extension if output_extension else DEFAULT_OUTPUT_EXTENSION
    return source.dir / (name + ext)
