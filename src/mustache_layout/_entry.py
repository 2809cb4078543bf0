"""File entries flowing through a render pipeline."""

from __future__ import annotations

import io
from dataclasses import dataclass, field
from pathlib import Path
from typing import BinaryIO

from mustache_layout._io import read_optional_text

type EntryContents = bytes | BinaryIO | None


@dataclass(slots=True)
class FileEntry:
    """A file travelling through a pipeline.

    An entry holds either a materialized byte buffer, a live binary stream, or
    nothing at all (a null entry, e.g. a directory matched by a glob). Renderers
    mutate ``path`` and ``contents`` in place for entries they accept.

    Attributes:
        path: Logical path of the file.
        contents: Byte buffer, binary stream, or None for a null entry.
        base: Base directory the entry was collected from; used to compute
            the entry's path relative to an output directory.
    """

    path: Path
    contents: EntryContents = None
    base: Path | None = field(default=None)

    def __post_init__(self) -> None:
        self.path = Path(self.path)

    @classmethod
    def from_path(cls, path: str | Path, *, base: Path | None = None) -> FileEntry:
        """Create a buffer entry by reading a file.

        Directories and missing files produce a null entry.

        Raises:
            TemplateReadError: If the file exists but cannot be read.
        """
        path = Path(path)
        if path.is_dir():
            return cls(path=path, base=base)
        text = read_optional_text(path)
        contents = text.encode("utf-8") if text is not None else None
        return cls(path=path, contents=contents, base=base)

    def is_null(self) -> bool:
        return self.contents is None

    def is_buffer(self) -> bool:
        return isinstance(self.contents, bytes | bytearray)

    def is_stream(self) -> bool:
        return isinstance(self.contents, io.IOBase)

    @property
    def basename(self) -> str:
        return self.path.name

    @property
    def stem(self) -> str:
        return self.path.stem

    @property
    def extname(self) -> str:
        return self.path.suffix

    @property
    def dirname(self) -> Path:
        return self.path.parent

    @property
    def relative(self) -> Path:
        """Path relative to ``base``, or the bare file name without one."""
        if self.base is None:
            return Path(self.path.name)
        return self.path.relative_to(self.base)

    def text(self) -> str:
        """Decode a buffer entry as UTF-8."""
        if not isinstance(self.contents, bytes | bytearray):
            msg = f"Entry {self.path} does not hold a byte buffer"
            raise TypeError(msg)
        return bytes(self.contents).decode("utf-8")
