"""Content tree access.

The scanner only needs two primitives: listing a directory and reading
a file. Paths are slash-separated and relative to the tree root, with
"" naming the root itself.
"""

from __future__ import annotations

import errno
from dataclasses import dataclass
from pathlib import Path
from typing import Protocol


@dataclass(frozen=True)
class Entry:
    """Directory entry."""

    name: str
    is_dir: bool


class ContentTree(Protocol):
    """Read-only view of a content tree. Both methods raise OSError."""

    def list_entries(self, path: str) -> list[Entry]: ...

    def read_file(self, path: str) -> bytes: ...


class FileSystemTree:
    """Content tree backed by a directory on disk."""

    def __init__(self, root: Path) -> None:
        self.root = root

    def _resolve(self, path: str) -> Path:
        return self.root / path if path else self.root

    def list_entries(self, path: str) -> list[Entry]:
        directory = self._resolve(path)
        self._check_cycle(path, directory)
        return [
            Entry(name=child.name, is_dir=child.is_dir())
            for child in directory.iterdir()
        ]

    def _check_cycle(self, path: str, directory: Path) -> None:
        """Refuse a directory that is one of its own ancestors through a symlink."""
        real = directory.resolve()
        segments = path.split("/") if path else []
        for depth in range(len(segments)):
            ancestor = self._resolve("/".join(segments[:depth]))
            if ancestor.resolve() == real:
                raise OSError(errno.ELOOP, "symlink cycle", path)

    def read_file(self, path: str) -> bytes:
        return self._resolve(path).read_bytes()

    def __repr__(self) -> str:
        return f"FileSystemTree({str(self.root)!r})"
