"""Shared test helpers."""

from __future__ import annotations

from collections.abc import Callable
from pathlib import Path

import pytest

from docnav.config import SiteOptions
from docnav.locales import Locale, LocaleRegistry
from docnav.paths import PathResolver
from docnav.tree import Entry, FileSystemTree


class FailingTree(FileSystemTree):
    """File system tree whose listed paths raise PermissionError."""

    def __init__(self, root: Path, unreadable: set[str]) -> None:
        super().__init__(root)
        self.unreadable = unreadable

    def list_entries(self, path: str) -> list[Entry]:
        if path in self.unreadable:
            raise PermissionError(13, "Permission denied", path)
        return super().list_entries(path)

    def read_file(self, path: str) -> bytes:
        if path in self.unreadable:
            raise PermissionError(13, "Permission denied", path)
        return super().read_file(path)


@pytest.fixture
def make_tree(tmp_path: Path) -> Callable[..., Path]:
    """Write a {relative path: content} mapping below tmp_path."""

    def _make(files: dict[str, str], root: str = "docs") -> Path:
        base = tmp_path / root
        base.mkdir(parents=True, exist_ok=True)
        for rel, content in files.items():
            path = base / rel
            path.parent.mkdir(parents=True, exist_ok=True)
            path.write_text(content, encoding="utf-8")
        return base

    return _make


@pytest.fixture
def en() -> Locale:
    return Locale(id="en", is_default=True)


@pytest.fixture
def zh() -> Locale:
    return Locale(id="zh", url_prefix="zh", root="zh")


@pytest.fixture
def registry(en: Locale, zh: Locale) -> LocaleRegistry:
    return LocaleRegistry([en, zh])


@pytest.fixture
def resolver(registry: LocaleRegistry) -> PathResolver:
    return PathResolver(registry)


@pytest.fixture
def options() -> SiteOptions:
    return SiteOptions()


@pytest.fixture
def failing_tree() -> type[FailingTree]:
    return FailingTree
