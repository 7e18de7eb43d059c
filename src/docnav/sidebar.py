"""Sidebar tree builder.

Folds the flat, discovery-ordered descriptors of one locale into nested
groups mirroring the directory structure. A directory's index page
becomes the group's own link instead of one of its children.
"""

from __future__ import annotations

import math
from dataclasses import dataclass, field
from typing import TypedDict

from docnav.config.model import SiteOptions
from docnav.frontmatter import frontmatter_collapsed
from docnav.locales import Locale
from docnav.paths import PathResolver
from docnav.scanner import DocumentDescriptor, derive_title


class SidebarNodeDict(TypedDict, total=False):
    """Dictionary representation of a sidebar node."""

    title: str
    url: str | None
    collapsed: bool
    children: list[SidebarNodeDict]


@dataclass(frozen=True)
class Leaf:
    """Link to a single document."""

    title: str
    url: str

    def to_dict(self) -> SidebarNodeDict:
        """Convert to dictionary for JSON serialization."""
        return {"title": self.title, "url": self.url}


@dataclass(frozen=True)
class Group:
    """Directory section, optionally linking to its index page."""

    title: str
    url: str | None = None
    collapsed: bool = False
    children: tuple[SidebarNode, ...] = ()

    def to_dict(self) -> SidebarNodeDict:
        """Convert to dictionary for JSON serialization."""
        return {
            "title": self.title,
            "url": self.url,
            "collapsed": self.collapsed,
            "children": [child.to_dict() for child in self.children],
        }


SidebarNode = Leaf | Group


@dataclass
class _Directory:
    """Intermediate directory bucket used while folding."""

    name: str
    index: DocumentDescriptor | None = None
    items: list[DocumentDescriptor | _Directory] = field(default_factory=list)
    subdirs: dict[str, _Directory] = field(default_factory=dict)


class SidebarBuilder:
    """Builds the sidebar of one locale from its descriptors."""

    def __init__(self, resolver: PathResolver, options: SiteOptions) -> None:
        self._resolver = resolver
        self._options = options

    def build(
        self, locale: Locale, descriptors: tuple[DocumentDescriptor, ...]
    ) -> tuple[SidebarNode, ...]:
        """Fold descriptors into top-level sidebar nodes.

        Args:
            locale: Locale used to compute link targets.
            descriptors: Documents in discovery order.

        Returns:
            Top-level nodes; documents of the content root are siblings
            of the first-level groups.
        """
        root = _Directory(name="")
        for descriptor in descriptors:
            directory = self._directory_for(root, descriptor.directory)
            if descriptor.is_index and directory is not root and directory.index is None:
                directory.index = descriptor
            else:
                directory.items.append(descriptor)
        return self._fold(locale, root)

    def _directory_for(self, root: _Directory, path: str) -> _Directory:
        # Directories enter their parent's items on first sight, which is
        # the discovery position of their first document
        current = root
        if not path:
            return current
        for segment in path.split("/"):
            child = current.subdirs.get(segment)
            if child is None:
                child = _Directory(name=segment)
                current.subdirs[segment] = child
                current.items.append(child)
            current = child
        return current

    def _fold(self, locale: Locale, directory: _Directory) -> tuple[SidebarNode, ...]:
        items = list(directory.items)
        if self._options.sort_menus_by_frontmatter_order:
            # Stable sort: ordered items ascending, then unordered ones in
            # discovery order; ties keep discovery order too
            items.sort(key=self._sort_key)
        return tuple(self._node(locale, item) for item in items)

    def _sort_key(self, item: DocumentDescriptor | _Directory) -> tuple[int, int | float]:
        order = item.order if isinstance(item, DocumentDescriptor) else _group_order(item)
        # Malformed positions sort as unordered
        if isinstance(order, bool) or not isinstance(order, (int, float)) or math.isnan(order):
            return (1, 0)
        return (0, order)

    def _node(self, locale: Locale, item: DocumentDescriptor | _Directory) -> SidebarNode:
        if isinstance(item, DocumentDescriptor):
            return Leaf(
                title=item.title,
                url=self._resolver.to_url(locale, item.logical_path),
            )

        collapsed = self._options.collapsed
        if item.index is None:
            title = derive_title(item.name, self._options)
            url = None
        else:
            title = item.index.title
            url = self._resolver.to_url(locale, item.index.logical_path)
            override = frontmatter_collapsed(item.index.frontmatter)
            if override is not None:
                collapsed = override
        return Group(
            title=title,
            url=url,
            collapsed=collapsed,
            children=self._fold(locale, item),
        )


def _group_order(directory: _Directory) -> int | float | None:
    if directory.index is None:
        return None
    return directory.index.order
