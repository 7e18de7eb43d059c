"""Content tree discovery.

Walks one locale's content root and produces document descriptors in
discovery order: within a directory, documents first (sorted by name),
then sub-directories (sorted by name), depth first.
"""

from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass, field
from fnmatch import fnmatchcase
from typing import Any

from docnav.config.model import SiteOptions
from docnav.errors import (
    MalformedUrlError,
    ParseError,
    RouteConflictError,
    ScanIOError,
    ScanIssue,
)
from docnav.frontmatter import (
    FrontmatterError,
    decode_document,
    extract_frontmatter,
    first_heading,
    frontmatter_order,
    frontmatter_title,
)
from docnav.locales import Locale
from docnav.paths import PathResolver
from docnav.tree import ContentTree, Entry

@dataclass(frozen=True)
class DocumentDescriptor:
    """A discovered document."""

    logical_path: str
    frontmatter: Mapping[str, Any] = field(hash=False)
    title: str
    order: int | float | None = None
    is_index: bool = False

    @property
    def directory(self) -> str:
        """Logical path of the enclosing directory; "" for the root."""
        return self.logical_path.rpartition("/")[0]


@dataclass(frozen=True)
class ScanResult:
    """Descriptors of one locale plus the problems met on the way."""

    descriptors: tuple[DocumentDescriptor, ...]
    warnings: tuple[ScanIssue, ...]


def derive_title(segment: str, options: SiteOptions) -> str:
    """Derive a display title from a file or directory name.

    Examples:
        "getting-started" -> "Getting-started" (with default options)
        "getting-started" -> "Getting started" (with hyphen_to_space)
    """
    title = segment
    if options.hyphen_to_space:
        title = title.replace("-", " ")
    if options.underscore_to_space:
        title = title.replace("_", " ")
    if options.capitalize_first:
        title = title[:1].upper() + title[1:]
    return title


def _join(directory: str, name: str) -> str:
    return f"{directory}/{name}" if directory else name


class ContentScanner:
    """Discovers the documents of one locale."""

    def __init__(self, resolver: PathResolver, options: SiteOptions) -> None:
        self._resolver = resolver
        self._options = options

    def scan(
        self,
        locale: Locale,
        tree: ContentTree,
        skip_dirs: frozenset[str] = frozenset(),
    ) -> ScanResult:
        """Walk a locale's content tree.

        Args:
            locale: Locale the tree belongs to.
            tree: Content tree rooted at the locale's document root.
            skip_dirs: Root-relative directories to leave out, such as the
                roots of other locales nested inside this one.

        Returns:
            ScanResult with descriptors in discovery order. Unreadable
            entries and malformed frontmatter are reported as warnings.

        Raises:
            ScanIOError: If the root itself cannot be listed.
        """
        try:
            entries = tree.list_entries("")
        except OSError as exc:
            raise ScanIOError(str(tree), f"cannot list content root: {exc}") from exc

        descriptors: list[DocumentDescriptor] = []
        warnings: list[ScanIssue] = []
        self._walk(locale, tree, "", entries, skip_dirs, descriptors, warnings)
        return ScanResult(descriptors=tuple(descriptors), warnings=tuple(warnings))

    def _walk(
        self,
        locale: Locale,
        tree: ContentTree,
        directory: str,
        entries: list[Entry],
        skip_dirs: frozenset[str],
        descriptors: list[DocumentDescriptor],
        warnings: list[ScanIssue],
    ) -> None:
        files: list[tuple[str, str]] = []
        subdirs: list[str] = []
        for entry in entries:
            if entry.name.startswith("."):
                continue
            path = _join(directory, entry.name)
            if self._is_excluded(path):
                continue
            if entry.is_dir:
                if path not in skip_dirs:
                    subdirs.append(entry.name)
                continue
            stem = self._document_stem(entry.name)
            if stem is not None:
                files.append((entry.name, stem))

        claimed: dict[str, str] = {}
        for name, stem in sorted(files):
            path = _join(directory, name)
            if stem in claimed:
                # a.md and a.markdown share the logical path "a"
                warnings.append(
                    RouteConflictError(
                        path,
                        f"logical path '{_join(directory, stem)}' is already "
                        f"used by {claimed[stem]}",
                    )
                )
                continue
            claimed[stem] = path
            descriptor = self._read_document(
                locale, tree, path, _join(directory, stem), warnings
            )
            if descriptor is not None:
                descriptors.append(descriptor)

        for name in sorted(subdirs):
            path = _join(directory, name)
            try:
                children = tree.list_entries(path)
            except OSError as exc:
                warnings.append(ScanIOError(path, f"cannot list directory: {exc}"))
                continue
            self._walk(locale, tree, path, children, skip_dirs, descriptors, warnings)

    def _document_stem(self, name: str) -> str | None:
        for extension in self._options.document_extensions:
            if name.endswith(extension) and len(name) > len(extension):
                return name[: -len(extension)]
        return None

    def _is_excluded(self, path: str) -> bool:
        return any(fnmatchcase(path, pattern) for pattern in self._options.exclude)

    def _read_document(
        self,
        locale: Locale,
        tree: ContentTree,
        path: str,
        logical_path: str,
        warnings: list[ScanIssue],
    ) -> DocumentDescriptor | None:
        try:
            self._resolver.to_url(locale, logical_path)
        except MalformedUrlError as exc:
            warnings.append(RouteConflictError(path, str(exc)))
            return None

        try:
            data = tree.read_file(path)
        except OSError as exc:
            warnings.append(ScanIOError(path, f"cannot read file: {exc}"))
            return None

        try:
            frontmatter = extract_frontmatter(data)
        except FrontmatterError as exc:
            warnings.append(ParseError(path, str(exc)))
            frontmatter = {}

        try:
            order = frontmatter_order(frontmatter)
        except FrontmatterError as exc:
            warnings.append(ParseError(path, str(exc)))
            order = None

        segments = logical_path.split("/")
        is_index = segments[-1] == self._resolver.index_name
        return DocumentDescriptor(
            logical_path=logical_path,
            frontmatter=frontmatter,
            title=self._title(locale, segments, is_index, frontmatter, data),
            order=order,
            is_index=is_index,
        )

    def _title(
        self,
        locale: Locale,
        segments: list[str],
        is_index: bool,
        frontmatter: Mapping[str, Any],
        data: bytes,
    ) -> str:
        options = self._options
        if options.use_title_from_frontmatter:
            title = frontmatter_title(frontmatter)
            if title:
                return title
        if options.use_title_from_file_heading:
            try:
                heading = first_heading(decode_document(data))
            except FrontmatterError:
                heading = None
            if heading:
                return heading
        if not is_index:
            return derive_title(segments[-1], options)
        if len(segments) > 1:
            # An index page stands for its directory
            return derive_title(segments[-2], options)
        return locale.home_title
