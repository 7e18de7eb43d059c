"""Main navigation assembly orchestration."""

from __future__ import annotations

import json
from collections.abc import Mapping
from concurrent.futures import ThreadPoolExecutor
from dataclasses import dataclass
from pathlib import Path
from typing import Any

from docnav.config.model import SiteOptions
from docnav.errors import (
    AssemblyError,
    ConfigurationError,
    MalformedUrlError,
    ScanIOError,
    ScanIssue,
)
from docnav.locales import Locale, LocaleRegistry
from docnav.paths import PathResolver
from docnav.scanner import ContentScanner
from docnav.sidebar import SidebarBuilder, SidebarNode
from docnav.tree import ContentTree, FileSystemTree


@dataclass(frozen=True)
class NavEntry:
    """Top navigation bar link."""

    label: str
    url: str

    def to_dict(self) -> dict[str, str]:
        """Convert to dictionary for JSON serialization."""
        return {"label": self.label, "url": self.url}


@dataclass(frozen=True)
class LocaleNavigation:
    """Everything built for a single locale."""

    sidebar: tuple[SidebarNode, ...]
    top_nav: tuple[NavEntry, ...]
    warnings: tuple[ScanIssue, ...]


@dataclass(frozen=True)
class NavigationConfig:
    """Navigation of every locale, keyed by locale id in registration order."""

    sidebar: Mapping[str, tuple[SidebarNode, ...]]
    top_nav: Mapping[str, tuple[NavEntry, ...]]
    warnings: Mapping[str, tuple[ScanIssue, ...]]

    @property
    def locales(self) -> list[str]:
        return list(self.sidebar)

    def all_warnings(self) -> list[ScanIssue]:
        """Warnings of all locales, in locale order."""
        return [issue for issues in self.warnings.values() for issue in issues]

    def to_dict(self) -> dict[str, Any]:
        """Convert to dictionary for JSON serialization."""
        return {
            "locales": [
                {
                    "locale": locale_id,
                    "topNav": [entry.to_dict() for entry in self.top_nav[locale_id]],
                    "sidebar": [node.to_dict() for node in self.sidebar[locale_id]],
                    "warnings": [issue.to_dict() for issue in self.warnings[locale_id]],
                }
                for locale_id in self.sidebar
            ]
        }

    def to_json(self) -> str:
        """Serialize with a stable field order."""
        return json.dumps(self.to_dict(), indent=2, ensure_ascii=False) + "\n"


def _is_external(target: str) -> bool:
    return target.startswith("/") or "://" in target


class SiteConfigAssembler:
    """Runs scan and build for each locale and assembles the result."""

    def __init__(self, resolver: PathResolver, options: SiteOptions) -> None:
        self._resolver = resolver
        self._options = options
        self._scanner = ContentScanner(resolver, options)
        self._builder = SidebarBuilder(resolver, options)

    def assemble(
        self,
        registry: LocaleRegistry,
        roots: Mapping[str, ContentTree],
        skip_dirs: Mapping[str, frozenset[str]] | None = None,
        strict: bool = False,
    ) -> NavigationConfig:
        """Build the navigation of every registered locale.

        Args:
            registry: Fully populated locale registry.
            roots: Content tree of each locale, keyed by locale id.
            skip_dirs: Root-relative directories to leave out per locale.
            strict: Raise instead of returning when warnings were recorded.

        Returns:
            NavigationConfig with sidebars, top navigation and warnings.

        Raises:
            ConfigurationError: If a locale has no root or a nav label
                points to an unmappable path. Raised before any scan.
            AssemblyError: In strict mode, if any warning was recorded.
        """
        locales = list(registry)
        missing = [locale.id for locale in locales if locale.id not in roots]
        if missing:
            raise ConfigurationError(
                f"no content root for locale(s): {', '.join(missing)}"
            )
        top_navs = {locale.id: self._top_nav(locale) for locale in locales}
        skip_dirs = skip_dirs or {}

        def run(locale: Locale) -> LocaleNavigation:
            return self._build_locale(
                locale,
                roots[locale.id],
                skip_dirs.get(locale.id, frozenset()),
                top_navs[locale.id],
            )

        if self._options.workers > 1 and len(locales) > 1:
            with ThreadPoolExecutor(max_workers=self._options.workers) as pool:
                built = list(pool.map(run, locales))
        else:
            built = [run(locale) for locale in locales]

        result = NavigationConfig(
            sidebar={locale.id: nav.sidebar for locale, nav in zip(locales, built)},
            top_nav={locale.id: nav.top_nav for locale, nav in zip(locales, built)},
            warnings={locale.id: nav.warnings for locale, nav in zip(locales, built)},
        )
        if strict and result.all_warnings():
            raise AssemblyError(dict(result.warnings), result)
        return result

    def _top_nav(self, locale: Locale) -> tuple[NavEntry, ...]:
        entries: list[NavEntry] = []
        for target, label in locale.display_labels.items():
            if _is_external(target):
                entries.append(NavEntry(label=label, url=target))
                continue
            try:
                url = self._resolver.to_url(locale, target.strip("/"))
            except MalformedUrlError as exc:
                raise ConfigurationError(
                    f"nav entry {label!r} of locale '{locale.id}': {exc}"
                ) from None
            entries.append(NavEntry(label=label, url=url))
        return tuple(entries)

    def _build_locale(
        self,
        locale: Locale,
        tree: ContentTree,
        skip: frozenset[str],
        top_nav: tuple[NavEntry, ...],
    ) -> LocaleNavigation:
        try:
            scan = self._scanner.scan(locale, tree, skip)
        except ScanIOError as exc:
            return LocaleNavigation(sidebar=(), top_nav=top_nav, warnings=(exc,))
        sidebar = self._builder.build(locale, scan.descriptors)
        return LocaleNavigation(sidebar=sidebar, top_nav=top_nav, warnings=scan.warnings)


def nested_locale_dirs(registry: LocaleRegistry) -> dict[str, frozenset[str]]:
    """Find other locales' roots nested inside each locale's root.

    With the common ``docs/`` + ``docs/zh/`` layout the default locale
    must not pick up the translated pages as a "zh" section.
    """
    roots = {locale.id: locale.root for locale in registry}
    nested: dict[str, frozenset[str]] = {}
    for locale_id, root in roots.items():
        inner: set[str] = set()
        for other_id, other_root in roots.items():
            if other_id == locale_id or other_root == root:
                continue
            if not root:
                inner.add(other_root)
            elif other_root.startswith(f"{root}/"):
                inner.add(other_root[len(root) + 1 :])
        nested[locale_id] = frozenset(inner)
    return nested


def assemble_site(options: SiteOptions, strict: bool = False) -> NavigationConfig:
    """Build navigation for a site described by options.

    Constructs the registry, resolver and assembler in that order and
    scans each locale's directory under ``document_root_path``.

    Raises:
        ConfigurationError: If the locale setup or rewrites are invalid.
        AssemblyError: In strict mode, if any warning was recorded.
    """
    registry = options.build_registry()
    resolver = PathResolver(registry, options.rewrites, options.index_name)
    roots: dict[str, ContentTree] = {
        locale.id: FileSystemTree(options.locale_root(locale)) for locale in registry
    }
    assembler = SiteConfigAssembler(resolver, options)
    return assembler.assemble(
        registry,
        roots,
        skip_dirs=nested_locale_dirs(registry),
        strict=strict,
    )


def write_navigation(
    navigation: NavigationConfig, output_path: Path, dry_run: bool = False
) -> str:
    """Write the navigation JSON to disk.

    Args:
        navigation: Assembled navigation.
        output_path: Destination file.
        dry_run: If True, don't write anything.

    Returns:
        The serialized JSON (written or would-be).
    """
    content = navigation.to_json()
    if not dry_run:
        output_path.parent.mkdir(parents=True, exist_ok=True)
        output_path.write_text(content, encoding="utf-8")
    return content
