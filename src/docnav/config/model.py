"""Configuration model and derived helpers."""

from __future__ import annotations

from dataclasses import dataclass, field
from pathlib import Path

from docnav.errors import ConfigurationError
from docnav.locales import DEFAULT_HOME_TITLE, Locale, LocaleRegistry

DEFAULT_LOCALE_ID = "root"


@dataclass(frozen=True)
class LocaleOptions:
    """Per-locale options as written in the config file."""

    id: str
    prefix: str | None = None
    root: str | None = None
    nav: dict[str, str] = field(default_factory=dict, hash=False)
    home_title: str | None = None


@dataclass(frozen=True)
class SiteOptions:
    """Resolved, immutable options for one navigation build."""

    document_root_path: Path = field(default_factory=lambda: Path("docs"))
    collapsed: bool = False
    capitalize_first: bool = True
    use_title_from_frontmatter: bool = True
    use_title_from_file_heading: bool = False
    sort_menus_by_frontmatter_order: bool = True
    hyphen_to_space: bool = False
    underscore_to_space: bool = False
    index_name: str = "index"
    document_extensions: tuple[str, ...] = (".md",)
    exclude: tuple[str, ...] = ()
    locales: tuple[LocaleOptions, ...] = ()
    default_locale: str | None = None
    rewrites: dict[str, str] = field(default_factory=dict, hash=False)
    workers: int = 1

    def effective_locales(self) -> tuple[LocaleOptions, ...]:
        """Configured locales, or a single unprefixed one when none are set."""
        if self.locales:
            return self.locales
        return (LocaleOptions(id=self.default_locale or DEFAULT_LOCALE_ID),)

    def default_locale_id(self) -> str:
        """Id of the default locale; the first configured one unless named."""
        return self.default_locale or self.effective_locales()[0].id

    def build_registry(self) -> LocaleRegistry:
        """Create and populate the locale registry.

        Raises:
            ConfigurationError: If locales clash, a prefix is set on the
                default locale or left empty on another one, or the default
                is unknown.
        """
        default_id = self.default_locale_id()
        registry = LocaleRegistry()
        for options in self.effective_locales():
            is_default = options.id == default_id
            prefix = self._url_prefix(options, is_default)
            root = options.root if options.root is not None else prefix
            registry.register(
                Locale(
                    id=options.id,
                    is_default=is_default,
                    url_prefix=prefix,
                    display_labels=options.nav,
                    root=root.strip("/"),
                    home_title=options.home_title or DEFAULT_HOME_TITLE,
                )
            )
        # Raises UnknownLocaleError when default_locale names no locale
        registry.resolve(default_id)
        return registry

    @staticmethod
    def _url_prefix(options: LocaleOptions, is_default: bool) -> str:
        if options.prefix is None:
            return "" if is_default else options.id
        prefix = options.prefix.strip("/")
        if is_default and prefix:
            raise ConfigurationError(
                f"'locales.{options.id}.prefix' must not be set on the default "
                f"locale, got {options.prefix!r}"
            )
        if not is_default and not prefix:
            raise ConfigurationError(
                f"'locales.{options.id}.prefix' must not be empty"
            )
        return prefix

    def locale_root(self, locale: Locale) -> Path:
        """Filesystem directory holding a locale's documents."""
        if not locale.root:
            return self.document_root_path
        return self.document_root_path / locale.root
