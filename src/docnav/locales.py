"""Supported locales and the registry that holds them."""

from __future__ import annotations

from collections.abc import Iterator, Mapping
from dataclasses import dataclass, field
from types import MappingProxyType

from docnav.errors import (
    ConfigurationError,
    DuplicateLocaleError,
    NoDefaultLocaleError,
    UnknownLocaleError,
)

DEFAULT_HOME_TITLE = "Home"


@dataclass(frozen=True)
class Locale:
    """A language variant of the site.

    Attributes:
        id: Locale identifier, usually a language tag (e.g. "en", "zh").
        is_default: Whether pages of this locale are served without a prefix.
        url_prefix: First URL segment of the locale; empty for the default.
        display_labels: Top navigation labels keyed by logical path, in order.
        root: Content root relative to the document root path.
        home_title: Title of the root index page when it sets none itself.
    """

    id: str
    is_default: bool = False
    url_prefix: str = ""
    display_labels: Mapping[str, str] = field(
        default_factory=dict, compare=False, hash=False
    )
    root: str = ""
    home_title: str = DEFAULT_HOME_TITLE

    def __post_init__(self) -> None:
        if not self.id:
            raise ConfigurationError("locale id must not be empty")
        if self.is_default and self.url_prefix:
            raise ConfigurationError(
                f"default locale '{self.id}' must not have a url prefix"
            )
        if not self.is_default:
            if not self.url_prefix:
                raise ConfigurationError(
                    f"locale '{self.id}' needs a non-empty url prefix"
                )
            if "/" in self.url_prefix or self.url_prefix in {".", ".."}:
                raise ConfigurationError(
                    f"locale '{self.id}' url prefix must be a single path segment, "
                    f"got {self.url_prefix!r}"
                )
        # Read-only copy, the locale is frozen
        object.__setattr__(
            self, "display_labels", MappingProxyType(dict(self.display_labels))
        )


class LocaleRegistry:
    """Registered locales in registration order."""

    def __init__(self, locales: list[Locale] | None = None) -> None:
        self._locales: dict[str, Locale] = {}
        self._prefixes: dict[str, Locale] = {}
        self._default: Locale | None = None
        for locale in locales or []:
            self.register(locale)

    def register(self, locale: Locale) -> None:
        """Add a locale.

        Raises:
            DuplicateLocaleError: If the id or url prefix is taken, or if a
                second default locale is added.
        """
        if locale.id in self._locales:
            raise DuplicateLocaleError(f"locale '{locale.id}' is already registered")
        if locale.is_default and self._default is not None:
            raise DuplicateLocaleError(
                f"cannot make '{locale.id}' the default locale, "
                f"'{self._default.id}' already is"
            )
        if not locale.is_default and locale.url_prefix in self._prefixes:
            other = self._prefixes[locale.url_prefix]
            raise DuplicateLocaleError(
                f"url prefix '{locale.url_prefix}' of locale '{locale.id}' "
                f"is already used by '{other.id}'"
            )

        self._locales[locale.id] = locale
        if locale.is_default:
            self._default = locale
        else:
            self._prefixes[locale.url_prefix] = locale

    def resolve(self, locale_id: str) -> Locale:
        """Look up a locale by id.

        Raises:
            UnknownLocaleError: If no such locale is registered.
        """
        try:
            return self._locales[locale_id]
        except KeyError:
            raise UnknownLocaleError(f"unknown locale '{locale_id}'") from None

    def default_locale(self) -> Locale:
        """Return the default locale.

        Raises:
            NoDefaultLocaleError: If no default locale was registered.
        """
        if self._default is None:
            raise NoDefaultLocaleError("no default locale registered")
        return self._default

    def by_prefix(self, prefix: str) -> Locale | None:
        """Find the non-default locale owning a URL prefix."""
        return self._prefixes.get(prefix)

    def prefixes(self) -> frozenset[str]:
        """URL prefixes of all non-default locales."""
        return frozenset(self._prefixes)

    def __iter__(self) -> Iterator[Locale]:
        return iter(list(self._locales.values()))

    def __len__(self) -> int:
        return len(self._locales)

    def __contains__(self, locale_id: object) -> bool:
        return locale_id in self._locales
