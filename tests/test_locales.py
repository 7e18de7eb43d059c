"""Tests for the locale registry."""

import pytest

from docnav.errors import (
    ConfigurationError,
    DuplicateLocaleError,
    NoDefaultLocaleError,
    UnknownLocaleError,
)
from docnav.locales import Locale, LocaleRegistry


def test_default_locale_is_the_one_marked_default():
    registry = LocaleRegistry(
        [
            Locale(id="zh", url_prefix="zh"),
            Locale(id="en", is_default=True),
            Locale(id="ja", url_prefix="ja"),
        ]
    )

    assert registry.default_locale().id == "en"


def test_second_default_is_rejected():
    registry = LocaleRegistry([Locale(id="en", is_default=True)])

    with pytest.raises(DuplicateLocaleError, match="already is"):
        registry.register(Locale(id="fr", is_default=True))
    # Registry is unchanged after the failed registration
    assert "fr" not in registry
    assert registry.default_locale().id == "en"


def test_duplicate_id_is_rejected():
    registry = LocaleRegistry([Locale(id="zh", url_prefix="zh")])

    with pytest.raises(DuplicateLocaleError, match="already registered"):
        registry.register(Locale(id="zh", url_prefix="cn"))


def test_duplicate_prefix_is_rejected():
    registry = LocaleRegistry([Locale(id="zh-Hans", url_prefix="zh")])

    with pytest.raises(DuplicateLocaleError, match="url prefix 'zh'"):
        registry.register(Locale(id="zh-Hant", url_prefix="zh"))


def test_no_default_locale():
    registry = LocaleRegistry([Locale(id="zh", url_prefix="zh")])

    with pytest.raises(NoDefaultLocaleError):
        registry.default_locale()


def test_resolve_unknown_locale():
    registry = LocaleRegistry([Locale(id="en", is_default=True)])

    with pytest.raises(UnknownLocaleError, match="'de'"):
        registry.resolve("de")
    # Configuration errors are ValueErrors, unknown ids are also LookupErrors
    with pytest.raises(LookupError):
        registry.resolve("de")


def test_iteration_follows_registration_order():
    registry = LocaleRegistry()
    for locale in (
        Locale(id="ja", url_prefix="ja"),
        Locale(id="en", is_default=True),
        Locale(id="zh", url_prefix="zh"),
    ):
        registry.register(locale)

    assert [locale.id for locale in registry] == ["ja", "en", "zh"]
    assert len(registry) == 3
    assert registry.by_prefix("zh").id == "zh"
    assert registry.by_prefix("en") is None
    assert registry.prefixes() == frozenset({"ja", "zh"})


@pytest.mark.parametrize(
    "kwargs",
    [
        {"id": "en", "is_default": True, "url_prefix": "en"},
        {"id": "zh"},
        {"id": "zh", "url_prefix": "zh/cn"},
        {"id": "zh", "url_prefix": ".."},
        {"id": ""},
    ],
)
def test_locale_invariants(kwargs):
    with pytest.raises(ConfigurationError):
        Locale(**kwargs)


def test_display_labels_are_read_only():
    labels = {"guide/index": "Guide"}
    locale = Locale(id="en", is_default=True, display_labels=labels)
    labels["api/index"] = "API"

    assert dict(locale.display_labels) == {"guide/index": "Guide"}
    with pytest.raises(TypeError):
        locale.display_labels["x"] = "y"  # type: ignore[index]
    # Labels do not take part in hashing
    assert hash(locale) == hash(Locale(id="en", is_default=True))
