"""Configuration loading from docnav.yml or mkdocs.yml."""

from __future__ import annotations

import os
from pathlib import Path
from typing import Any

import yaml

from docnav.config.model import LocaleOptions, SiteOptions
from docnav.config.plugin import get_docnav_config
from docnav.errors import ConfigurationError

DEFAULT_CONFIG_FILE = "docnav.yml"
DEFAULT_DOCUMENT_ROOT = "docs"

_BOOL_OPTIONS = (
    "collapsed",
    "capitalize_first",
    "use_title_from_frontmatter",
    "use_title_from_file_heading",
    "sort_menus_by_frontmatter_order",
    "hyphen_to_space",
    "underscore_to_space",
)


class _MkDocsLoader(yaml.SafeLoader):
    """SafeLoader that understands the tags MkDocs configs use.

    ``!ENV`` reads environment variables the way MkDocs does. Python tags
    from Markdown extensions (``!!python/name:...``) load as None, since
    docnav never reads those options.
    """


def _construct_env(loader: yaml.SafeLoader, node: yaml.Node) -> Any:
    """Resolve ``!ENV NAME`` or ``!ENV [NAME, OTHER, default]``."""
    if isinstance(node, yaml.ScalarNode):
        names, default = [loader.construct_scalar(node)], None
    else:
        items = loader.construct_sequence(node)
        if len(items) > 1:
            names, default = items[:-1], items[-1]
        else:
            names, default = items, None
    for name in names:
        value = os.environ.get(str(name))
        if value is None:
            continue
        # Typed like a plain YAML scalar, so "true" becomes a boolean
        tag = loader.resolve(yaml.ScalarNode, value, (True, False))
        return loader.construct_object(yaml.ScalarNode(tag, value))
    return default


def _construct_python_tag(loader: yaml.SafeLoader, suffix: str, node: yaml.Node) -> None:
    return None


_MkDocsLoader.add_constructor("!ENV", _construct_env)
_MkDocsLoader.add_multi_constructor("tag:yaml.org,2002:python/", _construct_python_tag)
_MkDocsLoader.add_multi_constructor("!python/", _construct_python_tag)


def load_config(config_path: Path) -> SiteOptions:
    """Load and resolve options from a YAML config file.

    Options are read from a ``docnav`` entry under ``plugins`` when the
    file is a mkdocs.yml, otherwise from the top level of the file.

    Args:
        config_path: Path to docnav.yml or mkdocs.yml.

    Returns:
        Resolved SiteOptions. Relative paths are resolved against the
        directory holding the config file.

    Raises:
        FileNotFoundError: If config file doesn't exist.
        ConfigurationError: If an option has the wrong type or value.
    """
    if not config_path.exists():
        raise FileNotFoundError(f"Config file not found: {config_path}")

    with open(config_path, encoding="utf-8") as f:
        raw = yaml.load(f, Loader=_MkDocsLoader)

    if not isinstance(raw, dict):
        raise ConfigurationError(f"Config file must be a mapping: {config_path}")

    section = get_docnav_config(raw)
    if section is None:
        section = raw
        default_root = DEFAULT_DOCUMENT_ROOT
    else:
        # MkDocs keeps its sources in docs_dir, default "docs"
        default_root = raw.get("docs_dir", DEFAULT_DOCUMENT_ROOT)

    return options_from_mapping(section, config_path.parent, default_root)


def options_from_mapping(
    data: dict[str, Any],
    config_dir: Path,
    default_root: str = DEFAULT_DOCUMENT_ROOT,
) -> SiteOptions:
    """Build SiteOptions from a parsed options mapping."""
    root = data.get("document_root_path", default_root)
    if not isinstance(root, str) or not root:
        raise ConfigurationError("'document_root_path' must be a non-empty string")

    flags: dict[str, bool] = {}
    for key in _BOOL_OPTIONS:
        if key in data:
            value = data[key]
            if not isinstance(value, bool):
                raise ConfigurationError(
                    f"'{key}' must be a boolean, got {type(value).__name__}"
                )
            flags[key] = value

    index_name = data.get("index_name", "index")
    if not isinstance(index_name, str) or not index_name or "/" in index_name:
        raise ConfigurationError("'index_name' must be a file name without '/'")

    extensions = _string_list(data.get("document_extensions", [".md"]), "document_extensions")
    if not extensions:
        raise ConfigurationError("'document_extensions' must not be empty")
    extensions = [ext if ext.startswith(".") else f".{ext}" for ext in extensions]

    exclude = _string_list(data.get("exclude", []), "exclude")

    default_locale = data.get("default_locale")
    if default_locale is not None and not isinstance(default_locale, str):
        raise ConfigurationError("'default_locale' must be a string")

    workers = data.get("workers", 1)
    if isinstance(workers, bool) or not isinstance(workers, int) or workers < 1:
        raise ConfigurationError("'workers' must be a positive integer")

    return SiteOptions(
        document_root_path=config_dir / root,
        index_name=index_name,
        document_extensions=tuple(extensions),
        exclude=tuple(exclude),
        locales=_parse_locales(data.get("locales")),
        default_locale=default_locale,
        rewrites=_string_mapping(data.get("rewrites"), "rewrites"),
        workers=workers,
        **flags,
    )


def _parse_locales(data: object) -> tuple[LocaleOptions, ...]:
    """Parse the ``locales`` mapping of locale id to locale options."""
    if data is None:
        return ()
    if not isinstance(data, dict):
        raise ConfigurationError(
            f"'locales' must be a mapping, got {type(data).__name__}"
        )

    locales: list[LocaleOptions] = []
    for locale_id, options in data.items():
        if not isinstance(locale_id, str):
            raise ConfigurationError(
                f"'locales' keys must be strings, got {type(locale_id).__name__}"
            )
        if options is None:
            options = {}
        if not isinstance(options, dict):
            raise ConfigurationError(f"'locales.{locale_id}' must be a mapping")

        prefix = options.get("prefix")
        if prefix is not None and not isinstance(prefix, str):
            raise ConfigurationError(f"'locales.{locale_id}.prefix' must be a string")
        root = options.get("root")
        if root is not None and not isinstance(root, str):
            raise ConfigurationError(f"'locales.{locale_id}.root' must be a string")
        home_title = options.get("home_title")
        if home_title is not None and (not isinstance(home_title, str) or not home_title):
            raise ConfigurationError(
                f"'locales.{locale_id}.home_title' must be a non-empty string"
            )

        locales.append(
            LocaleOptions(
                id=locale_id,
                prefix=prefix,
                root=root,
                nav=_string_mapping(options.get("nav"), f"locales.{locale_id}.nav"),
                home_title=home_title,
            )
        )
    return tuple(locales)


def _string_list(data: object, key: str) -> list[str]:
    if not isinstance(data, list):
        raise ConfigurationError(f"'{key}' must be a list of strings")
    for item in data:
        if not isinstance(item, str):
            raise ConfigurationError(
                f"'{key}' entries must be strings, got {type(item).__name__}"
            )
    return list(data)


def _string_mapping(data: object, key: str) -> dict[str, str]:
    if data is None:
        return {}
    if not isinstance(data, dict):
        raise ConfigurationError(
            f"'{key}' must be a mapping, got {type(data).__name__}"
        )
    for name, value in data.items():
        if not isinstance(name, str) or not isinstance(value, str):
            raise ConfigurationError(f"'{key}' keys and values must be strings")
    return dict(data)
