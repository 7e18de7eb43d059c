"""MkDocs plugin configuration helpers.

MkDocs accepts ``plugins`` as a list (``- docnav: {...}`` or a bare
``- docnav``) or as a mapping (``docnav: {...}``). Both forms go through
``_plugin_entries`` so lookup and detection agree.
"""

from __future__ import annotations

from collections.abc import Iterator
from typing import Any

PLUGIN_NAME = "docnav"


def _plugin_entries(plugins: object) -> Iterator[tuple[str, Any]]:
    """Yield (name, options) for every plugin declared in either form."""
    if isinstance(plugins, dict):
        yield from plugins.items()
    elif isinstance(plugins, list):
        for plugin in plugins:
            if isinstance(plugin, str):
                yield plugin, None
            elif isinstance(plugin, dict):
                yield from plugin.items()


def get_docnav_config(raw: dict[str, Any]) -> dict[str, Any] | None:
    """Return the docnav options of a mkdocs.yml mapping.

    None means the plugin is not declared; a declaration without options
    gives an empty mapping.
    """
    for name, options in _plugin_entries(raw.get("plugins")):
        if name == PLUGIN_NAME:
            return options if isinstance(options, dict) else {}
    return None


def has_docnav_plugin(plugins: list[Any] | dict[str, Any]) -> bool:
    """Check whether a plugins list or mapping already declares docnav."""
    return any(name == PLUGIN_NAME for name, _ in _plugin_entries(plugins))
