"""Mapping between logical document paths and public site URLs."""

from __future__ import annotations

from collections.abc import Mapping
from typing import NamedTuple
from urllib.parse import urlsplit

from docnav.errors import ConfigurationError, MalformedUrlError
from docnav.locales import Locale, LocaleRegistry

DEFAULT_INDEX_NAME = "index"


class ResolvedUrl(NamedTuple):
    """Result of mapping a URL back to a document."""

    locale: Locale
    logical_path: str


def split_logical_path(path: str) -> list[str]:
    """Split a slash-separated logical path into segments.

    Raises:
        MalformedUrlError: If the path is empty or has empty, "." or ".."
            segments.
    """
    if not path:
        raise MalformedUrlError("logical path must not be empty")
    segments = path.split("/")
    for segment in segments:
        if segment in {"", ".", ".."}:
            raise MalformedUrlError(f"illegal segment {segment!r} in path {path!r}")
    return segments


def _parse_rewrites(rewrites: Mapping[str, str]) -> list[tuple[list[str], list[str]]]:
    """Validate rewrites into (source segments, target segments) pairs."""
    parsed: list[tuple[list[str], list[str]]] = []
    seen_targets: dict[str, str] = {}
    for source, target in rewrites.items():
        try:
            source_segments = split_logical_path(source.strip("/"))
            target_segments = split_logical_path(target.strip("/"))
        except MalformedUrlError as exc:
            raise ConfigurationError(f"invalid rewrite {source!r}: {exc}") from None
        key = "/".join(target_segments)
        if key in seen_targets:
            raise ConfigurationError(
                f"rewrites {seen_targets[key]!r} and {source!r} share target {key!r}"
            )
        seen_targets[key] = source
        parsed.append((source_segments, target_segments))
    return parsed


def _replace_prefix(
    segments: list[str], pairs: list[tuple[list[str], list[str]]]
) -> list[str]:
    """Replace the longest matching segment-aligned prefix."""
    best: tuple[list[str], list[str]] | None = None
    for old, new in pairs:
        if segments[: len(old)] == old and (best is None or len(old) > len(best[0])):
            best = (old, new)
    if best is None:
        return segments
    old, new = best
    return new + segments[len(old) :]


class PathResolver:
    """Bidirectional mapping between (locale, logical path) and URLs.

    The default locale is served without a prefix; every other locale
    lives under its own first URL segment. A final index segment
    collapses to a trailing slash, so "guide/index" becomes "/guide/".
    """

    def __init__(
        self,
        registry: LocaleRegistry,
        rewrites: Mapping[str, str] | None = None,
        index_name: str = DEFAULT_INDEX_NAME,
    ) -> None:
        self._registry = registry
        self._index_name = index_name
        self._rewrites = _parse_rewrites(rewrites or {})
        self._inverse = [(new, old) for old, new in self._rewrites]

    @property
    def index_name(self) -> str:
        return self._index_name

    def to_url(self, locale: Locale, logical_path: str) -> str:
        """Build the public URL of a document.

        Raises:
            MalformedUrlError: If the path has illegal segments, or the
                resulting URL would not map back to the same document.
        """
        original = split_logical_path(logical_path)
        segments = _replace_prefix(original, self._rewrites)
        if _replace_prefix(segments, self._inverse) != original:
            raise MalformedUrlError(
                f"path {logical_path!r} collides with a rewrite target"
            )

        if locale.is_default:
            if segments[0] in self._registry.prefixes():
                raise MalformedUrlError(
                    f"path {logical_path!r} of default locale '{locale.id}' "
                    f"starts with the url prefix of another locale"
                )
        else:
            segments = [locale.url_prefix, *segments]

        if segments[-1] == self._index_name:
            return "/" + "".join(f"{segment}/" for segment in segments[:-1])
        return "/" + "/".join(segments)

    def from_url(self, url: str) -> ResolvedUrl:
        """Map a site URL back to its locale and logical path.

        Query strings and fragments are ignored. A trailing slash, or a
        bare locale prefix, addresses the directory's index document.

        Raises:
            MalformedUrlError: If the URL is absolute with a host, does not
                start with "/", or has illegal segments.
        """
        parts = urlsplit(url)
        if parts.scheme or parts.netloc:
            raise MalformedUrlError(f"expected a site-relative url, got {url!r}")
        if not parts.path.startswith("/"):
            raise MalformedUrlError(f"url must start with '/', got {url!r}")

        body = parts.path[1:]
        is_directory = body == "" or body.endswith("/")
        segments = body.split("/")
        if is_directory:
            segments.pop()
        for segment in segments:
            if segment in {"", ".", ".."}:
                raise MalformedUrlError(f"illegal segment {segment!r} in url {url!r}")

        locale = self._registry.default_locale()
        if segments:
            prefixed = self._registry.by_prefix(segments[0])
            if prefixed is not None:
                locale = prefixed
                segments = segments[1:]
        if not segments:
            is_directory = True
        if is_directory:
            segments.append(self._index_name)

        segments = _replace_prefix(segments, self._inverse)
        return ResolvedUrl(locale, "/".join(segments))
