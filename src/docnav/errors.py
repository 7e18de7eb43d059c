"""Exception types raised while building navigation."""

from __future__ import annotations

from typing import Any


class DocnavError(Exception):
    """Base class for all docnav errors."""


class ConfigurationError(DocnavError, ValueError):
    """Invalid locale or option setup. Fatal, raised before any scan runs."""


class DuplicateLocaleError(ConfigurationError):
    """A locale id, default flag or URL prefix was registered twice."""


class NoDefaultLocaleError(ConfigurationError):
    """No locale is marked as the default."""


class UnknownLocaleError(ConfigurationError, LookupError):
    """A locale id is not registered."""


class MalformedUrlError(DocnavError, ValueError):
    """A URL or logical path cannot be mapped between the two forms."""


class ScanIssue(DocnavError):
    """Non-fatal problem with a single entry of the content tree.

    Scan issues are collected as warnings next to a best-effort result
    instead of aborting the build.
    """

    def __init__(self, path: str, reason: str) -> None:
        super().__init__(f"{path}: {reason}")
        self.path = path
        self.reason = reason

    def to_dict(self) -> dict[str, str]:
        """Convert to dictionary for JSON serialization."""
        return {"kind": type(self).__name__, "path": self.path, "reason": self.reason}


class ScanIOError(ScanIssue):
    """A directory or file could not be read."""


class ParseError(ScanIssue):
    """Frontmatter of a document is malformed."""


class RouteConflictError(ScanIssue):
    """A document has no URL that maps back to it unambiguously."""


class AssemblyError(DocnavError):
    """Raised in strict mode when any locale produced warnings.

    Carries the warnings and the navigation that was built anyway.
    """

    def __init__(self, warnings: dict[str, tuple[ScanIssue, ...]], result: Any) -> None:
        count = sum(len(items) for items in warnings.values())
        super().__init__(f"navigation built with {count} warning(s)")
        self.warnings = warnings
        self.result = result
