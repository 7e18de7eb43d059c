"""Frontmatter extraction and typed accessors.

Documents may start with a YAML block fenced by ``---`` lines. Only the
keys the navigation engine understands have accessors here; every other
key is carried through untouched.
"""

from __future__ import annotations

import math
import re
from collections.abc import Mapping
from typing import Any

import yaml
from markdown_it import MarkdownIt

_FRONTMATTER_RE = re.compile(
    r"\A---[ \t]*\r?\n(?P<yaml>.*?)^---[ \t]*\r?$\n?",
    re.DOTALL | re.MULTILINE,
)

_markdown = MarkdownIt("commonmark")


class FrontmatterError(ValueError):
    """Frontmatter block cannot be decoded into a mapping."""


def split_frontmatter(text: str) -> tuple[str | None, str]:
    """Split a document into its raw frontmatter block and body.

    Returns:
        Tuple of (frontmatter text or None when absent, body text).
    """
    match = _FRONTMATTER_RE.match(text)
    if match is None:
        return None, text
    return match.group("yaml"), text[match.end() :]


def decode_document(data: bytes) -> str:
    """Decode document bytes as UTF-8, dropping a byte order mark."""
    try:
        return data.decode("utf-8-sig")
    except UnicodeDecodeError as exc:
        raise FrontmatterError(f"document is not valid UTF-8: {exc}") from None


def extract_frontmatter(data: bytes) -> dict[str, Any]:
    """Extract the frontmatter mapping of a document.

    Args:
        data: Raw document bytes.

    Returns:
        Frontmatter keys and values; empty when the document has no block.

    Raises:
        FrontmatterError: If the bytes are not UTF-8, the YAML is invalid,
            or the block is not a mapping.
    """
    block, _ = split_frontmatter(decode_document(data))
    if block is None:
        return {}
    try:
        raw = yaml.safe_load(block)
    except yaml.YAMLError as exc:
        raise FrontmatterError(f"invalid YAML frontmatter: {exc}") from None
    if raw is None:
        return {}
    if not isinstance(raw, dict):
        raise FrontmatterError(
            f"frontmatter must be a mapping, got {type(raw).__name__}"
        )
    return {str(key): value for key, value in raw.items()}


def first_heading(text: str) -> str | None:
    """Return the text of the first level-1 heading of a Markdown body."""
    _, body = split_frontmatter(text)
    tokens = _markdown.parse(body)
    for i, token in enumerate(tokens):
        if token.type == "heading_open" and token.tag == "h1":
            inline = tokens[i + 1]
            title = inline.content.strip()
            return title or None
    return None


def frontmatter_title(frontmatter: Mapping[str, Any]) -> str | None:
    """Title override. Defaults to None when missing or blank."""
    title = frontmatter.get("title")
    if title is None:
        return None
    title = str(title).strip()
    return title or None


def frontmatter_order(frontmatter: Mapping[str, Any]) -> int | float | None:
    """Sort position among siblings. Defaults to None (unordered).

    Raises:
        FrontmatterError: If ``order`` is present but not a finite number.
    """
    order = frontmatter.get("order")
    if order is None:
        return None
    # bool is an int subclass, but `order: true` is not a position
    if isinstance(order, bool) or not isinstance(order, (int, float)):
        raise FrontmatterError(f"order must be a number, got {order!r}")
    if isinstance(order, float) and not math.isfinite(order):
        raise FrontmatterError(f"order must be finite, got {order!r}")
    return order


def frontmatter_collapsed(frontmatter: Mapping[str, Any]) -> bool | None:
    """Collapsed override for a group's index page. Defaults to None."""
    collapsed = frontmatter.get("collapsed")
    if isinstance(collapsed, bool):
        return collapsed
    return None
