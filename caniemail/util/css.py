"""CSS parsing helpers built around tinycss2."""

from __future__ import annotations

from collections.abc import Iterable, Iterator
import re
from typing import Any

import tinycss2

from .log import debug_log

Node = Any

_VENDOR_PREFIX_RE = re.compile(r"^-(?:webkit|moz|ms|o)-")

# At-rules whose block holds rules rather than declarations.
_RULE_LIST_AT_RULES = frozenset(
    {
        "container",
        "document",
        "keyframes",
        "layer",
        "media",
        "scope",
        "starting-style",
        "supports",
    }
)


def parse_stylesheet(css: str) -> list[Node]:
    """Parse a stylesheet, keeping going past invalid rules."""
    return tinycss2.parse_stylesheet(css, skip_comments=True, skip_whitespace=True)


def _parse_block(node: Node) -> list[Node]:
    if node.type == "at-rule":
        if strip_vendor_prefix(at_rule_name(node)) in _RULE_LIST_AT_RULES:
            return tinycss2.parse_rule_list(node.content, skip_comments=True, skip_whitespace=True)
    return tinycss2.parse_blocks_contents(node.content, skip_comments=True, skip_whitespace=True)


def walk(nodes: Iterable[Node]) -> Iterator[Node]:
    """Yield every rule, at-rule and declaration, descending into blocks.

    Parse errors are yielded too (as ``error`` nodes) so callers can tell
    that part of the source was dropped by the parser.
    """
    for node in nodes:
        node_type = getattr(node, "type", None)
        if node_type == "error":
            debug_log(f"Invalid CSS at {node.source_line}:{node.source_column}: {node.message}")
            yield node
            continue
        if node_type not in {"qualified-rule", "at-rule", "declaration"}:
            continue
        yield node
        if node_type != "declaration" and node.content is not None:
            yield from walk(_parse_block(node))


def at_rule_name(node: Node) -> str:
    """Return the lowercased at-keyword without the leading @."""
    return str(node.lower_at_keyword)


def at_rule_params(node: Node) -> str:
    """Return the at-rule prelude as text."""
    return tinycss2.serialize(node.prelude).strip()


def declaration_name(node: Node) -> str:
    """Return the lowercased property name of a declaration."""
    return str(node.lower_name)


def declaration_value(node: Node) -> str:
    """Return the declaration value as text, without any !important flag."""
    return tinycss2.serialize(node.value).strip()


def strip_vendor_prefix(name: str) -> str:
    """Drop a leading -webkit-, -moz-, -ms- or -o- prefix."""
    return _VENDOR_PREFIX_RE.sub("", name, count=1)
