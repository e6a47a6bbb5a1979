"""HTML text scanning helpers.

Email markup is frequently invalid, so these work on the raw text with
regular expressions instead of building a DOM.
"""

from __future__ import annotations

from collections.abc import Iterator
import re

_INLINE_STYLE_RE = re.compile(r"""style\s*=\s*(?:"([^"]*)"|'([^']*)')""", re.IGNORECASE)
_STYLE_TAG_RE = re.compile(r"<style[^>]*>(.*?)</style>", re.IGNORECASE | re.DOTALL)
_TAG_RE = re.compile(r"<([a-z][a-z0-9-]*)", re.IGNORECASE)
_ATTRIBUTE_RE = re.compile(r"\s([a-z][a-z0-9-]*)\s*=", re.IGNORECASE)


def inline_styles(html: str) -> Iterator[str]:
    """Yield the text of every style="..." attribute."""
    for match in _INLINE_STYLE_RE.finditer(html):
        content = match.group(1) if match.group(1) is not None else match.group(2)
        if content.strip():
            yield content


def style_blocks(html: str) -> Iterator[str]:
    """Yield the contents of every <style> element."""
    for match in _STYLE_TAG_RE.finditer(html):
        yield match.group(1)


def tag_names(html: str) -> set[str]:
    """Return the lowercased names of all opening tags."""
    return {match.group(1).lower() for match in _TAG_RE.finditer(html)}


def attribute_names(html: str) -> set[str]:
    """Return the lowercased names of all name= attribute tokens."""
    return {match.group(1).lower() for match in _ATTRIBUTE_RE.finditer(html)}
