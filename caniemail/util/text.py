"""Text utility helpers."""

from __future__ import annotations

import re

_WHITESPACE_RE = re.compile(r"\s+")


def normalize_whitespace(value: str) -> str:
    """Collapse repeated whitespace and trim ends."""
    return _WHITESPACE_RE.sub(" ", value).strip()


def split_keywords(value: str | None) -> list[str]:
    """Split a comma-separated keyword list into trimmed, lowercased entries."""
    if not value:
        return []
    return [keyword for item in value.split(",") if (keyword := item.strip().lower())]


def ellipsize(value: str, width: int) -> str:
    """Shorten long strings while preserving suffix visibility."""
    if width <= 0:
        return ""
    if len(value) <= width:
        return value
    if width <= 1:
        return "…"
    return f"{value[: width - 1]}…"
