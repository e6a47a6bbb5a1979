"""Extract CSS and HTML features used by an email document."""

from __future__ import annotations

import re
from typing import Final

from .model import ExtractedFeatures
from .util.css import (
    at_rule_name,
    at_rule_params,
    declaration_name,
    declaration_value,
    parse_stylesheet,
    strip_vendor_prefix,
    walk,
)
from .util.html import attribute_names, inline_styles, style_blocks, tag_names
from .util.log import debug_log

_MEDIA_FEATURE_RE = re.compile(r"\(\s*([a-z-]+)\s*(?::|,|\))", re.IGNORECASE)
_COMMENT_RE = re.compile(r"/\*.*?\*/", re.DOTALL)
_SIMPLE_PROPERTY_RE = re.compile(r"([a-z-]+)\s*:", re.IGNORECASE)
_SIMPLE_AT_RULE_RE = re.compile(r"@([a-z-]+)", re.IGNORECASE)

# CSS values with compatibility data of their own, looked up like properties.
VALUE_FEATURES: Final[tuple[tuple[str, re.Pattern[str]], ...]] = (
    ("linear-gradient", re.compile(r"linear-gradient")),
    ("radial-gradient", re.compile(r"radial-gradient")),
    ("conic-gradient", re.compile(r"conic-gradient")),
    ("repeating-linear-gradient", re.compile(r"repeating-linear-gradient")),
    ("repeating-radial-gradient", re.compile(r"repeating-radial-gradient")),
    ("calc", re.compile(r"calc\s*\(")),
    ("css variables", re.compile(r"var\s*\(")),
    ("clamp", re.compile(r"clamp\s*\(")),
    ("min", re.compile(r"min\s*\(")),
    ("max", re.compile(r"max\s*\(")),
    ("fit-content", re.compile(r"fit-content")),
    ("min-content", re.compile(r"min-content")),
    ("max-content", re.compile(r"max-content")),
)


class _CssCollector:
    """Accumulates properties, at-rules and values across style sources."""

    def __init__(self) -> None:
        self.properties: set[str] = set()
        self.at_rules: set[str] = set()
        self.values: dict[str, set[str]] = {}

    def collect(self, css: str, *, inline: bool) -> None:
        source = f"* {{ {css} }}" if inline else css
        declarations: list[tuple[str, str]] = []
        at_rules: list[tuple[str, str]] = []
        recovered = False
        # Serialising deeply nested values can also fail, so it stays guarded.
        try:
            for node in walk(parse_stylesheet(source)):
                if node.type == "error":
                    recovered = True
                elif node.type == "declaration":
                    declarations.append((declaration_name(node), declaration_value(node)))
                elif node.type == "at-rule" and not inline:
                    at_rules.append((at_rule_name(node), at_rule_params(node)))
        except Exception as exc:
            debug_log(f"CSS parse failed ({exc.__class__.__name__}: {exc}); using fallback")
            self._collect_simple(css, include_at_rules=not inline)
            return

        for name, value in declarations:
            self._add_declaration(name, value)
        for name, params in at_rules:
            self._add_at_rule(name, params)
        if recovered:
            # The parser dropped some text; pick up whatever names it held.
            self._collect_simple(css, include_at_rules=not inline)

    def _add_declaration(self, name: str, value: str) -> None:
        prop = strip_vendor_prefix(name.lower())
        self.properties.add(prop)

        value = value.lower()
        self.values.setdefault(prop, set()).add(value)
        for feature, pattern in VALUE_FEATURES:
            if pattern.search(value):
                self.properties.add(feature)

    def _add_at_rule(self, name: str, params: str) -> None:
        name = name.lower()
        self.at_rules.add(f"@{name}")
        if name == "media" and params:
            for match in _MEDIA_FEATURE_RE.finditer(params):
                self.at_rules.add(f"@media ({match.group(1).lower()})")
        if name == "supports":
            self.at_rules.add("@supports")

    def _collect_simple(self, css: str, *, include_at_rules: bool) -> None:
        css = _COMMENT_RE.sub("", css)
        for match in _SIMPLE_PROPERTY_RE.finditer(css):
            prop = match.group(1).lower()
            if len(prop) > 1 and not prop.startswith("-"):
                self.properties.add(prop)
        if include_at_rules:
            for match in _SIMPLE_AT_RULE_RE.finditer(css):
                self.at_rules.add(f"@{match.group(1).lower()}")


def extract_features(html: str) -> ExtractedFeatures:
    """Return every CSS and HTML feature the document uses.

    Inline ``style`` attributes and ``<style>`` blocks are parsed with a
    tolerant CSS parser, falling back to pattern matching when parsing
    fails. Tag and attribute names come from a plain text scan, so
    invalid markup still yields results.
    """
    collector = _CssCollector()
    for css in inline_styles(html):
        collector.collect(css, inline=True)
    for css in style_blocks(html):
        collector.collect(css, inline=False)

    return ExtractedFeatures(
        css_properties=frozenset(collector.properties),
        css_at_rules=frozenset(collector.at_rules),
        html_elements=frozenset(tag_names(html)),
        html_attributes=frozenset(attribute_names(html)),
        css_values={prop: frozenset(values) for prop, values in collector.values.items()},
    )
