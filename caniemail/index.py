"""Build identifier lookups over the reference dataset."""

from __future__ import annotations

from collections.abc import Iterable, Mapping
import re
from types import MappingProxyType

from .model import Feature, FeatureIndex
from .util.text import split_keywords

_TITLE_TAG_RE = re.compile(r"<([a-z0-9-]+)>", re.IGNORECASE)
_TITLE_ELEMENT_RE = re.compile(r"^([a-z0-9-]+)\s+element", re.IGNORECASE)
_TITLE_ATTRIBUTE_RE = re.compile(r"([a-z-]+)\s+attribute", re.IGNORECASE)


def _register(mapping: dict[str, Feature], key: str, feature: Feature) -> None:
    # First claim on an identifier wins.
    if key and key not in mapping:
        mapping[key] = feature


def _register_single_word_keywords(mapping: dict[str, Feature], feature: Feature) -> None:
    for keyword in split_keywords(feature.keywords):
        if " " not in keyword:
            _register(mapping, keyword, feature)


def build_css_map(features: Iterable[Feature]) -> Mapping[str, Feature]:
    """Map property names, titles and keywords to CSS features."""
    mapping: dict[str, Feature] = {}
    for feature in features:
        if feature.category != "css":
            continue

        primary = feature.slug.lower().removeprefix("css-")
        _register(mapping, primary, feature)

        title = feature.title.lower()
        if title != primary:
            _register(mapping, title, feature)

        for keyword in split_keywords(feature.keywords):
            _register(mapping, keyword, feature)

    return MappingProxyType(mapping)


def build_html_element_map(features: Iterable[Feature]) -> Mapping[str, Feature]:
    """Map tag names to HTML element features."""
    mapping: dict[str, Feature] = {}
    for feature in features:
        if feature.category != "html":
            continue
        element = feature.slug.lower().removeprefix("html-")
        if "attribute" in element:
            continue

        _register(mapping, element, feature)

        tag_match = _TITLE_TAG_RE.search(feature.title)
        if tag_match:
            _register(mapping, tag_match.group(1).lower(), feature)

        element_match = _TITLE_ELEMENT_RE.match(feature.title)
        if element_match:
            _register(mapping, element_match.group(1).lower(), feature)

        _register_single_word_keywords(mapping, feature)

    return MappingProxyType(mapping)


def build_html_attribute_map(features: Iterable[Feature]) -> Mapping[str, Feature]:
    """Map attribute names to HTML attribute features."""
    mapping: dict[str, Feature] = {}
    for feature in features:
        if feature.category != "html":
            continue

        title_match = _TITLE_ATTRIBUTE_RE.search(feature.title)
        if title_match:
            _register(mapping, title_match.group(1).lower(), feature)

        slug = feature.slug.lower()
        if "attribute" in slug:
            _register(mapping, slug.removeprefix("html-").removesuffix("-attribute"), feature)

        _register_single_word_keywords(mapping, feature)

    return MappingProxyType(mapping)


def build_feature_index(features: Iterable[Feature]) -> FeatureIndex:
    """Build the three lookups in one pass over a materialized feature list."""
    feature_list = list(features)
    return FeatureIndex(
        css=build_css_map(feature_list),
        html_elements=build_html_element_map(feature_list),
        html_attributes=build_html_attribute_map(feature_list),
    )
