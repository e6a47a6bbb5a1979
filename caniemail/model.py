"""Data models for the reference dataset, extraction and classification."""

from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass, field
from typing import Literal

SupportLevel = Literal["y", "n", "a", "u"]
Severity = Literal["error", "warning", "success"]
FeatureType = Literal["css", "css-at-rule", "html-element", "html-attribute"]


@dataclass(frozen=True)
class ClientDescriptor:
    family: str
    platform: str
    label: str


@dataclass(frozen=True)
class Feature:
    slug: str
    category: str
    title: str
    description: str = ""
    url: str = ""
    keywords: str | None = None
    stats: dict[str, dict[str, dict[str, str]]] = field(default_factory=dict)
    notes_by_num: dict[str, str] = field(default_factory=dict)
    notes: str | None = None
    tags: tuple[str, ...] = ()
    last_test_date: str | None = None
    test_url: str | None = None
    test_results_url: str | None = None


@dataclass(frozen=True)
class ReferenceDataset:
    api_version: str
    last_update_date: str
    features: tuple[Feature, ...]
    nicenames: dict[str, dict[str, str]] = field(default_factory=dict)


@dataclass(frozen=True)
class FeatureIndex:
    css: Mapping[str, Feature]
    html_elements: Mapping[str, Feature]
    html_attributes: Mapping[str, Feature]


@dataclass(frozen=True)
class ExtractedFeatures:
    css_properties: frozenset[str] = frozenset()
    css_at_rules: frozenset[str] = frozenset()
    html_elements: frozenset[str] = frozenset()
    html_attributes: frozenset[str] = frozenset()
    css_values: dict[str, frozenset[str]] = field(default_factory=dict)


@dataclass(frozen=True)
class SupportResult:
    level: SupportLevel
    version: str
    note: str | None = None


@dataclass(frozen=True)
class SupportSummary:
    supported: tuple[ClientDescriptor, ...] = ()
    partial: tuple[ClientDescriptor, ...] = ()
    unsupported: tuple[ClientDescriptor, ...] = ()
    unknown: tuple[ClientDescriptor, ...] = ()


@dataclass(frozen=True)
class CompatibilityIssue:
    feature: Feature
    feature_type: FeatureType
    property: str
    severity: Severity
    summary: SupportSummary
