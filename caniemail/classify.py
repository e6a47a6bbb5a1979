"""Turn extracted features into a deduplicated list of compatibility issues."""

from __future__ import annotations

from collections.abc import Callable, Iterable, Mapping, Sequence

from .constants import EMBED_URL_TEMPLATE, MAJOR_CLIENTS, SEVERITY_ORDER, SHOW_CHOICES
from .extract import extract_features
from .model import (
    ClientDescriptor,
    CompatibilityIssue,
    ExtractedFeatures,
    Feature,
    FeatureIndex,
    FeatureType,
    Severity,
)
from .support import classify_severity, summarize_support


def _as_tag(element: str) -> str:
    return f"<{element}>"


def create_compatibility_issues(
    extracted: ExtractedFeatures,
    index: FeatureIndex,
    clients: Sequence[ClientDescriptor] = MAJOR_CLIENTS,
) -> list[CompatibilityIssue]:
    """Look up every extracted identifier and emit one issue per feature slug.

    Categories are processed in a fixed order (properties, at-rules,
    elements, attributes), so when two identifiers resolve to the same
    feature the earlier category keeps it.
    """
    issues: list[CompatibilityIssue] = []
    seen_slugs: set[str] = set()

    groups: tuple[
        tuple[Iterable[str], Mapping[str, Feature], FeatureType, Callable[[str], str] | None], ...
    ] = (
        (extracted.css_properties, index.css, "css", None),
        (extracted.css_at_rules, index.css, "css-at-rule", None),
        (extracted.html_elements, index.html_elements, "html-element", _as_tag),
        (extracted.html_attributes, index.html_attributes, "html-attribute", None),
    )

    for identifiers, feature_map, feature_type, formatter in groups:
        for identifier in sorted(identifiers):
            feature = feature_map.get(identifier)
            if feature is None or feature.slug in seen_slugs:
                continue
            seen_slugs.add(feature.slug)

            summary = summarize_support(feature, clients)
            issues.append(
                CompatibilityIssue(
                    feature=feature,
                    feature_type=feature_type,
                    property=formatter(identifier) if formatter else identifier,
                    severity=classify_severity(summary),
                    summary=summary,
                )
            )

    return issues


def check_html(
    html: str,
    index: FeatureIndex,
    clients: Sequence[ClientDescriptor] = MAJOR_CLIENTS,
) -> list[CompatibilityIssue]:
    """Extract features from an HTML email and classify them."""
    return create_compatibility_issues(extract_features(html), index, clients)


def sort_issues(issues: Iterable[CompatibilityIssue]) -> list[CompatibilityIssue]:
    """Order issues errors first, then warnings, then successes, by slug."""
    return sorted(issues, key=lambda issue: (SEVERITY_ORDER[issue.severity], issue.feature.slug))


def filter_issues(issues: Iterable[CompatibilityIssue], show: str = "all") -> list[CompatibilityIssue]:
    """Keep all issues, only errors, or errors plus warnings."""
    if show not in SHOW_CHOICES:
        raise ValueError(f"Unknown issue filter: {show!r}")
    if show == "errors":
        return [issue for issue in issues if issue.severity == "error"]
    if show == "warnings":
        return [issue for issue in issues if issue.severity in {"error", "warning"}]
    return list(issues)


def count_by_severity(issues: Iterable[CompatibilityIssue]) -> dict[Severity, int]:
    """Count issues per severity level."""
    counts: dict[Severity, int] = {"error": 0, "warning": 0, "success": 0}
    for issue in issues:
        counts[issue.severity] += 1
    return counts


def embed_url(slug: str) -> str:
    """Return the caniemail embed widget URL for a feature slug."""
    return EMBED_URL_TEMPLATE.format(slug=slug)
