"""Compatibility report renderer."""

from __future__ import annotations

from collections.abc import Sequence
from typing import Any

from rich.console import Group
from rich.panel import Panel
from rich.text import Text

from .classify import count_by_severity, embed_url
from .constants import (
    EMPTY_REPORT_LINE,
    FEATURE_URL_TEMPLATE,
    MAJOR_CLIENTS,
    SEVERITY_ICON_MAP,
    SEVERITY_STYLE_MAP,
)
from .model import ClientDescriptor, CompatibilityIssue, ReferenceDataset
from .util.text import ellipsize, normalize_whitespace

_DESCRIPTION_WIDTH = 160


def _labels(clients: Sequence[ClientDescriptor]) -> str:
    return ", ".join(client.label for client in clients)


def _counts_line(issues: Sequence[CompatibilityIssue]) -> Text:
    counts = count_by_severity(issues)
    line = Text()
    line.append(f"{counts['error']} issues", style=SEVERITY_STYLE_MAP["error"])
    line.append("  ")
    line.append(f"{counts['warning']} warnings", style=SEVERITY_STYLE_MAP["warning"])
    line.append("  ")
    line.append(f"{counts['success']} OK", style=SEVERITY_STYLE_MAP["success"])
    return line


def _feature_url(issue: CompatibilityIssue) -> str:
    return issue.feature.url or FEATURE_URL_TEMPLATE.format(slug=issue.feature.slug)


def _issue_lines(issue: CompatibilityIssue, *, show_embed: bool) -> list[Text]:
    heading = Text()
    heading.append(f"{SEVERITY_ICON_MAP[issue.severity]} ", style=SEVERITY_STYLE_MAP[issue.severity])
    heading.append(issue.feature.title, style="bold")
    heading.append(f"  {issue.property}", style="cyan")
    lines = [heading]

    if issue.summary.unsupported:
        lines.append(Text(f"  Not supported: {_labels(issue.summary.unsupported)}", style="red"))
    if issue.summary.partial:
        lines.append(Text(f"  Partial: {_labels(issue.summary.partial)}", style="yellow"))
    if issue.severity != "success" and issue.feature.description:
        description = normalize_whitespace(issue.feature.description)
        lines.append(Text(f"  {ellipsize(description, _DESCRIPTION_WIDTH)}", style="dim"))

    lines.append(Text(f"  {_feature_url(issue)}", style="dim"))
    if show_embed:
        lines.append(Text(f"  Embed: {embed_url(issue.feature.slug)}", style="dim"))
    return lines


def render_report(
    issues: Sequence[CompatibilityIssue],
    dataset: ReferenceDataset | None = None,
    *,
    show_embed: bool = False,
) -> Group:
    """Render a compatibility report as a Rich renderable group."""
    lines: list[Text] = [_counts_line(issues)]
    if dataset is not None and dataset.last_update_date:
        lines.append(Text(f"Data last updated: {dataset.last_update_date}", style="dim"))
    lines.append(Text(""))

    if not issues:
        lines.append(Text(EMPTY_REPORT_LINE))
        lines.append(
            Text(f"Features are checked against {len(MAJOR_CLIENTS)} major email clients.", style="dim")
        )
    for issue in issues:
        lines.extend(_issue_lines(issue, show_embed=show_embed))

    return Group(Panel(Group(*lines), border_style="blue", title="Compatibility Report"))


def issues_to_json(issues: Sequence[CompatibilityIssue]) -> list[dict[str, Any]]:
    """Flatten issues into JSON-serializable dictionaries."""
    return [
        {
            "slug": issue.feature.slug,
            "title": issue.feature.title,
            "featureType": issue.feature_type,
            "property": issue.property,
            "severity": issue.severity,
            "url": _feature_url(issue),
            "embedUrl": embed_url(issue.feature.slug),
            "summary": {
                "supported": [client.label for client in issue.summary.supported],
                "partial": [client.label for client in issue.summary.partial],
                "unsupported": [client.label for client in issue.summary.unsupported],
                "unknown": [client.label for client in issue.summary.unknown],
            },
        }
        for issue in issues
    ]
