"""Resolve per-client support levels from feature stats."""

from __future__ import annotations

from collections.abc import Sequence
import re
from typing import cast

from .constants import MAJOR_CLIENTS
from .model import ClientDescriptor, Feature, Severity, SupportLevel, SupportResult, SupportSummary

_LEVEL_RE = re.compile(r"^([ynau])\s*(?:#(\d+))?$")


def resolve_support(feature: Feature, family: str, platform: str) -> SupportResult | None:
    """Return the support level of the latest recorded version.

    ``None`` means the dataset has no stats for this client at all, which
    is different from an explicit ``u`` (unknown) entry. Versions are read
    in dataset order; the last key is taken as the most recent.
    """
    family_stats = feature.stats.get(family)
    if not family_stats:
        return None
    platform_stats = family_stats.get(platform)
    if not platform_stats:
        return None

    latest_version = list(platform_stats)[-1]
    raw_value = platform_stats[latest_version]
    match = _LEVEL_RE.match(raw_value) if isinstance(raw_value, str) else None
    if match is None:
        return SupportResult(level="u", version=latest_version)

    note_num = match.group(2)
    note = feature.notes_by_num.get(note_num) if note_num else None
    return SupportResult(level=cast(SupportLevel, match.group(1)), version=latest_version, note=note)


def summarize_support(
    feature: Feature,
    clients: Sequence[ClientDescriptor] = MAJOR_CLIENTS,
) -> SupportSummary:
    """Partition the client panel by the feature's latest support level."""
    buckets: dict[str, list[ClientDescriptor]] = {
        "supported": [],
        "partial": [],
        "unsupported": [],
        "unknown": [],
    }
    for client in clients:
        support = resolve_support(feature, client.family, client.platform)
        if support is None or support.level == "u":
            buckets["unknown"].append(client)
        elif support.level == "y":
            buckets["supported"].append(client)
        elif support.level == "a":
            buckets["partial"].append(client)
        else:
            buckets["unsupported"].append(client)

    return SupportSummary(**{name: tuple(items) for name, items in buckets.items()})


def classify_severity(summary: SupportSummary) -> Severity:
    """Unsupported anywhere is an error; otherwise partial support is a warning."""
    if summary.unsupported:
        return "error"
    if summary.partial:
        return "warning"
    return "success"
