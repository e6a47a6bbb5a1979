"""Reference dataset parsing and the process-wide snapshot cache."""

from __future__ import annotations

from collections.abc import Callable
from dataclasses import dataclass
import json
from pathlib import Path
import threading
import time
from typing import Any, cast

from .constants import DATA_TTL_SECONDS, DATA_URL, DEFAULT_TIMEOUT_SECONDS
from .exceptions import DatasetError
from .http import fetch_dataset_payload
from .index import build_feature_index
from .model import Feature, FeatureIndex, ReferenceDataset
from .util.log import debug_log

_REQUIRED_FIELDS = ("slug", "category", "title")


def _field(record: dict[str, object], snake: str, camel: str) -> object:
    value = record.get(snake)
    if value is None:
        value = record.get(camel)
    return value


def _optional_str(value: object) -> str | None:
    if isinstance(value, str) and value.strip():
        return value
    return None


def _parse_stats(raw: object) -> dict[str, dict[str, dict[str, str]]]:
    if not isinstance(raw, dict):
        return {}
    stats: dict[str, dict[str, dict[str, str]]] = {}
    for family, platforms in raw.items():
        if not isinstance(platforms, dict):
            continue
        stats[str(family)] = {
            str(platform): {str(version): str(code) for version, code in versions.items()}
            for platform, versions in platforms.items()
            if isinstance(versions, dict)
        }
    return stats


def _parse_notes_by_num(raw: object) -> dict[str, str]:
    if not isinstance(raw, dict):
        return {}
    return {
        str(key).strip(): value.strip()
        for key, value in raw.items()
        if isinstance(value, str) and value.strip()
    }


def parse_feature(record: dict[str, object]) -> Feature | None:
    """Build a Feature from one dataset record, or None if it lacks an identity."""
    if any(not isinstance(record.get(name), str) or not record.get(name) for name in _REQUIRED_FIELDS):
        return None

    raw_tags = record.get("tags")
    tags = tuple(tag for tag in raw_tags if isinstance(tag, str)) if isinstance(raw_tags, list) else ()
    description = record.get("description")

    return Feature(
        slug=cast(str, record["slug"]),
        category=cast(str, record["category"]),
        title=cast(str, record["title"]),
        description=description if isinstance(description, str) else "",
        url=_optional_str(record.get("url")) or "",
        keywords=_optional_str(record.get("keywords")),
        stats=_parse_stats(record.get("stats")),
        notes_by_num=_parse_notes_by_num(_field(record, "notes_by_num", "notesByNum")),
        notes=_optional_str(record.get("notes")),
        tags=tags,
        last_test_date=_optional_str(_field(record, "last_test_date", "lastTestDate")),
        test_url=_optional_str(_field(record, "test_url", "testUrl")),
        test_results_url=_optional_str(_field(record, "test_results_url", "testResultsUrl")),
    )


def parse_dataset(payload: Any, source: str = DATA_URL) -> ReferenceDataset:
    """Convert a raw caniemail payload (snake_case or camelCase keys)."""
    if not isinstance(payload, dict):
        raise DatasetError(source, cause="top-level value is not an object")
    raw_features = payload.get("data")
    if not isinstance(raw_features, list):
        raise DatasetError(source, cause="missing feature list")

    features: list[Feature] = []
    seen_slugs: set[str] = set()
    for record in raw_features:
        feature = parse_feature(record) if isinstance(record, dict) else None
        if feature is None:
            debug_log(f"Skipping dataset record without slug/category/title: {record!r:.80}")
            continue
        if feature.slug in seen_slugs:
            debug_log(f"Skipping duplicate dataset slug {feature.slug}")
            continue
        seen_slugs.add(feature.slug)
        features.append(feature)

    raw_nicenames = payload.get("nicenames")
    nicenames = {
        str(group): {str(key): str(label) for key, label in labels.items()}
        for group, labels in (raw_nicenames.items() if isinstance(raw_nicenames, dict) else ())
        if isinstance(labels, dict)
    }

    return ReferenceDataset(
        api_version=str(_field(payload, "api_version", "apiVersion") or ""),
        last_update_date=str(_field(payload, "last_update_date", "lastUpdateDate") or ""),
        features=tuple(features),
        nicenames=nicenames,
    )


def load_dataset_file(path: str | Path) -> ReferenceDataset:
    """Read a local copy of the dataset JSON."""
    path = Path(path)
    try:
        payload = json.loads(path.read_text(encoding="utf-8"))
    except OSError as exc:
        raise DatasetError(str(path), cause=exc.__class__.__name__) from exc
    except json.JSONDecodeError as exc:
        raise DatasetError(str(path), cause="invalid JSON") from exc
    return parse_dataset(payload, source=str(path))


def fetch_reference_dataset(timeout: float = DEFAULT_TIMEOUT_SECONDS) -> ReferenceDataset:
    """Download and parse the caniemail.com dataset."""
    return parse_dataset(fetch_dataset_payload(timeout=timeout))


@dataclass(frozen=True)
class DatasetSnapshot:
    dataset: ReferenceDataset
    index: FeatureIndex
    loaded_at: float


class DatasetCache:
    """Owns one immutable dataset snapshot and replaces it when it expires.

    Readers get a complete snapshot (dataset plus its index); a refresh
    builds a new snapshot and swaps it in, never mutating the old one.
    """

    def __init__(
        self,
        loader: Callable[[], ReferenceDataset] = fetch_reference_dataset,
        ttl: float = DATA_TTL_SECONDS,
        clock: Callable[[], float] = time.monotonic,
    ) -> None:
        self._loader = loader
        self._ttl = ttl
        self._clock = clock
        self._snapshot: DatasetSnapshot | None = None
        self._lock = threading.Lock()

    @property
    def snapshot(self) -> DatasetSnapshot | None:
        return self._snapshot

    def is_expired(self) -> bool:
        snapshot = self._snapshot
        return snapshot is None or self._clock() - snapshot.loaded_at >= self._ttl

    def get(self) -> DatasetSnapshot:
        """Return the current snapshot, loading or refreshing it if needed."""
        snapshot = self._snapshot
        if snapshot is not None and not self.is_expired():
            return snapshot
        with self._lock:
            if self._snapshot is None or self.is_expired():
                debug_log("Loading caniemail reference dataset")
                self.replace(self._loader())
            return cast(DatasetSnapshot, self._snapshot)

    def replace(self, dataset: ReferenceDataset) -> DatasetSnapshot:
        """Swap in a new dataset and its freshly built index."""
        snapshot = DatasetSnapshot(
            dataset=dataset,
            index=build_feature_index(dataset.features),
            loaded_at=self._clock(),
        )
        self._snapshot = snapshot
        return snapshot

    def clear(self) -> None:
        self._snapshot = None


_DEFAULT_CACHE = DatasetCache()


def get_snapshot() -> DatasetSnapshot:
    """Return the process-wide dataset snapshot."""
    return _DEFAULT_CACHE.get()
