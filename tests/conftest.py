from __future__ import annotations

import json
from pathlib import Path
from typing import Any

import pytest

from caniemail.dataset import parse_dataset
from caniemail.index import build_feature_index
from caniemail.model import FeatureIndex, ReferenceDataset


def _stats(**clients: dict[str, str]) -> dict[str, dict[str, dict[str, str]]]:
    stats: dict[str, dict[str, dict[str, str]]] = {}
    for key, versions in clients.items():
        family, platform = key.split("__")
        stats.setdefault(family.replace("_", "-"), {})[platform.replace("_", "-")] = versions
    return stats


def build_payload() -> dict[str, Any]:
    return {
        "api_version": "1.0.4",
        "last_update_date": "2024-05-01 10:00:00 +0000",
        "nicenames": {
            "family": {"gmail": "Gmail", "outlook": "Outlook"},
            "platform": {"windows": "Windows"},
            "support": {"supported": "Supported"},
            "category": {"css": "CSS"},
        },
        "data": [
            {
                "slug": "css-border-radius",
                "title": "border-radius",
                "description": "Rounded corners.",
                "url": "https://www.caniemail.com/features/css-border-radius/",
                "category": "css",
                "tags": [],
                "keywords": "rounded corners, radius",
                "last_test_date": "2019-08-05",
                "test_url": "https://www.caniemail.com/tests/css-border-radius.html",
                "test_results_url": None,
                "stats": _stats(
                    gmail__desktop_webmail={"2019-08": "y"},
                    outlook__windows={"2013": "n", "2019": "n"},
                    outlook__macos={"16.80": "y"},
                    outlook__outlook_com={"2019-08": "y"},
                    apple_mail__macos={"12.4": "y"},
                    apple_mail__ios={"12.4": "y"},
                    yahoo__desktop_webmail={"2019-08": "y"},
                    samsung_email__android={"6.0": "y"},
                ),
                "notes": None,
                "notes_by_num": None,
            },
            {
                "slug": "css-linear-gradient",
                "title": "linear-gradient()",
                "description": "",
                "url": "https://www.caniemail.com/features/css-linear-gradient/",
                "category": "css",
                "keywords": "gradient",
                "stats": _stats(
                    gmail__desktop_webmail={"2019-08": "a #1"},
                    apple_mail__macos={"12.4": "y"},
                ),
                "notes_by_num": {"1": "Not supported in Gmail IMAP accounts."},
            },
            {
                "slug": "css-variables",
                "title": "CSS Variables",
                "description": "Custom properties.",
                "url": "https://www.caniemail.com/features/css-variables/",
                "category": "css",
                "keywords": "custom properties, var",
                "stats": _stats(
                    gmail__desktop_webmail={"2020-01": "n"},
                    apple_mail__ios={"13": "y"},
                ),
            },
            {
                "slug": "css-at-media",
                "title": "@media",
                "url": "https://www.caniemail.com/features/css-at-media/",
                "category": "css",
                "keywords": "media queries",
                "stats": _stats(apple_mail__ios={"13": "y"}),
            },
            {
                "slug": "css-at-media-prefers-color-scheme",
                "title": "@media (prefers-color-scheme)",
                "url": "https://www.caniemail.com/features/css-at-media-prefers-color-scheme/",
                "category": "css",
                "keywords": "dark mode",
                "stats": _stats(
                    apple_mail__macos={"12.4": "y"},
                    gmail__desktop_webmail={"2020-01": "u"},
                ),
            },
            {
                "slug": "html-style",
                "title": "<style> element",
                "url": "https://www.caniemail.com/features/html-style/",
                "category": "html",
                "keywords": "style, embedded styles",
                "stats": _stats(gmail__desktop_webmail={"2019-08": "y"}),
            },
            {
                "slug": "html-role",
                "title": "role attribute",
                "url": "https://www.caniemail.com/features/html-role/",
                "category": "html",
                "keywords": "aria, accessibility",
                "stats": _stats(gmail__desktop_webmail={"2019-08": "y"}),
            },
            {
                "slug": "image-webp",
                "title": "WebP image format",
                "category": "image",
                "keywords": "webp",
                "stats": {},
            },
        ],
    }


@pytest.fixture()
def payload() -> dict[str, Any]:
    return build_payload()


@pytest.fixture()
def dataset(payload: dict[str, Any]) -> ReferenceDataset:
    return parse_dataset(payload)


@pytest.fixture()
def index(dataset: ReferenceDataset) -> FeatureIndex:
    return build_feature_index(dataset.features)


@pytest.fixture()
def dataset_file(tmp_path: Path, payload: dict[str, Any]) -> Path:
    path = tmp_path / "data.json"
    path.write_text(json.dumps(payload), encoding="utf-8")
    return path
