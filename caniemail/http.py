"""HTTP client layer for pycaniemail."""

from __future__ import annotations

import json
from typing import Any

import httpx

from ._version import __version__
from .constants import DATA_URL, DEFAULT_TIMEOUT_SECONDS
from .exceptions import ContentError, HttpStatusError, NetworkError, RequestTimeoutError
from .util.log import debug_log


def _build_headers() -> dict[str, str]:
    return {
        "User-Agent": f"pycaniemail/{__version__}",
        "Accept": "application/json",
    }


def fetch_text(url: str, timeout: float = DEFAULT_TIMEOUT_SECONDS) -> str:
    """Fetch a document with deterministic behavior and friendly failures."""
    retry_once = True
    while True:
        try:
            with httpx.Client(
                timeout=timeout, follow_redirects=True, headers=_build_headers()
            ) as client:
                response = client.get(url)
        except httpx.TimeoutException as exc:
            raise RequestTimeoutError(url) from exc
        except httpx.ConnectError as exc:
            if retry_once:
                retry_once = False
                debug_log(f"Connect error for {url}; retrying once")
                continue
            raise NetworkError(url, cause=exc.__class__.__name__) from exc
        except httpx.RequestError as exc:
            raise NetworkError(url, cause=exc.__class__.__name__) from exc

        if response.status_code != 200:
            raise HttpStatusError(response.status_code, str(response.url))

        body = response.text
        if not body.strip():
            raise ContentError(str(response.url))
        return body


def _parse_json_payload(raw: str, url: str) -> Any:
    try:
        return json.loads(raw)
    except json.JSONDecodeError as exc:
        raise ContentError(url) from exc


def fetch_json(url: str, timeout: float = DEFAULT_TIMEOUT_SECONDS) -> Any:
    """Fetch and decode a JSON document."""
    return _parse_json_payload(fetch_text(url, timeout=timeout), url)


def fetch_dataset_payload(timeout: float = DEFAULT_TIMEOUT_SECONDS) -> dict[str, Any]:
    """Download the raw caniemail.com dataset."""
    payload = fetch_json(DATA_URL, timeout=timeout)
    if not isinstance(payload, dict):
        raise ContentError(DATA_URL)
    return payload
