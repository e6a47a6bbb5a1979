"""Exception types for pycaniemail."""

from __future__ import annotations


class CaniemailError(Exception):
    """Base exception for expected application errors."""


class NetworkError(CaniemailError):
    """Raised when a network operation fails."""

    def __init__(self, url: str, *, cause: str | None = None) -> None:
        detail = f"Unable to connect to caniemail.com for {url}"
        if cause:
            detail = f"{detail} ({cause})"
        super().__init__(detail)


class RequestTimeoutError(CaniemailError):
    """Raised when a request times out."""

    def __init__(self, url: str) -> None:
        super().__init__(f"Request timed out for {url}")


class HttpStatusError(CaniemailError):
    """Raised when a non-200 HTTP response is returned."""

    def __init__(self, status_code: int, url: str) -> None:
        self.status_code = status_code
        self.url = url
        super().__init__(f"Request failed with HTTP {status_code} for {url}")


class ContentError(CaniemailError):
    """Raised when a response body is empty or is not JSON."""

    def __init__(self, url: str) -> None:
        super().__init__(f"Received empty or invalid JSON content from {url}")


class DatasetError(CaniemailError):
    """Raised when a reference dataset cannot be read or has the wrong shape."""

    def __init__(self, source: str, *, cause: str | None = None) -> None:
        self.source = source
        detail = f"Invalid caniemail dataset from {source}"
        if cause:
            detail = f"{detail} ({cause})"
        super().__init__(detail)
