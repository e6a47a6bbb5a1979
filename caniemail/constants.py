"""Constants used across pycaniemail."""

from __future__ import annotations

from typing import Final

from .model import ClientDescriptor, Severity

BASE_URL: Final[str] = "https://www.caniemail.com"
DATA_URL: Final[str] = f"{BASE_URL}/api/data.json"
FEATURE_URL_TEMPLATE: Final[str] = f"{BASE_URL}/features/{{slug}}/"
EMBED_URL_TEMPLATE: Final[str] = "https://embed.caniemail.com/{slug}/"

MAJOR_CLIENTS: Final[tuple[ClientDescriptor, ...]] = (
    ClientDescriptor(family="gmail", platform="desktop-webmail", label="Gmail"),
    ClientDescriptor(family="outlook", platform="windows", label="Outlook Windows"),
    ClientDescriptor(family="outlook", platform="macos", label="Outlook Mac"),
    ClientDescriptor(family="outlook", platform="outlook-com", label="Outlook.com"),
    ClientDescriptor(family="apple-mail", platform="macos", label="Apple Mail"),
    ClientDescriptor(family="apple-mail", platform="ios", label="iOS Mail"),
    ClientDescriptor(family="yahoo", platform="desktop-webmail", label="Yahoo"),
    ClientDescriptor(family="samsung-email", platform="android", label="Samsung Email"),
)

SEVERITY_ORDER: Final[dict[Severity, int]] = {
    "error": 0,
    "warning": 1,
    "success": 2,
}

SEVERITY_ICON_MAP: Final[dict[Severity, str]] = {
    "error": "✖",
    "warning": "▲",
    "success": "✔",
}

SEVERITY_STYLE_MAP: Final[dict[Severity, str]] = {
    "error": "bold red",
    "warning": "bold yellow",
    "success": "bold green",
}

SHOW_CHOICES: Final[tuple[str, ...]] = ("all", "errors", "warnings")

EMPTY_REPORT_LINE: Final[str] = "No email features found. Enter email HTML to analyze compatibility."

DEFAULT_TIMEOUT_SECONDS: Final[float] = 10.0
DATA_TTL_SECONDS: Final[float] = 86_400.0
