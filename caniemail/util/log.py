"""Debug logging helpers."""

from __future__ import annotations

import logging
import os

LOGGER = logging.getLogger("caniemail")


def debug_enabled() -> bool:
    """Check debug mode env flag."""
    return os.environ.get("CANIEMAIL_DEBUG", "").strip() == "1"


def debug_log(message: str) -> None:
    """Emit debug logs to stderr in debug mode only."""
    if debug_enabled():
        LOGGER.debug("%s", message)


def configure_logging() -> None:
    """Attach a stderr handler to the package logger when debug mode is on."""
    if not debug_enabled() or LOGGER.handlers:
        return
    handler = logging.StreamHandler()
    handler.setFormatter(logging.Formatter("%(levelname)s %(name)s: %(message)s"))
    LOGGER.addHandler(handler)
    LOGGER.setLevel(logging.DEBUG)
