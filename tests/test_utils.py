from __future__ import annotations

import logging

import pytest

from caniemail.util import css as css_utils
from caniemail.util import log as log_utils
from caniemail.util import text as text_utils


def test_text_utils_branches() -> None:
    assert text_utils.normalize_whitespace(" a\n  b ") == "a b"
    assert text_utils.split_keywords(None) == []
    assert text_utils.split_keywords(" Rounded Corners , radius,, ") == ["rounded corners", "radius"]
    assert text_utils.ellipsize("abc", 0) == ""
    assert text_utils.ellipsize("abc", 1) == "…"
    assert text_utils.ellipsize("abc", 10) == "abc"
    assert text_utils.ellipsize("abcdef", 4) == "abc…"


def test_css_utils() -> None:
    assert css_utils.strip_vendor_prefix("-webkit-border-radius") == "border-radius"
    assert css_utils.strip_vendor_prefix("-o-transition") == "transition"
    assert css_utils.strip_vendor_prefix("--brand-color") == "--brand-color"
    assert css_utils.strip_vendor_prefix("-khtml-opacity") == "-khtml-opacity"

    nodes = list(css_utils.walk(css_utils.parse_stylesheet("@media print { a { COLOR: Red } } }")))
    kinds = [node.type for node in nodes]

    assert kinds == ["at-rule", "qualified-rule", "declaration", "error"]
    assert css_utils.at_rule_name(nodes[0]) == "media"
    assert css_utils.at_rule_params(nodes[0]) == "print"
    assert css_utils.declaration_name(nodes[2]) == "color"
    assert css_utils.declaration_value(nodes[2]) == "Red"


def test_debug_logging(monkeypatch: pytest.MonkeyPatch, caplog: pytest.LogCaptureFixture) -> None:
    monkeypatch.setenv("CANIEMAIL_DEBUG", "0")
    assert log_utils.debug_enabled() is False
    with caplog.at_level(logging.DEBUG, logger="caniemail"):
        log_utils.debug_log("not logged")
    assert "not logged" not in caplog.text

    monkeypatch.setenv("CANIEMAIL_DEBUG", "1")
    assert log_utils.debug_enabled() is True
    with caplog.at_level(logging.DEBUG, logger="caniemail"):
        log_utils.debug_log("fallback used")
    assert "fallback used" in caplog.text


def test_configure_logging_only_in_debug_mode(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setattr(log_utils.LOGGER, "handlers", [])
    monkeypatch.setenv("CANIEMAIL_DEBUG", "")
    log_utils.configure_logging()
    assert log_utils.LOGGER.handlers == []

    monkeypatch.setenv("CANIEMAIL_DEBUG", "1")
    monkeypatch.setattr(log_utils.LOGGER, "level", log_utils.LOGGER.level)
    log_utils.configure_logging()
    log_utils.configure_logging()
    assert len(log_utils.LOGGER.handlers) == 1
    assert log_utils.LOGGER.level == logging.DEBUG
