from __future__ import annotations

import pytest

import caniemail.extract as extract_module
from caniemail.extract import extract_features
from caniemail.util import html as html_utils


def test_inline_vendor_prefix_is_normalized() -> None:
    extracted = extract_features('<div style="-webkit-border-radius:4px">x</div>')

    assert "border-radius" in extracted.css_properties
    assert "-webkit-border-radius" not in extracted.css_properties
    assert extracted.css_values["border-radius"] == frozenset({"4px"})
    assert extracted.css_at_rules == frozenset()


def test_media_feature_decomposition() -> None:
    extracted = extract_features("<style>@media (prefers-color-scheme: dark){}</style>")

    assert {"@media", "@media (prefers-color-scheme)"} <= extracted.css_at_rules


def test_nested_rules_and_at_rule_blocks() -> None:
    html = """
    <style type="text/css">
      @media screen and (max-width: 600px), (orientation) {
        .col { display: none !important; }
      }
      @font-face { font-family: Brand; src: url(brand.woff2); }
      @supports (display: grid) { .grid { display: grid } }
    </style>
    """
    extracted = extract_features(html)

    assert {"display", "font-family", "src"} <= extracted.css_properties
    assert extracted.css_at_rules == frozenset(
        {
            "@media",
            "@media (max-width)",
            "@media (orientation)",
            "@font-face",
            "@supports",
        }
    )
    assert extracted.css_values["display"] == frozenset({"none", "grid"})


def test_malformed_css_still_yields_properties() -> None:
    extracted = extract_features("<style>.a{color:red;;; .b{</style>")

    assert "color" in extracted.css_properties


def test_parser_failure_falls_back_to_pattern_matching(monkeypatch: pytest.MonkeyPatch) -> None:
    def _boom(css: str) -> list[object]:
        raise ValueError(f"cannot parse {len(css)} chars")

    monkeypatch.setattr(extract_module, "parse_stylesheet", _boom)
    html = (
        "<style>/* width: 1px */ .a { color: red; -webkit-box-shadow: none } "
        "@media screen { }</style>"
        '<p style="padding: 0">x</p>'
    )

    extracted = extract_features(html)

    assert extracted.css_properties == frozenset({"color", "padding"})
    assert extracted.css_at_rules == frozenset({"@media"})
    assert extracted.css_values == {}


def test_value_features_are_added_as_properties() -> None:
    extracted = extract_features('<div style="background:linear-gradient(red,blue)">x</div>')

    assert {"background", "linear-gradient"} <= extracted.css_properties
    assert "radial-gradient" not in extracted.css_properties


def test_function_value_features() -> None:
    html = (
        '<td style="width: calc(100% - var(--gutter)); height: clamp(1px, 2vw, 3px); '
        'max-width: fit-content; background-image: repeating-radial-gradient(red, blue)">'
    )

    extracted = extract_features(html)

    assert {
        "calc",
        "css variables",
        "clamp",
        "fit-content",
        "radial-gradient",
        "repeating-radial-gradient",
    } <= extracted.css_properties
    assert "min" not in extracted.css_properties


def test_single_quoted_inline_style_with_inner_quotes() -> None:
    extracted = extract_features("""<p style='font-family: "Helvetica Neue", Arial'>x</p>""")

    assert "font-family" in extracted.css_properties
    assert extracted.css_values["font-family"] == frozenset({'"helvetica neue", arial'})


def test_html_elements_and_attributes() -> None:
    html = (
        "<!DOCTYPE html><TABLE role=\"presentation\"><tr>"
        "<td align='center' data-id=1>x</td></tr></TABLE><!-- note --><br/>"
    )

    extracted = extract_features(html)

    assert extracted.html_elements == frozenset({"table", "tr", "td", "br"})
    assert extracted.html_attributes == frozenset({"role", "align", "data-id"})


def test_extraction_is_idempotent() -> None:
    html = (
        '<html><head><style>@media (max-width:600px){.a{margin:0}}</style></head>'
        '<body style="margin:0;-moz-opacity:.5"><a href="#">x</a></body></html>'
    )

    assert extract_features(html) == extract_features(html)


def test_empty_and_broken_markup_never_raise() -> None:
    assert extract_features("") == extract_features("")
    assert extract_features("").css_properties == frozenset()

    broken = extract_features('<div style="color:red"<p <style>{{{;;:</style')

    assert "color" in broken.css_properties
    assert "div" in broken.html_elements


def test_html_scanners() -> None:
    html = """<div style="color: red" data-style='x'><style media="all">a{}</style><p style="">"""

    assert list(html_utils.inline_styles(html)) == ["color: red", "x"]
    assert list(html_utils.style_blocks(html)) == ["a{}"]
    assert html_utils.tag_names(html) == {"div", "style", "p"}
    assert html_utils.attribute_names(html) == {"style", "data-style", "media"}


def test_deeply_nested_values_fall_back_instead_of_raising() -> None:
    inline = extract_features('<div style="width:' + "(" * 3000 + '">x</div>')
    block = extract_features("<style>@media " + "(" * 3000 + "{}</style>")

    assert "width" in inline.css_properties
    assert "@media" in block.css_at_rules


def test_text_dropped_by_the_parser_is_still_scanned() -> None:
    bare = extract_features("<style>color:red</style>")
    stray_brace = extract_features('<p style="color:red}; margin:0">x</p>')

    assert "color" in bare.css_properties
    assert {"color", "margin"} <= stray_brace.css_properties
