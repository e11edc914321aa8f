# File: tests/unit/test_color_resolver.py
"""
Unit tests for color resolution and CSS color normalization.
"""

import pytest
from calendar_summary.processors.color_resolver import ColorResolver, signal_color, to_hex


class NoComputedStyle:
    """Style provider for pages captured without computed styles."""

    def computed_style(self, tag):
        return {}


def resolve(document, selector='#e', ancestor_depth=5):
    node = document.soup.select_one(selector)
    return ColorResolver(document, ancestor_depth=ancestor_depth).resolve(node)


# ==================== Normalization Tests ====================

class TestColorNormalization:
    """Tests for to_hex and signal_color."""

    @pytest.mark.parametrize("value, expected", [
        ("#5484ED", "#5484ed"),
        ("5484ed", "#5484ed"),
        ("#abc", "#aabbcc"),
        ("#5484edff", "#5484ed"),
        ("rgb(84, 132, 237)", "#5484ed"),
        ("rgba(1,2,3,0.5)", "#010203"),
        ("rgb(300, 0, 0)", "#ff0000"),
    ])
    def test_to_hex(self, value, expected):
        assert to_hex(value) == expected

    @pytest.mark.parametrize("value", ["#5484ed00", "rgba(0, 0, 0, 0)", "red", "", None])
    def test_to_hex_rejects(self, value):
        assert to_hex(value) is None

    def test_signal_color_skips_chrome_colors(self):
        assert signal_color("#FFFFFF") is None
        assert signal_color("rgb(0, 0, 0)") is None
        assert signal_color("transparent") is None
        assert signal_color("#51b749") == "#51b749"


# ==================== Resolution Order Tests ====================

class TestColorResolver:
    """Tests for the ordered color rules."""

    def test_palette_id(self, make_document):
        document = make_document('<div id="e" data-color-id="9"></div>')
        assert resolve(document) == "#5484ed"

    def test_unknown_palette_id(self, make_document):
        document = make_document('<div id="e" data-color-id="99"></div>')
        assert resolve(document) is None

    def test_raw_color_attribute(self, make_document):
        document = make_document('<div id="e" data-color="#ABC"></div>')
        assert resolve(document) == "#aabbcc"

    def test_color_class(self, make_document):
        document = make_document('<div id="e" class="event color-11"></div>')
        assert resolve(document) == "#dc2127"

    def test_prefixed_color_class(self, make_document):
        document = make_document('<div id="e" class="event-color-7"></div>')
        assert resolve(document) == "#46d6db"

    def test_border_before_background(self, make_document):
        document = make_document(
            '<div id="e" style="background-color: #fbd75b; border-left: 3px solid rgb(81, 183, 73)"></div>'
        )
        assert resolve(document) == "#51b749"

    def test_white_background_is_ignored(self, make_document):
        document = make_document('<div id="e" style="background-color: #ffffff"></div>')
        assert resolve(document) is None

    def test_descendant_palette_id_beats_own_style(self, make_document):
        document = make_document(
            '<div id="e" style="background-color: #123456"><span data-color-id="9"></span></div>'
        )
        assert resolve(document) == "#5484ed"

    def test_inline_style_without_computed_style(self, make_document):
        document = make_document(
            '<div id="e" style="background: url(x.png) #7ae7bf"></div>',
            style_provider=NoComputedStyle()
        )
        assert resolve(document) == "#7ae7bf"

    def test_ancestor_palette_id(self, make_document):
        document = make_document('<div data-color-id="4"><div><div id="e"></div></div></div>')
        assert resolve(document) == "#ff887c"

    def test_ancestor_search_is_bounded(self, make_document):
        document = make_document('<div data-color-id="4"><div><div id="e"></div></div></div>')
        assert resolve(document, ancestor_depth=1) is None

    def test_ancestor_style_is_not_inherited(self, make_document):
        document = make_document('<div style="background-color: #5484ed"><div id="e"></div></div>')
        assert resolve(document) is None
