"""
Unit tests for the ColorResolver component.

Covers each resolution strategy on its own plus the ordered chain.
"""

import pytest

from calendar_engine.components.color_resolver import (
    ColorResolver, apply_tint, direct_color, indexed_color, is_plain_background,
    normalize_hex, pattern_only, red_priority, theme_color,
)
from calendar_engine.models import Cell, ColorRef, FillStyle
from calendar_engine.palettes import NEUTRAL_GRAY


class TestNormalizeHex:
    """Test hex normalization."""

    @pytest.mark.parametrize("raw, expected", [
        ("FF00B0F0", "#00B0F0"),
        ("00B0F0", "#00B0F0"),
        ("#bf9000", "#BF9000"),
        ("  ff993366 ", "#993366"),
    ])
    def test_valid_values(self, raw, expected):
        assert normalize_hex(raw) == expected

    @pytest.mark.parametrize("raw", [None, "", "XYZ", "12345", "GG0000", 123])
    def test_invalid_values_return_none(self, raw):
        assert normalize_hex(raw) is None


class TestApplyTint:
    """Test tint transform."""

    def test_zero_tint_is_identity(self):
        assert apply_tint("#4472C4", 0.0) == "#4472C4"

    def test_positive_tint_lightens(self):
        assert apply_tint("#000000", 0.5) == "#808080"

    def test_negative_tint_darkens(self):
        assert apply_tint("#FFFFFF", -0.5) == "#808080"

    def test_full_tint_reaches_white(self):
        assert apply_tint("#4472C4", 1.0) == "#FFFFFF"


class TestStrategies:
    """Test individual strategies."""

    def test_red_priority_rgb(self):
        assert red_priority(FillStyle.direct("FFFF0000")) == "#FF0000"
        assert red_priority(FillStyle.direct("FE0000")) == "#FF0000"

    def test_red_priority_indexed(self):
        for index in (2, 10, 60, 68):
            assert red_priority(FillStyle.from_index(index)) == "#FF0000"

    def test_red_priority_ignores_other_colors(self):
        assert red_priority(FillStyle.direct("DC143C")) is None
        assert red_priority(FillStyle.from_index(5)) is None

    def test_direct_color_skips_white(self):
        assert direct_color(FillStyle.direct("FFFFFFFF")) is None

    def test_direct_color_uses_background_when_foreground_missing(self):
        fill = FillStyle(pattern_type="gray125", bg_color=ColorRef(rgb="FF008000"))
        assert direct_color(fill) == "#008000"

    def test_indexed_custom_range(self):
        assert indexed_color(FillStyle.from_index(65)) == "#00B0F0"
        assert indexed_color(FillStyle.from_index(66)) == "#BF9000"

    def test_indexed_unknown_is_gray(self):
        assert indexed_color(FillStyle.from_index(99)) == NEUTRAL_GRAY

    def test_theme_without_tint(self):
        assert theme_color(FillStyle.themed(4)) == "#4472C4"

    def test_theme_with_tint(self):
        assert theme_color(FillStyle.themed(1, tint=0.5)) == "#808080"

    def test_unknown_theme_returns_none(self):
        assert theme_color(FillStyle.themed(42)) is None

    def test_pattern_only(self):
        assert pattern_only(FillStyle.pattern_only("solid")) == NEUTRAL_GRAY
        assert pattern_only(FillStyle.pattern_only("none")) is None
        assert pattern_only(FillStyle.direct("FFFFFF")) is None

    def test_plain_background(self):
        assert is_plain_background(FillStyle.direct("FFFFFFFF"))
        assert is_plain_background(FillStyle.themed(0))
        assert is_plain_background(FillStyle.from_index(9))
        assert not is_plain_background(FillStyle.direct("FF00B0F0"))
        assert not is_plain_background(FillStyle.pattern_only())
        assert not is_plain_background(None)


class TestColorResolver:
    """Test the ordered resolution chain."""

    def setup_method(self):
        self.resolver = ColorResolver()

    def test_no_style_resolves_to_none(self):
        assert self.resolver.resolve(Cell(value="x")) is None
        assert self.resolver.resolve(None) is None

    def test_argb_matches_stripped_rgb(self):
        for argb in ("FF00B0F0", "80BF9000", "FF993366", "00FFFF00"):
            with_alpha = self.resolver.resolve(Cell(fill=FillStyle.direct(argb)))
            without_alpha = self.resolver.resolve(Cell(fill=FillStyle.direct(argb[2:])))
            assert with_alpha == without_alpha
            assert self.resolver.resolve(Cell(fill=FillStyle.direct(with_alpha))) == with_alpha

    def test_red_wins_over_other_fields(self):
        fill = FillStyle(
            pattern_type="solid",
            fg_color=ColorRef(rgb="FF00B0F0"),
            bg_color=ColorRef(indexed=10),
            font_color=ColorRef(rgb="FF008000"),
        )
        assert self.resolver.resolve(Cell(fill=fill)) == "#FF0000"

    def test_strategy_names(self):
        assert self.resolver.resolve_with_strategy(Cell(fill=FillStyle.direct("00B0F0"))) == ("#00B0F0", "direct")
        assert self.resolver.resolve_with_strategy(Cell(fill=FillStyle.from_index(66))) == ("#BF9000", "indexed")
        assert self.resolver.resolve_with_strategy(Cell(fill=FillStyle.pattern_only())) == (NEUTRAL_GRAY, "pattern")

    def test_white_fill_is_not_a_color(self):
        assert self.resolver.resolve(Cell(fill=FillStyle.direct("FFFFFFFF"))) is None
        assert self.resolver.resolve(Cell(fill=FillStyle.themed(0))) is None
        assert self.resolver.resolve(Cell(fill=FillStyle.from_index(1))) is None

    def test_malformed_values_never_raise(self):
        fill = FillStyle(
            pattern_type="none",
            fg_color=ColorRef(rgb="not-a-color", indexed="abc", theme="x", tint="bad"),
        )
        assert self.resolver.resolve(Cell(fill=fill)) is None

    def test_failing_strategy_is_skipped(self):
        def broken(fill):
            raise RuntimeError("boom")

        resolver = ColorResolver(strategies=(("broken", broken), ("direct", direct_color)))
        assert resolver.resolve(Cell(fill=FillStyle.direct("008000"))) == "#008000"
