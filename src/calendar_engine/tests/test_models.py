"""
Unit tests for data model validation and parser options.
"""

from datetime import datetime

import pytest

from calendar_engine.config import ParserOptions
from calendar_engine.diagnostics import DiagnosticContext
from calendar_engine.exceptions import ConfigError, StructuralFailure
from calendar_engine.models import (
    Cell, ColorRef, FillStyle, Grid, Period, Timeline, cell_text,
)


class TestParserOptions:
    """Test ParserOptions validation."""

    def test_defaults(self):
        options = ParserOptions()
        assert options.header_scan_rows == 10
        assert options.min_header_matches == 3
        assert options.force_fallback is True

    def test_zero_scan_rows_raises_error(self):
        with pytest.raises(ConfigError, match="header_scan_rows must be a positive integer"):
            ParserOptions(header_scan_rows=0)

    def test_negative_cell_logs_raises_error(self):
        with pytest.raises(ConfigError, match="max_cell_logs"):
            ParserOptions(max_cell_logs=-1)


class TestInputModels:
    """Test Grid, Cell and FillStyle helpers."""

    def test_cell_text(self):
        assert cell_text(None) == ""
        assert cell_text(3.0) == "3"
        assert cell_text(2.5) == "2.5"
        assert cell_text(float("nan")) == ""
        assert cell_text(datetime(2024, 3, 1, 10, 30)) == "2024-03-01"
        assert cell_text("  Harvest ") == "Harvest"

    def test_grid_out_of_range_reads(self):
        grid = Grid(rows=[["a", "b"], ["c"]])
        assert grid.width == 2
        assert grid.value(1, 1) is None
        assert grid.value(9, 9) is None
        assert grid.cell(5, 5) == Cell()
        assert grid.row_texts(7) == []

    def test_from_cells_collects_styles(self):
        fill = FillStyle.direct("FF0000")
        grid = Grid.from_cells([[Cell("x"), Cell(fill=fill)]], name="S")
        assert grid.rows == [["x", None]]
        assert grid.style(0, 1) == fill
        assert grid.cell(0, 1).fill == fill

    def test_fill_style_flags(self):
        assert FillStyle.pattern_only().has_pattern
        assert not FillStyle.pattern_only("none").has_pattern
        assert not FillStyle().has_pattern
        assert FillStyle(font_color=ColorRef(rgb="FF0000")).has_font_color
        assert not FillStyle(font_color=ColorRef()).has_font_color

    def test_fill_colors_order(self):
        fill = FillStyle(fg_color=ColorRef(indexed=5), bg_color=ColorRef(theme=3))
        assert [ref.indexed for ref in fill.fill_colors()] == [5, None]


class TestTimelineValidation:
    """Test Timeline ordering invariants."""

    def test_index_must_match_position(self):
        with pytest.raises(ValueError, match="does not match position"):
            Timeline(periods=[Period(index=1, week_label="WK1", source_column=1)])

    def test_columns_must_increase(self):
        with pytest.raises(ValueError, match="strictly increasing"):
            Timeline(periods=[
                Period(index=0, week_label="WK1", source_column=3),
                Period(index=1, week_label="WK2", source_column=3),
            ])

    def test_empty_timeline_properties(self):
        timeline = Timeline(periods=[])
        assert timeline.start_column is None
        assert timeline.last_header_row == -1


class TestDiagnostics:
    """Test the call-scoped diagnostic context."""

    def test_to_dict(self):
        diagnostics = DiagnosticContext()
        diagnostics.record_skipped_row(4)
        diagnostics.record_forced_activity("Cleaning")
        diagnostics.add_note("note")
        assert diagnostics.to_dict() == {
            'cell_logs_emitted': 0,
            'skipped_rows': [4],
            'forced_activities': ['Cleaning'],
            'notes': ['note'],
        }

    def test_structural_failure_message(self):
        error = StructuralFailure("No header", sheet_name="Sheet2")
        assert str(error) == "Sheet 'Sheet2': No header"
        assert error.reason == "No header"
        assert str(StructuralFailure("No header")) == "No header"
