"""
Unit tests for the ScheduleMapper component.
"""

import pytest

from calendar_engine.components.schedule_mapper import ScheduleMapper, has_content, keyword_color
from calendar_engine.components.timeline_builder import TimelineBuilder
from calendar_engine.config import ParserOptions
from calendar_engine.diagnostics import DiagnosticContext
from calendar_engine.models import Activity, ColorRef, ColorSource, FillStyle, Grid
from calendar_engine.palettes import NEUTRAL_GRAY


class TestKeywordColor:
    """Test the name-based fallback table."""

    @pytest.mark.parametrize("name, expected", [
        ("Post Harvest Handling", "#993366"),
        ("Harvesting", "#008000"),
        ("1st Weeding", "#FF0000"),
        ("2nd Weeding", "#DC143C"),
        ("Third weed control", "#B22222"),
        ("Weed control", "#FF0000"),
        ("Pest and Disease Control", "#FF4500"),
        ("Fertilizer Application", "#FFFF00"),
        ("Site Selection", "#00B0F0"),
        ("Land Preparation", "#BF9000"),
        ("Planting/Sowing", "#000000"),
    ])
    def test_known_keywords(self, name, expected):
        assert keyword_color(name) == expected

    def test_unknown_name(self):
        assert keyword_color("Brooding") is None
        assert keyword_color("") is None


class TestHasContent:
    """Test the content activation rule."""

    def test_values(self):
        assert has_content("x")
        assert has_content(1)
        assert not has_content("")
        assert not has_content("  ")
        assert not has_content("0")
        assert not has_content(0)
        assert not has_content(0.0)
        assert not has_content(None)
        assert not has_content(float("nan"))


class TestScheduleMapper:
    """Test row-to-period mapping."""

    def setup_method(self):
        self.mapper = ScheduleMapper()
        self.builder = TimelineBuilder()

    def build(self, activity_name, cells, styles=None):
        grid = Grid(
            rows=[["", "WK1", "WK2", "WK3", "WK4"], [activity_name] + cells],
            styles=styles or {},
        )
        timeline = self.builder.build(grid)
        activity = Activity(id="activity_1", name=activity_name, source_row=1)
        return grid, timeline, activity

    def test_detected_colors(self):
        grid, timeline, activity = self.build(
            "Land Preparation", ["", "", "", ""],
            styles={(1, 1): FillStyle.direct("FFBF9000"), (1, 2): FillStyle.from_index(66)},
        )
        entries = self.mapper.map_activity(grid, activity, timeline)

        assert [e.period_index for e in entries] == [0, 1]
        assert all(e.color == "#BF9000" for e in entries)
        assert all(e.color_source == ColorSource.DETECTED for e in entries)
        assert all(e.active for e in entries)

    def test_text_content_uses_name_fallback(self):
        grid, timeline, activity = self.build("Harvesting", ["", "x", "0", ""])
        entries = self.mapper.map_activity(grid, activity, timeline)

        assert len(entries) == 1
        assert entries[0].period_index == 1
        assert entries[0].color == "#008000"
        assert entries[0].color_source == ColorSource.ACTIVITY_FALLBACK
        assert entries[0].raw_value == "x"

    def test_pattern_without_color_is_weak_evidence(self):
        grid, timeline, activity = self.build(
            "Brooding", ["", "", "", ""],
            styles={(1, 3): FillStyle.pattern_only("darkGrid")},
        )
        entries = self.mapper.map_activity(grid, activity, timeline)

        assert [(e.period_index, e.color, e.color_source) for e in entries] == [
            (2, NEUTRAL_GRAY, ColorSource.PATTERN_FALLBACK),
        ]

    def test_pattern_without_color_prefers_name_color(self):
        grid, timeline, activity = self.build(
            "Site Selection", ["", "", "", ""],
            styles={(1, 1): FillStyle.pattern_only()},
        )
        entries = self.mapper.map_activity(grid, activity, timeline)

        assert entries[0].color == "#00B0F0"
        assert entries[0].color_source == ColorSource.ACTIVITY_FALLBACK

    def test_font_color_activates(self):
        grid, timeline, activity = self.build(
            "Planting", ["", "", "", ""],
            styles={(1, 4): FillStyle(font_color=ColorRef(rgb="FF008000"))},
        )
        entries = self.mapper.map_activity(grid, activity, timeline)

        assert [e.period_index for e in entries] == [3]
        assert entries[0].color == "#000000"

    def test_white_background_is_not_active(self):
        grid, timeline, activity = self.build(
            "Fertilizer Application", ["", "x", "", ""],
            styles={(1, 1): FillStyle.direct("FFFFFFFF"), (1, 3): FillStyle.direct("FFFFFFFF")},
        )
        entries = self.mapper.map_activity(grid, activity, timeline)

        assert [e.period_index for e in entries] == [1]

    def test_forced_fallback_when_nothing_detected(self):
        grid, timeline, activity = self.build("Pest and Disease Control", ["", "", "", ""])
        diagnostics = DiagnosticContext()
        entries = self.mapper.map_activity(grid, activity, timeline, diagnostics)

        assert [e.period_index for e in entries] == [0, 1, 2, 3]
        assert all(e.color == "#FF4500" for e in entries)
        assert all(e.color_source == ColorSource.ACTIVITY_FALLBACK for e in entries)
        assert diagnostics.forced_activities == ["Pest and Disease Control"]

    def test_forced_fallback_without_keyword_uses_gray(self):
        grid, timeline, activity = self.build("Cleaning", ["", "", "", ""])
        entries = self.mapper.map_activity(grid, activity, timeline)

        assert len(entries) == 4
        assert all(e.color == NEUTRAL_GRAY for e in entries)
        assert all(e.color_source == ColorSource.PATTERN_FALLBACK for e in entries)

    def test_forced_fallback_can_be_disabled(self):
        mapper = ScheduleMapper(ParserOptions(force_fallback=False))
        grid, timeline, activity = self.build("Cleaning", ["", "", "", ""])
        assert mapper.map_activity(grid, activity, timeline) == []

    def test_cell_logging_is_bounded(self):
        grid, timeline, activity = self.build("Harvesting", ["x", "x", "x", "x"])
        diagnostics = DiagnosticContext(max_cell_logs=2)
        self.mapper.map_activity(grid, activity, timeline, diagnostics)

        assert diagnostics.cell_logs_emitted == 2
