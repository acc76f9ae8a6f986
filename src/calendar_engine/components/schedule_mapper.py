#!/usr/bin/env python3
"""
Agricultural Calendar Engine
Component: Schedule Mapper

Maps one activity row onto the timeline: which periods are active and which
color each active period carries.
"""

import logging
import numbers
from typing import List, Optional, Tuple

from ..config import DEFAULT_OPTIONS, ParserOptions
from ..diagnostics import DiagnosticContext
from ..models import Activity, Cell, ColorSource, Grid, ScheduleEntry, Timeline
from ..palettes import NEUTRAL_GRAY
from ..vocabulary import KEYWORD_COLORS, WEEDING_DEFAULT_COLOR, WEEDING_ORDINAL_COLORS
from .color_resolver import ColorResolver, is_plain_background

logger = logging.getLogger(__name__)

# Strategies whose result is a placeholder rather than an authored color
PLACEHOLDER_STRATEGIES = frozenset({"pattern"})


def keyword_color(activity_name: str) -> Optional[str]:
    """Canonical color for an activity name, or None when no keyword matches."""
    name = (activity_name or "").lower()
    if not name:
        return None

    if "weed" in name:
        for tokens, color in WEEDING_ORDINAL_COLORS:
            if any(token in name.split() for token in tokens):
                return color
        return WEEDING_DEFAULT_COLOR

    for keywords, color in KEYWORD_COLORS:
        if any(keyword in name for keyword in keywords):
            return color
    return None


def has_content(value) -> bool:
    """Non-empty content that is not a zero placeholder."""
    if value is None or isinstance(value, bool):
        return bool(value)
    if isinstance(value, numbers.Number):
        return value == value and value != 0
    text = str(value).strip()
    return bool(text) and text != "0"


class ScheduleMapper:
    """Turns an activity row into active ScheduleEntries."""

    def __init__(self, options: ParserOptions = DEFAULT_OPTIONS, resolver: Optional[ColorResolver] = None):
        self.options = options
        self.resolver = resolver or ColorResolver()

    def map_activity(
        self,
        grid: Grid,
        activity: Activity,
        timeline: Timeline,
        diagnostics: Optional[DiagnosticContext] = None,
    ) -> List[ScheduleEntry]:
        """
        Scan the activity's row across every period.

        A row with no active period at all is force-activated across the whole
        timeline with its name-based color so no accepted activity is left empty.
        """
        fallback = keyword_color(activity.name)
        entries: List[ScheduleEntry] = []

        for period in timeline.periods:
            cell = grid.cell(activity.source_row, period.source_column)
            color, strategy = self.resolver.resolve_with_strategy(cell)
            if not self._is_active(cell, color):
                continue

            resolved_color, source = self._entry_color(color, strategy, fallback)
            if diagnostics is not None:
                diagnostics.log_cell(
                    logger,
                    f"'{activity.name}' period {period.index} (col {period.source_column}): "
                    f"color={resolved_color} strategy={strategy} source={source.value}",
                )
            entries.append(ScheduleEntry(
                activity_id=activity.id,
                period_index=period.index,
                active=True,
                color=resolved_color,
                raw_value=cell.text or None,
                color_source=source,
            ))

        if not entries and self.options.force_fallback:
            entries = self._force_activate(activity, timeline, fallback, diagnostics)

        return entries

    @staticmethod
    def _is_active(cell: Cell, color: Optional[str]) -> bool:
        if has_content(cell.value):
            return True
        if color:
            return True
        fill = cell.fill
        if fill is None:
            return False
        if fill.has_pattern and not is_plain_background(fill):
            return True
        return fill.has_font_color

    @staticmethod
    def _entry_color(
        color: Optional[str],
        strategy: Optional[str],
        fallback: Optional[str],
    ) -> Tuple[str, ColorSource]:
        if color and strategy not in PLACEHOLDER_STRATEGIES:
            return color, ColorSource.DETECTED
        if fallback:
            return fallback, ColorSource.ACTIVITY_FALLBACK
        return NEUTRAL_GRAY, ColorSource.PATTERN_FALLBACK

    def _force_activate(
        self,
        activity: Activity,
        timeline: Timeline,
        fallback: Optional[str],
        diagnostics: Optional[DiagnosticContext],
    ) -> List[ScheduleEntry]:
        if not timeline.periods:
            return []

        color = fallback or NEUTRAL_GRAY
        source = ColorSource.ACTIVITY_FALLBACK if fallback else ColorSource.PATTERN_FALLBACK
        logger.warning(
            f"No active periods detected for '{activity.name}' (row {activity.source_row}); "
            f"activating all {len(timeline.periods)} periods with {color}"
        )
        if diagnostics is not None:
            diagnostics.record_forced_activity(activity.name)

        return [
            ScheduleEntry(
                activity_id=activity.id,
                period_index=period.index,
                active=True,
                color=color,
                color_source=source,
            )
            for period in timeline.periods
        ]
