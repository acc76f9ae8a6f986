#!/usr/bin/env python3
"""
Agricultural Calendar Engine
Component: Calendar Assembler

Runs the timeline, classification and mapping steps over one worksheet and
packages the result as a CalendarDocument with color statistics.
"""

import logging
from typing import Dict, List, Optional

from ..config import DEFAULT_OPTIONS, ParserOptions
from ..diagnostics import DiagnosticContext
from ..models import (
    Activity, CalendarDocument, ColorSource, ColorStatistics, DocumentMetadata, Grid,
    ScheduleEntry,
)
from ..palettes import WHITE
from .activity_classifier import ActivityClassifier
from .color_resolver import ColorResolver
from .schedule_mapper import ScheduleMapper
from .timeline_builder import TimelineBuilder

logger = logging.getLogger(__name__)


def _is_visible(color: Optional[str]) -> bool:
    return bool(color) and color.upper() != WHITE


def compute_color_statistics(activities: List[Activity], schedule: List[ScheduleEntry]) -> ColorStatistics:
    """Read-side aggregate over detected colors; has no effect on the document itself."""
    detected_by_activity: Dict[str, int] = {}
    colored_cells = 0
    colored_periods = set()
    unique_colors = set()

    for entry in schedule:
        if not _is_visible(entry.color):
            continue
        colored_periods.add(entry.period_index)
        unique_colors.add(entry.color)
        if entry.color_source == ColorSource.DETECTED:
            colored_cells += 1
            detected_by_activity[entry.activity_id] = detected_by_activity.get(entry.activity_id, 0) + 1

    for activity in activities:
        if _is_visible(activity.color):
            unique_colors.add(activity.color)

    total = len(activities)
    with_color = sum(1 for activity in activities if detected_by_activity.get(activity.id))
    percentage = round(with_color / total * 100, 1) if total else 0.0

    return ColorStatistics(
        records_with_color=with_color,
        total_records=total,
        color_percentage=percentage,
        unique_colors=sorted(unique_colors),
        colored_cells=colored_cells,
        colored_periods=len(colored_periods),
    )


class CalendarAssembler:
    """Orchestrates one parse call over one worksheet."""

    def __init__(self, options: ParserOptions = DEFAULT_OPTIONS, resolver: Optional[ColorResolver] = None):
        self.options = options
        self.timeline_builder = TimelineBuilder(options)
        self.classifier = ActivityClassifier(options)
        self.mapper = ScheduleMapper(options, resolver or ColorResolver())

    def assemble(
        self,
        grid: Grid,
        filename_hint: Optional[str] = None,
        diagnostics: Optional[DiagnosticContext] = None,
    ) -> CalendarDocument:
        """
        Parse one worksheet into a CalendarDocument.

        Args:
            grid: Decoded worksheet values and styles
            filename_hint: Optional filename or title used only as classification evidence
            diagnostics: Call-scoped diagnostic context (a fresh one is created when omitted)

        Raises:
            StructuralFailure: when the worksheet has no recognizable timeline header
        """
        if diagnostics is None:
            diagnostics = DiagnosticContext(max_cell_logs=self.options.max_cell_logs)

        timeline = self.timeline_builder.build(grid)
        activities = self.classifier.extract_activities(grid, timeline, diagnostics)
        classification = self.classifier.classify_document(grid, timeline, filename_hint)

        schedule: List[ScheduleEntry] = []
        colored_activities: List[Activity] = []
        for activity in activities:
            entries = self.mapper.map_activity(grid, activity, timeline, diagnostics)
            schedule.extend(entries)
            representative = entries[0].color if entries else None
            colored_activities.append(activity.model_copy(update={'color': representative}))

        statistics = compute_color_statistics(colored_activities, schedule)

        if diagnostics.forced_activities:
            diagnostics.add_note(
                f"{len(diagnostics.forced_activities)} activities had no detectable formatting"
            )

        logger.info(
            f"Parsed sheet '{grid.name}': {classification.calendar_type.value} calendar, "
            f"commodity='{classification.commodity}', {len(timeline.periods)} periods, "
            f"{len(colored_activities)} activities, {len(schedule)} schedule entries"
        )

        return CalendarDocument(
            calendar_type=classification.calendar_type,
            commodity=classification.commodity,
            title=classification.title,
            timeline=timeline,
            activities=colored_activities,
            schedule=schedule,
            color_statistics=statistics,
            metadata=DocumentMetadata(
                sheet_name=grid.name,
                filename=filename_hint,
                season=classification.season,
                year=classification.year,
                breed_type=classification.breed_type,
            ),
        )
