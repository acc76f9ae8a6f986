"""Parsing pipeline components, leaves first."""

from .color_resolver import ColorResolver
from .timeline_builder import TimelineBuilder
from .activity_classifier import ActivityClassifier, is_activity_label
from .schedule_mapper import ScheduleMapper, keyword_color
from .calendar_assembler import CalendarAssembler, compute_color_statistics
from .workbook_loader import load_workbook_grids

__all__ = [
    'ColorResolver', 'TimelineBuilder', 'ActivityClassifier', 'is_activity_label',
    'ScheduleMapper', 'keyword_color', 'CalendarAssembler', 'compute_color_statistics',
    'load_workbook_grids',
]
