#!/usr/bin/env python3
"""
Agricultural Calendar Engine
Turns spreadsheet crop calendars and poultry production cycles into normalized schedules
"""

__version__ = "1.0.0"
__author__ = "Agricultural Calendar Team"
__description__ = "Spreadsheet structure inference and color-driven schedule reconstruction"

from .components.calendar_assembler import CalendarAssembler
from .components.workbook_loader import load_workbook_grids
from .config import ParserOptions
from .diagnostics import DiagnosticContext
from .exceptions import CalendarParsingError, ConfigError, StructuralFailure, WorkbookLoadError
from .models import (
    Activity, CalendarDocument, CalendarType, Cell, ColorRef, ColorSource, ColorStatistics,
    FillStyle, Grid, MonthGroup, Period, ScheduleEntry, Timeline,
)
from .result import ProcessingStatus, WorkbookParseResult
from .service import CalendarParsingService

__all__ = [
    'CalendarAssembler', 'CalendarParsingService', 'DiagnosticContext', 'ParserOptions',
    'load_workbook_grids',
    'CalendarParsingError', 'ConfigError', 'StructuralFailure', 'WorkbookLoadError',
    'Activity', 'CalendarDocument', 'CalendarType', 'Cell', 'ColorRef', 'ColorSource',
    'ColorStatistics', 'FillStyle', 'Grid', 'MonthGroup', 'Period', 'ScheduleEntry', 'Timeline',
    'ProcessingStatus', 'WorkbookParseResult',
]
