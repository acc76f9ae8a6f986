#!/usr/bin/env python3
"""
Agricultural Calendar Engine
Custom exceptions for better error handling
"""

from typing import Optional


class CalendarParsingError(Exception):
    """Base exception for the calendar parsing engine."""
    pass


class ConfigError(CalendarParsingError):
    """Exception raised for invalid parser options."""
    pass


class WorkbookLoadError(CalendarParsingError):
    """Raised when a workbook cannot be opened or decoded."""
    pass


class StructuralFailure(CalendarParsingError):
    """Raised when no month, week or date header can be found in a worksheet."""

    def __init__(self, reason: str, sheet_name: Optional[str] = None):
        self.reason = reason
        self.sheet_name = sheet_name
        if sheet_name:
            super().__init__(f"Sheet '{sheet_name}': {reason}")
        else:
            super().__init__(reason)
