#!/usr/bin/env python3
"""
Agricultural Calendar Engine
Component: Activity Classifier

Decides which rows hold real activity names and classifies the whole document
as a seasonal crop calendar or a relative-week production cycle.
"""

import logging
import numbers
import re
from collections import Counter
from typing import Any, List, Optional

from ..config import DEFAULT_OPTIONS, ParserOptions
from ..diagnostics import DiagnosticContext
from ..models import Activity, CalendarType, Classification, Grid, Timeline, cell_text
from ..vocabulary import (
    ABSOLUTE_DATE_PATTERN, AGRICULTURAL_KEYWORDS, BARE_NUMBER_PATTERN, BARE_WEEK_LABEL,
    BREED_TYPES, CROP_COMMODITIES, CYCLE_ONLY_TERMS, DEFAULT_CROP_COMMODITY,
    DEFAULT_POULTRY_COMMODITY, DEFAULT_SEASON, GENERIC_CROP_TERMS, GENERIC_POULTRY_TERMS,
    LEADING_ORDINAL_PATTERN, LONE_ORDINAL_PATTERN, MONTH_PATTERN, NON_ACTIVITY_TOKENS,
    NUMBERED_WEEK_PATTERN, POULTRY_COMMODITIES, POULTRY_PATTERNS, ROMAN_LOWER_PATTERN,
    ROMAN_UPPER_PATTERN, SEASON_TERMS, TITLE_MARKERS, YEAR_PATTERN,
)

logger = logging.getLogger(__name__)


def _normalize_text(text: str) -> str:
    """Lowercase with punctuation and underscores folded to single spaces."""
    return " ".join(re.sub(r'[^a-z0-9]+', ' ', text.lower()).split())


def _contains_term(text: str, term: str) -> bool:
    """Whole-word (optionally plural) match of a vocabulary term."""
    return re.search(rf'\b{re.escape(term)}s?\b', text) is not None


def _starts_with_keyword(text: str) -> bool:
    first_word = text.split()[0].lower() if text.split() else ""
    return any(keyword in first_word for keyword in AGRICULTURAL_KEYWORDS)


def is_activity_label(value: Any) -> bool:
    """
    True when a cell value reads as a genuine activity name.

    Strict on serial-number shapes (bare integers, '3.', '1.2', '(1)', Roman numerals) and known
    header tokens; permissive on everything else. A leading ordinal or number is
    accepted only when an agricultural keyword follows it ('2nd Weeding').
    """
    if value is None or isinstance(value, bool):
        return False
    if isinstance(value, numbers.Number):
        return False

    text = " ".join(cell_text(value).split())
    if not text:
        return False
    if BARE_NUMBER_PATTERN.match(text) or LONE_ORDINAL_PATTERN.match(text):
        return False
    if ROMAN_UPPER_PATTERN.match(text) or ROMAN_LOWER_PATTERN.match(text):
        return False

    lowered = text.lower().rstrip(':').strip()
    if lowered in NON_ACTIVITY_TOKENS:
        return False
    if BARE_WEEK_LABEL.match(lowered) or MONTH_PATTERN.fullmatch(lowered):
        return False

    ordinal = LEADING_ORDINAL_PATTERN.match(text)
    if ordinal:
        return _starts_with_keyword(ordinal.group('rest'))

    return True


def header_texts(grid: Grid, timeline: Timeline) -> List[str]:
    """Non-empty texts of the timeline header rows."""
    texts: List[str] = []
    for row in timeline.header_rows:
        texts.extend(text for text in grid.row_texts(row) if text)
    return texts


class ActivityClassifier:
    """Finds activity rows and classifies the calendar document."""

    def __init__(self, options: ParserOptions = DEFAULT_OPTIONS):
        self.options = options

    # ------------------------------------------------------------------
    # Activities
    # ------------------------------------------------------------------

    def find_activity_column(self, grid: Grid, timeline: Timeline) -> int:
        """Column left of the timeline holding the most activity labels (leftmost on ties)."""
        start_column = timeline.start_column or 0
        if start_column <= 0:
            return 0

        counts = Counter()
        for row in range(timeline.last_header_row + 1, grid.height):
            for col in range(start_column):
                if is_activity_label(grid.value(row, col)):
                    counts[col] += 1

        if not counts:
            return 0
        best = max(counts.values())
        return min(col for col, count in counts.items() if count == best)

    def extract_activities(
        self,
        grid: Grid,
        timeline: Timeline,
        diagnostics: Optional[DiagnosticContext] = None,
    ) -> List[Activity]:
        """One Activity per accepted row below the header rows, in row order."""
        column = self.find_activity_column(grid, timeline)
        activities: List[Activity] = []

        for row in range(timeline.last_header_row + 1, grid.height):
            value = grid.value(row, column)
            if not is_activity_label(value):
                if cell_text(value):
                    logger.debug(f"Skipping row {row}: '{cell_text(value)}' is not an activity label")
                if diagnostics is not None:
                    diagnostics.record_skipped_row(row)
                continue
            activities.append(Activity(
                id=f"activity_{row}",
                name=" ".join(cell_text(value).split()),
                source_row=row,
            ))

        logger.debug(f"Found {len(activities)} activities in column {column} of '{grid.name}'")
        return activities

    # ------------------------------------------------------------------
    # Document classification
    # ------------------------------------------------------------------

    def find_title(self, grid: Grid) -> Optional[str]:
        """First long cell near the top that mentions a calendar/production marker."""
        for row in range(min(self.options.title_scan_rows, grid.height)):
            for text in grid.row_texts(row):
                if len(text) > 10 and any(marker in text.upper() for marker in TITLE_MARKERS):
                    return text
        return None

    def extract_commodity(self, grid: Grid, title: Optional[str], filename_hint: Optional[str]) -> str:
        """
        Poultry vocabulary first (more specific), then crops; document hints before grid text.
        Generic vocabulary falls back to 'layer' / 'maize'; no vocabulary gives ''.
        """
        hint_text = _normalize_text(" ".join(part for part in (title, filename_hint, grid.name) if part))
        grid_text = self._grid_text(grid)

        for text in (hint_text, grid_text):
            commodity = self._specific_commodity(text)
            if commodity:
                return commodity

        combined = f"{hint_text} {grid_text}"
        if any(_contains_term(combined, term) for term in GENERIC_POULTRY_TERMS + CYCLE_ONLY_TERMS):
            return DEFAULT_POULTRY_COMMODITY
        if any(_contains_term(combined, term) for term in GENERIC_CROP_TERMS):
            return DEFAULT_CROP_COMMODITY
        return ""

    @staticmethod
    def _specific_commodity(text: str) -> str:
        if not text:
            return ""
        for commodity, patterns in POULTRY_PATTERNS.items():
            if any(_contains_term(text, pattern) for pattern in patterns):
                return commodity
        for commodity in CROP_COMMODITIES:
            if _contains_term(text, commodity):
                return commodity
        return ""

    @staticmethod
    def _grid_text(grid: Grid) -> str:
        return _normalize_text(" ".join(
            text for row in range(grid.height) for text in grid.row_texts(row) if text
        ))

    def classify_document(
        self,
        grid: Grid,
        timeline: Timeline,
        filename_hint: Optional[str] = None,
    ) -> Classification:
        """Decide commodity and Seasonal vs Cycle from vocabulary and timeline evidence."""
        title = self.find_title(grid)
        commodity = self.extract_commodity(grid, title, filename_hint)

        headers = header_texts(grid, timeline)
        has_absolute = (
            any(period.month_label for period in timeline.periods)
            or any(period.date_range for period in timeline.periods)
            or any(ABSOLUTE_DATE_PATTERN.search(text) for text in headers)
        )
        has_relative = any(NUMBERED_WEEK_PATTERN.search(text) for text in headers)
        grid_text = self._grid_text(grid)
        has_cycle_vocabulary = any(_contains_term(grid_text, term) for term in CYCLE_ONLY_TERMS)

        is_crop = commodity in CROP_COMMODITIES
        is_poultry = commodity in POULTRY_COMMODITIES

        if is_crop and has_absolute:
            calendar_type = CalendarType.SEASONAL
        elif is_poultry and has_relative and not has_absolute:
            calendar_type = CalendarType.CYCLE
        elif has_cycle_vocabulary and not has_absolute:
            calendar_type = CalendarType.CYCLE
        elif has_relative and not has_absolute:
            calendar_type = CalendarType.CYCLE
        elif has_absolute:
            calendar_type = CalendarType.SEASONAL
        else:
            calendar_type = CalendarType.CYCLE if is_poultry else CalendarType.SEASONAL

        if not commodity or (is_poultry and calendar_type == CalendarType.SEASONAL):
            logger.info(
                f"Low-confidence classification for '{grid.name}': "
                f"type={calendar_type.value}, commodity='{commodity}'"
            )

        return Classification(
            calendar_type=calendar_type,
            commodity=commodity,
            title=title,
            season=self.extract_season(title) if calendar_type == CalendarType.SEASONAL else None,
            year=self.extract_year(title),
            breed_type=self.extract_breed_type(title) if calendar_type == CalendarType.CYCLE else None,
        )

    @staticmethod
    def extract_season(title: Optional[str]) -> str:
        if not title:
            return DEFAULT_SEASON
        lowered = title.lower()
        for season in SEASON_TERMS:
            if season in lowered:
                return season
        return DEFAULT_SEASON

    @staticmethod
    def extract_year(title: Optional[str]) -> Optional[int]:
        if not title:
            return None
        match = YEAR_PATTERN.search(title)
        return int(match.group(0)) if match else None

    @staticmethod
    def extract_breed_type(title: Optional[str]) -> Optional[str]:
        if not title:
            return None
        lowered = title.lower()
        for token, breed in BREED_TYPES:
            if token in lowered:
                return breed
        return None
