#!/usr/bin/env python3
"""
Agricultural Calendar Engine
Component: Timeline Builder

Finds the month, week and date-range header rows near the top of a worksheet and
rebuilds the ordered list of periods, one per timeline column.
"""

import logging
from dataclasses import dataclass, field
from typing import Callable, List, Optional, Tuple

from ..config import DEFAULT_OPTIONS, ParserOptions
from ..exceptions import StructuralFailure
from ..models import Grid, MonthGroup, Period, Timeline
from ..vocabulary import (
    DATE_RANGE_PATTERN, DAY_NUMBER_PATTERN, MONTH_PATTERN, NUMBERED_WEEK_PATTERN, month_key,
)
from .activity_classifier import is_activity_label

logger = logging.getLogger(__name__)


def is_month_cell(text: str) -> bool:
    return bool(text) and MONTH_PATTERN.match(text.strip()) is not None


def is_week_cell(text: str) -> bool:
    return bool(text) and NUMBERED_WEEK_PATTERN.search(text) is not None


def is_date_range_cell(text: str) -> bool:
    return bool(text) and DATE_RANGE_PATTERN.match(text.strip()) is not None


def is_day_number_cell(text: str) -> bool:
    if not text or not DAY_NUMBER_PATTERN.match(text.strip()):
        return False
    return 1 <= int(text) <= 31


def is_date_cell(text: str) -> bool:
    return is_date_range_cell(text) or is_day_number_cell(text)


@dataclass
class HeaderRow:
    """A candidate header row and the columns whose cells matched."""
    row: int
    columns: List[int] = field(default_factory=list)

    @property
    def match_count(self) -> int:
        return len(self.columns)


class TimelineBuilder:
    """Reconstructs the timeline from header rows."""

    def __init__(self, options: ParserOptions = DEFAULT_OPTIONS):
        self.options = options

    def build(self, grid: Grid) -> Timeline:
        """
        Build the Timeline of a worksheet.

        Raises:
            StructuralFailure: when no month, week or date header row is found
        """
        month_row = self._best_row(grid, is_month_cell)
        week_row = self._best_row(grid, is_week_cell)
        date_row = self._find_date_row(grid, month_row, week_row)

        if not (month_row or week_row or date_row):
            raise StructuralFailure(
                f"No month, week or date header found in the first {self.options.header_scan_rows} rows",
                sheet_name=grid.name,
            )

        start_column = self._start_column(month_row, week_row, date_row)
        end_column = max(
            header.columns[-1] for header in (month_row, week_row, date_row) if header
        )
        logger.debug(
            f"Timeline headers in '{grid.name}': month={month_row and month_row.row}, "
            f"week={week_row and week_row.row}, date={date_row and date_row.row}, "
            f"columns {start_column}-{end_column}"
        )

        periods, months = self._walk_columns(grid, start_column, end_column, month_row, week_row, date_row)
        header_rows = sorted({header.row for header in (month_row, week_row, date_row) if header})
        return Timeline(periods=periods, months=months, header_rows=header_rows)

    # ------------------------------------------------------------------
    # Header row detection
    # ------------------------------------------------------------------

    def _scan_rows(self, grid: Grid) -> range:
        return range(min(self.options.header_scan_rows, grid.height))

    def _best_row(self, grid: Grid, predicate: Callable[[str], bool]) -> Optional[HeaderRow]:
        """Row with the most matching cells, provided it reaches the minimum count."""
        best: Optional[HeaderRow] = None
        for row in self._scan_rows(grid):
            texts = grid.row_texts(row)
            columns = [col for col, text in enumerate(texts) if predicate(text)]
            if len(columns) < self.options.min_header_matches:
                continue
            if best is None or len(columns) > best.match_count:
                best = HeaderRow(row=row, columns=columns)
        return best

    def _find_date_row(
        self,
        grid: Grid,
        month_row: Optional[HeaderRow],
        week_row: Optional[HeaderRow],
    ) -> Optional[HeaderRow]:
        """
        Date rows are easy to confuse with numeric data rows, so a date row is only
        accepted next to a month/week row, or on its own when it holds real DD-DD ranges.
        Next to a month/week row, a row of bare day numbers must also carry no activity
        label and read as a day sequence.
        """
        anchor_rows = [header for header in (month_row, week_row) if header]
        anchors = [header.row for header in anchor_rows]
        taken = set(anchors)
        label_columns = min((header.columns[0] for header in anchor_rows), default=0)
        best: Optional[HeaderRow] = None
        for row in self._scan_rows(grid):
            if row in taken:
                continue
            if anchors and min(abs(row - anchor) for anchor in anchors) > 2:
                continue
            texts = grid.row_texts(row)
            ranges = [col for col, text in enumerate(texts) if is_date_range_cell(text)]
            if len(ranges) >= self.options.min_header_matches:
                columns = ranges
            elif anchors:
                columns = [col for col, text in enumerate(texts) if is_date_cell(text)]
                if len(columns) < self.options.min_header_matches:
                    continue
                if not self._is_day_header(grid, row, columns, label_columns):
                    logger.debug(f"Row {row} of '{grid.name}' holds numbers but is not a date header")
                    continue
            else:
                continue
            if best is None or len(columns) > best.match_count:
                best = HeaderRow(row=row, columns=columns)
        return best

    @staticmethod
    def _is_day_header(grid: Grid, row: int, columns: List[int], label_columns: int) -> bool:
        """
        A bare-day-number row is a header only when no activity label sits left of the
        timeline and its numbers never repeat back to back; they rise, or restart low
        at a new month (1, 8, 15, 22, 1, 8, ...).
        """
        if any(is_activity_label(grid.value(row, col)) for col in range(label_columns)):
            return False

        days = [int(grid.text(row, col)) for col in columns if is_day_number_cell(grid.text(row, col))]
        for previous, current in zip(days, days[1:]):
            if current == previous:
                return False
            if current < previous and current > 7:
                return False
        return True

    @staticmethod
    def _start_column(
        month_row: Optional[HeaderRow],
        week_row: Optional[HeaderRow],
        date_row: Optional[HeaderRow],
    ) -> int:
        indicator_rows = [header for header in (month_row, week_row) if header]
        if not indicator_rows:
            indicator_rows = [date_row]
        return min(header.columns[0] for header in indicator_rows)

    # ------------------------------------------------------------------
    # Column walk
    # ------------------------------------------------------------------

    def _walk_columns(
        self,
        grid: Grid,
        start_column: int,
        end_column: int,
        month_row: Optional[HeaderRow],
        week_row: Optional[HeaderRow],
        date_row: Optional[HeaderRow],
    ):
        periods: List[Period] = []
        months: List[MonthGroup] = []
        current_month: Optional[str] = None
        current_key = ""
        month_start = 0
        week_in_month = 0

        for col in range(start_column, end_column + 1):
            if month_row:
                month_text = grid.text(month_row.row, col)
                key = month_key(month_text)
                if key and key != current_key:
                    if current_month is not None:
                        months.append(MonthGroup(
                            name=current_month,
                            start_period_index=month_start,
                            period_count=len(periods) - month_start,
                        ))
                    current_month = month_text.strip()
                    current_key = key
                    month_start = len(periods)
                    week_in_month = 0

            week_in_month += 1
            week_label = grid.text(week_row.row, col) if week_row else ""
            if not week_label:
                number = week_in_month if current_month is not None else len(periods) + 1
                week_label = f"WK{number}"

            date_range = grid.text(date_row.row, col) if date_row else ""

            periods.append(Period(
                index=len(periods),
                week_label=week_label,
                month_label=current_month,
                date_range=date_range or None,
                source_column=col,
            ))

        if current_month is not None:
            months.append(MonthGroup(
                name=current_month,
                start_period_index=month_start,
                period_count=len(periods) - month_start,
            ))

        return periods, months


def month_spans(timeline: Timeline) -> List[Tuple[str, int]]:
    """(month name, number of periods) pairs in timeline order; repeated months stay separate."""
    return [(group.name, group.period_count) for group in timeline.months]
