#!/usr/bin/env python3
"""
Agricultural Calendar Engine
Input dataclasses for decoded worksheets and Pydantic models for parsed calendars
"""

import math
from dataclasses import dataclass, field
from datetime import date, datetime
from enum import Enum
from typing import Any, Dict, List, Optional, Tuple

from pydantic import BaseModel, Field, model_validator


# ---------------------------------------------------------------------------
# Input side: decoded worksheet cells and their fill styles
# ---------------------------------------------------------------------------

@dataclass(frozen=True)
class ColorRef:
    """One color reference as stored by spreadsheet tools (rgb, indexed or theme)."""
    rgb: Optional[str] = None
    indexed: Optional[int] = None
    theme: Optional[int] = None
    tint: float = 0.0

    @property
    def is_empty(self) -> bool:
        return self.rgb is None and self.indexed is None and self.theme is None


@dataclass(frozen=True)
class FillStyle:
    """Raw color-bearing style of a cell: pattern fill colors plus font color."""
    pattern_type: Optional[str] = None
    fg_color: Optional[ColorRef] = None
    bg_color: Optional[ColorRef] = None
    font_color: Optional[ColorRef] = None

    @classmethod
    def direct(cls, hex_value: str, pattern_type: str = "solid") -> 'FillStyle':
        """Solid fill with an RGB or ARGB hex value."""
        return cls(pattern_type=pattern_type, fg_color=ColorRef(rgb=hex_value))

    @classmethod
    def from_index(cls, index: int, pattern_type: str = "solid") -> 'FillStyle':
        """Solid fill referencing the legacy indexed palette."""
        return cls(pattern_type=pattern_type, fg_color=ColorRef(indexed=index))

    @classmethod
    def themed(cls, theme_id: int, tint: float = 0.0, pattern_type: str = "solid") -> 'FillStyle':
        """Solid fill referencing a theme color with an optional tint."""
        return cls(pattern_type=pattern_type, fg_color=ColorRef(theme=theme_id, tint=tint))

    @classmethod
    def pattern_only(cls, pattern_type: str = "solid") -> 'FillStyle':
        """Fill present but carrying no extractable color."""
        return cls(pattern_type=pattern_type)

    @property
    def has_pattern(self) -> bool:
        return bool(self.pattern_type) and self.pattern_type.lower() != "none"

    @property
    def has_font_color(self) -> bool:
        return self.font_color is not None and not self.font_color.is_empty

    def fill_colors(self) -> List[ColorRef]:
        """Foreground then background color references that are set."""
        return [ref for ref in (self.fg_color, self.bg_color) if ref is not None and not ref.is_empty]


def cell_text(value: Any) -> str:
    """Render a raw cell value as stripped text ('' for empty values)."""
    if value is None:
        return ""
    if isinstance(value, bool):
        return str(value)
    if isinstance(value, float):
        if math.isnan(value):
            return ""
        if value.is_integer():
            return str(int(value))
        return str(value)
    if isinstance(value, datetime):
        return value.date().isoformat()
    if isinstance(value, date):
        return value.isoformat()
    return str(value).strip()


@dataclass(frozen=True)
class Cell:
    """A single cell value with its optional fill style."""
    value: Any = None
    fill: Optional[FillStyle] = None

    @property
    def text(self) -> str:
        return cell_text(self.value)


@dataclass
class Grid:
    """
    One decoded worksheet: ragged row-major values plus a (row, column) style map.
    Origin (0, 0) is the top-left cell. The engine never mutates a Grid.
    """
    rows: List[List[Any]]
    styles: Dict[Tuple[int, int], FillStyle] = field(default_factory=dict)
    name: str = "Sheet1"

    @classmethod
    def from_cells(cls, cells: List[List[Cell]], name: str = "Sheet1") -> 'Grid':
        """Build a Grid from rows of Cell objects."""
        rows: List[List[Any]] = []
        styles: Dict[Tuple[int, int], FillStyle] = {}
        for r, row in enumerate(cells):
            rows.append([cell.value for cell in row])
            for c, cell in enumerate(row):
                if cell.fill is not None:
                    styles[(r, c)] = cell.fill
        return cls(rows=rows, styles=styles, name=name)

    @property
    def height(self) -> int:
        return len(self.rows)

    @property
    def width(self) -> int:
        return max((len(row) for row in self.rows), default=0)

    def value(self, row: int, col: int) -> Any:
        if 0 <= row < len(self.rows) and 0 <= col < len(self.rows[row]):
            return self.rows[row][col]
        return None

    def text(self, row: int, col: int) -> str:
        return cell_text(self.value(row, col))

    def style(self, row: int, col: int) -> Optional[FillStyle]:
        return self.styles.get((row, col))

    def cell(self, row: int, col: int) -> Cell:
        return Cell(value=self.value(row, col), fill=self.style(row, col))

    def row_texts(self, row: int) -> List[str]:
        if not 0 <= row < len(self.rows):
            return []
        return [cell_text(value) for value in self.rows[row]]


# ---------------------------------------------------------------------------
# Output side: the parsed calendar document
# ---------------------------------------------------------------------------

class CalendarType(str, Enum):
    """Calendar type enumeration"""
    SEASONAL = "seasonal"
    CYCLE = "cycle"


class ColorSource(str, Enum):
    """Where a schedule entry's color came from"""
    DETECTED = "detected"
    ACTIVITY_FALLBACK = "activity_fallback"
    PATTERN_FALLBACK = "pattern_fallback"


class Period(BaseModel):
    """One timeline column: a week, optionally grouped under a month"""
    index: int
    week_label: str
    month_label: Optional[str] = None
    date_range: Optional[str] = None
    source_column: int

    class Config:
        frozen = True


class MonthGroup(BaseModel):
    """A run of consecutive periods sharing one month label"""
    name: str
    start_period_index: int
    period_count: int

    class Config:
        frozen = True


class Timeline(BaseModel):
    """Ordered sequence of periods with optional month grouping"""
    periods: List[Period]
    months: List[MonthGroup] = Field(default_factory=list)
    header_rows: List[int] = Field(default_factory=list)

    class Config:
        frozen = True

    @model_validator(mode='after')
    def _check_ordering(self) -> 'Timeline':
        previous_column = -1
        for position, period in enumerate(self.periods):
            if period.index != position:
                raise ValueError(f"Period index {period.index} does not match position {position}")
            if period.source_column <= previous_column:
                raise ValueError("Period source columns must be strictly increasing")
            previous_column = period.source_column
        return self

    @property
    def start_column(self) -> Optional[int]:
        return self.periods[0].source_column if self.periods else None

    @property
    def last_header_row(self) -> int:
        return max(self.header_rows) if self.header_rows else -1

    @property
    def has_month_grouping(self) -> bool:
        return bool(self.months)


class Activity(BaseModel):
    """An accepted activity row"""
    id: str
    name: str
    source_row: int
    color: Optional[str] = None

    class Config:
        frozen = True


class ScheduleEntry(BaseModel):
    """An active (activity, period) pair"""
    activity_id: str
    period_index: int
    active: bool = True
    color: Optional[str] = None
    raw_value: Optional[str] = None
    color_source: ColorSource = ColorSource.DETECTED

    class Config:
        frozen = True


class ColorStatistics(BaseModel):
    """Upload-quality diagnostics about detected colors"""
    records_with_color: int = 0
    total_records: int = 0
    color_percentage: float = 0.0
    unique_colors: List[str] = Field(default_factory=list)
    colored_cells: int = 0
    colored_periods: int = 0

    class Config:
        frozen = True


class Classification(BaseModel):
    """Document-level classification outcome"""
    calendar_type: CalendarType
    commodity: str = ""
    title: Optional[str] = None
    season: Optional[str] = None
    year: Optional[int] = None
    breed_type: Optional[str] = None

    class Config:
        frozen = True


class DocumentMetadata(BaseModel):
    """Descriptive metadata carried alongside the parsed calendar"""
    sheet_name: str
    filename: Optional[str] = None
    season: Optional[str] = None
    year: Optional[int] = None
    breed_type: Optional[str] = None

    class Config:
        frozen = True


class CalendarDocument(BaseModel):
    """Root aggregate produced by one parse call over one worksheet"""
    calendar_type: CalendarType
    commodity: str = ""
    title: Optional[str] = None
    timeline: Timeline
    activities: List[Activity] = Field(default_factory=list)
    schedule: List[ScheduleEntry] = Field(default_factory=list)
    color_statistics: ColorStatistics = Field(default_factory=ColorStatistics)
    metadata: DocumentMetadata

    class Config:
        frozen = True

    def entries_for(self, activity_id: str) -> List[ScheduleEntry]:
        """Schedule entries belonging to one activity, in period order."""
        return [entry for entry in self.schedule if entry.activity_id == activity_id]

    def to_dict(self) -> Dict[str, Any]:
        """Convert to plain nested dictionaries for JSON serialization."""
        return self.model_dump(mode='json')
