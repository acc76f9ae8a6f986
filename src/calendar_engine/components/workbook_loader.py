#!/usr/bin/env python3
"""
Agricultural Calendar Engine
Component: Workbook Loader

Decodes an .xlsx workbook with openpyxl into one Grid per worksheet: raw cell
values plus a (row, column) -> FillStyle map built from the cell fills and fonts.
"""

import logging
import zipfile
from pathlib import Path
from typing import BinaryIO, Iterable, List, Optional, Union

from openpyxl import load_workbook
from openpyxl.styles.colors import Color
from openpyxl.utils.exceptions import InvalidFileException
from openpyxl.worksheet.worksheet import Worksheet

from ..exceptions import WorkbookLoadError
from ..models import ColorRef, FillStyle, Grid

logger = logging.getLogger(__name__)

WorkbookSource = Union[str, Path, BinaryIO]

# Font colors every cell carries by default (theme text color, black, system foreground)
_DEFAULT_FONT_THEMES = frozenset({1})
_DEFAULT_FONT_RGB = frozenset({"000000", "FF000000"})
_DEFAULT_FONT_INDICES = frozenset({8, 64})

# Merged header cells are expanded only near the top of the sheet
MERGE_PROPAGATION_ROWS = 10


def color_ref(color: Optional[Color]) -> Optional[ColorRef]:
    """Convert an openpyxl Color into a ColorRef (None for auto or unset colors)."""
    if color is None:
        return None
    tint = float(color.tint or 0.0)
    if color.type == 'rgb' and isinstance(color.rgb, str):
        return ColorRef(rgb=color.rgb, tint=tint)
    if color.type == 'indexed' and color.indexed is not None:
        return ColorRef(indexed=int(color.indexed), tint=tint)
    if color.type == 'theme' and color.theme is not None:
        return ColorRef(theme=int(color.theme), tint=tint)
    return None


def _is_default_font_color(ref: ColorRef) -> bool:
    if ref.theme is not None:
        return ref.theme in _DEFAULT_FONT_THEMES and not ref.tint
    if ref.indexed is not None:
        return ref.indexed in _DEFAULT_FONT_INDICES
    return (ref.rgb or "").upper().lstrip('#') in _DEFAULT_FONT_RGB


def fill_style(cell) -> Optional[FillStyle]:
    """
    Build the FillStyle of an openpyxl cell, or None when it carries no color evidence.

    Fills without a pattern contribute no fill colors. For solid fills the
    background color is dropped because spreadsheet tools never paint it.
    """
    if not cell.has_style:
        return None

    pattern_type = None
    fg_color = bg_color = None
    fill = cell.fill
    if fill is not None and fill.fill_type not in (None, 'none'):
        pattern_type = fill.fill_type
        fg_color = color_ref(fill.fgColor)
        if pattern_type != 'solid':
            bg_color = color_ref(fill.bgColor)

    font_color = color_ref(cell.font.color) if cell.font is not None else None
    if font_color is not None and _is_default_font_color(font_color):
        font_color = None

    if pattern_type is None and font_color is None:
        return None
    return FillStyle(pattern_type=pattern_type, fg_color=fg_color, bg_color=bg_color, font_color=font_color)


def _cell_value(value):
    if isinstance(value, str):
        return value.strip()
    return value


def worksheet_to_grid(worksheet: Worksheet) -> Grid:
    """Decode one worksheet into a Grid."""
    rows = []
    styles = {}
    for r, row in enumerate(worksheet.iter_rows()):
        values = []
        for c, cell in enumerate(row):
            values.append(_cell_value(cell.value))
            style = fill_style(cell)
            if style is not None:
                styles[(r, c)] = style
        rows.append(values)

    for merged in worksheet.merged_cells.ranges:
        if merged.min_row > MERGE_PROPAGATION_ROWS:
            continue
        anchor = worksheet.cell(row=merged.min_row, column=merged.min_col).value
        if anchor is None:
            continue
        for r in range(merged.min_row - 1, min(merged.max_row, len(rows))):
            for c in range(merged.min_col - 1, min(merged.max_col, len(rows[r]))):
                if rows[r][c] is None:
                    rows[r][c] = _cell_value(anchor)

    logger.debug(f"Decoded sheet '{worksheet.title}': {len(rows)} rows, {len(styles)} styled cells")
    return Grid(rows=rows, styles=styles, name=worksheet.title)


def load_workbook_grids(source: WorkbookSource, sheet_names: Optional[Iterable[str]] = None) -> List[Grid]:
    """
    Open a workbook and decode the requested worksheets (all of them by default).

    Raises:
        WorkbookLoadError: when the file cannot be opened or a requested sheet is missing
    """
    if isinstance(source, (str, Path)):
        source = str(source)
    try:
        workbook = load_workbook(source, data_only=True)
    except (InvalidFileException, zipfile.BadZipFile, OSError, KeyError, ValueError) as e:
        raise WorkbookLoadError(f"Cannot open workbook: {e}") from e

    try:
        if sheet_names:
            requested = list(sheet_names)
            missing = [name for name in requested if name not in workbook.sheetnames]
            if missing:
                raise WorkbookLoadError(
                    f"Sheet(s) not found: {', '.join(missing)}. Available: {', '.join(workbook.sheetnames)}"
                )
            worksheets = [workbook[name] for name in requested]
        else:
            worksheets = list(workbook.worksheets)

        grids = [worksheet_to_grid(worksheet) for worksheet in worksheets]
    finally:
        workbook.close()

    logger.info(f"Loaded {len(grids)} worksheet(s)")
    return grids
