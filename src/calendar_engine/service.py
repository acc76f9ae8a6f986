#!/usr/bin/env python3
"""
Agricultural Calendar Engine
CalendarParsingService - drives one assemble call per worksheet
"""

import logging
import time
from pathlib import Path
from typing import Iterable, List, Optional

from .components.calendar_assembler import CalendarAssembler
from .components.workbook_loader import WorkbookSource, load_workbook_grids
from .config import DEFAULT_OPTIONS, ParserOptions
from .diagnostics import DiagnosticContext
from .exceptions import StructuralFailure, WorkbookLoadError
from .models import Grid
from .result import (
    ProcessingStatus, ResultBuilder, SheetResult, WorkbookParseResult,
    create_load_error, create_structural_failure_error, create_unknown_error,
)

logger = logging.getLogger(__name__)


class CalendarParsingService:
    """
    Parses every worksheet of a workbook independently.

    A worksheet that fails never prevents its siblings from being parsed; its
    failure is recorded as a failed SheetResult instead.
    """

    def __init__(self, options: ParserOptions = DEFAULT_OPTIONS, assembler: Optional[CalendarAssembler] = None):
        self.options = options
        self._assembler = assembler or CalendarAssembler(options)

    @property
    def assembler(self) -> CalendarAssembler:
        return self._assembler

    def parse_workbook(
        self,
        source: WorkbookSource,
        filename_hint: Optional[str] = None,
        sheet_names: Optional[Iterable[str]] = None,
    ) -> WorkbookParseResult:
        """
        Load a workbook and parse its worksheets.

        Args:
            source: Path to an .xlsx file or a binary stream
            filename_hint: Optional original filename, used only as classification evidence
            sheet_names: Restrict parsing to these worksheets

        Returns:
            WorkbookParseResult: FAILED with a load error when the workbook cannot be opened
        """
        input_file = str(source) if isinstance(source, (str, Path)) else getattr(source, 'name', None)
        try:
            grids = load_workbook_grids(source, sheet_names)
        except WorkbookLoadError as e:
            logger.error(f"Failed to load workbook: {e}")
            builder = ResultBuilder().set_filename_hint(filename_hint)
            if input_file:
                builder.set_input_file(str(input_file))
            return builder.set_error(create_load_error(str(e), str(input_file) if input_file else None)).build()

        result = self.parse_grids(grids, filename_hint)
        if input_file:
            result.input_file = str(input_file)
        return result

    def parse_grids(self, grids: List[Grid], filename_hint: Optional[str] = None) -> WorkbookParseResult:
        """Parse already-decoded worksheets."""
        builder = ResultBuilder().set_filename_hint(filename_hint)
        for grid in grids:
            sheet_result = self.parse_sheet(grid, filename_hint)
            builder.add_sheet_result(sheet_result)
            if not sheet_result.success:
                builder.add_warning(f"Sheet '{grid.name}' could not be parsed: {sheet_result.error.message}")

        result = builder.build()
        logger.info(
            f"Workbook parse finished with status {result.status.value}: "
            f"{result.total_sheets_processed}/{len(result.sheet_results)} sheets parsed"
        )
        return result

    def parse_sheet(self, grid: Grid, filename_hint: Optional[str] = None) -> SheetResult:
        """Parse one worksheet into a SheetResult."""
        started = time.time()
        diagnostics = DiagnosticContext(max_cell_logs=self.options.max_cell_logs)
        try:
            document = self._assembler.assemble(grid, filename_hint, diagnostics)
        except StructuralFailure as e:
            logger.warning(f"Structural failure in sheet '{grid.name}': {e.reason}")
            return SheetResult(
                sheet_name=grid.name,
                status=ProcessingStatus.FAILED,
                error=create_structural_failure_error(e.reason, grid.name),
                diagnostics=diagnostics.to_dict(),
                processing_time=time.time() - started,
            )
        except Exception as e:
            logger.error(f"Unexpected error while parsing sheet '{grid.name}': {e}", exc_info=True)
            return SheetResult(
                sheet_name=grid.name,
                status=ProcessingStatus.FAILED,
                error=create_unknown_error(str(e), grid.name),
                diagnostics=diagnostics.to_dict(),
                processing_time=time.time() - started,
            )

        return SheetResult(
            sheet_name=grid.name,
            status=ProcessingStatus.SUCCESS,
            document=document,
            diagnostics=diagnostics.to_dict(),
            processing_time=time.time() - started,
        )
