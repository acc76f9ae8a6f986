#!/usr/bin/env python3
"""
Agricultural Calendar Engine - Result and Error Handling
Structured per-sheet and per-workbook parse results
"""

import time
from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Dict, List, Optional

from .models import CalendarDocument


class ProcessingStatus(Enum):
    """Processing status enumeration"""
    SUCCESS = "success"
    FAILED = "failed"
    PARTIAL = "partial"


class ErrorCode(Enum):
    """Error code enumeration"""
    STRUCTURAL_FAILURE = "STRUCTURAL_FAILURE"
    WORKBOOK_LOAD_ERROR = "WORKBOOK_LOAD_ERROR"
    UNKNOWN_ERROR = "UNKNOWN_ERROR"


@dataclass
class ProcessingError:
    """Structured error information"""
    code: ErrorCode
    message: str
    details: Optional[Dict[str, Any]] = None
    sheet_name: Optional[str] = None

    def to_dict(self) -> Dict[str, Any]:
        """Convert to dictionary representation"""
        result = {
            'code': self.code.value,
            'message': self.message
        }

        if self.details:
            result['details'] = self.details
        if self.sheet_name:
            result['sheet_name'] = self.sheet_name

        return result


@dataclass
class SheetResult:
    """Result for one worksheet"""
    sheet_name: str
    status: ProcessingStatus
    document: Optional[CalendarDocument] = None
    error: Optional[ProcessingError] = None
    diagnostics: Dict[str, Any] = field(default_factory=dict)
    processing_time: float = 0.0

    @property
    def success(self) -> bool:
        """Check if processing was successful"""
        return self.status == ProcessingStatus.SUCCESS

    def to_dict(self) -> Dict[str, Any]:
        """Convert to dictionary representation"""
        result = {
            'sheet_name': self.sheet_name,
            'status': self.status.value,
            'processing_time': self.processing_time,
            'success': self.success
        }

        if self.document is not None:
            result['document'] = self.document.to_dict()
        if self.error:
            result['error'] = self.error.to_dict()
        if self.diagnostics:
            result['diagnostics'] = self.diagnostics

        return result


@dataclass
class WorkbookParseResult:
    """Complete parse result for a workbook"""
    status: ProcessingStatus
    processing_time: float = 0.0
    start_time: Optional[float] = None
    end_time: Optional[float] = None

    # Sheet-level results
    sheet_results: List[SheetResult] = field(default_factory=list)

    # Errors and warnings
    error: Optional[ProcessingError] = None
    warnings: List[str] = field(default_factory=list)

    # Metadata
    input_file: Optional[str] = None
    filename_hint: Optional[str] = None

    @property
    def success(self) -> bool:
        """Check if overall processing was successful"""
        return self.status == ProcessingStatus.SUCCESS

    @property
    def documents(self) -> List[CalendarDocument]:
        """Documents of the sheets that parsed, in sheet order"""
        return [sr.document for sr in self.sheet_results if sr.document is not None]

    @property
    def total_sheets_processed(self) -> int:
        return sum(1 for sr in self.sheet_results if sr.success)

    def add_sheet_result(self, sheet_result: SheetResult):
        """Add a sheet result"""
        self.sheet_results.append(sheet_result)

    def add_warning(self, message: str):
        """Add a warning message"""
        self.warnings.append(message)

    def set_error(self, error: ProcessingError):
        """Set the main error"""
        self.error = error
        self.status = ProcessingStatus.FAILED

    def to_dict(self) -> Dict[str, Any]:
        """Convert to dictionary representation"""
        result = {
            'success': self.success,
            'status': self.status.value,
            'processing_time': self.processing_time,
            'total_sheets_processed': self.total_sheets_processed,
            'warnings': self.warnings
        }

        if self.error:
            result['error'] = self.error.to_dict()

        if self.input_file:
            result['input_file'] = self.input_file

        if self.filename_hint:
            result['filename_hint'] = self.filename_hint

        result['sheet_results'] = [sr.to_dict() for sr in self.sheet_results]

        return result


class ResultBuilder:
    """Builder for creating WorkbookParseResult objects"""

    def __init__(self):
        self.result = WorkbookParseResult(status=ProcessingStatus.SUCCESS)
        self.result.start_time = time.time()

    def set_input_file(self, input_file: str) -> 'ResultBuilder':
        """Set input file"""
        self.result.input_file = str(input_file)
        return self

    def set_filename_hint(self, filename_hint: Optional[str]) -> 'ResultBuilder':
        """Set the filename hint used for classification"""
        self.result.filename_hint = filename_hint
        return self

    def add_sheet_result(self, sheet_result: SheetResult) -> 'ResultBuilder':
        """Add sheet processing result"""
        self.result.add_sheet_result(sheet_result)
        return self

    def add_warning(self, message: str) -> 'ResultBuilder':
        """Add warning message"""
        self.result.add_warning(message)
        return self

    def set_error(self, error: ProcessingError) -> 'ResultBuilder':
        """Set error and mark as failed"""
        self.result.set_error(error)
        return self

    def build(self) -> WorkbookParseResult:
        """Build final result"""
        self.result.end_time = time.time()
        self.result.processing_time = self.result.end_time - self.result.start_time

        # Determine final status
        if not self.result.error:
            succeeded = self.result.total_sheets_processed
            if not self.result.sheet_results or succeeded == 0:
                self.result.status = ProcessingStatus.FAILED
            elif succeeded < len(self.result.sheet_results):
                self.result.status = ProcessingStatus.PARTIAL
            else:
                self.result.status = ProcessingStatus.SUCCESS

        return self.result


# Helper functions for creating common errors

def create_structural_failure_error(reason: str, sheet_name: Optional[str] = None) -> ProcessingError:
    """Create structural failure error"""
    return ProcessingError(
        code=ErrorCode.STRUCTURAL_FAILURE,
        message=reason,
        sheet_name=sheet_name
    )


def create_load_error(message: str, source: Optional[str] = None) -> ProcessingError:
    """Create workbook load error"""
    return ProcessingError(
        code=ErrorCode.WORKBOOK_LOAD_ERROR,
        message=message,
        details={'source': source} if source else None
    )


def create_unknown_error(message: str, sheet_name: Optional[str] = None) -> ProcessingError:
    """Create unexpected error"""
    return ProcessingError(
        code=ErrorCode.UNKNOWN_ERROR,
        message=message,
        sheet_name=sheet_name
    )
