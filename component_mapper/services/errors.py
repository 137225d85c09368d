#!/usr/bin/env python3
"""
Processing Errors for Component Mapper

Fatal ingestion-time faults. Any of these aborts the whole operation; the
caller receives no partial graph.
"""

from enum import Enum
from typing import Any, Dict, Optional, Tuple


class ProcessingErrorCode(str, Enum):
    """Stable codes for fatal ingestion faults."""
    FILE_TOO_LARGE = "FILE_TOO_LARGE"
    INVALID_FORMAT = "INVALID_FORMAT"
    NO_SHEETS = "NO_SHEETS"
    WORKSHEET_ERROR = "WORKSHEET_ERROR"
    NO_DATA = "NO_DATA"
    MISSING_COLUMNS = "MISSING_COLUMNS"
    INVALID_DATA_TYPE = "INVALID_DATA_TYPE"
    PROCESSING_FAILED = "PROCESSING_FAILED"


class ProcessingError(Exception):
    """Base exception for fatal processing errors."""

    def __init__(self, message: str, code: ProcessingErrorCode,
                 details: Optional[Dict[str, Any]] = None):
        super().__init__(message)
        self.message = message
        self.code = ProcessingErrorCode(code)
        self.details = details or {}

    def to_dict(self) -> Dict[str, Any]:
        return {
            'code': self.code.value,
            'message': self.message,
            'details': self.details
        }


# Title, replacement message (None keeps the error's own) and whether the
# details are worth showing.
_USER_MESSAGES = {
    ProcessingErrorCode.FILE_TOO_LARGE: ('File too large', None, False),
    ProcessingErrorCode.INVALID_FORMAT: (
        'Invalid file format',
        'Please ensure you upload a valid spreadsheet export (.csv or .json)',
        False
    ),
    ProcessingErrorCode.NO_SHEETS: (
        'Empty file',
        'The file appears to be empty or has no data sheets',
        False
    ),
    ProcessingErrorCode.WORKSHEET_ERROR: ('Unreadable worksheet', None, True),
    ProcessingErrorCode.NO_DATA: ('No data found', 'No component data found in the file', False),
    ProcessingErrorCode.MISSING_COLUMNS: ('Missing required columns', None, True),
    ProcessingErrorCode.INVALID_DATA_TYPE: ('Invalid data format', None, True),
}


def describe_error(error: ProcessingError) -> Tuple[str, str, bool]:
    """
    Short user-facing description of a processing error.

    Returns:
        Tuple of (title, message, show_details)
    """
    title, message, show_details = _USER_MESSAGES.get(
        error.code, ('Processing failed', None, True)
    )
    return title, message or error.message, show_details


def format_file_size(size_bytes: int) -> str:
    """Human readable size, e.g. ``5 MB`` or ``1.5 KB``."""
    if size_bytes == 0:
        return '0 Bytes'
    units = ['Bytes', 'KB', 'MB', 'GB']
    size = float(size_bytes)
    index = 0
    while size >= 1024 and index < len(units) - 1:
        size /= 1024
        index += 1
    return f"{round(size, 2):g} {units[index]}"
