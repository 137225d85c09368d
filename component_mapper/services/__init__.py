#!/usr/bin/env python3
"""
Service Layer for Component Mapper

Services coordinate file decoding, ingestion and validation while keeping
the graph engine free of I/O.

Services included:
- ComponentMapProcessor: File/rows to validated graph pipeline
- RowFileReader: Spreadsheet export decoding
- ProcessingError: Fatal ingestion faults and their user-facing messages
"""

from .errors import ProcessingError, ProcessingErrorCode, describe_error, format_file_size
from .file_service import RowFileReader
from .processing_service import (
    ComponentMapProcessor,
    FileProcessingResult,
    ProcessingOptions,
    check_structure
)

__all__ = [
    'ComponentMapProcessor',
    'FileProcessingResult',
    'ProcessingOptions',
    'check_structure',
    'RowFileReader',
    'ProcessingError',
    'ProcessingErrorCode',
    'describe_error',
    'format_file_size'
]
