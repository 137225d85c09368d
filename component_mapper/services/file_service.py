#!/usr/bin/env python3
"""
File Service for Component Mapper

Decodes spreadsheet exports into ordered rows of named cells. CSV files hold
a single sheet with a header row; JSON files hold either a list of row
objects or a ``sheets`` collection, of which the first sheet is used.
"""

import csv
import io
import json
import logging
from pathlib import Path
from typing import Any, Dict, List, Optional, Tuple, Union

from .errors import ProcessingError, ProcessingErrorCode

logger = logging.getLogger(__name__)

Row = Dict[str, Any]


class RowFileReader:
    """Reads rows from CSV or JSON spreadsheet exports."""

    SUPPORTED_SUFFIXES = ('.csv', '.json')

    def __init__(self, config: Optional[Dict[str, Any]] = None):
        """Initialize row file reader with configuration."""
        self.config = config or {}
        self.encoding = self.config.get('processing', {}).get('default_encoding', 'utf-8')
        self.fallback_encodings = [self.encoding, 'utf-8-sig', 'cp1252', 'latin-1']

    def read_text(self, file_path: Union[str, Path]) -> str:
        """Read file content with encoding fallback."""
        file_path = Path(file_path)
        raw = file_path.read_bytes()

        # Try multiple encodings
        for encoding in self.fallback_encodings:
            try:
                content = raw.decode(encoding)
                logger.debug(f"Successfully read {file_path} with {encoding} encoding")
                return content.lstrip('\ufeff')
            except UnicodeDecodeError:
                continue

        raise ProcessingError(
            f"Could not decode {file_path.name} with any supported encoding",
            ProcessingErrorCode.INVALID_FORMAT
        )

    def read_rows(self, file_path: Union[str, Path]) -> List[Row]:
        """Read and decode the first sheet of a file into rows."""
        file_path = Path(file_path)
        return self.parse_rows(self.read_text(file_path), file_path.suffix)

    def parse_rows(self, content: str, suffix: str) -> List[Row]:
        """
        Decode file content into rows.

        Every row carries every column; empty cells read as ``""``.

        Raises:
            ProcessingError: INVALID_FORMAT, NO_SHEETS, WORKSHEET_ERROR or NO_DATA
        """
        suffix = suffix.lower()
        if suffix == '.csv':
            sheets = [('Sheet1', self._parse_csv(content))]
        elif suffix == '.json':
            sheets = self._parse_json(content)
        else:
            raise ProcessingError(
                f"Unsupported file type '{suffix or 'none'}'. "
                f"Supported: {', '.join(self.SUPPORTED_SUFFIXES)}",
                ProcessingErrorCode.INVALID_FORMAT
            )

        if not sheets:
            raise ProcessingError('File contains no sheets', ProcessingErrorCode.NO_SHEETS)

        sheet_name, rows = sheets[0]
        if not isinstance(rows, list) or not all(isinstance(row, dict) for row in rows):
            raise ProcessingError(
                f"Could not access worksheet '{sheet_name}'",
                ProcessingErrorCode.WORKSHEET_ERROR,
                {'sheet': sheet_name}
            )

        rows = _normalize_rows(rows)
        if not rows:
            raise ProcessingError('No data found in sheet', ProcessingErrorCode.NO_DATA,
                                  {'sheet': sheet_name})

        logger.info(f"Decoded {len(rows)} rows from sheet '{sheet_name}'")
        return rows

    def _parse_csv(self, content: str) -> List[Row]:
        try:
            reader = csv.DictReader(io.StringIO(content), restval='')
            rows = []
            for record in reader:
                # Cells beyond the header have no column name
                record.pop(None, None)
                rows.append(record)
            return rows
        except csv.Error as e:
            raise ProcessingError(
                f"Invalid CSV file format or corrupted file: {e}",
                ProcessingErrorCode.INVALID_FORMAT
            ) from e

    def _parse_json(self, content: str) -> List[Tuple[str, Any]]:
        try:
            document = json.loads(content)
        except json.JSONDecodeError as e:
            raise ProcessingError(
                f"Invalid JSON file format or corrupted file: {e}",
                ProcessingErrorCode.INVALID_FORMAT
            ) from e

        if isinstance(document, list):
            return [('Sheet1', document)]

        if not isinstance(document, dict) or 'sheets' not in document:
            raise ProcessingError(
                "JSON file must contain a list of rows or a 'sheets' collection",
                ProcessingErrorCode.INVALID_FORMAT
            )

        sheets = document['sheets']
        if isinstance(sheets, dict):
            return list(sheets.items())
        if isinstance(sheets, list):
            parsed = []
            for index, sheet in enumerate(sheets, start=1):
                if not isinstance(sheet, dict):
                    parsed.append((f"Sheet{index}", sheet))
                else:
                    parsed.append((sheet.get('name') or f"Sheet{index}", sheet.get('rows')))
            return parsed

        raise ProcessingError(
            "'sheets' must be an object or a list",
            ProcessingErrorCode.INVALID_FORMAT
        )


def _normalize_rows(rows: List[Row]) -> List[Row]:
    """Give every row every column and drop fully blank rows."""
    columns: List[str] = []
    for row in rows:
        for column in row:
            if column not in columns:
                columns.append(column)

    normalized = []
    for row in rows:
        filled = {column: ('' if row.get(column) is None else row.get(column)) for column in columns}
        if all(isinstance(value, str) and not value.strip() for value in filled.values()):
            continue
        normalized.append(filled)
    return normalized
