#!/usr/bin/env python3
"""
Processing Service for Component Mapper

Orchestrates the complete pipeline from a spreadsheet export to a validated
component graph: size check, decoding, structure preconditions, ingestion
and validation, reporting coarse progress at stage boundaries.
"""

import logging
import time
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Dict, List, Mapping, Optional, Sequence, Union

from ..events.events import ProcessingStage, ProgressCallback, ProgressEvent, STAGE_PROGRESS
from ..graph.graph_validator import GraphValidator
from ..graph.models import ComponentGraph
from ..graph.row_ingester import REQUIRED_COLUMNS, RowIngester
from ..graph.validation_result import ValidationResult
from .errors import ProcessingError, ProcessingErrorCode, format_file_size
from .file_service import RowFileReader

logger = logging.getLogger(__name__)

MEGABYTE = 1024 * 1024


@dataclass
class ProcessingOptions:
    """Caller-tunable processing settings."""
    max_file_size: int = 5 * MEGABYTE
    chunk_size: int = 1000
    validate_structure: bool = True

    @classmethod
    def from_config(cls, config: Optional[Dict[str, Any]] = None) -> 'ProcessingOptions':
        """Build options from the ``processing`` config section."""
        processing = (config or {}).get('processing', {})
        return cls(
            max_file_size=int(processing.get('max_file_size_mb', 5) * MEGABYTE),
            chunk_size=processing.get('chunk_size', 1000),
            validate_structure=processing.get('validate_structure', True)
        )


@dataclass
class FileProcessingResult:
    """Graph and validation report of one processed file."""
    graph: ComponentGraph
    validation: ValidationResult
    warnings: List[str] = field(default_factory=list)
    processing_time_ms: int = 0

    def to_dict(self) -> Dict[str, Any]:
        return {
            'graph': self.graph.to_dict(),
            'validation': self.validation.to_dict(),
            'warnings': list(self.warnings),
            'processing_time_ms': self.processing_time_ms
        }


def check_structure(rows: Sequence[Mapping[str, Any]]):
    """
    Enforce ingestion preconditions.

    Raises:
        ProcessingError: NO_DATA when there are no rows, MISSING_COLUMNS when
            a required column is absent, INVALID_DATA_TYPE for a non-string cell
    """
    if not rows:
        raise ProcessingError('No data rows found', ProcessingErrorCode.NO_DATA)

    available = list(rows[0].keys())
    missing = [column for column in REQUIRED_COLUMNS if column not in available]
    if missing:
        raise ProcessingError(
            f"Missing required columns: {', '.join(missing)}. "
            f"Available columns: {', '.join(available)}",
            ProcessingErrorCode.MISSING_COLUMNS,
            {'missing_columns': missing, 'available_columns': available}
        )

    for index, row in enumerate(rows, start=1):
        for column, value in row.items():
            if value and not isinstance(value, str):
                raise ProcessingError(
                    f"Invalid value type in row {index}, column {column}. "
                    f"Expected string, got {type(value).__name__}",
                    ProcessingErrorCode.INVALID_DATA_TYPE,
                    {'row': index, 'column': column, 'type': type(value).__name__}
                )


class ComponentMapProcessor:
    """
    Turns spreadsheet exports into validated component graphs.

    Synchronous and single-threaded. Progress callbacks are advisory: a
    failing callback is logged and ignored, and there are no cancellation
    checkpoints; a caller that wants to abort discards the result.
    """

    def __init__(self, config: Optional[Dict[str, Any]] = None,
                 options: Optional[ProcessingOptions] = None):
        """Initialize processor with configuration."""
        self.config = config or {}
        self.options = options or ProcessingOptions.from_config(self.config)

        # Initialize components
        self.reader = RowFileReader(self.config)
        self.ingester = RowIngester(self.config)
        self.ingester.chunk_size = self.options.chunk_size
        self.validator = GraphValidator(self.config)

    def process_file(self, file_path: Union[str, Path],
                     on_progress: Optional[ProgressCallback] = None) -> ComponentGraph:
        """
        Decode a file and build its component graph.

        Raises:
            ProcessingError: for any fatal fault; unexpected exceptions are
                wrapped as PROCESSING_FAILED
        """
        file_path = Path(file_path)
        logger.info(f"Processing file: {file_path}")

        try:
            self._validate_file_size(file_path)

            self._notify(on_progress, ProcessingStage.READING, 'Reading file...', file_path.name)
            content = self.reader.read_text(file_path)

            self._notify(on_progress, ProcessingStage.PARSING, 'Parsing spreadsheet data...', file_path.name)
            rows = self.reader.parse_rows(content, file_path.suffix)

            return self._build_graph(rows, file_path.name, on_progress)

        except ProcessingError as e:
            logger.error(f"Processing failed [{e.code.value}]: {e.message}")
            raise
        except Exception as e:
            logger.exception("Unexpected processing error")
            raise ProcessingError(str(e), ProcessingErrorCode.PROCESSING_FAILED) from e

    def process_rows(self, rows: Sequence[Mapping[str, Any]], source_name: str = "rows",
                     on_progress: Optional[ProgressCallback] = None) -> ComponentGraph:
        """Build a component graph from already decoded rows."""
        try:
            return self._build_graph(list(rows), source_name, on_progress)
        except ProcessingError as e:
            logger.error(f"Processing failed [{e.code.value}]: {e.message}")
            raise
        except Exception as e:
            logger.exception("Unexpected processing error")
            raise ProcessingError(str(e), ProcessingErrorCode.PROCESSING_FAILED) from e

    def run(self, file_path: Union[str, Path],
            on_progress: Optional[ProgressCallback] = None) -> FileProcessingResult:
        """Process a file and validate the resulting graph."""
        start_time = time.perf_counter()

        graph = self.process_file(file_path, on_progress)
        validation = self.validator.validate(graph)

        processing_time_ms = round((time.perf_counter() - start_time) * 1000)

        if not validation.is_valid:
            logger.error(f"Validation failed: found {len(validation.errors)} error(s) in the data")
        elif validation.warnings:
            logger.warning(f"Data processed with {len(validation.warnings)} warning(s)")
        else:
            logger.info(f"File processed successfully: {len(graph.nodes)} components with "
                        f"{len(graph.links)} connections in {processing_time_ms}ms")

        return FileProcessingResult(
            graph=graph,
            validation=validation,
            warnings=[warning.message for warning in validation.warnings],
            processing_time_ms=processing_time_ms
        )

    def _build_graph(self, rows: List[Mapping[str, Any]], source_name: str,
                     on_progress: Optional[ProgressCallback]) -> ComponentGraph:
        self._notify(on_progress, ProcessingStage.VALIDATING, 'Validating data structure...', source_name)
        if self.options.validate_structure:
            check_structure(rows)

        self._notify(on_progress, ProcessingStage.TRANSFORMING, 'Transforming to component data...', source_name)

        start = STAGE_PROGRESS[ProcessingStage.TRANSFORMING]
        span = STAGE_PROGRESS[ProcessingStage.COMPLETE] - start - 1

        def on_chunk(done: int, total: int):
            self._emit(on_progress, ProgressEvent(
                stage=ProcessingStage.TRANSFORMING,
                progress=start + (span * done) // total,
                message=f"Transformed {done} of {total} rows...",
                source=source_name
            ))

        graph = self.ingester.ingest(rows, source_name, on_chunk=on_chunk if on_progress else None)

        self._notify(on_progress, ProcessingStage.COMPLETE, 'Processing complete!', source_name)
        return graph

    def _validate_file_size(self, file_path: Path):
        size = file_path.stat().st_size
        if size > self.options.max_file_size:
            raise ProcessingError(
                f"File size ({format_file_size(size)}) exceeds maximum allowed size "
                f"({format_file_size(self.options.max_file_size)})",
                ProcessingErrorCode.FILE_TOO_LARGE,
                {'size_bytes': size, 'max_size_bytes': self.options.max_file_size}
            )

    def _notify(self, on_progress: Optional[ProgressCallback], stage: ProcessingStage,
                message: str, source: Optional[str] = None):
        self._emit(on_progress, ProgressEvent.for_stage(stage, message, source))

    def _emit(self, on_progress: Optional[ProgressCallback], event: ProgressEvent):
        if on_progress is None:
            return
        try:
            on_progress(event)
        except Exception as e:
            logger.warning(f"Progress callback failed at stage {event.stage.value}: {e}")
