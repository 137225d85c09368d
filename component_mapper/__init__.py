#!/usr/bin/env python3
"""
Component Mapper

Builds directed component graphs from tabular solution/input/output records
and validates them for structural soundness and architectural smells.
"""

__version__ = "1.0.0"
__description__ = "Component graph construction and validation from tabular records"

import logging
import sys
from typing import Optional

logger = logging.getLogger(__name__)

LOG_FORMAT = '%(asctime)s - %(name)s - %(levelname)s - %(message)s'


def setup_logging(level: str = "INFO", log_file: Optional[str] = None):
    """
    Configure root logging for the mapper.

    Records go to stderr, so stdout stays clean for reports; ``log_file``
    adds a second handler.
    """
    numeric_level = logging.getLevelName(str(level).upper())
    if not isinstance(numeric_level, int):
        raise ValueError(f'Invalid log level: {level}')

    handlers = [logging.StreamHandler(sys.stderr)]
    if log_file:
        handlers.append(logging.FileHandler(log_file, encoding='utf-8'))

    logging.basicConfig(level=numeric_level, format=LOG_FORMAT, handlers=handlers, force=True)
    logger.debug(f"Logging configured at {logging.getLevelName(numeric_level)} level")


from .graph import (
    ComponentGraph,
    ComponentLink,
    ComponentNode,
    GraphValidator,
    RowIngester,
    ValidationResult,
    sanitize_id,
    validate_graph,
)
from .services import ComponentMapProcessor, ProcessingError, ProcessingOptions

__all__ = [
    'ComponentGraph',
    'ComponentLink',
    'ComponentNode',
    'ComponentMapProcessor',
    'GraphValidator',
    'ProcessingError',
    'ProcessingOptions',
    'RowIngester',
    'ValidationResult',
    'sanitize_id',
    'validate_graph',
    'setup_logging',
    '__version__'
]
