#!/usr/bin/env python3
"""
Event System for Component Mapper

- ProcessingStage: Ordered processing stages
- ProgressEvent: Stage progress report passed to caller callbacks
"""

from .events import ProcessingStage, ProgressEvent, ProgressCallback, STAGE_PROGRESS

__all__ = [
    'ProcessingStage',
    'ProgressEvent',
    'ProgressCallback',
    'STAGE_PROGRESS'
]
