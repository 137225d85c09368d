#!/usr/bin/env python3
"""
Event Definitions for Component Mapper

Progress events emitted at processing stage boundaries. Delivery is
advisory and fire-and-forget: nothing waits for, or acknowledges, a
listener.
"""

import time
import uuid
from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Callable, Dict, Optional


class ProcessingStage(str, Enum):
    """Coarse stages of file processing, in order."""
    READING = "reading"
    PARSING = "parsing"
    VALIDATING = "validating"
    TRANSFORMING = "transforming"
    COMPLETE = "complete"


# Percentage reported when each stage starts
STAGE_PROGRESS = {
    ProcessingStage.READING: 10,
    ProcessingStage.PARSING: 30,
    ProcessingStage.VALIDATING: 60,
    ProcessingStage.TRANSFORMING: 80,
    ProcessingStage.COMPLETE: 100,
}


@dataclass
class ProgressEvent:
    """Progress report for one processing run."""

    stage: ProcessingStage
    progress: int
    message: str
    event_id: str = field(default_factory=lambda: str(uuid.uuid4()))
    timestamp: float = field(default_factory=time.time)
    source: Optional[str] = None
    metadata: Dict[str, Any] = field(default_factory=dict)

    @classmethod
    def for_stage(cls, stage: ProcessingStage, message: str,
                  source: Optional[str] = None, **metadata) -> 'ProgressEvent':
        """Event at the start percentage of ``stage``."""
        return cls(stage=stage, progress=STAGE_PROGRESS[stage], message=message,
                   source=source, metadata=metadata)

    def to_dict(self) -> Dict[str, Any]:
        """Convert event to dictionary."""
        return {
            'event_id': self.event_id,
            'event_type': self.__class__.__name__,
            'timestamp': self.timestamp,
            'source': self.source,
            'metadata': self.metadata,
            'data': {
                'stage': self.stage.value,
                'progress': self.progress,
                'message': self.message
            }
        }


ProgressCallback = Callable[[ProgressEvent], None]
