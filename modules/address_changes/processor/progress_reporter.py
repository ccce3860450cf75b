"""Logging Progress Reporter

Turns pipeline StageEvents into log records. The event fields are attached
as ``extra`` so the production JSON formatter emits them as structured keys.
"""

import logging
from typing import List, Optional

from ..models import StageEvent


class LoggingProgressReporter:
    """Progress callback that logs every stage event.
    
    Args:
        logger: Logger to write to (defaults to this module's logger)
        level: Log level used for stage events
    """
    
    def __init__(self, logger: Optional[logging.Logger] = None, level: int = logging.INFO):
        self.logger = logger or logging.getLogger(__name__)
        self.level = level
    
    def __call__(self, event: StageEvent) -> None:
        message = f"{event.stage}: {event.record_count:,} records in {event.elapsed_seconds * 1000:.0f}ms"
        if event.snapshot_date is not None:
            message = f"[{event.snapshot_date:%Y%m%d}] {message}"
        if event.path:
            message += f" ({event.path})"
        if event.detail:
            message += f" - {event.detail}"
        
        self.logger.log(self.level, message, extra={
            "stage": event.stage,
            "record_count": event.record_count,
            "elapsed_seconds": round(event.elapsed_seconds, 6),
        })


class RecordingProgressReporter:
    """Progress callback that keeps every event, for run summaries and tests."""
    
    def __init__(self, forward_to=None):
        self.events: List[StageEvent] = []
        self._forward_to = forward_to
    
    def __call__(self, event: StageEvent) -> None:
        self.events.append(event)
        if self._forward_to is not None:
            self._forward_to(event)
    
    def stages(self) -> List[str]:
        return [event.stage for event in self.events]
