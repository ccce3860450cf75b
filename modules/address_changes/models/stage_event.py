"""Pipeline Stage Events

Structured progress events emitted by the loaders, detector, writer and
pipeline. The core never logs; callers pass a ``progress`` callback and decide
what to do with each event (see ``processor.progress_reporter``).
"""

from datetime import date
from typing import Callable, Optional

from pydantic import BaseModel, Field


class StageEvent(BaseModel):
    """A completed pipeline stage."""
    
    stage: str = Field(..., description="Stage name, e.g. 'load_addresses', 'detect', 'write'")
    record_count: int = Field(ge=0, description="Records produced or consumed by the stage")
    elapsed_seconds: float = Field(ge=0.0, description="Wall-clock duration of the stage")
    snapshot_date: Optional[date] = Field(None, description="Processing date the stage belongs to")
    path: Optional[str] = Field(None, description="File read or written by the stage")
    detail: Optional[str] = Field(None, description="Short free-text note")
    
    model_config = {"frozen": True}


ProgressCallback = Callable[[StageEvent], None]


def emit(progress: Optional[ProgressCallback], stage: str, record_count: int,
         elapsed_seconds: float, **kwargs) -> None:
    """Send a StageEvent to ``progress`` if a callback was supplied."""
    if progress is None:
        return
    progress(StageEvent(stage=stage, record_count=record_count,
                        elapsed_seconds=max(elapsed_seconds, 0.0), **kwargs))
