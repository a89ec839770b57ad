"""Domain events for the audio probing pipeline.

Events flow through the EventBus and decouple the batch scheduler from the
progress display. See `infrastructure/event_bus.py` for the pub/sub mechanism.
"""

from pathlib import Path
from typing import List
from pydantic import BaseModel, Field


class Event(BaseModel):
    """Base class for all domain events."""

    pass


class DiscoveryFinished(Event):
    """Emitted after all input paths have been expanded into targets."""

    files_found: int
    missing_paths: List[Path] = Field(default_factory=list)
    failed_roots: List[Path] = Field(default_factory=list)


class BatchStarted(Event):
    """Emitted before the first target is submitted."""

    total: int
    max_concurrent: int


class FileProbed(Event):
    """Emitted on the coordinating thread each time one target completes."""

    completed: int
    total: int
    path: Path
    ok: bool


class BatchFinished(Event):
    """Emitted once every submitted target has an outcome."""

    completed: int
