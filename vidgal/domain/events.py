"""Domain events for the discovery pipeline.

Events describe what happened during one discovery call and flow through the
EventBus, so the CLI (or any other presentation layer) can react without the
pipeline knowing about it.

See `infrastructure/event_bus.py` for the pub/sub mechanism.
"""

from typing import Optional
from pydantic import BaseModel

from .errors import ErrorKind
from .models import DiscoverySource


class Event(BaseModel):
    """Base class for all domain events.

    Events are validated Pydantic models. They are not frozen by default.
    """

    pass


class DiscoveryStarted(Event):
    """Emitted when a discovery call begins."""

    base_url: str


class ManifestSkipped(Event):
    """Emitted when the manifest could not be used and the listing fallback runs.

    kind is None when the manifest loaded but yielded no usable entries.
    """

    kind: Optional[ErrorKind] = None
    reason: str


class DiscoveryFinished(Event):
    """Emitted after dedup and sorting, with summary counters."""

    source: DiscoverySource
    records_found: int
    duplicates_removed: int = 0
    entries_count: int = 0


class DiscoveryFailed(Event):
    """Emitted when the directory listing fallback fails too."""

    kind: ErrorKind
    message: str
