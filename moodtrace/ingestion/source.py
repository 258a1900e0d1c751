"""
Playback source types for MoodTrace.

The HTTP client that talks to the streaming service lives outside this
package; it only has to implement PlaybackSource and map its failures onto
the two error kinds below.
"""
from dataclasses import dataclass
from typing import Any, Mapping, Optional, Protocol


@dataclass(frozen=True)
class PlaybackResult:
    """What one poll of the playback source saw."""
    track_id: str
    label: str
    item_type: str = "track"
    features: Optional[Mapping[str, Any]] = None

    @property
    def is_track(self) -> bool:
        return self.item_type == "track"


class IngestionError(Exception):
    """Base class for playback source failures."""
    pass


class SourceUnavailableError(IngestionError):
    """Transient failure; nothing is ingested this cycle."""
    pass


class SourceDisconnectedError(IngestionError):
    """The source can no longer be polled, e.g. expired credentials."""
    pass


class PlaybackSource(Protocol):
    """Protocol for currently-playing sources."""

    def fetch(self) -> Optional[PlaybackResult]:
        """Return what is playing now, or None when nothing is.

        May block on network I/O; SamplePoller.run calls it from a worker
        thread so the event loop stays free.
        """
        ...
