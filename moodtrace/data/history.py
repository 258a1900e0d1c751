"""
Rolling session history for MoodTrace.

An append/evict-only log of SessionEntry records. Entries are never edited
in place; once the capacity is exceeded the oldest entry is dropped.
"""
from collections import deque
from datetime import datetime
from typing import Deque, Iterator, List, Optional
import pandas as pd
from .schemas import FeatureSample, SessionEntry


DEFAULT_CAPACITY = 20

FRAME_COLUMNS = [
    'timestamp', 'time_label', 'label', 'valence', 'energy', 'tempo', 'mood_index'
]


class SessionHistory:
    """Bounded FIFO of the most recent session entries, oldest first."""

    def __init__(self, capacity: int = DEFAULT_CAPACITY):
        if capacity <= 0:
            raise ValueError("History capacity must be positive")
        self.capacity = capacity
        self._entries: Deque[SessionEntry] = deque(maxlen=capacity)
        self._total_appended = 0

    def append(self, sample: FeatureSample, label: str, timestamp: datetime) -> SessionEntry:
        """Record a sample, evicting the oldest entry when full.

        Args:
            sample: Validated feature sample
            label: Display string of the source track
            timestamp: Ingestion time

        Returns:
            The stored SessionEntry, with its mood index frozen
        """
        entry = SessionEntry(
            timestamp=timestamp,
            label=label,
            features=sample,
            mood_index=sample.mood_index
        )
        self._entries.append(entry)
        self._total_appended += 1
        return entry

    def latest(self) -> Optional[SessionEntry]:
        return self._entries[-1] if self._entries else None

    def all(self) -> List[SessionEntry]:
        return list(self._entries)

    def clear(self) -> None:
        self._entries.clear()

    @property
    def total_appended(self) -> int:
        """Samples appended since creation, including evicted ones"""
        return self._total_appended

    def __len__(self) -> int:
        return len(self._entries)

    def __iter__(self) -> Iterator[SessionEntry]:
        return iter(list(self._entries))

    def to_frame(self) -> pd.DataFrame:
        """History as a DataFrame for charting (x = time, y = mood_index)."""
        rows = []
        for entry in self._entries:
            row = entry.to_dict()
            row['timestamp'] = entry.timestamp
            rows.append(row)
        return pd.DataFrame(rows, columns=FRAME_COLUMNS)
