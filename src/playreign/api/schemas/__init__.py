"""API response schemas."""

from playreign.api.schemas.timeline import (
    HistoryCardOut,
    PodiumEntryOut,
    PodiumSnapshotOut,
    PodiumTimelineOut,
    ReignOut,
    TimelineOut,
)

__all__ = [
    "HistoryCardOut",
    "PodiumEntryOut",
    "PodiumSnapshotOut",
    "PodiumTimelineOut",
    "ReignOut",
    "TimelineOut",
]
