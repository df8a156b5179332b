"""Play event sources for the timeline engine.

Usage:
    from playreign.application.sources import RowPlayEventSource, ARTIST_VARIANT

    source = RowPlayEventSource(rows, ARTIST_VARIANT)
"""

from playreign.application.sources.play_event_source import (
    ARTIST_VARIANT,
    GENRE_VARIANT,
    SONG_VARIANT,
    VARIANTS,
    PlayEventSource,
    RowPlayEventSource,
    TimelineVariant,
)

__all__ = [
    "ARTIST_VARIANT",
    "GENRE_VARIANT",
    "SONG_VARIANT",
    "VARIANTS",
    "PlayEventSource",
    "RowPlayEventSource",
    "TimelineVariant",
]
