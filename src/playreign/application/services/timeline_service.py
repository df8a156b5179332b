"""Top Played Timeline Service.

Hey future me - this is the entry point the web layer calls! It glues
together:

    rows (from whoever owns the SQL)
        ↓
    RowPlayEventSource (variant picks the columns)
        ↓
    replay_reigns / PodiumTracker (single pass, owned state)
        ↓
    finalize_timeline / filter_snapshots_by_cutoff (display cutoff from settings)

The three timelines (artist, song, genre) are the SAME algorithm with a
different variant. Each run owns its own tally, so ``build_all_timelines``
can run them side by side in worker threads without any locking.

Usage:
    service = TopPlayedTimelineService()
    reigns = service.get_song_timeline(rows)

    result = await service.build_all_timelines([
        RowPlayEventSource(artist_rows, ARTIST_VARIANT),
        RowPlayEventSource(song_rows, SONG_VARIANT),
    ])
"""

import asyncio
import logging
import time
from collections.abc import Callable, Iterable
from dataclasses import dataclass, field
from datetime import date
from typing import Any

from playreign.application.services.podium_tracker import (
    PodiumTimeline,
    PodiumTracker,
    build_history_cards,
    filter_snapshots_by_cutoff,
)
from playreign.application.services.reign_tracker import replay_reigns
from playreign.application.services.timeline_postprocessor import finalize_timeline
from playreign.application.sources.play_event_source import (
    VARIANTS,
    PlayEventSource,
    RowPlayEventSource,
)
from playreign.config import Settings, get_settings
from playreign.domain.entities import Reign, TimelineKind
from playreign.infrastructure.observability.logger_template import (
    log_operation,
    log_slow_operation,
)
from playreign.infrastructure.observability.logging import set_correlation_id

logger = logging.getLogger(__name__)


@dataclass
class TimelineBatchResult:
    """Result of building several timelines at once."""

    timelines: dict[TimelineKind, list[Reign]] = field(default_factory=dict)
    errors: dict[TimelineKind, str] = field(default_factory=dict)
    """Errors per timeline kind (kind -> error message)."""
    correlation_id: str = ""


class TopPlayedTimelineService:
    """Builds the "top played reigns" timelines for artists, songs and genres."""

    def __init__(
        self,
        settings: Settings | None = None,
        clock: Callable[[], date] | None = None,
    ) -> None:
        """Initialize the service.

        Args:
            settings: Settings to use (default: process settings)
            clock: Returns "today" for open reigns (default: date.today)
        """
        self._settings = settings or get_settings()
        self._clock = clock or date.today

    @property
    def display_cutoff(self) -> date:
        return self._settings.timeline.display_cutoff

    def get_artist_timeline(self, rows: Iterable[Any]) -> list[Reign]:
        """Reigns of the most played artist."""
        return self.get_timeline(TimelineKind.ARTIST, rows)

    def get_song_timeline(self, rows: Iterable[Any]) -> list[Reign]:
        """Reigns of the most played song."""
        return self.get_timeline(TimelineKind.SONG, rows)

    def get_genre_timeline(self, rows: Iterable[Any]) -> list[Reign]:
        """Reigns of the most played genre."""
        return self.get_timeline(TimelineKind.GENRE, rows)

    def get_timeline(self, kind: TimelineKind | str, rows: Iterable[Any]) -> list[Reign]:
        """Build the display timeline for one kind from pre-ordered rows.

        Raises:
            ValidationError: If ``kind`` is not a known timeline kind
        """
        kind = self._resolve_kind(kind)
        return self.build_timeline(RowPlayEventSource(rows, VARIANTS[kind]))

    def build_timeline(self, source: PlayEventSource) -> list[Reign]:
        """Replay one event source and post-process it for display."""
        today = self._clock()
        started = time.perf_counter()
        with log_operation(
            logger, "timeline.build", log_level=logging.DEBUG, kind=source.kind.value
        ) as summary:
            raw = replay_reigns(source.iter_events(), today=today)
            timeline = finalize_timeline(raw, self.display_cutoff, today)
            summary["raw_reigns"] = len(raw)
            summary["visible_reigns"] = len(timeline)

        log_slow_operation(
            logger,
            "timeline.build",
            int((time.perf_counter() - started) * 1000),
            threshold_ms=self._settings.observability.slow_operation_ms,
            kind=source.kind.value,
        )
        return timeline

    def get_podium_timeline(self, kind: TimelineKind | str, rows: Iterable[Any]) -> PodiumTimeline:
        """Build the top-N snapshot history for one kind."""
        kind = self._resolve_kind(kind)
        source = RowPlayEventSource(rows, VARIANTS[kind])
        today = self._clock()

        with log_operation(
            logger, "podium.build", log_level=logging.DEBUG, kind=kind.value
        ) as summary:
            tracker = PodiumTracker(self._settings.timeline.podium_size)
            for event in source.iter_events():
                tracker.feed(event)
            raw = tracker.finish(today)
            snapshots = filter_snapshots_by_cutoff(raw, self.display_cutoff, today)
            summary["raw_snapshots"] = len(raw)
            summary["visible_snapshots"] = len(snapshots)

        return PodiumTimeline(snapshots=snapshots, history_cards=build_history_cards(snapshots))

    # Hey future me - the runs share NOTHING (each has its own tally and reign list), so
    # gathering them in worker threads needs no locks. A broken source only loses its own
    # timeline; the others still come back.
    async def build_all_timelines(
        self, sources: Iterable[PlayEventSource]
    ) -> TimelineBatchResult:
        """Build several timelines concurrently.

        Args:
            sources: One event source per timeline kind

        Returns:
            TimelineBatchResult with the timelines that succeeded and the
            error message of each one that failed
        """
        correlation_id = set_correlation_id()
        sources = list(sources)
        tasks = [
            asyncio.create_task(
                asyncio.to_thread(self.build_timeline, source), name=source.kind.value
            )
            for source in sources
        ]

        result = TimelineBatchResult(correlation_id=correlation_id)
        outcomes = await asyncio.gather(*tasks, return_exceptions=True)
        for source, outcome in zip(sources, outcomes, strict=True):
            if isinstance(outcome, BaseException):
                if not isinstance(outcome, Exception):
                    raise outcome
                result.errors[source.kind] = str(outcome)
                logger.warning(
                    "TimelineService: %s timeline failed: %s", source.kind.value, outcome
                )
            else:
                result.timelines[source.kind] = outcome

        logger.info(
            "Built %d timelines (%d failed)", len(result.timelines), len(result.errors)
        )
        return result

    @staticmethod
    def _resolve_kind(kind: TimelineKind | str) -> TimelineKind:
        if isinstance(kind, TimelineKind):
            return kind
        return TimelineKind.from_string(kind)
