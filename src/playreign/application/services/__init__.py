"""Application services for the top played timelines.

Hey future me - import from here, not from the individual modules:

    from playreign.application.services import TopPlayedTimelineService, replay_reigns
"""

from playreign.application.services.play_tally import EntityMetadata, PlayTally
from playreign.application.services.podium_tracker import (
    DEFAULT_PODIUM_SIZE,
    PodiumTimeline,
    PodiumTracker,
    build_history_cards,
    filter_snapshots_by_cutoff,
    normalize_visible_movements,
    replay_podium,
)
from playreign.application.services.reign_tracker import ReignTracker, replay_reigns
from playreign.application.services.timeline_postprocessor import (
    aggregate_reign_stats,
    filter_by_cutoff,
    finalize_timeline,
    rerank,
)
from playreign.application.services.timeline_service import (
    TimelineBatchResult,
    TopPlayedTimelineService,
)

__all__ = [
    "DEFAULT_PODIUM_SIZE",
    "EntityMetadata",
    "PlayTally",
    "PodiumTimeline",
    "PodiumTracker",
    "ReignTracker",
    "TimelineBatchResult",
    "TopPlayedTimelineService",
    "aggregate_reign_stats",
    "build_history_cards",
    "filter_by_cutoff",
    "filter_snapshots_by_cutoff",
    "finalize_timeline",
    "normalize_visible_movements",
    "replay_podium",
    "replay_reigns",
    "rerank",
]
