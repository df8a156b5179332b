"""Domain entities for the top played timeline."""

from dataclasses import dataclass, field
from datetime import date
from enum import Enum

from playreign.domain.exceptions import ValidationError
from playreign.domain.value_objects.dates import format_display_date


# Hey future me, TimelineKind picks WHICH attribute of a play identifies the entity that
# competes for #1. The replay itself is identical for all three - only the row fields differ
# (see TimelineVariant in application/sources). The enum is stored/passed as string.
class TimelineKind(str, Enum):
    """Which entity a timeline ranks."""

    ARTIST = "artist"
    SONG = "song"
    GENRE = "genre"

    @classmethod
    def from_string(cls, value: str) -> "TimelineKind":
        """Parse a kind name, case-insensitive, plural forms allowed.

        Raises:
            ValidationError: If the value names no known kind
        """
        normalized = value.strip().lower()
        if normalized.endswith("s"):
            normalized = normalized[:-1]
        for kind in cls:
            if kind.value == normalized:
                return kind
        raise ValidationError(f"Unknown timeline kind: {value!r}")


class Movement(str, Enum):
    """How a podium member moved compared to the previous snapshot."""

    NEW = "NEW"  # First time on the podium
    CLIMBED = "CLIMBED"  # Higher position, or back on the podium after leaving it
    DROPPED = "DROPPED"  # Lower position


@dataclass(frozen=True)
class PlayEvent:
    """One play attributed to one entity.

    ``occurred_on`` is already reduced to a calendar date. Events come from a
    PlayEventSource in non-decreasing date order.
    """

    occurred_on: date
    entity_id: int
    entity_name: str = "Unknown"
    secondary_name: str | None = None
    classification_id: int | None = None
    classification_name: str | None = None


# Yo, Reign is one uninterrupted stretch at #1. end_date=None means "still reigning" - the
# display label is then "Present" and days_held is counted up to "today" of the run that
# produced it. rank and the three per-entity totals are owned by the post-processor; the
# tracker only fills the semantic fields.
@dataclass
class Reign:
    """A period during which one entity held the #1 cumulative-play position."""

    entity_id: int
    entity_name: str
    start_date: date
    plays_at_start: int
    secondary_name: str | None = None
    classification_id: int | None = None
    classification_name: str | None = None
    end_date: date | None = None
    plays_at_end: int = 0
    days_held: int = 0
    is_current: bool = True
    rank: int = 0
    reign_sequence: int = 0
    total_reigns_for_entity: int = 0
    total_days_all_reigns_for_entity: int = 0

    @property
    def is_open(self) -> bool:
        """True while the reign has no concrete end date."""
        return self.end_date is None

    @property
    def start_label(self) -> str:
        """Start date as DD/MM/YYYY."""
        return format_display_date(self.start_date)

    @property
    def end_label(self) -> str:
        """End date as DD/MM/YYYY, or "Present" while open."""
        return format_display_date(self.end_date)


@dataclass
class PodiumEntry:
    """One member of a podium snapshot.

    ``days_at_position[i]`` is the running total of days this entity spent at
    position ``i + 1`` up to and including the snapshot it belongs to.
    """

    entity_id: int
    entity_name: str
    position: int
    plays_count: int
    plays_when_entered: int
    days_at_position: list[int] = field(default_factory=list)
    secondary_name: str | None = None
    classification_id: int | None = None
    classification_name: str | None = None
    movement: Movement | None = None


@dataclass
class PodiumSnapshot:
    """A stretch of time during which the top-N ordering did not change."""

    rank: int
    start_date: date
    end_date: date | None
    days_in_config: int
    entries: list[PodiumEntry] = field(default_factory=list)
    is_current: bool = False

    @property
    def start_label(self) -> str:
        return format_display_date(self.start_date)

    @property
    def end_label(self) -> str:
        return format_display_date(self.end_date)


@dataclass
class HistoryCard:
    """Per-entity summary of its time on the podium."""

    entity_id: int
    entity_name: str
    first_appearance_rank: int
    days_at_position: list[int] = field(default_factory=list)
    secondary_name: str | None = None
    classification_id: int | None = None
    classification_name: str | None = None


__all__ = [
    "HistoryCard",
    "Movement",
    "PlayEvent",
    "PodiumEntry",
    "PodiumSnapshot",
    "Reign",
    "TimelineKind",
]
