"""API schemas for the top played timelines.

Dates leave the engine as ``date`` objects and are only turned into
DD/MM/YYYY text here. An open end date renders as "Present".
"""

from pydantic import BaseModel, Field

from playreign.application.services.podium_tracker import PodiumTimeline
from playreign.domain.entities import (
    HistoryCard,
    PodiumEntry,
    PodiumSnapshot,
    Reign,
    TimelineKind,
)


class ReignOut(BaseModel):
    """One reign at #1, ready for display."""

    rank: int = Field(description="Position in the visible timeline (1 = oldest)")
    entity_id: int = Field(description="artist_id, song_id or genre_id")
    entity_name: str
    secondary_name: str | None = Field(default=None, description="Artist name for songs")
    classification_id: int | None = None
    classification_name: str | None = None
    start_date: str = Field(description="DD/MM/YYYY")
    end_date: str = Field(description="DD/MM/YYYY or 'Present'")
    plays_at_start: int
    plays_at_end: int
    days_held: int
    is_current: bool
    reign_sequence: int = Field(description="Which visible reign of this entity (1st, 2nd, ...)")
    total_reigns_for_entity: int
    total_days_all_reigns_for_entity: int

    @classmethod
    def from_domain(cls, reign: Reign) -> "ReignOut":
        return cls(
            rank=reign.rank,
            entity_id=reign.entity_id,
            entity_name=reign.entity_name,
            secondary_name=reign.secondary_name,
            classification_id=reign.classification_id,
            classification_name=reign.classification_name,
            start_date=reign.start_label,
            end_date=reign.end_label,
            plays_at_start=reign.plays_at_start,
            plays_at_end=reign.plays_at_end,
            days_held=reign.days_held,
            is_current=reign.is_current,
            reign_sequence=reign.reign_sequence,
            total_reigns_for_entity=reign.total_reigns_for_entity,
            total_days_all_reigns_for_entity=reign.total_days_all_reigns_for_entity,
        )


class TimelineOut(BaseModel):
    """A full reign timeline for one kind."""

    kind: TimelineKind
    reigns: list[ReignOut] = Field(default_factory=list)

    @classmethod
    def from_domain(cls, kind: TimelineKind, reigns: list[Reign]) -> "TimelineOut":
        return cls(kind=kind, reigns=[ReignOut.from_domain(r) for r in reigns])


class PodiumEntryOut(BaseModel):
    """One podium member."""

    entity_id: int
    entity_name: str
    secondary_name: str | None = None
    classification_id: int | None = None
    classification_name: str | None = None
    position: int
    plays_count: int
    plays_when_entered: int
    days_at_position: list[int]
    movement: str | None = Field(default=None, description="NEW, CLIMBED, DROPPED or null")

    @classmethod
    def from_domain(cls, entry: PodiumEntry) -> "PodiumEntryOut":
        return cls(
            entity_id=entry.entity_id,
            entity_name=entry.entity_name,
            secondary_name=entry.secondary_name,
            classification_id=entry.classification_id,
            classification_name=entry.classification_name,
            position=entry.position,
            plays_count=entry.plays_count,
            plays_when_entered=entry.plays_when_entered,
            days_at_position=list(entry.days_at_position),
            movement=entry.movement.value if entry.movement else None,
        )


class PodiumSnapshotOut(BaseModel):
    """One podium configuration."""

    rank: int
    start_date: str
    end_date: str
    days_in_config: int
    is_current: bool
    entries: list[PodiumEntryOut]

    @classmethod
    def from_domain(cls, snapshot: PodiumSnapshot) -> "PodiumSnapshotOut":
        return cls(
            rank=snapshot.rank,
            start_date=snapshot.start_label,
            end_date=snapshot.end_label,
            days_in_config=snapshot.days_in_config,
            is_current=snapshot.is_current,
            entries=[PodiumEntryOut.from_domain(e) for e in snapshot.entries],
        )


class HistoryCardOut(BaseModel):
    """Per-entity podium summary."""

    entity_id: int
    entity_name: str
    secondary_name: str | None = None
    classification_id: int | None = None
    classification_name: str | None = None
    first_appearance_rank: int
    days_at_position: list[int]

    @classmethod
    def from_domain(cls, card: HistoryCard) -> "HistoryCardOut":
        return cls(
            entity_id=card.entity_id,
            entity_name=card.entity_name,
            secondary_name=card.secondary_name,
            classification_id=card.classification_id,
            classification_name=card.classification_name,
            first_appearance_rank=card.first_appearance_rank,
            days_at_position=list(card.days_at_position),
        )


class PodiumTimelineOut(BaseModel):
    """Podium snapshots plus history cards for one kind."""

    kind: TimelineKind
    snapshots: list[PodiumSnapshotOut] = Field(default_factory=list)
    history_cards: list[HistoryCardOut] = Field(default_factory=list)

    @classmethod
    def from_domain(cls, kind: TimelineKind, timeline: PodiumTimeline) -> "PodiumTimelineOut":
        return cls(
            kind=kind,
            snapshots=[PodiumSnapshotOut.from_domain(s) for s in timeline.snapshots],
            history_cards=[HistoryCardOut.from_domain(c) for c in timeline.history_cards],
        )
