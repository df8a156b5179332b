"""Podium tracker - history of the top-N configuration over time.

Hey future me - this is the big brother of the ReignTracker! Instead of only
the #1 it follows the whole podium (top 3 by default) and records a
PodiumSnapshot every time the ORDERED podium changes.

Ordering of the podium:
1. cumulative plays, descending
2. previous podium position (incumbents stay ahead on ties)
3. entity id (stable for newcomers that tie)

Shortcut: a play for an entity outside a full podium that is still below the
lowest podium count cannot change anything, so the podium is not recomputed.

When a snapshot closes, its member counts are taken BEFORE the play that
caused the change, and every member earns the snapshot's days at the
position it held. Movement tags on the new snapshot:
    NEW      never been in a closed snapshot before
    CLIMBED  better position than before, or back after dropping out
    DROPPED  worse position than before
    None     same position
"""

import heapq
import logging
from collections.abc import Iterable
from dataclasses import dataclass, field
from datetime import date

from playreign.application.services.play_tally import PlayTally
from playreign.domain.entities import (
    HistoryCard,
    Movement,
    PlayEvent,
    PodiumEntry,
    PodiumSnapshot,
)
from playreign.domain.exceptions import InvalidStateException, ValidationError
from playreign.domain.value_objects.dates import days_between, parse_display_date

logger = logging.getLogger(__name__)

DEFAULT_PODIUM_SIZE = 3


@dataclass
class PodiumTimeline:
    """Visible podium snapshots plus one history card per entity."""

    snapshots: list[PodiumSnapshot] = field(default_factory=list)
    history_cards: list[HistoryCard] = field(default_factory=list)


class PodiumTracker:
    """Single-pass builder of podium snapshots for one timeline."""

    def __init__(self, size: int = DEFAULT_PODIUM_SIZE, tally: PlayTally | None = None) -> None:
        if size < 1:
            raise ValidationError(f"Podium size must be at least 1, got {size}")
        self.size = size
        self.tally = tally if tally is not None else PlayTally()
        self.snapshots: list[PodiumSnapshot] = []
        self.podium: list[int] = []
        self._movement: dict[int, Movement] = {}
        self._ever_completed: set[int] = set()
        self._start: date | None = None
        self._position_days: dict[int, list[int]] = {}
        self._entry_plays: dict[int, list[int]] = {}
        self._finished = False

    def feed(self, event: PlayEvent) -> PodiumSnapshot | None:
        """Process one play.

        Returns:
            The snapshot that was closed by this play, if any

        Raises:
            InvalidStateException: If the tracker was already finished
        """
        if self._finished:
            raise InvalidStateException("Cannot feed plays into a finished podium tracker")
        if event.entity_id is None or event.occurred_on is None:
            return None

        entity_id = event.entity_id
        previous_count = self.tally.count_of(entity_id)
        new_count = self.tally.increment(entity_id)
        if entity_id not in self._position_days:
            self._position_days[entity_id] = [0] * self.size
            self._entry_plays[entity_id] = [0] * self.size
        self.tally.record_metadata_if_absent(
            entity_id,
            event.entity_name,
            event.secondary_name,
            event.classification_id,
            event.classification_name,
        )

        if entity_id not in self.podium and len(self.podium) == self.size:
            if new_count < self.tally.count_of(self.podium[-1]):
                return None

        new_podium = self._rank_podium()
        if new_podium == self.podium:
            return None

        closed: PodiumSnapshot | None = None
        if self._start is not None and self.podium:
            counts_before = dict(self.tally.counts)
            if previous_count == 0:
                del counts_before[entity_id]
            else:
                counts_before[entity_id] = previous_count

            days = max(0, days_between(self._start, event.occurred_on))
            for position, member in enumerate(self.podium):
                self._position_days[member][position] += days
            closed = self._append_snapshot(event.occurred_on, days, counts_before, is_current=False)
            self._ever_completed.update(self.podium)

        movement: dict[int, Movement] = {}
        for position, member in enumerate(new_podium):
            old_position = self.podium.index(member) if member in self.podium else -1
            if old_position == -1:
                movement[member] = (
                    Movement.CLIMBED if member in self._ever_completed else Movement.NEW
                )
            elif old_position > position:
                movement[member] = Movement.CLIMBED
            elif old_position < position:
                movement[member] = Movement.DROPPED

            if old_position != position:
                self._entry_plays[member][position] = self.tally.count_of(member)

        self._start = event.occurred_on
        self.podium = new_podium
        self._movement = movement
        return closed

    def finish(self, today: date | None = None) -> list[PodiumSnapshot]:
        """Close the open snapshot against ``today`` and return all snapshots."""
        if self._finished:
            raise InvalidStateException("Podium tracker already finished")
        self._finished = True

        if self._start is not None and self.podium:
            today = today or date.today()
            days = max(0, days_between(self._start, today))
            for position, member in enumerate(self.podium):
                self._position_days[member][position] += days
            self._append_snapshot(None, days, self.tally.counts, is_current=True)

        return self.snapshots

    def _rank_podium(self) -> list[int]:
        previous_position = {member: i for i, member in enumerate(self.podium)}
        leaders = heapq.nsmallest(
            self.size,
            self.tally.counts.items(),
            key=lambda item: (
                -item[1],
                previous_position.get(item[0], self.size),
                item[0],
            ),
        )
        return [entity_id for entity_id, _ in leaders]

    def _append_snapshot(
        self,
        end_date: date | None,
        days: int,
        counts: dict[int, int],
        is_current: bool,
    ) -> PodiumSnapshot:
        entries = []
        for position, member in enumerate(self.podium):
            meta = self.tally.metadata_of(member)
            entries.append(
                PodiumEntry(
                    entity_id=member,
                    entity_name=meta.name,
                    secondary_name=meta.secondary_name,
                    classification_id=meta.classification_id,
                    classification_name=meta.classification_name,
                    position=position + 1,
                    plays_count=counts[member],
                    plays_when_entered=self._entry_plays[member][position],
                    days_at_position=list(self._position_days[member]),
                    movement=self._movement.get(member),
                )
            )
        snapshot = PodiumSnapshot(
            rank=len(self.snapshots) + 1,
            start_date=self._start,  # type: ignore[arg-type]
            end_date=end_date,
            days_in_config=days,
            entries=entries,
            is_current=is_current,
        )
        self.snapshots.append(snapshot)
        return snapshot


def replay_podium(
    events: Iterable[PlayEvent],
    size: int = DEFAULT_PODIUM_SIZE,
    today: date | None = None,
) -> list[PodiumSnapshot]:
    """Replay a chronological play stream into raw podium snapshots."""
    tracker = PodiumTracker(size)
    for event in events:
        tracker.feed(event)
    return tracker.finish(today)


def filter_snapshots_by_cutoff(
    snapshots: list[PodiumSnapshot],
    cutoff: date,
    today: date | None = None,
) -> list[PodiumSnapshot]:
    """Keep snapshots still active on/after the cutoff and re-rank them.

    A snapshot that started before the cutoff but ended after it is kept.
    Movements are recomputed over the visible snapshots afterwards.
    """
    today = today or date.today()
    visible: list[PodiumSnapshot] = []
    for snapshot in snapshots:
        try:
            end = parse_display_date(snapshot.end_label, today)
        except ValueError:
            logger.debug("Dropping podium snapshot with unparseable end %s", snapshot.end_label)
            continue
        if end >= cutoff:
            snapshot.rank = len(visible) + 1
            visible.append(snapshot)

    normalize_visible_movements(visible)
    return visible


# Hey future me, the raw movements are relative to the FULL history. Once old snapshots are
# hidden, an entity's first visible appearance has to read NEW, otherwise the UI shows
# "CLIMBED" for something the user never saw before.
def normalize_visible_movements(snapshots: list[PodiumSnapshot]) -> None:
    """Recompute movement tags relative to the visible timeline only."""
    seen: set[int] = set()
    previous_positions: dict[int, int] = {}

    for snapshot in snapshots:
        current_positions: dict[int, int] = {}
        for entry in snapshot.entries:
            movement: Movement | None = None
            if entry.entity_id not in seen:
                movement = Movement.NEW
            else:
                old_position = previous_positions.get(entry.entity_id)
                if old_position is None or old_position > entry.position:
                    movement = Movement.CLIMBED
                elif old_position < entry.position:
                    movement = Movement.DROPPED
            entry.movement = movement
            current_positions[entry.entity_id] = entry.position

        seen.update(current_positions)
        previous_positions = current_positions


def build_history_cards(snapshots: list[PodiumSnapshot]) -> list[HistoryCard]:
    """One card per entity, in order of first appearance.

    Day totals are cumulative in the snapshots, so the latest snapshot an
    entity appears in carries its final numbers.
    """
    cards: dict[int, HistoryCard] = {}
    for snapshot in snapshots:
        for entry in snapshot.entries:
            card = cards.get(entry.entity_id)
            if card is None:
                card = HistoryCard(
                    entity_id=entry.entity_id,
                    entity_name=entry.entity_name,
                    secondary_name=entry.secondary_name,
                    classification_id=entry.classification_id,
                    classification_name=entry.classification_name,
                    first_appearance_rank=snapshot.rank,
                )
                cards[entry.entity_id] = card
            card.days_at_position = list(entry.days_at_position)
    return list(cards.values())
