"""Reign tracker - replays plays and records every change of the #1 entity.

Hey future me - this is THE core of the top played timeline!

The tracker is a tiny state machine:

    NoLeader --first valid play--> HasLeader(leader_id, leader_plays)

For every play (in chronological order):
1. Skip it if it has no entity id or no date.
2. Bump the entity's cumulative count in the PlayTally.
3. Cache the entity's metadata if this is its first play.
4. Decide:
   - no leader yet              -> the entity becomes #1
   - play belongs to the leader -> leader_plays goes up, NO new reign
   - challenger count > leader  -> close the current reign, open a new one
   - anything else (incl. ties) -> nothing happens

Ties NEVER dethrone the leader. A challenger must be STRICTLY ahead.

Example (A leads with 1, B ties at 1, then B goes to 2):

    day 1  A  -> A=1  reign #1 opens for A
    day 2  B  -> B=1  tie, A keeps #1
    day 3  B  -> B=2  B overtakes: reign #1 closes on day 3, reign #2 opens for B

After the last play, ``finish()`` leaves the final reign open ("Present") and
counts its days up to the caller's "today".
"""

import logging
from collections.abc import Iterable
from datetime import date

from playreign.application.services.play_tally import PlayTally
from playreign.domain.entities import PlayEvent, Reign
from playreign.domain.exceptions import InvalidStateException
from playreign.domain.value_objects.dates import days_between

logger = logging.getLogger(__name__)


class ReignTracker:
    """Stateful single-pass builder of the raw reign sequence.

    One tracker = one run. It owns its PlayTally and reign list, so several
    trackers (artist/song/genre) can run side by side without sharing state.
    """

    def __init__(self, tally: PlayTally | None = None) -> None:
        self.tally = tally if tally is not None else PlayTally()
        self.reigns: list[Reign] = []
        self.leader_id: int | None = None
        self.leader_plays = 0
        self.events_seen = 0
        self.events_skipped = 0
        self._finished = False

    @property
    def finished(self) -> bool:
        return self._finished

    def feed(self, event: PlayEvent) -> Reign | None:
        """Process one play.

        Args:
            event: Next play in chronological order

        Returns:
            The newly opened Reign if leadership changed, else None

        Raises:
            InvalidStateException: If the tracker was already finished
        """
        if self._finished:
            raise InvalidStateException("Cannot feed plays into a finished reign tracker")

        self.events_seen += 1
        if event.entity_id is None or event.occurred_on is None:
            self.events_skipped += 1
            logger.debug("Skipping play without entity id or date: %r", event)
            return None

        new_count = self.tally.increment(event.entity_id)
        self.tally.record_metadata_if_absent(
            event.entity_id,
            event.entity_name,
            event.secondary_name,
            event.classification_id,
            event.classification_name,
        )

        if self.leader_id is None:
            return self._open_reign(event, new_count)

        if event.entity_id == self.leader_id:
            # Leader's own play only raises the bar for the next challenger
            self.leader_plays = new_count
            return None

        if new_count > self.leader_plays:
            self._close_current(event.occurred_on)
            return self._open_reign(event, new_count)

        return None

    def finish(self, today: date | None = None) -> list[Reign]:
        """Close the pass and return the raw reign sequence.

        The last reign stays current with no end date; ``days_held`` and
        ``plays_at_end`` are computed as of ``today``.

        Args:
            today: Date the open reign is measured against (default: local today)

        Returns:
            Raw reigns in chronological order (empty if no valid plays)

        Raises:
            InvalidStateException: If called twice
        """
        if self._finished:
            raise InvalidStateException("Reign tracker already finished")
        self._finished = True

        if self.reigns:
            today = today or date.today()
            current = self.reigns[-1]
            current.end_date = None
            current.plays_at_end = self.leader_plays
            current.days_held = max(0, days_between(current.start_date, today))
            current.is_current = True

        logger.debug(
            "Reign replay finished: %d plays, %d skipped, %d reigns",
            self.events_seen,
            self.events_skipped,
            len(self.reigns),
        )
        return self.reigns

    def _close_current(self, end_date: date) -> None:
        current = self.reigns[-1]
        current.end_date = end_date
        current.plays_at_end = self.leader_plays
        current.days_held = max(0, days_between(current.start_date, end_date))
        current.is_current = False

    def _open_reign(self, event: PlayEvent, plays: int) -> Reign:
        meta = self.tally.metadata_of(event.entity_id)
        reign = Reign(
            entity_id=event.entity_id,
            entity_name=meta.name,
            secondary_name=meta.secondary_name,
            classification_id=meta.classification_id,
            classification_name=meta.classification_name,
            start_date=event.occurred_on,
            plays_at_start=plays,
            plays_at_end=plays,
            is_current=True,
        )
        self.reigns.append(reign)
        self.leader_id = event.entity_id
        self.leader_plays = plays
        return reign


def replay_reigns(
    events: Iterable[PlayEvent],
    today: date | None = None,
    tally: PlayTally | None = None,
) -> list[Reign]:
    """Replay a chronological play stream into the raw reign sequence.

    Args:
        events: Plays ordered by date (ties in source order)
        today: Date the still-open reign is measured against
        tally: Optional pre-created tally (a fresh one is used otherwise)

    Returns:
        Raw, contiguous reigns; the last one is current. Empty input -> []
    """
    tracker = ReignTracker(tally)
    for event in events:
        tracker.feed(event)
    return tracker.finish(today)
