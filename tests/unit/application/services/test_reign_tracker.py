"""Unit tests for the reign tracker.

Hey future me - these tests pin down the leadership rules:
1. first valid play makes its entity #1
2. a challenger needs a STRICTLY higher count (ties never dethrone)
3. the leader's own plays never open a new reign
4. the last reign stays open and counts days up to "today"
"""

from datetime import date, timedelta

import pytest

from playreign.application.services.reign_tracker import ReignTracker, replay_reigns
from playreign.domain.entities import PlayEvent
from playreign.domain.exceptions import InvalidStateException

DAY_ONE = date(2010, 1, 1)


def day(n: int) -> date:
    return DAY_ONE + timedelta(days=n - 1)


def play(n: int, entity_id: int, name: str | None = None, **extra) -> PlayEvent:
    return PlayEvent(
        occurred_on=day(n),
        entity_id=entity_id,
        entity_name=name or f"Entity {entity_id}",
        **extra,
    )


class TestLeadershipChanges:
    """Tests for when leadership does and does not change."""

    def test_empty_stream_gives_empty_timeline(self) -> None:
        """No plays means no reigns, not an error."""
        assert replay_reigns([], today=day(10)) == []

    def test_first_play_opens_first_reign(self) -> None:
        """The first valid play's entity becomes the leader."""
        reigns = replay_reigns([play(1, 7)], today=day(1))

        assert len(reigns) == 1
        assert reigns[0].entity_id == 7
        assert reigns[0].plays_at_start == 1
        assert reigns[0].is_current is True

    def test_tie_then_overtake(self) -> None:
        """A on day 1, B ties on day 2, B overtakes on day 3."""
        reigns = replay_reigns([play(1, 1), play(2, 2), play(3, 2)], today=day(10))

        assert [r.entity_id for r in reigns] == [1, 2]

        first, second = reigns
        assert first.start_date == day(1)
        assert first.end_date == day(3)
        assert first.plays_at_start == 1
        assert first.plays_at_end == 1
        assert first.days_held == 2
        assert first.is_current is False

        assert second.start_date == day(3)
        assert second.end_date is None
        assert second.plays_at_start == 2
        assert second.plays_at_end == 2
        assert second.days_held == 7
        assert second.is_current is True

    def test_equal_count_does_not_overtake(self) -> None:
        """Entity 2 reaching 3 plays against entity 1's 3 plays is a tie, not a change."""
        events = [play(1, 1), play(2, 1), play(3, 1), play(4, 2), play(5, 2), play(6, 2)]

        reigns = replay_reigns(events, today=day(6))

        assert len(reigns) == 1
        assert reigns[0].entity_id == 1
        assert reigns[0].start_date == day(1)
        assert reigns[0].end_date is None
        assert reigns[0].plays_at_end == 3
        assert reigns[0].days_held == 5

    def test_fourth_play_overtakes(self) -> None:
        """Only a strictly higher count takes the lead."""
        events = [play(1, 1), play(2, 1), play(3, 1), play(4, 2), play(5, 2), play(6, 2)]
        events.append(play(7, 2))

        reigns = replay_reigns(events, today=day(7))

        assert [r.entity_id for r in reigns] == [1, 2]
        assert reigns[0].end_date == day(7)
        assert reigns[0].plays_at_end == 3
        assert reigns[1].plays_at_start == 4

    def test_alternating_tie_keeps_first_to_reach_count(self) -> None:
        """[A, B, A, B] ends 2-2; A reached two plays first and keeps #1."""
        a, b = 5, 9
        reigns = replay_reigns([play(1, a), play(2, b), play(3, a), play(4, b)], today=day(4))

        assert len(reigns) == 1
        assert reigns[0].entity_id == a
        assert reigns[0].plays_at_end == 2

    def test_tie_does_not_favor_smaller_id(self) -> None:
        """The incumbent wins ties even when the challenger has the smaller id."""
        reigns = replay_reigns([play(1, 9), play(2, 1)], today=day(2))

        assert [r.entity_id for r in reigns] == [9]

    def test_leader_plays_do_not_open_new_reign(self) -> None:
        """The leader's own plays only raise its running count."""
        reigns = replay_reigns([play(1, 3), play(2, 3), play(3, 3)], today=day(3))

        assert len(reigns) == 1
        assert reigns[0].plays_at_start == 1
        assert reigns[0].plays_at_end == 3

    def test_leader_play_raises_the_bar(self) -> None:
        """A challenger must beat the leader's CURRENT count, not its count at reign start."""
        events = [play(1, 1), play(2, 1), play(3, 2), play(4, 2), play(5, 2)]

        reigns = replay_reigns(events, today=day(5))

        assert [r.entity_id for r in reigns] == [1, 2]
        # Closed reign reports the outgoing leader's count, untouched by the overtaking play
        assert reigns[0].plays_at_end == 2
        assert reigns[0].end_date == day(5)
        assert reigns[1].plays_at_start == 3

    def test_feed_returns_new_reign_only_on_change(self) -> None:
        """feed() returns the opened reign, or None when nothing changed."""
        tracker = ReignTracker()

        opened = tracker.feed(play(1, 1))
        unchanged = tracker.feed(play(2, 2))
        overtaken = tracker.feed(play(3, 2))

        assert opened is not None and opened.entity_id == 1
        assert unchanged is None
        assert overtaken is not None and overtaken.entity_id == 2
        assert tracker.leader_id == 2
        assert tracker.leader_plays == 2


class TestTimelineProperties:
    """Tests for invariants that hold for any stream."""

    @pytest.fixture
    def busy_stream(self) -> list[PlayEvent]:
        """Three entities trading the lead several times."""
        pattern = [1, 2, 2, 1, 1, 3, 3, 3, 2, 2, 2, 1, 1, 3, 3]
        return [play(i + 1, entity_id) for i, entity_id in enumerate(pattern)]

    def test_reigns_are_contiguous(self, busy_stream: list[PlayEvent]) -> None:
        """Each reign ends on the day the next one starts."""
        reigns = replay_reigns(busy_stream, today=day(30))

        assert len(reigns) > 2
        for previous, following in zip(reigns, reigns[1:]):
            assert previous.end_date == following.start_date

    def test_exactly_one_current_reign_and_it_is_last(
        self, busy_stream: list[PlayEvent]
    ) -> None:
        """Only the final reign is current."""
        reigns = replay_reigns(busy_stream, today=day(30))

        current = [r for r in reigns if r.is_current]
        assert current == [reigns[-1]]

    def test_days_held_matches_calendar_difference(
        self, busy_stream: list[PlayEvent]
    ) -> None:
        """Closed reigns span start to end, the open one spans start to today."""
        today = day(30)
        reigns = replay_reigns(busy_stream, today=today)

        for reign in reigns[:-1]:
            assert reign.days_held == (reign.end_date - reign.start_date).days
        assert reigns[-1].days_held == (today - reigns[-1].start_date).days
        assert all(r.days_held >= 0 for r in reigns)

    def test_tally_counts_every_valid_play(self, busy_stream: list[PlayEvent]) -> None:
        """The tally ends with the total number of plays per entity."""
        tracker = ReignTracker()
        for event in busy_stream:
            tracker.feed(event)

        assert tracker.tally.counts == {1: 5, 2: 5, 3: 5}

    def test_open_reign_before_start_clamps_to_zero(self) -> None:
        """A "today" earlier than the start never yields negative days."""
        reigns = replay_reigns([play(5, 1)], today=day(1))

        assert reigns[0].days_held == 0


class TestMetadataAndMalformedPlays:
    """Tests for metadata caching and skipped rows."""

    def test_first_seen_name_wins(self) -> None:
        """A later rename does not change the name shown in any reign."""
        events = [
            play(1, 1, name="Old Name"),
            play(2, 2, name="Other"),
            play(3, 2, name="Other"),
            play(4, 1, name="New Name"),
            play(5, 1, name="New Name"),
        ]

        reigns = replay_reigns(events, today=day(5))

        assert [r.entity_id for r in reigns] == [1, 2, 1]
        assert reigns[0].entity_name == "Old Name"
        assert reigns[2].entity_name == "Old Name"

    def test_secondary_and_classification_are_copied(self) -> None:
        """Reigns carry the first-seen secondary name and classification."""
        event = play(
            1,
            11,
            name="Song",
            secondary_name="Artist",
            classification_id=2,
            classification_name="Female",
        )

        reign = replay_reigns([event], today=day(1))[0]

        assert reign.secondary_name == "Artist"
        assert reign.classification_id == 2
        assert reign.classification_name == "Female"

    def test_plays_without_id_or_date_are_skipped(self) -> None:
        """Malformed plays are counted as skipped and change nothing."""
        tracker = ReignTracker()
        tracker.feed(PlayEvent(occurred_on=None, entity_id=1))  # type: ignore[arg-type]
        tracker.feed(PlayEvent(occurred_on=day(1), entity_id=None))  # type: ignore[arg-type]
        tracker.feed(play(2, 4))

        reigns = tracker.finish(today=day(2))

        assert tracker.events_skipped == 2
        assert tracker.tally.counts == {4: 1}
        assert [r.entity_id for r in reigns] == [4]
        assert reigns[0].start_date == day(2)


class TestTrackerLifecycle:
    """Tests for finish() semantics."""

    def test_feed_after_finish_raises(self) -> None:
        tracker = ReignTracker()
        tracker.finish(today=day(1))

        with pytest.raises(InvalidStateException):
            tracker.feed(play(1, 1))

    def test_finish_twice_raises(self) -> None:
        tracker = ReignTracker()
        tracker.finish(today=day(1))

        with pytest.raises(InvalidStateException):
            tracker.finish(today=day(1))
