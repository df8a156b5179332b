"""Timeline post-processing: cutoff filter, per-entity reign stats, re-ranking.

Hey future me - the tracker computes the FULL history, but the UI only shows
reigns that overlap [cutoff, today]. Everything per-entity (reign number,
total reigns, total days) is counted over the VISIBLE reigns only, so an
artist whose first reign ended before the cutoff shows its first visible
reign as "reign 1".

Order of steps matters:
    filter_by_cutoff -> aggregate_reign_stats -> rerank

``rank`` is a position-in-time index (1 = oldest visible reign), NOT a
popularity rank.
"""

import logging
from collections import defaultdict
from datetime import date

from playreign.domain.entities import Reign
from playreign.domain.value_objects.dates import parse_display_date

logger = logging.getLogger(__name__)


# Listen up, the filter reads the DISPLAY labels (DD/MM/YYYY / "Present") and parses them
# back, the same way the rendered timeline sees the dates. A label that does not parse drops
# that one reign; the rest of the timeline is unaffected.
def filter_by_cutoff(
    reigns: list[Reign],
    cutoff: date,
    today: date | None = None,
) -> list[Reign]:
    """Keep reigns that end or start on/after the cutoff.

    Args:
        reigns: Reigns in chronological order
        cutoff: First date that should be visible
        today: Date an open reign ends on (default: local today)

    Returns:
        New list with the visible reigns, order preserved
    """
    today = today or date.today()
    visible: list[Reign] = []
    for reign in reigns:
        try:
            end = parse_display_date(reign.end_label, today)
            start = parse_display_date(reign.start_label, today)
        except ValueError:
            logger.debug(
                "Dropping reign of entity %s with unparseable dates (%s - %s)",
                reign.entity_id,
                reign.start_label,
                reign.end_label,
            )
            continue
        if end >= cutoff or start >= cutoff:
            visible.append(reign)
    return visible


def aggregate_reign_stats(reigns: list[Reign]) -> list[Reign]:
    """Fill reign_sequence and the per-entity totals in place.

    Returns:
        The same list, for chaining
    """
    by_entity: dict[int, list[Reign]] = defaultdict(list)
    for reign in reigns:
        by_entity[reign.entity_id].append(reign)

    for entity_reigns in by_entity.values():
        total_days = sum(r.days_held for r in entity_reigns)
        for sequence, reign in enumerate(entity_reigns, start=1):
            reign.reign_sequence = sequence
            reign.total_reigns_for_entity = len(entity_reigns)
            reign.total_days_all_reigns_for_entity = total_days

    return reigns


def rerank(reigns: list[Reign]) -> list[Reign]:
    """Number reigns 1..n in their current (chronological) order."""
    for position, reign in enumerate(reigns):
        reign.rank = position + 1
    return reigns


def finalize_timeline(
    raw_reigns: list[Reign],
    cutoff: date,
    today: date | None = None,
) -> list[Reign]:
    """Filter, aggregate and rank a raw reign sequence for display.

    Args:
        raw_reigns: Output of the reign tracker
        cutoff: Display cutoff date
        today: Date an open reign ends on

    Returns:
        Display-ready reigns
    """
    visible = filter_by_cutoff(raw_reigns, cutoff, today)
    aggregate_reign_stats(visible)
    rerank(visible)
    if len(visible) != len(raw_reigns):
        logger.debug(
            "Cutoff %s hid %d of %d reigns",
            cutoff.isoformat(),
            len(raw_reigns) - len(visible),
            len(raw_reigns),
        )
    return visible
