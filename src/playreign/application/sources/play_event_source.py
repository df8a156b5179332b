"""PlayEventSource Protocol and the row adapter.

Hey future me - the engine never talks to a database! Whoever owns the SQL
(joins, override coalescing, ORDER BY play_date) hands us already ordered
rows, and this module turns them into PlayEvents.

Which columns matter depends on the timeline:

    kind    id         name        secondary     classification
    artist  artist_id  artist_name -             gender_id / gender_name
    song    song_id    song_name   artist_name   gender_id / gender_name
    genre   genre_id   genre_name  -             -

All variants read the date from ``play_date``. Custom layouts can build their
own TimelineVariant.

Usage:
    source = RowPlayEventSource(rows, SONG_VARIANT)
    reigns = replay_reigns(source.iter_events())
"""

from __future__ import annotations

import logging
from collections.abc import Iterable, Iterator, Mapping
from dataclasses import dataclass
from typing import Any, Protocol, runtime_checkable

from playreign.domain.entities import PlayEvent, TimelineKind
from playreign.domain.value_objects.dates import to_calendar_date

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class TimelineVariant:
    """Row field names that identify an entity for one timeline kind."""

    kind: TimelineKind
    id_field: str
    name_field: str
    secondary_name_field: str | None = None
    classification_id_field: str | None = None
    classification_name_field: str | None = None
    date_field: str = "play_date"


ARTIST_VARIANT = TimelineVariant(
    kind=TimelineKind.ARTIST,
    id_field="artist_id",
    name_field="artist_name",
    classification_id_field="gender_id",
    classification_name_field="gender_name",
)

SONG_VARIANT = TimelineVariant(
    kind=TimelineKind.SONG,
    id_field="song_id",
    name_field="song_name",
    secondary_name_field="artist_name",
    classification_id_field="gender_id",
    classification_name_field="gender_name",
)

GENRE_VARIANT = TimelineVariant(
    kind=TimelineKind.GENRE,
    id_field="genre_id",
    name_field="genre_name",
)

VARIANTS: dict[TimelineKind, TimelineVariant] = {
    variant.kind: variant for variant in (ARTIST_VARIANT, SONG_VARIANT, GENRE_VARIANT)
}


@runtime_checkable
class PlayEventSource(Protocol):
    """Anything that yields chronologically ordered plays for one timeline kind."""

    @property
    def kind(self) -> TimelineKind: ...

    def iter_events(self) -> Iterator[PlayEvent]: ...


def _as_mapping(row: Any) -> Mapping[str, Any]:
    # SQLAlchemy Row objects expose their columns via ._mapping
    mapping = getattr(row, "_mapping", None)
    if mapping is not None:
        return mapping
    return row


def _as_int(value: Any) -> int | None:
    if value is None:
        return None
    try:
        return int(value)
    except (TypeError, ValueError):
        return None


class RowPlayEventSource:
    """Adapts already-queried rows into PlayEvents for one variant.

    Rows without a usable entity id or date are skipped and counted in
    ``skipped``; they are never an error.
    """

    def __init__(self, rows: Iterable[Any], variant: TimelineVariant) -> None:
        self._rows = rows
        self.variant = variant
        self.skipped = 0

    @property
    def kind(self) -> TimelineKind:
        return self.variant.kind

    def iter_events(self) -> Iterator[PlayEvent]:
        variant = self.variant
        for row in self._rows:
            data = _as_mapping(row)
            entity_id = _as_int(data.get(variant.id_field))
            occurred_on = to_calendar_date(data.get(variant.date_field))
            if entity_id is None or occurred_on is None:
                self.skipped += 1
                continue

            name = data.get(variant.name_field)
            yield PlayEvent(
                occurred_on=occurred_on,
                entity_id=entity_id,
                entity_name=name if name is not None else "Unknown",
                secondary_name=self._optional(data, variant.secondary_name_field),
                classification_id=_as_int(
                    self._optional(data, variant.classification_id_field)
                ),
                classification_name=self._optional(data, variant.classification_name_field),
            )

        if self.skipped:
            logger.info(
                "Skipped %d %s play rows without id or date", self.skipped, variant.kind.value
            )

    @staticmethod
    def _optional(data: Mapping[str, Any], field_name: str | None) -> Any:
        if field_name is None:
            return None
        return data.get(field_name)
