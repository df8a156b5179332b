"""Cumulative play counts and first-seen metadata for one replay run."""

from dataclasses import dataclass, field


@dataclass(frozen=True)
class EntityMetadata:
    """Display attributes of an entity as seen on its first play."""

    name: str
    secondary_name: str | None = None
    classification_id: int | None = None
    classification_name: str | None = None


# Hey future me, one PlayTally belongs to exactly ONE replay run - never share it between
# the artist/song/genre timelines. Counts only ever go up. Metadata is "first occurrence wins":
# if an artist gets renamed later in the play history, the timeline keeps the old name.
@dataclass
class PlayTally:
    """Play counter plus metadata cache keyed by entity id."""

    counts: dict[int, int] = field(default_factory=dict)
    metadata: dict[int, EntityMetadata] = field(default_factory=dict)

    def increment(self, entity_id: int) -> int:
        """Count one more play and return the entity's new cumulative count."""
        new_count = self.counts.get(entity_id, 0) + 1
        self.counts[entity_id] = new_count
        return new_count

    def count_of(self, entity_id: int) -> int:
        """Current cumulative count (0 if never played)."""
        return self.counts.get(entity_id, 0)

    def record_metadata_if_absent(
        self,
        entity_id: int,
        name: str | None,
        secondary_name: str | None = None,
        classification_id: int | None = None,
        classification_name: str | None = None,
    ) -> EntityMetadata:
        """Store metadata the first time an entity is seen; no-op afterwards.

        Returns:
            The cached metadata (the first-seen one if already present)
        """
        cached = self.metadata.get(entity_id)
        if cached is not None:
            return cached
        cached = EntityMetadata(
            name=name if name is not None else "Unknown",
            secondary_name=secondary_name,
            classification_id=classification_id,
            classification_name=classification_name,
        )
        self.metadata[entity_id] = cached
        return cached

    def metadata_of(self, entity_id: int) -> EntityMetadata:
        """Cached metadata; entities never seen get an "Unknown" placeholder."""
        return self.metadata.get(entity_id) or EntityMetadata(name="Unknown")
