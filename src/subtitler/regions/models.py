"""Item and region models for the waveform timeline."""

from __future__ import annotations

from dataclasses import dataclass, replace
from enum import Enum
from typing import Mapping


class ItemKind(str, Enum):
    """Kind of a timeline item.

    Only primary items (caption clips) are indexed into regions. Further kinds
    can be added here; the region index skips anything that is not primary.
    """

    PRIMARY = "primary"


@dataclass(frozen=True, slots=True)
class Item:
    item_id: str
    start: int
    end: int
    kind: ItemKind = ItemKind.PRIMARY

    @property
    def duration(self) -> int:
        return self.end - self.start

    def validate(self) -> None:
        if self.start < 0:
            raise ValueError(f"item '{self.item_id}' start must be >= 0")
        if self.end <= self.start:
            raise ValueError(f"item '{self.item_id}' end must be > start")

    def covers(self, time_ms: float) -> bool:
        return self.start <= time_ms < self.end

    def overlaps(self, start: int, end: int) -> bool:
        return self.start < end and self.end > start

    def with_interval(self, start: int, end: int) -> Item:
        return replace(self, start=start, end=end)


@dataclass(frozen=True, slots=True)
class Region:
    """Maximal span of the timeline with a constant set of active items.

    A region ends where the next one starts. Only the last region of a
    partition carries ``end``, the total timeline duration.
    """

    start: int
    item_ids: tuple[str, ...] = ()
    end: int | None = None

    def has_same_items(self, other: Region) -> bool:
        return len(self.item_ids) == len(other.item_ids) and set(self.item_ids) == set(other.item_ids)


@dataclass(frozen=True, slots=True)
class RegionBuild:
    regions: list[Region]
    items_by_id: Mapping[str, Item]
