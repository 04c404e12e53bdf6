"""Single owner of the item store and its region partition."""

from __future__ import annotations

import logging
from typing import Iterable, Mapping

from subtitler.regions.index import build_regions, check_partition, query_at, timeline_end, visible_region_range
from subtitler.regions.models import Item, Region
from subtitler.regions.recalculate import insert_or_update_item, recalculate_regions
from subtitler.regions.store import ItemStore

logger = logging.getLogger(__name__)


class RegionTimeline:
    """Keeps the region partition in step with the item store.

    Every structural edit goes through here so the partition is never built
    from an item the store does not hold (or vice versa).
    """

    def __init__(self, duration_ms: int, items: Iterable[Item] = (), check_invariants: bool = False) -> None:
        self._store = ItemStore()
        self._regions: list[Region] = []
        self._check_invariants = check_invariants
        self.load(items, duration_ms)

    @property
    def duration_ms(self) -> int:
        return timeline_end(self._regions)

    @property
    def regions(self) -> tuple[Region, ...]:
        return tuple(self._regions)

    @property
    def items(self) -> Mapping[str, Item]:
        return self._store.view()

    def load(self, items: Iterable[Item], duration_ms: int) -> None:
        built = build_regions(items, duration_ms)
        self._store.clear()
        for item in built.items_by_id.values():
            self._store.set(item)
        self._regions = built.regions
        logger.debug("rebuilt %d regions for %d items", len(self._regions), len(self._store))
        self._verify()

    def clear(self, duration_ms: int | None = None) -> None:
        self.load((), duration_ms if duration_ms is not None else self.duration_ms)

    def get_item(self, item_id: str) -> Item:
        return self._store.require(item_id)

    def add_item(self, item: Item) -> None:
        if item.item_id in self._store:
            raise ValueError(f"Item '{item.item_id}' already exists")
        self._check_bounds(item)
        self._regions = insert_or_update_item(self._regions, self._store.view(), item)
        self._store.set(item)
        logger.debug("added item %s [%d, %d)", item.item_id, item.start, item.end)
        self._verify()

    def update_item(self, item: Item) -> Item:
        previous = self._store.require(item.item_id)
        self._check_bounds(item)
        self._regions = recalculate_regions(self._regions, self._store.view(), item.item_id, item)
        self._store.set(item)
        logger.debug(
            "updated item %s [%d, %d) -> [%d, %d)",
            item.item_id,
            previous.start,
            previous.end,
            item.start,
            item.end,
        )
        self._verify()
        return previous

    def delete_item(self, item_id: str) -> Item:
        self._store.require(item_id)
        self._regions = recalculate_regions(self._regions, self._store.view(), item_id, None)
        removed = self._store.delete(item_id)
        logger.debug("deleted item %s", item_id)
        self._verify()
        return removed

    def query_at(self, time_ms: float) -> int | None:
        return query_at(self._regions, time_ms)

    def region_at(self, index: int) -> Region:
        return self._regions[index]

    def visible_range(self, start_ms: float, end_ms: float) -> range:
        return visible_region_range(self._regions, start_ms, end_ms)

    def _check_bounds(self, item: Item) -> None:
        item.validate()
        if item.end > self.duration_ms:
            raise ValueError(f"item '{item.item_id}' ends at {item.end}, past the timeline end {self.duration_ms}")

    def _verify(self) -> None:
        if self._check_invariants:
            check_partition(self._regions, self._store.view())
