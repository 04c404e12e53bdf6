"""Incremental region recalculation for single-item edits."""

from __future__ import annotations

from typing import Mapping, Sequence

from subtitler.regions.index import RegionIndexError, insert_item, region_end, sort_items
from subtitler.regions.models import Item, ItemKind, Region


def recalculate_regions(
    regions: Sequence[Region],
    items_by_id: Mapping[str, Item],
    target_id: str,
    new_item: Item | None,
) -> list[Region]:
    """Apply a move/stretch (``new_item``) or delete (``None``) of ``target_id``.

    ``items_by_id`` must still hold the pre-edit item for ``target_id``. Only the
    regions overlapping the old or the new interval, and everything between
    them, are rebuilt; the rest of the partition is reused as is.
    """
    old_item = items_by_id.get(target_id)
    if old_item is None:
        raise RegionIndexError(f"Item '{target_id}' is not indexed")

    intervals = [(old_item.start, old_item.end)]
    if new_item is not None:
        if new_item.item_id != target_id:
            raise ValueError(f"new item id '{new_item.item_id}' does not match target '{target_id}'")
        new_item.validate()
        intervals.append((new_item.start, new_item.end))

    first = _first_affected(regions, intervals)
    if first is None:
        if new_item is not None:
            raise RegionIndexError(f"no region overlaps item '{target_id}'")
        return list(regions)
    last = _last_affected(regions, intervals)
    if last is None:
        raise RegionIndexError(f"no region overlaps item '{target_id}'")

    span_start = regions[first].start
    span_end = region_end(regions, last)
    replaced = [
        item
        for item in _collect_items(regions[first : last + 1], items_by_id, target_id, new_item)
        if item.kind is ItemKind.PRIMARY
    ]

    rebuilt = [Region(start=span_start, item_ids=(), end=span_end)]
    for item in sort_items(replaced):
        rebuilt = insert_item(rebuilt, item)

    post = list(regions[last + 1 :])
    if post:
        tail = rebuilt[-1]
        rebuilt[-1] = Region(start=tail.start, item_ids=tail.item_ids)

    result = list(regions[:first]) + rebuilt + post
    _merge_into_previous(result, first + len(rebuilt))
    _merge_into_previous(result, first)
    return result


def insert_or_update_item(
    regions: Sequence[Region],
    items_by_id: Mapping[str, Item],
    item: Item,
) -> list[Region]:
    """Index a new item, or re-index an existing one through ``recalculate_regions``."""
    if item.item_id in items_by_id:
        return recalculate_regions(regions, items_by_id, item.item_id, item)
    item.validate()
    if item.kind is not ItemKind.PRIMARY:
        return list(regions)
    return insert_item(regions, item)


def _overlaps_any(start: int, end: int, intervals: list[tuple[int, int]]) -> bool:
    return any(start < interval_end and end > interval_start for interval_start, interval_end in intervals)


def _first_affected(regions: Sequence[Region], intervals: list[tuple[int, int]]) -> int | None:
    for index, region in enumerate(regions):
        if _overlaps_any(region.start, region_end(regions, index), intervals):
            return index
    return None


def _last_affected(regions: Sequence[Region], intervals: list[tuple[int, int]]) -> int | None:
    for index in range(len(regions) - 1, -1, -1):
        if _overlaps_any(regions[index].start, region_end(regions, index), intervals):
            return index
    return None


def _collect_items(
    affected: Sequence[Region],
    items_by_id: Mapping[str, Item],
    target_id: str,
    new_item: Item | None,
) -> list[Item]:
    collected: dict[str, Item] = {}
    for region in affected:
        for item_id in region.item_ids:
            if item_id in collected or item_id == target_id:
                continue
            item = items_by_id.get(item_id)
            if item is None:
                raise RegionIndexError(f"region lists unknown item '{item_id}'")
            collected[item_id] = item
    if new_item is not None:
        collected[target_id] = new_item
    return list(collected.values())


def _merge_into_previous(regions: list[Region], index: int) -> None:
    if index <= 0 or index >= len(regions):
        return
    previous = regions[index - 1]
    current = regions[index]
    if not previous.has_same_items(current):
        return
    regions[index - 1] = Region(start=previous.start, item_ids=previous.item_ids, end=current.end)
    del regions[index]
