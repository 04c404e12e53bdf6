"""Interval region index.

The timeline ``[0, duration)`` is partitioned into contiguous regions, each
tagged with the ids of the items overlapping it. Regions only hold ids; item
intervals are always looked up through the owning item mapping.
"""

from __future__ import annotations

from bisect import bisect_left, bisect_right
from typing import Iterable, Mapping, Sequence

from subtitler.regions.models import Item, ItemKind, Region, RegionBuild


class RegionIndexError(RuntimeError):
    """Raised when a region partition is, or would become, inconsistent."""


def item_sort_key(item: Item) -> tuple[int, int]:
    # start ascending, end descending
    return (item.start, -item.end)


def sort_items(items: Iterable[Item]) -> list[Item]:
    return sorted(items, key=item_sort_key)


def empty_regions(duration_ms: int) -> list[Region]:
    if duration_ms <= 0:
        raise ValueError("duration_ms must be positive")
    return [Region(start=0, item_ids=(), end=duration_ms)]


def timeline_end(regions: Sequence[Region]) -> int:
    end = regions[-1].end
    if end is None:
        raise RegionIndexError("last region has no timeline end")
    return end


def region_end(regions: Sequence[Region], index: int) -> int:
    if index + 1 < len(regions):
        return regions[index + 1].start
    return timeline_end(regions)


def insert_item(regions: Sequence[Region], item: Item) -> list[Region]:
    """Return a new partition with ``item`` added to every region it overlaps.

    Overlapping regions are split into the part before the item, the covered
    part (item id appended) and the part after it. Regions that already list
    the item are passed through, so inserting the same item twice is a no-op.
    """
    result: list[Region] = []
    last_index = len(regions) - 1
    for index, region in enumerate(regions):
        end = region_end(regions, index)
        overlap = region.start < item.end and end > item.start
        if not overlap or item.item_id in region.item_ids:
            result.append(region)
            continue

        pieces: list[Region] = []
        if item.start > region.start:
            pieces.append(Region(start=region.start, item_ids=region.item_ids))
        pieces.append(Region(start=max(item.start, region.start), item_ids=region.item_ids + (item.item_id,)))
        if item.end < end:
            pieces.append(Region(start=item.end, item_ids=region.item_ids))
        if index == last_index:
            pieces[-1] = Region(start=pieces[-1].start, item_ids=pieces[-1].item_ids, end=region.end)
        result.extend(pieces)
    return result


def build_regions(items: Iterable[Item], duration_ms: int) -> RegionBuild:
    items_by_id: dict[str, Item] = {}
    for item in items:
        item.validate()
        if item.item_id in items_by_id:
            raise ValueError(f"duplicate item id '{item.item_id}'")
        items_by_id[item.item_id] = item

    regions = empty_regions(duration_ms)
    for item in sort_items(items_by_id.values()):
        if item.kind is not ItemKind.PRIMARY:
            continue
        regions = insert_item(regions, item)
    return RegionBuild(regions=regions, items_by_id=items_by_id)


def query_at(regions: Sequence[Region], time_ms: float) -> int | None:
    """Index of the region whose half-open span contains ``time_ms``."""
    if not regions or time_ms < 0 or time_ms >= timeline_end(regions):
        return None
    index = bisect_right(regions, time_ms, key=lambda region: region.start) - 1
    return index if index >= 0 else None


def visible_region_range(regions: Sequence[Region], start_ms: float, end_ms: float) -> range:
    """Indices of the regions overlapping the window ``[start_ms, end_ms)``."""
    if not regions or end_ms <= start_ms or end_ms <= 0 or start_ms >= timeline_end(regions):
        return range(0)
    first = max(bisect_right(regions, start_ms, key=lambda region: region.start) - 1, 0)
    stop = bisect_left(regions, end_ms, key=lambda region: region.start)
    return range(first, stop)


def check_partition(regions: Sequence[Region], items_by_id: Mapping[str, Item]) -> None:
    """Raise ``RegionIndexError`` unless ``regions`` is a valid partition for ``items_by_id``."""
    if not regions:
        raise RegionIndexError("partition is empty")
    if regions[0].start != 0:
        raise RegionIndexError(f"partition starts at {regions[0].start}, not 0")
    end = timeline_end(regions)
    for index, region in enumerate(regions):
        if index < len(regions) - 1 and region.end is not None:
            raise RegionIndexError(f"region {index} carries a timeline end but is not last")
        current_end = region_end(regions, index)
        if current_end <= region.start:
            raise RegionIndexError(f"region {index} is empty or reversed ({region.start}..{current_end})")
        if index > 0 and regions[index - 1].has_same_items(region):
            raise RegionIndexError(f"regions {index - 1} and {index} hold the same items")
        if len(set(region.item_ids)) != len(region.item_ids):
            raise RegionIndexError(f"region {index} lists an item twice")
        expected = {
            item.item_id
            for item in items_by_id.values()
            if item.kind is ItemKind.PRIMARY and item.overlaps(region.start, current_end)
        }
        if set(region.item_ids) != expected:
            raise RegionIndexError(
                f"region {index} at {region.start} lists {sorted(region.item_ids)}, expected {sorted(expected)}"
            )
    if end <= 0:
        raise RegionIndexError("timeline end must be positive")
