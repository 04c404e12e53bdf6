"""Interval region index, item store and incremental recalculation."""

from subtitler.regions.index import (
    RegionIndexError,
    build_regions,
    check_partition,
    empty_regions,
    insert_item,
    item_sort_key,
    query_at,
    region_end,
    sort_items,
    timeline_end,
    visible_region_range,
)
from subtitler.regions.models import Item, ItemKind, Region, RegionBuild
from subtitler.regions.recalculate import insert_or_update_item, recalculate_regions
from subtitler.regions.store import ItemStore
from subtitler.regions.timeline import RegionTimeline

__all__ = [
    "Item",
    "ItemKind",
    "ItemStore",
    "Region",
    "RegionBuild",
    "RegionIndexError",
    "RegionTimeline",
    "build_regions",
    "check_partition",
    "empty_regions",
    "insert_item",
    "insert_or_update_item",
    "item_sort_key",
    "query_at",
    "recalculate_regions",
    "region_end",
    "sort_items",
    "timeline_end",
    "visible_region_range",
]
