"""Selection tracking as playback time advances."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Mapping, Sequence

from subtitler.playback.viewport import view_box_start_on_time_update
from subtitler.regions.index import query_at
from subtitler.regions.models import Item, Region


@dataclass(frozen=True, slots=True)
class Selection:
    region_index: int
    region: Region
    item: Item

    @property
    def item_id(self) -> str:
        return self.item.item_id

    def is_same_item(self, other: Selection | None) -> bool:
        return other is not None and other.item.item_id == self.item.item_id


@dataclass(frozen=True, slots=True)
class PlaybackTick:
    """One time update from the media element."""

    time_ms: int
    paused: bool = False
    seeking: bool = False
    looping: bool = False


@dataclass(frozen=True, slots=True)
class PlaybackView:
    duration_ms: int
    view_box_start_ms: int
    visible_span_ms: int
    selection: Selection | None = None
    explicit_selection: bool = False
    drag_pending: bool = False
    buffer_ratio: float = 0.1


@dataclass(frozen=True, slots=True)
class PlaybackUpdate:
    cursor_ms: int
    selection: Selection | None
    view_box_start_ms: int
    seek_to_ms: int | None = None


def selection_at(
    regions: Sequence[Region],
    items_by_id: Mapping[str, Item],
    time_ms: float,
    current: Selection | None = None,
) -> Selection | None:
    """Selection for ``time_ms``, preferring ``current`` while its item still spans that time."""
    index = query_at(regions, time_ms)
    if index is None:
        return None
    region = regions[index]
    if current is not None and current.item_id in region.item_ids:
        item = items_by_id.get(current.item_id)
        if item is not None and item.covers(time_ms):
            return Selection(region_index=index, region=region, item=item)
    for item_id in region.item_ids:
        item = items_by_id[item_id]
        if item.covers(time_ms):
            return Selection(region_index=index, region=region, item=item)
    return None


def selection_for_item(
    regions: Sequence[Region],
    items_by_id: Mapping[str, Item],
    item_id: str,
) -> Selection | None:
    """Selection of ``item_id`` anchored at the region where the item starts."""
    item = items_by_id.get(item_id)
    if item is None:
        return None
    index = query_at(regions, item.start)
    if index is None:
        return None
    return Selection(region_index=index, region=regions[index], item=item)


def refresh_selection(
    regions: Sequence[Region],
    items_by_id: Mapping[str, Item],
    selection: Selection | None,
) -> Selection | None:
    """Re-resolve ``selection`` by item id after the partition changed."""
    if selection is None:
        return None
    return selection_for_item(regions, items_by_id, selection.item_id)


def on_time_update(
    regions: Sequence[Region],
    items_by_id: Mapping[str, Item],
    view: PlaybackView,
    tick: PlaybackTick,
) -> PlaybackUpdate:
    current = view.selection
    if current is not None and current.item_id not in items_by_id:
        current = None
    if current is not None and tick.looping and not tick.paused and not tick.seeking:
        current_item = items_by_id[current.item_id]
        if tick.time_ms >= current_item.end:
            return PlaybackUpdate(
                cursor_ms=current_item.start,
                selection=current,
                view_box_start_ms=view.view_box_start_ms,
                seek_to_ms=current_item.start,
            )

    if view.explicit_selection and current is not None:
        selection: Selection | None = current
    else:
        selection = selection_at(regions, items_by_id, tick.time_ms, current)

    view_box_start_ms = view_box_start_on_time_update(
        view_box_start_ms=view.view_box_start_ms,
        duration_ms=view.duration_ms,
        visible_span_ms=view.visible_span_ms,
        time_ms=tick.time_ms,
        selected=selection.item if selection is not None else None,
        seeking=tick.seeking,
        drag_pending=view.drag_pending,
        buffer_ratio=view.buffer_ratio,
    )
    return PlaybackUpdate(cursor_ms=tick.time_ms, selection=selection, view_box_start_ms=view_box_start_ms)
