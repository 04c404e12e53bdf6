"""Render-facing views of the region index, in milliseconds."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Callable, Iterable, Mapping, Sequence, TypeVar

from subtitler.gesture.machine import moved_interval, stretched_interval
from subtitler.gesture.models import DragAction, DragCreate, DragMove
from subtitler.playback.viewport import MAX_WAVEFORM_VIEWPORT_WIDTH
from subtitler.regions.index import visible_region_range
from subtitler.regions.models import Item, Region
from subtitler.units import pixels_to_ms

T = TypeVar("T")


@dataclass(frozen=True, slots=True)
class ClipDisplay:
    clip_id: str
    start: int
    end: int
    region_index: int
    level: int
    highlighted: bool = False


def displayed_clips(
    regions: Sequence[Region],
    items_by_id: Mapping[str, Item],
    view_start_ms: float,
    view_end_ms: float,
    highlighted_id: str | None = None,
) -> list[ClipDisplay]:
    """Clips to draw for the window, each once, the highlighted clip last.

    ``level`` is the clip's position in the stacking order of the region
    where it is listed (0 = bottom).
    """
    clips: list[ClipDisplay] = []
    highlighted: ClipDisplay | None = None
    indices = visible_region_range(regions, view_start_ms, view_end_ms)
    for position, index in enumerate(indices):
        region = regions[index]
        for level, item_id in enumerate(region.item_ids):
            item = items_by_id[item_id]
            # a clip starting left of the window is listed with the first visible region
            if item.start != region.start and position > 0:
                continue
            display = ClipDisplay(
                clip_id=item_id,
                start=item.start,
                end=item.end,
                region_index=index,
                level=level,
                highlighted=item_id == highlighted_id,
            )
            if display.highlighted:
                highlighted = display
            else:
                clips.append(display)
    if highlighted is not None:
        clips.append(highlighted)
    return clips


def pending_preview(action: DragAction, min_clip_ms: int) -> tuple[int, int]:
    """Interval the pending ``action`` would commit if the pointer were released now."""
    if isinstance(action, DragCreate):
        return min(action.start, action.end), max(action.start, action.end)
    duration_ms = action.snapshot.duration_ms
    if isinstance(action, DragMove):
        return moved_interval(action.clip, action.end - action.start, duration_ms)
    return stretched_interval(action.clip, action.origin_key, action.end, duration_ms, min_clip_ms)


def limit_to_displayed(
    items: Iterable[T],
    view_box_start_ms: float,
    pixels_per_second: float,
    get_start: Callable[[T], float],
    get_end: Callable[[T], float],
) -> list[T]:
    """Filter start-sorted ``items`` down to those inside the widest drawable viewport."""
    x_max = view_box_start_ms + pixels_to_ms(MAX_WAVEFORM_VIEWPORT_WIDTH, pixels_per_second)
    result: list[T] = []
    for item in items:
        start = get_start(item)
        if start > x_max:
            break
        if get_end(item) >= view_box_start_ms:
            result.append(item)
    return result
