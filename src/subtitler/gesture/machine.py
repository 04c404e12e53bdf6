"""Gesture state machine: pointer events in, timeline edits out.

``handle_pointer_event`` is a pure transition ``(state, event) -> (state', outcome)``.
Nothing is committed while dragging; the pending action only tracks the
pointer so a preview can be drawn. On pointer-up the action resolves into one
of the outcomes in ``subtitler.gesture.models``.
"""

from __future__ import annotations

import logging
from typing import Mapping, Sequence

from subtitler.config import EditorSettings
from subtitler.gesture.models import (
    ClipTarget,
    CreateClip,
    DragAction,
    DragCreate,
    DragMove,
    DragStretch,
    GesturePhase,
    GestureOutcome,
    GestureReset,
    GestureState,
    MoveClip,
    PointerDown,
    PointerEvent,
    PointerMove,
    PointerUp,
    SeekTo,
    SelectClip,
    StretchClip,
    ViewSnapshot,
)
from subtitler.regions.index import query_at
from subtitler.regions.models import Item, Region
from subtitler.units import bound

logger = logging.getLogger(__name__)


def handle_pointer_event(
    state: GestureState,
    event: PointerEvent,
    view: ViewSnapshot,
    settings: EditorSettings,
) -> tuple[GestureState, GestureOutcome | None]:
    if isinstance(event, GestureReset):
        if state.pending is not None:
            logger.debug("pending %s discarded by reset", type(state.pending).__name__)
        return GestureState(), None

    if isinstance(event, PointerDown):
        if state.pending is not None:
            logger.warning("pointer-down ignored while a %s is pending", type(state.pending).__name__)
            return state, None
        action = start_action(event, view, settings)
        logger.debug("pointer-down at %d ms starts %s", action.start, type(action).__name__)
        return GestureState(phase=GesturePhase.POINTER_DOWN, pending=action), None

    if isinstance(event, PointerMove):
        if state.pending is None:
            return state, None
        end = _clamp_to_timeline(event.time_ms, state.pending.snapshot.duration_ms)
        return GestureState(phase=GesturePhase.DRAGGING, pending=state.pending.with_end(end)), None

    if isinstance(event, PointerUp):
        if state.pending is None:
            return state, None
        outcome = resolve_action(state.pending, event, settings)
        logger.debug("pointer-up resolved %s into %s", type(state.pending).__name__, outcome)
        return GestureState(), outcome

    raise TypeError(f"unsupported pointer event {event!r}")


def start_action(event: PointerDown, view: ViewSnapshot, settings: EditorSettings) -> DragAction:
    time_ms = _clamp_to_timeline(event.time_ms, view.duration_ms)
    target = event.target
    if target is None:
        return DragCreate(start=time_ms, end=time_ms, mouse_down_timestamp_ms=event.timestamp_ms, snapshot=view)

    near_start = abs(target.start - time_ms) <= settings.selection_border_ms
    near_end = abs(target.end - time_ms) <= settings.selection_border_ms
    if near_start or near_end:
        origin_key = "start" if abs(time_ms - target.start) < abs(time_ms - target.end) else "end"
        return DragStretch(
            clip=target,
            start=time_ms,
            end=time_ms,
            origin_key=origin_key,
            mouse_down_timestamp_ms=event.timestamp_ms,
            snapshot=view,
        )
    return DragMove(clip=target, start=time_ms, end=time_ms, mouse_down_timestamp_ms=event.timestamp_ms, snapshot=view)


def resolve_action(action: DragAction, event: PointerUp, settings: EditorSettings) -> GestureOutcome:
    duration_ms = action.snapshot.duration_ms
    end = _clamp_to_timeline(event.time_ms, duration_ms)

    if isinstance(action, DragCreate):
        start, stop = min(action.start, end), max(action.start, end)
        if stop - start < settings.min_clip_ms:
            return SeekTo(time_ms=action.start)
        return CreateClip(start=start, end=stop)

    clip = action.clip
    was_selected = action.snapshot.selected_clip_id == clip.clip_id
    elapsed = event.timestamp_ms - action.mouse_down_timestamp_ms
    if elapsed <= settings.drag_time_threshold_ms:
        return SelectClip(
            clip_id=clip.clip_id,
            region_index=clip.region_index,
            seek_ms=end if was_selected else clip.start,
        )

    if isinstance(action, DragMove):
        new_start, new_end = moved_interval(clip, end - action.start, duration_ms)
        return MoveClip(
            clip_id=clip.clip_id,
            region_index=clip.region_index,
            start=new_start,
            end=new_end,
            seek_ms=None if was_selected else new_start,
        )

    new_start, new_end = stretched_interval(clip, action.origin_key, end, duration_ms, settings.min_clip_ms)
    return StretchClip(
        clip_id=clip.clip_id,
        region_index=clip.region_index,
        origin_key=action.origin_key,
        start=new_start,
        end=new_end,
        seek_ms=None if was_selected else new_start,
    )


def moved_interval(clip: ClipTarget, delta_ms: int, duration_ms: int) -> tuple[int, int]:
    """Shift ``clip`` by ``delta_ms``, keeping its width and staying inside the timeline."""
    width = clip.end - clip.start
    start = int(bound(clip.start + delta_ms, (0, max(duration_ms - width, 0))))
    return start, start + width


def stretched_interval(
    clip: ClipTarget,
    origin_key: str,
    edge_ms: int,
    duration_ms: int,
    min_clip_ms: int,
) -> tuple[int, int]:
    """Move one edge of ``clip`` to ``edge_ms``, keeping at least ``min_clip_ms`` of width."""
    if origin_key == "start":
        start = int(bound(edge_ms, (0, max(clip.end - min_clip_ms, 0))))
        return start, clip.end
    end = int(bound(edge_ms, (min(clip.start + min_clip_ms, duration_ms), duration_ms)))
    return clip.start, end


def clip_at(
    regions: Sequence[Region],
    items_by_id: Mapping[str, Item],
    time_ms: float,
    highlighted_id: str | None = None,
) -> ClipTarget | None:
    """Topmost clip at ``time_ms``: the highlighted one if it is there, else the last stacked."""
    index = query_at(regions, time_ms)
    if index is None:
        return None
    item_ids = regions[index].item_ids
    if not item_ids:
        return None
    clip_id = highlighted_id if highlighted_id in item_ids else item_ids[-1]
    item = items_by_id[clip_id]
    return ClipTarget(clip_id=item.item_id, start=item.start, end=item.end, region_index=index)


def _clamp_to_timeline(time_ms: int, duration_ms: int) -> int:
    return int(bound(time_ms, (0, duration_ms)))
