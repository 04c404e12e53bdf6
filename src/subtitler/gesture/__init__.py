"""Pointer gesture classification for the waveform timeline."""

from subtitler.gesture.machine import (
    clip_at,
    handle_pointer_event,
    moved_interval,
    resolve_action,
    start_action,
    stretched_interval,
)
from subtitler.gesture.models import (
    ClipTarget,
    CreateClip,
    DragAction,
    DragCreate,
    DragMove,
    DragStretch,
    GestureOutcome,
    GesturePhase,
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

__all__ = [
    "ClipTarget",
    "CreateClip",
    "DragAction",
    "DragCreate",
    "DragMove",
    "DragStretch",
    "GestureOutcome",
    "GesturePhase",
    "GestureReset",
    "GestureState",
    "MoveClip",
    "PointerDown",
    "PointerEvent",
    "PointerMove",
    "PointerUp",
    "SeekTo",
    "SelectClip",
    "StretchClip",
    "ViewSnapshot",
    "clip_at",
    "handle_pointer_event",
    "moved_interval",
    "resolve_action",
    "start_action",
    "stretched_interval",
]
