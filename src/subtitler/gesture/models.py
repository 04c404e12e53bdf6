"""Pointer events, pending drag actions and the edits they resolve into."""

from __future__ import annotations

from dataclasses import dataclass, replace
from enum import Enum
from typing import Literal, Union

OriginKey = Literal["start", "end"]


class GesturePhase(str, Enum):
    IDLE = "idle"
    POINTER_DOWN = "pointer-down"
    DRAGGING = "dragging"


@dataclass(frozen=True, slots=True)
class ClipTarget:
    """The clip under the pointer, as hit-tested by the caller."""

    clip_id: str
    start: int
    end: int
    region_index: int


@dataclass(frozen=True, slots=True)
class ViewSnapshot:
    """Waveform view state captured when a gesture starts."""

    duration_ms: int
    cursor_ms: int
    view_box_start_ms: int
    pixels_per_second: int
    selected_clip_id: str | None = None


# pointer input; times are already translated from pixels to milliseconds


@dataclass(frozen=True, slots=True)
class PointerDown:
    time_ms: int
    timestamp_ms: float
    target: ClipTarget | None = None


@dataclass(frozen=True, slots=True)
class PointerMove:
    time_ms: int


@dataclass(frozen=True, slots=True)
class PointerUp:
    time_ms: int
    timestamp_ms: float


@dataclass(frozen=True, slots=True)
class GestureReset:
    """External cancel of a pending drag (for example, pointer left the window)."""


PointerEvent = Union[PointerDown, PointerMove, PointerUp, GestureReset]


# pending drag actions; ``start`` is the pointer-down time, ``end`` follows the pointer


@dataclass(frozen=True, slots=True)
class DragCreate:
    start: int
    end: int
    mouse_down_timestamp_ms: float
    snapshot: ViewSnapshot

    def with_end(self, end: int) -> DragCreate:
        return replace(self, end=end)


@dataclass(frozen=True, slots=True)
class DragMove:
    clip: ClipTarget
    start: int
    end: int
    mouse_down_timestamp_ms: float
    snapshot: ViewSnapshot

    @property
    def clip_id(self) -> str:
        return self.clip.clip_id

    @property
    def region_index(self) -> int:
        return self.clip.region_index

    def with_end(self, end: int) -> DragMove:
        return replace(self, end=end)


@dataclass(frozen=True, slots=True)
class DragStretch:
    clip: ClipTarget
    start: int
    end: int
    origin_key: OriginKey
    mouse_down_timestamp_ms: float
    snapshot: ViewSnapshot

    @property
    def clip_id(self) -> str:
        return self.clip.clip_id

    @property
    def region_index(self) -> int:
        return self.clip.region_index

    def with_end(self, end: int) -> DragStretch:
        return replace(self, end=end)


DragAction = Union[DragCreate, DragMove, DragStretch]


# resolved outcomes emitted on pointer-up


@dataclass(frozen=True, slots=True)
class CreateClip:
    start: int
    end: int


@dataclass(frozen=True, slots=True)
class SeekTo:
    time_ms: int


@dataclass(frozen=True, slots=True)
class SelectClip:
    clip_id: str
    region_index: int
    seek_ms: int


@dataclass(frozen=True, slots=True)
class MoveClip:
    clip_id: str
    region_index: int
    start: int
    end: int
    seek_ms: int | None


@dataclass(frozen=True, slots=True)
class StretchClip:
    clip_id: str
    region_index: int
    origin_key: OriginKey
    start: int
    end: int
    seek_ms: int | None


GestureOutcome = Union[CreateClip, SeekTo, SelectClip, MoveClip, StretchClip]


@dataclass(frozen=True, slots=True)
class GestureState:
    phase: GesturePhase = GesturePhase.IDLE
    pending: DragAction | None = None

    @property
    def is_pending(self) -> bool:
        return self.pending is not None
