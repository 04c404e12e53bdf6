"""Playback-driven selection and viewport control."""

from subtitler.playback.selection import (
    PlaybackTick,
    PlaybackUpdate,
    PlaybackView,
    Selection,
    on_time_update,
    refresh_selection,
    selection_at,
    selection_for_item,
)
from subtitler.playback.viewport import (
    MAX_WAVEFORM_VIEWPORT_WIDTH,
    view_box_start_on_time_update,
    visible_span_ms,
    zoom,
)

__all__ = [
    "MAX_WAVEFORM_VIEWPORT_WIDTH",
    "PlaybackTick",
    "PlaybackUpdate",
    "PlaybackView",
    "Selection",
    "on_time_update",
    "refresh_selection",
    "selection_at",
    "selection_for_item",
    "view_box_start_on_time_update",
    "visible_span_ms",
    "zoom",
]
