"""Viewport auto-scroll and zoom arithmetic."""

from __future__ import annotations

from subtitler.config import EditorSettings
from subtitler.regions.models import Item
from subtitler.units import bound, pixels_to_ms

MAX_WAVEFORM_VIEWPORT_WIDTH = 3000


def visible_span_ms(width_px: float, pixels_per_second: float) -> int:
    return pixels_to_ms(width_px, pixels_per_second)


def view_box_start_on_time_update(
    view_box_start_ms: int,
    duration_ms: int,
    visible_span_ms: int,
    time_ms: int,
    selected: Item | None,
    seeking: bool,
    drag_pending: bool,
    buffer_ratio: float = 0.1,
) -> int:
    """Scroll so the cursor (and, after a seek, the selected item) stays on screen."""
    if drag_pending:
        return view_box_start_ms

    buffer = round(visible_span_ms * buffer_ratio)
    right_edge = view_box_start_ms + visible_span_ms
    max_start = max(duration_ms - visible_span_ms, 0)

    if seeking and selected is not None:
        if selected.end + buffer >= right_edge:
            return int(bound(selected.end + buffer - visible_span_ms, (0, max_start)))
        if selected.start - buffer <= view_box_start_ms:
            return max(0, selected.start - buffer)

    if time_ms < view_box_start_ms:
        return max(0, time_ms - buffer)
    if time_ms >= right_edge:
        return int(bound(time_ms - buffer, (0, max_start)))
    return view_box_start_ms


def zoom(
    pixels_per_second: int,
    delta: int,
    cursor_ms: int,
    view_box_start_ms: int,
    duration_ms: int,
    width_px: float,
    settings: EditorSettings,
) -> tuple[int, int]:
    """Return ``(pixels_per_second, view_box_start_ms)`` after zooming by ``delta``.

    The cursor keeps its proportional offset from the left edge of the view.
    """
    new_pixels_per_second = int(
        bound(pixels_per_second + delta, (settings.min_pixels_per_second, settings.max_pixels_per_second))
    )
    old_span = visible_span_ms(width_px, pixels_per_second)
    new_span = visible_span_ms(width_px, new_pixels_per_second)
    offset_ratio = (cursor_ms - view_box_start_ms) / old_span if old_span else 0.0
    candidate = cursor_ms - round(offset_ratio * new_span)
    return new_pixels_per_second, int(bound(candidate, (0, max(duration_ms - new_span, 0))))
