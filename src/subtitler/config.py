"""Editor tunables with environment overrides."""

from __future__ import annotations

import os
from dataclasses import dataclass

_TRUE_VALUES = {"1", "true", "yes", "on"}


@dataclass(slots=True)
class EditorSettings:
    pixels_per_second: int = 50
    min_pixels_per_second: int = 10
    max_pixels_per_second: int = 200
    min_clip_ms: int = 400
    drag_time_threshold_ms: int = 400
    selection_border_ms: int = 100
    viewport_buffer_ratio: float = 0.1
    check_invariants: bool = False

    @staticmethod
    def from_env() -> EditorSettings:
        defaults = EditorSettings()
        settings = EditorSettings(
            pixels_per_second=_int_env("SUBTITLER_PIXELS_PER_SECOND", defaults.pixels_per_second),
            min_pixels_per_second=_int_env("SUBTITLER_MIN_PIXELS_PER_SECOND", defaults.min_pixels_per_second),
            max_pixels_per_second=_int_env("SUBTITLER_MAX_PIXELS_PER_SECOND", defaults.max_pixels_per_second),
            min_clip_ms=_int_env("SUBTITLER_MIN_CLIP_MS", defaults.min_clip_ms),
            drag_time_threshold_ms=_int_env("SUBTITLER_DRAG_TIME_THRESHOLD_MS", defaults.drag_time_threshold_ms),
            selection_border_ms=_int_env("SUBTITLER_SELECTION_BORDER_MS", defaults.selection_border_ms),
            viewport_buffer_ratio=_float_env("SUBTITLER_VIEWPORT_BUFFER_RATIO", defaults.viewport_buffer_ratio),
            check_invariants=os.getenv("SUBTITLER_CHECK_INVARIANTS", "").strip().lower() in _TRUE_VALUES,
        )
        settings.validate()
        return settings

    def validate(self) -> None:
        if self.min_pixels_per_second <= 0:
            raise ValueError("min_pixels_per_second must be positive")
        if self.min_pixels_per_second > self.max_pixels_per_second:
            raise ValueError("min_pixels_per_second must be <= max_pixels_per_second")
        if not (self.min_pixels_per_second <= self.pixels_per_second <= self.max_pixels_per_second):
            raise ValueError("pixels_per_second must be within the zoom range")
        if self.min_clip_ms <= 0:
            raise ValueError("min_clip_ms must be positive")
        if self.drag_time_threshold_ms < 0:
            raise ValueError("drag_time_threshold_ms must be >= 0")
        if self.selection_border_ms < 0:
            raise ValueError("selection_border_ms must be >= 0")
        if not (0.0 <= self.viewport_buffer_ratio < 0.5):
            raise ValueError("viewport_buffer_ratio must be in range [0,0.5)")


def _int_env(name: str, default: int) -> int:
    raw = os.getenv(name, "").strip()
    if not raw:
        return default
    try:
        return int(raw)
    except ValueError:
        return default


def _float_env(name: str, default: float) -> float:
    raw = os.getenv(name, "").strip()
    if not raw:
        return default
    try:
        return float(raw)
    except ValueError:
        return default
