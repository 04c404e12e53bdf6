"""Time and pixel conversions shared by the timeline modules."""

from __future__ import annotations


def seconds_to_ms(seconds: float) -> int:
    return round(seconds * 1000)


def ms_to_seconds(ms: float) -> float:
    return ms / 1000


def ms_to_pixels(ms: float, pixels_per_second: float) -> float:
    return (ms / 1000) * pixels_per_second


def pixels_to_ms(pixels: float, pixels_per_second: float) -> int:
    return round((pixels / pixels_per_second) * 1000)


def bound(value: float, limits: tuple[float, float]) -> float:
    low, high = limits
    return max(low, min(high, value))


def to_timestamp(ms: float, units_separator: str = ":", ms_separator: str = ".") -> str:
    """Format milliseconds as ``HH:MM:SS.mmm`` (the form ffmpeg accepts for -ss/-to)."""
    total = round(ms)
    millis = total % 1000
    seconds = (total // 1000) % 60
    minutes = (total // 60_000) % 60
    hours = total // 3_600_000
    return f"{hours:02d}{units_separator}{minutes:02d}{units_separator}{seconds:02d}{ms_separator}{millis:03d}"
