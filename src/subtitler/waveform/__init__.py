"""Waveform image planning and render-facing timeline views."""

from subtitler.waveform.display import ClipDisplay, displayed_clips, limit_to_displayed, pending_preview
from subtitler.waveform.images import (
    WAVEFORM_PNG_PIXELS_PER_SECOND,
    WAVEFORM_SEGMENT_SECONDS,
    DurationProbe,
    ImagePlacement,
    TranscodeResult,
    WaveformSegment,
    image_placements,
    parse_duration,
    plan_segments,
    probe_command,
    probe_result,
    segment_command,
    start_transcode,
)

__all__ = [
    "WAVEFORM_PNG_PIXELS_PER_SECOND",
    "WAVEFORM_SEGMENT_SECONDS",
    "ClipDisplay",
    "DurationProbe",
    "ImagePlacement",
    "TranscodeResult",
    "WaveformSegment",
    "displayed_clips",
    "image_placements",
    "limit_to_displayed",
    "parse_duration",
    "pending_preview",
    "plan_segments",
    "probe_command",
    "probe_result",
    "segment_command",
    "start_transcode",
]
