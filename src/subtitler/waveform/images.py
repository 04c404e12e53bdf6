"""Waveform PNG segment planning for the external transcoder.

The transcoder itself runs elsewhere. This module only produces the ffmpeg
arguments for each segment, reads the media duration back out of ffmpeg's log
output, and places the resulting image URLs on the timeline.
"""

from __future__ import annotations

import math
import re
from dataclasses import dataclass, field

from subtitler.units import ms_to_pixels, seconds_to_ms, to_timestamp

WAVEFORM_SEGMENT_SECONDS = 5 * 60
WAVEFORM_PNG_PIXELS_PER_SECOND = 50
WAVEFORM_PNG_HEIGHT = 70
WAVE_COLOR = "#b7cee0"
BG_COLOR = "#00000000"

_DURATION_PATTERN = re.compile(r"Duration:\s+(\d+):(\d+):(\d+\.\d+|\d+)")


@dataclass(frozen=True, slots=True)
class WaveformSegment:
    index: int
    start_seconds: float
    end_seconds: float

    @property
    def png_file_name(self) -> str:
        return f"output_{self.index}.png"

    @property
    def width_px(self) -> int:
        return int(WAVEFORM_PNG_PIXELS_PER_SECOND * self.end_seconds - WAVEFORM_PNG_PIXELS_PER_SECOND * self.start_seconds)


@dataclass(frozen=True, slots=True)
class DurationProbe:
    record_name: str
    duration_seconds: float


@dataclass(slots=True)
class TranscodeResult:
    """Outcome of one transcode run, returned to the caller instead of shared state."""

    probe: DurationProbe
    segments: list[WaveformSegment]
    image_urls: list[str] = field(default_factory=list)

    @property
    def complete(self) -> bool:
        return len(self.image_urls) == len(self.segments)


@dataclass(frozen=True, slots=True)
class ImagePlacement:
    url: str
    start_ms: int
    end_ms: int
    x: float
    width: float


def plan_segments(duration_seconds: float) -> list[WaveformSegment]:
    if duration_seconds <= 0:
        return []
    count = math.ceil(duration_seconds / WAVEFORM_SEGMENT_SECONDS)
    return [
        WaveformSegment(
            index=index,
            start_seconds=float(index * WAVEFORM_SEGMENT_SECONDS),
            end_seconds=float(min(duration_seconds, (index + 1) * WAVEFORM_SEGMENT_SECONDS)),
        )
        for index in range(count)
    ]


def probe_command(record_name: str) -> list[str]:
    return ["-i", record_name]


def parse_duration(log_text: str) -> float | None:
    match = _DURATION_PATTERN.search(log_text)
    if match is None:
        return None
    hours, minutes, seconds = (float(value) for value in match.groups())
    return hours * 3600 + minutes * 60 + seconds


def probe_result(record_name: str, log_text: str) -> DurationProbe:
    duration = parse_duration(log_text)
    if duration is None:
        raise ValueError(f"no duration found in transcoder output for '{record_name}'")
    return DurationProbe(record_name=record_name, duration_seconds=duration)


def start_transcode(probe: DurationProbe) -> TranscodeResult:
    return TranscodeResult(probe=probe, segments=plan_segments(probe.duration_seconds))


def segment_command(record_name: str, segment: WaveformSegment) -> list[str]:
    width = segment.width_px
    filter_graph = "".join(
        [
            "[0:a]aformat=channel_layouts=mono,",
            "compand=gain=-6,",
            f"showwavespic=s={width}x{WAVEFORM_PNG_HEIGHT}:colors={WAVE_COLOR},setpts=0[fg];",
            f"color=s={width}x{WAVEFORM_PNG_HEIGHT}:color={BG_COLOR}[bg];",
            f"[bg][fg]overlay=format=rgb,drawbox=x=(iw-w)/2:y=(ih-h)/2:w=iw:h=2:color={WAVE_COLOR}",
        ]
    )
    return [
        "-ss",
        to_timestamp(segment.start_seconds * 1000),
        "-to",
        to_timestamp(segment.end_seconds * 1000),
        "-i",
        record_name,
        "-filter_complex",
        filter_graph,
        "-frames:v",
        "1",
        segment.png_file_name,
    ]


def image_placements(image_urls: list[str], duration_seconds: float, pixels_per_second: float) -> list[ImagePlacement]:
    placements: list[ImagePlacement] = []
    for index, url in enumerate(image_urls):
        start_seconds = index * WAVEFORM_SEGMENT_SECONDS
        end_seconds = min((index + 1) * WAVEFORM_SEGMENT_SECONDS, duration_seconds)
        start_ms = seconds_to_ms(start_seconds)
        end_ms = seconds_to_ms(end_seconds)
        placements.append(
            ImagePlacement(
                url=url,
                start_ms=start_ms,
                end_ms=end_ms,
                x=ms_to_pixels(start_ms, pixels_per_second),
                width=ms_to_pixels(end_ms - start_ms, pixels_per_second),
            )
        )
    return placements
