"""Subtitle editor public facade."""

from __future__ import annotations

from typing import Any, Iterable, Mapping

from subtitler.editor.schemas import CueListModel, CueModel, RenderSnapshot
from subtitler.editor.service import EditorService
from subtitler.gesture.models import ClipTarget, GestureOutcome, PointerEvent
from subtitler.playback.selection import PlaybackUpdate, Selection
from subtitler.regions.models import Item


class SubtitleEditor:
    def __init__(self, service: EditorService) -> None:
        self._service = service

    def import_cues(
        self,
        cues: CueListModel | Iterable[CueModel | Mapping[str, Any]],
        duration_ms: int | None = None,
    ) -> list[str]:
        return self._service.import_cues(cues=cues, duration_ms=duration_ms)

    def export_cues(self) -> list[CueModel]:
        return self._service.export_cues()

    def add_clip(self, start: int, end: int, text: str = "") -> Item:
        return self._service.add_clip(start=start, end=end, text=text)

    def delete(self, item_id: str) -> None:
        self._service.delete_item(item_id=item_id)

    def set_text(self, item_id: str, text: str) -> None:
        self._service.set_caption_text(item_id=item_id, text=text)

    def clip_at(self, time_ms: float) -> ClipTarget | None:
        return self._service.clip_at(time_ms)

    def pointer(self, event: PointerEvent) -> GestureOutcome | None:
        return self._service.handle_pointer(event)

    def time_update(self, time_ms: int | None = None, seeking: bool = False, looping: bool = False) -> PlaybackUpdate:
        return self._service.on_time_update(time_ms=time_ms, seeking=seeking, looping=looping)

    def selection(self) -> Selection | None:
        return self._service.selection

    def zoom(self, delta: int) -> int:
        return self._service.zoom(delta)

    def snapshot(self) -> RenderSnapshot:
        return self._service.render_snapshot()
