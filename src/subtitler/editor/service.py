"""Editor service: gestures, playback ticks and caption edits against one timeline."""

from __future__ import annotations

import logging
from typing import Any, Callable, Iterable, Mapping, Protocol
from uuid import uuid4

from subtitler.config import EditorSettings
from subtitler.editor.models import Caption
from subtitler.editor.schemas import CueListModel, CueModel, ItemModel, PendingPreviewModel, RegionModel, RenderSnapshot
from subtitler.gesture.machine import clip_at, handle_pointer_event
from subtitler.gesture.models import (
    ClipTarget,
    CreateClip,
    DragCreate,
    DragMove,
    GestureOutcome,
    GestureState,
    MoveClip,
    PointerEvent,
    SeekTo,
    SelectClip,
    StretchClip,
    ViewSnapshot,
)
from subtitler.playback.selection import (
    PlaybackTick,
    PlaybackUpdate,
    PlaybackView,
    Selection,
    on_time_update,
    refresh_selection,
    selection_for_item,
)
from subtitler.playback.viewport import MAX_WAVEFORM_VIEWPORT_WIDTH, visible_span_ms, zoom
from subtitler.regions.index import sort_items
from subtitler.regions.models import Item, ItemKind, Region
from subtitler.regions.timeline import RegionTimeline
from subtitler.units import bound, ms_to_seconds, seconds_to_ms
from subtitler.waveform.display import pending_preview

logger = logging.getLogger(__name__)


class MediaElement(Protocol):
    """The playing media, as far as the editor touches it."""

    current_time: float
    paused: bool


class EditorService:
    def __init__(
        self,
        duration_ms: int,
        settings: EditorSettings | None = None,
        media: MediaElement | None = None,
        id_factory: Callable[[], str] | None = None,
    ) -> None:
        self._settings = settings or EditorSettings.from_env()
        self._settings.validate()
        self._media = media
        self._new_id = id_factory or (lambda: str(uuid4()))
        self._timeline = RegionTimeline(duration_ms, check_invariants=self._settings.check_invariants)
        self._captions: dict[str, Caption] = {}
        self._gesture = GestureState()
        self._cursor_ms = 0
        self._view_box_start_ms = 0
        self._pixels_per_second = self._settings.pixels_per_second
        self._viewport_width_px: float = MAX_WAVEFORM_VIEWPORT_WIDTH
        self._selection: Selection | None = None
        self._explicit_selection = False

    @property
    def duration_ms(self) -> int:
        return self._timeline.duration_ms

    @property
    def regions(self) -> tuple[Region, ...]:
        return self._timeline.regions

    @property
    def items(self) -> Mapping[str, Item]:
        return self._timeline.items

    @property
    def selection(self) -> Selection | None:
        return self._selection

    @property
    def cursor_ms(self) -> int:
        return self._cursor_ms

    @property
    def view_box_start_ms(self) -> int:
        return self._view_box_start_ms

    @property
    def pixels_per_second(self) -> int:
        return self._pixels_per_second

    @property
    def gesture_state(self) -> GestureState:
        return self._gesture

    def attach_media(self, media: MediaElement | None) -> None:
        self._media = media

    def set_viewport_width(self, width_px: float) -> None:
        if width_px <= 0:
            raise ValueError("width_px must be positive")
        self._viewport_width_px = width_px

    # items and captions

    def reset(self, duration_ms: int | None = None) -> None:
        self._timeline.clear(duration_ms)
        self._captions.clear()
        self._gesture = GestureState()
        self._cursor_ms = 0
        self._view_box_start_ms = 0
        self._pixels_per_second = self._settings.pixels_per_second
        self._selection = None
        self._explicit_selection = False
        logger.info("editor reset, duration %d ms", self.duration_ms)

    def import_cues(
        self,
        cues: CueListModel | Iterable[CueModel | Mapping[str, Any]],
        duration_ms: int | None = None,
    ) -> list[str]:
        """Replace all items and captions with ``cues``; returns the new ids in timeline order."""
        if isinstance(cues, CueListModel):
            cues = cues.cues
        duration = duration_ms if duration_ms is not None else self.duration_ms
        captions: dict[str, Caption] = {}
        items: list[Item] = []
        for raw in cues:
            cue = raw if isinstance(raw, CueModel) else CueModel.model_validate(raw)
            if cue.start >= duration:
                logger.warning("dropping cue at %d ms, past timeline end %d ms", cue.start, duration)
                continue
            caption = Caption(uuid=self._new_id(), text=cue.text)
            captions[caption.uuid] = caption
            items.append(Item(item_id=caption.uuid, start=cue.start, end=min(cue.end, duration)))

        ordered = sort_items(items)
        self.reset(duration)
        self._timeline.load(ordered, duration)
        self._captions = captions
        logger.info("imported %d cues", len(ordered))
        return [item.item_id for item in ordered]

    def export_cues(self) -> list[CueModel]:
        return [
            CueModel(start=item.start, end=item.end, text=self._captions[item.item_id].text)
            for item in sort_items(self._timeline.items.values())
            if item.kind is ItemKind.PRIMARY
        ]

    def add_clip(self, start: int, end: int, text: str = "") -> Item:
        item = Item(item_id=self._new_id(), start=start, end=end)
        self._timeline.add_item(item)
        self._captions[item.item_id] = Caption(uuid=item.item_id, text=text)
        self._selection = refresh_selection(self._timeline.regions, self._timeline.items, self._selection)
        return item

    def update_clip(self, item_id: str, start: int, end: int) -> Item:
        current = self._timeline.get_item(item_id)
        if (current.start, current.end) != (start, end):
            self._timeline.update_item(current.with_interval(start, end))
        self._selection = refresh_selection(self._timeline.regions, self._timeline.items, self._selection)
        return self._timeline.get_item(item_id)

    def delete_item(self, item_id: str) -> None:
        self._timeline.delete_item(item_id)
        self._captions.pop(item_id, None)
        self._selection = refresh_selection(self._timeline.regions, self._timeline.items, self._selection)

    def caption(self, item_id: str) -> Caption:
        caption = self._captions.get(item_id)
        if caption is None:
            raise KeyError(f"Caption '{item_id}' not found")
        return caption

    def set_caption_text(self, item_id: str, text: str) -> None:
        self.caption(item_id).text = text

    # selection and playback

    def select_item(self, item_id: str) -> Selection:
        self._timeline.get_item(item_id)
        selection = selection_for_item(self._timeline.regions, self._timeline.items, item_id)
        if selection is None:
            raise KeyError(f"Item '{item_id}' is not on the timeline")
        self._selection = selection
        self._explicit_selection = True
        return selection

    def seek(self, time_ms: int) -> int:
        clamped = int(bound(time_ms, (0, self.duration_ms)))
        self._cursor_ms = clamped
        if self._media is not None:
            self._media.current_time = ms_to_seconds(clamped)
        return clamped

    def on_time_update(self, time_ms: int | None = None, seeking: bool = False, looping: bool = False) -> PlaybackUpdate:
        if time_ms is None:
            if self._media is None:
                raise ValueError("time_ms is required when no media is attached")
            time_ms = seconds_to_ms(self._media.current_time)
        paused = self._media.paused if self._media is not None else False
        view = PlaybackView(
            duration_ms=self.duration_ms,
            view_box_start_ms=self._view_box_start_ms,
            visible_span_ms=visible_span_ms(self._viewport_width_px, self._pixels_per_second),
            selection=self._selection,
            explicit_selection=self._explicit_selection,
            drag_pending=self._gesture.is_pending,
            buffer_ratio=self._settings.viewport_buffer_ratio,
        )
        update = on_time_update(
            self._timeline.regions,
            self._timeline.items,
            view,
            PlaybackTick(time_ms=time_ms, paused=paused, seeking=seeking, looping=looping),
        )
        self._explicit_selection = False
        self._cursor_ms = update.cursor_ms
        self._selection = update.selection
        self._view_box_start_ms = update.view_box_start_ms
        if update.seek_to_ms is not None:
            self.seek(update.seek_to_ms)
        return update

    def zoom(self, delta: int) -> int:
        self._pixels_per_second, self._view_box_start_ms = zoom(
            pixels_per_second=self._pixels_per_second,
            delta=delta,
            cursor_ms=self._cursor_ms,
            view_box_start_ms=self._view_box_start_ms,
            duration_ms=self.duration_ms,
            width_px=self._viewport_width_px,
            settings=self._settings,
        )
        return self._pixels_per_second

    # gestures

    def view_snapshot(self) -> ViewSnapshot:
        return ViewSnapshot(
            duration_ms=self.duration_ms,
            cursor_ms=self._cursor_ms,
            view_box_start_ms=self._view_box_start_ms,
            pixels_per_second=self._pixels_per_second,
            selected_clip_id=self._selection.item_id if self._selection is not None else None,
        )

    def clip_at(self, time_ms: float) -> ClipTarget | None:
        highlighted = self._selection.item_id if self._selection is not None else None
        return clip_at(self._timeline.regions, self._timeline.items, time_ms, highlighted)

    def handle_pointer(self, event: PointerEvent) -> GestureOutcome | None:
        self._gesture, outcome = handle_pointer_event(self._gesture, event, self.view_snapshot(), self._settings)
        if outcome is not None:
            self._apply(outcome)
        return outcome

    def _apply(self, outcome: GestureOutcome) -> None:
        if isinstance(outcome, SeekTo):
            self.seek(outcome.time_ms)
        elif isinstance(outcome, CreateClip):
            item = self.add_clip(outcome.start, outcome.end)
            self.select_item(item.item_id)
            self.seek(outcome.start)
        elif isinstance(outcome, SelectClip):
            self.select_item(outcome.clip_id)
            self.seek(outcome.seek_ms)
        elif isinstance(outcome, (MoveClip, StretchClip)):
            self.update_clip(outcome.clip_id, outcome.start, outcome.end)
            self.select_item(outcome.clip_id)
            if outcome.seek_ms is not None:
                self.seek(outcome.seek_ms)

    # rendering boundary

    def render_snapshot(self) -> RenderSnapshot:
        view_end = self._view_box_start_ms + visible_span_ms(self._viewport_width_px, self._pixels_per_second)
        indices = self._timeline.visible_range(self._view_box_start_ms, view_end)
        regions = self._timeline.regions
        visible = [regions[index] for index in indices]
        items = self._timeline.items
        item_ids = {item_id for region in visible for item_id in region.item_ids}

        pending = None
        action = self._gesture.pending
        if action is not None:
            start, end = pending_preview(action, self._settings.min_clip_ms)
            kind = "create" if isinstance(action, DragCreate) else "move" if isinstance(action, DragMove) else "stretch"
            pending = PendingPreviewModel(action=kind, start=start, end=end)

        return RenderSnapshot(
            duration_ms=self.duration_ms,
            cursor_ms=self._cursor_ms,
            view_box_start_ms=self._view_box_start_ms,
            pixels_per_second=self._pixels_per_second,
            selected_item_id=self._selection.item_id if self._selection is not None else None,
            regions=[
                RegionModel(start=region.start, item_ids=list(region.item_ids), end=region.end) for region in visible
            ],
            first_region_index=indices.start if len(indices) else 0,
            items={
                item_id: ItemModel(
                    id=item_id,
                    start=items[item_id].start,
                    end=items[item_id].end,
                    kind=items[item_id].kind.value,
                )
                for item_id in sorted(item_ids)
            },
            pending=pending,
        )
