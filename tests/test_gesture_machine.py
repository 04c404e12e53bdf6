import pytest

from subtitler.config import EditorSettings
from subtitler.gesture.machine import clip_at, handle_pointer_event, moved_interval, stretched_interval
from subtitler.gesture.models import (
    ClipTarget,
    CreateClip,
    DragCreate,
    DragMove,
    DragStretch,
    GesturePhase,
    GestureReset,
    GestureState,
    MoveClip,
    PointerDown,
    PointerMove,
    PointerUp,
    SeekTo,
    SelectClip,
    StretchClip,
    ViewSnapshot,
)
from subtitler.regions.index import build_regions
from subtitler.regions.models import Item

SETTINGS = EditorSettings()
VIEW = ViewSnapshot(duration_ms=10_000, cursor_ms=0, view_box_start_ms=0, pixels_per_second=50)
CLIP = ClipTarget(clip_id="a", start=2_000, end=4_000, region_index=1)


def _run(events, view: ViewSnapshot = VIEW):
    state = GestureState()
    outcome = None
    for event in events:
        state, outcome = handle_pointer_event(state, event, view, SETTINGS)
    return state, outcome


def test_pointer_down_on_empty_space_starts_create() -> None:
    state, outcome = _run([PointerDown(time_ms=1_000, timestamp_ms=0)])
    assert outcome is None
    assert state.phase is GesturePhase.POINTER_DOWN
    assert isinstance(state.pending, DragCreate)
    assert state.pending.start == state.pending.end == 1_000
    assert state.pending.snapshot == VIEW


def test_pointer_down_on_clip_body_starts_move() -> None:
    state, _ = _run([PointerDown(time_ms=3_000, timestamp_ms=0, target=CLIP)])
    assert isinstance(state.pending, DragMove)
    assert state.pending.clip_id == "a"
    assert state.pending.region_index == 1


def test_pointer_down_near_edges_starts_stretch_from_closest_edge() -> None:
    state, _ = _run([PointerDown(time_ms=2_050, timestamp_ms=0, target=CLIP)])
    assert isinstance(state.pending, DragStretch)
    assert state.pending.origin_key == "start"

    state, _ = _run([PointerDown(time_ms=3_950, timestamp_ms=0, target=CLIP)])
    assert isinstance(state.pending, DragStretch)
    assert state.pending.origin_key == "end"


def test_pointer_moves_only_update_pending_end() -> None:
    state, outcome = _run(
        [
            PointerDown(time_ms=1_000, timestamp_ms=0),
            PointerMove(time_ms=1_500),
            PointerMove(time_ms=20_000),
        ]
    )
    assert outcome is None
    assert state.phase is GesturePhase.DRAGGING
    assert state.pending is not None
    assert state.pending.start == 1_000
    assert state.pending.end == 10_000


def test_create_commits_normalized_interval() -> None:
    state, outcome = _run(
        [
            PointerDown(time_ms=3_000, timestamp_ms=0),
            PointerMove(time_ms=1_000),
            PointerUp(time_ms=1_000, timestamp_ms=50),
        ]
    )
    assert state == GestureState()
    assert outcome == CreateClip(start=1_000, end=3_000)


def test_short_create_becomes_seek_to_pointer_down() -> None:
    _, outcome = _run([PointerDown(time_ms=3_000, timestamp_ms=0), PointerUp(time_ms=3_200, timestamp_ms=900)])
    assert outcome == SeekTo(time_ms=3_000)


def test_quick_tap_on_clip_selects_and_seeks_to_clip_start() -> None:
    _, outcome = _run(
        [
            PointerDown(time_ms=3_000, timestamp_ms=1_000, target=CLIP),
            PointerMove(time_ms=3_500),
            PointerUp(time_ms=3_500, timestamp_ms=1_400),
        ]
    )
    assert outcome == SelectClip(clip_id="a", region_index=1, seek_ms=2_000)


def test_quick_tap_on_selected_clip_seeks_to_pointer() -> None:
    view = ViewSnapshot(
        duration_ms=10_000, cursor_ms=0, view_box_start_ms=0, pixels_per_second=50, selected_clip_id="a"
    )
    _, outcome = _run(
        [PointerDown(time_ms=3_000, timestamp_ms=0, target=CLIP), PointerUp(time_ms=3_100, timestamp_ms=100)],
        view,
    )
    assert outcome == SelectClip(clip_id="a", region_index=1, seek_ms=3_100)


def test_slow_drag_commits_move() -> None:
    _, outcome = _run(
        [
            PointerDown(time_ms=3_000, timestamp_ms=0, target=CLIP),
            PointerMove(time_ms=4_000),
            PointerUp(time_ms=4_500, timestamp_ms=401),
        ]
    )
    assert outcome == MoveClip(clip_id="a", region_index=1, start=3_500, end=5_500, seek_ms=3_500)


def test_move_of_selected_clip_keeps_play_position() -> None:
    view = ViewSnapshot(
        duration_ms=10_000, cursor_ms=0, view_box_start_ms=0, pixels_per_second=50, selected_clip_id="a"
    )
    _, outcome = _run(
        [PointerDown(time_ms=3_000, timestamp_ms=0, target=CLIP), PointerUp(time_ms=2_000, timestamp_ms=1_000)],
        view,
    )
    assert outcome == MoveClip(clip_id="a", region_index=1, start=1_000, end=3_000, seek_ms=None)


def test_move_is_clamped_to_timeline_and_keeps_width() -> None:
    _, outcome = _run(
        [PointerDown(time_ms=3_000, timestamp_ms=0, target=CLIP), PointerUp(time_ms=9_900, timestamp_ms=1_000)]
    )
    assert isinstance(outcome, MoveClip)
    assert (outcome.start, outcome.end) == (8_000, 10_000)

    _, outcome = _run(
        [PointerDown(time_ms=3_000, timestamp_ms=0, target=CLIP), PointerUp(time_ms=0, timestamp_ms=1_000)]
    )
    assert isinstance(outcome, MoveClip)
    assert (outcome.start, outcome.end) == (0, 2_000)


def test_slow_stretch_commits_clamped_edges() -> None:
    _, outcome = _run(
        [PointerDown(time_ms=3_950, timestamp_ms=0, target=CLIP), PointerUp(time_ms=6_000, timestamp_ms=500)]
    )
    assert outcome == StretchClip(
        clip_id="a", region_index=1, origin_key="end", start=2_000, end=6_000, seek_ms=2_000
    )

    _, outcome = _run(
        [PointerDown(time_ms=2_000, timestamp_ms=0, target=CLIP), PointerUp(time_ms=3_900, timestamp_ms=500)]
    )
    assert outcome == StretchClip(
        clip_id="a", region_index=1, origin_key="start", start=3_600, end=4_000, seek_ms=3_600
    )


def test_quick_stretch_is_only_a_selection() -> None:
    _, outcome = _run(
        [PointerDown(time_ms=3_950, timestamp_ms=0, target=CLIP), PointerUp(time_ms=6_000, timestamp_ms=400)]
    )
    assert outcome == SelectClip(clip_id="a", region_index=1, seek_ms=2_000)


def test_second_pointer_down_is_ignored_until_reset() -> None:
    state, _ = _run([PointerDown(time_ms=1_000, timestamp_ms=0)])
    state, outcome = handle_pointer_event(state, PointerDown(time_ms=5_000, timestamp_ms=10), VIEW, SETTINGS)
    assert outcome is None
    assert state.pending is not None and state.pending.start == 1_000

    state, outcome = handle_pointer_event(state, GestureReset(), VIEW, SETTINGS)
    assert state == GestureState()
    assert outcome is None


def test_events_without_pending_action_are_ignored() -> None:
    state, outcome = _run([PointerMove(time_ms=100), PointerUp(time_ms=100, timestamp_ms=5)])
    assert state == GestureState()
    assert outcome is None


def test_unsupported_event_raises() -> None:
    with pytest.raises(TypeError):
        handle_pointer_event(GestureState(), object(), VIEW, SETTINGS)  # type: ignore[arg-type]


def test_interval_helpers_respect_bounds() -> None:
    assert moved_interval(CLIP, -5_000, 10_000) == (0, 2_000)
    assert moved_interval(CLIP, 500, 10_000) == (2_500, 4_500)
    assert stretched_interval(CLIP, "start", -100, 10_000, 400) == (0, 4_000)
    assert stretched_interval(CLIP, "end", 12_000, 10_000, 400) == (2_000, 10_000)
    assert stretched_interval(CLIP, "end", 1_000, 10_000, 400) == (2_000, 2_400)


def test_clip_at_prefers_highlighted_then_topmost() -> None:
    built = build_regions([Item("a", 100, 500), Item("b", 200, 300)], 1_000)
    assert clip_at(built.regions, built.items_by_id, 50) is None
    assert clip_at(built.regions, built.items_by_id, 250) == ClipTarget("b", 200, 300, 2)
    assert clip_at(built.regions, built.items_by_id, 250, highlighted_id="a") == ClipTarget("a", 100, 500, 2)
    assert clip_at(built.regions, built.items_by_id, 400) == ClipTarget("a", 100, 500, 3)
    assert clip_at(built.regions, built.items_by_id, 1_000) is None
