from subtitler.playback.selection import (
    PlaybackTick,
    PlaybackView,
    on_time_update,
    refresh_selection,
    selection_at,
    selection_for_item,
)
from subtitler.regions.index import build_regions, query_at
from subtitler.regions.models import Item


def _build():
    return build_regions([Item("a", 1_000, 3_000), Item("b", 2_000, 5_000)], 20_000)


def _view(selection=None, explicit: bool = False, drag_pending: bool = False, view_box_start_ms: int = 0) -> PlaybackView:
    return PlaybackView(
        duration_ms=20_000,
        view_box_start_ms=view_box_start_ms,
        visible_span_ms=10_000,
        selection=selection,
        explicit_selection=explicit,
        drag_pending=drag_pending,
    )


def test_selection_at_picks_first_covering_item() -> None:
    built = _build()
    selection = selection_at(built.regions, built.items_by_id, 2_500)
    assert selection is not None
    assert selection.item_id == "a"
    assert selection.region_index == 2
    assert selection.region.item_ids == ("a", "b")


def test_selection_at_keeps_current_item_while_it_spans_time() -> None:
    built = _build()
    current = selection_for_item(built.regions, built.items_by_id, "b")
    selection = selection_at(built.regions, built.items_by_id, 2_500, current)
    assert selection is not None
    assert selection.item_id == "b"
    assert selection.region_index == 2


def test_selection_at_gap_and_out_of_range_is_none() -> None:
    built = _build()
    assert selection_at(built.regions, built.items_by_id, 500) is None
    assert selection_at(built.regions, built.items_by_id, 6_000) is None
    assert selection_at(built.regions, built.items_by_id, -1) is None
    assert selection_at(built.regions, built.items_by_id, 20_000) is None


def test_query_at_region_lists_every_item_covering_time() -> None:
    built = _build()
    for time_ms in range(0, 20_000, 250):
        index = query_at(built.regions, time_ms)
        assert index is not None
        covering = {item.item_id for item in built.items_by_id.values() if item.covers(time_ms)}
        assert set(built.regions[index].item_ids) == covering


def test_selection_for_item_anchors_at_item_start() -> None:
    built = _build()
    selection = selection_for_item(built.regions, built.items_by_id, "b")
    assert selection is not None
    assert selection.region_index == 2
    assert selection_for_item(built.regions, built.items_by_id, "missing") is None


def test_refresh_selection_follows_item_after_rebuild() -> None:
    built = _build()
    selection = selection_for_item(built.regions, built.items_by_id, "a")
    moved = build_regions([Item("a", 6_000, 7_000), Item("b", 2_000, 5_000)], 20_000)
    refreshed = refresh_selection(moved.regions, moved.items_by_id, selection)
    assert refreshed is not None
    assert refreshed.item.start == 6_000
    assert refresh_selection(moved.regions, moved.items_by_id, None) is None


def test_time_update_moves_cursor_and_selection() -> None:
    built = _build()
    update = on_time_update(built.regions, built.items_by_id, _view(), PlaybackTick(time_ms=1_500))
    assert update.cursor_ms == 1_500
    assert update.selection is not None and update.selection.item_id == "a"
    assert update.view_box_start_ms == 0
    assert update.seek_to_ms is None


def test_time_update_clears_selection_in_gap() -> None:
    built = _build()
    current = selection_for_item(built.regions, built.items_by_id, "b")
    update = on_time_update(built.regions, built.items_by_id, _view(current), PlaybackTick(time_ms=6_000))
    assert update.selection is None


def test_explicit_selection_wins_for_one_tick() -> None:
    built = _build()
    current = selection_for_item(built.regions, built.items_by_id, "a")
    update = on_time_update(
        built.regions, built.items_by_id, _view(current, explicit=True), PlaybackTick(time_ms=6_000)
    )
    assert update.selection == current


def test_looping_jumps_back_to_selected_start() -> None:
    built = _build()
    current = selection_for_item(built.regions, built.items_by_id, "a")
    update = on_time_update(
        built.regions, built.items_by_id, _view(current), PlaybackTick(time_ms=3_000, looping=True)
    )
    assert update.cursor_ms == 1_000
    assert update.seek_to_ms == 1_000
    assert update.selection == current


def test_looping_is_skipped_while_paused_or_seeking() -> None:
    built = _build()
    current = selection_for_item(built.regions, built.items_by_id, "a")
    for tick in (
        PlaybackTick(time_ms=3_000, looping=True, paused=True),
        PlaybackTick(time_ms=3_000, looping=True, seeking=True),
    ):
        update = on_time_update(built.regions, built.items_by_id, _view(current), tick)
        assert update.seek_to_ms is None
        assert update.selection is not None and update.selection.item_id == "b"


def test_selection_of_deleted_item_is_dropped() -> None:
    built = _build()
    current = selection_for_item(built.regions, built.items_by_id, "a")
    remaining = build_regions([Item("b", 2_000, 5_000)], 20_000)
    update = on_time_update(remaining.regions, remaining.items_by_id, _view(current), PlaybackTick(time_ms=1_500))
    assert update.selection is None


def test_time_update_scrolls_view_unless_dragging() -> None:
    built = _build()
    update = on_time_update(built.regions, built.items_by_id, _view(), PlaybackTick(time_ms=12_000))
    assert update.view_box_start_ms == 10_000

    update = on_time_update(
        built.regions, built.items_by_id, _view(drag_pending=True), PlaybackTick(time_ms=12_000)
    )
    assert update.view_box_start_ms == 0
