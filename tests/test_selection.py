"""Tests for selection, batch transform and clipboard."""

import logging

from seatplan import EntityStore, LayoutConfig, SelectionManager
from seatplan.models import DeclineReason, SeatKind

logger = logging.getLogger(__name__)


def _create(store, x, y):
    return store.create(SeatKind.SEAT, x, y).seat_ids[0]


def test_select_add_and_clear(selection):
    """Test replacing, unioning and clearing the selection."""
    selection.select(["a", "b", "a"])
    assert selection.selected_ids == ["a", "b"]

    selection.add_to_selection(["b", "c"])
    assert selection.selected_ids == ["a", "b", "c"]

    selection.select(["d"])
    assert selection.selected_ids == ["d"]
    assert selection.is_selected("d")

    selection.clear()
    assert selection.selected_ids == []


def test_prune_drops_missing_ids(store, selection):
    """Test pruning removes ids no longer in the store."""
    seat_id = _create(store, 0, 0)
    selection.select([seat_id, "gone"])
    selection.prune()

    assert selection.selected_ids == [seat_id]
    assert [s.id for s in selection.selected_seats] == [seat_id]


def test_batch_move_skips_collision_checks(store, selection):
    """Test a group move translates every member without collision checks."""
    a = _create(store, 0, 0)
    b = _create(store, 200, 0)

    result = selection.batch_move([a], 150, 0)

    assert result.success
    assert store.get(a).x == 150
    assert store.get(b).x == 200


def test_batch_move_declined_out_of_bounds(store, selection):
    """Test a group move that leaves the layout moves nothing."""
    a = _create(store, 0, 0)
    b = _create(store, 3000, 0)

    result = selection.batch_move([a, b], 150, 0)

    assert result.reason == DeclineReason.OUT_OF_BOUNDS
    assert store.get(a).x == 0
    assert store.get(b).x == 3000


def test_batch_move_without_history(store, selection):
    """Test intermediate drag steps can skip history."""
    a = _create(store, 0, 0)
    entries = len(store.history)

    selection.batch_move([a], 20, 20, record_history=False)

    assert len(store.history) == entries
    assert (store.get(a).x, store.get(a).y) == (20, 20)


def test_copy_paste_to_free_area(store, selection):
    """Test pasting at a free cursor position."""
    a = _create(store, 100, 100)
    b = _create(store, 210, 100)
    store.assign(a, "p1")
    store.toggle_pinned(b)

    selection.select([a, b])
    assert selection.copy() == 2

    result = selection.paste(1000, 1000)

    assert result.success
    pasted = [store.get(seat_id) for seat_id in result.seat_ids]
    assert [(s.x, s.y) for s in pasted] == [(1000, 1000), (1110, 1000)]
    assert not {s.id for s in pasted} & {a, b}
    assert all(s.assigned_person_id is None and not s.is_pinned for s in pasted)
    assert selection.selected_ids == result.seat_ids
    assert len(store) == 4


def test_paste_over_originals_is_shifted(store, selection):
    """Test a paste on top of its source shifts diagonally until free."""
    a = _create(store, 100, 100)
    b = _create(store, 210, 100)
    selection.copy([a, b])

    result = selection.paste(100, 100)

    assert result.success
    pasted = [store.get(seat_id) for seat_id in result.seat_ids]
    # Eight 20-unit shifts clear the 150-unit seat height
    assert [(s.x, s.y) for s in pasted] == [(260, 260), (370, 260)]


def test_paste_fails_when_attempts_exhausted():
    """Test a paste with no free spot in the attempt budget is declined."""
    store = EntityStore(LayoutConfig(paste_attempts=2))
    selection = SelectionManager(store)
    a = _create(store, 100, 100)
    b = _create(store, 210, 100)
    selection.copy([a, b])
    entries = len(store.history)

    result = selection.paste(100, 100)

    assert result.reason == DeclineReason.OVERLAP
    assert len(store) == 2
    assert len(store.history) == entries


def test_paste_drops_out_of_bounds_objects(store, selection):
    """Test objects outside the layout are dropped from a paste."""
    a = _create(store, 100, 100)
    b = _create(store, 210, 100)
    selection.copy([a, b])

    partial = selection.paste(3050, 0)
    assert len(partial.seat_ids) == 1
    assert store.get(partial.seat_ids[0]).x == 3050

    selection.copy([a])
    outside = selection.paste(3150, 2300)
    assert outside.reason == DeclineReason.OUT_OF_BOUNDS


def test_paste_with_empty_clipboard(selection):
    """Test pasting nothing is declined."""
    assert selection.paste().reason == DeclineReason.EMPTY


def test_copy_nothing_keeps_clipboard(store, selection):
    """Test copying an empty selection leaves the clipboard as it was."""
    a = _create(store, 0, 0)
    selection.copy([a])

    assert selection.copy([]) == 0
    assert [s.id for s in selection.clipboard] == [a]


def test_delete_selected(store, selection):
    """Test deleting the selection."""
    a = _create(store, 0, 0)
    b = _create(store, 200, 0)
    selection.select([a])

    assert selection.delete_selected().success
    assert [s.id for s in store.seats] == [b]
    assert selection.selected_ids == []
    assert selection.delete_selected().reason == DeclineReason.EMPTY

    logger.info("Selection delete tests passed")
