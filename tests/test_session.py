"""Tests for the seating session composition layer."""

import logging

import pytest

from seatplan import FileBackend, LayoutConfig, SeatingSession
from seatplan.exceptions import OverlapError, SnapshotError
from seatplan.models import DeclineReason, Person

logger = logging.getLogger(__name__)


def _occupant_counts(session):
    counts = {}
    for seat in session.store.seats:
        if seat.assigned_person_id:
            counts[seat.assigned_person_id] = counts.get(seat.assigned_person_id, 0) + 1
    return counts


def test_assign_person_clears_previous_seat(session):
    """Test a person holds at most one seat."""
    a = session.add_seat(0, 0).seat_ids[0]
    b = session.add_seat(200, 0).seat_ids[0]
    ann = session.add_person("Ann")

    session.assign_person(a, ann.id)
    result = session.assign_person(b, ann.id)

    assert result.seat_ids == [a, b]
    assert session.store.get(a).assigned_person_id is None
    assert session.store.get(b).assigned_person_id == ann.id
    assert _occupant_counts(session) == {ann.id: 1}
    assert session.roster.get(ann.id).is_seated


def test_assign_person_with_swap(session):
    """Test swapping occupants when dropping onto an occupied seat."""
    a = session.add_seat(0, 0).seat_ids[0]
    b = session.add_seat(200, 0).seat_ids[0]
    ann = session.add_person("Ann")
    bob = session.add_person("Bob")
    session.assign_person(a, ann.id)
    session.assign_person(b, bob.id)

    session.assign_person(b, ann.id, swap=True)

    assert session.store.get(a).assigned_person_id == bob.id
    assert session.store.get(b).assigned_person_id == ann.id

    session.assign_person(a, ann.id)
    assert session.store.get(b).assigned_person_id is None
    assert not session.roster.get(bob.id).is_seated


def test_assign_person_undoes_in_one_step(session):
    """Test a move of a person between seats is one undo entry."""
    a = session.add_seat(0, 0).seat_ids[0]
    b = session.add_seat(200, 0).seat_ids[0]
    ann = session.add_person("Ann")
    session.assign_person(a, ann.id)
    before = session.store.seats

    session.assign_person(b, ann.id)
    assert session.undo()

    assert session.store.seats == before
    assert session.roster.get(ann.id).is_seated


def test_assign_person_declines(session):
    """Test assignment to unknown seats and shapes."""
    shape_id = session.add_shape(0, 0, 300, 100).seat_ids[0]

    assert session.assign_person("missing", "p").reason == DeclineReason.NOT_FOUND
    assert session.assign_person(shape_id, "p").reason == DeclineReason.INVALID_KIND


def test_drop_person(session):
    """Test seating a person at a layout point."""
    seat_id = session.add_seat(100, 100).seat_ids[0]
    ann = session.add_person("Ann")

    assert session.drop_person(150, 150, ann.id).seat_ids == [seat_id]
    assert session.drop_person(2000, 2000, ann.id).reason == DeclineReason.NOT_FOUND


def test_arrange_synchronizes_roster(session):
    """Test arrangement updates seated flags."""
    session.add_seat_batch(1000, 100, rows=1, cols=2)
    session.import_people(
        [
            {"id": "a", "name": "A", "rank_score": 10},
            {"id": "b", "name": "B", "rank_score": 30},
            {"id": "c", "name": "C", "rank_score": 20},
        ]
    )

    result = session.arrange_by_importance()

    assert set(result.assignments.values()) == {"b", "c"}
    assert [p.id for p in session.roster.seated] == ["b", "c"]
    assert session.synchronize() == 2

    session.reset_seating()
    assert session.roster.seated == []

    session.arrange_by_position()
    assert len(session.roster.seated) == 2


def test_undo_resynchronizes_and_prunes_selection(session):
    """Test undo restores seats, selection and seated flags together."""
    seat_id = session.add_seat(0, 0).seat_ids[0]
    ann = session.add_person("Ann")
    session.assign_person(seat_id, ann.id)
    session.selection.select([seat_id])

    assert session.undo()
    assert not session.roster.get(ann.id).is_seated

    assert session.undo()
    assert session.selection.selected_ids == []
    assert not session.undo()


def test_selection_workflow(session):
    """Test select, move, copy, paste and delete through the session."""
    ids = session.add_seat_batch(100, 100, rows=1, cols=2).seat_ids
    session.selection.select(ids)

    assert session.move_selection(0, 200).success
    assert [s.y for s in session.selection.selected_seats] == [300, 300]

    assert session.copy() == 2
    pasted = session.paste(1000, 1000)
    assert pasted.success
    assert session.selection.selected_ids == pasted.seat_ids

    assert session.delete_selected().success
    assert len(session.store) == 2


def test_remove_seat_unseats_person(session):
    """Test removing an occupied seat clears the seated flag."""
    seat_id = session.add_seat(0, 0).seat_ids[0]
    ann = session.add_person("Ann")
    session.assign_person(seat_id, ann.id)

    session.remove_seat(seat_id)

    assert not session.roster.get(ann.id).is_seated


def test_snap_on_add_and_move(session):
    """Test optional grid snapping."""
    seat_id = session.add_seat(107, 111, snap=True).seat_ids[0]
    assert (session.store.get(seat_id).x, session.store.get(seat_id).y) == (100, 120)

    session.move_seat(seat_id, 493, 507, snap=True)
    assert (session.store.get(seat_id).x, session.store.get(seat_id).y) == (500, 500)


def test_sequence_and_auto_rank_through_session(session):
    """Test ranking entry points on the session."""
    a = session.add_seat(1550, 100).seat_ids[0]
    b = session.add_seat(200, 100).seat_ids[0]

    session.start_sequence(10)
    session.apply_sequence(b)
    session.stop_sequence()
    assert session.store.get(b).rank_weight == 10

    session.auto_rank()
    assert session.store.get(a).rank_weight == 1
    assert session.store.get(b).rank_weight == 2

    session.update_seat(a, "Front", 7)
    assert session.store.get(a).label == "Front"


def test_snapshot_round_trip(session):
    """Test export then import reproduces seats and people exactly."""
    session.add_seat_batch(0, 0, rows=2, cols=2)
    session.toggle_main_stage()
    seat_id = session.store.seats[0].id
    session.set_zone([seat_id], "Guests")
    session.toggle_pin(seat_id)
    ann = session.add_person("Ann", title="Mayor", category="Mayors")
    session.add_person("Bob", rank_score=3, note="Late")
    session.assign_person(seat_id, ann.id)

    data = session.to_json("gala")
    other = SeatingSession(config=session.config)
    other.from_json(data)

    assert other.store.seats == session.store.seats
    assert other.roster.people == session.roster.people
    assert len(other.history) == 0

    snapshot = session.export_snapshot("gala")
    other.import_snapshot(snapshot)
    assert other.export_snapshot("gala") == snapshot


def test_from_json_rejects_bad_data(session):
    """Test malformed snapshots raise SnapshotError."""
    with pytest.raises(SnapshotError):
        session.from_json("not json")
    with pytest.raises(SnapshotError):
        session.from_json('{"seats": [{"x": 1}]}')
    with pytest.raises(SnapshotError):
        session.import_venue("[]")


def test_venue_import_clears_assignments(session):
    """Test layout-only import drops occupants and history."""
    seat_id = session.add_seat(0, 0).seat_ids[0]
    ann = session.add_person("Ann")
    session.assign_person(seat_id, ann.id)

    venue = session.export_venue()
    session.import_venue(venue)

    assert session.store.get(seat_id).assigned_person_id is None
    assert not session.roster.get(ann.id).is_seated
    assert len(session.history) == 0


def test_save_and_load(session):
    """Test persisting through the storage backend."""
    session.add_seat(0, 0)
    session.add_person("Ann")
    session.save("gala")

    other = SeatingSession(config=session.config, backend=session.backend)
    assert other.load("gala")
    assert other.store.seats == session.store.seats
    assert not other.load("missing")


def test_load_truncated_file_raises_and_keeps_file(tmp_path):
    """Test a damaged project file raises SnapshotError and is left on disk."""
    backend = FileBackend(tmp_path)
    session = SeatingSession(config=LayoutConfig(), backend=backend)
    session.add_seat(0, 0)
    session.save("gala")

    path = tmp_path / "gala.json"
    data = path.read_text(encoding="utf-8")
    path.write_text(data[: len(data) // 2], encoding="utf-8")

    with pytest.raises(SnapshotError):
        session.load("gala")
    assert path.exists()
    assert len(session.store) == 1


def test_report_orders_labels_and_handles_unknown(session):
    """Test report rows and dangling occupant ids."""
    ids = session.add_seat_batch(0, 0, rows=1, cols=3).seat_ids
    session.update_seat(ids[0], "10", 1)
    session.update_seat(ids[1], "2", 2)
    ann = session.add_person("Ann", title="Mayor")
    bob = session.add_person("Bob")
    session.assign_person(ids[0], ann.id)
    session.assign_person(ids[1], bob.id)

    session.remove_person(bob.id)
    session.synchronize()
    rows = session.report()

    assert [r.seat_label for r in rows] == ["2", "10"]
    assert rows[0].person_name == "Unknown"
    assert rows[1].person_name == "Ann"
    assert rows[1].person_title == "Mayor"


def test_raise_for_status(session):
    """Test declined results can be turned into exceptions."""
    session.add_seat(100, 100).raise_for_status()

    with pytest.raises(OverlapError):
        session.add_seat(110, 110).raise_for_status()


def test_people_stay_single_seated_through_arrangements(session):
    """Test the at-most-one occupant invariant across mixed operations."""
    ids = session.add_seat_batch(500, 500, rows=2, cols=3).seat_ids
    session.import_people(
        [Person(id=f"p{i}", name=f"P{i}", rank_score=i * 10) for i in range(8)]
    )

    session.arrange_by_importance()
    session.assign_person(ids[5], "p0", swap=True)
    session.assign_person(ids[0], "p7", swap=True)
    session.arrange_by_position()
    session.assign_person(ids[2], "p1")

    assert all(count == 1 for count in _occupant_counts(session).values())

    logger.info("Session invariant test passed")
