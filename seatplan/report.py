"""Seating report built from seats and people."""

from collections.abc import Iterable

from .models import Person, ReportRow, Seat
from .utils import natural_sort_key

UNKNOWN_PERSON = "Unknown"


def build_seating_report(seats: Iterable[Seat], people: Iterable[Person]) -> list[ReportRow]:
    """List every occupied seat with its occupant, ordered by seat label.

    Occupant ids missing from ``people`` are reported as ``"Unknown"``.
    """
    by_id = {p.id: p for p in people}
    rows = []
    for seat in seats:
        if seat.assigned_person_id is None:
            continue
        person = by_id.get(seat.assigned_person_id)
        rows.append(
            ReportRow(
                seat_id=seat.id,
                seat_label=seat.label,
                person_id=seat.assigned_person_id,
                person_name=person.name if person else UNKNOWN_PERSON,
                person_title=person.title if person else "",
                person_organization=person.organization if person else "",
                category=person.category if person else "",
            )
        )
    return sorted(rows, key=lambda row: natural_sort_key(row.seat_label))
