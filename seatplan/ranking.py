"""Deterministic seat ranking and automatic arrangement.

Both arrangement algorithms sort the eligible seats and the people, then
pair them positionally: the i-th seat gets the i-th person. Rows are found by
proximity (``row_tolerance``) rather than exact y equality, so seats a few
units apart still count as one row.
"""

import logging
from collections.abc import Callable, Iterable
from functools import cmp_to_key

from .models import ArrangementResult, DeclineReason, OperationResult, Person, Seat
from .store import EntityStore

logger = logging.getLogger(__name__)

SeatSorter = Callable[[list[Seat]], list[Seat]]


def _compare_rows(a: Seat, b: Seat, row_tolerance: float) -> float:
    dy = a.y - b.y
    return dy if abs(dy) > row_tolerance else 0


def compare_by_importance(a: Seat, b: Seat, center_x: float, row_tolerance: float = 20) -> float:
    """Order by rank weight, then row, then distance from the center line."""
    if a.rank_weight != b.rank_weight:
        return a.rank_weight - b.rank_weight

    row = _compare_rows(a, b, row_tolerance)
    if row:
        return row

    return abs(a.center_x - center_x) - abs(b.center_x - center_x)


def compare_by_position(
    a: Seat,
    b: Seat,
    center_x: float,
    row_tolerance: float = 20,
    center_tolerance: float = 5,
) -> float:
    """Order by row, then distance from the center line, then left to right."""
    row = _compare_rows(a, b, row_tolerance)
    if row:
        return row

    dist = abs(a.center_x - center_x) - abs(b.center_x - center_x)
    if abs(dist) < center_tolerance:
        return a.x - b.x
    return dist


def sort_seats_by_importance(
    seats: Iterable[Seat], center_x: float, row_tolerance: float = 20
) -> list[Seat]:
    return sorted(
        seats, key=cmp_to_key(lambda a, b: compare_by_importance(a, b, center_x, row_tolerance))
    )


def sort_seats_by_position(
    seats: Iterable[Seat],
    center_x: float,
    row_tolerance: float = 20,
    center_tolerance: float = 5,
) -> list[Seat]:
    return sorted(
        seats,
        key=cmp_to_key(
            lambda a, b: compare_by_position(a, b, center_x, row_tolerance, center_tolerance)
        ),
    )


def sort_people_by_score(people: Iterable[Person]) -> list[Person]:
    """Highest rank score first; equal scores keep their list order."""
    return sorted(people, key=lambda p: p.rank_score, reverse=True)


def eligible_seats(seats: Iterable[Seat]) -> list[Seat]:
    """Seats an arrangement pass may fill: visible, not pinned, not shapes."""
    return [s for s in seats if s.is_visible and not s.is_pinned and not s.is_shape]


class RankingEngine:
    """Automatic arrangement, sequential ranking and bulk re-rank.

    Args:
        store: Entity store whose seats are ranked and assigned
    """

    def __init__(self, store: EntityStore):
        self.store = store
        self._sequencing = False
        self._counter = 1

    # --- arrangement ---

    def arrange_by_importance(self, people: Iterable[Person]) -> ArrangementResult:
        """Fill seats by rank weight, then row, then closeness to the center."""
        config = self.store.config
        return self._arrange(
            people,
            lambda seats: sort_seats_by_importance(seats, config.center_x, config.row_tolerance),
            "importance",
        )

    def arrange_by_position(self, people: Iterable[Person]) -> ArrangementResult:
        """Fill seats front row first, center outwards, ignoring rank weight."""
        config = self.store.config
        return self._arrange(
            people,
            lambda seats: sort_seats_by_position(
                seats, config.center_x, config.row_tolerance, config.center_tolerance
            ),
            "position",
        )

    def _arrange(
        self, people: Iterable[Person], sorter: SeatSorter, mode: str
    ) -> ArrangementResult:
        candidates = list(people)
        eligible = eligible_seats(self.store.seats)

        if not eligible or not candidates:
            logger.info(
                f"Skipped {mode} arrangement: {len(eligible)} eligible seats, "
                f"{len(candidates)} people"
            )
            return ArrangementResult(
                unseated_person_ids=[p.id for p in candidates],
                empty_seat_ids=[s.id for s in eligible],
            )

        sorted_seats = sorter(eligible)
        sorted_people = sort_people_by_score(candidates)

        # Every seat is emptied, pinned ones included; pinned seats are not refilled
        self.store.clear_all_assignments()
        assignments = {}
        for seat, person in zip(sorted_seats, sorted_people):
            self.store.assign(seat.id, person.id, record_history=False)
            assignments[seat.id] = person.id

        limit = len(assignments)
        result = ArrangementResult(
            assignments=assignments,
            unseated_person_ids=[p.id for p in sorted_people[limit:]],
            empty_seat_ids=[s.id for s in sorted_seats[limit:]],
        )
        logger.info(
            f"Arranged by {mode}: {limit} assigned, {len(result.unseated_person_ids)} unseated, "
            f"{len(result.empty_seat_ids)} seats empty"
        )
        return result

    # --- sequential ranking ---

    @property
    def is_sequencing(self) -> bool:
        return self._sequencing

    @property
    def next_rank(self) -> int:
        """Rank weight the next applied seat will receive."""
        return self._counter

    def start_sequence(self, start: int = 1) -> None:
        """Enter sequential ranking mode with the counter at ``start``."""
        self._sequencing = True
        self._counter = start
        logger.debug(f"Sequential ranking started at {start}")

    def apply_sequence(self, seat_id: str) -> OperationResult:
        """Give a seat the current counter as rank weight and advance the counter.

        The seat's label is left untouched.
        """
        if not self._sequencing:
            return OperationResult.declined(
                DeclineReason.NOT_SEQUENCING, "Sequential ranking is not active"
            )

        seat = self.store.get(seat_id)
        if seat is None:
            return OperationResult.declined(DeclineReason.NOT_FOUND, f"Seat not found: {seat_id}")
        if seat.is_shape:
            return OperationResult.declined(DeclineReason.INVALID_KIND, "Shapes are not ranked")

        result = self.store.set_rank_weight(seat_id, self._counter)
        self._counter += 1
        return result

    def stop_sequence(self) -> None:
        """Leave sequential ranking mode; the counter is kept."""
        self._sequencing = False
        logger.debug(f"Sequential ranking stopped at {self._counter}")

    # --- bulk re-rank ---

    def auto_rank(self) -> OperationResult:
        """Rewrite every seat's rank weight from its position (1-based).

        Uses the position-based order. Assignments are not touched.
        """
        config = self.store.config
        seats = [s for s in self.store.seats if not s.is_shape]
        if not seats:
            return OperationResult.declined(DeclineReason.EMPTY, "No seats to rank")

        ordered = sort_seats_by_position(
            seats, config.center_x, config.row_tolerance, config.center_tolerance
        )
        weights = {seat.id: index for index, seat in enumerate(ordered, start=1)}
        logger.info(f"Re-ranked {len(weights)} seats from layout position")
        return self.store.set_rank_weights(weights)
