"""Entity store for seats and shapes."""

import logging
from collections.abc import Iterable, Iterator

from .config import LayoutConfig
from .geometry import bounding_box, collides, contains_point, grid_rects, within_bounds
from .history import HistoryManager
from .models import DeclineReason, OperationResult, Rect, Seat, SeatKind, ShapeType
from .utils import new_id

logger = logging.getLogger(__name__)


class EntityStore:
    """Owns the list of placeable objects on a layout.

    Placement mutations are validated against the layout bounds and, for
    seats, against every other visible seat before they are committed. Every
    committed mutation is preceded by a history snapshot. Rejections are
    returned as declined ``OperationResult`` objects; nothing is raised.
    """

    def __init__(self, config: LayoutConfig | None = None, history: HistoryManager | None = None):
        """Initialize the store.

        Args:
            config: Layout configuration (default: LayoutConfig())
            history: Undo history (default: new HistoryManager with the configured capacity)
        """
        self.config = config or LayoutConfig()
        self.history = history or HistoryManager(self.config.history_capacity)
        self._seats: list[Seat] = []

    # --- queries ---

    @property
    def seats(self) -> list[Seat]:
        """Copy of the current seat list, in insertion order."""
        return list(self._seats)

    @property
    def seat_count(self) -> int:
        """Number of non-shape objects."""
        return sum(1 for s in self._seats if not s.is_shape)

    def get(self, seat_id: str) -> Seat | None:
        index = self._index(seat_id)
        return None if index is None else self._seats[index]

    def seat_at(self, x: float, y: float) -> Seat | None:
        """Find the visible, non-shape seat containing a layout point."""
        for seat in self._seats:
            if seat.is_visible and not seat.is_shape and contains_point(seat.rect, x, y):
                return seat
        return None

    def find_by_occupant(self, person_id: str) -> list[Seat]:
        """All seats whose occupant is the given person."""
        return [s for s in self._seats if s.assigned_person_id == person_id]

    def __len__(self) -> int:
        return len(self._seats)

    def __iter__(self) -> Iterator[Seat]:
        return iter(list(self._seats))

    def __contains__(self, seat_id: object) -> bool:
        return any(s.id == seat_id for s in self._seats)

    # --- placement ---

    def create(
        self,
        kind: SeatKind,
        x: float,
        y: float,
        *,
        width: float | None = None,
        height: float | None = None,
        label: str | None = None,
        rank_weight: int | None = None,
        zone: str | None = None,
        shape_type: ShapeType | None = None,
    ) -> OperationResult:
        """Create a seat or shape at (x, y).

        Seats get the next rank weight (seat count + 1) and a label derived from
        it unless given explicitly. Shapes default to the obstacle rank weight.

        Returns:
            OperationResult with the new id, or declined on overlap/out-of-bounds
        """
        kind = SeatKind(kind)
        width = width if width is not None else self.config.seat_width
        height = height if height is not None else self.config.seat_height
        rect = Rect(x=x, y=y, width=width, height=height)

        if not within_bounds(rect, self.config.virtual_width, self.config.virtual_height):
            logger.debug(f"Declined create at ({x}, {y}): out of bounds")
            return OperationResult.declined(
                DeclineReason.OUT_OF_BOUNDS, "Position is outside the layout"
            )
        if kind == SeatKind.SEAT and collides(rect, self._seats):
            logger.debug(f"Declined create at ({x}, {y}): overlap")
            return OperationResult.declined(DeclineReason.OVERLAP, "Position is occupied")

        next_rank = self.seat_count + 1
        if kind == SeatKind.SEAT:
            default_weight, default_label = next_rank, f"S-{next_rank}"
        else:
            default_weight, default_label = self.config.obstacle_rank_weight, ""
            shape_type = shape_type or ShapeType.RECT

        seat = Seat(
            id=new_id(kind.value),
            x=x,
            y=y,
            width=width,
            height=height,
            kind=kind,
            label=label if label is not None else default_label,
            rank_weight=rank_weight if rank_weight is not None else default_weight,
            zone=zone,
            shape_type=shape_type,
        )

        self.history.snapshot(self._seats)
        self._seats.append(seat)
        logger.debug(f"Created {kind.value} {seat.id} at ({x}, {y})")
        return OperationResult.ok([seat.id])

    def create_batch(
        self,
        start_x: float,
        start_y: float,
        rows: int,
        cols: int,
        gap_x: float | None = None,
        gap_y: float | None = None,
    ) -> OperationResult:
        """Create a rows x cols grid of seats in row-major order.

        The grid is placed as a unit: if its bounding rectangle leaves the
        layout or any cell overlaps a visible seat, nothing is created.
        """
        if rows < 1 or cols < 1:
            return OperationResult.declined(DeclineReason.EMPTY, "Grid has no cells")

        gap_x = self.config.batch_gap_x if gap_x is None else gap_x
        gap_y = self.config.batch_gap_y if gap_y is None else gap_y
        rects = grid_rects(
            start_x,
            start_y,
            rows,
            cols,
            self.config.seat_width,
            self.config.seat_height,
            gap_x,
            gap_y,
        )

        if not within_bounds(
            bounding_box(rects), self.config.virtual_width, self.config.virtual_height
        ):
            logger.debug(f"Declined {rows}x{cols} grid at ({start_x}, {start_y}): out of bounds")
            return OperationResult.declined(
                DeclineReason.OUT_OF_BOUNDS, "Grid extends outside the layout"
            )
        if any(collides(rect, self._seats) for rect in rects):
            logger.debug(f"Declined {rows}x{cols} grid at ({start_x}, {start_y}): overlap")
            return OperationResult.declined(
                DeclineReason.OVERLAP, "Grid overlaps existing seats"
            )

        count = self.seat_count
        new_seats = []
        for rect in rects:
            count += 1
            new_seats.append(
                Seat(
                    id=new_id("seat"),
                    x=rect.x,
                    y=rect.y,
                    width=rect.width,
                    height=rect.height,
                    label=f"S-{count}",
                    rank_weight=count,
                )
            )

        self.history.snapshot(self._seats)
        self._seats.extend(new_seats)
        logger.debug(f"Created {len(new_seats)} seats in a {rows}x{cols} grid")
        return OperationResult.ok([s.id for s in new_seats])

    def add_shape(
        self,
        x: float,
        y: float,
        width: float,
        height: float,
        label: str = "",
        shape_type: ShapeType = ShapeType.RECT,
    ) -> OperationResult:
        """Create a non-assignable shape (stage, obstacle)."""
        return self.create(
            SeatKind.SHAPE, x, y, width=width, height=height, label=label, shape_type=shape_type
        )

    def move(self, seat_id: str, x: float, y: float) -> OperationResult:
        """Move one object to (x, y).

        Shapes only need to stay inside the layout. Seats must also not
        overlap any other visible seat. Declined moves leave the object where
        it was.
        """
        index = self._index(seat_id)
        if index is None:
            return self._not_found(seat_id)

        seat = self._seats[index]
        if seat.x == x and seat.y == y:
            return OperationResult.ok([seat_id])

        rect = Rect(x=x, y=y, width=seat.width, height=seat.height)
        if not within_bounds(rect, self.config.virtual_width, self.config.virtual_height):
            logger.debug(f"Declined move of {seat_id} to ({x}, {y}): out of bounds")
            return OperationResult.declined(
                DeclineReason.OUT_OF_BOUNDS, "Position is outside the layout"
            )
        if not seat.is_shape and collides(rect, self._seats, exclude_ids=[seat_id]):
            logger.debug(f"Declined move of {seat_id} to ({x}, {y}): overlap")
            return OperationResult.declined(DeclineReason.OVERLAP, "Position is occupied")

        self.history.snapshot(self._seats)
        self._seats[index] = seat.model_copy(update={"x": x, "y": y})
        return OperationResult.ok([seat_id])

    def move_many(
        self, seat_ids: Iterable[str], dx: float, dy: float, record_history: bool = True
    ) -> OperationResult:
        """Translate several objects by the same delta.

        Moved objects are not checked for collisions, neither against each
        other nor against the rest of the layout. The group is declined as a
        unit if any member would leave the layout.
        """
        wanted = set(seat_ids)
        indexes = [i for i, s in enumerate(self._seats) if s.id in wanted]
        if not indexes:
            return OperationResult.declined(DeclineReason.EMPTY, "Nothing to move")

        for i in indexes:
            moved = self._seats[i].rect.translate(dx, dy)
            if not within_bounds(moved, self.config.virtual_width, self.config.virtual_height):
                logger.debug(f"Declined batch move by ({dx}, {dy}): out of bounds")
                return OperationResult.declined(
                    DeclineReason.OUT_OF_BOUNDS, "Selection would leave the layout"
                )

        ids = [self._seats[i].id for i in indexes]
        if dx == 0 and dy == 0:
            return OperationResult.ok(ids)

        if record_history:
            self.history.snapshot(self._seats)
        for i in indexes:
            seat = self._seats[i]
            self._seats[i] = seat.model_copy(update={"x": seat.x + dx, "y": seat.y + dy})
        return OperationResult.ok(ids)

    def insert(self, seats: list[Seat]) -> OperationResult:
        """Append already-validated objects (used by paste)."""
        if not seats:
            return OperationResult.declined(DeclineReason.EMPTY, "Nothing to insert")
        self.history.snapshot(self._seats)
        self._seats.extend(seats)
        return OperationResult.ok([s.id for s in seats])

    # --- attributes ---

    def update_properties(self, seat_id: str, label: str, rank_weight: int) -> OperationResult:
        """Set label and rank weight. Duplicates across seats are allowed."""
        return self._update(seat_id, label=label, rank_weight=rank_weight)

    def set_rank_weight(
        self, seat_id: str, rank_weight: int, record_history: bool = True
    ) -> OperationResult:
        return self._update(seat_id, record_history=record_history, rank_weight=rank_weight)

    def set_rank_weights(self, weights: dict[str, int]) -> OperationResult:
        """Rewrite several rank weights under a single history entry."""
        if not weights:
            return OperationResult.declined(DeclineReason.EMPTY, "No seats to rank")
        self.history.snapshot(self._seats)
        changed = []
        for i, seat in enumerate(self._seats):
            if seat.id in weights:
                self._seats[i] = seat.model_copy(update={"rank_weight": weights[seat.id]})
                changed.append(seat.id)
        return OperationResult.ok(changed)

    def toggle_pinned(self, seat_id: str) -> OperationResult:
        seat = self.get(seat_id)
        if seat is None:
            return self._not_found(seat_id)
        return self._update(seat_id, is_pinned=not seat.is_pinned)

    def set_visible(self, seat_id: str, visible: bool) -> OperationResult:
        return self._update(seat_id, is_visible=visible)

    def set_zone(self, seat_ids: Iterable[str], zone: str | None) -> OperationResult:
        """Tag several seats with a presentation zone."""
        wanted = set(seat_ids)
        if not any(s.id in wanted for s in self._seats):
            return OperationResult.declined(DeclineReason.EMPTY, "No matching seats")
        self.history.snapshot(self._seats)
        changed = []
        for i, seat in enumerate(self._seats):
            if seat.id in wanted:
                self._seats[i] = seat.model_copy(update={"zone": zone})
                changed.append(seat.id)
        return OperationResult.ok(changed)

    # --- assignment ---

    def assign(
        self, seat_id: str, person_id: str | None, record_history: bool = True
    ) -> OperationResult:
        """Set (or clear, with None) the occupant of a seat.

        This does not check whether the person already holds another seat;
        callers that move a person must clear the old seat first.
        """
        seat = self.get(seat_id)
        if seat is None:
            return self._not_found(seat_id)
        if seat.is_shape and person_id is not None:
            return OperationResult.declined(
                DeclineReason.INVALID_KIND, "Shapes cannot hold a person"
            )
        return self._update(seat_id, record_history=record_history, assigned_person_id=person_id)

    def unassign(self, seat_id: str) -> OperationResult:
        return self.assign(seat_id, None)

    def clear_all_assignments(self, record_history: bool = True) -> OperationResult:
        """Clear every occupant in one operation, pinned seats included.

        Args:
            record_history: Take a history snapshot first (default: True)
        """
        if record_history:
            self.history.snapshot(self._seats)
        cleared = []
        for i, seat in enumerate(self._seats):
            if seat.assigned_person_id is None:
                continue
            self._seats[i] = seat.model_copy(update={"assigned_person_id": None})
            cleared.append(seat.id)
        logger.debug(f"Cleared {len(cleared)} assignments")
        return OperationResult.ok(cleared)

    # --- removal ---

    def remove(self, seat_id: str) -> OperationResult:
        if self._index(seat_id) is None:
            return self._not_found(seat_id)
        return self.remove_many([seat_id])

    def remove_many(self, seat_ids: Iterable[str]) -> OperationResult:
        wanted = set(seat_ids)
        removed = [s.id for s in self._seats if s.id in wanted]
        if not removed:
            return OperationResult.declined(DeclineReason.EMPTY, "Nothing to remove")
        self.history.snapshot(self._seats)
        self._seats = [s for s in self._seats if s.id not in wanted]
        logger.debug(f"Removed {len(removed)} objects")
        return OperationResult.ok(removed)

    # --- main stage ---

    def toggle_main_stage(self) -> OperationResult:
        """Create the main stage shape, or flip its visibility if it exists."""
        label = self.config.main_stage_label
        for seat in self._seats:
            if seat.is_shape and seat.label == label:
                return self._update(seat.id, is_visible=not seat.is_visible)

        width = self.config.main_stage_width
        return self.create(
            SeatKind.SHAPE,
            self.config.center_x - width / 2,
            50,
            width=width,
            height=self.config.main_stage_height,
            label=label,
            rank_weight=0,
            shape_type=ShapeType.RECT,
        )

    # --- history / bulk ---

    def checkpoint(self) -> None:
        """Record the current state so a compound change undoes as one step."""
        self.history.snapshot(self._seats)

    def undo(self) -> bool:
        """Restore the state before the most recent mutation.

        Returns:
            True if a snapshot was restored, False if history was empty
        """
        previous = self.history.pop()
        if previous is None:
            return False
        self._seats = previous
        logger.debug(f"Undo restored {len(previous)} objects")
        return True

    def replace(self, seats: list[Seat]) -> None:
        """Replace the whole seat list (external load) and reset history."""
        self._seats = [seat.model_copy(deep=True) for seat in seats]
        self.history.clear()
        logger.debug(f"Replaced layout with {len(seats)} objects")

    # --- internals ---

    def _index(self, seat_id: str) -> int | None:
        for i, seat in enumerate(self._seats):
            if seat.id == seat_id:
                return i
        return None

    def _update(self, seat_id: str, record_history: bool = True, **changes) -> OperationResult:
        index = self._index(seat_id)
        if index is None:
            return self._not_found(seat_id)
        if record_history:
            self.history.snapshot(self._seats)
        self._seats[index] = self._seats[index].model_copy(update=changes)
        return OperationResult.ok([seat_id])

    @staticmethod
    def _not_found(seat_id: str) -> OperationResult:
        logger.debug(f"Seat not found: {seat_id}")
        return OperationResult.declined(DeclineReason.NOT_FOUND, f"Seat not found: {seat_id}")
