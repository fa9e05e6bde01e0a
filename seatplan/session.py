"""Seating session: composes the layout, roster and ranking components."""

import logging

from pydantic import ValidationError

from .catalog import CategoryCatalog
from .config import LayoutConfig
from .exceptions import SnapshotError
from .geometry import snap_to_grid
from .history import HistoryManager
from .models import (
    ArrangementResult,
    DeclineReason,
    OperationResult,
    Person,
    ProjectSnapshot,
    ReportRow,
    SeatKind,
    ShapeType,
    VenueSnapshot,
)
from .ranking import RankingEngine
from .report import build_seating_report
from .roster import RosterStore
from .selection import SelectionManager
from .storage import NullBackend, SnapshotBackend
from .store import EntityStore

logger = logging.getLogger(__name__)


class SeatingSession:
    """Single-editor seating session.

    Owns one instance of each component and calls them in the required
    order: mutate the layout first, then resynchronize the roster whenever
    seat occupancy may have changed. The components stay usable on their own
    (``session.store``, ``session.selection``, ``session.ranking``,
    ``session.roster``) for callers that orchestrate themselves.
    """

    def __init__(
        self,
        config: LayoutConfig | None = None,
        catalog: CategoryCatalog | None = None,
        backend: SnapshotBackend | None = None,
    ):
        """Initialize a session.

        Args:
            config: Layout configuration (default: read from SEATPLAN_* env vars)
            catalog: Category catalog (default: built-in presets)
            backend: Snapshot storage for save/load (default: NullBackend)
        """
        self.config = config or LayoutConfig.from_env(dotenv=False)
        self.history = HistoryManager(self.config.history_capacity)
        self.store = EntityStore(self.config, self.history)
        self.selection = SelectionManager(self.store)
        self.ranking = RankingEngine(self.store)
        self.catalog = catalog or CategoryCatalog()
        self.roster = RosterStore(self.catalog)
        self.backend = backend or NullBackend()

    # --- layout editing ---

    def add_seat(self, x: float, y: float, snap: bool = False, **attrs) -> OperationResult:
        """Create a seat; ``attrs`` are passed to ``EntityStore.create``."""
        x, y = self._snap(x, y, snap)
        return self.store.create(SeatKind.SEAT, x, y, **attrs)

    def add_seat_batch(
        self,
        start_x: float,
        start_y: float,
        rows: int,
        cols: int,
        gap_x: float | None = None,
        gap_y: float | None = None,
    ) -> OperationResult:
        return self.store.create_batch(start_x, start_y, rows, cols, gap_x, gap_y)

    def add_shape(
        self,
        x: float,
        y: float,
        width: float,
        height: float,
        label: str = "",
        shape_type: ShapeType = ShapeType.RECT,
    ) -> OperationResult:
        return self.store.add_shape(x, y, width, height, label, shape_type)

    def toggle_main_stage(self) -> OperationResult:
        return self.store.toggle_main_stage()

    def move_seat(self, seat_id: str, x: float, y: float, snap: bool = False) -> OperationResult:
        x, y = self._snap(x, y, snap)
        return self.store.move(seat_id, x, y)

    def move_selection(self, dx: float, dy: float, record_history: bool = True) -> OperationResult:
        return self.selection.batch_move(
            self.selection.selected_ids, dx, dy, record_history=record_history
        )

    def update_seat(self, seat_id: str, label: str, rank_weight: int) -> OperationResult:
        return self.store.update_properties(seat_id, label, rank_weight)

    def toggle_pin(self, seat_id: str) -> OperationResult:
        return self.store.toggle_pinned(seat_id)

    def set_visible(self, seat_id: str, visible: bool) -> OperationResult:
        return self.store.set_visible(seat_id, visible)

    def set_zone(self, seat_ids: list[str], zone: str | None) -> OperationResult:
        return self.store.set_zone(seat_ids, zone)

    def remove_seat(self, seat_id: str) -> OperationResult:
        result = self.store.remove(seat_id)
        if result:
            self.selection.prune()
            self.synchronize()
        return result

    def delete_selected(self) -> OperationResult:
        result = self.selection.delete_selected()
        if result:
            self.synchronize()
        return result

    def copy(self) -> int:
        """Copy the current selection to the clipboard."""
        return self.selection.copy()

    def paste(self, cursor_x: float = 100, cursor_y: float = 100) -> OperationResult:
        return self.selection.paste(cursor_x, cursor_y)

    def undo(self) -> bool:
        """Undo the most recent layout mutation.

        Returns:
            True if something was undone
        """
        if not self.store.undo():
            return False
        self.selection.prune()
        self.synchronize()
        return True

    # --- assignment ---

    def assign_person(
        self, seat_id: str, person_id: str | None, swap: bool = False
    ) -> OperationResult:
        """Seat a person, clearing any other seat that holds them first.

        Args:
            seat_id: Target seat
            person_id: Person to seat, or None to empty the seat
            swap: If the target seat is occupied and the person came from another
                seat, move the displaced occupant to that seat

        Returns:
            OperationResult listing every seat whose occupant changed
        """
        seat = self.store.get(seat_id)
        if seat is None:
            return OperationResult.declined(DeclineReason.NOT_FOUND, f"Seat not found: {seat_id}")
        if person_id is None:
            return self.unassign(seat_id)
        if seat.is_shape:
            return OperationResult.declined(
                DeclineReason.INVALID_KIND, "Shapes cannot hold a person"
            )
        if seat.assigned_person_id == person_id:
            return OperationResult.ok([seat_id])

        previous = [s for s in self.store.find_by_occupant(person_id) if s.id != seat_id]
        displaced = seat.assigned_person_id

        self.store.checkpoint()
        changed = []
        for old in previous:
            self.store.assign(old.id, None, record_history=False)
            changed.append(old.id)
        if swap and displaced is not None and previous:
            self.store.assign(previous[0].id, displaced, record_history=False)
            logger.debug(f"Swapped {displaced} into seat {previous[0].id}")
        self.store.assign(seat_id, person_id, record_history=False)
        changed.append(seat_id)

        self.synchronize()
        return OperationResult.ok(changed)

    def drop_person(
        self, x: float, y: float, person_id: str, swap: bool = False
    ) -> OperationResult:
        """Seat a person on the seat under a layout point."""
        seat = self.store.seat_at(x, y)
        if seat is None:
            return OperationResult.declined(DeclineReason.NOT_FOUND, "No seat at this position")
        return self.assign_person(seat.id, person_id, swap=swap)

    def unassign(self, seat_id: str) -> OperationResult:
        result = self.store.unassign(seat_id)
        if result:
            self.synchronize()
        return result

    def reset_seating(self) -> OperationResult:
        """Clear every assignment and mark everyone unseated."""
        result = self.store.clear_all_assignments()
        self.synchronize()
        return result

    # --- ranking ---

    def arrange_by_importance(self) -> ArrangementResult:
        result = self.ranking.arrange_by_importance(self.roster.people)
        self.synchronize()
        return result

    def arrange_by_position(self) -> ArrangementResult:
        result = self.ranking.arrange_by_position(self.roster.people)
        self.synchronize()
        return result

    def start_sequence(self, start: int = 1) -> None:
        self.ranking.start_sequence(start)

    def apply_sequence(self, seat_id: str) -> OperationResult:
        return self.ranking.apply_sequence(seat_id)

    def stop_sequence(self) -> None:
        self.ranking.stop_sequence()

    def auto_rank(self) -> OperationResult:
        return self.ranking.auto_rank()

    # --- roster ---

    def add_person(self, name: str, **attrs) -> Person:
        return self.roster.add_person(name, **attrs)

    def import_people(self, people: list, apply_category_weights: bool = False) -> list[Person]:
        added = self.roster.add_people(people, apply_category_weights=apply_category_weights)
        self.synchronize()
        return added

    def remove_person(self, person_id: str) -> bool:
        return self.roster.remove_person(person_id)

    def synchronize(self) -> int:
        """Recompute seated flags from the current seat assignments."""
        return self.roster.synchronize(self.store.seats)

    def report(self) -> list[ReportRow]:
        return build_seating_report(self.store.seats, self.roster.people)

    # --- snapshots ---

    def export_snapshot(self, name: str = "") -> ProjectSnapshot:
        """Full seat and person lists for external persistence."""
        return ProjectSnapshot(
            name=name,
            virtual_width=self.config.virtual_width,
            virtual_height=self.config.virtual_height,
            seats=self.store.seats,
            people=self.roster.people,
        )

    def import_snapshot(self, snapshot: ProjectSnapshot) -> None:
        """Replace seats and people with a previously exported snapshot.

        Undo history, selection and sequencing mode are reset.
        """
        if (snapshot.virtual_width, snapshot.virtual_height) != (
            self.config.virtual_width,
            self.config.virtual_height,
        ):
            logger.warning(
                f"Snapshot layout size {snapshot.virtual_width}x{snapshot.virtual_height} "
                f"differs from session {self.config.virtual_width}x{self.config.virtual_height}"
            )
        self.store.replace(snapshot.seats)
        self.roster.replace(snapshot.people)
        self.selection.clear()
        self.ranking.stop_sequence()
        self.synchronize()
        logger.info(
            f"Loaded snapshot {snapshot.name!r}: {len(snapshot.seats)} objects, "
            f"{len(snapshot.people)} people"
        )

    def to_json(self, name: str = "") -> str:
        return self.export_snapshot(name).model_dump_json()

    def from_json(self, data: str) -> None:
        """Load a project from its JSON form.

        Raises:
            SnapshotError: If the data is not a valid project snapshot
        """
        try:
            snapshot = ProjectSnapshot.model_validate_json(data)
        except ValidationError as e:
            raise SnapshotError(f"Invalid project snapshot: {e}") from e
        self.import_snapshot(snapshot)

    def export_venue(self) -> str:
        """Layout-only JSON export (no people)."""
        return VenueSnapshot(seats=self.store.seats).model_dump_json()

    def import_venue(self, data: str) -> None:
        """Load a layout-only export; every assignment is cleared.

        Raises:
            SnapshotError: If the data is not a valid venue snapshot
        """
        try:
            venue = VenueSnapshot.model_validate_json(data)
        except ValidationError as e:
            raise SnapshotError(f"Invalid venue snapshot: {e}") from e

        seats = [s.model_copy(update={"assigned_person_id": None}) for s in venue.seats]
        self.store.replace(seats)
        self.selection.clear()
        self.synchronize()
        logger.info(f"Loaded venue with {len(seats)} objects")

    def save(self, name: str) -> None:
        """Store the project in the configured backend."""
        self.backend.set(name, self.to_json(name))
        logger.info(f"Saved project {name!r}")

    def load(self, name: str) -> bool:
        """Load a project from the configured backend.

        Returns:
            True if found and loaded, False if the backend has no such project

        Raises:
            SnapshotError: If the stored data is not a valid project snapshot
        """
        data = self.backend.get(name)
        if data is None:
            logger.info(f"No stored project named {name!r}")
            return False
        self.from_json(data)
        return True

    def _snap(self, x: float, y: float, snap: bool) -> tuple[float, float]:
        if not snap:
            return x, y
        grid = self.config.grid_size
        return snap_to_grid(x, grid), snap_to_grid(y, grid)
