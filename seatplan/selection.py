"""Multi-object selection, batch transform and clipboard."""

import logging
from collections.abc import Iterable

from .geometry import bounding_box, collides, within_bounds
from .models import DeclineReason, OperationResult, Seat
from .store import EntityStore
from .utils import new_id

logger = logging.getLogger(__name__)

DEFAULT_PASTE_POSITION = (100, 100)


class SelectionManager:
    """Tracks selected seat ids and applies transforms to them.

    The selection keeps insertion order and never holds duplicates. Ids are
    not validated on selection; operations skip ids that no longer exist.
    """

    def __init__(self, store: EntityStore):
        self.store = store
        self._selected: list[str] = []
        self._clipboard: list[Seat] = []

    # --- selection set ---

    @property
    def selected_ids(self) -> list[str]:
        return list(self._selected)

    @property
    def selected_seats(self) -> list[Seat]:
        wanted = set(self._selected)
        return [s for s in self.store.seats if s.id in wanted]

    @property
    def clipboard(self) -> list[Seat]:
        return list(self._clipboard)

    def is_selected(self, seat_id: str) -> bool:
        return seat_id in self._selected

    def select(self, seat_ids: Iterable[str]) -> None:
        """Replace the selection."""
        self._selected = list(dict.fromkeys(seat_ids))

    def add_to_selection(self, seat_ids: Iterable[str]) -> None:
        """Union the given ids into the selection."""
        self._selected = list(dict.fromkeys([*self._selected, *seat_ids]))

    def clear(self) -> None:
        self._selected = []

    def prune(self) -> None:
        """Drop selected ids that no longer exist in the store."""
        self._selected = [seat_id for seat_id in self._selected if seat_id in self.store]

    # --- transforms ---

    def batch_move(
        self, seat_ids: Iterable[str], dx: float, dy: float, record_history: bool = True
    ) -> OperationResult:
        """Translate the given objects together.

        Collisions are not checked here; a drag collaborator validates the
        actively dragged object with ``EntityStore.move`` on commit. Pass
        ``record_history=False`` for intermediate drag steps after the first.
        """
        return self.store.move_many(seat_ids, dx, dy, record_history=record_history)

    def delete_selected(self) -> OperationResult:
        """Remove every selected object and clear the selection."""
        if not self._selected:
            return OperationResult.declined(DeclineReason.EMPTY, "Nothing selected")
        result = self.store.remove_many(self._selected)
        self._selected = []
        return result

    # --- clipboard ---

    def copy(self, seat_ids: Iterable[str] | None = None) -> int:
        """Deep-copy objects into the clipboard.

        Args:
            seat_ids: Ids to copy (default: the current selection)

        Returns:
            Number of objects copied. The clipboard is left untouched when 0.
        """
        wanted = set(self._selected if seat_ids is None else seat_ids)
        copied = [s.model_copy(deep=True) for s in self.store.seats if s.id in wanted]
        if copied:
            self._clipboard = copied
            logger.debug(f"Copied {len(copied)} objects to clipboard")
        return len(copied)

    def paste(
        self,
        cursor_x: float = DEFAULT_PASTE_POSITION[0],
        cursor_y: float = DEFAULT_PASTE_POSITION[1],
    ) -> OperationResult:
        """Paste the clipboard with its bounding-box origin at the cursor.

        Pasted objects get fresh ids and lose their occupant and pin. While the
        group overlaps a visible seat it is shifted diagonally by the configured
        offset, up to the configured number of attempts. Objects still outside
        the layout afterwards are dropped. Successful pastes become the new
        selection.

        Returns:
            OperationResult with the pasted ids, or declined when the clipboard
            is empty, no free spot was found, or nothing fits in the layout
        """
        if not self._clipboard:
            return OperationResult.declined(DeclineReason.EMPTY, "Clipboard is empty")

        config = self.store.config
        origin = bounding_box(s.rect for s in self._clipboard)
        dx, dy = cursor_x - origin.x, cursor_y - origin.y

        pasted = [
            seat.model_copy(
                update={
                    "id": new_id(seat.kind.value),
                    "x": seat.x + dx,
                    "y": seat.y + dy,
                    "assigned_person_id": None,
                    "is_pinned": False,
                }
            )
            for seat in self._clipboard
        ]

        existing = self.store.seats
        attempts = 0
        while self._overlaps(pasted, existing):
            if attempts >= config.paste_attempts:
                logger.debug(f"Declined paste at ({cursor_x}, {cursor_y}): no free spot")
                return OperationResult.declined(
                    DeclineReason.OVERLAP, "No free position found for the pasted objects"
                )
            step = config.paste_offset
            pasted = [s.model_copy(update={"x": s.x + step, "y": s.y + step}) for s in pasted]
            attempts += 1

        pasted = [
            s for s in pasted if within_bounds(s.rect, config.virtual_width, config.virtual_height)
        ]
        if not pasted:
            logger.debug(f"Declined paste at ({cursor_x}, {cursor_y}): out of bounds")
            return OperationResult.declined(
                DeclineReason.OUT_OF_BOUNDS, "Every pasted object is outside the layout"
            )

        result = self.store.insert(pasted)
        self._selected = list(result.seat_ids)
        logger.debug(f"Pasted {len(pasted)} objects after {attempts} shifts")
        return result

    @staticmethod
    def _overlaps(pasted: list[Seat], existing: list[Seat]) -> bool:
        return any(
            collides(s.rect, existing) for s in pasted if s.is_visible and not s.is_shape
        )
