"""Result models returned by layout operations."""

from enum import Enum

from pydantic import BaseModel, Field

from ..exceptions import (
    OutOfBoundsError,
    OverlapError,
    SeatNotFoundError,
    SeatPlanError,
    SequenceError,
)


class DeclineReason(str, Enum):
    """Why an operation was declined."""

    OVERLAP = "overlap"
    OUT_OF_BOUNDS = "out_of_bounds"
    NOT_FOUND = "not_found"
    EMPTY = "empty"
    INVALID_KIND = "invalid_kind"
    NOT_SEQUENCING = "not_sequencing"


_REASON_ERRORS: dict[DeclineReason, type[SeatPlanError]] = {
    DeclineReason.OVERLAP: OverlapError,
    DeclineReason.OUT_OF_BOUNDS: OutOfBoundsError,
    DeclineReason.NOT_FOUND: SeatNotFoundError,
    DeclineReason.NOT_SEQUENCING: SequenceError,
}


class OperationResult(BaseModel):
    """Outcome of a layout operation.

    Operations never raise for rejected placements; they return a declined
    result instead. The result is truthy when the operation was applied.
    """

    success: bool = Field(description="Whether the operation was applied")
    reason: DeclineReason | None = Field(default=None, description="Reason when declined")
    seat_ids: list[str] = Field(default_factory=list, description="Ids created or affected")
    message: str = Field(default="", description="Human readable detail")

    model_config = {"frozen": True}

    def __bool__(self) -> bool:
        return self.success

    @classmethod
    def ok(cls, seat_ids: list[str] | None = None, message: str = "") -> "OperationResult":
        return cls(success=True, seat_ids=seat_ids or [], message=message)

    @classmethod
    def declined(cls, reason: DeclineReason, message: str = "") -> "OperationResult":
        return cls(success=False, reason=reason, message=message)

    def raise_for_status(self) -> "OperationResult":
        """Raise the matching exception if the operation was declined.

        Returns:
            The result itself when successful

        Raises:
            PlacementError: On overlap or out-of-bounds declines
            SeatNotFoundError: When the target did not exist
            SequenceError: When sequencing mode was not active
            SeatPlanError: For any other decline
        """
        if self.success:
            return self
        error_cls = _REASON_ERRORS.get(self.reason, SeatPlanError)
        raise error_cls(self.message or f"Operation declined: {self.reason}")


class ArrangementResult(BaseModel):
    """Outcome of an automatic arrangement pass."""

    assignments: dict[str, str] = Field(
        default_factory=dict, description="Seat id to person id, in zip order"
    )
    unseated_person_ids: list[str] = Field(default_factory=list)
    empty_seat_ids: list[str] = Field(default_factory=list)

    model_config = {"frozen": True}

    @property
    def assigned_count(self) -> int:
        return len(self.assignments)


class ReportRow(BaseModel):
    """One occupied seat in a seating report."""

    seat_id: str
    seat_label: str
    person_id: str
    person_name: str
    person_title: str = ""
    person_organization: str = ""
    category: str = ""

    model_config = {"frozen": True}
