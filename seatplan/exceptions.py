"""Custom exceptions for seatplan package."""


class SeatPlanError(Exception):
    """Base exception for all seatplan errors."""

    pass


class PlacementError(SeatPlanError):
    """Base exception for rejected placements."""

    pass


class OverlapError(PlacementError):
    """Raised when a seat would overlap another visible seat."""

    pass


class OutOfBoundsError(PlacementError):
    """Raised when an object would leave the virtual layout bounds."""

    pass


class SeatNotFoundError(SeatPlanError):
    """Raised when a seat id does not exist in the layout."""

    pass


class SequenceError(SeatPlanError):
    """Raised when a ranking sequence action is used outside sequencing mode."""

    pass


class SnapshotError(SeatPlanError):
    """Raised when a snapshot blob cannot be parsed or validated."""

    pass


class ConfigurationError(SeatPlanError):
    """Raised when layout configuration is invalid."""

    pass
