"""Pydantic models for seatplan.

You can import from specific modules:
    from seatplan.models.layout import Seat, SeatKind
    from seatplan.models.roster import Person

Or from the main models module:
    from seatplan.models import Seat, Person, OperationResult
"""

# Layout models
from .layout import Rect, Seat, SeatKind, ShapeType

# Result models
from .results import ArrangementResult, DeclineReason, OperationResult, ReportRow

# Roster models
from .roster import Category, Person

# Snapshot models
from .snapshot import SNAPSHOT_VERSION, ProjectSnapshot, VenueSnapshot

__all__ = [
    # Layout models
    "Rect",
    "Seat",
    "SeatKind",
    "ShapeType",
    # Roster models
    "Person",
    "Category",
    # Result models
    "OperationResult",
    "DeclineReason",
    "ArrangementResult",
    "ReportRow",
    # Snapshot models
    "ProjectSnapshot",
    "VenueSnapshot",
    "SNAPSHOT_VERSION",
]
