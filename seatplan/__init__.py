"""seatplan - Seat layout editing and roster assignment engine."""

__version__ = "0.1.0"

# Components
from .catalog import CategoryCatalog
from .config import LayoutConfig

# Exceptions
from .exceptions import (
    ConfigurationError,
    OutOfBoundsError,
    OverlapError,
    PlacementError,
    SeatNotFoundError,
    SeatPlanError,
    SequenceError,
    SnapshotError,
)

# Geometry
from .geometry import bounding_box, collides, rects_overlap, snap_to_grid, within_bounds
from .history import HistoryManager

# Models
from .models import (
    ArrangementResult,
    Category,
    DeclineReason,
    OperationResult,
    Person,
    ProjectSnapshot,
    Rect,
    ReportRow,
    Seat,
    SeatKind,
    ShapeType,
    VenueSnapshot,
)
from .ranking import (
    RankingEngine,
    sort_people_by_score,
    sort_seats_by_importance,
    sort_seats_by_position,
)
from .report import build_seating_report
from .roster import RosterStore
from .selection import SelectionManager

# Main entry point
from .session import SeatingSession

# Storage
from .storage import FileBackend, MemoryBackend, NullBackend, SnapshotBackend
from .store import EntityStore

__all__ = [
    # Version
    "__version__",
    # Main entry point
    "SeatingSession",
    # Components
    "EntityStore",
    "HistoryManager",
    "SelectionManager",
    "RankingEngine",
    "RosterStore",
    "CategoryCatalog",
    "LayoutConfig",
    # Storage
    "SnapshotBackend",
    "NullBackend",
    "MemoryBackend",
    "FileBackend",
    # Models
    "Seat",
    "SeatKind",
    "ShapeType",
    "Rect",
    "Person",
    "Category",
    "OperationResult",
    "DeclineReason",
    "ArrangementResult",
    "ReportRow",
    "ProjectSnapshot",
    "VenueSnapshot",
    # Exceptions
    "SeatPlanError",
    "PlacementError",
    "OverlapError",
    "OutOfBoundsError",
    "SeatNotFoundError",
    "SequenceError",
    "SnapshotError",
    "ConfigurationError",
    # Functions
    "rects_overlap",
    "within_bounds",
    "bounding_box",
    "collides",
    "snap_to_grid",
    "sort_seats_by_importance",
    "sort_seats_by_position",
    "sort_people_by_score",
    "build_seating_report",
]
