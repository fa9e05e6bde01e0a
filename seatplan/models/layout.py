"""Pydantic models for layout objects (seats and shapes)."""

from enum import Enum

from pydantic import BaseModel, Field


class SeatKind(str, Enum):
    """Kind of placeable object."""

    SEAT = "seat"
    SHAPE = "shape"


class ShapeType(str, Enum):
    """Outline of a shape object."""

    RECT = "rect"
    CIRCLE = "circle"


class Rect(BaseModel):
    """Axis-aligned rectangle anchored at its top-left corner."""

    x: float
    y: float
    width: float
    height: float

    model_config = {"frozen": True}

    @property
    def right(self) -> float:
        return self.x + self.width

    @property
    def bottom(self) -> float:
        return self.y + self.height

    def translate(self, dx: float, dy: float) -> "Rect":
        """Return a copy moved by (dx, dy)."""
        return Rect(x=self.x + dx, y=self.y + dy, width=self.width, height=self.height)


class Seat(BaseModel):
    """Placeable object on the layout.

    A seat of kind ``SEAT`` can hold one person. A ``SHAPE`` (stage, obstacle)
    is never assignable and never takes part in collision checks.
    """

    id: str = Field(description="Unique identifier, stable for the object's lifetime")
    x: float = Field(description="Top-left X coordinate")
    y: float = Field(description="Top-left Y coordinate")
    width: float = Field(default=100, gt=0, description="Footprint width")
    height: float = Field(default=150, gt=0, description="Footprint height")
    kind: SeatKind = Field(default=SeatKind.SEAT, description="Seat or shape")
    label: str = Field(default="", description="Display code shown to users")
    rank_weight: int = Field(default=0, description="Priority, lower is more important")
    is_pinned: bool = Field(default=False, description="Excluded from automatic arrangement")
    assigned_person_id: str | None = Field(default=None, description="Occupant person id")
    is_visible: bool = Field(default=True, description="Hidden objects are ignored")
    zone: str | None = Field(default=None, description="Presentation zone/category tag")
    shape_type: ShapeType | None = Field(default=None, description="Outline for shapes")

    model_config = {"frozen": True}

    @property
    def rect(self) -> Rect:
        """Bounding box of the full footprint."""
        return Rect(x=self.x, y=self.y, width=self.width, height=self.height)

    @property
    def center_x(self) -> float:
        return self.x + self.width / 2

    @property
    def is_shape(self) -> bool:
        return self.kind == SeatKind.SHAPE

    @property
    def is_occupied(self) -> bool:
        """Check if a person is assigned to this seat."""
        return self.assigned_person_id is not None
