"""Pydantic models for exported layout snapshots."""

from pydantic import BaseModel, Field

from .layout import Seat
from .roster import Person

SNAPSHOT_VERSION = "2.1"


class ProjectSnapshot(BaseModel):
    """Full export of a seating project: seats and people in order."""

    version: str = SNAPSHOT_VERSION
    name: str = ""
    virtual_width: float = 3200
    virtual_height: float = 2400
    seats: list[Seat] = Field(default_factory=list)
    people: list[Person] = Field(default_factory=list)

    model_config = {"frozen": True}


class VenueSnapshot(BaseModel):
    """Venue-only export: the layout without people."""

    version: str = SNAPSHOT_VERSION
    seats: list[Seat] = Field(default_factory=list)

    model_config = {"frozen": True}
