"""Pydantic models for people and categories."""

from pydantic import BaseModel, Field


class Person(BaseModel):
    """Candidate occupant of a seat."""

    id: str
    name: str
    title: str = ""
    organization: str = ""
    category: str = ""
    rank_score: int = Field(default=0, description="Importance, higher is more important")
    color: str | None = None
    note: str | None = None
    is_seated: bool = Field(
        default=False, description="Derived from seat assignments, rewritten on synchronize"
    )

    model_config = {"frozen": True}


class Category(BaseModel):
    """Catalog entry mapping a category label to a weight and colors."""

    id: str
    label: str
    weight: int = 0
    color: str = Field(default="#94a3b8", description="Zone color on the layout")
    person_color: str = Field(default="#ffffff", description="Background for person cards")

    model_config = {"frozen": True}
