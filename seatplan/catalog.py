"""Category catalog: label to weight/color lookup."""

import logging

from .models import Category
from .utils import new_id

logger = logging.getLogger(__name__)

DEFAULT_WEIGHT = 0
DEFAULT_COLOR = "#94a3b8"
DEFAULT_PERSON_COLOR = "#ffffff"

# Rotated over the presets
DEFAULT_COLORS = [
    "#ef4444",
    "#f97316",
    "#f59e0b",
    "#84cc16",
    "#10b981",
    "#06b6d4",
    "#3b82f6",
    "#6366f1",
    "#8b5cf6",
    "#d946ef",
    "#ec4899",
    "#f43f5e",
]

CATEGORY_PRESETS = [
    ("Heads of Government", 95),
    ("Foreign Guests and Interpreters", 90),
    ("Legislators", 85),
    ("Ministers", 83),
    ("Mayors", 80),
    ("Corporate Representatives", 78),
    ("Government Staff", 75),
    ("Forum Hosts", 70),
    ("Forum Panelists", 70),
    ("Ministry Staff", 60),
    ("City Staff", 55),
    ("Youth Program Team", 53),
    ("Grant Program Team", 52),
    ("Regional Program Team", 51),
    ("Other Teams", 50),
    ("Land Planning Office", 40),
    ("Organizers", 30),
    ("Event Staff", 0),
]


def default_categories() -> list[Category]:
    """Preset categories with rotating zone colors."""
    return [
        Category(
            id=f"cat-{index}",
            label=label,
            weight=weight,
            color=DEFAULT_COLORS[index % len(DEFAULT_COLORS)],
        )
        for index, (label, weight) in enumerate(CATEGORY_PRESETS)
    ]


class CategoryCatalog:
    """Categories keyed by their free-text label.

    People and seats refer to categories by label only. Lookups for an unknown
    label fall back to default weight and colors instead of failing.
    """

    def __init__(self, categories: list[Category] | None = None):
        """Initialize catalog.

        Args:
            categories: Initial categories (default: the built-in presets)
        """
        self._categories = list(default_categories() if categories is None else categories)

    @property
    def categories(self) -> list[Category]:
        return list(self._categories)

    def get_by_label(self, label: str) -> Category | None:
        for category in self._categories:
            if category.label == label:
                return category
        return None

    def weight_for(self, label: str, default: int = DEFAULT_WEIGHT) -> int:
        category = self.get_by_label(label)
        return category.weight if category else default

    def color_for(self, label: str, default: str = DEFAULT_COLOR) -> str:
        category = self.get_by_label(label)
        return category.color if category else default

    def person_color_for(self, label: str, default: str = DEFAULT_PERSON_COLOR) -> str:
        category = self.get_by_label(label)
        return category.person_color if category else default

    def add(
        self,
        label: str,
        weight: int,
        color: str = DEFAULT_COLOR,
        person_color: str = DEFAULT_PERSON_COLOR,
    ) -> Category:
        category = Category(
            id=new_id("cat"), label=label, weight=weight, color=color, person_color=person_color
        )
        self._categories.append(category)
        logger.debug(f"Added category {label!r} (weight {weight})")
        return category

    def update(self, category_id: str, **changes) -> Category | None:
        """Update fields of a category.

        Returns:
            The updated category, or None if the id is unknown
        """
        for i, category in enumerate(self._categories):
            if category.id == category_id:
                self._categories[i] = category.model_copy(update=changes)
                return self._categories[i]
        return None

    def remove(self, category_id: str) -> bool:
        before = len(self._categories)
        self._categories = [c for c in self._categories if c.id != category_id]
        return len(self._categories) < before
