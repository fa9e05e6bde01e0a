"""Roster store and seated-flag synchronization."""

import logging
from collections.abc import Iterable

from .catalog import CategoryCatalog
from .models import Person, Seat
from .utils import new_id

logger = logging.getLogger(__name__)

# Fields callers may not set directly
_PROTECTED_FIELDS = {"id", "is_seated"}


class RosterStore:
    """Owns the list of people.

    ``Person.is_seated`` is derived state: it is only ever rewritten by
    ``synchronize()`` from the current seat assignments.
    """

    def __init__(self, catalog: CategoryCatalog | None = None):
        """Initialize roster.

        Args:
            catalog: Category catalog used for default rank scores
                (default: CategoryCatalog with the built-in presets)
        """
        self.catalog = catalog or CategoryCatalog()
        self._people: list[Person] = []

    @property
    def people(self) -> list[Person]:
        return list(self._people)

    @property
    def seated(self) -> list[Person]:
        return [p for p in self._people if p.is_seated]

    @property
    def unseated(self) -> list[Person]:
        return [p for p in self._people if not p.is_seated]

    def get(self, person_id: str) -> Person | None:
        for person in self._people:
            if person.id == person_id:
                return person
        return None

    def __len__(self) -> int:
        return len(self._people)

    def __iter__(self):
        return iter(list(self._people))

    def add_person(
        self,
        name: str,
        title: str = "",
        organization: str = "",
        category: str = "",
        rank_score: int | None = None,
        note: str | None = None,
    ) -> Person:
        """Add one person.

        When ``rank_score`` is omitted it defaults to the catalog weight of the
        category (0 for an unknown category).
        """
        if rank_score is None:
            rank_score = self.catalog.weight_for(category)

        person = Person(
            id=new_id("person"),
            name=name,
            title=title,
            organization=organization,
            category=category,
            rank_score=rank_score,
            color=self._color_for(category),
            note=note,
        )
        self._people.append(person)
        logger.debug(f"Added person {person.id} ({name}, score {rank_score})")
        return person

    def add_people(
        self, people: Iterable[Person | dict], apply_category_weights: bool = False
    ) -> list[Person]:
        """Batch import people.

        Args:
            people: Person objects or dicts of Person fields (``id`` optional)
            apply_category_weights: Replace each rank score with the catalog
                weight of the person's category when the category is known

        Returns:
            The added people, in input order
        """
        added = []
        for item in people:
            data = item.model_dump() if isinstance(item, Person) else dict(item)
            data.setdefault("id", new_id("person"))
            data["is_seated"] = False

            category = data.get("category", "")
            if apply_category_weights and self.catalog.get_by_label(category):
                data["rank_score"] = self.catalog.weight_for(category)
            if data.get("color") is None:
                data["color"] = self._color_for(category)

            added.append(Person.model_validate(data))

        self._people.extend(added)
        logger.info(f"Imported {len(added)} people")
        return added

    def update_person(self, person_id: str, **changes) -> Person | None:
        """Update attributes of a person.

        ``id`` and ``is_seated`` cannot be changed this way; such an update is
        declined and nothing changes.

        Returns:
            The updated person, or None if the id is unknown or the update was declined
        """
        blocked = _PROTECTED_FIELDS & changes.keys()
        if blocked:
            logger.debug(f"Declined update of {person_id}: protected fields {sorted(blocked)}")
            return None

        for i, person in enumerate(self._people):
            if person.id == person_id:
                self._people[i] = person.model_copy(update=changes)
                return self._people[i]
        return None

    def remove_person(self, person_id: str) -> bool:
        """Remove a person. Seats still referring to the id are left as they are."""
        before = len(self._people)
        self._people = [p for p in self._people if p.id != person_id]
        return len(self._people) < before

    def replace(self, people: list[Person]) -> None:
        """Replace the whole list (external load)."""
        self._people = [p.model_copy(deep=True) for p in people]
        logger.debug(f"Replaced roster with {len(people)} people")

    def synchronize(self, seats: Iterable[Seat]) -> int:
        """Recompute every person's seated flag from seat assignments.

        Args:
            seats: Current seats of the layout

        Returns:
            Number of people marked as seated
        """
        seated_ids = {s.assigned_person_id for s in seats if s.assigned_person_id is not None}
        synced = []
        for person in self._people:
            seated = person.id in seated_ids
            if person.is_seated != seated:
                person = person.model_copy(update={"is_seated": seated})
            synced.append(person)
        self._people = synced
        count = sum(1 for p in self._people if p.is_seated)
        logger.debug(f"Synchronized roster: {count}/{len(self._people)} seated")
        return count

    def _color_for(self, category: str) -> str | None:
        found = self.catalog.get_by_label(category)
        return found.person_color if found else None
