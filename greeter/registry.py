"""In-memory identity registry for Greeter.

Maps session identifiers to ``Person`` records for the lifetime of the
process. Entries are never updated or removed.
"""

from __future__ import annotations

import logging
import uuid
from threading import Lock
from typing import Callable

from greeter.models import Person

logger = logging.getLogger(__name__)


def new_identifier() -> str:
    """Return a random 128-bit identifier string."""
    return str(uuid.uuid4())


class PersonRegistry:
    """Append-only, thread-safe mapping of identifier to ``Person``."""

    def __init__(self, *, id_factory: Callable[[], str] | None = None) -> None:
        self._new_id = id_factory or new_identifier
        self._people: dict[str, Person] = {}
        self._lock = Lock()

    def add(self, person: Person) -> None:
        """Insert a person keyed by its identifier.

        Args:
            person: Record to store. Callers must use a fresh identifier.

        Returns:
            None.
        """
        with self._lock:
            self._people[person.id] = person

    def create(self, name: str) -> Person:
        """Build and store a person under a never-used identifier.

        Args:
            name: Already validated display name.

        Returns:
            The stored ``Person``.
        """
        with self._lock:
            person_id = self._new_id()
            while person_id in self._people:
                logger.warning(f"Identifier collision for {person_id}; regenerating.")
                person_id = self._new_id()
            person = Person(id=person_id, name=name)
            self._people[person_id] = person
        return person

    def name_of(self, person_id: str | None) -> str:
        """Return the name stored for an identifier, or "" when unknown."""
        if not person_id:
            return ""
        with self._lock:
            person = self._people.get(person_id)
        return person.name if person else ""

    def __contains__(self, person_id: object) -> bool:
        with self._lock:
            return person_id in self._people

    def __len__(self) -> int:
        with self._lock:
            return len(self._people)
