"""ReminderRegistry — the UI-owned collection of schedulable entities."""

from __future__ import annotations

import dataclasses
import logging
import threading
from enum import Enum
from typing import TYPE_CHECKING, Any, Generic, TypeVar

from reminder_engine.models import Appointment, AppointmentStatus
from reminder_engine.timewindow import parse_date, parse_time

if TYPE_CHECKING:
    from collections.abc import Callable, Iterable

logger = logging.getLogger(__name__)

T = TypeVar("T")


class RegistryError(Exception):
    """Base class for registry misuse."""


class DuplicateEntityError(RegistryError):
    """Raised when adding an entity whose id is already registered."""


class EntityNotFoundError(RegistryError, KeyError):
    """Raised when an entity id is not in the registry."""


class ReminderRegistry(Generic[T]):
    """Insertion-ordered, id-keyed collection of appointments or calendar events.

    The surrounding UI layer is the only writer. Schedulers read through
    ``snapshot()``, which copies the current entities under a lock so that a
    tick never observes a half-applied mutation.
    """

    def __init__(self, entities: Iterable[T] | None = None) -> None:
        self._entities: dict[str, T] = {}
        self._lock = threading.Lock()
        for entity in entities or ():
            self.add(entity)

    @classmethod
    def from_records(
        cls,
        records: Iterable[dict[str, Any]],
        factory: Callable[[dict[str, Any]], T],
    ) -> ReminderRegistry[T]:
        """Build a registry from raw records (e.g. ``Appointment.from_dict``)."""
        return cls(factory(record) for record in records)

    # -- Reads -----------------------------------------------------------------

    def get(self, entity_id: str) -> T | None:
        with self._lock:
            return self._entities.get(entity_id)

    def snapshot(self) -> list[T]:
        """Return a copy of the current entities in insertion order."""
        with self._lock:
            return list(self._entities.values())

    def __len__(self) -> int:
        with self._lock:
            return len(self._entities)

    def __contains__(self, entity_id: object) -> bool:
        with self._lock:
            return entity_id in self._entities

    # -- Writes ----------------------------------------------------------------

    def add(self, entity: T) -> T:
        """Register a new entity. Raises DuplicateEntityError on id reuse."""
        entity_id = entity.id  # type: ignore[attr-defined]
        with self._lock:
            if entity_id in self._entities:
                msg = f"Entity '{entity_id}' is already registered"
                raise DuplicateEntityError(msg)
            self._entities[entity_id] = entity
        logger.debug("Registered entity %s", entity_id)
        return entity

    def update(self, entity_id: str, **changes: Any) -> T:
        """Replace an entity with a copy carrying *changes*. The id cannot change.

        ``date`` and ``time`` accept the UI's ``YYYY-MM-DD`` and ``HH:mm``
        strings, and ``status``/``type`` accept enum values. Invalid values
        raise ValueError and leave the entity unchanged.
        """
        if "id" in changes and changes["id"] != entity_id:
            msg = f"Cannot change id of entity '{entity_id}'"
            raise RegistryError(msg)
        if "date" in changes:
            changes["date"] = parse_date(changes["date"])
        if "time" in changes:
            changes["time"] = parse_time(changes["time"])
        with self._lock:
            current = self._entities.get(entity_id)
            if current is None:
                msg = f"Entity '{entity_id}' is not registered"
                raise EntityNotFoundError(msg)
            for field in ("status", "type"):
                existing = getattr(current, field, None)
                if field in changes and isinstance(existing, Enum):
                    changes[field] = type(existing)(changes[field])
            updated = dataclasses.replace(current, **changes)
            self._entities[entity_id] = updated
        logger.debug("Updated entity %s: %s", entity_id, ", ".join(sorted(changes)))
        return updated

    def remove(self, entity_id: str) -> T:
        """Remove and return an entity. Raises EntityNotFoundError if absent."""
        with self._lock:
            entity = self._entities.pop(entity_id, None)
        if entity is None:
            msg = f"Entity '{entity_id}' is not registered"
            raise EntityNotFoundError(msg)
        logger.debug("Removed entity %s", entity_id)
        return entity

    # -- Appointment helpers ---------------------------------------------------

    def set_reminder_enabled(self, entity_id: str, enabled: bool) -> Appointment:
        """Toggle an appointment's reminder switch."""
        return self._update_appointment(entity_id, reminder_enabled=enabled)

    def set_status(self, entity_id: str, status: AppointmentStatus | str) -> Appointment:
        """Move an appointment to Scheduled, Completed or Cancelled."""
        return self._update_appointment(entity_id, status=AppointmentStatus(status))

    def _update_appointment(self, entity_id: str, **changes: Any) -> Appointment:
        current = self.get(entity_id)
        if current is not None and not isinstance(current, Appointment):
            msg = f"Entity '{entity_id}' is not an appointment"
            raise RegistryError(msg)
        return self.update(entity_id, **changes)  # type: ignore[return-value]
