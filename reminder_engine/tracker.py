"""NotifiedSet — in-memory record of entity ids that already fired."""

from __future__ import annotations

import logging
import threading

logger = logging.getLogger(__name__)


class NotifiedSet:
    """Remembers which entity ids have fired for the lifetime of one scheduler.

    Entries are only added by the scheduler after a successful dispatch and
    are never persisted, so a restart starts from an empty set.
    """

    def __init__(self) -> None:
        self._ids: set[str] = set()
        self._lock = threading.Lock()

    def has_fired(self, entity_id: str) -> bool:
        with self._lock:
            return entity_id in self._ids

    def mark_fired(self, entity_id: str) -> None:
        """Record *entity_id* as fired. Marking twice is a no-op."""
        with self._lock:
            self._ids.add(entity_id)

    def discard(self, entity_id: str) -> bool:
        """Forget *entity_id* (deletion cleanup only). Returns True if it was present."""
        with self._lock:
            if entity_id not in self._ids:
                return False
            self._ids.remove(entity_id)
        logger.debug("Forgot fired entity %s", entity_id)
        return True

    def __contains__(self, entity_id: object) -> bool:
        with self._lock:
            return entity_id in self._ids

    def __len__(self) -> int:
        with self._lock:
            return len(self._ids)
