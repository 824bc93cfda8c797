"""Eligibility policies — decide which entities fire and what the alert says.

Two policies are provided:

- ``LeadTimePolicy`` fires once while an appointment is inside its lead
  window (``0 < due - now <= lead_time_minutes``). The window is wide relative
  to the poll interval, so a late or skipped tick still fires as long as one
  tick lands inside it.
- ``ExactMinutePolicy`` fires a calendar event when the current minute equals
  its start minute. A tick that misses that minute never fires the event.

``evaluate`` applies a policy to a snapshot of entities. It has no side
effects: dispatching and marking ids as fired belong to the scheduler.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import TYPE_CHECKING, Any, Protocol, runtime_checkable

from reminder_engine.models import AppointmentStatus
from reminder_engine.timewindow import (
    due_instant,
    minutes_until,
    round_minutes,
    truncate_to_minute,
)

if TYPE_CHECKING:
    from collections.abc import Iterable
    from datetime import datetime

    from reminder_engine.tracker import NotifiedSet

logger = logging.getLogger(__name__)

DEFAULT_LEAD_TIME_MINUTES = 15


@dataclass(frozen=True)
class DueReminder:
    """An entity that is due to fire, with its rendered alert."""

    entity: Any
    title: str
    body: str

    @property
    def entity_id(self) -> str:
        return self.entity.id


@runtime_checkable
class EligibilityPolicy(Protocol):
    """Predicate + message renderer pair used by a ReminderScheduler."""

    @property
    def name(self) -> str:
        ...

    def is_eligible(self, entity: Any, now: datetime, notified: NotifiedSet) -> bool:
        """Return True if *entity* should fire at *now*."""
        ...

    def render_message(self, entity: Any, now: datetime) -> tuple[str, str]:
        """Return the ``(title, body)`` of the alert for *entity*."""
        ...


class LeadTimePolicy:
    """Advance warning for scheduled appointments with reminders enabled."""

    def __init__(self, lead_time_minutes: int = DEFAULT_LEAD_TIME_MINUTES) -> None:
        if lead_time_minutes <= 0:
            msg = f"lead_time_minutes must be positive, got {lead_time_minutes}"
            raise ValueError(msg)
        self._lead_time_minutes = lead_time_minutes

    @property
    def name(self) -> str:
        return "lead_time"

    @property
    def lead_time_minutes(self) -> int:
        return self._lead_time_minutes

    def is_eligible(self, entity: Any, now: datetime, notified: NotifiedSet) -> bool:
        if not entity.reminder_enabled:
            return False
        if entity.status != AppointmentStatus.SCHEDULED:
            return False
        if notified.has_fired(entity.id):
            return False
        if entity.due_time is None:
            logger.debug("Skipping %s: no time of day", entity.id)
            return False
        remaining = self._minutes_until_due(entity, now)
        return 0 < remaining <= self._lead_time_minutes

    def render_message(self, entity: Any, now: datetime) -> tuple[str, str]:
        minutes = round_minutes(self._minutes_until_due(entity, now))
        return (
            f"Upcoming Appointment: {entity.title}",
            f"With {entity.client_name} in {minutes} minutes.",
        )

    def _minutes_until_due(self, entity: Any, now: datetime) -> float:
        due = due_instant(entity.due_date, entity.due_time, now.tzinfo)
        return minutes_until(due, now)


class ExactMinutePolicy:
    """Fires a calendar event in the minute it starts."""

    @property
    def name(self) -> str:
        return "exact_minute"

    def is_eligible(self, entity: Any, now: datetime, notified: NotifiedSet) -> bool:
        if notified.has_fired(entity.id):
            return False
        if entity.due_time is None:
            logger.debug("Skipping %s: no time of day", entity.id)
            return False
        current = truncate_to_minute(now)
        due = entity.due_time
        return (
            entity.due_date == current.date()
            and due.hour == current.hour
            and due.minute == current.minute
        )

    def render_message(self, entity: Any, now: datetime) -> tuple[str, str]:
        kind = getattr(entity.type, "value", entity.type)
        body = f"{kind} is starting now."
        if entity.description:
            body = f"{body}\n{entity.description}"
        return f"Reminder: {entity.title}", body


def evaluate(
    policy: EligibilityPolicy,
    entities: Iterable[Any],
    now: datetime,
    notified: NotifiedSet,
) -> list[DueReminder]:
    """Return the entities due to fire at *now*, in iteration order.

    An entity that cannot be evaluated is logged and skipped so it never
    blocks the rest of the snapshot.
    """
    due: list[DueReminder] = []
    for entity in entities:
        try:
            if not policy.is_eligible(entity, now, notified):
                continue
            title, body = policy.render_message(entity, now)
        except Exception:
            logger.exception(
                "Skipping %s under policy '%s': entity could not be evaluated",
                getattr(entity, "id", entity),
                policy.name,
            )
            continue
        due.append(DueReminder(entity=entity, title=title, body=body))
    return due
