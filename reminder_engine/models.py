"""Schedulable entity models: appointments and calendar events."""

from __future__ import annotations

import uuid
from dataclasses import dataclass
from datetime import date, time
from enum import Enum
from typing import Any

from reminder_engine.timewindow import format_time, parse_date, parse_time


class AppointmentStatus(str, Enum):
    SCHEDULED = "Scheduled"
    COMPLETED = "Completed"
    CANCELLED = "Cancelled"


class AppointmentType(str, Enum):
    IN_PERSON = "In-Person"
    VIDEO_CALL = "Video Call"
    PHONE = "Phone"


class CalendarEventType(str, Enum):
    TASK = "Task"
    MEETING = "Meeting"
    NOTE = "Note"
    REMINDER = "Reminder"


@dataclass(frozen=True)
class Appointment:
    """A client appointment that can raise an advance reminder.

    Attributes:
        id: Unique identifier, stable for the appointment's lifetime.
        title: Purpose of the appointment.
        client_name: Who the appointment is with.
        date: Calendar date the appointment is scheduled for.
        time: Start time (local). ``None`` means no reminder can fire.
        contact: Free-form phone/email for the client.
        duration: Length in minutes.
        type: How the appointment takes place.
        status: Only ``Scheduled`` appointments are reminded.
        notes: Optional notes.
        reminder_enabled: Per-appointment reminder switch.
    """

    id: str
    title: str
    client_name: str
    date: date
    time: time | None
    contact: str = ""
    duration: int = 30
    type: AppointmentType = AppointmentType.VIDEO_CALL
    status: AppointmentStatus = AppointmentStatus.SCHEDULED
    notes: str = ""
    reminder_enabled: bool = True

    @property
    def due_date(self) -> date:
        return self.date

    @property
    def due_time(self) -> time | None:
        return self.time

    @property
    def is_scheduled(self) -> bool:
        return self.status == AppointmentStatus.SCHEDULED

    # -- Serialization ---------------------------------------------------------

    def to_dict(self) -> dict[str, Any]:
        """Serialize using the camelCase keys of the admin UI."""
        return {
            "id": self.id,
            "title": self.title,
            "clientName": self.client_name,
            "contact": self.contact,
            "date": self.date.isoformat(),
            "time": format_time(self.time),
            "duration": self.duration,
            "type": self.type.value,
            "status": self.status.value,
            "notes": self.notes,
            "reminderEnabled": self.reminder_enabled,
        }

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> Appointment:
        """Deserialize from an admin UI record. Missing ``id`` gets a fresh one."""
        try:
            return cls(
                id=str(data.get("id") or make_entity_id()),
                title=data["title"],
                client_name=data["clientName"],
                date=parse_date(data["date"]),
                time=parse_time(data.get("time")),
                contact=data.get("contact", ""),
                duration=int(data.get("duration", 30)),
                type=AppointmentType(data.get("type", AppointmentType.VIDEO_CALL.value)),
                status=AppointmentStatus(data.get("status", AppointmentStatus.SCHEDULED.value)),
                notes=data.get("notes") or "",
                reminder_enabled=bool(data.get("reminderEnabled", True)),
            )
        except KeyError as exc:
            msg = f"Appointment record is missing field {exc}"
            raise ValueError(msg) from None


@dataclass(frozen=True)
class CalendarEvent:
    """A calendar entry. Events with a time fire a reminder at that minute.

    Attributes:
        id: Unique identifier, stable for the event's lifetime.
        title: Event title.
        date: Calendar date of the event.
        type: Task, meeting, note or reminder.
        time: Start time (local). ``None`` for all-day entries.
        description: Optional details appended to the reminder body.
        attendees: Free-form attendee list.
        is_completed: Completion flag for tasks. Does not gate reminders.
    """

    id: str
    title: str
    date: date
    type: CalendarEventType = CalendarEventType.MEETING
    time: time | None = None
    description: str = ""
    attendees: str = ""
    is_completed: bool = False

    @property
    def due_date(self) -> date:
        return self.date

    @property
    def due_time(self) -> time | None:
        return self.time

    # -- Serialization ---------------------------------------------------------

    def to_dict(self) -> dict[str, Any]:
        return {
            "id": self.id,
            "title": self.title,
            "date": self.date.isoformat(),
            "type": self.type.value,
            "time": format_time(self.time),
            "description": self.description,
            "attendees": self.attendees,
            "isCompleted": self.is_completed,
        }

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> CalendarEvent:
        try:
            return cls(
                id=str(data.get("id") or make_entity_id()),
                title=data["title"],
                date=parse_date(data["date"]),
                type=CalendarEventType(data.get("type", CalendarEventType.MEETING.value)),
                time=parse_time(data.get("time")),
                description=data.get("description") or "",
                attendees=data.get("attendees") or "",
                is_completed=bool(data.get("isCompleted", False)),
            )
        except KeyError as exc:
            msg = f"Calendar event record is missing field {exc}"
            raise ValueError(msg) from None


def make_entity_id() -> str:
    """Generate a new entity ID."""
    return uuid.uuid4().hex
