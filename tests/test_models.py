"""Tests for Appointment and CalendarEvent models."""

import dataclasses
from datetime import date, time

import pytest

from reminder_engine.models import (
    Appointment,
    AppointmentStatus,
    AppointmentType,
    CalendarEvent,
    CalendarEventType,
    make_entity_id,
)

# -- Appointment ---------------------------------------------------------------


def test_appointment_defaults() -> None:
    appt = Appointment(
        id="1", title="Intro", client_name="Sam", date=date(2025, 3, 12), time=time(10, 0)
    )
    assert appt.status is AppointmentStatus.SCHEDULED
    assert appt.type is AppointmentType.VIDEO_CALL
    assert appt.reminder_enabled is True
    assert appt.duration == 30
    assert appt.is_scheduled is True
    assert appt.due_date == date(2025, 3, 12)
    assert appt.due_time == time(10, 0)


def test_appointment_from_dict() -> None:
    appt = Appointment.from_dict({
        "id": "1700000000000",
        "title": "Project Kickoff",
        "clientName": "Globex",
        "contact": "ops@globex.example",
        "date": "2025-03-12",
        "time": "14:30",
        "duration": 60,
        "type": "In-Person",
        "status": "Cancelled",
        "notes": "Bring contract",
        "reminderEnabled": False,
    })

    assert appt.id == "1700000000000"
    assert appt.client_name == "Globex"
    assert appt.date == date(2025, 3, 12)
    assert appt.time == time(14, 30)
    assert appt.duration == 60
    assert appt.type is AppointmentType.IN_PERSON
    assert appt.status is AppointmentStatus.CANCELLED
    assert appt.reminder_enabled is False
    assert appt.is_scheduled is False


def test_appointment_from_dict_generates_id() -> None:
    appt = Appointment.from_dict(
        {"title": "t", "clientName": "c", "date": "2025-03-12", "time": "09:00"}
    )
    assert len(appt.id) == 32


def test_appointment_from_dict_missing_field() -> None:
    with pytest.raises(ValueError, match="clientName"):
        Appointment.from_dict({"title": "t", "date": "2025-03-12", "time": "09:00"})


def test_appointment_from_dict_bad_time() -> None:
    with pytest.raises(ValueError, match="Invalid time"):
        Appointment.from_dict(
            {"title": "t", "clientName": "c", "date": "2025-03-12", "time": "9am"}
        )


def test_appointment_to_dict_uses_ui_keys() -> None:
    appt = Appointment(
        id="1", title="Intro", client_name="Sam", date=date(2025, 3, 12), time=time(8, 5)
    )
    data = appt.to_dict()

    assert data["clientName"] == "Sam"
    assert data["date"] == "2025-03-12"
    assert data["time"] == "08:05"
    assert data["status"] == "Scheduled"
    assert data["reminderEnabled"] is True


# -- CalendarEvent -------------------------------------------------------------


def test_calendar_event_from_dict_without_time() -> None:
    event = CalendarEvent.from_dict(
        {"id": "e1", "title": "Holiday", "date": "2025-12-25", "type": "Note", "time": ""}
    )
    assert event.time is None
    assert event.due_time is None
    assert event.type is CalendarEventType.NOTE
    assert event.description == ""


def test_calendar_event_to_dict() -> None:
    event = CalendarEvent(
        id="e1",
        title="Sync",
        date=date(2025, 3, 12),
        time=time(14, 0),
        description="Weekly",
        is_completed=True,
    )
    data = event.to_dict()

    assert data["type"] == "Meeting"
    assert data["time"] == "14:00"
    assert data["isCompleted"] is True


def test_calendar_event_bad_type() -> None:
    with pytest.raises(ValueError):
        CalendarEvent.from_dict({"title": "x", "date": "2025-03-12", "type": "Party"})


def test_entities_are_immutable() -> None:
    appt = Appointment(
        id="1", title="Intro", client_name="Sam", date=date(2025, 3, 12), time=time(10, 0)
    )
    event = CalendarEvent(id="e1", title="Sync", date=date(2025, 3, 12))

    with pytest.raises(dataclasses.FrozenInstanceError):
        appt.id = "2"  # type: ignore[misc]
    with pytest.raises(dataclasses.FrozenInstanceError):
        event.time = time(9, 0)  # type: ignore[misc]


# -- make_entity_id ------------------------------------------------------------


def test_make_entity_id_unique() -> None:
    ids = {make_entity_id() for _ in range(100)}
    assert len(ids) == 100
