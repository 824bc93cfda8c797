"""Reminder polling engine."""

from reminder_engine.scheduler.engine import ReminderScheduler

__all__ = ["ReminderScheduler"]
