"""ReminderService — wires registries, gateway and schedulers together."""

from __future__ import annotations

import json
import logging
from typing import TYPE_CHECKING

from apscheduler.schedulers.asyncio import AsyncIOScheduler

from reminder_engine.clock import SystemClock
from reminder_engine.config import settings as default_settings
from reminder_engine.models import Appointment, CalendarEvent
from reminder_engine.notifications.gateway import RouterGateway
from reminder_engine.notifications.log_channel import LogChannel
from reminder_engine.notifications.router import NotificationRouter
from reminder_engine.policies import ExactMinutePolicy, LeadTimePolicy
from reminder_engine.registry import ReminderRegistry
from reminder_engine.scheduler.engine import ReminderScheduler

if TYPE_CHECKING:
    from pathlib import Path

    from reminder_engine.clock import Clock
    from reminder_engine.config import Settings
    from reminder_engine.notifications.gateway import NotificationGateway

logger = logging.getLogger(__name__)


class ReminderService:
    """Owns the APScheduler instance and the two reminder schedulers.

    Appointments are reminded ahead of time with ``LeadTimePolicy``; calendar
    events fire in their start minute with ``ExactMinutePolicy``. Each runs on
    its own poll interval but both share the gateway, so permission is only
    asked for once.
    """

    def __init__(
        self,
        appointments: ReminderRegistry[Appointment],
        events: ReminderRegistry[CalendarEvent],
        gateway: NotificationGateway,
        *,
        config: Settings | None = None,
        clock: Clock | None = None,
    ) -> None:
        cfg = config or default_settings
        self._appointments = appointments
        self._events = events
        self._gateway = gateway
        timezone = cfg.reminder_timezone or None
        self._clock = clock or SystemClock(timezone)
        self._scheduler = AsyncIOScheduler(timezone=timezone) if timezone else AsyncIOScheduler()
        self._running = False

        self.appointment_reminders = ReminderScheduler(
            LeadTimePolicy(cfg.lead_time_minutes),
            appointments.snapshot,
            gateway,
            self._scheduler,
            interval_seconds=cfg.appointment_poll_interval_seconds,
            clock=self._clock,
            name="appointment-reminders",
        )
        self.event_reminders = ReminderScheduler(
            ExactMinutePolicy(),
            events.snapshot,
            gateway,
            self._scheduler,
            interval_seconds=cfg.calendar_poll_interval_seconds,
            clock=self._clock,
            name="calendar-reminders",
        )

    @property
    def running(self) -> bool:
        return self._running

    @property
    def appointments(self) -> ReminderRegistry[Appointment]:
        return self._appointments

    @property
    def events(self) -> ReminderRegistry[CalendarEvent]:
        return self._events

    @property
    def gateway(self) -> NotificationGateway:
        return self._gateway

    async def start(self) -> None:
        """Start APScheduler and both reminder schedulers."""
        if self._running:
            return
        self._scheduler.start()
        await self.appointment_reminders.start()
        await self.event_reminders.start()
        self._running = True
        logger.info(
            "Reminder service started: %d appointment(s), %d event(s)",
            len(self._appointments),
            len(self._events),
        )

    async def stop(self) -> None:
        """Stop both reminder schedulers and shut APScheduler down."""
        if not self._running:
            return
        await self.appointment_reminders.stop()
        await self.event_reminders.stop()
        self._scheduler.shutdown(wait=False)
        self._running = False
        logger.info("Reminder service stopped")


def build_router(config: Settings) -> NotificationRouter:
    """Register the log channel plus any chat platform with a token configured."""
    router = NotificationRouter()
    router.register_channel(LogChannel())

    if config.telegram_bot_token:
        import telegram

        from reminder_engine.notifications.telegram_channel import TelegramChannel

        router.register_channel(TelegramChannel(telegram.Bot(config.telegram_bot_token)))

    if config.slack_bot_token:
        from slack_sdk.web.async_client import AsyncWebClient

        from reminder_engine.notifications.slack_channel import SlackChannel

        router.register_channel(SlackChannel(AsyncWebClient(token=config.slack_bot_token)))

    default = config.default_notification_channel
    if default not in router.list_channels():
        logger.warning("Notification channel '%s' is not configured, using 'log'", default)
        default = "log"
    router.set_default_channel(default)
    return router


def load_registries(
    path: Path,
) -> tuple[ReminderRegistry[Appointment], ReminderRegistry[CalendarEvent]]:
    """Seed registries from a JSON file with ``appointments`` and ``events`` lists.

    A missing file yields two empty registries.
    """
    if not path.exists():
        logger.info("No registry file at %s, starting empty", path)
        return ReminderRegistry(), ReminderRegistry()

    data = json.loads(path.read_text(encoding="utf-8"))
    appointments = ReminderRegistry.from_records(
        data.get("appointments", []), Appointment.from_dict
    )
    events = ReminderRegistry.from_records(data.get("events", []), CalendarEvent.from_dict)
    logger.info(
        "Loaded %d appointment(s) and %d event(s) from %s",
        len(appointments),
        len(events),
        path,
    )
    return appointments, events


def create_service(config: Settings | None = None) -> ReminderService:
    """Build a ReminderService from settings."""
    cfg = config or default_settings
    appointments, events = load_registries(cfg.registry_path)
    gateway = RouterGateway(
        build_router(cfg),
        cfg.notification_recipient,
        initial_state=cfg.get_initial_permission(),
    )
    return ReminderService(appointments, events, gateway, config=cfg)
