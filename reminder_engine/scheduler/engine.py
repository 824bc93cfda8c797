"""ReminderScheduler — polls a registry and fires alerts through a gateway."""

from __future__ import annotations

import asyncio
import logging
from typing import TYPE_CHECKING, Any

from apscheduler.jobstores.base import JobLookupError
from apscheduler.triggers.interval import IntervalTrigger

from reminder_engine.clock import SystemClock
from reminder_engine.notifications.gateway import PermissionState
from reminder_engine.policies import evaluate
from reminder_engine.tracker import NotifiedSet

if TYPE_CHECKING:
    from collections.abc import Callable, Iterable

    from apscheduler.schedulers.asyncio import AsyncIOScheduler

    from reminder_engine.clock import Clock
    from reminder_engine.notifications.gateway import NotificationGateway
    from reminder_engine.policies import DueReminder, EligibilityPolicy

logger = logging.getLogger(__name__)


class ReminderScheduler:
    """Runs one eligibility policy against a registry on a fixed interval.

    Each tick reads the clock, snapshots the registry through *source*, and
    dispatches every due reminder. An id is marked fired only after the
    gateway reports a successful delivery, so a failed dispatch stays
    eligible for the next tick.

    Args:
        policy: Eligibility policy deciding what fires and what it says.
        source: Callable returning the current registry entities.
        gateway: Permission-gated alert gateway.
        scheduler: APScheduler instance that drives the polling job.
        interval_seconds: Poll interval.
        clock: Clock source (default: process-local SystemClock).
        tracker: Fired-id memory (default: a fresh NotifiedSet).
        name: Job id, also used in log lines.
    """

    def __init__(
        self,
        policy: EligibilityPolicy,
        source: Callable[[], Iterable[Any]],
        gateway: NotificationGateway,
        scheduler: AsyncIOScheduler,
        *,
        interval_seconds: float,
        clock: Clock | None = None,
        tracker: NotifiedSet | None = None,
        name: str | None = None,
    ) -> None:
        if interval_seconds <= 0:
            msg = f"interval_seconds must be positive, got {interval_seconds}"
            raise ValueError(msg)
        self._policy = policy
        self._source = source
        self._gateway = gateway
        self._scheduler = scheduler
        self._interval_seconds = interval_seconds
        self._clock = clock or SystemClock()
        self._tracker = tracker if tracker is not None else NotifiedSet()
        self._name = name or f"reminders:{policy.name}"
        self._lock = asyncio.Lock()
        self._permission_requested = False
        self._running = False

    @property
    def name(self) -> str:
        return self._name

    @property
    def running(self) -> bool:
        return self._running

    @property
    def tracker(self) -> NotifiedSet:
        return self._tracker

    @property
    def interval_seconds(self) -> float:
        return self._interval_seconds

    # -- Lifecycle -------------------------------------------------------------

    async def start(self) -> None:
        """Ask for permission if never asked, then add the polling job."""
        if self._running:
            return
        await self._ensure_permission()
        self._scheduler.add_job(
            self._run_tick,
            trigger=IntervalTrigger(seconds=self._interval_seconds),
            id=self._name,
            name=self._name,
            max_instances=1,
            coalesce=True,
            replace_existing=True,
        )
        self._running = True
        logger.info(
            "Reminder scheduler '%s' started (interval=%ss, permission=%s)",
            self._name,
            self._interval_seconds,
            self._gateway.permission_state.value,
        )

    async def stop(self) -> None:
        """Remove the polling job. An in-flight tick finishes; no new one starts."""
        if not self._running:
            return
        self._running = False
        try:
            self._scheduler.remove_job(self._name)
        except JobLookupError:
            logger.debug("Job %s not found in scheduler (may already be removed)", self._name)
        logger.info("Reminder scheduler '%s' stopped", self._name)

    def forget(self, entity_id: str) -> bool:
        """Drop an id from the fired set. For entity deletion cleanup only."""
        return self._tracker.discard(entity_id)

    # -- Tick ------------------------------------------------------------------

    async def tick(self) -> list[DueReminder]:
        """Evaluate the registry once and dispatch due reminders.

        Returns the reminders that were delivered. A tick is a no-op when
        permission is not granted or another tick is still running.
        """
        if self._gateway.permission_state is not PermissionState.GRANTED:
            logger.debug(
                "Tick '%s' skipped: permission %s",
                self._name,
                self._gateway.permission_state.value,
            )
            return []
        if self._lock.locked():
            logger.debug("Tick '%s' skipped: previous tick still running", self._name)
            return []

        async with self._lock:
            now = self._clock.now()
            due = evaluate(self._policy, list(self._source()), now, self._tracker)
            delivered: list[DueReminder] = []
            for reminder in due:
                if await self._dispatch(reminder):
                    self._tracker.mark_fired(reminder.entity_id)
                    delivered.append(reminder)
            if due:
                logger.info(
                    "Tick '%s': %d due, %d delivered", self._name, len(due), len(delivered)
                )
            return delivered

    # -- Internal --------------------------------------------------------------

    async def _run_tick(self) -> None:
        """Callback invoked by APScheduler."""
        if not self._running:
            return
        await self.tick()

    async def _ensure_permission(self) -> None:
        if self._permission_requested:
            return
        self._permission_requested = True
        if self._gateway.permission_state is not PermissionState.UNASKED:
            return
        try:
            state = await self._gateway.request_permission()
        except Exception:
            logger.exception("Permission request failed for '%s'", self._name)
            return
        logger.info("Reminder scheduler '%s' permission request: %s", self._name, state.value)

    async def _dispatch(self, reminder: DueReminder) -> bool:
        try:
            ok = await self._gateway.dispatch(reminder.title, reminder.body)
        except Exception:
            logger.exception(
                "Dispatch failed for %s ('%s'); left unmarked",
                reminder.entity_id,
                reminder.title,
            )
            return False
        if not ok:
            logger.warning(
                "Dispatch not delivered for %s ('%s')", reminder.entity_id, reminder.title
            )
        return bool(ok)
