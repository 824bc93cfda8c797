"""Permission-gated notification gateway used by the reminder schedulers."""

from __future__ import annotations

import logging
from enum import Enum
from typing import TYPE_CHECKING, Protocol, runtime_checkable

if TYPE_CHECKING:
    from reminder_engine.notifications.router import NotificationRouter

logger = logging.getLogger(__name__)


class PermissionState(str, Enum):
    UNASKED = "unasked"
    GRANTED = "granted"
    DENIED = "denied"


@runtime_checkable
class NotificationGateway(Protocol):
    """The narrow alerting interface the schedulers depend on."""

    @property
    def permission_state(self) -> PermissionState:
        """Current permission to show alerts."""
        ...

    async def request_permission(self) -> PermissionState:
        """Ask for permission to show alerts and return the resulting state."""
        ...

    async def dispatch(self, title: str, body: str) -> bool:
        """Show one alert. Returns True when it was delivered."""
        ...


class RouterGateway:
    """Gateway that delivers alerts through a NotificationRouter.

    Permission models whether the recipient accepts alerts at all. Asking for
    it grants when the router has a channel to deliver on and denies
    otherwise; the surrounding UI can also ``grant()`` or ``deny()`` directly.

    Args:
        router: Router holding the delivery channels.
        recipient: Channel-specific recipient (chat id, Slack user id, ...).
        initial_state: Permission state at construction.
        channel: Channel name override (None → router default).
    """

    def __init__(
        self,
        router: NotificationRouter,
        recipient: str,
        *,
        initial_state: PermissionState = PermissionState.UNASKED,
        channel: str | None = None,
    ) -> None:
        self._router = router
        self._recipient = recipient
        self._state = initial_state
        self._channel = channel

    @property
    def permission_state(self) -> PermissionState:
        return self._state

    async def request_permission(self) -> PermissionState:
        if self._state is not PermissionState.UNASKED:
            return self._state
        if self._router.has_route(self._channel):
            self._state = PermissionState.GRANTED
        else:
            self._state = PermissionState.DENIED
        logger.info("Notification permission %s", self._state.value)
        return self._state

    def grant(self) -> None:
        self._state = PermissionState.GRANTED
        logger.info("Notification permission granted")

    def deny(self) -> None:
        self._state = PermissionState.DENIED
        logger.info("Notification permission denied")

    async def dispatch(self, title: str, body: str) -> bool:
        """Send one alert as a plain-text title line and body. Never sends without permission."""
        if self._state is not PermissionState.GRANTED:
            logger.debug("Dropping alert '%s': permission %s", title, self._state.value)
            return False
        message = f"{title}\n{body}"
        return await self._router.send(self._recipient, message, channel=self._channel)
