"""Notification gateway and delivery channels."""

from reminder_engine.notifications.channels import NotificationChannel
from reminder_engine.notifications.gateway import (
    NotificationGateway,
    PermissionState,
    RouterGateway,
)
from reminder_engine.notifications.log_channel import LogChannel
from reminder_engine.notifications.router import NotificationRouter

__all__ = [
    "LogChannel",
    "NotificationChannel",
    "NotificationGateway",
    "NotificationRouter",
    "PermissionState",
    "RouterGateway",
]
