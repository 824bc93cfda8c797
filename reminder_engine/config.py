"""Application settings loaded from environment variables."""

import os
from pathlib import Path

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict

from reminder_engine.notifications.gateway import PermissionState


def _env_file() -> str | None:
    if os.getenv("PYTEST_CURRENT_TEST"):
        return None
    return ".env"


class Settings(BaseSettings):
    """Reminder engine configuration. All values come from environment variables."""

    # Reminder timing
    lead_time_minutes: int = Field(default=15, gt=0)
    appointment_poll_interval_ms: int = Field(default=60000, gt=0)
    calendar_poll_interval_ms: int = Field(default=20000, gt=0)

    # IANA zone used for due instants; empty means the process-local zone
    reminder_timezone: str = Field(default="")

    # Notifications
    notification_permission: str = Field(default="unasked")
    notification_recipient: str = Field(default="")
    default_notification_channel: str = Field(default="log")

    # Telegram
    telegram_bot_token: str = Field(default="")

    # Slack
    slack_bot_token: str = Field(default="")

    # Registry seed file (read once at start-up)
    registry_path: Path = Field(default=Path("data/registry.json"))

    # Logging
    log_level: str = Field(default="INFO")

    model_config = SettingsConfigDict(env_file=_env_file(), env_file_encoding="utf-8")

    @classmethod
    def settings_customise_sources(
        cls,
        settings_cls: type[BaseSettings],
        init_settings,
        env_settings,
        dotenv_settings,
        file_secret_settings,
    ):
        if os.getenv("PYTEST_CURRENT_TEST"):
            return (init_settings,)
        return (init_settings, env_settings, dotenv_settings, file_secret_settings)

    @property
    def appointment_poll_interval_seconds(self) -> float:
        return self.appointment_poll_interval_ms / 1000

    @property
    def calendar_poll_interval_seconds(self) -> float:
        return self.calendar_poll_interval_ms / 1000

    def get_initial_permission(self) -> PermissionState:
        """Parse NOTIFICATION_PERMISSION into a PermissionState."""
        value = self.notification_permission.strip().lower()
        try:
            return PermissionState(value)
        except ValueError:
            allowed = ", ".join(s.value for s in PermissionState)
            msg = f"Invalid notification_permission '{self.notification_permission}' (expected one of: {allowed})"
            raise ValueError(msg) from None


settings = Settings()
