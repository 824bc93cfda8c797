"""Channel that writes alerts to the application log."""

from __future__ import annotations

import logging

logger = logging.getLogger(__name__)


class LogChannel:
    """Delivers alerts as INFO log records. Used for local runs and as a fallback."""

    @property
    def name(self) -> str:
        return "log"

    async def send(self, recipient: str, message: str) -> bool:
        logger.info("Alert for %s: %s", recipient or "<owner>", message.replace("\n", " | "))
        return True
