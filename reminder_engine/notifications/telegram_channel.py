"""Telegram implementation of the NotificationChannel protocol."""

from __future__ import annotations

import logging

import telegram
from telegram.helpers import escape_markdown

logger = logging.getLogger(__name__)


class TelegramChannel:
    """Sends alerts via the Telegram Bot API."""

    def __init__(self, bot: telegram.Bot) -> None:
        self._bot = bot

    @property
    def name(self) -> str:
        return "telegram"

    async def send(self, recipient: str, message: str) -> bool:
        """Send an alert to a Telegram chat, bolding its first line.

        Titles and bodies carry user-entered text, so both are escaped
        before Telegram parses the message as MarkdownV2.
        """
        title, _, body = message.partition("\n")
        text = f"*{escape_markdown(title, version=2)}*"
        if body:
            text = f"{text}\n{escape_markdown(body, version=2)}"
        try:
            await self._bot.send_message(
                chat_id=int(recipient), text=text, parse_mode="MarkdownV2"
            )
            return True
        except Exception:
            logger.exception("TelegramChannel.send failed for recipient=%s", recipient)
            return False
