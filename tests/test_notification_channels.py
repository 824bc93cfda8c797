"""Tests for delivery channels and protocol conformance."""

import logging
from unittest.mock import AsyncMock

import pytest

from reminder_engine.notifications.channels import NotificationChannel
from reminder_engine.notifications.log_channel import LogChannel
from reminder_engine.notifications.slack_channel import SlackChannel
from reminder_engine.notifications.telegram_channel import TelegramChannel

# -- Helpers -----------------------------------------------------------------


def _make_mock_bot() -> AsyncMock:
    """Create a mock telegram.Bot."""
    bot = AsyncMock()
    bot.send_message = AsyncMock()
    return bot


def _make_mock_client() -> AsyncMock:
    """Create a mock slack_sdk.web.async_client.AsyncWebClient."""
    client = AsyncMock()
    client.conversations_open = AsyncMock(return_value={"channel": {"id": "D01ABC123"}})
    client.chat_postMessage = AsyncMock(return_value={"ok": True})
    return client


# -- Protocol conformance ---------------------------------------------------


@pytest.mark.parametrize(
    ("channel", "name"),
    [
        (TelegramChannel(_make_mock_bot()), "telegram"),
        (SlackChannel(_make_mock_client()), "slack"),
        (LogChannel(), "log"),
    ],
)
def test_channels_satisfy_protocol(channel, name: str) -> None:
    assert isinstance(channel, NotificationChannel)
    assert channel.name == name


# -- TelegramChannel ---------------------------------------------------------


async def test_telegram_send_calls_bot() -> None:
    bot = _make_mock_bot()
    ch = TelegramChannel(bot)

    ok = await ch.send("12345", "Reminder: Sync\nMeeting is starting now.")

    assert ok is True
    bot.send_message.assert_awaited_once_with(
        chat_id=12345,
        text="*Reminder: Sync*\nMeeting is starting now\\.",
        parse_mode="MarkdownV2",
    )


async def test_telegram_send_escapes_user_text() -> None:
    bot = _make_mock_bot()
    ch = TelegramChannel(bot)

    ok = await ch.send(
        "12345", "Upcoming Appointment: john_doe *vip*\nWith [ACME] in 10 minutes."
    )

    assert ok is True
    text = bot.send_message.await_args.kwargs["text"]
    assert text == (
        "*Upcoming Appointment: john\\_doe \\*vip\\**\n"
        "With \\[ACME\\] in 10 minutes\\."
    )


async def test_telegram_send_title_only() -> None:
    bot = _make_mock_bot()
    ch = TelegramChannel(bot)

    await ch.send("12345", "Heads_up")

    assert bot.send_message.await_args.kwargs["text"] == "*Heads\\_up*"


async def test_telegram_send_returns_false_on_error() -> None:
    bot = _make_mock_bot()
    bot.send_message.side_effect = RuntimeError("network down")
    ch = TelegramChannel(bot)

    assert await ch.send("12345", "hi") is False


async def test_telegram_send_returns_false_on_bad_chat_id() -> None:
    bot = _make_mock_bot()
    ch = TelegramChannel(bot)

    assert await ch.send("not-a-number", "hi") is False
    bot.send_message.assert_not_awaited()


# -- SlackChannel ------------------------------------------------------------


async def test_slack_send_opens_dm_and_posts() -> None:
    client = _make_mock_client()
    ch = SlackChannel(client)

    ok = await ch.send("U01XYZ", "Hello there")

    assert ok is True
    client.conversations_open.assert_awaited_once_with(users=["U01XYZ"])
    client.chat_postMessage.assert_awaited_once_with(channel="D01ABC123", text="Hello there")


async def test_slack_send_returns_false_when_dm_fails() -> None:
    client = _make_mock_client()
    client.conversations_open.side_effect = RuntimeError("network down")
    ch = SlackChannel(client)

    assert await ch.send("U01XYZ", "hi") is False
    client.chat_postMessage.assert_not_awaited()


async def test_slack_send_returns_false_when_post_fails() -> None:
    client = _make_mock_client()
    client.chat_postMessage.side_effect = RuntimeError("rate limited")
    ch = SlackChannel(client)

    assert await ch.send("U01XYZ", "hi") is False


# -- LogChannel --------------------------------------------------------------


async def test_log_channel_logs_alert(caplog: pytest.LogCaptureFixture) -> None:
    ch = LogChannel()
    with caplog.at_level(logging.INFO, logger="reminder_engine.notifications.log_channel"):
        ok = await ch.send("owner", "*Upcoming Appointment: Intro*\nWith Sam in 5 minutes.")

    assert ok is True
    assert "Upcoming Appointment: Intro" in caplog.text
    assert "With Sam in 5 minutes." in caplog.text
