"""Reminder engine entry point."""

import asyncio
import contextlib
import logging
import signal

from reminder_engine.config import settings

logging.basicConfig(
    format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
    level=getattr(logging, settings.log_level),
)
logger = logging.getLogger(__name__)


async def run() -> None:
    """Start the reminder service and keep it running until SIGINT/SIGTERM."""
    from reminder_engine.app import create_service

    service = create_service()
    stop = asyncio.Event()
    loop = asyncio.get_running_loop()
    for sig in (signal.SIGINT, signal.SIGTERM):
        with contextlib.suppress(NotImplementedError):
            loop.add_signal_handler(sig, stop.set)

    await service.start()
    try:
        await stop.wait()
    finally:
        await service.stop()


def main() -> None:
    """Run the reminder service."""
    logger.info(
        "Starting reminder engine (lead=%d min, appointments every %ss, calendar every %ss)",
        settings.lead_time_minutes,
        settings.appointment_poll_interval_seconds,
        settings.calendar_poll_interval_seconds,
    )
    with contextlib.suppress(KeyboardInterrupt):
        asyncio.run(run())


if __name__ == "__main__":
    main()
