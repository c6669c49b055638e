#!/usr/bin/env python3
"""
Booking bot entrypoint: keeps the scheduler alive until SIGINT/SIGTERM.
"""

import asyncio
import logging
import signal
import sys
from pathlib import Path
from typing import Optional

if __name__ == "__main__" and __package__ is None:
    sys.path.append(str(Path(__file__).resolve().parents[1]))
    __package__ = "botapp"

from botapp.bootstrap import build_dependencies
from botapp.runtime import LifecycleManager
from infrastructure.logging_config import setup_logging
from infrastructure.settings import AppSettings, get_settings


def install_signal_handlers(stop_event: asyncio.Event) -> None:
    """Set ``stop_event`` on SIGINT/SIGTERM for a graceful shutdown."""

    logger = logging.getLogger('Main')
    loop = asyncio.get_running_loop()

    def _request_stop(signum: int) -> None:
        logger.info(f"🚨 Received signal {signum}, initiating graceful shutdown...")
        stop_event.set()

    for signum in (signal.SIGINT, signal.SIGTERM):
        try:
            loop.add_signal_handler(signum, _request_stop, signum)
        except NotImplementedError:
            # Windows event loops have no add_signal_handler
            signal.signal(signum, lambda s, _frame: loop.call_soon_threadsafe(_request_stop, s))


async def run(settings: AppSettings, stop_event: Optional[asyncio.Event] = None) -> None:
    """Run the booking runtime until ``stop_event`` is set."""

    stop_event = stop_event or asyncio.Event()
    dependencies = build_dependencies(settings)
    lifecycle = LifecycleManager(dependencies)

    await lifecycle.startup()
    try:
        await stop_event.wait()
    finally:
        await lifecycle.shutdown()


async def _main_async(settings: AppSettings) -> None:
    stop_event = asyncio.Event()
    install_signal_handlers(stop_event)
    await run(settings, stop_event)


def main() -> None:
    """Entry point used by both CLI script and module execution."""

    settings = get_settings()
    log_dir = setup_logging(settings)

    logger = logging.getLogger('Main')
    logger.info("=" * 50)
    logger.info("Estivella booking bot")
    logger.info("=" * 50)
    logger.info("Logs: %s | Data: %s", log_dir, settings.data_directory)

    try:
        logger.info("🚀 Starting scheduler...")
        asyncio.run(_main_async(settings))
    except KeyboardInterrupt:
        logger.info("✅ Stopped by user (Ctrl+C)")
    except Exception as exc:
        logger.error("❌ Error: %s", exc, exc_info=True)
        raise
    finally:
        logger.info("🔄 Final cleanup done")


if __name__ == '__main__':
    main()
