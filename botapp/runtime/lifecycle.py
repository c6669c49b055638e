"""Lifecycle orchestration for the booking runtime."""

from __future__ import annotations

import asyncio
import logging
from typing import Optional

from botapp.bootstrap import BotDependencies
from botapp.notifications import TelegramNotifier
from botapp.ui.text_blocks import render_overview

METRICS_INTERVAL_SECONDS = 300


class LifecycleManager:
    """Manage startup, shutdown, and periodic tasks for the runtime."""

    def __init__(
        self,
        dependencies: BotDependencies,
        *,
        logger: Optional[logging.Logger] = None,
        metrics_interval: float = METRICS_INTERVAL_SECONDS,
    ) -> None:
        self.dependencies = dependencies
        self.logger = logger or logging.getLogger('LifecycleManager')
        self.metrics_interval = metrics_interval
        self.metrics_task: Optional[asyncio.Task] = None

    async def startup(self) -> None:
        """Re-arm persisted jobs and start periodic metrics logging."""

        scheduler = self.dependencies.scheduler
        scheduler.sync()
        self.logger.info(
            "Reservation scheduler armed %s persisted job(s)", len(scheduler.armed_job_ids)
        )

        service = self.dependencies.service
        self.logger.info(
            "Current state:\n%s",
            render_overview(
                service.list_scheduled(),
                service.list_bookings(),
                self.dependencies.settings.timezone,
            ),
        )

        if self.metrics_interval > 0:
            self.metrics_task = asyncio.create_task(self._metrics_loop())
            self.logger.info("Metrics monitoring started (%ss intervals)", self.metrics_interval)

        self.logger.info("Runtime started - awaiting scheduled jobs...")

    async def shutdown(self) -> None:
        """Tear down background tasks and network resources."""

        self.logger.info("🔴 Starting shutdown sequence...")

        if self.metrics_task:
            self.metrics_task.cancel()
            try:
                await self.metrics_task
            except asyncio.CancelledError:
                pass
            self.logger.info("✅ Metrics monitoring stopped")
            self.metrics_task = None

        self.logger.info("🔄 Stopping reservation scheduler...")
        await self.dependencies.scheduler.stop()
        self.log_metrics()

        notifier = self.dependencies.notifier
        if isinstance(notifier, TelegramNotifier):
            await notifier.flush()

        await self.dependencies.http_client.aclose()
        self.logger.info("✅ Shutdown sequence completed")

    def log_metrics(self) -> None:
        """Log queue and scheduler metrics."""

        queue = self.dependencies.queue
        scheduler = self.dependencies.scheduler
        self.logger.info(
            "=== METRICS REPORT ===\n"
            f"📋 Queued jobs: {len(queue.list())}\n"
            f"⏰ Armed timers: {len(scheduler.armed_job_ids)}\n"
            f"{scheduler.get_performance_report()}\n"
            "======================"
        )

    async def _metrics_loop(self) -> None:
        """Periodic metrics logging loop."""

        try:
            while True:
                await asyncio.sleep(self.metrics_interval)
                self.log_metrics()
        except asyncio.CancelledError:
            self.logger.info("Metrics logging task cancelled")
            raise


__all__ = ['LifecycleManager']
