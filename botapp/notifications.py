"""Notification surface for booking outcomes.

Notifications are fire-and-forget ``(title, description)`` pairs. The
Telegram notifier delivers them to a single configured chat; without Telegram
credentials they are only logged.
"""

from __future__ import annotations

import asyncio
import logging
from typing import Optional, Protocol, Set

from telegram import Bot
from telegram.constants import ParseMode
from telegram.error import TelegramError
from telegram.helpers import escape_markdown

from infrastructure.settings import AppSettings

# Titles and descriptions shown to the user
BOOKING_CONFIRMED = "✅ Reserva confirmada"
BOOKING_CONFIRMED_DESCRIPTION = "La verás en Mis reservas"
BOOKING_FAILED = "❌ No se pudo reservar"
PROFILE_INCOMPLETE = "⚠️ Completa tus ajustes"
PROFILE_INCOMPLETE_DESCRIPTION = "Rellena email, nombre, apellidos, localitat y teléfono"
AVAILABILITY_FAILED = "Error cargando horarios"
AVAILABILITY_FAILED_DESCRIPTION = "No se pudieron cargar horarios. Inténtalo de nuevo"
SCHEDULE_CREATED = "Programación creada"
SCHEDULE_CREATED_DESCRIPTION = "La app intentará reservar automáticamente"
SCHEDULE_CANCELLED = "Programación cancelada"
SETTINGS_SAVED = "Ajustes guardados"


class Notifier(Protocol):
    """Accepts user-facing notifications without acknowledging them."""

    def notify(self, title: str, description: Optional[str] = None) -> None:
        ...


class LoggingNotifier:
    """Write notifications to the application log."""

    def __init__(self, logger: Optional[logging.Logger] = None) -> None:
        self.logger = logger or logging.getLogger('Notifier')

    def notify(self, title: str, description: Optional[str] = None) -> None:
        if description:
            self.logger.info("NOTIFICATION %s: %s", title, description)
        else:
            self.logger.info("NOTIFICATION %s", title)


def format_notification(title: str, description: Optional[str] = None) -> str:
    """Markdown text for a Telegram notification."""

    text = f"*{escape_markdown(title)}*"
    if description:
        text += f"\n{escape_markdown(description)}"
    return text


class TelegramNotifier:
    """Send notifications to a Telegram chat on background tasks."""

    def __init__(
        self,
        bot: Bot,
        chat_id: str,
        *,
        logger: Optional[logging.Logger] = None,
    ) -> None:
        self.bot = bot
        self.chat_id = chat_id
        self.logger = logger or logging.getLogger('Notifier')
        self._pending: Set[asyncio.Task] = set()

    def notify(self, title: str, description: Optional[str] = None) -> None:
        text = format_notification(title, description)
        try:
            loop = asyncio.get_running_loop()
        except RuntimeError:
            self.logger.warning("No running event loop; dropping notification %r", title)
            return

        task = loop.create_task(self._send(text, title))
        self._pending.add(task)
        task.add_done_callback(self._pending.discard)

    async def _send(self, text: str, title: str) -> None:
        try:
            await self.bot.send_message(
                chat_id=self.chat_id,
                text=text,
                parse_mode=ParseMode.MARKDOWN,
            )
        except TelegramError as exc:
            self.logger.error("Failed to deliver notification %r: %s", title, exc)
            return
        self.logger.info("Sent notification to %s: %s", self.chat_id, title)

    async def flush(self) -> None:
        """Wait for notifications still being delivered."""

        if self._pending:
            await asyncio.gather(*list(self._pending), return_exceptions=True)


def build_notifier(settings: AppSettings) -> Notifier:
    """Telegram notifier when credentials are configured, logging otherwise."""

    if settings.telegram_enabled:
        return TelegramNotifier(Bot(token=settings.telegram_bot_token), settings.telegram_chat_id)
    return LoggingNotifier()


__all__ = [
    "LoggingNotifier",
    "Notifier",
    "TelegramNotifier",
    "build_notifier",
    "format_notification",
]
