"""
Logging configuration for the court booking bot.

Console output plus rotating log files, with a dedicated file for the
reservation queue, scheduler and booking executor.
"""

from __future__ import annotations

import logging
import logging.handlers
import os
from datetime import datetime
from typing import Optional

from .settings import AppSettings, get_settings

# Loggers whose records also go to reservation_queue.log
QUEUE_LOGGERS = (
    'ScheduledJobQueue',
    'ReservationScheduler',
    'BookingExecutor',
    'BookingHistory',
)

COMPONENT_LOGGERS = (
    *QUEUE_LOGGERS,
    'AvailabilityClient',
    'JsonFileStore',
    'ProfileManager',
    'ReservationService',
    'Notifier',
    'LifecycleManager',
    'Main',
)


def setup_logging(settings: Optional[AppSettings] = None) -> str:
    """
    Set up console and rotating file logging.

    Previous logs in the log directory are cleared so each session starts
    with a fresh ``latest_log``.

    Args:
        settings: Settings snapshot; defaults to :func:`get_settings`.

    Returns:
        The log directory in use.
    """
    settings = settings or get_settings()
    log_dir = settings.log_directory
    production_mode = settings.production_mode

    if os.path.isdir(log_dir):
        for filename in os.listdir(log_dir):
            file_path = os.path.join(log_dir, filename)
            if os.path.isfile(file_path):
                try:
                    os.unlink(file_path)
                except OSError as exc:
                    print(f'Failed to delete {file_path}. Reason: {exc}')
    os.makedirs(log_dir, exist_ok=True)

    main_log_file = os.path.join(log_dir, 'bot.log')
    error_log_file = os.path.join(log_dir, 'bot_errors.log')
    queue_log_file = os.path.join(log_dir, 'reservation_queue.log')

    root_logger = logging.getLogger()
    root_logger.setLevel(logging.WARNING if production_mode else logging.DEBUG)
    root_logger.handlers = []

    detailed_formatter = logging.Formatter(
        '%(asctime)s - %(name)s - %(levelname)s - [%(filename)s:%(lineno)d in %(funcName)s()] - %(message)s',
        datefmt='%Y-%m-%d %H:%M:%S'
    )
    console_formatter = logging.Formatter(
        '%(asctime)s - %(name)s - %(levelname)s - %(message)s',
        datefmt='%H:%M:%S'
    )

    console_handler = logging.StreamHandler()
    console_handler.setLevel(logging.WARNING if production_mode else logging.INFO)
    console_handler.setFormatter(console_formatter)
    root_logger.addHandler(console_handler)

    main_file_handler = logging.handlers.RotatingFileHandler(
        main_log_file,
        maxBytes=10 * 1024 * 1024,  # 10MB
        backupCount=5,
        encoding='utf-8'
    )
    main_file_handler.setLevel(logging.WARNING if production_mode else logging.INFO)
    main_file_handler.setFormatter(detailed_formatter)
    root_logger.addHandler(main_file_handler)

    error_file_handler = logging.handlers.RotatingFileHandler(
        error_log_file,
        maxBytes=5 * 1024 * 1024,  # 5MB
        backupCount=5,
        encoding='utf-8'
    )
    error_file_handler.setLevel(logging.ERROR)
    error_file_handler.setFormatter(detailed_formatter)
    root_logger.addHandler(error_file_handler)

    queue_handler = logging.handlers.RotatingFileHandler(
        queue_log_file,
        maxBytes=20 * 1024 * 1024,  # 20MB
        backupCount=5,
        encoding='utf-8'
    )
    queue_handler.setLevel(logging.INFO if production_mode else logging.DEBUG)
    queue_handler.setFormatter(detailed_formatter)
    for name in QUEUE_LOGGERS:
        logging.getLogger(name).addHandler(queue_handler)

    # Component loggers stay at INFO even in production mode
    component_level = logging.INFO if production_mode else logging.DEBUG
    for name in COMPONENT_LOGGERS:
        logging.getLogger(name).setLevel(component_level)

    logging.getLogger('httpx').setLevel(logging.WARNING)
    logging.getLogger('httpcore').setLevel(logging.WARNING)
    logging.getLogger('telegram').setLevel(logging.INFO)

    root_logger.info("=" * 80)
    root_logger.info(f"Logging Initialized - {datetime.now()}")
    root_logger.info(f"Production Mode: {'ON' if production_mode else 'OFF'}")
    root_logger.info(f"Main log: {main_log_file}")
    root_logger.info(f"Error log: {error_log_file}")
    root_logger.info(f"Reservation Queue log: {queue_log_file}")
    root_logger.info("=" * 80)
    return log_dir


def get_logger(name: str) -> logging.Logger:
    """Get a logger with the given name."""
    return logging.getLogger(name)
