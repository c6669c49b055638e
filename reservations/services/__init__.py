"""Application services for the booking bot."""

from .reservation_service import ReservationService

__all__ = ["ReservationService"]
