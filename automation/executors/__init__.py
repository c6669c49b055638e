"""Booking execution against the Appointlet API."""

from .booking import BookingExecutor
from .request_factory import build_booking_request

__all__ = [
    "BookingExecutor",
    "build_booking_request",
]
