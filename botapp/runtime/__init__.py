"""Runtime helpers for the booking application."""

from .lifecycle import LifecycleManager

__all__ = ['LifecycleManager']
