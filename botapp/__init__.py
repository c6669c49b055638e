"""Application layer: notifications, display helpers and the runtime."""
