"""Bootstrap helpers for wiring runtime components."""

from .container import BotDependencies, build_dependencies, build_http_client

__all__ = [
    'BotDependencies',
    'build_dependencies',
    'build_http_client',
]
