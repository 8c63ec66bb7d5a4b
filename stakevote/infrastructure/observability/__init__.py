"""Observability infrastructure for structured logging.

Usage:
    from stakevote.infrastructure.observability import configure_structlog

    configure_structlog(environment="production")
"""

from stakevote.infrastructure.observability.logging import configure_structlog

__all__: list[str] = [
    "configure_structlog",
]
