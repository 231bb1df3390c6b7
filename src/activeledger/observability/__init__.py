"""Observability module for the Activeledger SDK.

Structured logging via structlog, with JSON output for production and
colored console output for development.

Example:
    >>> from activeledger.observability import get_logger
    >>>
    >>> logger = get_logger(__name__)
    >>> logger.info("connection.ready", url="http://localhost:5260")
"""

from activeledger.observability.logging import (
    configure_logging,
    get_logger,
    is_debug_mode,
    sanitize_for_logging,
)

__all__ = [
    "configure_logging",
    "get_logger",
    "is_debug_mode",
    "sanitize_for_logging",
]
