"""Structured logging configuration for the Activeledger SDK.

This module configures structlog for structured logging with support for
both development (console) and production (JSON) output formats.

Environment Variables:
    ACTIVELEDGER_LOG_FORMAT: Set to "json" for JSON output, "console" for colored output
    ACTIVELEDGER_LOG_LEVEL: Set log level (DEBUG, INFO, WARNING, ERROR)
    ACTIVELEDGER_SERVICE_NAME: Service name to include in logs
    ACTIVELEDGER_DEBUG: Set to "true" or "1" to log full payloads; otherwise sensitive fields are redacted

Example:
    >>> from activeledger.observability.logging import get_logger, configure_logging
    >>>
    >>> configure_logging(log_format="json", log_level="INFO")
    >>> logger = get_logger("activeledger.connection")
    >>> logger.info("transaction.sent", url="http://localhost:5260")
"""

from __future__ import annotations

import logging
import os
import sys
from typing import Any

import structlog
from structlog.typing import Processor

# Default configuration
DEFAULT_LOG_LEVEL = "INFO"
DEFAULT_LOG_FORMAT = "console"
DEFAULT_SERVICE_NAME = "activeledger-sdk"

# Environment variable names
ENV_LOG_FORMAT = "ACTIVELEDGER_LOG_FORMAT"
ENV_LOG_LEVEL = "ACTIVELEDGER_LOG_LEVEL"
ENV_SERVICE_NAME = "ACTIVELEDGER_SERVICE_NAME"
ENV_DEBUG = "ACTIVELEDGER_DEBUG"

# Placeholder for redacted sensitive values in logs
REDACTED_PLACEHOLDER = "***REDACTED***"

# Key substrings (case-insensitive) that indicate sensitive data to redact
_SENSITIVE_KEY_PATTERNS = frozenset(
    {"private", "pem", "password", "secret", "token", "key", "auth"}
)

_logging_configured = False
_handler: logging.Handler | None = None


def _is_sensitive_key(key: str) -> bool:
    lower = key.lower()
    return any(pattern in lower for pattern in _SENSITIVE_KEY_PATTERNS)


def sanitize_for_logging(data: dict[str, Any]) -> dict[str, Any]:
    """Sanitize a dict for safe logging by redacting sensitive field values.

    Keys matching (case-insensitive) private, pem, password, secret, token, key or auth
    have their values replaced with REDACTED_PLACEHOLDER. Nested dicts and
    lists of dicts are sanitized recursively.

    Example:
        >>> sanitize_for_logging({"name": "alice", "pem": {"private": "-----BEGIN"}})
        {'name': 'alice', 'pem': '***REDACTED***'}
    """
    if not data:
        return {}
    result: dict[str, Any] = {}
    for k, v in data.items():
        if _is_sensitive_key(k):
            result[k] = REDACTED_PLACEHOLDER
        elif isinstance(v, dict):
            result[k] = sanitize_for_logging(v)
        elif isinstance(v, list):
            result[k] = [
                sanitize_for_logging(item) if isinstance(item, dict) else item for item in v
            ]
        else:
            result[k] = v
    return result


def is_debug_mode() -> bool:
    """Return True if ACTIVELEDGER_DEBUG is set to a truthy value (e.g. true, 1)."""
    value = os.environ.get(ENV_DEBUG, "").strip().lower()
    return value in ("true", "1", "yes", "on")


def _get_log_level() -> str:
    return os.environ.get(ENV_LOG_LEVEL, DEFAULT_LOG_LEVEL).upper()


def _get_log_format() -> str:
    return os.environ.get(ENV_LOG_FORMAT, DEFAULT_LOG_FORMAT).lower()


def _get_service_name() -> str:
    return os.environ.get(ENV_SERVICE_NAME, DEFAULT_SERVICE_NAME)


def _get_shared_processors() -> list[Processor]:
    return [
        structlog.contextvars.merge_contextvars,
        structlog.stdlib.add_log_level,
        structlog.stdlib.add_logger_name,
        structlog.stdlib.PositionalArgumentsFormatter(),
        structlog.processors.TimeStamper(fmt="iso"),
        structlog.processors.StackInfoRenderer(),
        structlog.processors.UnicodeDecoder(),
    ]


def configure_logging(
    log_format: str | None = None,
    log_level: str | None = None,
    service_name: str | None = None,
    force: bool = False,
) -> None:
    """Configure structured logging for an application using the SDK.

    The SDK never calls this on import; it is run by the ``activeledger``
    CLI, or by a host application that wants the SDK's log format. Other
    handlers on the root logger are left in place.

    Args:
        log_format: Output format - "json" or "console". Defaults to env var or "console"
        log_level: Minimum log level. Defaults to env var or "INFO"
        service_name: Service name for log context. Defaults to env var or "activeledger-sdk"
        force: If True, reconfigure even if already configured
    """
    global _logging_configured, _handler

    if _logging_configured and not force:
        return

    log_format = log_format or _get_log_format()
    log_level = log_level or _get_log_level()
    service_name = service_name or _get_service_name()

    shared_processors = _get_shared_processors()

    if log_format == "json":
        renderer: Processor = structlog.processors.JSONRenderer()
    else:
        renderer = structlog.dev.ConsoleRenderer(
            colors=True,
            exception_formatter=structlog.dev.plain_traceback,
        )

    structlog.configure(
        processors=[
            *shared_processors,
            structlog.stdlib.ProcessorFormatter.wrap_for_formatter,
        ],
        logger_factory=structlog.stdlib.LoggerFactory(),
        wrapper_class=structlog.stdlib.BoundLogger,
        cache_logger_on_first_use=True,
    )

    formatter = structlog.stdlib.ProcessorFormatter(
        foreign_pre_chain=shared_processors,
        processors=[
            structlog.stdlib.ProcessorFormatter.remove_processors_meta,
            renderer,
        ],
    )

    # Logs go to stderr so CLI output on stdout stays clean
    handler = logging.StreamHandler(sys.stderr)
    handler.setFormatter(formatter)

    root_logger = logging.getLogger()
    if _handler is not None:
        root_logger.removeHandler(_handler)
    root_logger.addHandler(handler)
    root_logger.setLevel(getattr(logging, log_level))
    _handler = handler

    structlog.contextvars.bind_contextvars(service=service_name)

    _logging_configured = True


def get_logger(name: str) -> structlog.stdlib.BoundLogger:
    """Get a structured logger for the given name.

    Nothing is configured here. Events are handed to the standard-library
    logger ``name``, so the host application's logging setup decides where
    they go and at which level.

    Example:
        >>> logger = get_logger(__name__)
        >>> logger.info("key.generated", key_type="rsa")
    """
    logger: structlog.stdlib.BoundLogger = structlog.wrap_logger(
        logging.getLogger(name), wrapper_class=structlog.stdlib.BoundLogger
    )
    return logger
