"""
CreatorShare - Structured Logging

structlog configuration shared by the API and the ledger services.

Output is JSON in production and a console renderer elsewhere. Every
entry carries the service name and version, the request correlation id
when one is bound, and has secrets and full wallet addresses masked.
"""

from __future__ import annotations

import logging
import re
import sys
import time
from collections.abc import Iterator
from contextlib import contextmanager
from datetime import UTC, datetime
from typing import Any

import structlog
from structlog.typing import EventDict, WrappedLogger

from creatorshare import __version__

SERVICE_NAME = "creatorshare"

# =============================================================================
# Custom Processors
# =============================================================================

def add_timestamp(
    logger: WrappedLogger,
    method_name: str,
    event_dict: EventDict,
) -> EventDict:
    """Add ISO8601 UTC timestamp."""
    event_dict["timestamp"] = datetime.now(UTC).isoformat()
    return event_dict


def add_service_info(
    logger: WrappedLogger,
    method_name: str,
    event_dict: EventDict,
) -> EventDict:
    event_dict["service"] = SERVICE_NAME
    event_dict["version"] = __version__
    return event_dict


# Substring match against lower-cased keys
SENSITIVE_KEYS = frozenset({
    "password",
    "secret",
    "token",
    "api_key",
    "authorization",
    "private_key",
    "mnemonic",
    "message_bytes",
    "cookie",
})

WALLET_PATTERN = re.compile(r"\b0x([0-9a-fA-F]{4})[0-9a-fA-F]{32}([0-9a-fA-F]{4})\b")


def mask_wallet(value: str) -> str:
    """Shorten every EVM address in ``value`` to ``0xabcd...wxyz``."""
    return WALLET_PATTERN.sub(r"0x\1...\2", value)


def sanitize_sensitive_data(
    logger: WrappedLogger,
    method_name: str,
    event_dict: EventDict,
) -> EventDict:
    """Redact secret-looking keys and mask wallet addresses, recursively."""

    def _sanitize(obj: Any, depth: int = 0) -> Any:
        if depth > 10:
            return obj
        if isinstance(obj, str):
            return mask_wallet(obj)
        if isinstance(obj, dict):
            return {
                k: "[REDACTED]"
                if any(s in str(k).lower() for s in SENSITIVE_KEYS)
                else _sanitize(v, depth + 1)
                for k, v in obj.items()
            }
        if isinstance(obj, (list, tuple)):
            return [_sanitize(item, depth + 1) for item in obj]
        return obj

    result: EventDict = _sanitize(event_dict)
    return result


# =============================================================================
# Logging Configuration
# =============================================================================

def configure_logging(
    level: str = "INFO",
    json_output: bool = False,
    sanitize_logs: bool = True,
) -> None:
    """
    Configure structlog and the stdlib root logger.

    Args:
        level: Log level (DEBUG, INFO, WARNING, ERROR, CRITICAL)
        json_output: Render JSON lines (production) instead of console output
        sanitize_logs: Redact secrets and mask wallet addresses
    """
    processors: list[Any] = [
        add_service_info,
        add_timestamp,
        structlog.stdlib.filter_by_level,
        structlog.stdlib.add_logger_name,
        structlog.stdlib.add_log_level,
        structlog.contextvars.merge_contextvars,
        structlog.processors.StackInfoRenderer(),
        structlog.processors.UnicodeDecoder(),
    ]

    if sanitize_logs:
        processors.append(sanitize_sensitive_data)

    if json_output:
        processors.append(structlog.processors.format_exc_info)
        processors.append(structlog.processors.JSONRenderer())
    else:
        processors.append(
            structlog.dev.ConsoleRenderer(
                colors=sys.stdout.isatty(),
                exception_formatter=structlog.dev.plain_traceback,
            )
        )

    structlog.configure(
        processors=processors,
        wrapper_class=structlog.stdlib.BoundLogger,
        context_class=dict,
        logger_factory=structlog.stdlib.LoggerFactory(),
        cache_logger_on_first_use=True,
    )

    logging.basicConfig(
        format="%(message)s",
        stream=sys.stdout,
        level=getattr(logging, level.upper()),
    )

    logging.getLogger("uvicorn.access").setLevel(logging.WARNING)
    logging.getLogger("httpx").setLevel(logging.WARNING)


# =============================================================================
# Request Context
# =============================================================================

def bind_context(**kwargs: Any) -> None:
    """Bind values that appear in every log entry of the current context."""
    structlog.contextvars.bind_contextvars(**kwargs)


def unbind_context(*keys: str) -> None:
    structlog.contextvars.unbind_contextvars(*keys)


# =============================================================================
# Performance Logging
# =============================================================================

@contextmanager
def log_duration(
    logger: structlog.stdlib.BoundLogger,
    operation: str,
    level: str = "debug",
    **extra_context: Any,
) -> Iterator[None]:
    """
    Log how long a block took as ``{operation}_completed`` or ``{operation}_failed``.

    Usage:
        with log_duration(logger, "content_query", query=q):
            page = query_content(store, q)
    """
    start_time = time.monotonic()
    try:
        yield
    except Exception as e:
        logger.error(
            f"{operation}_failed",
            duration_ms=round((time.monotonic() - start_time) * 1000, 2),
            error=str(e),
            **extra_context,
        )
        raise
    getattr(logger, level)(
        f"{operation}_completed",
        duration_ms=round((time.monotonic() - start_time) * 1000, 2),
        **extra_context,
    )


__all__ = [
    "bind_context",
    "configure_logging",
    "log_duration",
    "mask_wallet",
    "sanitize_sensitive_data",
    "unbind_context",
]
