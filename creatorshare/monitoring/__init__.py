"""
CreatorShare - Monitoring Module

Structured logging and request context helpers.
"""

from .logging import (
    bind_context,
    configure_logging,
    log_duration,
    mask_wallet,
    unbind_context,
)

__all__ = [
    "bind_context",
    "configure_logging",
    "log_duration",
    "mask_wallet",
    "unbind_context",
]
