"""Logging infrastructure for wutup.

This module provides structured logging with JSON output, context tracking,
and OpenTelemetry trace correlation.
"""

from wutup.logging.filters import (
    ContextFilter,
    clear_request_context,
    set_logging_context,
    set_request_context,
)
from wutup.logging.logger import (
    CustomJsonFormatter,
    configure_logging,
    get_logger,
    setup_logging,
)

__all__ = [
    "get_logger",
    "setup_logging",
    "configure_logging",
    "CustomJsonFormatter",
    "ContextFilter",
    "set_logging_context",
    "set_request_context",
    "clear_request_context",
]
