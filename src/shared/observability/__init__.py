"""Observability module for structured logging."""

from .logging import (
    get_logger,
    log_external_call_end,
    log_external_call_start,
    region_var,
    setup_logging,
)

__all__ = [
    # Setup
    "setup_logging",
    "get_logger",
    # Context
    "region_var",
    # Logging helpers
    "log_external_call_start",
    "log_external_call_end",
]
