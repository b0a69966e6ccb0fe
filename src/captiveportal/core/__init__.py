"""Core captive portal utilities.

This module exports configuration and logging helpers used throughout the
application.
"""

from captiveportal.core.config import Settings, get_settings
from captiveportal.core.logging import (
    bind_correlation_id,
    clear_context,
    configure_logging,
    get_logger,
)

__all__ = [
    "Settings",
    "get_settings",
    "configure_logging",
    "get_logger",
    "bind_correlation_id",
    "clear_context",
]
