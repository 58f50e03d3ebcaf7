"""Configuration package: settings + logging.

Usage:
    from user_service.config import get_settings, setup_logging, get_logger

    settings = get_settings()
    setup_logging()  # once per process
    logger = get_logger(__name__)
"""

from .settings import Settings, get_settings
from .logging import (
    bind_event_context,
    bind_request_context,
    clear_request_context,
    get_logger,
    mask_url_credentials,
    setup_logging,
)

__all__ = [
    "Settings",
    "get_settings",
    "setup_logging",
    "get_logger",
    "bind_request_context",
    "bind_event_context",
    "clear_request_context",
    "mask_url_credentials",
]
