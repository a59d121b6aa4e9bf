"""
Shared helpers.
"""
import logging
import os
from datetime import datetime, timezone

from ulid import ULID


_LOG_FORMAT = "%(asctime)s %(levelname)-8s %(name)s: %(message)s"
_configured = False


def get_logger(name: str) -> logging.Logger:
    """
    Return a module logger, configuring the root handler on first use.

    Usage:
        from dashboard.utils import get_logger

        log = get_logger(__name__)
    """
    global _configured
    if not _configured:
        logging.basicConfig(
            level=os.environ.get("LOG_LEVEL", "INFO").upper(),
            format=_LOG_FORMAT,
        )
        _configured = True
    return logging.getLogger(name)


def generate_id() -> str:
    """Generate a new ULID string."""
    return str(ULID())


def utc_now_iso() -> str:
    """Current UTC time as an ISO-8601 string."""
    return datetime.now(timezone.utc).isoformat()
