"""
Common Utilities

Shared modules used by every store:
- exceptions.py - Custom exception classes
- logging_setup.py - Structured logging setup
- scheduler.py - Interval refresh loop
- settings.py - Environment/YAML settings
"""

from .exceptions import (
    ConfigStoreError,
    LookupFailedError,
    NotFoundError,
    ParseError,
    RefreshError,
    RetrievalError,
    DecodeError,
    ConstructionError,
    StoreStateError,
)
from .logging_setup import (
    setup_logging,
    get_service_logger,
    log_refresh,
)
from .scheduler import LoopState, RefreshLoop
from .settings import StoreSettings, load_settings

__all__ = [
    # Exceptions
    "ConfigStoreError",
    "LookupFailedError",
    "NotFoundError",
    "ParseError",
    "RefreshError",
    "RetrievalError",
    "DecodeError",
    "ConstructionError",
    "StoreStateError",
    # Logging
    "setup_logging",
    "get_service_logger",
    "log_refresh",
    # Scheduling
    "LoopState",
    "RefreshLoop",
    # Settings
    "StoreSettings",
    "load_settings",
]
