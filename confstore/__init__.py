"""
confstore - typed configuration served from a periodically refreshed snapshot
"""

from .common import (
    ConfigStoreError,
    NotFoundError,
    ParseError,
    RetrievalError,
    DecodeError,
    ConstructionError,
    StoreStateError,
    RefreshLoop,
    StoreSettings,
    load_settings,
)
from .store import ConfigStore, InMemoryConfigStore, RedisConfigStore

__version__ = "0.1.0"

__all__ = [
    "ConfigStore",
    "InMemoryConfigStore",
    "RedisConfigStore",
    "RefreshLoop",
    "StoreSettings",
    "load_settings",
    "ConfigStoreError",
    "NotFoundError",
    "ParseError",
    "RetrievalError",
    "DecodeError",
    "ConstructionError",
    "StoreStateError",
]
