"""
Config Stores

- ConfigStore - abstract contract
- InMemoryConfigStore - native values, for tests
- RedisConfigStore - periodically refreshed from a Redis key
"""

from .base import ConfigStore
from .memory import InMemoryConfigStore
from .redis_store import RedisConfigStore, create_client

__all__ = ["ConfigStore", "InMemoryConfigStore", "RedisConfigStore", "create_client"]
