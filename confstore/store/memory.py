"""
In-memory store for tests

Holds native Python values and checks their type strictly on read.
Nothing is fetched, so the refresh controls do nothing.
"""

from datetime import timedelta
from typing import Any

from ..common.exceptions import NotFoundError, ParseError
from .base import ConfigStore


class InMemoryConfigStore(ConfigStore):
    """Map-backed ConfigStore with no remote and no refresh."""

    def __init__(self, data: dict[str, Any] | None = None):
        self._data: dict[str, Any] = dict(data or {})

    async def load_config(self) -> None:
        pass

    def start_loading(self, interval: timedelta | float) -> None:
        pass

    async def stop_loading(self) -> None:
        pass

    def _get(self, key: str, expected: type, target: str) -> Any:
        try:
            value = self._data[key]
        except KeyError:
            raise NotFoundError(key) from None
        # bool is an int subclass; only get_bool accepts it
        if not isinstance(value, expected) or (isinstance(value, bool) and expected is not bool):
            raise ParseError(key, value, target)
        return value

    def get_int(self, key: str) -> int:
        return self._get(key, int, "int")

    def get_float(self, key: str) -> float:
        return self._get(key, float, "float")

    def get_string(self, key: str) -> str:
        return self._get(key, str, "string")

    def get_bool(self, key: str) -> bool:
        return self._get(key, bool, "bool")

    def get_duration(self, key: str) -> timedelta:
        return self._get(key, timedelta, "duration")
