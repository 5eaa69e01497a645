"""
ConfigStore contract

Every store exposes refresh control, strict typed getters and their
never-failing *_with_default counterparts.
"""

from abc import ABC, abstractmethod
from datetime import timedelta
from typing import Callable, TypeVar

from ..common.exceptions import LookupFailedError

T = TypeVar("T")


class ConfigStore(ABC):
    """Abstract configuration store"""

    # Refresh control

    @abstractmethod
    async def load_config(self) -> None:
        """Replace the current snapshot with a fresh one."""

    @abstractmethod
    def start_loading(self, interval: timedelta | float) -> None:
        """Refresh in the background every `interval`."""

    @abstractmethod
    async def stop_loading(self) -> None:
        """Stop background refresh and release remote resources."""

    # Typed getters (raise NotFoundError / ParseError)

    @abstractmethod
    def get_int(self, key: str) -> int: ...

    @abstractmethod
    def get_float(self, key: str) -> float: ...

    @abstractmethod
    def get_string(self, key: str) -> str: ...

    @abstractmethod
    def get_bool(self, key: str) -> bool: ...

    @abstractmethod
    def get_duration(self, key: str) -> timedelta: ...

    # Default-valued getters (never raise)

    def _with_default(self, getter: Callable[[str], T], key: str, default: T) -> T:
        try:
            return getter(key)
        except LookupFailedError:
            return default

    def get_int_with_default(self, key: str, default: int) -> int:
        return self._with_default(self.get_int, key, default)

    def get_float_with_default(self, key: str, default: float) -> float:
        return self._with_default(self.get_float, key, default)

    def get_string_with_default(self, key: str, default: str) -> str:
        return self._with_default(self.get_string, key, default)

    def get_bool_with_default(self, key: str, default: bool) -> bool:
        return self._with_default(self.get_bool, key, default)

    def get_duration_with_default(self, key: str, default: timedelta) -> timedelta:
        return self._with_default(self.get_duration, key, default)
