"""
Redis-backed ConfigStore

Serves typed values from a snapshot that a background RefreshLoop
replaces wholesale from a single Redis key (the namespace key).

Readers on any thread take the shared lock; a refresh fetches and decodes
outside the lock and takes the exclusive lock only to swap the snapshot
reference, so readers never see a half-applied refresh.
"""

import asyncio
import time
from datetime import datetime, timedelta, timezone
from types import MappingProxyType
from typing import Callable, Mapping, TypeVar

import redis.asyncio as redis
from redis.exceptions import RedisError

from ..common.exceptions import (
    ConstructionError,
    DecodeError,
    NotFoundError,
    ParseError,
    RetrievalError,
    StoreStateError,
)
from ..common.logging_setup import get_service_logger, log_refresh
from ..common.scheduler import RefreshLoop
from ..common.settings import StoreSettings
from . import codec
from .base import ConfigStore
from .rwlock import ReadWriteLock

logger = get_service_logger("store.redis")

T = TypeVar("T")

_REMOTE_ERRORS = (RedisError, OSError, asyncio.TimeoutError)


def create_client(settings: StoreSettings) -> redis.Redis:
    """Build an asyncio Redis client from settings."""
    if settings.redis_url:
        return redis.from_url(
            settings.redis_url,
            socket_timeout=settings.socket_timeout_s,
            decode_responses=True,
        )
    return redis.Redis(
        host=settings.redis_host,
        port=settings.redis_port,
        db=settings.redis_db,
        password=settings.redis_password,
        socket_timeout=settings.socket_timeout_s,
        decode_responses=True,
    )


class RedisConfigStore(ConfigStore):
    """
    Periodically refreshed configuration store.

    Build with `await RedisConfigStore.connect(...)` or
    `await RedisConfigStore.from_settings(...)`, which check that Redis is
    reachable. The store starts with an empty snapshot; call load_config()
    or start_loading() to populate it.
    """

    def __init__(self, namespace: str, client: redis.Redis):
        self.namespace = namespace
        self._client = client

        self._lock = ReadWriteLock()
        self._snapshot: dict[str, str] = {}
        self._updated_at: datetime | None = None

        self._refresh_loop: RefreshLoop | None = None
        self._closed = False
        self._stop_task: asyncio.Future | None = None

    @classmethod
    async def connect(cls, namespace: str, client: redis.Redis) -> "RedisConfigStore":
        """
        Bind a store to `client` after a liveness check.

        Raises:
            ConstructionError: namespace is empty or Redis did not answer PING
        """
        if not namespace:
            raise ConstructionError("namespace key is required")

        try:
            await client.ping()
        except _REMOTE_ERRORS as e:
            logger.error(f"Redis unreachable for namespace {namespace}: {e}")
            raise ConstructionError(f"redis unreachable: {e}") from e

        logger.info(f"Config store bound to namespace {namespace}", extra={"namespace": namespace})
        return cls(namespace, client)

    @classmethod
    async def from_settings(cls, settings: StoreSettings) -> "RedisConfigStore":
        """Create the Redis client from settings and connect."""
        client = create_client(settings)
        try:
            return await cls.connect(settings.namespace, client)
        except ConstructionError:
            await client.aclose()
            raise

    # Refresh

    async def load_config(self) -> None:
        """
        Fetch, decode and swap in a new snapshot.

        Raises:
            RetrievalError: Redis call failed or the namespace key is absent
            DecodeError: payload is not a JSON object
        """
        start = time.monotonic()

        try:
            raw = await self._client.get(self.namespace)
        except _REMOTE_ERRORS as e:
            raise RetrievalError(f"failed to get config: {e}", self.namespace) from e

        if raw is None:
            raise RetrievalError("namespace key not found", self.namespace)

        try:
            snapshot = codec.build_snapshot(codec.decode_payload(raw))
        except (ValueError, RecursionError) as e:
            raise DecodeError(f"failed to decode config: {e}", self.namespace) from e

        updated_at = datetime.now(timezone.utc)
        with self._lock.writer():
            self._snapshot = snapshot
            self._updated_at = updated_at

        log_refresh(logger, self.namespace, len(snapshot), (time.monotonic() - start) * 1000)

    def start_loading(self, interval: timedelta | float) -> None:
        """
        Refresh every `interval` on the running event loop.

        The first refresh happens after one full interval. Calling this
        again while running is a no-op.

        Raises:
            StoreStateError: the store was already stopped
        """
        if self._closed:
            raise StoreStateError(f"Config store {self.namespace} is stopped")

        if self._refresh_loop is None:
            self._refresh_loop = RefreshLoop(interval, self.load_config, name=self.namespace)
        self._refresh_loop.start()

    async def stop_loading(self) -> None:
        """
        Stop refreshing and close the Redis client.

        Waits for an in-flight refresh to finish before closing, so no
        refresh ever runs against a closed client. Every caller, including
        concurrent ones, returns only once shutdown has completed.
        """
        if self._stop_task is None:
            self._closed = True
            self._stop_task = asyncio.ensure_future(self._shutdown())
        await asyncio.shield(self._stop_task)

    async def _shutdown(self) -> None:
        try:
            if self._refresh_loop is not None:
                await self._refresh_loop.stop()
        finally:
            await self._client.aclose()
        logger.info(f"Config store {self.namespace} closed", extra={"namespace": self.namespace})

    @property
    def updated_at(self) -> datetime | None:
        """UTC time of the last successful refresh, None before the first."""
        with self._lock.reader():
            return self._updated_at

    @property
    def refresh_stats(self) -> dict | None:
        if self._refresh_loop is None:
            return None
        return self._refresh_loop.get_stats()

    def snapshot(self) -> Mapping[str, str]:
        """Read-only view of the current snapshot."""
        with self._lock.reader():
            return MappingProxyType(self._snapshot)

    # Typed getters

    def _lookup(self, key: str) -> str:
        with self._lock.reader():
            try:
                return self._snapshot[key]
            except KeyError:
                raise NotFoundError(key) from None

    def _parse(self, key: str, parser: Callable[[str], T], target: str) -> T:
        text = self._lookup(key)
        try:
            return parser(text)
        except ValueError:
            raise ParseError(key, text, target) from None

    def get_int(self, key: str) -> int:
        return self._parse(key, codec.parse_int, "int")

    def get_float(self, key: str) -> float:
        return self._parse(key, codec.parse_float, "float")

    def get_string(self, key: str) -> str:
        return self._lookup(key)

    def get_bool(self, key: str) -> bool:
        return self._parse(key, codec.parse_bool, "bool")

    def get_duration(self, key: str) -> timedelta:
        return self._parse(key, codec.parse_duration, "duration")
