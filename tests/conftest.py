import json

import fakeredis
import pytest

from confstore import RedisConfigStore

NAMESPACE = "svc"

SAMPLE_CONFIG = {
    "int_key": 42,
    "float_key": 3.14,
    "string_key": "test_value",
    "bool_key": True,
    "duration_key": "5s",
}


@pytest.fixture
def server() -> fakeredis.FakeServer:
    return fakeredis.FakeServer()


@pytest.fixture
def seed(server):
    """Write a payload under a namespace key through a sync client on the same server."""
    writer = fakeredis.FakeRedis(server=server, decode_responses=True)

    def _seed(config, namespace: str = NAMESPACE) -> None:
        payload = config if isinstance(config, str) else json.dumps(config)
        writer.set(namespace, payload)

    return _seed


@pytest.fixture
def client(server) -> fakeredis.FakeAsyncRedis:
    return fakeredis.FakeAsyncRedis(server=server, decode_responses=True)


@pytest.fixture
def store(client) -> RedisConfigStore:
    return RedisConfigStore(NAMESPACE, client)
