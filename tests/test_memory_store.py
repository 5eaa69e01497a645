from datetime import timedelta

import pytest

from confstore import ConfigStore, InMemoryConfigStore, NotFoundError, ParseError


@pytest.fixture
def store() -> InMemoryConfigStore:
    return InMemoryConfigStore({
        "int_key": 42,
        "float_key": 3.14,
        "string_key": "test_value",
        "bool_key": True,
        "duration_key": timedelta(seconds=5),
    })


def test_is_config_store(store) -> None:
    assert isinstance(store, ConfigStore)


def test_typed_getters(store) -> None:
    assert store.get_int("int_key") == 42
    assert store.get_float("float_key") == 3.14
    assert store.get_string("string_key") == "test_value"
    assert store.get_bool("bool_key") is True
    assert store.get_duration("duration_key") == timedelta(seconds=5)


def test_missing_key(store) -> None:
    for getter in (store.get_int, store.get_float, store.get_string, store.get_bool, store.get_duration):
        with pytest.raises(NotFoundError):
            getter("missing")


def test_no_coercion_between_types(store) -> None:
    with pytest.raises(ParseError):
        store.get_int("bool_key")
    with pytest.raises(ParseError):
        store.get_float("int_key")
    with pytest.raises(ParseError):
        store.get_string("int_key")
    with pytest.raises(ParseError):
        store.get_bool("int_key")
    with pytest.raises(ParseError):
        store.get_duration("string_key")


def test_getters_with_default(store) -> None:
    assert store.get_int_with_default("int_key", 1) == 42
    assert store.get_int_with_default("missing", 1) == 1
    assert store.get_int_with_default("string_key", 1) == 1
    assert store.get_float_with_default("missing", 1.5) == 1.5
    assert store.get_string_with_default("missing", "x") == "x"
    assert store.get_bool_with_default("missing", False) is False
    assert store.get_duration_with_default("missing", timedelta(seconds=1)) == timedelta(seconds=1)


def test_data_is_copied() -> None:
    data = {"int_key": 1}
    store = InMemoryConfigStore(data)
    data["int_key"] = 2

    assert store.get_int("int_key") == 1


@pytest.mark.asyncio
async def test_refresh_controls_are_noops(store) -> None:
    store.start_loading(1)
    await store.load_config()
    await store.stop_loading()

    assert store.get_int("int_key") == 42
