import math
from datetime import timedelta

import pytest

from confstore.store import codec


@pytest.mark.parametrize(
    "text, expected",
    [
        ("5s", timedelta(seconds=5)),
        ("100ms", timedelta(milliseconds=100)),
        ("1h30m", timedelta(hours=1, minutes=30)),
        ("-1.5h", timedelta(hours=-1.5)),
        ("+2m", timedelta(minutes=2)),
        ("300us", timedelta(microseconds=300)),
        ("300µs", timedelta(microseconds=300)),
        ("1500ns", timedelta(microseconds=1)),
        (".5s", timedelta(milliseconds=500)),
        ("0", timedelta(0)),
        ("1m0.5s", timedelta(minutes=1, milliseconds=500)),
    ],
)
def test_parse_duration(text, expected) -> None:
    assert codec.parse_duration(text) == expected


@pytest.mark.parametrize("text", ["", "5", "s", "5 s", "5sec", "1d", "-", ".s", "1.2.3s", "5s "])
def test_parse_duration_rejects(text) -> None:
    with pytest.raises(ValueError):
        codec.parse_duration(text)


def test_parse_int() -> None:
    assert codec.parse_int("42") == 42
    assert codec.parse_int("-7") == -7
    assert codec.parse_int("+3") == 3
    for text in ("abc", "", " 1", "1.0", "1_000", "0x10"):
        with pytest.raises(ValueError):
            codec.parse_int(text)


def test_parse_float() -> None:
    assert codec.parse_float("3.14") == 3.14
    assert codec.parse_float("42") == 42.0
    assert codec.parse_float("-1e3") == -1000.0
    assert codec.parse_float("1e+21") == 1e21
    assert math.isinf(codec.parse_float("Inf"))
    for text in ("abc", "", "1_0", " 1.5", "1.5.", "e5"):
        with pytest.raises(ValueError):
            codec.parse_float(text)


def test_parse_bool() -> None:
    assert codec.parse_bool("true") is True
    assert codec.parse_bool("TRUE") is True
    assert codec.parse_bool("False") is False
    for text in ("1", "0", "yes", "t", "", "tRuE"):
        with pytest.raises(ValueError):
            codec.parse_bool(text)


@pytest.mark.parametrize(
    "value, expected",
    [
        (42, "42"),
        (3.14, "3.14"),
        (5.0, "5"),
        (1000000.0, "1000000"),
        (-0.5, "-0.5"),
        (1e21, "1e+21"),
        (True, "true"),
        (False, "false"),
        ("5s", "5s"),
        (None, "null"),
        ([1, "a"], '[1,"a"]'),
        ({"k": "ü"}, '{"k":"ü"}'),
    ],
)
def test_stringify(value, expected) -> None:
    assert codec.stringify(value) == expected


def test_decode_payload_accepts_bytes() -> None:
    assert codec.decode_payload(b'{"a": 1}') == {"a": 1}


@pytest.mark.parametrize("raw", ["nope", "[]", "null", '"text"', b"\xff\xfe", '{"a": Infinity}'])
def test_decode_payload_rejects(raw) -> None:
    with pytest.raises(ValueError):
        codec.decode_payload(raw)


def test_build_snapshot() -> None:
    snapshot = codec.build_snapshot({"int_key": 42, "bool_key": True, "duration_key": "5s"})

    assert snapshot == {"int_key": "42", "bool_key": "true", "duration_key": "5s"}


@pytest.mark.parametrize("text", ["9999999999999999h", "-9999999999999999h"])
def test_parse_duration_out_of_range(text) -> None:
    with pytest.raises(ValueError):
        codec.parse_duration(text)


def test_decode_payload_rejects_deep_nesting() -> None:
    raw = '{"a": ' + "[" * 200_000 + "]" * 200_000 + "}"

    with pytest.raises(ValueError):
        codec.decode_payload(raw)
