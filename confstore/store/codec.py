"""
Snapshot Codec

Turns a remote JSON payload into a snapshot (key -> string) and parses
snapshot strings back into typed values. Parsers raise ValueError; the
store wraps that into ParseError with the offending key.
"""

import json
import re
from datetime import timedelta
from decimal import Decimal
from typing import Any

_INT_RE = re.compile(r"[+-]?[0-9]+")
_FLOAT_RE = re.compile(
    r"[+-]?(?:(?:[0-9]+\.?[0-9]*|\.[0-9]+)(?:[eE][+-]?[0-9]+)?|inf|infinity|nan)",
    re.IGNORECASE,
)
_DURATION_PART_RE = re.compile(r"([0-9]+\.?[0-9]*|\.[0-9]+)(ns|us|µs|μs|ms|s|m|h)")

_TRUE_WORDS = frozenset(("true", "True", "TRUE"))
_FALSE_WORDS = frozenset(("false", "False", "FALSE"))

# Nanoseconds per unit
_DURATION_UNITS = {
    "ns": 1,
    "us": 1_000,
    "µs": 1_000,  # U+00B5 micro sign
    "μs": 1_000,  # U+03BC greek mu
    "ms": 1_000_000,
    "s": 1_000_000_000,
    "m": 60 * 1_000_000_000,
    "h": 3600 * 1_000_000_000,
}

# Above this, integral floats keep exponent notation
_PLAIN_FLOAT_LIMIT = 1e21


def _reject_constant(name: str) -> Any:
    raise ValueError(f"non-standard JSON constant {name}")


def decode_payload(raw: str | bytes) -> dict[str, Any]:
    """
    Decode a remote payload into a dict of native values.

    Raises:
        ValueError: payload is not UTF-8, not JSON, or not a JSON object
    """
    if isinstance(raw, bytes):
        raw = raw.decode("utf-8")
    try:
        data = json.loads(raw, parse_constant=_reject_constant)
    except RecursionError:
        raise ValueError("payload nested too deeply") from None
    if not isinstance(data, dict):
        raise ValueError(f"expected a JSON object, got {type(data).__name__}")
    return data


def stringify(value: Any) -> str:
    """Render a decoded JSON value in its natural text form."""
    if isinstance(value, bool):
        return "true" if value else "false"
    if isinstance(value, int):
        return str(value)
    if isinstance(value, float):
        if value.is_integer() and abs(value) < _PLAIN_FLOAT_LIMIT:
            return str(int(value))
        return repr(value)
    if isinstance(value, str):
        return value
    if value is None:
        return "null"
    return json.dumps(value, separators=(",", ":"), ensure_ascii=False)


def build_snapshot(data: dict[str, Any]) -> dict[str, str]:
    return {str(key): stringify(value) for key, value in data.items()}


def parse_int(text: str) -> int:
    if not _INT_RE.fullmatch(text):
        raise ValueError(f"invalid integer {text!r}")
    return int(text)


def parse_float(text: str) -> float:
    if not _FLOAT_RE.fullmatch(text):
        raise ValueError(f"invalid float {text!r}")
    return float(text)


def parse_bool(text: str) -> bool:
    if text in _TRUE_WORDS:
        return True
    if text in _FALSE_WORDS:
        return False
    raise ValueError(f"invalid boolean {text!r}")


def parse_duration(text: str) -> timedelta:
    """
    Parse short-unit duration text such as "5s", "100ms" or "-1h30m".

    Sub-microsecond remainders are truncated toward zero.
    """
    body = text
    negative = False
    if body[:1] in ("+", "-"):
        negative = body[0] == "-"
        body = body[1:]

    if body == "0":
        return timedelta(0)
    if not body:
        raise ValueError(f"invalid duration {text!r}")

    total_ns = Decimal(0)
    pos = 0
    while pos < len(body):
        match = _DURATION_PART_RE.match(body, pos)
        if not match:
            raise ValueError(f"invalid duration {text!r}")
        number, unit = match.groups()
        total_ns += Decimal(number) * _DURATION_UNITS[unit]
        pos = match.end()

    micros = int(total_ns / 1000)
    try:
        return timedelta(microseconds=-micros if negative else micros)
    except OverflowError:
        raise ValueError(f"invalid duration {text!r}") from None
