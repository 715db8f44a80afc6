"""Normalization helpers.

Classifies untyped JSON values into wire kinds and applies the few
tolerant coercions the URA feeds need.
"""

from __future__ import annotations

import re
from enum import StrEnum
from typing import Any

from pyura.exceptions import FieldRangeError, FieldTypeMismatchError

_INT32_MIN = -(2**31)
_INT32_MAX = 2**31 - 1
_INT64_MIN = -(2**63)
_INT64_MAX = 2**63 - 1
_DECIMAL = re.compile(r"[+-]?[0-9]+")


class WireKind(StrEnum):
    STRING = "string"
    INT = "int"
    LONG = "long"
    FLOAT = "float"
    NULL = "null"
    BOOL = "bool"
    OTHER = "other"


def wire_kind(value: Any) -> WireKind:
    """Return the wire kind of a decoded JSON value.

    Integers are split into ``INT`` (fits 32 bits) and ``LONG`` (fits 64
    bits); anything wider is ``OTHER``. ``bool`` is checked before ``int``
    because it is an ``int`` subclass in Python.
    """
    if value is None:
        return WireKind.NULL
    if isinstance(value, bool):
        return WireKind.BOOL
    if isinstance(value, int):
        if _INT32_MIN <= value <= _INT32_MAX:
            return WireKind.INT
        if _INT64_MIN <= value <= _INT64_MAX:
            return WireKind.LONG
        return WireKind.OTHER
    if isinstance(value, float):
        return WireKind.FLOAT
    if isinstance(value, str):
        return WireKind.STRING
    return WireKind.OTHER


def expect(raw: list[Any], index: int, *kinds: WireKind) -> Any:
    """Return ``raw[index]`` if its wire kind is one of *kinds*."""
    value = raw[index]
    kind = wire_kind(value)
    if kind not in kinds:
        raise FieldTypeMismatchError(index, "|".join(kinds), kind.value)
    return value


def expect_str(raw: list[Any], index: int) -> str:
    return str(expect(raw, index, WireKind.STRING))


def expect_optional_str(raw: list[Any], index: int) -> str | None:
    value = expect(raw, index, WireKind.STRING, WireKind.NULL)
    return None if value is None else str(value)


def expect_int(raw: list[Any], index: int) -> int:
    return int(expect(raw, index, WireKind.INT))


def expect_long(raw: list[Any], index: int) -> int:
    # An int is always a valid long; JSON parsers pick the narrowest type.
    return int(expect(raw, index, WireKind.INT, WireKind.LONG))


def expect_float(raw: list[Any], index: int) -> float:
    return float(expect(raw, index, WireKind.FLOAT))


def coerce_int_in_range(raw: list[Any], index: int, lower: int, upper: int) -> int:
    """Accept a string, int or long and return it as an int in ``[lower, upper]``."""
    value = expect(raw, index, WireKind.STRING, WireKind.INT, WireKind.LONG)
    if isinstance(value, str):
        if not _DECIMAL.fullmatch(value):
            raise FieldTypeMismatchError(index, "int", "string")
        value = int(value)
    if not lower <= value <= upper:
        raise FieldRangeError(index, value, f"Field {index} value {value} not in range [{lower}, {upper}]")
    return int(value)


def coerce_id(raw: list[Any], index: int) -> str:
    """Accept a string, int or long identifier and return its string form."""
    return str(expect(raw, index, WireKind.STRING, WireKind.INT, WireKind.LONG))


def coerce_optional_id(raw: list[Any], index: int) -> str | None:
    """Like :func:`coerce_id` but ``null`` is preserved as ``None``."""
    value = expect(raw, index, WireKind.STRING, WireKind.INT, WireKind.LONG, WireKind.NULL)
    return None if value is None else str(value)
