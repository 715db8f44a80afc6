"""Record decoder.

Turns one wire line (a JSON array of positional fields) into a typed
record. Layouts, 0-indexed::

    Stop     [0, name, id, indicator|null, state, lat, lon, ...]
    Trip     [1, <stop 1..6>, visit, line_id, line_name, direction,
              dest_name, dest_text, vehicle_id, trip_id, estimated_time, ...]
    Message  [2, <stop 1..6>, uuid, type, priority, text, ...]
    Version  [4, version, ...]

Trailing fields beyond the layout are ignored. Unknown discriminators
decode to ``None`` so newer record types can be skipped. Decoding is pure:
it never logs and never retries.
"""

from __future__ import annotations

import json
from typing import Any

from pyura._constants import (
    RES_TYPE_FLEX_MESSAGE,
    RES_TYPE_PREDICTION,
    RES_TYPE_STOP,
    RES_TYPE_URA_VERSION,
)
from pyura.exceptions import MalformedRecordError
from pyura.ingestion.normalize import (
    WireKind,
    coerce_id,
    coerce_int_in_range,
    coerce_optional_id,
    expect,
    expect_float,
    expect_int,
    expect_long,
    expect_optional_str,
    expect_str,
    wire_kind,
)
from pyura.models import Message, Record, Stop, Trip, VersionMarker

STOP_NAME = 1
STOP_ID = 2
STOP_INDICATOR = 3
STOP_STATE = 4
STOP_LATITUDE = 5
STOP_LONGITUDE = 6
STOP_NUM_OF_FIELDS = 7

TRIP_VISIT_ID = 7
TRIP_LINE_ID = 8
TRIP_LINE_NAME = 9
TRIP_DIRECTION_ID = 10
TRIP_DEST_NAME = 11
TRIP_DEST_TEXT = 12
TRIP_VEHICLE_ID = 13
TRIP_ID = 14
TRIP_EST_TIME = 15
TRIP_NUM_OF_FIELDS = 16

MSG_UUID = 7
MSG_TYPE = 8
MSG_PRIORITY = 9
MSG_TEXT = 10
MSG_NUM_OF_FIELDS = 11

VERSION_STRING = 1
VERSION_NUM_OF_FIELDS = 2

DIRECTION_MIN = 0
DIRECTION_MAX = 2


def parse_line(line: str) -> list[Any] | None:
    """JSON-decode one wire line into its raw field list.

    Returns ``None`` for blank lines (keep-alives).
    """
    text = line.strip()
    if not text:
        return None
    try:
        parsed = json.loads(text)
    except json.JSONDecodeError as exc:
        raise MalformedRecordError(f"Line is not valid JSON: {text[:64]}") from exc
    if not isinstance(parsed, list):
        raise MalformedRecordError(f"Line is not a JSON array: {text[:64]}")
    return parsed


def _require_fields(raw: list[Any], count: int, record_type: str) -> None:
    if len(raw) < count:
        raise MalformedRecordError(
            f"Invalid number of fields for {record_type}: expected at least {count}, got {len(raw)}",
            record_type=record_type,
            expected=count,
            actual=len(raw),
        )


def decode_stop(raw: list[Any]) -> Stop:
    """Decode the stop fields (positions 1..6) of any stop-carrying record."""
    _require_fields(raw, STOP_NUM_OF_FIELDS, "Stop")
    return Stop(
        name=expect_str(raw, STOP_NAME),
        id=expect_str(raw, STOP_ID),
        indicator=expect_optional_str(raw, STOP_INDICATOR),
        state=expect_int(raw, STOP_STATE),
        latitude=expect_float(raw, STOP_LATITUDE),
        longitude=expect_float(raw, STOP_LONGITUDE),
    )


def decode_trip(raw: list[Any], version: str | None = None) -> Trip:
    """Decode a prediction record.

    *version* is the latest version announced on the stream. No field is
    interpreted differently per version yet.
    """
    _require_fields(raw, TRIP_NUM_OF_FIELDS, "Trip")
    return Trip(
        stop=decode_stop(raw),
        visit_id=expect_int(raw, TRIP_VISIT_ID),
        line_id=expect_str(raw, TRIP_LINE_ID),
        line_name=expect_str(raw, TRIP_LINE_NAME),
        direction_id=coerce_int_in_range(raw, TRIP_DIRECTION_ID, DIRECTION_MIN, DIRECTION_MAX),
        destination_name=expect_str(raw, TRIP_DEST_NAME),
        destination_text=expect_str(raw, TRIP_DEST_TEXT),
        vehicle_id=coerce_optional_id(raw, TRIP_VEHICLE_ID),
        id=coerce_id(raw, TRIP_ID),
        estimated_time=expect_long(raw, TRIP_EST_TIME),
    )


def decode_message(raw: list[Any], version: str | None = None) -> Message:
    """Decode a flex message record."""
    _require_fields(raw, MSG_NUM_OF_FIELDS, "Message")
    return Message(
        stop=decode_stop(raw),
        uuid=expect_str(raw, MSG_UUID),
        type=expect_int(raw, MSG_TYPE),
        priority=expect_int(raw, MSG_PRIORITY),
        text=expect_str(raw, MSG_TEXT),
    )


def decode_version(raw: list[Any]) -> VersionMarker:
    _require_fields(raw, VERSION_NUM_OF_FIELDS, "VersionMarker")
    value = expect(raw, VERSION_STRING, WireKind.STRING, WireKind.INT, WireKind.LONG, WireKind.FLOAT)
    return VersionMarker(version=str(value))


def record_type(raw: list[Any] | None) -> int | None:
    """Return the discriminator of *raw* without decoding any other field.

    ``None`` for an empty list or a discriminator that is not an int.
    """
    if not raw:
        return None
    discriminator = raw[0]
    if wire_kind(discriminator) is not WireKind.INT:
        return None
    return int(discriminator)


def decode(raw: list[Any] | None, version: str | None = None) -> Record | None:
    """Decode a raw field list into a typed record.

    Returns ``None`` for an empty list or an unknown discriminator.
    """
    discriminator = record_type(raw)
    if raw is None or discriminator is None:
        return None
    if discriminator == RES_TYPE_STOP:
        return decode_stop(raw)
    if discriminator == RES_TYPE_PREDICTION:
        return decode_trip(raw, version)
    if discriminator == RES_TYPE_FLEX_MESSAGE:
        return decode_message(raw, version)
    if discriminator == RES_TYPE_URA_VERSION:
        return decode_version(raw)
    return None


def decode_line(line: str, version: str | None = None) -> Record | None:
    """Parse and decode one wire line."""
    return decode(parse_line(line), version)
