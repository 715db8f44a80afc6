"""Tests for the positional wire record decoder."""

from __future__ import annotations

from typing import Any

import pytest
from conftest import MESSAGE_RAW, STOP_RAW, line, trip_raw

from pyura.exceptions import FieldRangeError, FieldTypeMismatchError, MalformedRecordError, UraDecodeError
from pyura.ingestion.normalize import WireKind, wire_kind
from pyura.ingestion.records import (
    decode,
    decode_line,
    decode_message,
    decode_stop,
    decode_trip,
    parse_line,
    record_type,
)
from pyura.models import Message, MessageType, Stop, StopState, Trip, VersionMarker


def _with(raw: list[Any], index: int, value: Any) -> list[Any]:
    copy = list(raw)
    copy[index] = value
    return copy


# ------------------------------------------------------------------
# Wire kinds
# ------------------------------------------------------------------


class TestWireKind:
    @pytest.mark.parametrize(
        ("value", "kind"),
        [
            ("abc", WireKind.STRING),
            (0, WireKind.INT),
            (2**31 - 1, WireKind.INT),
            (2**31, WireKind.LONG),
            (1482854580000, WireKind.LONG),
            (2**64, WireKind.OTHER),
            (1.5, WireKind.FLOAT),
            (None, WireKind.NULL),
            (True, WireKind.BOOL),
            ([1], WireKind.OTHER),
        ],
    )
    def test_classification(self, value: Any, kind: WireKind) -> None:
        assert wire_kind(value) is kind


# ------------------------------------------------------------------
# Stop
# ------------------------------------------------------------------


class TestStop:
    def test_valid_list(self) -> None:
        stop = decode_stop(STOP_RAW)
        assert stop == Stop(
            id="100000",
            name="Aachen Bushof",
            indicator="H.1",
            state=0,
            latitude=50.7775936,
            longitude=6.0908191,
        )
        assert stop.stop_state is StopState.OPEN

    def test_null_indicator_is_absent(self) -> None:
        stop = decode_stop(_with(STOP_RAW, 3, None))
        assert stop.indicator is None

    def test_unmapped_state_is_kept_raw(self) -> None:
        stop = decode_stop(_with(STOP_RAW, 4, 9))
        assert stop.state == 9
        assert stop.stop_state is StopState.UNKNOWN

    def test_excess_elements_ignored(self) -> None:
        assert decode_stop([*STOP_RAW, "foo"]) == decode_stop(STOP_RAW)

    @pytest.mark.parametrize(
        ("index", "value"),
        [(1, 5), (2, 0), (3, -1.23), (4, "foo"), (5, "123"), (6, 456), (4, True)],
    )
    def test_invalid_field_type(self, index: int, value: Any) -> None:
        with pytest.raises(FieldTypeMismatchError) as excinfo:
            decode_stop(_with(STOP_RAW, index, value))
        assert excinfo.value.field == index

    def test_too_short(self) -> None:
        with pytest.raises(MalformedRecordError) as excinfo:
            decode_stop(STOP_RAW[:6])
        assert excinfo.value.expected == 7
        assert excinfo.value.actual == 6


# ------------------------------------------------------------------
# Trip
# ------------------------------------------------------------------


class TestTrip:
    def test_valid_list(self) -> None:
        raw = trip_raw()
        trip = decode_trip(raw)

        assert trip.stop.id == raw[2]
        assert trip.stop.name == raw[1]
        assert trip.stop.indicator == raw[3]
        assert trip.stop.state == raw[4]
        assert trip.stop.latitude == raw[5]
        assert trip.stop.longitude == raw[6]
        assert trip.visit_id == raw[7]
        assert trip.line_id == raw[8]
        assert trip.line_name == raw[9]
        assert trip.direction_id == raw[10]
        assert trip.destination_name == raw[11]
        assert trip.destination_text == raw[12]
        assert trip.vehicle_id == raw[13]
        assert trip.id == raw[14]
        assert trip.estimated_time == raw[15]

    def test_estimated_datetime_is_utc(self) -> None:
        trip = decode_trip(trip_raw(estimated_time=1482854580000))
        assert trip.estimated_datetime.isoformat() == "2016-12-27T16:03:00+00:00"

    def test_long_trip_id_is_stringified(self) -> None:
        trip = decode_trip(trip_raw(9876543210))
        assert trip.id == "9876543210"

    def test_int_trip_id_is_stringified(self) -> None:
        trip = decode_trip(trip_raw(123))
        assert trip.id == "123"

    def test_version_hint_does_not_change_result(self) -> None:
        assert decode_trip(trip_raw(), "2.0") == decode_trip(trip_raw())

    @pytest.mark.parametrize("direction", ["0", 0, "+0"])
    def test_direction_encodings_normalize_to_zero(self, direction: Any) -> None:
        trip = decode_trip(trip_raw(direction=direction))
        assert trip.direction_id == 0
        assert type(trip.direction_id) is int

    def test_direction_long_out_of_range(self) -> None:
        with pytest.raises(FieldRangeError):
            decode_trip(trip_raw(direction=2**33))

    @pytest.mark.parametrize("direction", [3, 7, "3", "7", -1])
    def test_direction_out_of_range(self, direction: Any) -> None:
        with pytest.raises(FieldRangeError) as excinfo:
            decode_trip(trip_raw(direction=direction))
        assert excinfo.value.field == 10

    @pytest.mark.parametrize("direction", ["north", " 1", "1_0", 1.0, None])
    def test_direction_wrong_type(self, direction: Any) -> None:
        with pytest.raises(FieldTypeMismatchError):
            decode_trip(trip_raw(direction=direction))

    def test_null_vehicle_id_is_absent(self) -> None:
        assert decode_trip(trip_raw(vehicle_id=None)).vehicle_id is None

    @pytest.mark.parametrize(("vehicle_id", "expected"), [(247, "247"), (2**40, str(2**40)), ("V12", "V12")])
    def test_numeric_vehicle_id_is_stringified(self, vehicle_id: Any, expected: str) -> None:
        assert decode_trip(trip_raw(vehicle_id=vehicle_id)).vehicle_id == expected

    def test_null_trip_id_is_rejected(self) -> None:
        with pytest.raises(FieldTypeMismatchError) as excinfo:
            decode_trip(trip_raw(None))
        assert excinfo.value.field == 14
        assert excinfo.value.actual == "null"

    def test_estimated_time_accepts_int(self) -> None:
        assert decode_trip(trip_raw(estimated_time=456)).estimated_time == 456

    @pytest.mark.parametrize(
        ("index", "value"),
        [
            (7, "123"),
            (7, 2**40),
            (8, 25),
            (9, 234),
            (11, 987),
            (12, 456.78),
            (13, 1.5),
            (14, 1.2),
            (15, "1482854580000"),
            (15, 1.5),
            (5, "50.77"),
        ],
    )
    def test_invalid_field_type(self, index: int, value: Any) -> None:
        with pytest.raises(FieldTypeMismatchError) as excinfo:
            decode_trip(_with(trip_raw(), index, value))
        assert excinfo.value.field == index

    def test_excess_elements_ignored(self) -> None:
        assert decode_trip([*trip_raw(), "foo", 42]) == decode_trip(trip_raw())

    def test_minimum_field_count_boundary(self) -> None:
        raw = trip_raw()
        assert isinstance(decode_trip(raw[:16]), Trip)
        with pytest.raises(MalformedRecordError):
            decode_trip(raw[:15])

    def test_embedded_stop_is_not_shared(self) -> None:
        first = decode_trip(trip_raw())
        second = decode_trip(trip_raw())
        assert first.stop == second.stop
        assert first.stop is not second.stop

    def test_trip_is_immutable(self) -> None:
        trip = decode_trip(trip_raw())
        with pytest.raises(ValueError):
            trip.line_id = "other"  # type: ignore[misc]


# ------------------------------------------------------------------
# Message
# ------------------------------------------------------------------


class TestMessage:
    def test_valid_list(self) -> None:
        message = decode_message(MESSAGE_RAW)
        assert message.stop.id == "100000"
        assert message.uuid == MESSAGE_RAW[7]
        assert message.type == 1
        assert message.message_type is MessageType.SPECIAL
        assert message.priority == 3
        assert message.text == "Haltestelle wird verlegt"

    def test_excess_elements_ignored(self) -> None:
        assert decode_message([*MESSAGE_RAW, "foo"]) == decode_message(MESSAGE_RAW)

    @pytest.mark.parametrize(("index", "value"), [(7, 123), (8, "abc"), (9, "xyz"), (10, 1.23)])
    def test_invalid_field_type(self, index: int, value: Any) -> None:
        with pytest.raises(FieldTypeMismatchError):
            decode_message(_with(MESSAGE_RAW, index, value))

    def test_minimum_field_count_boundary(self) -> None:
        assert isinstance(decode_message(MESSAGE_RAW[:11]), Message)
        with pytest.raises(MalformedRecordError):
            decode_message(MESSAGE_RAW[:10])


# ------------------------------------------------------------------
# Dispatch
# ------------------------------------------------------------------


class TestDecode:
    def test_dispatch_by_discriminator(self) -> None:
        assert isinstance(decode(STOP_RAW), Stop)
        assert isinstance(decode(trip_raw()), Trip)
        assert isinstance(decode(MESSAGE_RAW), Message)
        assert decode([4, "2.0", 1482854400000]) == VersionMarker(version="2.0")

    @pytest.mark.parametrize("raw", [None, [], [3, "x"], [99], ["1", "a"], [True]])
    def test_unknown_or_empty_is_skipped(self, raw: Any) -> None:
        assert decode(raw) is None

    @pytest.mark.parametrize(
        ("raw", "expected"),
        [([0, "Aachen Bushof"], 0), ([2, "x", "y"], 2), ([1], 1), (None, None), ([], None), (["1"], None), ([True], None)],
    )
    def test_record_type_reads_only_discriminator(self, raw: Any, expected: int | None) -> None:
        assert record_type(raw) == expected

    def test_version_marker_too_short(self) -> None:
        with pytest.raises(MalformedRecordError):
            decode([4])

    def test_decode_line(self) -> None:
        assert decode_line(line(trip_raw())) == decode_trip(trip_raw())
        assert decode_line("\n") is None

    @pytest.mark.parametrize("text", ['[1, "Aachen', '{"type": 1}', "42"])
    def test_parse_line_rejects_non_arrays(self, text: str) -> None:
        with pytest.raises(MalformedRecordError):
            parse_line(text)

    def test_all_decode_errors_share_base(self) -> None:
        for exc_type in (MalformedRecordError, FieldTypeMismatchError, FieldRangeError):
            assert issubclass(exc_type, UraDecodeError)
