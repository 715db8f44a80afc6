"""Custom exception hierarchy for pyura."""

from __future__ import annotations


class UraError(Exception):
    """Base exception for all pyura errors."""


class UraConfigError(UraError):
    """Invalid or missing configuration."""


class UraTransportError(UraError):
    """HTTP-level failure (network, timeout, non-200)."""

    def __init__(
        self,
        message: str,
        *,
        status_code: int | None = None,
        url: str = "",
    ) -> None:
        self.status_code = status_code
        self.url = url
        super().__init__(message)


class AlreadyOpenError(UraError, RuntimeError):
    """``open()`` was called on a reader that is already streaming."""


class UraDecodeError(UraError):
    """A wire record could not be decoded into a typed record."""


class MalformedRecordError(UraDecodeError):
    """Line is not a JSON array, or has fewer fields than the record needs."""

    def __init__(
        self,
        message: str,
        *,
        record_type: str = "",
        expected: int | None = None,
        actual: int | None = None,
    ) -> None:
        self.record_type = record_type
        self.expected = expected
        self.actual = actual
        super().__init__(message)


class FieldTypeMismatchError(UraDecodeError):
    """A strict field carried a value of the wrong wire type.

    ``field`` is the positional index inside the wire array, ``expected``
    and ``actual`` are wire kind names (``"string"``, ``"int"``, ...).
    """

    def __init__(self, field: int, expected: str, actual: str) -> None:
        self.field = field
        self.expected = expected
        self.actual = actual
        super().__init__(f"Field {field} not of expected type {expected}, found {actual}")


class FieldRangeError(UraDecodeError):
    """A coerced field value is outside its domain range."""

    def __init__(self, field: int, value: object, message: str = "") -> None:
        self.field = field
        self.value = value
        super().__init__(message or f"Field {field} value {value!r} out of range")
