"""Ingestion layer.

Turns raw wire lines from the URA instant and stream endpoints into typed
records.
"""

from pyura.ingestion.records import (
    decode,
    decode_line,
    decode_message,
    decode_stop,
    decode_trip,
    parse_line,
    record_type,
)
from pyura.ingestion.version import SchemaResolver

__all__ = [
    "SchemaResolver",
    "decode",
    "decode_line",
    "decode_message",
    "decode_stop",
    "decode_trip",
    "parse_line",
    "record_type",
]
