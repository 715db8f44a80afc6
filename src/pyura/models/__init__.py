"""Data models for URA records."""

from pyura.models._base import UraBaseModel, UraEnum, epoch_ms_to_datetime
from pyura.models.message import DEFAULT_MESSAGE_PRIORITY, Message, MessageType
from pyura.models.stop import Stop, StopState
from pyura.models.trip import Trip
from pyura.models.version import VersionMarker

Record = Stop | Trip | Message | VersionMarker

__all__ = [
    "DEFAULT_MESSAGE_PRIORITY",
    "Message",
    "MessageType",
    "Record",
    "Stop",
    "StopState",
    "Trip",
    "UraBaseModel",
    "UraEnum",
    "VersionMarker",
    "epoch_ms_to_datetime",
]
