"""Flex message model."""

from __future__ import annotations

from pyura.models._base import UraBaseModel, UraEnum
from pyura.models.stop import Stop

#: Priority the server assigns to messages created without one.
DEFAULT_MESSAGE_PRIORITY = 3


class MessageType(UraEnum):
    """Display class of a flex message."""

    UNKNOWN = -1
    NORMAL = 0
    SPECIAL = 1
    FULL_MATRIX = 2
    """Stop is temporarily out of service; predictions should not be shown."""


class Message(UraBaseModel):
    """A flexible text message targeted at one stop.

    The ``uuid`` is unique per message and stop pair. Priorities range
    from 1 (highest) to 10.
    """

    stop: Stop
    uuid: str
    type: int
    priority: int = DEFAULT_MESSAGE_PRIORITY
    text: str

    @property
    def message_type(self) -> MessageType:
        return MessageType(self.type)
