"""pyura - Async Python client for URA public transport real-time APIs."""

from importlib.metadata import PackageNotFoundError, version

try:
    __version__ = version("pyura")
except PackageNotFoundError:
    __version__ = "0+local"
from pyura.client import UraClient
from pyura.config import UraConfig
from pyura.exceptions import (
    AlreadyOpenError,
    FieldRangeError,
    FieldTypeMismatchError,
    MalformedRecordError,
    UraConfigError,
    UraDecodeError,
    UraError,
    UraTransportError,
)
from pyura.models import (
    DEFAULT_MESSAGE_PRIORITY,
    Message,
    MessageType,
    Stop,
    StopState,
    Trip,
    VersionMarker,
)
from pyura.query import Query
from pyura.reader import CLOSE_GRACE_PERIOD, AsyncTripReader, ConsumerRegistry, ReaderState, TripConsumer

__all__ = [
    "__version__",
    "AlreadyOpenError",
    "AsyncTripReader",
    "CLOSE_GRACE_PERIOD",
    "ConsumerRegistry",
    "DEFAULT_MESSAGE_PRIORITY",
    "FieldRangeError",
    "FieldTypeMismatchError",
    "MalformedRecordError",
    "Message",
    "MessageType",
    "Query",
    "ReaderState",
    "Stop",
    "StopState",
    "Trip",
    "TripConsumer",
    "UraClient",
    "UraConfig",
    "UraConfigError",
    "UraDecodeError",
    "UraError",
    "UraTransportError",
    "VersionMarker",
]
