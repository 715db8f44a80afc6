"""Asynchronous stream reader for the URA stream API.

Owns:
- the consumer registry (append-only, safe to extend while streaming)
- the line subscriber that decodes stream lines one at a time
- the background task lifecycle with bounded-wait close
"""

from __future__ import annotations

import asyncio
import logging
import threading
from collections.abc import AsyncIterator, Callable, Iterable, Mapping
from enum import StrEnum

from yarl import URL

from pyura._constants import RES_TYPE_PREDICTION, RES_TYPE_URA_VERSION
from pyura._transport import LineTransport
from pyura.exceptions import AlreadyOpenError
from pyura.ingestion.records import decode, parse_line, record_type
from pyura.ingestion.version import SchemaResolver
from pyura.models import Trip

_logger = logging.getLogger(__name__)

_STREAM_RECORD_TYPES = frozenset({RES_TYPE_PREDICTION, RES_TYPE_URA_VERSION})

TripConsumer = Callable[[Trip], None]

#: Seconds ``close()`` waits for the read task before cancelling it.
CLOSE_GRACE_PERIOD: float = 1.0


class ReaderState(StrEnum):
    UNOPENED = "unopened"
    OPEN = "open"
    CLOSED = "closed"


class ConsumerRegistry:
    """Append-only list of trip consumers.

    Appends replace the stored tuple under a lock, so a fan-out iterating
    over an earlier snapshot is never affected by a concurrent ``add``.
    """

    def __init__(self, consumers: Iterable[TripConsumer] = ()) -> None:
        self._lock = threading.Lock()
        self._consumers: tuple[TripConsumer, ...] = tuple(consumers)

    def add(self, consumer: TripConsumer) -> None:
        with self._lock:
            self._consumers = (*self._consumers, consumer)

    def snapshot(self) -> tuple[TripConsumer, ...]:
        return self._consumers

    def __len__(self) -> int:
        return len(self._consumers)

    def dispatch(self, trip: Trip) -> int:
        """Hand *trip* to every registered consumer in registration order.

        A consumer that raises is logged and skipped; the others still
        receive the trip. Returns the number of failed consumers.
        """
        failures = 0
        for consumer in self.snapshot():
            try:
                consumer(trip)
            except Exception:
                failures += 1
                _logger.warning("Trip consumer %r failed", consumer, exc_info=True)
        return failures


class TripLineSubscriber:
    """Pull-based subscriber over the text lines of one stream session.

    Each line is decoded before the next one is requested. Version markers
    update the resolver, trips go to *deliver*, anything else is skipped.
    A decode failure ends the session.
    """

    def __init__(
        self,
        resolver: SchemaResolver,
        deliver: Callable[[Trip], object],
        should_stop: Callable[[], bool] = lambda: False,
    ) -> None:
        self._resolver = resolver
        self._deliver = deliver
        self._should_stop = should_stop
        self.lines_read = 0
        self.trips_delivered = 0

    def on_line(self, line: str) -> Trip | None:
        raw = parse_line(line)
        # Stops and messages are only served by the instant endpoint and are
        # skipped undecoded.
        if record_type(raw) not in _STREAM_RECORD_TYPES:
            return None
        record = decode(raw, self._resolver.hint)
        if self._resolver.observe(record):
            return None
        if not isinstance(record, Trip):
            return None
        self.trips_delivered += 1
        self._deliver(record)
        return record

    async def consume(self, lines: AsyncIterator[str]) -> None:
        """Process *lines* until end of stream or a stop request."""
        while not self._should_stop():
            try:
                line = await anext(lines)
            except StopAsyncIteration:
                _logger.debug("Stream ended after %d lines", self.lines_read)
                return
            if self._should_stop():
                break
            self.lines_read += 1
            self.on_line(line)
        _logger.debug("Stream stopped on request after %d lines", self.lines_read)


class AsyncTripReader:
    """Background reader that streams trips to registered consumers.

    Usage::

        reader = client.trip_stream(consumers=[print])
        reader.open()
        ...
        await reader.close()

    or as an async context manager. The reader can be opened again after
    ``close()`` has returned, but never twice at the same time.
    """

    def __init__(
        self,
        transport: LineTransport,
        url: URL,
        *,
        params: Mapping[str, str] | None = None,
        consumers: TripConsumer | Iterable[TripConsumer] | None = None,
        grace_period: float = CLOSE_GRACE_PERIOD,
    ) -> None:
        self._transport = transport
        self._url = url
        self._params = dict(params) if params else None
        if consumers is None:
            initial: Iterable[TripConsumer] = ()
        elif callable(consumers):
            initial = (consumers,)
        else:
            initial = consumers
        self._registry = ConsumerRegistry(initial)
        self._resolver = SchemaResolver()
        self._grace_period = grace_period
        self._state = ReaderState.UNOPENED
        self._task: asyncio.Task[None] | None = None
        self._subscriber: TripLineSubscriber | None = None
        self._cancel_requested = False
        self._close_lock: asyncio.Lock | None = None

    # ------------------------------------------------------------------
    # Context manager lifecycle
    # ------------------------------------------------------------------

    async def __aenter__(self) -> AsyncTripReader:
        self.open()
        return self

    async def __aexit__(self, *exc: object) -> None:
        await self.close()

    # ------------------------------------------------------------------
    # Public API
    # ------------------------------------------------------------------

    @property
    def state(self) -> ReaderState:
        return self._state

    @property
    def url(self) -> URL:
        return self._url

    @property
    def consumers(self) -> tuple[TripConsumer, ...]:
        return self._registry.snapshot()

    @property
    def schema_version(self) -> str | None:
        """Latest version announced on the current session, if any."""
        return self._resolver.current_version

    @property
    def done(self) -> bool:
        """Whether the read task of the current session has finished."""
        return self._task is not None and self._task.done()

    def exception(self) -> BaseException | None:
        """Failure of a finished read task, ``None`` while running or on success."""
        task = self._task
        if task is None or not task.done() or task.cancelled():
            return None
        return task.exception()

    def add_consumer(self, consumer: TripConsumer) -> None:
        """Register an additional consumer.

        Consumers added while streaming only receive trips decoded after
        the call.
        """
        self._registry.add(consumer)

    def open(self) -> None:
        """Start streaming in a background task and return immediately.

        Must be called from a running event loop.
        """
        if self._state is ReaderState.OPEN:
            raise AlreadyOpenError("Reader already opened")

        loop = asyncio.get_running_loop()
        self._resolver.reset()
        self._cancel_requested = False
        self._close_lock = asyncio.Lock()
        self._subscriber = TripLineSubscriber(
            self._resolver,
            self._registry.dispatch,
            should_stop=lambda: self._cancel_requested,
        )
        self._task = loop.create_task(self._run(self._subscriber), name=f"pyura-stream {self._url}")
        self._state = ReaderState.OPEN
        _logger.debug("Trip reader opened url=%s consumers=%d", self._url, len(self._registry))

    async def join(self) -> None:
        """Wait for the stream to end on its own, without cancelling it.

        Failures are not raised here; ``close()`` reports them.
        """
        task = self._task
        if task is not None:
            await asyncio.wait({task})

    async def close(self) -> None:
        """Close the reader.

        Signals the read task to stop and waits up to the grace period
        (1 second by default). A task still running after that is
        cancelled hard, and abandoned if it has not finished one more
        grace period later. Raises the session's decode or transport error
        if the task failed.
        """
        lock = self._close_lock
        if lock is None:
            return

        async with lock:
            if self._state is not ReaderState.OPEN:
                return
            task = self._task
            assert task is not None  # noqa: S101
            self._cancel_requested = True
            try:
                done, _ = await asyncio.wait({task}, timeout=self._grace_period)
                if not done:
                    _logger.warning(
                        "Trip reader did not stop within %.1fs, cancelling url=%s",
                        self._grace_period,
                        self._url,
                    )
                    task.cancel()
                    done, _ = await asyncio.wait({task}, timeout=self._grace_period)
                    if not done:
                        _logger.warning(
                            "Trip reader task still running %.1fs after cancel, abandoning url=%s",
                            self._grace_period,
                            self._url,
                        )
            except asyncio.CancelledError:
                task.cancel()
                raise
            finally:
                self._state = ReaderState.CLOSED
                _logger.debug("Trip reader closed url=%s", self._url)

            if not task.done() or task.cancelled():
                return
            failure = task.exception()
            if failure is not None:
                raise failure

    # ------------------------------------------------------------------
    # Internal helpers
    # ------------------------------------------------------------------

    async def _run(self, subscriber: TripLineSubscriber) -> None:
        try:
            async with self._transport.stream_lines(self._url, self._params) as lines:
                _logger.debug("Stream connected url=%s", self._url)
                await subscriber.consume(lines)
        except asyncio.CancelledError:
            _logger.debug("Stream task cancelled url=%s", self._url)
            raise
        except Exception:
            _logger.debug("Stream session failed url=%s", self._url, exc_info=True)
            raise
