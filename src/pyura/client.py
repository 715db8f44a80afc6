"""High-level async client for URA based public transport APIs."""

from __future__ import annotations

import logging
from collections.abc import Iterable
from typing import Any, TypeVar

import aiohttp

from pyura._constants import (
    REQUEST_MESSAGE,
    REQUEST_STOP,
    REQUEST_TRIP,
    RES_TYPE_FLEX_MESSAGE,
    RES_TYPE_PREDICTION,
    RES_TYPE_STOP,
    RES_TYPE_URA_VERSION,
)
from pyura._transport import HttpLineTransport
from pyura.config import UraConfig
from pyura.exceptions import UraError
from pyura.ingestion.records import decode, parse_line, record_type
from pyura.ingestion.version import SchemaResolver
from pyura.models import Message, Stop, Trip
from pyura.query import Query
from pyura.reader import AsyncTripReader, TripConsumer

_logger = logging.getLogger(__name__)

R = TypeVar("R", Stop, Trip, Message)


class UraClient:
    """Async client for a URA instant and stream API.

    Usage::

        async with UraClient(UraConfig(base_url="http://ivu.aseag.de")) as client:
            trips = await client.get_trips(Query().for_stops("100000"), limit=10)

            reader = client.trip_stream(consumers=[print])
            reader.open()
            ...
            await reader.close()

    Readers created by :meth:`trip_stream` share the client's HTTP session
    and must be closed before the client exits.
    """

    def __init__(
        self,
        config: UraConfig,
        *,
        session: aiohttp.ClientSession | None = None,
    ) -> None:
        self._config = config
        self._external_session = session is not None
        self._http_session = session
        self._transport: HttpLineTransport | None = None

    # ------------------------------------------------------------------
    # Context manager lifecycle
    # ------------------------------------------------------------------

    async def __aenter__(self) -> UraClient:
        if self._http_session is None:
            self._http_session = aiohttp.ClientSession()
        self._transport = HttpLineTransport(self._config, self._http_session)
        return self

    async def __aexit__(self, *exc: Any) -> None:
        if not self._external_session and self._http_session is not None:
            await self._http_session.close()
            self._http_session = None
        self._transport = None

    @property
    def config(self) -> UraConfig:
        return self._config

    # ------------------------------------------------------------------
    # Instant endpoint
    # ------------------------------------------------------------------

    async def get_trips(self, query: Query | None = None, *, limit: int | None = None) -> list[Trip]:
        """Fetch current predictions, optionally capped at *limit* trips."""
        return await self._fetch_instant(Trip, RES_TYPE_PREDICTION, REQUEST_TRIP, query, limit)

    async def list_stops(self, query: Query | None = None) -> list[Stop]:
        """List stop points matching *query*."""
        return await self._fetch_instant(Stop, RES_TYPE_STOP, REQUEST_STOP, query, None)

    async def get_messages(self, query: Query | None = None) -> list[Message]:
        """Fetch flex messages for the stops matching *query*."""
        return await self._fetch_instant(Message, RES_TYPE_FLEX_MESSAGE, REQUEST_MESSAGE, query, None)

    # ------------------------------------------------------------------
    # Stream endpoint
    # ------------------------------------------------------------------

    def trip_stream(
        self,
        query: Query | None = None,
        consumers: TripConsumer | Iterable[TripConsumer] | None = None,
    ) -> AsyncTripReader:
        """Create an unopened reader for the trip stream."""
        transport = self._require_transport()
        params = (query or Query()).to_params(REQUEST_TRIP)
        return AsyncTripReader(transport, self._config.stream_url, params=params, consumers=consumers)

    # ------------------------------------------------------------------
    # Internal helpers
    # ------------------------------------------------------------------

    def _require_transport(self) -> HttpLineTransport:
        if self._transport is None:
            raise UraError("Client not initialized. Use 'async with UraClient(...) as client:'")
        return self._transport

    async def _fetch_instant(
        self,
        model: type[R],
        wanted: int,
        return_list: tuple[str, ...],
        query: Query | None,
        limit: int | None,
    ) -> list[R]:
        transport = self._require_transport()
        params = (query or Query()).to_params(return_list)
        resolver = SchemaResolver()
        results: list[R] = []
        if limit is not None and limit <= 0:
            return results

        async with transport.stream_lines(self._config.instant_url, params) as lines:
            async for line in lines:
                raw = parse_line(line)
                # Only the requested type and version markers are decoded.
                if record_type(raw) not in (wanted, RES_TYPE_URA_VERSION):
                    continue
                record = decode(raw, resolver.hint)
                if resolver.observe(record):
                    continue
                if isinstance(record, model):
                    results.append(record)
                    if limit is not None and len(results) >= limit:
                        break

        _logger.debug("Instant request returned %d %s records", len(results), model.__name__)
        return results
