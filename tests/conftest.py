from __future__ import annotations

import asyncio
import contextlib
import json
from collections.abc import AsyncIterator, Iterable, Mapping
from dataclasses import dataclass, field
from typing import Any

import pytest
from yarl import URL

from pyura.config import UraConfig

STOP_RAW: list[Any] = [0, "Aachen Bushof", "100000", "H.1", 0, 50.7775936, 6.0908191]


def trip_raw(
    trip_id: Any = "27000165015001",
    *,
    direction: Any = 1,
    vehicle_id: Any = "247",
    estimated_time: Any = 1482854580000,
) -> list[Any]:
    return [
        1,
        "Aachen Bushof",
        "100000",
        "H.1",
        0,
        50.7775936,
        6.0908191,
        30,
        "55",
        "55",
        direction,
        "Verlautenheide Endstr.",
        "Verlautenheide",
        vehicle_id,
        trip_id,
        estimated_time,
    ]


MESSAGE_RAW: list[Any] = [
    2,
    "Aachen Bushof",
    "100000",
    "H.1",
    0,
    50.7775936,
    6.0908191,
    "7a8b6c7d-1234-4b2a-9c1e-0f7e5d1c2b3a",
    1,
    3,
    "Haltestelle wird verlegt",
]


def line(raw: list[Any]) -> str:
    return json.dumps(raw)


TRIP_IDS: tuple[str, ...] = tuple(f"2700016501500{i}" for i in range(1, 8))

# Version marker followed by seven predictions, as sent by a V2 stream.
STREAM_V2_LINES: list[str] = [line([4, "2.0", 1482854400000])] + [line(trip_raw(tid)) for tid in TRIP_IDS]


@dataclass
class FakeLineTransport:
    """In-memory stand-in for :class:`pyura._transport.HttpLineTransport`."""

    lines: Iterable[str] = ()
    hang: bool = False
    error: BaseException | None = None
    connect_error: BaseException | None = None
    exit_gate: asyncio.Event | None = None
    requests: list[tuple[URL, dict[str, str] | None]] = field(default_factory=list)
    opened: int = 0
    closed: int = 0
    served: int = 0

    @contextlib.asynccontextmanager
    async def stream_lines(
        self,
        url: URL,
        params: Mapping[str, str] | None = None,
    ) -> AsyncIterator[AsyncIterator[str]]:
        self.requests.append((url, dict(params) if params is not None else None))
        if self.connect_error is not None:
            raise self.connect_error
        self.opened += 1
        try:
            yield self._iter()
        finally:
            # Simulates a response whose release blocks until the test opens the gate.
            if self.exit_gate is not None:
                await self.exit_gate.wait()
            self.closed += 1

    async def _iter(self) -> AsyncIterator[str]:
        for text in self.lines:
            await asyncio.sleep(0)
            self.served += 1
            yield text
        if self.error is not None:
            raise self.error
        if self.hang:
            await asyncio.Event().wait()


class QueueLineTransport:
    """Transport fed line by line from the test; ``None`` ends the stream."""

    def __init__(self) -> None:
        self.queue: asyncio.Queue[str | None] = asyncio.Queue()

    @contextlib.asynccontextmanager
    async def stream_lines(
        self,
        url: URL,
        params: Mapping[str, str] | None = None,
    ) -> AsyncIterator[AsyncIterator[str]]:
        yield self._iter()

    async def _iter(self) -> AsyncIterator[str]:
        while True:
            item = await self.queue.get()
            if item is None:
                return
            yield item


async def wait_until(predicate: Any, timeout: float = 1.0) -> None:
    async def _poll() -> None:
        while not predicate():
            await asyncio.sleep(0.001)

    await asyncio.wait_for(_poll(), timeout)


@pytest.fixture
def config() -> UraConfig:
    return UraConfig(base_url="http://ivu.aseag.de")


@pytest.fixture
def stream_url(config: UraConfig) -> URL:
    return config.stream_url
