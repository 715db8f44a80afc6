"""HTTP transport delivering URA response bodies line by line."""

from __future__ import annotations

import contextlib
import logging
from collections.abc import AsyncGenerator, AsyncIterator, Mapping
from contextlib import AbstractAsyncContextManager
from typing import Protocol

import aiohttp
from yarl import URL

from pyura.config import UraConfig
from pyura.exceptions import MalformedRecordError, UraTransportError

_logger = logging.getLogger(__name__)


class LineTransport(Protocol):
    """Structural transport interface used by the client and the stream reader.

    Having a protocol here makes it easy to pass test doubles while keeping
    the production implementation (`HttpLineTransport`) concrete.

    ``stream_lines`` opens the response and yields an async iterator over
    its text lines. The next line is only read from the network when the
    caller asks for it. Leaving the context closes the response.
    """

    def stream_lines(
        self,
        url: URL,
        params: Mapping[str, str] | None = None,
    ) -> AbstractAsyncContextManager[AsyncIterator[str]]:
        ...


class HttpLineTransport:
    """aiohttp GET transport for the instant and stream endpoints."""

    def __init__(self, config: UraConfig, http_session: aiohttp.ClientSession) -> None:
        self._config = config
        self._http = http_session

    def _timeout(self) -> aiohttp.ClientTimeout:
        return aiohttp.ClientTimeout(
            total=None,
            sock_connect=self._config.connect_timeout,
            sock_read=self._config.read_timeout,
        )

    @contextlib.asynccontextmanager
    async def stream_lines(
        self,
        url: URL,
        params: Mapping[str, str] | None = None,
    ) -> AsyncIterator[AsyncIterator[str]]:
        headers = {
            "accept": "application/json, text/plain",
            "user-agent": self._config.user_agent,
        }

        _logger.debug("GET %s params=%s", url, dict(params or {}))

        try:
            resp = await self._http.get(url, params=params, headers=headers, timeout=self._timeout())
        except (aiohttp.ClientError, TimeoutError) as exc:
            raise UraTransportError(f"Request to {url} failed: {exc}", url=str(url)) from exc

        try:
            if resp.status != 200:
                try:
                    text = await resp.text(errors="replace")
                except (aiohttp.ClientError, TimeoutError):
                    text = ""
                raise UraTransportError(
                    f"HTTP {resp.status} from {url}: {text[:200]}",
                    status_code=resp.status,
                    url=str(url),
                )
            lines = self._iter_lines(resp, str(url))
            try:
                yield lines
            finally:
                await lines.aclose()
        finally:
            # Streams are never fully drained, so drop the connection
            # instead of returning it to the pool.
            resp.close()

    @staticmethod
    async def _iter_lines(resp: aiohttp.ClientResponse, url: str) -> AsyncGenerator[str, None]:
        try:
            async for raw in resp.content:
                try:
                    line = raw.decode("utf-8")
                except UnicodeDecodeError as exc:
                    raise MalformedRecordError(f"Line from {url} is not valid UTF-8") from exc
                yield line.rstrip("\r\n")
        except (aiohttp.ClientError, TimeoutError) as exc:
            raise UraTransportError(f"Stream from {url} failed: {exc}", url=url) from exc
        except ValueError as exc:
            # aiohttp raises ValueError for lines over its buffer limit.
            raise UraTransportError(f"Stream from {url} failed: {exc}", url=url) from exc
