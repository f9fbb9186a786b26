"""Asynchronous request orchestrator -- mirrors :class:`~tianquote.client.request.QuotationRequest`.

:class:`AsyncQuotationRequest` offers the same fetch / perform / decode
contract with coroutines.  Network I/O uses :class:`httpx.AsyncClient`;
cache file access runs in :func:`asyncio.to_thread` and shares the writer
lock used by the threaded orchestrator, so both can target one cache root.
"""

from __future__ import annotations

import asyncio
import inspect
from pathlib import Path
from typing import Awaitable, Optional, Union

import httpx

from tianquote.client.base import DEFAULT_EXPIRATION, DEFAULT_TIMEOUT, BaseQuotationRequest, Completion
from tianquote.example import load_example_data
from tianquote.exceptions import TianQuoteError
from tianquote.models import API_PATH, DataSource, PerformResult
from tianquote.output import debug, error


class AsyncQuotationRequest(BaseQuotationRequest):
    """Non-blocking request context.  Must be used as an async context manager
    or closed with :meth:`aclose`.

    Args:
        token: TianAPI access key.
        cache_dir: Cache root; defaults to the XDG cache directory.
        expiration: Minimum interval between remote requests in seconds
            (stored only).
        transport: Optional :class:`httpx.AsyncBaseTransport`, mainly for tests.
        timeout: HTTP timeout in seconds.

    Example::

        async with AsyncQuotationRequest(token="my-token") as request:
            result = await request.perform()
    """

    def __init__(
        self,
        token: Optional[str] = None,
        cache_dir: Optional[Union[str, Path]] = None,
        expiration: float = DEFAULT_EXPIRATION,
        transport: Optional[httpx.AsyncBaseTransport] = None,
        timeout: float = DEFAULT_TIMEOUT,
    ) -> None:
        super().__init__(token=token, cache_dir=cache_dir, expiration=expiration, timeout=timeout)
        self._transport = transport
        self._client: Optional[httpx.AsyncClient] = None

    # ------------------------------------------------------------------ #
    # Async context manager
    # ------------------------------------------------------------------ #

    async def __aenter__(self) -> AsyncQuotationRequest:
        return self

    async def __aexit__(self, *args: object) -> None:
        await self.aclose()

    async def aclose(self) -> None:
        if self._client is not None:
            await self._client.aclose()
            self._client = None

    # ------------------------------------------------------------------ #
    # Public operations
    # ------------------------------------------------------------------ #

    async def fetch(self, source: Union[DataSource, str]) -> bytes:
        """Fetch raw bytes from *source*.

        Behaves like :meth:`QuotationRequest.fetch
        <tianquote.client.request.QuotationRequest.fetch>` but returns the
        bytes directly and raises on failure.
        """
        chosen = DataSource(source)
        if chosen is DataSource.LOCAL:
            return await asyncio.to_thread(self._read_cache)
        return await self._fetch_remote()

    async def fetch_example(self) -> bytes:
        return await asyncio.to_thread(load_example_data)

    async def perform(
        self,
        completion: Optional[Completion] = None,
        source: Optional[Union[DataSource, str]] = None,
    ) -> PerformResult:
        """Fetch from *source* (remote when ``None``) and decode the result.

        *completion* may be a plain function or a coroutine function; it is
        called once with ``(response, source, error)`` before returning.
        Request failures are reported in ``result.error``, not raised.
        """
        chosen = self._resolve_source(source)
        return await self._perform(chosen, self.fetch(chosen), completion)

    async def perform_example(self, completion: Optional[Completion] = None) -> PerformResult:
        """Load and decode the bundled example payload, like :meth:`perform`."""
        return await self._perform(DataSource.LOCAL, self.fetch_example(), completion)

    # ------------------------------------------------------------------ #
    # Private helpers
    # ------------------------------------------------------------------ #

    async def _perform(
        self,
        source: DataSource,
        fetching: Awaitable[bytes],
        completion: Optional[Completion],
    ) -> PerformResult:
        try:
            data = await fetching
        except (TianQuoteError, httpx.HTTPError) as exc:
            debug(f"Fetch from {source.value} failed: {exc!r}")
            result = PerformResult(response=None, source=source, error=exc)
        else:
            try:
                result = PerformResult(response=self.decode(data), source=source)
            except TianQuoteError as exc:
                result = PerformResult(response=None, source=source, error=exc)

        if completion is not None:
            try:
                outcome = completion(result.response, result.source, result.error)
                if inspect.isawaitable(outcome):
                    await outcome
            except Exception as exc:
                error(f"Completion callback raised: {exc!r}")
        return result

    async def _fetch_remote(self) -> bytes:
        self._require_token()
        debug(f"GET {API_PATH}")
        response = await self._get_client().get(self._endpoint.url)
        debug(f"HTTP {response.status_code}, {len(response.content)} bytes")
        data = response.content
        await asyncio.to_thread(self._store, data)
        return data

    def _get_client(self) -> httpx.AsyncClient:
        if self._client is None:
            kwargs = {"timeout": self._timeout, "follow_redirects": True}
            if self._transport is not None:
                kwargs["transport"] = self._transport
            self._client = httpx.AsyncClient(**kwargs)
        return self._client
