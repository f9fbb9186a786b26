"""Worker-thread request orchestrator.

:class:`QuotationRequest` runs every operation on a background executor and
reports back twice: through an optional completion callback invoked on the
worker thread, and through the returned :class:`concurrent.futures.Future`.
The calling thread never blocks unless it waits on the future.

Each ``perform`` call moves through ``Idle -> Fetching`` and ends in exactly
one of ``Decoded``, ``FetchFailed`` or ``DecodeFailed``.  Fetch always
completes before decode starts, and decode is skipped when the fetch
failed.  Nothing is retried.

See Also:
    :class:`~tianquote.client.async_request.AsyncQuotationRequest` for the
    asyncio equivalent.
"""

from __future__ import annotations

import threading
from concurrent.futures import Executor, Future, ThreadPoolExecutor
from functools import partial
from pathlib import Path
from typing import Callable, Optional, Union

import httpx

from tianquote.client.base import DEFAULT_EXPIRATION, DEFAULT_TIMEOUT, BaseQuotationRequest, Completion
from tianquote.example import load_example_data
from tianquote.exceptions import TianQuoteError
from tianquote.models import API_PATH, DataSource, PerformResult
from tianquote.output import debug, error


class QuotationRequest(BaseQuotationRequest):
    """Fetches, caches, and decodes the morning quotation on a worker.

    Args:
        token: TianAPI access key.
        cache_dir: Cache root; defaults to the XDG cache directory.
        expiration: Minimum interval between remote requests in seconds.
            Stored only; see :attr:`expiration`.
        executor: Worker to run on.  When ``None`` a private single-thread
            executor is created, so calls on one context run one at a time.
            A caller-supplied executor is not shut down by :meth:`close`.
        transport: Optional :class:`httpx.BaseTransport`, mainly for tests.
        timeout: HTTP timeout in seconds.

    Example::

        with QuotationRequest(token="my-token") as request:
            future = request.perform(source="local")
            result = future.result()
            if result.ok:
                print(result.response.results[0].content)
    """

    def __init__(
        self,
        token: Optional[str] = None,
        cache_dir: Optional[Union[str, Path]] = None,
        expiration: float = DEFAULT_EXPIRATION,
        executor: Optional[Executor] = None,
        transport: Optional[httpx.BaseTransport] = None,
        timeout: float = DEFAULT_TIMEOUT,
    ) -> None:
        super().__init__(token=token, cache_dir=cache_dir, expiration=expiration, timeout=timeout)
        self._owns_executor = executor is None
        self._executor: Executor = executor or ThreadPoolExecutor(
            max_workers=1, thread_name_prefix="tianquote"
        )
        self._transport = transport
        self._client: Optional[httpx.Client] = None
        self._client_lock = threading.Lock()

    # ------------------------------------------------------------------ #
    # Context manager
    # ------------------------------------------------------------------ #

    def __enter__(self) -> QuotationRequest:
        return self

    def __exit__(self, *args: object) -> None:
        self.close()

    def close(self) -> None:
        """Wait for pending work, then release the executor and HTTP client."""
        if self._owns_executor:
            self._executor.shutdown(wait=True)
        with self._client_lock:
            if self._client is not None:
                self._client.close()
                self._client = None

    @property
    def executor(self) -> Executor:
        return self._executor

    # ------------------------------------------------------------------ #
    # Public operations
    # ------------------------------------------------------------------ #

    def fetch(self, source: Union[DataSource, str]) -> Future[bytes]:
        """Fetch raw bytes from *source* on the worker.

        ``remote`` requires a token and fails with
        :class:`~tianquote.exceptions.TokenMissingError` before any I/O
        otherwise.  Any received body, whatever its HTTP status, is returned
        and replaces the cache file; decoding decides whether it is usable.
        ``local`` reads the cache file unconditionally and fails with
        :class:`~tianquote.exceptions.CacheUnavailableError` when it is
        missing.  Transport errors are the raw :mod:`httpx` exceptions.
        """
        chosen = DataSource(source)
        return self._executor.submit(self._fetch, chosen)

    def fetch_example(self) -> Future[bytes]:
        """Load the bundled example payload on the worker."""
        return self._executor.submit(load_example_data)

    def perform_example(self, completion: Optional[Completion] = None) -> Future[PerformResult]:
        """Load and decode the bundled example payload on the worker.

        Follows the same fetch-then-decode chain as :meth:`perform`; the
        result reports :attr:`DataSource.LOCAL` as its source.
        """
        return self._executor.submit(self._perform, DataSource.LOCAL, load_example_data, completion)

    def perform(
        self,
        completion: Optional[Completion] = None,
        source: Optional[Union[DataSource, str]] = None,
    ) -> Future[PerformResult]:
        """Fetch from *source* and decode the result.

        Without *source* the request always goes to the remote API; the
        cache is only read when ``source="local"`` is given explicitly.

        Args:
            completion: Called once on the worker as
                ``completion(response, source, error)`` before the future
                resolves.
            source: ``"local"``, ``"remote"``, or ``None`` for remote.

        Returns:
            A future resolving to a :class:`~tianquote.models.PerformResult`.
            Request failures are reported in ``result.error``, not raised.
        """
        chosen = self._resolve_source(source)
        return self._executor.submit(self._perform, chosen, partial(self._fetch, chosen), completion)

    # ------------------------------------------------------------------ #
    # Worker-side steps
    # ------------------------------------------------------------------ #

    def _perform(
        self,
        source: DataSource,
        fetch: Callable[[], bytes],
        completion: Optional[Completion],
    ) -> PerformResult:
        try:
            data = fetch()
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
                completion(result.response, result.source, result.error)
            except Exception as exc:
                error(f"Completion callback raised: {exc!r}")
        return result

    def _fetch(self, source: DataSource) -> bytes:
        if source is DataSource.LOCAL:
            return self._read_cache()
        return self._fetch_remote()

    def _fetch_remote(self) -> bytes:
        self._require_token()
        debug(f"GET {API_PATH}")
        response = self._get_client().get(self._endpoint.url)
        debug(f"HTTP {response.status_code}, {len(response.content)} bytes")
        data = response.content
        self._store(data)
        return data

    def _get_client(self) -> httpx.Client:
        with self._client_lock:
            if self._client is None:
                kwargs = {"timeout": self._timeout, "follow_redirects": True}
                if self._transport is not None:
                    kwargs["transport"] = self._transport
                self._client = httpx.Client(**kwargs)
            return self._client
