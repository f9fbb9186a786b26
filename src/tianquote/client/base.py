"""Shared request-context state for the sync and async orchestrators.

:class:`BaseQuotationRequest` owns the configuration every request context
carries: the :class:`~tianquote.models.Endpoint`, the cache root, the
expiration interval, and the HTTP timeout.  Subclasses add the execution
model (a worker thread or an event loop).
"""

from __future__ import annotations

from pathlib import Path
from typing import Callable, Optional, Union

from tianquote.cache import QuotationCache
from tianquote.client.decoder import decode_response
from tianquote.config import get_cache_dir
from tianquote.endpoint import build_endpoint
from tianquote.exceptions import TokenMissingError
from tianquote.models import DataSource, Endpoint, QuotationResponse
from tianquote.output import debug, warning

DEFAULT_EXPIRATION = 5 * 60
DEFAULT_TIMEOUT = 30.0

Completion = Callable[
    [Optional[QuotationResponse], DataSource, Optional[BaseException]], object
]
"""Signature of completion callbacks: ``(response, source, error)``."""


class BaseQuotationRequest:
    """Configuration shared by all request contexts.

    Args:
        token: TianAPI access key.  May be set later through :attr:`token`.
        cache_dir: Cache root.  Defaults to
            :func:`~tianquote.config.get_cache_dir`, resolved on first use.
        expiration: Minimum interval between remote requests, in seconds.
            Stored for callers; no request path consults it.
        timeout: HTTP timeout in seconds.
    """

    def __init__(
        self,
        token: Optional[str] = None,
        cache_dir: Optional[Union[str, Path]] = None,
        expiration: float = DEFAULT_EXPIRATION,
        timeout: float = DEFAULT_TIMEOUT,
    ) -> None:
        self._endpoint = build_endpoint(token)
        self._cache_dir = Path(cache_dir) if cache_dir is not None else None
        self._cache: Optional[QuotationCache] = None
        self.expiration = expiration
        self._timeout = timeout

    # ------------------------------------------------------------------ #
    # Configuration
    # ------------------------------------------------------------------ #

    @property
    def endpoint(self) -> Endpoint:
        return self._endpoint

    @property
    def token(self) -> Optional[str]:
        return self._endpoint.token

    @token.setter
    def token(self, value: Optional[str]) -> None:
        self._endpoint = build_endpoint(value)

    @property
    def expiration(self) -> float:
        return self._expiration

    @expiration.setter
    def expiration(self, value: float) -> None:
        if value < 0:
            raise ValueError(f"expiration must be >= 0, got {value}")
        self._expiration = float(value)

    @property
    def cache_dir(self) -> Path:
        if self._cache_dir is None:
            self._cache_dir = get_cache_dir()
        return self._cache_dir

    @cache_dir.setter
    def cache_dir(self, value: Union[str, Path]) -> None:
        self._cache_dir = Path(value)
        self._cache = None

    @property
    def cache(self) -> QuotationCache:
        if self._cache is None:
            self._cache = QuotationCache(self.cache_dir)
        return self._cache

    @property
    def local_content_path(self) -> Path:
        """Location of the cached payload, ``<cache_dir>/MorningQuotation``."""
        return self.cache.path

    # ------------------------------------------------------------------ #
    # Shared steps
    # ------------------------------------------------------------------ #

    def decode(self, data: bytes) -> QuotationResponse:
        """Decode raw bytes; see :func:`~tianquote.client.decoder.decode_response`."""
        return decode_response(data)

    def _require_token(self) -> str:
        token = self._endpoint.token
        if not token:
            raise TokenMissingError()
        return token

    def _read_cache(self) -> bytes:
        """Read the cache file.  Resolves the default cache root on first use."""
        debug(f"Reading cached quotation from {self.cache.path}")
        return self.cache.read()

    def _store(self, data: bytes) -> None:
        """Write *data* to the cache.  Failures are logged, never raised."""
        try:
            self.cache.write(data)
        except OSError as exc:
            warning(f"Could not update quotation cache: {exc}")
        else:
            debug(f"Cached {len(data)} bytes at {self.cache.path}")

    @staticmethod
    def _resolve_source(source: Optional[Union[DataSource, str]]) -> DataSource:
        if source is None:
            return DataSource.REMOTE
        return DataSource(source)
