"""Canonical Pydantic models shared across all tianquote modules.

The models fall into two groups:

**API models** -- the endpoint value and the decoded payload:
    :class:`Endpoint`, :class:`DataSource`, :class:`QuotationResult`,
    :class:`QuotationResponse`, and the :class:`PerformResult` record
    handed to completion callbacks.

**Configuration models** -- serialised as JSON in the user's config
directory: :class:`RequestConfig`, :class:`OutputConfig`, and
:class:`GlobalConfig`.

Response models map fixed wire keys (``msg``, ``code``, ``newslist``) onto
Python attribute names and always serialise back with the wire keys, so a
decoded response survives an encode/decode cycle unchanged.
"""

from __future__ import annotations

import enum
from dataclasses import dataclass
from typing import Optional

import httpx
from pydantic import BaseModel, ConfigDict, Field

API_BASE_URL = "https://api.tianapi.com"
API_PATH = "/".join(["", "txapi", "zaoan", "index"])


# --- API models ---


class Endpoint(BaseModel):
    """The remote resource for the morning quotation, derived from a token.

    The URL is a pure function of :attr:`token`.  A missing token still
    yields a URL (with an empty ``key``) so that building an endpoint never
    fails; the request layer refuses to send it.

    Example::

        Endpoint(token="abc").url
        # 'https://api.tianapi.com/txapi/zaoan/index?key=abc'
    """

    model_config = ConfigDict(frozen=True)

    token: Optional[str] = None

    @property
    def url(self) -> str:
        """Fully-qualified request URL with the ``key`` query parameter."""
        return str(httpx.URL(API_BASE_URL + API_PATH, params={"key": self.token or ""}))


class DataSource(str, enum.Enum):
    """Where a request reads its bytes from."""

    LOCAL = "local"
    REMOTE = "remote"


class QuotationResult(BaseModel):
    """One quotation entry from the ``newslist`` array.

    Only ``content`` is required.  Any other fields returned by the API are
    kept as extra fields and written back on encode.
    """

    model_config = ConfigDict(extra="allow", frozen=True, strict=True)

    content: str


class QuotationResponse(BaseModel):
    """Decoded payload of the ``zaoan`` endpoint.

    Attributes:
        status: Free-text status message (wire key ``msg``).
        code: Integer result code (wire key ``code``).
        results: Quotation entries in payload order (wire key ``newslist``).
    """

    model_config = ConfigDict(frozen=True, strict=True, populate_by_name=True)

    status: str = Field(alias="msg")
    code: int = Field(alias="code")
    results: list[QuotationResult] = Field(alias="newslist")

    def to_bytes(self) -> bytes:
        """Encode the response as UTF-8 JSON using the wire keys."""
        return self.model_dump_json(by_alias=True).encode("utf-8")

    def to_wire(self) -> dict:
        """Return the response as a plain dict keyed by wire names."""
        return self.model_dump(mode="json", by_alias=True)


@dataclass(frozen=True)
class PerformResult:
    """Outcome of a single ``perform`` call.

    Exactly one of ``response`` and ``error`` is set.

    Attributes:
        response: The decoded response, or ``None`` on failure.
        source: The data source that was used.
        error: The failure, or ``None`` on success.
    """

    response: Optional[QuotationResponse]
    source: DataSource
    error: Optional[BaseException] = None

    @property
    def ok(self) -> bool:
        return self.error is None


# --- Configuration models ---


class RequestConfig(BaseModel):
    """Default request settings applied to every quotation request."""

    timeout: float = Field(default=30.0, gt=0, description="HTTP timeout in seconds")
    expiration_seconds: float = Field(
        default=300.0,
        ge=0,
        description="Minimum interval between remote requests (stored, not enforced)",
    )


class OutputConfig(BaseModel):
    """Default output format preferences stored in :class:`GlobalConfig`."""

    format: str = Field(
        default="auto", description="Output format: auto, json, plain, rich"
    )


class GlobalConfig(BaseModel):
    """User-wide configuration persisted at ``~/.config/tianquote/config.json``.

    Loaded and saved by :func:`~tianquote.config.load_global_config` and
    :func:`~tianquote.config.save_global_config`.  The token stored here has
    the lowest precedence; see :func:`~tianquote.config.resolve_token`.
    """

    token: Optional[str] = None
    cache_dir: Optional[str] = Field(
        default=None, description="Override the default cache directory"
    )
    request: RequestConfig = Field(default_factory=RequestConfig)
    output: OutputConfig = Field(default_factory=OutputConfig)
