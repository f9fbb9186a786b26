"""tianquote -- Fetch the TianAPI daily morning quotation with a local cache.

This package wraps the TianAPI ``zaoan`` endpoint. A request context
builds the endpoint URL from an API token, fetches the payload from the
network or from the last cached copy on disk, and decodes it into typed
models.

Typical usage::

    from tianquote import QuotationRequest

    with QuotationRequest(token="my-token") as request:
        result = request.perform().result()
        print(result.response.results[0].content)

Modules:
    app: Typer application and CLI entry point.
    models: Pydantic models for endpoints, responses, and configuration.
    endpoint: Builds the endpoint from a token.
    client: Thread-worker and asyncio request orchestrators.
    cache: The single-file response cache.
    config: XDG-aware configuration and token resolution.
    exceptions: Exception hierarchy with exit-code mapping.
    output: stdout/stderr formatting system with Rich support.
"""

__version__ = "0.1.0"

from tianquote.client import AsyncQuotationRequest, QuotationRequest  # noqa: E402
from tianquote.endpoint import build_endpoint  # noqa: E402
from tianquote.models import DataSource, Endpoint, PerformResult, QuotationResponse, QuotationResult  # noqa: E402

__all__ = [
    "__version__",
    "AsyncQuotationRequest",
    "DataSource",
    "Endpoint",
    "PerformResult",
    "QuotationRequest",
    "QuotationResponse",
    "QuotationResult",
    "build_endpoint",
]
