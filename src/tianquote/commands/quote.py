"""Quote command -- fetch the morning quotation and print it.

Builds a :class:`~tianquote.client.QuotationRequest` from the resolved
configuration, runs it against the chosen source, and renders the decoded
response.  Plain and Rich output print one quotation per line; ``--json``
prints the payload with its wire keys.
"""

from __future__ import annotations

import enum
from typing import NoReturn, Optional

import httpx
import typer

from tianquote.exceptions import TianQuoteError, TokenMissingError
from tianquote.exit_codes import EXIT_CONNECTION_ERROR, EXIT_GENERIC_FAILURE
from tianquote.models import DataSource, QuotationResponse
from tianquote.output import OutputFormat, debug, error, format_response, get_output, print_data, suggest


class QuoteSource(str, enum.Enum):
    """Sources accepted by ``--source``."""

    REMOTE = "remote"
    LOCAL = "local"
    EXAMPLE = "example"


def quote_command(
    source: QuoteSource = typer.Option(
        QuoteSource.REMOTE, "--source", "-s", help="Where to read the quotation from."
    ),
    token: Optional[str] = typer.Option(
        None, "--token", "-t", help="TianAPI key (overrides $TIANQUOTE_TOKEN and config)."
    ),
    cache_dir: Optional[str] = typer.Option(
        None, "--cache-dir", help="Cache directory (overrides $TIANQUOTE_CACHE_DIR and config)."
    ),
) -> None:
    """Print today's morning quotation.

    ``remote`` (the default) always calls the API and refreshes the cache.
    ``local`` reads the last cached response without touching the network.
    ``example`` decodes the bundled sample payload.

    Example::

        tianquote quote --token 0123abcd
        tianquote quote --source local
        tianquote --json quote --source example
    """
    from tianquote.client import QuotationRequest
    from tianquote.config import load_global_config, resolve_cache_dir, resolve_token

    config = load_global_config()
    request = QuotationRequest(
        token=resolve_token(token, config),
        cache_dir=resolve_cache_dir(cache_dir, config),
        expiration=config.request.expiration_seconds,
        timeout=config.request.timeout,
    )
    with request:
        if source is QuoteSource.EXAMPLE:
            result = request.perform_example().result()
        else:
            result = request.perform(source=DataSource(source.value)).result()

    response = result.response
    if response is None:
        _report_error(result.error or TianQuoteError("No quotation was returned"))
    debug(f"Decoded response from {result.source.value}: code={response.code}")
    _render(response)


def _report_error(exc: BaseException) -> NoReturn:
    """Print *exc* and exit with the matching code."""
    if isinstance(exc, TianQuoteError):
        error(str(exc))
        if isinstance(exc, TokenMissingError):
            suggest("Pass --token, set TIANQUOTE_TOKEN, or run 'tianquote config set token <KEY>'.")
        raise typer.Exit(code=exc.exit_code)
    if isinstance(exc, httpx.HTTPError):
        error(f"Request failed: {exc}")
        raise typer.Exit(code=EXIT_CONNECTION_ERROR)
    error(str(exc))
    raise typer.Exit(code=EXIT_GENERIC_FAILURE)


def _render(response: QuotationResponse) -> None:
    if get_output().format == OutputFormat.JSON:
        format_response(response.to_wire())
        return
    for item in response.results:
        print_data(item.content)
