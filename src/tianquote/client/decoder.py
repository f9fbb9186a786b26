"""Structural decoding of raw payloads into :class:`~tianquote.models.QuotationResponse`.

Every failure (malformed JSON, non-UTF-8 bytes, missing keys, wrong types)
is folded into a single :class:`~tianquote.exceptions.InvalidResponseError`.
The API reports problems such as an invalid key with an envelope that has
no ``newslist``; that shape cannot be told apart from a corrupt payload, so
no finer diagnostics are offered.
"""

from __future__ import annotations

from pydantic import ValidationError

from tianquote.exceptions import InvalidResponseError
from tianquote.models import QuotationResponse
from tianquote.output import debug


def decode_response(data: bytes) -> QuotationResponse:
    """Decode *data* against the wire schema.

    Args:
        data: Raw JSON bytes as received from the API or the cache.

    Returns:
        The decoded response.

    Raises:
        InvalidResponseError: With description ``"unexpected result"`` on
            any decode failure.
    """
    try:
        return QuotationResponse.model_validate_json(data)
    except (ValidationError, ValueError) as exc:
        debug(f"Payload rejected: {exc}")
        raise InvalidResponseError("unexpected result") from exc
