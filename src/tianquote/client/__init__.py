"""Request orchestrators for tianquote.

Both orchestrators decide between the cache file and the remote API,
persist successful remote responses, and decode payloads into
:class:`~tianquote.models.QuotationResponse`.

Classes:
    :class:`QuotationRequest` -- runs on a background executor and reports
    through completion callbacks and :class:`concurrent.futures.Future`.
    :class:`AsyncQuotationRequest` -- coroutine API backed by
    :class:`httpx.AsyncClient`.

Example::

    from tianquote.client import QuotationRequest

    with QuotationRequest(token="my-token") as request:
        result = request.perform().result()
"""

from tianquote.client.async_request import AsyncQuotationRequest
from tianquote.client.base import Completion
from tianquote.client.decoder import decode_response
from tianquote.client.request import QuotationRequest

__all__ = ["AsyncQuotationRequest", "Completion", "QuotationRequest", "decode_response"]
