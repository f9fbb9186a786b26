"""Single-file response cache for tianquote.

This package provides :class:`QuotationCache`, which keeps the raw bytes of
the last successful remote response at ``<cache-root>/MorningQuotation``.

The cache is consumed by :class:`~tianquote.client.QuotationRequest` and
:class:`~tianquote.client.AsyncQuotationRequest`.
"""

from tianquote.cache.cache import CACHE_FILENAME, QuotationCache

__all__ = ["CACHE_FILENAME", "QuotationCache"]
