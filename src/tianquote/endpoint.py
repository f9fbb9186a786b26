"""Endpoint construction for the TianAPI morning quotation."""

from __future__ import annotations

from typing import Optional

from tianquote.models import Endpoint


def build_endpoint(token: Optional[str] = None) -> Endpoint:
    """Build the :class:`~tianquote.models.Endpoint` for *token*.

    Never fails and performs no I/O.  An empty string is treated the same
    as a missing token.

    Args:
        token: The TianAPI access key, or ``None``.

    Returns:
        An immutable endpoint whose ``url`` carries ``key=<token>``.
    """
    return Endpoint(token=token or None)
