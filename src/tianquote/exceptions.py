"""Exception hierarchy for tianquote.

All exceptions inherit from :class:`TianQuoteError`, which carries an
``exit_code`` attribute mapped to a constant from :mod:`tianquote.exit_codes`.
The CLI entry point in :func:`tianquote.app.main` catches
``TianQuoteError`` and exits with the matching code.

Network failures are *not* wrapped: ``httpx`` exceptions reach the caller
unchanged so the transport's own diagnostics are preserved.

Subclass hierarchy::

    TianQuoteError (exit 1)
    +-- TokenMissingError      (exit 3)
    +-- FileUnavailableError   (exit 4)
    +-- CacheUnavailableError  (exit 4)
    +-- InvalidResponseError   (exit 5)
    +-- ConfigError            (exit 1)
"""

from __future__ import annotations

import enum

from tianquote.exit_codes import (
    EXIT_GENERIC_FAILURE,
    EXIT_INVALID_RESPONSE,
    EXIT_NOT_FOUND,
    EXIT_TOKEN_MISSING,
)


class TianQuoteError(Exception):
    """Base exception for all tianquote errors.

    Args:
        message: Human-readable error description printed to stderr.
        exit_code: Optional override for the class-level exit code.
    """

    exit_code: int = EXIT_GENERIC_FAILURE

    def __init__(self, message: str, exit_code: int | None = None):
        super().__init__(message)
        if exit_code is not None:
            self.exit_code = exit_code


class TokenMissingError(TianQuoteError):
    """Raised when a remote fetch is attempted without an API token.

    No network I/O happens before this is raised.
    """

    exit_code = EXIT_TOKEN_MISSING

    def __init__(self, message: str = "API token is not set") -> None:
        super().__init__(message)


class FileUnavailableError(TianQuoteError):
    """Raised when the bundled example asset cannot be found."""

    exit_code = EXIT_NOT_FOUND


class CacheUnavailableError(TianQuoteError):
    """Raised when the cache file is missing or cannot be read.

    The underlying :class:`OSError` is available as ``__cause__``.
    """

    exit_code = EXIT_NOT_FOUND


class InvalidResponseReason(str, enum.Enum):
    """Tag describing why a payload was rejected.

    Only one category exists today: the API answers failures (bad token,
    quota exhausted, ...) with a differently shaped envelope that cannot be
    told apart reliably from a corrupt payload.
    """

    UNEXPECTED_RESULT = "unexpected_result"


class InvalidResponseError(TianQuoteError):
    """Raised when a payload fails structural decoding.

    Args:
        description: Short description, ``"unexpected result"`` by default.
        reason: Machine-readable tag for the failure.
    """

    exit_code = EXIT_INVALID_RESPONSE

    def __init__(
        self,
        description: str = "unexpected result",
        reason: InvalidResponseReason = InvalidResponseReason.UNEXPECTED_RESULT,
    ) -> None:
        super().__init__(description)
        self.description = description
        self.reason = reason

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, InvalidResponseError):
            return NotImplemented
        return (self.description, self.reason) == (other.description, other.reason)

    def __hash__(self) -> int:
        return hash((self.description, self.reason))


class ConfigError(TianQuoteError):
    """Raised for configuration problems (invalid JSON, unknown keys)."""

    exit_code = EXIT_GENERIC_FAILURE
