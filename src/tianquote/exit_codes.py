"""Numeric process exit codes following `clig.dev <https://clig.dev/>`_ conventions.

Each constant maps to a specific error category and is referenced by the
corresponding :class:`~tianquote.exceptions.TianQuoteError` subclass.
Shell scripts can inspect the exit code to tell a missing token apart
from a network outage without parsing stderr.

Example::

    $ tianquote quote --source local
    $ echo $?
    4   # EXIT_NOT_FOUND -- nothing has been cached yet
"""

EXIT_GENERIC_FAILURE = 1
"""An unclassified error occurred."""

EXIT_INVALID_USAGE = 2
"""The command was invoked with invalid arguments."""

EXIT_TOKEN_MISSING = 3
"""A remote request was attempted without an API token."""

EXIT_NOT_FOUND = 4
"""The cache file or the bundled example asset does not exist."""

EXIT_INVALID_RESPONSE = 5
"""The payload could not be decoded into a quotation response."""

EXIT_CONNECTION_ERROR = 6
"""A network-level error occurred (timeout, DNS failure, refused connection)."""
