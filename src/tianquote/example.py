"""Access to the bundled ``MorningQuotation.json`` example payload.

The file is a captured response from the live API.  It lets tests and the
``--source example`` CLI option exercise decoding without a token or a
network connection.
"""

from __future__ import annotations

from importlib import resources

from tianquote.exceptions import FileUnavailableError

EXAMPLE_RESOURCE = "MorningQuotation.json"


def load_example_data(name: str = EXAMPLE_RESOURCE) -> bytes:
    """Return the raw bytes of a bundled example payload.

    Args:
        name: Resource file name inside ``tianquote/resources``.

    Raises:
        FileUnavailableError: If the resource is not packaged.
    """
    resource = resources.files("tianquote").joinpath("resources").joinpath(name)
    try:
        return resource.read_bytes()
    except OSError as exc:
        raise FileUnavailableError(f"Example file '{name}' is not available") from exc
