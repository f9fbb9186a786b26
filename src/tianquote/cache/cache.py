"""Disk persistence for the last fetched quotation payload.

Exactly one payload is cached per cache root, under the fixed file name
:data:`CACHE_FILENAME`.  The name does not depend on the token or the date,
so every successful remote fetch replaces the previous file.

Writes go through :func:`~tianquote.config.atomic_write` and are serialised
by a lock shared by every :class:`QuotationCache` that points at the same
file, so concurrent writers in one process cannot interleave and readers
only ever see a complete payload.  The last writer wins.
"""

from __future__ import annotations

import threading
from pathlib import Path

from tianquote.config import atomic_write
from tianquote.exceptions import CacheUnavailableError

CACHE_FILENAME = "MorningQuotation"

_locks: dict[Path, threading.Lock] = {}
_locks_guard = threading.Lock()


def _lock_for(path: Path) -> threading.Lock:
    """Return the process-wide writer lock for *path*."""
    key = path.absolute()
    with _locks_guard:
        lock = _locks.get(key)
        if lock is None:
            lock = _locks[key] = threading.Lock()
        return lock


class QuotationCache:
    """Stores the raw bytes of the last successful response.

    Args:
        cache_dir: Cache root.  The directory is created on first write.

    Example::

        cache = QuotationCache("/tmp/tianquote")
        cache.write(b'{"msg": "success", "code": 200, "newslist": []}')
        data = cache.read()
    """

    def __init__(self, cache_dir: str | Path) -> None:
        self._cache_dir = Path(cache_dir)
        self._path = self._cache_dir / CACHE_FILENAME
        self._lock = _lock_for(self._path)

    @property
    def cache_dir(self) -> Path:
        return self._cache_dir

    @property
    def path(self) -> Path:
        """Location of the cache file."""
        return self._path

    def exists(self) -> bool:
        return self._path.is_file()

    def read(self) -> bytes:
        """Return the cached bytes.

        Raises:
            CacheUnavailableError: If the file is missing or unreadable.  The
                original :class:`OSError` is chained as ``__cause__``.
        """
        try:
            return self._path.read_bytes()
        except OSError as exc:
            raise CacheUnavailableError(
                f"Cached quotation unavailable at {self._path}: {exc}"
            ) from exc

    def write(self, data: bytes) -> None:
        """Atomically replace the cache file with *data*.

        Raises:
            OSError: If the directory or file cannot be written.
        """
        with self._lock:
            atomic_write(self._path, data)

    def clear(self) -> bool:
        """Delete the cache file.

        Returns:
            ``True`` if a file was removed, ``False`` if none existed.
        """
        with self._lock:
            try:
                self._path.unlink()
            except FileNotFoundError:
                return False
        return True
