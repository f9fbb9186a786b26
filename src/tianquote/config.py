"""Configuration management with XDG paths, atomic writes, and precedence resolution.

This module handles all persistent configuration for tianquote:

* **Directory layout** -- XDG Base Directory compliant on Linux/BSD,
  ``~/.tianquote/`` on macOS and Windows. See :func:`get_config_dir` and
  :func:`get_cache_dir`.
* **Global config** -- A single :class:`~tianquote.models.GlobalConfig`
  JSON file storing the token, request settings, and output defaults.
* **Precedence resolution** -- :func:`resolve_token` and
  :func:`resolve_cache_dir` merge CLI flags, environment variables, and the
  global config into the effective value.

All file writes, including the response cache, go through
:func:`atomic_write` so a reader never observes a half-written file.
"""

from __future__ import annotations

import json
import os
import platform
import tempfile
from pathlib import Path
from typing import Optional, Union

from tianquote.exceptions import ConfigError
from tianquote.models import GlobalConfig

_APP_NAME = "tianquote"
_CONFIG_FILENAME = "config.json"

TOKEN_ENV_VAR = "TIANQUOTE_TOKEN"
CACHE_DIR_ENV_VAR = "TIANQUOTE_CACHE_DIR"


# --- XDG path resolution ---


def _is_xdg_platform() -> bool:
    """Return True if the platform supports XDG Base Directory spec (Linux/FreeBSD)."""
    return platform.system() == "Linux" or platform.system().endswith("BSD")


def _fallback_base_dir() -> Path:
    """Fallback base directory for non-XDG platforms (macOS, Windows)."""
    return Path.home() / f".{_APP_NAME}"


def _xdg_base(env_var: str, default_segments: tuple[str, ...]) -> Path:
    """Resolve an XDG base directory from an env var with fallback segments under $HOME."""
    env_value = os.environ.get(env_var, "")
    if env_value:
        return Path(env_value)
    base = Path.home()
    for seg in default_segments:
        base = base / seg
    return base


def get_config_dir() -> Path:
    """Return the configuration directory, creating it if necessary.

    On Linux/BSD: ``$XDG_CONFIG_HOME/tianquote/`` (default ``~/.config/tianquote/``).
    On macOS/Windows: ``~/.tianquote/``.
    """
    if _is_xdg_platform():
        path = _xdg_base("XDG_CONFIG_HOME", (".config",)) / _APP_NAME
    else:
        path = _fallback_base_dir()
    path.mkdir(parents=True, exist_ok=True)
    return path


def get_cache_dir() -> Path:
    """Return the default cache root, creating it if necessary.

    The cached quotation lives directly inside this directory and can be
    deleted at any time.

    On Linux/BSD: ``$XDG_CACHE_HOME/tianquote/`` (default ``~/.cache/tianquote/``).
    On macOS/Windows: ``~/.tianquote/cache/``.
    """
    if _is_xdg_platform():
        path = _xdg_base("XDG_CACHE_HOME", (".cache",)) / _APP_NAME
    else:
        path = _fallback_base_dir() / "cache"
    path.mkdir(parents=True, exist_ok=True)
    return path


# --- Atomic file writes ---


def atomic_write(path: Path, data: Union[str, bytes]) -> None:
    """Write *data* to *path* atomically using temp file + rename.

    The temporary file is created in the same directory as *path* so that
    ``os.replace`` is an atomic rename on POSIX systems.  Text is encoded as
    UTF-8; bytes are written verbatim.  On any failure the temp file is
    removed and the exception propagates.
    """
    path.parent.mkdir(parents=True, exist_ok=True)
    payload = data.encode("utf-8") if isinstance(data, str) else data

    fd = None
    tmp_path: Optional[str] = None
    try:
        fd = tempfile.NamedTemporaryFile(
            mode="wb",
            dir=path.parent,
            prefix=f".{path.name}.",
            suffix=".tmp",
            delete=False,
        )
        tmp_path = fd.name
        fd.write(payload)
        fd.flush()
        os.fsync(fd.fileno())
        fd.close()
        fd = None  # prevent double-close below
        os.replace(tmp_path, path)
    except BaseException:
        if fd is not None:
            fd.close()
        if tmp_path is not None:
            try:
                os.unlink(tmp_path)
            except OSError:
                pass
        raise


# --- Global config ---


def _global_config_path() -> Path:
    """Path to the global config file."""
    return get_config_dir() / _CONFIG_FILENAME


def load_global_config() -> GlobalConfig:
    """Load the global configuration from the config directory.

    Returns:
        The deserialised :class:`~tianquote.models.GlobalConfig`, or a
        default instance if the file does not exist.

    Raises:
        ConfigError: If the file contains invalid JSON or fails validation.
    """
    path = _global_config_path()
    if not path.is_file():
        return GlobalConfig()
    try:
        data = json.loads(path.read_text(encoding="utf-8"))
        return GlobalConfig.model_validate(data)
    except (json.JSONDecodeError, ValueError) as exc:
        raise ConfigError(f"Invalid global config at {path}: {exc}") from exc


def save_global_config(config: GlobalConfig) -> None:
    """Persist the global configuration atomically to disk."""
    data = config.model_dump(mode="json")
    atomic_write(_global_config_path(), json.dumps(data, indent=2) + "\n")


# --- Precedence resolution ---


def resolve_token(
    cli_token: Optional[str] = None,
    config: Optional[GlobalConfig] = None,
) -> Optional[str]:
    """Resolve the API token.

    Precedence (high to low):
        1. ``cli_token`` (the ``--token`` flag)
        2. ``$TIANQUOTE_TOKEN``
        3. ``token`` in the global config

    Empty strings count as unset.  Returns ``None`` when no source has one.
    """
    if cli_token:
        return cli_token
    env_token = os.environ.get(TOKEN_ENV_VAR)
    if env_token:
        return env_token
    if config is None:
        config = load_global_config()
    return config.token or None


def resolve_cache_dir(
    cli_cache_dir: Optional[str] = None,
    config: Optional[GlobalConfig] = None,
) -> Path:
    """Resolve the cache root.

    Precedence: ``cli_cache_dir`` > ``$TIANQUOTE_CACHE_DIR`` > ``cache_dir``
    in the global config > :func:`get_cache_dir`.
    """
    if cli_cache_dir:
        return Path(cli_cache_dir).expanduser()
    env_dir = os.environ.get(CACHE_DIR_ENV_VAR)
    if env_dir:
        return Path(env_dir).expanduser()
    if config is None:
        config = load_global_config()
    if config.cache_dir:
        return Path(config.cache_dir).expanduser()
    return get_cache_dir()
