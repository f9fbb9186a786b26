"""Shared test fixtures for tianquote.

Provides payload fixtures, an isolated XDG environment, output state
management, and a mock-transport factory.  These fixtures are discovered by
pytest and available to all test modules without explicit imports.
"""

from __future__ import annotations

import json
from pathlib import Path
from typing import Callable

import httpx
import pytest

from tianquote.output import OutputFormat, OutputManager, reset_output, set_output


EXAMPLE_CONTENT = "用努力去喂养梦想，愿跌倒不哭，明媚如初，早安。"

SIMPLE_PAYLOAD = json.dumps(
    {"msg": "ok", "code": 200, "newslist": [{"content": "早安"}]},
    ensure_ascii=False,
).encode("utf-8")


# ---------------------------------------------------------------------------
# Auto-reset global output state between tests
# ---------------------------------------------------------------------------


@pytest.fixture(autouse=True)
def _quiet_output_between_tests() -> None:
    """Install a quiet, colourless OutputManager and reset it afterwards.

    The manager caches sys.stdout/sys.stderr at creation time, so a fresh
    one is needed for every test.
    """
    set_output(OutputManager(format=OutputFormat.PLAIN, no_color=True, quiet=True))
    yield
    reset_output()


# ---------------------------------------------------------------------------
# Payloads
# ---------------------------------------------------------------------------


@pytest.fixture
def simple_payload() -> bytes:
    """The minimal ``{"msg": "ok", ...}`` payload."""
    return SIMPLE_PAYLOAD


@pytest.fixture
def example_content() -> str:
    """Quotation text inside the bundled example asset."""
    return EXAMPLE_CONTENT


@pytest.fixture
def example_payload() -> bytes:
    """Bytes of the bundled MorningQuotation.json asset."""
    from tianquote.example import load_example_data

    return load_example_data()


# ---------------------------------------------------------------------------
# Config isolation fixture
# ---------------------------------------------------------------------------


@pytest.fixture
def isolated_config(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> Path:
    """Isolate configuration and cache to a temporary directory.

    Sets XDG_CONFIG_HOME and XDG_CACHE_HOME to subdirectories of tmp_path,
    forces the XDG code path, clears TIANQUOTE_* variables, and changes the
    working directory to tmp_path.

    Returns:
        The tmp_path root directory.
    """
    monkeypatch.setattr("tianquote.config._is_xdg_platform", lambda: True)
    monkeypatch.setenv("XDG_CONFIG_HOME", str(tmp_path / "config"))
    monkeypatch.setenv("XDG_CACHE_HOME", str(tmp_path / "cache"))
    for var in ["TIANQUOTE_TOKEN", "TIANQUOTE_CACHE_DIR"]:
        monkeypatch.delenv(var, raising=False)
    monkeypatch.chdir(tmp_path)
    return tmp_path


# ---------------------------------------------------------------------------
# Network
# ---------------------------------------------------------------------------


class RecordingTransport(httpx.MockTransport):
    """MockTransport that records every request it receives."""

    def __init__(self, handler: Callable[[httpx.Request], httpx.Response]) -> None:
        self.requests: list[httpx.Request] = []

        def _record(request: httpx.Request) -> httpx.Response:
            self.requests.append(request)
            return handler(request)

        super().__init__(_record)


@pytest.fixture
def make_transport() -> Callable[..., RecordingTransport]:
    """Factory for RecordingTransport instances.

    Call with a handler, or with ``content=``/``status_code=`` to get a
    transport that always answers the same way.
    """

    def _factory(
        handler: Callable[[httpx.Request], httpx.Response] | None = None,
        content: bytes = SIMPLE_PAYLOAD,
        status_code: int = 200,
    ) -> RecordingTransport:
        if handler is None:

            def handler(request: httpx.Request) -> httpx.Response:
                return httpx.Response(
                    status_code,
                    content=content,
                    headers={"content-type": "application/json"},
                )

        return RecordingTransport(handler)

    return _factory


@pytest.fixture
def cli_runner():
    """Typer CLI test runner."""
    from typer.testing import CliRunner

    return CliRunner()
