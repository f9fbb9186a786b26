"""Integration tests for the tianquote CLI.

Commands are invoked through the real Typer app with an isolated XDG
environment.  No test touches the network: remote requests either stop at
the token check or use a patched HTTP transport.
"""

from __future__ import annotations

import json
from pathlib import Path

import httpx
import pytest

from tianquote import __version__
from tianquote.app import app
from tianquote.cache import QuotationCache
from tianquote.config import load_global_config
from tianquote.exit_codes import (
    EXIT_CONNECTION_ERROR,
    EXIT_INVALID_RESPONSE,
    EXIT_INVALID_USAGE,
    EXIT_NOT_FOUND,
    EXIT_TOKEN_MISSING,
)


@pytest.fixture
def patch_transport(monkeypatch: pytest.MonkeyPatch):
    """Route every QuotationRequest created by the CLI through *transport*."""

    def _patch(transport: httpx.BaseTransport) -> None:
        from tianquote.client import request as request_module

        real_init = request_module.QuotationRequest.__init__

        def _init(self, *args, **kwargs):
            kwargs["transport"] = transport
            real_init(self, *args, **kwargs)

        monkeypatch.setattr(request_module.QuotationRequest, "__init__", _init)

    return _patch


class TestRoot:
    def test_version(self, cli_runner) -> None:
        result = cli_runner.invoke(app, ["--version"])
        assert result.exit_code == 0
        assert __version__ in result.output

    def test_no_args_shows_help(self, cli_runner) -> None:
        result = cli_runner.invoke(app, [])
        assert "quote" in result.output


class TestQuote:
    def test_example_source(self, cli_runner, isolated_config: Path, example_content: str) -> None:
        result = cli_runner.invoke(app, ["--plain", "quote", "--source", "example"])
        assert result.exit_code == 0, result.output
        assert example_content in result.output

    def test_example_json(self, cli_runner, isolated_config: Path, example_content: str) -> None:
        result = cli_runner.invoke(app, ["--json", "--quiet", "quote", "--source", "example"])
        assert result.exit_code == 0, result.output
        payload = json.loads(result.stdout)
        assert payload["code"] == 200
        assert payload["newslist"][0]["content"] == example_content

    def test_local_source_reads_cache(self, cli_runner, isolated_config: Path, simple_payload: bytes) -> None:
        cache_dir = isolated_config / "mycache"
        QuotationCache(cache_dir).write(simple_payload)
        result = cli_runner.invoke(
            app, ["--plain", "quote", "--source", "local", "--cache-dir", str(cache_dir)]
        )
        assert result.exit_code == 0, result.output
        assert "早安" in result.output

    def test_local_source_empty_cache(self, cli_runner, isolated_config: Path) -> None:
        result = cli_runner.invoke(app, ["--plain", "quote", "--source", "local"])
        assert result.exit_code == EXIT_NOT_FOUND

    def test_remote_without_token(self, cli_runner, isolated_config: Path) -> None:
        result = cli_runner.invoke(app, ["--plain", "quote"])
        assert result.exit_code == EXIT_TOKEN_MISSING
        assert "token" in result.output.lower()

    def test_remote_with_token_flag(
        self, cli_runner, isolated_config: Path, make_transport, patch_transport, simple_payload: bytes
    ) -> None:
        transport = make_transport(content=simple_payload)
        patch_transport(transport)
        result = cli_runner.invoke(app, ["--plain", "quote", "--token", "abc"])
        assert result.exit_code == 0, result.output
        assert "早安" in result.output
        assert str(transport.requests[0].url).endswith("key=abc")
        cache_file = isolated_config / "cache" / "tianquote" / "MorningQuotation"
        assert cache_file.read_bytes() == simple_payload

    def test_remote_token_from_env(
        self, cli_runner, isolated_config: Path, make_transport, patch_transport, monkeypatch: pytest.MonkeyPatch
    ) -> None:
        monkeypatch.setenv("TIANQUOTE_TOKEN", "from-env")
        transport = make_transport()
        patch_transport(transport)
        result = cli_runner.invoke(app, ["--plain", "quote"])
        assert result.exit_code == 0, result.output
        assert str(transport.requests[0].url).endswith("key=from-env")

    def test_remote_invalid_payload(
        self, cli_runner, isolated_config: Path, make_transport, patch_transport
    ) -> None:
        patch_transport(make_transport(content=b'{"code":230,"msg":"key error"}'))
        result = cli_runner.invoke(app, ["--plain", "quote", "-t", "abc"])
        assert result.exit_code == EXIT_INVALID_RESPONSE
        assert "unexpected result" in result.output

    def test_remote_error_status_is_invalid_response(
        self, cli_runner, isolated_config: Path, make_transport, patch_transport
    ) -> None:
        envelope = '{"code":150,"msg":"API可用次数不足"}'.encode("utf-8")
        patch_transport(make_transport(content=envelope, status_code=403))
        result = cli_runner.invoke(app, ["--plain", "quote", "-t", "abc"])
        assert result.exit_code == EXIT_INVALID_RESPONSE
        cache_file = isolated_config / "cache" / "tianquote" / "MorningQuotation"
        assert cache_file.read_bytes() == envelope

    def test_remote_transport_error(
        self, cli_runner, isolated_config: Path, make_transport, patch_transport
    ) -> None:
        def handler(request: httpx.Request) -> httpx.Response:
            raise httpx.ConnectError("refused", request=request)

        patch_transport(make_transport(handler))
        result = cli_runner.invoke(app, ["--plain", "quote", "-t", "abc"])
        assert result.exit_code == EXIT_CONNECTION_ERROR


class TestCacheCommands:
    def test_path(self, cli_runner, isolated_config: Path) -> None:
        result = cli_runner.invoke(app, ["--plain", "cache", "path"])
        assert result.exit_code == 0
        assert str(isolated_config / "cache" / "tianquote" / "MorningQuotation") in result.output

    def test_clear(self, cli_runner, isolated_config: Path) -> None:
        cache_dir = isolated_config / "c"
        QuotationCache(cache_dir).write(b"x")
        result = cli_runner.invoke(app, ["--plain", "cache", "clear", "--cache-dir", str(cache_dir)])
        assert result.exit_code == 0
        assert not QuotationCache(cache_dir).exists()


class TestConfigCommands:
    def test_set_token_and_show_masked(self, cli_runner, isolated_config: Path) -> None:
        result = cli_runner.invoke(app, ["--plain", "config", "set", "token", "0123456789"])
        assert result.exit_code == 0, result.output
        assert load_global_config().token == "0123456789"

        shown = cli_runner.invoke(app, ["--json", "--quiet", "config", "show"])
        assert shown.exit_code == 0
        data = json.loads(shown.stdout)
        assert data["token"] == "01******89"

    def test_set_nested_float(self, cli_runner, isolated_config: Path) -> None:
        result = cli_runner.invoke(app, ["config", "set", "request.expiration_seconds", "600"])
        assert result.exit_code == 0, result.output
        assert load_global_config().request.expiration_seconds == 600

    def test_set_unknown_key(self, cli_runner, isolated_config: Path) -> None:
        result = cli_runner.invoke(app, ["config", "set", "nope", "1"])
        assert result.exit_code == EXIT_INVALID_USAGE

    def test_set_invalid_value(self, cli_runner, isolated_config: Path) -> None:
        result = cli_runner.invoke(app, ["config", "set", "request.timeout", "fast"])
        assert result.exit_code == EXIT_INVALID_USAGE
