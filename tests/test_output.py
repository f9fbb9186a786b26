"""Tests for the output manager."""

from __future__ import annotations

import json

import pytest

from tianquote.output import OutputFormat, OutputManager, get_output, reset_output, set_output


class TestOutputManager:
    def test_json_format(self, capsys: pytest.CaptureFixture[str]) -> None:
        OutputManager(format=OutputFormat.JSON, no_color=True).format_response({"msg": "早安"})
        out = capsys.readouterr().out
        assert json.loads(out) == {"msg": "早安"}
        assert "早安" in out

    def test_plain_dict(self, capsys: pytest.CaptureFixture[str]) -> None:
        OutputManager(format=OutputFormat.PLAIN, no_color=True).format_response({"a": 1})
        assert capsys.readouterr().out == "a\t1\n"

    def test_quiet_suppresses_info_not_warning(self, capsys: pytest.CaptureFixture[str]) -> None:
        manager = OutputManager(format=OutputFormat.PLAIN, no_color=True, quiet=True)
        manager.info("hidden")
        manager.warning("shown")
        err = capsys.readouterr().err
        assert "hidden" not in err
        assert "Warning: shown" in err

    def test_debug_only_when_verbose(self, capsys: pytest.CaptureFixture[str]) -> None:
        OutputManager(format=OutputFormat.PLAIN, no_color=True).debug("quiet")
        OutputManager(format=OutputFormat.PLAIN, no_color=True, verbose=True).debug("loud")
        err = capsys.readouterr().err
        assert "quiet" not in err
        assert "[debug] loud" in err

    def test_no_color_env(self, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.setenv("NO_COLOR", "1")
        assert OutputManager().format == OutputFormat.PLAIN


class TestGlobalOutput:
    def test_set_and_reset(self) -> None:
        manager = OutputManager(format=OutputFormat.JSON)
        set_output(manager)
        assert get_output() is manager
        reset_output()
        assert get_output() is not manager
