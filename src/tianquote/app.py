"""Typer application and CLI entry point for tianquote.

The :func:`main` function is the console-script entry point declared in
``pyproject.toml``.  It invokes the Typer app and maps errors onto exit
codes: :class:`TianQuoteError` subclasses use their own ``exit_code`` and
:mod:`httpx` transport errors exit with :data:`~tianquote.exit_codes.EXIT_CONNECTION_ERROR`.
"""

from __future__ import annotations

import signal
import sys
from typing import Any

import httpx
import typer

from tianquote import __version__
from tianquote.exit_codes import EXIT_CONNECTION_ERROR, EXIT_GENERIC_FAILURE


app = typer.Typer(
    name="tianquote",
    help="Fetch the TianAPI morning quotation.",
    no_args_is_help=True,
    add_completion=False,
    rich_markup_mode="rich",
)


def _version_callback(value: bool) -> None:
    """Print version and exit when --version is passed."""
    if value:
        typer.echo(f"tianquote {__version__}")
        raise typer.Exit()


@app.callback()
def main_callback(
    ctx: typer.Context,
    version: bool = typer.Option(
        False,
        "--version",
        callback=_version_callback,
        is_eager=True,
        help="Show version and exit.",
    ),
    json_output: bool = typer.Option(False, "--json", help="JSON output format."),
    plain_output: bool = typer.Option(False, "--plain", help="Plain text output."),
    no_color: bool = typer.Option(False, "--no-color", help="Disable color output."),
    quiet: bool = typer.Option(False, "--quiet", "-q", help="Suppress non-essential output."),
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Enable debug output."),
) -> None:
    """Root callback executed before every sub-command.

    Installs the global :class:`~tianquote.output.OutputManager` built from
    the CLI flags.
    """
    from tianquote.output import OutputFormat, OutputManager, set_output

    fmt = OutputFormat.AUTO
    if json_output:
        fmt = OutputFormat.JSON
    elif plain_output:
        fmt = OutputFormat.PLAIN

    set_output(OutputManager(format=fmt, no_color=no_color, quiet=quiet, verbose=verbose))

    ctx.ensure_object(dict)
    ctx.obj["verbose"] = verbose


# ------------------------------------------------------------------ #
# Sub-commands
# ------------------------------------------------------------------ #

from tianquote.commands.cache import cache_app  # noqa: E402
from tianquote.commands.config import config_app  # noqa: E402
from tianquote.commands.quote import quote_command  # noqa: E402

app.command("quote")(quote_command)
app.add_typer(cache_app, name="cache", help="Inspect or clear the cached quotation.")
app.add_typer(config_app, name="config", help="Configuration management.")


def _setup_signal_handlers() -> None:
    """Install a SIGINT handler so Ctrl-C exits cleanly."""

    def _handler(signum: int, frame: Any) -> None:  # noqa: ANN401
        sys.stderr.write("\nCancelled.\n")
        sys.exit(130)

    signal.signal(signal.SIGINT, _handler)


def main() -> None:
    """CLI entry point invoked by the ``tianquote`` console script.

    Raises:
        SystemExit: Always raised (either by Typer or explicitly).
    """
    _setup_signal_handlers()
    try:
        app()
    except SystemExit:
        raise
    except KeyboardInterrupt:
        sys.stderr.write("\nCancelled.\n")
        sys.exit(130)
    except Exception as exc:
        from tianquote.exceptions import TianQuoteError
        from tianquote.output import error

        if isinstance(exc, TianQuoteError):
            error(str(exc))
            sys.exit(exc.exit_code)
        if isinstance(exc, httpx.HTTPError):
            error(f"Request failed: {exc}")
            sys.exit(EXIT_CONNECTION_ERROR)
        error(f"Unexpected error: {exc!r}")
        sys.exit(EXIT_GENERIC_FAILURE)
