"""Config commands -- view and modify global configuration.

Provides the ``tianquote config`` sub-command group for reading and
updating the user's global configuration file
(:class:`~tianquote.models.GlobalConfig`).
"""

from __future__ import annotations

import typer

from tianquote.exit_codes import EXIT_INVALID_USAGE
from tianquote.output import error, format_response, info, success


config_app = typer.Typer(no_args_is_help=True)


def _mask(token: str) -> str:
    if len(token) <= 4:
        return "****"
    return f"{token[:2]}{'*' * (len(token) - 4)}{token[-2:]}"


@config_app.command("show")
def config_show() -> None:
    """Show current configuration.

    The stored token is masked.

    Example::

        tianquote config show
        tianquote --json config show
    """
    from tianquote.config import get_config_dir, load_global_config

    config = load_global_config()
    data = config.model_dump(mode="json")
    if data.get("token"):
        data["token"] = _mask(data["token"])
    info(f"Config directory: {get_config_dir()}")
    format_response(data)


@config_app.command("set")
def config_set(
    key: str = typer.Argument(
        help="Config key (dot notation, e.g., 'request.timeout')."
    ),
    value: str = typer.Argument(help="Value to set."),
) -> None:
    """Set a configuration value.

    Uses dot notation for nested keys.  The value is coerced to the type of
    the existing field and the result is validated before saving.

    Raises:
        typer.Exit: With ``EXIT_INVALID_USAGE`` if the key path is invalid or validation fails.

    Example::

        tianquote config set token 0123abcd
        tianquote config set request.expiration_seconds 600
    """
    from pydantic import ValidationError

    from tianquote.config import load_global_config, save_global_config
    from tianquote.models import GlobalConfig

    data = load_global_config().model_dump(mode="json")

    keys = key.split(".")
    target = data
    for k in keys[:-1]:
        if k not in target or not isinstance(target[k], dict):
            error(f"Invalid config key: {key}")
            raise typer.Exit(code=EXIT_INVALID_USAGE)
        target = target[k]

    final_key = keys[-1]
    if final_key not in target or isinstance(target[final_key], dict):
        error(f"Unknown config key: {key}")
        raise typer.Exit(code=EXIT_INVALID_USAGE)

    current = target[final_key]
    coerced: object = value
    if isinstance(current, bool):
        coerced = value.lower() in ("true", "1", "yes")
    elif isinstance(current, (int, float)):
        try:
            coerced = type(current)(value)
        except ValueError:
            error(f"Expected a number for {key}, got: {value}")
            raise typer.Exit(code=EXIT_INVALID_USAGE) from None

    target[final_key] = coerced

    try:
        new_config = GlobalConfig.model_validate(data)
    except ValidationError as exc:
        error(f"Validation error: {exc}")
        raise typer.Exit(code=EXIT_INVALID_USAGE) from None

    save_global_config(new_config)
    shown = _mask(value) if final_key == "token" else coerced
    success(f"Set {key} = {shown}")
