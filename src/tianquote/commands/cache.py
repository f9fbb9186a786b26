"""Cache commands -- locate or remove the cached quotation file."""

from __future__ import annotations

from typing import Optional

import typer

from tianquote.output import info, print_data, success


cache_app = typer.Typer(no_args_is_help=True)


def _open_cache(cache_dir: Optional[str]):
    from tianquote.cache import QuotationCache
    from tianquote.config import resolve_cache_dir

    return QuotationCache(resolve_cache_dir(cache_dir))


@cache_app.command("path")
def cache_path(
    cache_dir: Optional[str] = typer.Option(None, "--cache-dir", help="Cache directory override."),
) -> None:
    """Print the location of the cache file (whether or not it exists)."""
    cache = _open_cache(cache_dir)
    print_data(str(cache.path))
    if not cache.exists():
        info("No quotation has been cached yet.")


@cache_app.command("clear")
def cache_clear(
    cache_dir: Optional[str] = typer.Option(None, "--cache-dir", help="Cache directory override."),
) -> None:
    """Delete the cached quotation."""
    cache = _open_cache(cache_dir)
    if cache.clear():
        success(f"Removed {cache.path}")
    else:
        info("Cache is already empty.")
