"""Shared utilities for CLI commands (console output, config, async helpers)."""

from __future__ import annotations

import asyncio
from typing import TYPE_CHECKING, TypeVar

import typer
from rich.console import Console

from margin_preview.api.config import APIConfig

if TYPE_CHECKING:
    from collections.abc import Coroutine

    from margin_preview.margin.catalog import CatalogLoadError

console = Console()

T = TypeVar("T")


def run_async(coro: Coroutine[object, object, T]) -> T:
    """Run a coroutine from a sync CLI command.

    Raises:
        typer.Exit: With code 130 on KeyboardInterrupt (standard SIGINT exit code).
    """
    try:
        return asyncio.run(coro)
    except KeyboardInterrupt:
        console.print("\n[yellow]Interrupted.[/yellow]")
        raise typer.Exit(130) from None


def config_from_context(ctx: typer.Context) -> APIConfig:
    """Return the config resolved by the app callback (defaults if run standalone)."""
    obj = ctx.find_root().obj
    if isinstance(obj, APIConfig):
        return obj
    return APIConfig.from_env()


def exit_load_error(error: CatalogLoadError | None, config: APIConfig) -> typer.Exit:
    """Print the blocking catalog-load message and return the exit to raise."""
    message = error.message if error is not None else "Could not load asset configuration."
    console.print(f"[red]Error:[/red] {message}")
    console.print(f"[dim]Make sure the margin service is running at {config.base_url}.[/dim]")
    return typer.Exit(1)
