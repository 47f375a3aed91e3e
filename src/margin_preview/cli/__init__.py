"""
CLI application for Margin Preview.

Estimates initial margin locally and confirms it against the margin service.
"""

from __future__ import annotations

from typing import Annotated

import typer
from dotenv import find_dotenv, load_dotenv

from margin_preview.cli.assets import assets_list
from margin_preview.cli.margin import margin_estimate, margin_validate
from margin_preview.cli.utils import console

app = typer.Typer(
    name="margin",
    help="Margin Preview CLI - estimate and validate initial margin.",
    add_completion=False,
)

app.command("assets")(assets_list)
app.command("estimate")(margin_estimate)
app.command("validate")(margin_validate)


@app.callback()
def main(
    ctx: typer.Context,
    api_url: Annotated[
        str | None,
        typer.Option(
            "--api-url",
            "-u",
            help="Margin service base URL. Defaults to MARGIN_API_URL or http://localhost:8080.",
            show_default=False,
        ),
    ] = None,
) -> None:
    """Margin Preview CLI."""
    from pydantic import ValidationError

    from margin_preview.api.config import APIConfig

    load_dotenv(find_dotenv(usecwd=True))

    # Priority: CLI flag > MARGIN_API_URL env var > default
    try:
        ctx.obj = APIConfig.from_env(base_url=api_url)
    except (ValidationError, ValueError) as e:
        console.print(f"[red]Error:[/red] Invalid API configuration: {e}")
        raise typer.Exit(1) from None


@app.command()
def version() -> None:
    """Show version information."""
    from margin_preview import __version__

    console.print(f"margin-preview v{__version__}")
