"""Asset catalog command."""

from __future__ import annotations

import json
from typing import TYPE_CHECKING, Annotated

import typer
from rich.table import Table

from margin_preview.cli.utils import config_from_context, console, exit_load_error, run_async

if TYPE_CHECKING:
    from collections.abc import Iterable

    from margin_preview.api.models import Asset


def render_assets_table(assets: Iterable[Asset]) -> None:
    table = Table(title="Tradable Assets")
    table.add_column("Symbol", style="cyan", no_wrap=True)
    table.add_column("Mark Price", style="green", justify="right")
    table.add_column("Contract Value", justify="right")
    table.add_column("Leverage", style="magenta")

    for asset in assets:
        table.add_row(
            asset.symbol,
            f"${asset.mark_price:,}",
            str(asset.contract_value),
            ", ".join(f"{lev}x" for lev in asset.allowed_leverage),
        )

    console.print(table)


def assets_list(
    ctx: typer.Context,
    output_json: Annotated[bool, typer.Option("--json", help="Output as JSON.")] = False,
) -> None:
    """List tradable assets and their margin parameters."""
    from margin_preview.cli.client_factory import margin_client, validation_session

    config = config_from_context(ctx)

    async def _list() -> None:
        async with margin_client(config) as client:
            session = validation_session(client)
            await session.load()

        if not session.ready:
            raise exit_load_error(session.load_error, config)

        if output_json:
            payload = {"assets": [a.model_dump(mode="json") for a in session.catalog]}
            typer.echo(json.dumps(payload, indent=2))
            return
        render_assets_table(session.catalog)

    run_async(_list())
