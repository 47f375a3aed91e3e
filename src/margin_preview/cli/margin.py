"""Margin estimate and validation commands."""

from __future__ import annotations

import json
from typing import TYPE_CHECKING, Annotated

import typer
from rich.table import Table

from margin_preview.api.models import Side
from margin_preview.cli.utils import config_from_context, console, exit_load_error, run_async

if TYPE_CHECKING:
    from margin_preview.api.models import ValidationOutcome
    from margin_preview.margin import ValidationSession

SymbolArg = Annotated[str, typer.Argument(help="Asset symbol (e.g. BTC).")]
SizeOpt = Annotated[float, typer.Option("--size", "-s", min=0, help="Order size in contracts.")]
LeverageOpt = Annotated[
    int | None,
    typer.Option(
        "--leverage",
        "-l",
        help="Leverage multiple. Falls back to the asset default if not allowed.",
        show_default=False,
    ),
]
SideOpt = Annotated[Side, typer.Option("--side", help="Position side.")]
JsonOpt = Annotated[bool, typer.Option("--json", help="Output as JSON.")]


def _apply_inputs(
    session: ValidationSession,
    *,
    symbol: str,
    size: float,
    leverage: int | None,
    side: Side,
    quiet: bool = False,
) -> None:
    try:
        session.select_asset(symbol)
    except KeyError:
        known = ", ".join(session.catalog.symbols)
        console.print(f"[red]Error:[/red] Unknown asset '{symbol}'. Available: {known}")
        raise typer.Exit(1) from None

    session.set_side(side)
    try:
        session.set_size(size)
    except ValueError as e:
        console.print(f"[red]Error:[/red] {e}")
        raise typer.Exit(1) from None
    if leverage is not None:
        session.set_leverage(leverage)
        draft = session.draft
        if not quiet and draft is not None and draft.leverage != leverage:
            console.print(
                f"[yellow]Leverage {leverage}x is not allowed for {symbol}; "
                f"using {draft.leverage}x.[/yellow]"
            )


def _render_estimate(session: ValidationSession) -> None:
    draft = session.draft
    if draft is None or draft.asset is None:
        return

    table = Table(title=f"Margin Estimate: {draft.asset.symbol}")
    table.add_column("Field", style="cyan")
    table.add_column("Value", style="green")
    table.add_row("Mark Price", f"${draft.asset.mark_price:,}")
    table.add_row("Contract Value", str(draft.asset.contract_value))
    table.add_row("Side", draft.side.value)
    table.add_row("Order Size", f"{draft.size:g}")
    table.add_row("Leverage", f"{draft.leverage}x")
    table.add_row("Estimated Margin", f"{session.estimate:.2f}")
    console.print(table)


def render_outcome(outcome: ValidationOutcome) -> None:
    if outcome.ok:
        console.print("[bold green]OK[/bold green]")
    else:
        console.print("[bold red]ERROR[/bold red]")
    if outcome.message:
        console.print(outcome.message)
    console.print(f"[dim]Backend verified margin: {outcome.margin_required}[/dim]")


def _estimate_payload(session: ValidationSession) -> dict[str, object]:
    draft = session.draft
    if draft is None or draft.asset is None:
        return {}
    return {
        "asset": draft.asset.symbol,
        "side": draft.side.value,
        "order_size": draft.size,
        "leverage": draft.leverage,
        "margin_client": session.estimate,
    }


def margin_estimate(
    ctx: typer.Context,
    symbol: SymbolArg,
    size: SizeOpt,
    leverage: LeverageOpt = None,
    side: SideOpt = Side.LONG,
    output_json: JsonOpt = False,
) -> None:
    """Estimate initial margin locally from live asset parameters."""
    from margin_preview.cli.client_factory import margin_client, validation_session

    config = config_from_context(ctx)

    async def _estimate() -> None:
        async with margin_client(config) as client:
            session = validation_session(client)
            await session.load()

        if not session.ready:
            raise exit_load_error(session.load_error, config)

        _apply_inputs(
            session,
            symbol=symbol,
            size=size,
            leverage=leverage,
            side=side,
            quiet=output_json,
        )

        if output_json:
            typer.echo(json.dumps(_estimate_payload(session), indent=2))
            return
        _render_estimate(session)

    run_async(_estimate())


def margin_validate(
    ctx: typer.Context,
    symbol: SymbolArg,
    size: SizeOpt,
    leverage: LeverageOpt = None,
    side: SideOpt = Side.LONG,
    output_json: JsonOpt = False,
) -> None:
    """Estimate margin, then submit it to the backend for confirmation."""
    from margin_preview.cli.client_factory import margin_client, validation_session

    config = config_from_context(ctx)

    async def _validate() -> None:
        async with margin_client(config) as client:
            session = validation_session(client)
            await session.load()

            if not session.ready:
                raise exit_load_error(session.load_error, config)

            _apply_inputs(
                session,
                symbol=symbol,
                size=size,
                leverage=leverage,
                side=side,
                quiet=output_json,
            )

            if not session.can_submit:
                console.print("[red]Error:[/red] Order size must be greater than zero.")
                raise typer.Exit(1)

            outcome = await session.submit()

        if outcome is None:
            raise typer.Exit(1)

        if output_json:
            payload = {
                "request": _estimate_payload(session),
                "outcome": outcome.model_dump(mode="json"),
            }
            typer.echo(json.dumps(payload, indent=2))
        else:
            _render_estimate(session)
            render_outcome(outcome)

        if not outcome.ok:
            raise typer.Exit(1)

    run_async(_validate())
