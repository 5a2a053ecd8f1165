"""Lot linkage commands for the trade journal CLI.

Shows which Buy lots each Sell closed (FIFO) and the lots still open.
"""

import click
from rich.panel import Panel
from rich.table import Table

from tradejournal.cli.common import (
    format_currency,
    format_percent,
    get_display,
    get_service,
    pnl_style,
    show_empty,
    show_unavailable,
)
from tradejournal.cli.main import console
from tradejournal.errors import StoreUnavailable
from tradejournal.models import LinkResult


def render_link(link: LinkResult, currency: str, krw_rate: float) -> None:
    """Render one Sell's linked Buy lots."""
    if link.cost_basis is None:
        basis = "[yellow]n/a[/yellow]"
    else:
        basis = format_currency(link.cost_basis, currency, krw_rate)

    realized = link.realized_pnl_percent
    realized_text = "n/a" if realized is None else (
        f"[{pnl_style(realized)}]{format_percent(realized)}[/{pnl_style(realized)}]"
    )

    body = (
        f"[bold]Average cost:[/bold] {basis}   "
        f"[bold]Matched:[/bold] {link.matched_quantity}   "
        f"[bold]Sold:[/bold] {link.sell_quantity}   "
        f"[bold]Remaining:[/bold] {link.remaining_shares}\n"
        f"[bold]Realized vs cost:[/bold] {realized_text}"
    )
    if link.shortfall is not None:
        body += (
            f"\n\n[red]⚠ {link.shortfall.unmatched_quantity} share(s) sold without an "
            f"earlier Buy. The ledger is inconsistent for this sell.[/red]"
        )

    border = "red" if link.shortfall is not None else "green"
    console.print(Panel(
        body,
        title=f"[bold]{link.ticker} Sell on {link.date.isoformat()}[/bold] [dim]{link.sell_trade_id[:8]}[/dim]",
        border_style=border,
    ))

    if not link.allocations:
        return

    table = Table(show_header=True, header_style="bold cyan")
    table.add_column("#", justify="right")
    table.add_column("Buy Date")
    table.add_column("Shares", justify="right")
    table.add_column("Price", justify="right")
    table.add_column("Buy ID", style="dim")

    for index, allocation in enumerate(link.allocations, start=1):
        table.add_row(
            str(index),
            allocation.buy_date.isoformat(),
            str(allocation.quantity),
            format_currency(allocation.price, currency, krw_rate),
            allocation.buy_trade_id[:8],
        )

    console.print(table)


@click.command()
@click.argument("ticker")
@click.pass_context
def linkage(ctx: click.Context, ticker: str) -> None:
    """Show which Buy lots each Sell of TICKER closed.

    Sells consume the oldest open Buy lot first (FIFO). Trades on the
    same date are matched in the order they were recorded.

    \b
    Examples:
      tradejournal linkage AAPL
    """
    service = get_service(ctx)
    currency, krw_rate = get_display(ctx)

    try:
        links = service.get_linkage(ticker)
    except StoreUnavailable as e:
        show_unavailable(str(e))
        raise SystemExit(1)

    if not links:
        console.print(Panel(
            f"[dim]No sells recorded for {ticker.strip().upper()}[/dim]",
            title="[bold]Lot Linkage[/bold]",
            border_style="dim",
        ))
        return

    for link in links:
        render_link(link, currency, krw_rate)


@click.command()
@click.pass_context
def positions(ctx: click.Context) -> None:
    """Show open Buy lots per ticker and any over-sold Sells."""
    service = get_service(ctx)
    currency, krw_rate = get_display(ctx)

    try:
        report = service.get_linkage_report()
    except StoreUnavailable as e:
        show_unavailable(str(e))
        raise SystemExit(1)

    if not report.links and not report.positions:
        show_empty("Open Positions")
        return

    if report.positions:
        table = Table(title="Open Positions", show_header=True, header_style="bold cyan")
        table.add_column("Ticker", style="bold")
        table.add_column("Shares", justify="right")
        table.add_column("Avg Cost", justify="right")
        table.add_column("Lots", justify="right")
        table.add_column("Oldest Lot")

        for ticker, position in report.positions.items():
            table.add_row(
                ticker,
                str(position.quantity),
                format_currency(position.average_cost or 0.0, currency, krw_rate),
                str(len(position.lots)),
                position.lots[0].date.isoformat(),
            )
        console.print(table)
    else:
        console.print("[dim]No open positions[/dim]")

    if report.shortfalls:
        table = Table(title="Over-sold Sells", show_header=True, header_style="bold red")
        table.add_column("Ticker", style="bold")
        table.add_column("Sell ID", style="dim")
        table.add_column("Unmatched", justify="right")
        for shortfall in report.shortfalls:
            table.add_row(shortfall.ticker, shortfall.sell_trade_id[:8], str(shortfall.unmatched_quantity))
        console.print(table)
