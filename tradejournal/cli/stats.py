"""Statistics commands for the trade journal CLI.

Handles the headline summary, behavior tag performance and
sector allocation views.
"""

from typing import Optional

import click
from rich.panel import Panel
from rich.table import Table

from tradejournal.cli.common import (
    build_filter,
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
from tradejournal.models import BUY, SELL


def _filter_options(command):
    command = click.option("--ticker", "-t", default=None, help="Only this symbol.")(command)
    command = click.option("--tag", default=None, help="Only this behavior tag.")(command)
    command = click.option(
        "--action", "-a",
        type=click.Choice([BUY, SELL], case_sensitive=False),
        default=None,
        help="Only Buys or only Sells.",
    )(command)
    return command


@click.command()
@_filter_options
@click.pass_context
def summary(ctx: click.Context, ticker: Optional[str], tag: Optional[str], action: Optional[str]) -> None:
    """Show trade count, win rate, average confidence and best/worst P&L.

    \b
    Examples:
      tradejournal summary
      tradejournal summary --ticker AAPL
      tradejournal summary --tag "Momentum Chaser"
    """
    service = get_service(ctx)
    currency, krw_rate = get_display(ctx)
    trade_filter = build_filter(ticker, tag, action.capitalize() if action else None)

    try:
        result = service.get_summary(trade_filter)
        shortfalls = service.get_shortfalls()
    except StoreUnavailable as e:
        show_unavailable(str(e))
        raise SystemExit(1)

    if result.insufficient_data:
        show_empty("Summary")
        return

    best, worst = pnl_style(result.best_pnl), pnl_style(result.worst_pnl)
    total = pnl_style(result.total_pnl_amount)
    console.print(Panel(
        f"[bold]Trades:[/bold]          {result.count}\n"
        f"[bold]Win Rate:[/bold]        {result.win_rate}%\n"
        f"[bold]Avg Confidence:[/bold]  {result.avg_confidence}%\n"
        f"[bold]Best P&L:[/bold]        [{best}]{format_percent(result.best_pnl)}[/{best}]\n"
        f"[bold]Worst P&L:[/bold]       [{worst}]{format_percent(result.worst_pnl)}[/{worst}]\n"
        f"[bold]Total P&L:[/bold]       "
        f"[{total}]{format_currency(result.total_pnl_amount, currency, krw_rate)}[/{total}]",
        title="[bold]Performance Summary[/bold]",
        border_style="cyan",
    ))

    if shortfalls:
        console.print(
            f"[yellow]⚠ {len(shortfalls)} sell(s) exceed the shares bought before them. "
            f"Run [cyan]tradejournal positions[/cyan] for details.[/yellow]"
        )


@click.command()
@_filter_options
@click.pass_context
def behaviors(ctx: click.Context, ticker: Optional[str], tag: Optional[str], action: Optional[str]) -> None:
    """Show performance per behavior tag."""
    service = get_service(ctx)
    currency, krw_rate = get_display(ctx)
    trade_filter = build_filter(ticker, tag, action.capitalize() if action else None)

    try:
        groups = service.get_behavior_breakdown(trade_filter)
    except StoreUnavailable as e:
        show_unavailable(str(e))
        raise SystemExit(1)

    if not groups:
        show_empty("Behavior Performance")
        return

    table = Table(title="Behavior Performance", show_header=True, header_style="bold cyan")
    table.add_column("Tag", style="bold")
    table.add_column("Trades", justify="right")
    table.add_column("Win Rate", justify="right")
    table.add_column("Avg P&L", justify="right")
    table.add_column("Total P&L", justify="right")

    for name, stats in groups.items():
        rate_style = "green" if stats.win_rate >= 70 else "yellow" if stats.win_rate >= 50 else "red"
        avg, total = pnl_style(stats.avg_pnl), pnl_style(stats.total_pnl_currency)
        table.add_row(
            name,
            str(stats.count),
            f"[{rate_style}]{stats.win_rate}%[/{rate_style}]",
            f"[{avg}]{format_percent(stats.avg_pnl)}[/{avg}]",
            f"[{total}]{format_currency(stats.total_pnl_currency, currency, krw_rate)}[/{total}]",
        )

    console.print(table)


@click.command()
@_filter_options
@click.pass_context
def sectors(ctx: click.Context, ticker: Optional[str], tag: Optional[str], action: Optional[str]) -> None:
    """Show trade allocation and P&L per sector.

    Allocation is each sector's share of the number of trades. Sectors
    come from the built-in map plus the [sectors] table of the config.
    """
    service = get_service(ctx)
    trade_filter = build_filter(ticker, tag, action.capitalize() if action else None)

    try:
        allocation = service.get_sector_allocation(trade_filter)
    except StoreUnavailable as e:
        show_unavailable(str(e))
        raise SystemExit(1)

    if not allocation:
        show_empty("Sector Allocation")
        return

    table = Table(title="Sector Allocation", show_header=True, header_style="bold cyan")
    table.add_column("Sector", style="bold")
    table.add_column("Trades", justify="right")
    table.add_column("Allocation", justify="right")
    table.add_column("P&L", justify="right")

    for name, sector in allocation.items():
        style = pnl_style(sector.total_pnl_percent)
        table.add_row(
            name,
            str(sector.trade_count),
            f"{sector.allocation_percent:.1f}%",
            f"[{style}]{format_percent(sector.total_pnl_percent)}[/{style}]",
        )

    console.print(table)
