"""Journal commands for the trade journal CLI.

Handles recording trades, listing the ledger, trade detail with its
linked Buy lots, the behavior tag vocabulary and sample data.
"""

from datetime import date, datetime
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
    show_validation_error,
)
from tradejournal.cli.main import console
from tradejournal.errors import StoreUnavailable, ValidationError
from tradejournal.models import BEHAVIOR_TAGS, BUY, SELL, tags_for


def _action_badge(action: str) -> str:
    return "[blue]Buy[/blue]" if action == BUY else "[magenta]Sell[/magenta]"


@click.command()
@click.option("--ticker", "-t", prompt=True, help="Trading symbol (e.g., AAPL).")
@click.option(
    "--action", "-a",
    type=click.Choice([BUY, SELL], case_sensitive=False),
    prompt=True,
    help="Buy or Sell.",
)
@click.option("--price", "-p", type=float, prompt=True, help="Execution price per share.")
@click.option("--quantity", "-q", type=int, prompt=True, help="Number of shares.")
@click.option(
    "--date", "trade_date",
    type=click.DateTime(formats=["%Y-%m-%d"]),
    default=None,
    help="Execution date (YYYY-MM-DD, default: today).",
)
@click.option("--confidence", "-c", type=int, default=50, show_default=True, help="Conviction 0-100.")
@click.option("--tag", prompt="Behavior tag", help="Behavior tag (see 'tradejournal tags').")
@click.option("--note", "-n", prompt=True, help="Why you made this trade.")
@click.option("--intention", default=None, help="What you plan to do next with the position.")
@click.option("--pnl", type=float, default=None, help="P&L percent (derived when omitted).")
@click.pass_context
def add(
    ctx: click.Context,
    ticker: str,
    action: str,
    price: float,
    quantity: int,
    trade_date: Optional[datetime],
    confidence: int,
    tag: str,
    note: str,
    intention: Optional[str],
    pnl: Optional[float],
) -> None:
    """Record a trade in the journal.

    Market context (RSI, moving averages, volatility, sentiment) is
    captured automatically when the trade is recorded.

    \b
    Examples:
      tradejournal add -t AAPL -a Buy -p 185.5 -q 10 --tag "Momentum Chaser" -n "Earnings beat"
      tradejournal add -t AAPL -a Sell -p 201 -q 5 --tag "Target Achiever" -n "Target hit"
    """
    service = get_service(ctx)
    currency, krw_rate = get_display(ctx)

    candidate = {
        "date": trade_date.date() if trade_date else date.today(),
        "ticker": ticker,
        "action": action.capitalize(),
        "price": price,
        "quantity": quantity,
        "confidence": confidence,
        "behavior_tag": tag,
        "note": note,
        "intention": intention,
        "pnl": pnl,
    }

    try:
        trade = service.record_trade(candidate)
    except ValidationError as e:
        show_validation_error(e)
        raise SystemExit(1)
    except StoreUnavailable as e:
        show_unavailable(str(e))
        raise SystemExit(1)

    console.print(Panel(
        f"{_action_badge(trade.action)} [bold]{trade.ticker}[/bold] "
        f"{trade.quantity} @ {format_currency(trade.price, currency, krw_rate)}\n"
        f"P&L: [{pnl_style(trade.pnl)}]{format_percent(trade.pnl)}[/{pnl_style(trade.pnl)}]  "
        f"Tag: {trade.behavior_tag}\n"
        f"[dim]ID: {trade.id}[/dim]",
        title="[bold green]Trade Recorded[/bold green]",
        border_style="green",
    ))


@click.command("list")
@click.option("--ticker", "-t", default=None, help="Only this symbol.")
@click.option("--tag", default=None, help="Only this behavior tag.")
@click.option(
    "--action", "-a",
    type=click.Choice([BUY, SELL], case_sensitive=False),
    default=None,
    help="Only Buys or only Sells.",
)
@click.option("--limit", "-l", type=int, default=None, help="Show at most N trades.")
@click.pass_context
def list_trades(
    ctx: click.Context,
    ticker: Optional[str],
    tag: Optional[str],
    action: Optional[str],
    limit: Optional[int],
) -> None:
    """List journaled trades, newest first.

    \b
    Examples:
      tradejournal list
      tradejournal list --ticker AAPL
      tradejournal list --tag "Panic Seller"
    """
    service = get_service(ctx)
    currency, krw_rate = get_display(ctx)

    snapshot = service.snapshot()
    if not snapshot.available:
        show_unavailable(snapshot.error or "")
        raise SystemExit(1)
    if snapshot.is_empty:
        show_empty("Trade Journal")
        return

    trade_filter = build_filter(ticker, tag, action.capitalize() if action else None)
    trades = [t for t in snapshot.trades if trade_filter is None or trade_filter.matches(t)]
    if limit is not None:
        trades = trades[:limit]

    table = Table(
        title=f"Trade Journal ({len(trades)} of {len(snapshot.trades)} trades)",
        show_header=True,
        header_style="bold cyan",
    )
    table.add_column("Date", style="bold")
    table.add_column("Ticker")
    table.add_column("Action")
    table.add_column("Price", justify="right")
    table.add_column("Qty", justify="right")
    table.add_column("P&L", justify="right")
    table.add_column("Conf.", justify="right")
    table.add_column("Tag")
    table.add_column("ID", style="dim")

    for trade in trades:
        style = pnl_style(trade.pnl)
        table.add_row(
            trade.date.isoformat(),
            trade.ticker,
            _action_badge(trade.action),
            format_currency(trade.price, currency, krw_rate),
            str(trade.quantity),
            f"[{style}]{format_percent(trade.pnl)}[/{style}]",
            f"{trade.confidence}%",
            trade.behavior_tag,
            trade.id[:8],
        )

    console.print(table)


def _resolve_trade_id(service, trade_id: str):
    """Find a trade by full id or unique id prefix."""
    matches = [t for t in service.list_trades() if t.id == trade_id or t.id.startswith(trade_id)]
    exact = [t for t in matches if t.id == trade_id]
    if exact:
        return exact[0]
    if len(matches) == 1:
        return matches[0]
    return None


@click.command()
@click.argument("trade_id")
@click.pass_context
def show(ctx: click.Context, trade_id: str) -> None:
    """Show one trade with its market context and linked Buy lots.

    TRADE_ID may be the full id or a unique prefix (as shown by 'list').
    """
    service = get_service(ctx)
    currency, krw_rate = get_display(ctx)

    try:
        trade = _resolve_trade_id(service, trade_id)
        link = service.get_linked_buys(trade.id) if trade and trade.action == SELL else None
    except StoreUnavailable as e:
        show_unavailable(str(e))
        raise SystemExit(1)

    if trade is None:
        console.print(f"[red]No trade matches '{trade_id}'[/red]")
        raise SystemExit(1)

    style = pnl_style(trade.pnl)
    details = (
        f"{_action_badge(trade.action)} [bold]{trade.ticker}[/bold] on {trade.date.isoformat()}\n"
        f"{trade.quantity} @ {format_currency(trade.price, currency, krw_rate)} "
        f"(total {format_currency(trade.notional, currency, krw_rate)})\n"
        f"P&L: [{style}]{format_percent(trade.pnl)}[/{style}] "
        f"([{style}]{format_currency(trade.pnl_amount, currency, krw_rate)}[/{style}])\n"
        f"Confidence: {trade.confidence}%   Tag: {trade.behavior_tag}\n\n"
        f"[bold]Note:[/bold] {trade.note}"
    )
    if trade.intention:
        details += f"\n[bold]Intention:[/bold] {trade.intention}"
    console.print(Panel(details, title=f"[bold]Trade {trade.id}[/bold]", border_style="cyan"))

    ctx_table = Table(title="Market Context", show_header=True, header_style="bold cyan")
    ctx_table.add_column("Price", justify="right")
    ctx_table.add_column("RSI", justify="right")
    ctx_table.add_column("SMA20", justify="right")
    ctx_table.add_column("SMA50", justify="right")
    ctx_table.add_column("Volatility", justify="right")
    ctx_table.add_column("Sentiment")
    ctx_table.add_row(
        format_currency(trade.context.current_price, currency, krw_rate),
        f"{trade.context.rsi:.1f}",
        format_currency(trade.context.sma20, currency, krw_rate),
        format_currency(trade.context.sma50, currency, krw_rate),
        f"{trade.context.volatility:.2f}",
        trade.context.sentiment,
    )
    console.print(ctx_table)

    if link is None:
        return

    from tradejournal.cli.positions import render_link

    render_link(link, currency, krw_rate)


@click.command()
@click.option(
    "--action", "-a",
    type=click.Choice([BUY, SELL], case_sensitive=False),
    default=None,
    help="Only tags for Buys or for Sells.",
)
def tags(action: Optional[str]) -> None:
    """List the behavior tags available for Buys and Sells."""
    actions = [action.capitalize()] if action else list(BEHAVIOR_TAGS)

    table = Table(title="Behavior Tags", show_header=True, header_style="bold cyan")
    for name in actions:
        table.add_column(name)

    columns = [tags_for(name) for name in actions]
    for row in range(max(len(c) for c in columns)):
        table.add_row(*[c[row] if row < len(c) else "" for c in columns])

    console.print(table)


@click.command()
@click.option("--force", is_flag=True, default=False, help="Append even if the journal has trades.")
@click.pass_context
def seed(ctx: click.Context, force: bool) -> None:
    """Load the sample trades into an empty journal."""
    from tradejournal.db.seed import DEMO_TRADES

    service = get_service(ctx)

    try:
        existing = service.list_trades()
        if existing and not force:
            console.print(
                f"[yellow]Journal already has {len(existing)} trades; "
                f"use --force to append the samples anyway.[/yellow]"
            )
            return

        for candidate in DEMO_TRADES:
            service.record_trade(candidate)
    except StoreUnavailable as e:
        show_unavailable(str(e))
        raise SystemExit(1)

    console.print(f"[green]✓ Added {len(DEMO_TRADES)} sample trades[/green]")
