"""Market data commands for the trade journal CLI.

Imports daily close prices used by the ``history`` market provider.
"""

import csv
from datetime import date
from typing import TextIO

import click
from rich.table import Table

from tradejournal.cli.common import format_currency, get_display, get_store, show_unavailable
from tradejournal.cli.main import console
from tradejournal.errors import StoreUnavailable
from tradejournal.market import PriceHistorySnapshotProvider


def _parse_closes(handle: TextIO) -> list[tuple[date, float]]:
    """Read ``date,close`` rows, skipping blank lines and a header row."""
    closes = []
    for line_no, row in enumerate(csv.reader(handle), start=1):
        if not row or not row[0].strip():
            continue
        if len(row) < 2:
            raise click.ClickException(f"Line {line_no}: expected 'date,close'")
        try:
            day = date.fromisoformat(row[0].strip())
        except ValueError:
            if line_no == 1:
                continue
            raise click.ClickException(f"Line {line_no}: invalid date '{row[0]}'")
        try:
            close = float(row[1])
        except ValueError:
            raise click.ClickException(f"Line {line_no}: invalid close '{row[1]}'")
        if close <= 0:
            raise click.ClickException(f"Line {line_no}: close must be positive")
        closes.append((day, close))
    return closes


@click.command()
@click.argument("ticker")
@click.argument("csv_file", type=click.File("r"))
@click.pass_context
def closes(ctx: click.Context, ticker: str, csv_file: TextIO) -> None:
    """Import daily closes for TICKER from a CSV of date,close rows.

    Stored closes feed RSI, moving averages and volatility when the
    config sets [market] provider = "history".

    \b
    Examples:
      tradejournal closes AAPL aapl.csv
    """
    ticker = ticker.strip().upper()
    rows = _parse_closes(csv_file)
    if not rows:
        console.print(f"[yellow]No closes found for {ticker}[/yellow]")
        return

    store = get_store(ctx)
    currency, krw_rate = get_display(ctx)

    try:
        saved = store.save_closes(ticker, rows)
        context = PriceHistorySnapshotProvider(store.get_closes).capture(ticker, rows[-1][1])
    except StoreUnavailable as e:
        show_unavailable(str(e))
        raise SystemExit(1)

    console.print(f"[green]✓ Imported {saved} closes for {ticker}[/green]")

    table = Table(title=f"{ticker} Market Context", show_header=True, header_style="bold cyan")
    table.add_column("Price", justify="right")
    table.add_column("RSI", justify="right")
    table.add_column("SMA20", justify="right")
    table.add_column("SMA50", justify="right")
    table.add_column("Volatility", justify="right")
    table.add_column("Sentiment")
    table.add_row(
        format_currency(context.current_price, currency, krw_rate),
        f"{context.rsi:.1f}",
        format_currency(context.sma20, currency, krw_rate),
        format_currency(context.sma50, currency, krw_rate),
        f"{context.volatility:.2f}",
        context.sentiment,
    )
    console.print(table)
