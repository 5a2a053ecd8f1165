"""Shared helpers for the CLI commands."""

from typing import Optional

import click
from rich.panel import Panel

from tradejournal.cli.main import console
from tradejournal.errors import StoreUnavailable, ValidationError
from tradejournal.models import TradeFilter
from tradejournal.service import TradeJournalService

KRW_SYMBOL = "₩"
USD_SYMBOL = "$"


def format_currency(value: float, currency: str = "USD", krw_rate: float = 1320.0) -> str:
    """Format a base-currency (USD) amount for display.

    Args:
        value: Amount in USD.
        currency: Display currency, USD or KRW.
        krw_rate: KRW per USD.
    """
    sign = "-" if value < 0 else ""
    if currency == "KRW":
        return f"{sign}{KRW_SYMBOL}{round(abs(value) * krw_rate):,}"
    return f"{sign}{USD_SYMBOL}{abs(value):,.2f}"


def format_percent(value: float) -> str:
    """Signed percentage with one decimal, e.g. ``+8.2%``."""
    sign = "+" if value > 0 else ""
    return f"{sign}{value:.1f}%"


def pnl_style(value: float) -> str:
    return "green" if value >= 0 else "red"


def _load(ctx: click.Context) -> dict:
    from tradejournal.config import load_config

    obj = ctx.ensure_object(dict)
    if "config" not in obj:
        obj["config"] = load_config(obj.get("config_path"))
    return obj["config"]


def get_display(ctx: click.Context) -> tuple[str, float]:
    """Display currency and KRW rate for the current invocation."""
    from tradejournal.config import get_display_settings

    return get_display_settings(_load(ctx))


def get_store(ctx: click.Context):
    """Open the SQLite ledger named by --db or the config."""
    from tradejournal.config import get_db_path
    from tradejournal.db.store import SQLiteLedgerStore

    db_path = ctx.obj.get("db_path") or get_db_path(_load(ctx))
    try:
        return SQLiteLedgerStore(db_path)
    except StoreUnavailable as e:
        show_unavailable(str(e))
        raise SystemExit(1)


def get_service(ctx: click.Context) -> TradeJournalService:
    """Build the journal service from the command-line options and config."""
    from tradejournal.config import get_sector_map, get_snapshot_provider

    config = _load(ctx)
    store = get_store(ctx)

    return TradeJournalService(
        store,
        snapshot_provider=get_snapshot_provider(config, close_history=store.get_closes),
        sector_map=get_sector_map(config),
    )


def build_filter(ticker: Optional[str], tag: Optional[str], action: Optional[str]) -> Optional[TradeFilter]:
    if not (ticker or tag or action):
        return None
    return TradeFilter(ticker=ticker, behavior_tag=tag, action=action)


def show_unavailable(message: str) -> None:
    """Render an unreadable/unwritable ledger, distinct from an empty one."""
    console.print(Panel(
        f"[red]The trade ledger is unavailable.[/red]\n\n[dim]{message}[/dim]",
        title="[bold red]Ledger Unavailable[/bold red]",
        border_style="red",
    ))


def show_validation_error(error: ValidationError) -> None:
    lines = "\n".join(f"  [cyan]{e.field}[/cyan]: {e.reason}" for e in error.errors)
    console.print(Panel(
        f"[red]Trade rejected. Fix these fields:[/red]\n\n{lines}",
        title="[bold red]Invalid Trade[/bold red]",
        border_style="red",
    ))


def show_empty(title: str) -> None:
    console.print(Panel(
        "[dim]No trades recorded yet[/dim]\n\n"
        "Run [cyan]tradejournal add[/cyan] or [cyan]tradejournal seed[/cyan] to get started.",
        title=f"[bold]{title}[/bold]",
        border_style="dim",
    ))
