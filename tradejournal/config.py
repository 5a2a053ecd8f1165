"""Configuration loading for the trade journal.

Settings live in ``~/.config/tradejournal/config.toml``. Every key is
optional; a missing file means defaults throughout.
"""

import logging
from pathlib import Path
from typing import Any, Callable, Optional

import toml

from tradejournal.market import (
    MarketSnapshotProvider,
    PriceHistorySnapshotProvider,
    SimulatedSnapshotProvider,
)
from tradejournal.sectors import build_sector_map

logger = logging.getLogger(__name__)

CONFIG_DIR = Path.home() / ".config" / "tradejournal"
DEFAULT_CONFIG_PATH = CONFIG_DIR / "config.toml"
DEFAULT_DB_PATH = CONFIG_DIR / "journal.db"
DEFAULT_KRW_RATE = 1320.0


def load_config(config_path: Optional[Path] = None) -> dict[str, Any]:
    """Load the TOML config file.

    Args:
        config_path: Config file location; defaults to the user config dir.

    Returns:
        Parsed config, or an empty dict when the file does not exist or
        cannot be parsed.
    """
    path = Path(config_path) if config_path else DEFAULT_CONFIG_PATH
    if not path.exists():
        return {}

    try:
        return toml.load(path)
    except (OSError, toml.TomlDecodeError) as e:
        logger.warning("Ignoring unreadable config %s: %s", path, e)
        return {}


def get_db_path(config: dict[str, Any]) -> Path:
    """Ledger database path from ``[journal] db_path``."""
    db_path = config.get("journal", {}).get("db_path")
    if not db_path:
        return DEFAULT_DB_PATH
    return Path(db_path).expanduser()


def get_sector_map(config: dict[str, Any]) -> dict[str, str]:
    """Default sector lookup merged with the ``[sectors]`` table."""
    return build_sector_map(config.get("sectors", {}))


def get_snapshot_provider(
    config: dict[str, Any],
    close_history: Optional[Callable[[str], list[float]]] = None,
) -> Optional[MarketSnapshotProvider]:
    """Market snapshot provider from ``[market] provider``.

    ``"simulated"`` (default) gives randomized snapshots; ``"history"``
    computes indicators from stored daily closes; ``"none"`` disables
    capture, so every trade must carry its own context.

    Args:
        config: Parsed config.
        close_history: Close prices for a ticker, oldest first. Required
            by the ``"history"`` provider.
    """
    market = config.get("market", {})
    provider = market.get("provider", "simulated")

    if provider == "none":
        return None
    if provider == "history":
        if close_history is not None:
            return PriceHistorySnapshotProvider(close_history)
        logger.warning("No close-price source for the history provider, using simulated")
        return SimulatedSnapshotProvider(seed=market.get("seed"))
    if provider != "simulated":
        logger.warning("Unknown market provider '%s', using simulated", provider)
    return SimulatedSnapshotProvider(seed=market.get("seed"))


def get_display_settings(config: dict[str, Any]) -> tuple[str, float]:
    """Display currency and KRW exchange rate from ``[display]``."""
    display = config.get("display", {})
    currency = str(display.get("currency", "USD")).upper()
    if currency not in ("USD", "KRW"):
        currency = "USD"
    return currency, float(display.get("krw_rate", DEFAULT_KRW_RATE))
