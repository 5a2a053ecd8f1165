"""Static ticker to sector lookup."""

from typing import Mapping, Optional

UNCLASSIFIED = "Unclassified"

DEFAULT_SECTORS: dict[str, str] = {
    "AAPL": "Technology",
    "MSFT": "Technology",
    "GOOGL": "Technology",
    "META": "Technology",
    "NVDA": "Semiconductors",
    "AMD": "Semiconductors",
    "TSLA": "Automotive",
    "AMZN": "E-Commerce",
}


def build_sector_map(overrides: Optional[Mapping[str, str]] = None) -> dict[str, str]:
    """Merge user overrides (e.g. the ``[sectors]`` config table) onto the defaults."""
    sectors = dict(DEFAULT_SECTORS)
    for ticker, sector in (overrides or {}).items():
        sectors[ticker.strip().upper()] = str(sector)
    return sectors


def sector_for(ticker: str, ticker_to_sector: Mapping[str, str]) -> str:
    """Sector for a ticker, or ``Unclassified`` when the ticker is unmapped."""
    sector = ticker_to_sector.get(ticker)
    return sector if sector else UNCLASSIFIED
