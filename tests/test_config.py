"""Tests for configuration loading."""

from pathlib import Path

from tradejournal.config import (
    DEFAULT_DB_PATH,
    DEFAULT_KRW_RATE,
    get_db_path,
    get_display_settings,
    get_sector_map,
    get_snapshot_provider,
    load_config,
)
from tradejournal.market import PriceHistorySnapshotProvider, SimulatedSnapshotProvider
from tradejournal.sectors import DEFAULT_SECTORS


class TestLoadConfig:
    def test_missing_file_gives_empty_config(self, tmp_path):
        assert load_config(tmp_path / "missing.toml") == {}

    def test_reads_toml(self, tmp_path):
        path = tmp_path / "config.toml"
        path.write_text(
            '[journal]\ndb_path = "/tmp/j.db"\n\n'
            '[display]\ncurrency = "KRW"\nkrw_rate = 1400.0\n'
        )

        config = load_config(path)

        assert config["journal"]["db_path"] == "/tmp/j.db"
        assert config["display"]["currency"] == "KRW"

    def test_invalid_toml_gives_empty_config(self, tmp_path, caplog):
        path = tmp_path / "config.toml"
        path.write_text("[journal\nthis is not toml")

        assert load_config(path) == {}
        assert "Ignoring unreadable config" in caplog.text


class TestSettings:
    def test_db_path_default(self):
        assert get_db_path({}) == DEFAULT_DB_PATH

    def test_db_path_expands_user(self):
        path = get_db_path({"journal": {"db_path": "~/journal/trades.db"}})

        assert path == Path.home() / "journal" / "trades.db"

    def test_sector_overrides_merge_with_defaults(self):
        sectors = get_sector_map({"sectors": {"aapl": "Hardware", "PLTR": "Software"}})

        assert sectors["AAPL"] == "Hardware"
        assert sectors["PLTR"] == "Software"
        assert sectors["TSLA"] == DEFAULT_SECTORS["TSLA"]

    def test_snapshot_provider_default_is_simulated(self):
        assert isinstance(get_snapshot_provider({}), SimulatedSnapshotProvider)

    def test_snapshot_provider_none(self):
        assert get_snapshot_provider({"market": {"provider": "none"}}) is None

    def test_snapshot_provider_seed_is_reproducible(self):
        config = {"market": {"provider": "simulated", "seed": 3}}

        first = get_snapshot_provider(config).capture("AAPL", 50.0)
        second = get_snapshot_provider(config).capture("AAPL", 50.0)

        assert first == second

    def test_history_provider_uses_close_history(self):
        closes = [100.0 + i for i in range(60)]
        requested = []

        def close_history(ticker: str) -> list[float]:
            requested.append(ticker)
            return closes

        provider = get_snapshot_provider({"market": {"provider": "history"}}, close_history=close_history)
        context = provider.capture("AAPL", 150.0)

        assert isinstance(provider, PriceHistorySnapshotProvider)
        assert requested == ["AAPL"]
        assert context.current_price == 159.0
        assert context.sentiment == "Very Positive"

    def test_history_provider_without_source_falls_back(self, caplog):
        provider = get_snapshot_provider({"market": {"provider": "history"}})

        assert isinstance(provider, SimulatedSnapshotProvider)
        assert "No close-price source" in caplog.text

    def test_unknown_provider_falls_back(self, caplog):
        provider = get_snapshot_provider({"market": {"provider": "bloomberg"}})

        assert isinstance(provider, SimulatedSnapshotProvider)
        assert "Unknown market provider" in caplog.text

    def test_display_defaults(self):
        assert get_display_settings({}) == ("USD", DEFAULT_KRW_RATE)

    def test_display_krw(self):
        assert get_display_settings({"display": {"currency": "krw", "krw_rate": 1400}}) == ("KRW", 1400.0)

    def test_display_unknown_currency_is_usd(self):
        assert get_display_settings({"display": {"currency": "EUR"}})[0] == "USD"
