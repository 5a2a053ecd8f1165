"""Ledger stores for the trade journal."""

from tradejournal.db.base import LedgerStore
from tradejournal.db.memory import InMemoryLedgerStore
from tradejournal.db.store import SQLiteLedgerStore

__all__ = ["LedgerStore", "InMemoryLedgerStore", "SQLiteLedgerStore"]
