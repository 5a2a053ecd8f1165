"""In-memory ledger store."""

import threading
from typing import Iterable, Optional

from tradejournal.db.base import LedgerStore
from tradejournal.errors import DuplicateId
from tradejournal.models import Trade


class InMemoryLedgerStore(LedgerStore):
    """Ledger kept in process memory, for tests and scratch sessions."""

    def __init__(self, trades: Optional[Iterable[Trade]] = None):
        """Initialize the store.

        Args:
            trades: Optional initial trades in insertion order, oldest first.
        """
        self._lock = threading.Lock()
        self._trades: list[Trade] = []
        self._ids: set[str] = set()
        for trade in trades or ():
            self.append(trade)

    def read_all(self) -> list[Trade]:
        with self._lock:
            return list(reversed(self._trades))

    def append(self, trade: Trade) -> Trade:
        with self._lock:
            if trade.id in self._ids:
                raise DuplicateId(trade.id)
            self._trades.append(trade)
            self._ids.add(trade.id)
        return trade

    def __len__(self) -> int:
        with self._lock:
            return len(self._trades)
