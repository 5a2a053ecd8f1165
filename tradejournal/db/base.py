"""Ledger store interface."""

from abc import ABC, abstractmethod

from tradejournal.models import Trade


class LedgerStore(ABC):
    """Abstract base class for append-only trade ledgers.

    Implementations never update or delete a stored trade. Every call to
    ``read_all`` returns a consistent snapshot: an append is either fully
    visible or not visible at all.
    """

    @abstractmethod
    def read_all(self) -> list[Trade]:
        """Read every trade in the ledger.

        Returns:
            Trades ordered newest first (reverse insertion order).

        Raises:
            StoreUnavailable: If the ledger cannot be read.
        """
        pass

    @abstractmethod
    def append(self, trade: Trade) -> Trade:
        """Append one trade to the ledger.

        Args:
            trade: Trade to store. Its id must not be in the ledger yet.

        Returns:
            The stored trade.

        Raises:
            DuplicateId: If a trade with the same id is already stored.
            StoreUnavailable: If the ledger cannot be written.
        """
        pass
