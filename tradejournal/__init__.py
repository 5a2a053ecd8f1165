"""Trade Journal - an append-only trading ledger with FIFO lot linking
and performance statistics."""

__version__ = "0.1.0"
