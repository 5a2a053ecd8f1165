"""SQLite ledger store for the trade journal."""

import logging
import sqlite3
from datetime import date
from pathlib import Path

from pydantic import ValidationError as PydanticValidationError

from tradejournal.db.base import LedgerStore
from tradejournal.errors import DuplicateId, StoreUnavailable
from tradejournal.models import MarketContext, Trade

logger = logging.getLogger(__name__)


def _is_duplicate_id(error: sqlite3.IntegrityError) -> bool:
    """True for the UNIQUE violation on the trade id column."""
    message = str(error)
    return "UNIQUE" in message and "trades.id" in message


class SQLiteLedgerStore(LedgerStore):
    """SQLite-backed append-only trade ledger.

    Insertion order is kept in an autoincrement ``seq`` column; the market
    context is stored as JSON text. Daily closes per ticker live in a
    separate ``closes`` table.
    """

    REQUIRED_TABLES = ["trades", "closes"]

    def __init__(self, db_path: Path):
        """Initialize the ledger store.

        Args:
            db_path: Path to the SQLite database file.

        Raises:
            StoreUnavailable: If the database cannot be created or opened.
        """
        self.db_path = Path(db_path)
        try:
            self._ensure_db_dir()
            self._init_schema()
        except (OSError, sqlite3.Error) as e:
            raise StoreUnavailable(f"Cannot open ledger at {self.db_path}: {e}", e) from e

    def _ensure_db_dir(self) -> None:
        """Ensure the database directory exists."""
        self.db_path.parent.mkdir(parents=True, exist_ok=True)

    def _get_connection(self) -> sqlite3.Connection:
        """Get a database connection."""
        conn = sqlite3.connect(self.db_path)
        conn.row_factory = sqlite3.Row
        return conn

    def _init_schema(self) -> None:
        """Initialize database schema on first run."""
        conn = self._get_connection()
        try:
            cursor = conn.cursor()
            cursor.execute("""
                CREATE TABLE IF NOT EXISTS trades (
                    seq INTEGER PRIMARY KEY AUTOINCREMENT,
                    id TEXT NOT NULL UNIQUE,
                    date TEXT NOT NULL,
                    ticker TEXT NOT NULL,
                    action TEXT NOT NULL,
                    price REAL NOT NULL,
                    quantity INTEGER NOT NULL,
                    pnl REAL NOT NULL,
                    confidence INTEGER NOT NULL,
                    behavior_tag TEXT NOT NULL,
                    note TEXT NOT NULL,
                    intention TEXT,
                    context TEXT NOT NULL
                )
            """)
            cursor.execute(
                "CREATE INDEX IF NOT EXISTS idx_trades_ticker ON trades (ticker)"
            )

            # Daily close prices for indicator-based market context
            cursor.execute("""
                CREATE TABLE IF NOT EXISTS closes (
                    ticker TEXT NOT NULL,
                    date TEXT NOT NULL,
                    close REAL NOT NULL,
                    PRIMARY KEY (ticker, date)
                )
            """)
            conn.commit()
        finally:
            conn.close()

    def get_tables(self) -> list[str]:
        """Get list of all tables in the database."""
        conn = self._get_connection()
        try:
            cursor = conn.cursor()
            cursor.execute(
                "SELECT name FROM sqlite_master WHERE type='table' AND name NOT LIKE 'sqlite_%'"
            )
            return [row["name"] for row in cursor.fetchall()]
        finally:
            conn.close()

    @staticmethod
    def _row_to_trade(row: sqlite3.Row) -> Trade:
        return Trade(
            id=row["id"],
            date=date.fromisoformat(row["date"]),
            ticker=row["ticker"],
            action=row["action"],
            price=row["price"],
            quantity=row["quantity"],
            pnl=row["pnl"],
            confidence=row["confidence"],
            behavior_tag=row["behavior_tag"],
            note=row["note"],
            intention=row["intention"],
            context=MarketContext.model_validate_json(row["context"]),
        )

    def read_all(self) -> list[Trade]:
        """Read all trades, newest first.

        Raises:
            StoreUnavailable: If the database cannot be read or holds a
                row that is not a valid trade.
        """
        try:
            conn = self._get_connection()
            try:
                cursor = conn.cursor()
                cursor.execute(
                    """
                    SELECT id, date, ticker, action, price, quantity, pnl,
                           confidence, behavior_tag, note, intention, context
                    FROM trades
                    ORDER BY seq DESC
                    """
                )
                rows = cursor.fetchall()
            finally:
                conn.close()
        except sqlite3.Error as e:
            logger.warning("Ledger read failed: %s", e)
            raise StoreUnavailable(f"Cannot read ledger: {e}", e) from e

        try:
            return [self._row_to_trade(row) for row in rows]
        except (PydanticValidationError, ValueError) as e:
            logger.warning("Ledger contains an invalid trade row: %s", e)
            raise StoreUnavailable(f"Ledger contains an invalid trade: {e}", e) from e

    def append(self, trade: Trade) -> Trade:
        """Append a trade in a single transaction.

        Args:
            trade: Trade to append.

        Returns:
            The stored trade.

        Raises:
            DuplicateId: If the trade id already exists.
            StoreUnavailable: If the database cannot be written.
        """
        try:
            conn = self._get_connection()
            try:
                cursor = conn.cursor()
                cursor.execute(
                    """
                    INSERT INTO trades
                    (id, date, ticker, action, price, quantity, pnl,
                     confidence, behavior_tag, note, intention, context)
                    VALUES (?, ?, ?, ?, ?, ?, ?, ?, ?, ?, ?, ?)
                    """,
                    (
                        trade.id,
                        trade.date.isoformat(),
                        trade.ticker,
                        trade.action,
                        trade.price,
                        trade.quantity,
                        trade.pnl,
                        trade.confidence,
                        trade.behavior_tag,
                        trade.note,
                        trade.intention,
                        trade.context.model_dump_json(),
                    ),
                )
                conn.commit()
            finally:
                conn.close()
        except sqlite3.IntegrityError as e:
            if _is_duplicate_id(e):
                raise DuplicateId(trade.id) from e
            logger.warning("Ledger rejected %s: %s", trade.id, e)
            raise StoreUnavailable(f"Cannot write ledger: {e}", e) from e
        except sqlite3.Error as e:
            logger.warning("Ledger append failed for %s: %s", trade.id, e)
            raise StoreUnavailable(f"Cannot write ledger: {e}", e) from e

        logger.info("Appended %s %s x%d (%s)", trade.action, trade.ticker, trade.quantity, trade.id)
        return trade

    def count(self) -> int:
        """Number of trades in the ledger."""
        try:
            conn = self._get_connection()
            try:
                cursor = conn.cursor()
                cursor.execute("SELECT COUNT(*) as count FROM trades")
                return cursor.fetchone()["count"]
            finally:
                conn.close()
        except sqlite3.Error as e:
            raise StoreUnavailable(f"Cannot read ledger: {e}", e) from e

    # ==================== Closes ====================

    def save_closes(self, ticker: str, closes: list[tuple[date, float]]) -> int:
        """Save daily close prices, replacing any already stored for a date.

        Args:
            ticker: Trading symbol.
            closes: (date, close) pairs.

        Returns:
            Number of rows written.

        Raises:
            StoreUnavailable: If the database cannot be written.
        """
        try:
            conn = self._get_connection()
            try:
                cursor = conn.cursor()
                cursor.executemany(
                    "INSERT OR REPLACE INTO closes (ticker, date, close) VALUES (?, ?, ?)",
                    [(ticker, day.isoformat(), close) for day, close in closes],
                )
                conn.commit()
            finally:
                conn.close()
        except sqlite3.Error as e:
            logger.warning("Saving closes for %s failed: %s", ticker, e)
            raise StoreUnavailable(f"Cannot write closes: {e}", e) from e

        logger.info("Saved %d closes for %s", len(closes), ticker)
        return len(closes)

    def get_closes(self, ticker: str, limit: int = 250) -> list[float]:
        """Most recent close prices for a ticker, oldest first.

        Raises:
            StoreUnavailable: If the database cannot be read.
        """
        try:
            conn = self._get_connection()
            try:
                cursor = conn.cursor()
                cursor.execute(
                    """
                    SELECT close FROM closes
                    WHERE ticker = ?
                    ORDER BY date DESC
                    LIMIT ?
                    """,
                    (ticker, limit),
                )
                rows = cursor.fetchall()
            finally:
                conn.close()
        except sqlite3.Error as e:
            raise StoreUnavailable(f"Cannot read closes: {e}", e) from e

        return [row["close"] for row in reversed(rows)]
