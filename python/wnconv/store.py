"""Embedded transactional key-value store for converted records.

One sqlite database in WAL mode with three key/value tables:

    index   "lemma%pos"     → IndexRecord JSON
    morph   "form%pos"      → MorphRecord JSON
    data    "offset%pos"    → SynsetRecord JSON

Writes go through a single explicit Transaction at a time. A commit can be
relaxed (no fsync, for intermediate batches) or durable (fsync, for the end
of a file). checkpoint() and clean_logs() fold the write-ahead log back into
the database and truncate it.
"""

import json
import logging
import os
import sqlite3
from dataclasses import asdict, dataclass
from pathlib import Path
from typing import Any, Iterator, Optional

from .schema import IndexRecord, MorphRecord, SynsetRecord, format_offset, key_pos, make_key

logger = logging.getLogger(__name__)

TABLES = ("index", "morph", "data")


class StoreError(Exception):
    """A store or transaction operation failed."""


@dataclass
class TxnStats:
    """Transaction counters for one store session."""

    begun: int = 0
    relaxed_commits: int = 0
    durable_commits: int = 0
    rollbacks: int = 0
    puts: int = 0
    wal_frames: int = 0             # WAL size at the last checkpoint
    checkpointed_frames: int = 0

    def to_dict(self) -> dict[str, int]:
        return asdict(self)


class Transaction:
    """A write transaction against one table."""

    def __init__(self, store: "LexiconStore", table: str):
        self.store = store
        self.table = table
        self.puts = 0
        self.closed = False
        self._sql_put = f'INSERT OR REPLACE INTO "{table}" (key, value) VALUES (?, ?)'
        store._execute("BEGIN")

    def put(self, key: str, value: Any) -> None:
        """Write value (JSON-serialized) under key."""
        self._check_open()
        self.store._execute(self._sql_put, (key, json.dumps(value, ensure_ascii=False)))
        self.puts += 1
        self.store._stats.puts += 1

    def commit(self, sync: bool = True) -> None:
        """Commit the transaction.

        Args:
            sync: True to fsync on commit (durable), False to skip it
                (relaxed; an OS crash may lose the batch, the database
                stays consistent).
        """
        self._check_open()
        self.store._execute("COMMIT")
        self._close()
        if sync:
            self.store._sync_log()
        if sync:
            self.store._stats.durable_commits += 1
        else:
            self.store._stats.relaxed_commits += 1
        logger.debug("Committed %d puts to %s (sync=%s)", self.puts, self.table, sync)

    def rollback(self) -> None:
        self._check_open()
        self.store._execute("ROLLBACK")
        self._close()
        self.store._stats.rollbacks += 1
        logger.debug("Rolled back %d puts to %s", self.puts, self.table)

    def _check_open(self) -> None:
        if self.closed:
            raise StoreError(f"Transaction on {self.table} is already closed")

    def _close(self) -> None:
        self.closed = True
        self.store._txn = None


class LexiconStore:
    """The converted lexicon database."""

    def __init__(self, path: Path | str):
        """Open (creating if needed) the store at path.

        Args:
            path: Database file; parent directories are created.
        """
        self.path = Path(path)
        self.path.parent.mkdir(parents=True, exist_ok=True)
        self._conn: Optional[sqlite3.Connection] = None
        self._txn: Optional[Transaction] = None
        self._stats = TxnStats()
        try:
            # Autocommit mode: transactions are opened explicitly with BEGIN
            self._conn = sqlite3.connect(str(self.path), isolation_level=None)
        except sqlite3.Error as e:
            raise StoreError(f"Unable to open {self.path}: {e}") from e
        self._execute("PRAGMA journal_mode = WAL")
        # Commits never fsync on their own; durable commits call _sync_log()
        self._execute("PRAGMA synchronous = OFF")
        for table in TABLES:
            self._execute(
                f'CREATE TABLE IF NOT EXISTS "{table}" '
                "(key TEXT PRIMARY KEY, value TEXT NOT NULL)"
            )

    @classmethod
    def open(cls, path: Path | str) -> "LexiconStore":
        return cls(path)

    def __enter__(self) -> "LexiconStore":
        return self

    def __exit__(self, exc_type, exc, tb) -> None:
        self.close()

    def close(self) -> None:
        if self._conn is None:
            return
        if self._txn is not None:
            self._txn.rollback()
        self._conn.close()
        self._conn = None

    @property
    def in_transaction(self) -> bool:
        return self._txn is not None

    def _execute(self, sql: str, params: tuple = ()) -> sqlite3.Cursor:
        if self._conn is None:
            raise StoreError(f"Store {self.path} is closed")
        try:
            return self._conn.execute(sql, params)
        except sqlite3.Error as e:
            raise StoreError(f"{sql.split()[0]} failed on {self.path}: {e}") from e

    def _sync_log(self) -> None:
        """fsync the write-ahead log (and the database file) to disk."""
        for suffix in ("-wal", ""):
            path = self.path.with_name(self.path.name + suffix)
            if not path.exists():
                continue
            try:
                with open(path, "rb") as f:
                    os.fsync(f.fileno())
            except OSError as e:
                raise StoreError(f"Unable to sync {path}: {e}") from e

    def _check_table(self, table: str) -> None:
        if table not in TABLES:
            raise StoreError(f"Unknown table: {table}. Available: {list(TABLES)}")

    def _check_idle(self, operation: str) -> None:
        if self._txn is not None:
            raise StoreError(
                f"Cannot {operation} while a transaction on {self._txn.table} is open"
            )

    # Write side

    def begin(self, table: str) -> Transaction:
        """Open the (single) write transaction on table."""
        self._check_table(table)
        self._check_idle("begin a transaction")
        self._txn = Transaction(self, table)
        self._stats.begun += 1
        return self._txn

    def truncate(self, table: str) -> int:
        """Delete every row of table; returns the number removed."""
        self._check_table(table)
        self._check_idle("truncate")
        cursor = self._execute(f'DELETE FROM "{table}"')
        logger.debug("Truncated %s (%d rows)", table, cursor.rowcount)
        return cursor.rowcount

    def checkpoint(self) -> tuple[int, int, int]:
        """Copy committed WAL content into the database file.

        Returns:
            (busy, wal_frames, checkpointed_frames) as reported by sqlite.
        """
        self._check_idle("checkpoint")
        busy, frames, done = self._execute("PRAGMA wal_checkpoint(PASSIVE)").fetchone()
        self._stats.wal_frames = frames
        self._stats.checkpointed_frames = done
        logger.debug("Checkpoint: %d/%d WAL frames copied (busy=%d)", done, frames, busy)
        return busy, frames, done

    def clean_logs(self) -> None:
        """Checkpoint fully and truncate the write-ahead log to zero bytes.

        With synchronous=OFF sqlite does not fsync during the checkpoint, so
        the database file is synced here once the log no longer holds the
        committed pages.
        """
        self._check_idle("clean logs")
        self._execute("PRAGMA wal_checkpoint(TRUNCATE)").fetchone()
        self._sync_log()
        logger.debug("Truncated write-ahead log of %s", self.path)

    def stats(self) -> TxnStats:
        """Snapshot of the transaction counters."""
        return TxnStats(**self._stats.to_dict())

    # Read side

    def get(self, table: str, key: str) -> Optional[dict[str, Any]]:
        """Fetch the decoded value stored under key, or None."""
        self._check_table(table)
        row = self._execute(
            f'SELECT value FROM "{table}" WHERE key = ?', (key,)
        ).fetchone()
        return json.loads(row[0]) if row else None

    def count(self, table: str) -> int:
        self._check_table(table)
        return self._execute(f'SELECT COUNT(*) FROM "{table}"').fetchone()[0]

    def items(self, table: str) -> Iterator[tuple[str, dict[str, Any]]]:
        """Iterate (key, value) pairs of table in key order."""
        self._check_table(table)
        cursor = self._execute(f'SELECT key, value FROM "{table}" ORDER BY key')
        for key, value in cursor.fetchall():
            yield key, json.loads(value)

    def get_index(self, lemma: str, pos: str) -> Optional[IndexRecord]:
        data = self.get("index", make_key(lemma, pos))
        return IndexRecord.from_dict(data) if data else None

    def get_morph(self, form: str, pos: str) -> Optional[MorphRecord]:
        data = self.get("morph", make_key(form, pos))
        return MorphRecord.from_dict(data) if data else None

    def get_synset(self, offset: int | str, pos: str) -> Optional[SynsetRecord]:
        data = self.get("data", make_key(format_offset(offset), key_pos(pos)))
        return SynsetRecord.from_dict(data) if data else None

    def __repr__(self) -> str:
        return f"LexiconStore({self.path})"
