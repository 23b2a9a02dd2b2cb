"""Batch loader: moves parsed records from source files into a store table.

Each file is loaded in a chain of transactions. Every commit_threshold
entries the open transaction is committed without fsync and a new one is
started, which bounds the write-ahead log and lock retention on long files.
The last transaction of a file is committed durably.
"""

import logging
from pathlib import Path
from typing import Callable, Optional

from ..ingest.base import FileStats, LineParser, ParseError, is_skippable, iter_lines
from ..store import LexiconStore

logger = logging.getLogger(__name__)

# How many records to insert between commits
COMMIT_THRESHOLD = 2000

ProgressCallback = Callable[[FileStats], None]


class ConversionAborted(Exception):
    """Raised when a file reaches the configured error limit.

    Batches committed before the abort stay in the store; the batch that
    was open is rolled back.
    """

    def __init__(self, reason: str, filename: str = "", line_number: int = 0,
                 stats: Optional[FileStats] = None):
        super().__init__(reason)
        self.reason = reason
        self.filename = filename
        self.line_number = line_number
        self.stats = stats


class BatchLoader:
    """Loads the files of one file class into one table."""

    def __init__(
        self,
        store: LexiconStore,
        table: str,
        parser: LineParser,
        commit_threshold: int = COMMIT_THRESHOLD,
        error_limit: int = 0,
        progress: Optional[ProgressCallback] = None,
    ):
        """Initialize loader.

        Args:
            store: Destination store.
            table: Destination table name.
            parser: Line parser for this file class.
            commit_threshold: Entries per intermediate commit.
            error_limit: Abort after this many failed lines in one file
                (0 = unlimited).
            progress: Called with the running FileStats after each parsed
                line, whether it loaded or failed.
        """
        if commit_threshold < 1:
            raise ValueError(f"commit_threshold must be positive, got {commit_threshold}")
        self.store = store
        self.table = table
        self.parser = parser
        self.commit_threshold = commit_threshold
        self.error_limit = error_limit
        self.progress = progress

    def truncate(self) -> int:
        """Empty the destination table before the first file is loaded."""
        removed = self.store.truncate(self.table)
        logger.info("Truncated %s table (%d old entries)", self.table, removed)
        return removed

    def load_file(self, filepath: Path | str, pos: str = "") -> FileStats:
        """Parse a source file and write its records.

        Args:
            filepath: Path to source file.
            pos: Part of speech assigned to the file.

        Returns:
            FileStats for the file; stats.missing is set if it doesn't exist.

        Raises:
            ConversionAborted: The error limit was reached.
            StoreError: A write or commit failed.
        """
        filepath = Path(filepath)
        stats = FileStats(filename=filepath.name, path=str(filepath), pos=pos)

        if not filepath.exists():
            stats.missing = True
            logger.warning("%s is missing: skipped", filepath)
            return stats

        txn = self.store.begin(self.table)
        try:
            for text, line_num in iter_lines(filepath):
                if is_skippable(text):
                    stats.skipped += 1
                    continue

                stats.lines += 1
                result = self.parser.parse_line(text, line_num, pos)

                if isinstance(result, ParseError):
                    stats.record_failure(result)
                    logger.warning(
                        "%s entry did not parse in %s: %s",
                        self.parser.name.capitalize(), stats.filename, result,
                    )
                    if self.progress is not None:
                        self.progress(stats)
                    if self.error_limit and stats.errors >= self.error_limit:
                        raise ConversionAborted(
                            f"Too many errors ({stats.errors}) in {stats.filename}",
                            filename=stats.filename,
                            line_number=line_num,
                            stats=stats,
                        )
                    continue

                txn.put(result.store_key(), result.to_dict())
                stats.entries += 1
                if self.progress is not None:
                    self.progress(stats)

                if stats.entries % self.commit_threshold == 0:
                    txn.commit(sync=False)
                    stats.commits += 1
                    txn = self.store.begin(self.table)

            txn.commit(sync=True)
            stats.commits += 1
        finally:
            if not txn.closed:
                txn.rollback()

        logger.info("Loaded %r", stats)
        return stats

    def finish(self) -> None:
        """Checkpoint the store and prune its write-ahead log."""
        self.store.checkpoint()
        self.store.clean_logs()
