"""wnconv CLI - convert WordNet dictionary files into a lexicon store.

Usage:
    python -m wnconv.main /usr/local/WordNet-3.0/dict
    python -m wnconv.main --build-dir build/wordnet --error-limit 10 --force
"""

import argparse
import logging
import sys
from pathlib import Path
from typing import Optional

from .builder import ConversionAborted, Converter, Reporter
from .builder.pipeline import MARKER_FILE, Fileset, FilesetSummary
from .ingest.base import FileStats
from .store import LexiconStore, StoreError
from . import config as cfg

LOG_FORMAT = "%(levelname)s %(name)s: %(message)s"

# Print the running line and error counts every this many parsed lines
PROGRESS_EVERY = 1000


class ConsoleReporter(Reporter):
    """Prints per-file progress and per-fileset summaries."""

    def __init__(self, quiet: bool = False):
        self.quiet = quiet

    def fileset_started(self, fileset: Fileset) -> None:
        print(f"\nConverting {fileset.name} files...")

    def file_started(self, filename: str) -> None:
        print(f"    {filename}...", end="", flush=True)

    def progress(self, stats: FileStats) -> None:
        if not self.quiet and stats.lines % PROGRESS_EVERY == 0:
            counter = f"{stats.lines} ({stats.errors} errors)"
            print(counter + "\b" * len(counter), end="", flush=True)

    def file_finished(self, stats: FileStats) -> None:
        if stats.missing:
            print("missing: skipped")
        else:
            print(f"done ({stats.entries:,} entries, {stats.errors:,} errors).")

    def fileset_finished(self, summary: FilesetSummary) -> None:
        txn = summary.txn_stats
        if txn is None or self.quiet:
            return
        print("  Transaction statistics:")
        print(f"    Transactions: {txn.begun:,} ({txn.rollbacks:,} rolled back)")
        print(f"    Commits: {txn.relaxed_commits:,} relaxed / {txn.durable_commits:,} durable")
        print(f"    Puts: {txn.puts:,}")
        print(f"    WAL frames checkpointed: {txn.checkpointed_frames:,}/{txn.wal_frames:,}")


def configure_logging(verbose: bool = False, quiet: bool = False) -> None:
    if verbose:
        level = logging.DEBUG
    elif quiet:
        level = logging.ERROR
    else:
        level = logging.WARNING
    logging.basicConfig(level=level, format=LOG_FORMAT)


def remove_database(db_path: Path) -> None:
    """Delete a database file along with its WAL and shared-memory files."""
    for suffix in ("", "-wal", "-shm"):
        path = db_path.with_name(db_path.name + suffix)
        if path.exists():
            path.unlink()


def build_parser() -> argparse.ArgumentParser:
    commit_threshold = cfg.default_commit_threshold()
    parser = argparse.ArgumentParser(
        description="wnconv - convert WordNet dictionary files into a lexicon store"
    )
    parser.add_argument(
        "datadir",
        nargs="?",
        type=Path,
        help="WordNet dict directory (default: first existing of the configured search paths)",
    )
    parser.add_argument(
        "--build-dir",
        "-b",
        type=Path,
        default=Path(cfg.default_build_dir()),
        help="Directory for the lexicon database",
    )
    parser.add_argument(
        "--error-limit",
        "-e",
        type=int,
        default=cfg.default_error_limit(),
        help="Quit after COUNT errors in one file (default: 0, unlimited)",
        metavar="COUNT",
    )
    parser.add_argument(
        "--commit-threshold",
        type=int,
        default=commit_threshold,
        help=f"Records per intermediate commit (default: {commit_threshold})",
    )
    parser.add_argument(
        "--force",
        "-f",
        action="store_true",
        default=cfg.get_default("force", False),
        help="Overwrite an existing lexicon database",
    )
    parser.add_argument(
        "--verbose",
        "-v",
        action="store_true",
        default=cfg.get_default("verbose", False),
        help="Verbose progress messages",
    )
    parser.add_argument(
        "--quiet",
        "-q",
        action="store_true",
        default=cfg.get_default("quiet", False),
        help="Only print errors and the final summary",
    )
    return parser


def main(argv: Optional[list[str]] = None) -> int:
    """Main entry point."""
    args = build_parser().parse_args(argv)
    configure_logging(verbose=args.verbose, quiet=args.quiet)

    print("=" * 60)
    print("wnconv - WordNet Lexicon Converter")
    print("=" * 60)

    # Find the source data files
    datadir = args.datadir or cfg.find_data_dir()
    if datadir is None:
        print("ERROR - no WordNet dict directory found; pass DATADIR")
        return 1
    if not datadir.is_dir():
        print(f"ERROR - '{datadir}' is not a directory")
        return 1
    if not (datadir / MARKER_FILE).exists():
        print(f"ERROR - '{datadir}' doesn't seem to contain the necessary files")
        return 1

    db_path = args.build_dir / cfg.default_db_name()
    if db_path.exists():
        if not args.force:
            print(f"ERROR - {db_path} already exists; use --force to overwrite it")
            return 1
        print(f"Warning: existing data in {db_path} will be overwritten.")
        remove_database(db_path)

    print(f"Source: {datadir}")
    print(f"Output: {db_path}")
    if args.error_limit:
        print(f"Error limit: {args.error_limit} per file")

    try:
        with LexiconStore(db_path) as store:
            converter = Converter(
                store,
                datadir,
                commit_threshold=args.commit_threshold,
                error_limit=args.error_limit,
                reporter=ConsoleReporter(quiet=args.quiet),
            )
            summary = converter.run()
    except ConversionAborted as e:
        print(f"\nABORTED - {e.reason} (line {e.line_number})")
        return 1
    except StoreError as e:
        print(f"\nERROR - {e}")
        return 1

    print("\n" + "=" * 60)
    print("Summary")
    print("=" * 60)
    for fileset in summary.filesets:
        line = f"  {fileset.name}: {fileset.entries:,} entries, {fileset.errors:,} errors"
        if fileset.missing:
            line += f" (missing: {', '.join(fileset.missing)})"
        print(line)
    print(f"  Senses indexed: {summary.senses:,}")
    print("Done!")

    return 0


if __name__ == "__main__":
    sys.exit(main())
