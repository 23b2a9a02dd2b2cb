"""Conversion pipeline: index → morph → data.

Each fileset is a list of source files, a destination table and a parser
factory. Filesets run strictly in order because the data parser reads the
sense index that the index parser fills in.

Source layout (a WordNet "dict" directory):
    dict/
    ├── index.noun  index.verb  index.adj  index.adv
    ├── noun.exc    verb.exc    adj.exc    adv.exc    cousin.exc
    └── data.noun   data.verb   data.adj   data.adv
"""

import logging
from dataclasses import dataclass, field
from pathlib import Path
from typing import Callable, Optional

from ..ingest.base import FileStats, LineParser
from ..ingest.data import SynsetParser
from ..ingest.index import IndexParser
from ..ingest.morph import MorphParser
from ..schema import PartOfSpeech
from ..sense_index import SenseIndex
from ..store import LexiconStore, TxnStats
from .loader import COMMIT_THRESHOLD, BatchLoader

logger = logging.getLogger(__name__)

NOUN = PartOfSpeech.NOUN.value
VERB = PartOfSpeech.VERB.value
ADJECTIVE = PartOfSpeech.ADJECTIVE.value
ADVERB = PartOfSpeech.ADVERB.value

# Source files per class -> part of speech assigned to the file.
# Index lines carry their own part of speech.
INDEX_FILES = {
    "index.noun": NOUN,
    "index.verb": VERB,
    "index.adj": ADJECTIVE,
    "index.adv": ADVERB,
}
MORPH_FILES = {
    "adj.exc": ADJECTIVE,
    "adv.exc": ADVERB,
    "noun.exc": NOUN,
    "verb.exc": VERB,
    "cousin.exc": "",
}
DATA_FILES = {
    "data.adj": ADJECTIVE,
    "data.adv": ADVERB,
    "data.noun": NOUN,
    "data.verb": VERB,
}

# File whose presence identifies a dictionary directory
MARKER_FILE = "data.noun"


@dataclass
class Fileset:
    """A list of files, a table, and the parser that moves one into the other."""

    name: str
    table: str
    files: dict[str, str]
    make_parser: Callable[[], LineParser]


@dataclass
class FilesetSummary:
    """Result of converting one fileset."""

    name: str
    table: str
    files: list[FileStats] = field(default_factory=list)
    txn_stats: Optional[TxnStats] = None

    @property
    def entries(self) -> int:
        return sum(f.entries for f in self.files)

    @property
    def errors(self) -> int:
        return sum(f.errors for f in self.files)

    @property
    def missing(self) -> list[str]:
        return [f.filename for f in self.files if f.missing]

    def __repr__(self) -> str:
        return (
            f"FilesetSummary({self.name}: "
            f"{self.entries} entries, {self.errors} errors, "
            f"{len(self.missing)} missing)"
        )


@dataclass
class ConversionSummary:
    """Result of a full conversion run."""

    filesets: list[FilesetSummary] = field(default_factory=list)
    senses: int = 0

    @property
    def total_entries(self) -> int:
        return sum(s.entries for s in self.filesets)

    @property
    def total_errors(self) -> int:
        return sum(s.errors for s in self.filesets)

    def get(self, name: str) -> Optional[FilesetSummary]:
        for summary in self.filesets:
            if summary.name == name:
                return summary
        return None


class Reporter:
    """Receives conversion progress; the default does nothing."""

    def fileset_started(self, fileset: Fileset) -> None:
        pass

    def file_started(self, filename: str) -> None:
        pass

    def progress(self, stats: FileStats) -> None:
        pass

    def file_finished(self, stats: FileStats) -> None:
        pass

    def fileset_finished(self, summary: FilesetSummary) -> None:
        pass


class Converter:
    """Converts a dictionary directory into a LexiconStore."""

    def __init__(
        self,
        store: LexiconStore,
        source_dir: Path | str,
        commit_threshold: int = COMMIT_THRESHOLD,
        error_limit: int = 0,
        reporter: Optional[Reporter] = None,
    ):
        """Initialize converter.

        Args:
            store: Destination store; its tables are rebuilt.
            source_dir: Directory holding the dictionary files.
            commit_threshold: Entries per intermediate commit.
            error_limit: Abort the run once a file has this many failed
                lines (0 = unlimited).
            reporter: Progress receiver.
        """
        self.store = store
        self.source_dir = Path(source_dir)
        self.commit_threshold = commit_threshold
        self.error_limit = error_limit
        self.reporter = reporter or Reporter()
        self.sense_index = SenseIndex()

    def filesets(self) -> list[Fileset]:
        """The filesets in conversion order."""
        return [
            Fileset("index", "index", INDEX_FILES, lambda: IndexParser(self.sense_index)),
            Fileset("morph", "morph", MORPH_FILES, MorphParser),
            Fileset("data", "data", DATA_FILES, lambda: SynsetParser(self.sense_index)),
        ]

    def run(self) -> ConversionSummary:
        """Convert every fileset.

        Returns:
            ConversionSummary with per-file statistics.

        Raises:
            ConversionAborted: A file reached the error limit; nothing after
                it is loaded.
            StoreError: The store failed.
        """
        self.sense_index.clear()
        summary = ConversionSummary()

        for fileset in self.filesets():
            summary.filesets.append(self.convert_fileset(fileset))
            if fileset.name == "index":
                self.sense_index.freeze()
                summary.senses = len(self.sense_index)
                logger.info("Sense index holds %d senses", summary.senses)

        return summary

    def convert_fileset(self, fileset: Fileset) -> FilesetSummary:
        """Truncate the fileset's table and load each of its files."""
        self.reporter.fileset_started(fileset)
        loader = BatchLoader(
            self.store,
            fileset.table,
            fileset.make_parser(),
            commit_threshold=self.commit_threshold,
            error_limit=self.error_limit,
            progress=self.reporter.progress,
        )
        loader.truncate()

        result = FilesetSummary(name=fileset.name, table=fileset.table)
        for filename, pos in fileset.files.items():
            self.reporter.file_started(filename)
            stats = loader.load_file(self.source_dir / filename, pos)
            result.files.append(stats)
            self.reporter.file_finished(stats)

        loader.finish()
        result.txn_stats = self.store.stats()
        self.reporter.fileset_finished(result)
        return result
