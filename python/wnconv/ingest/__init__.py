"""Dictionary file parsing module.

Provides one line parser per file class:
- index: lemma index files (index.noun, ...)
- morph: morphological exception lists (noun.exc, ...)
- data: synset data files (data.noun, ...)

Usage:
    from wnconv.ingest import IndexParser, SynsetParser
    from wnconv.sense_index import SenseIndex

    senses = SenseIndex()
    for result in IndexParser(senses).parse_file("dict/index.noun"):
        ...
    senses.freeze()
    for result in SynsetParser(senses).parse_file("dict/data.noun", "n"):
        ...
"""

from .base import FileStats, LineParser, ParseError, ParseResult
from .data import SynsetParser
from .index import IndexParser
from .morph import MorphParser

# Register available parsers
PARSERS: dict[str, type[LineParser]] = {
    "index": IndexParser,
    "morph": MorphParser,
    "data": SynsetParser,
}


def get_parser(name: str) -> type[LineParser]:
    """Get parser class by file class name."""
    if name not in PARSERS:
        raise ValueError(f"Unknown parser: {name}. Available: {list(PARSERS.keys())}")
    return PARSERS[name]


__all__ = [
    "FileStats",
    "LineParser",
    "ParseError",
    "ParseResult",
    "IndexParser",
    "MorphParser",
    "SynsetParser",
    "get_parser",
    "PARSERS",
]
