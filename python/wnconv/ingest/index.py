"""Lemma index file parser (index.noun, index.verb, index.adj, index.adv).

Format:
    lemma pos synset_cnt p_cnt [ptr_symbol...] sense_cnt tagsense_cnt offset...

    boot n 3 2 @ ~ 3 1 05675987 08477634 09937278

Each offset is one sense of the lemma, in sense order. Parsing a line
registers (offset, pos, lemma) -> ordinal in the sense index.
"""

import re

from ..scanner import LineScanner
from ..schema import IndexRecord
from ..sense_index import SenseIndex
from .base import LineParser, ParseResult

INDEX_HEADER = re.compile(r"(\S+)\s(\w)\s(\d+)\s(\d+)\s")
POINTER_SYMBOL = re.compile(r"(\S{1,2})\s")
SENSE_COUNTS = re.compile(r"(\d+)\s(\d+)\s")
SYNSET_OFFSET = re.compile(r"(\d{8})\s*")


class IndexParser(LineParser):
    """Parser for lemma index lines."""

    name = "index"

    def __init__(self, sense_index: SenseIndex):
        self.sense_index = sense_index

    def parse_line(self, text: str, line_number: int, pos: str = "") -> ParseResult:
        """Parse an index line; the pos argument is unused (the line has its own)."""
        scanner = LineScanner(text)

        header = scanner.scan(INDEX_HEADER)
        if header is None:
            return self.fail("unable to parse index entry", line_number, scanner)
        lemma, line_pos, _synset_cnt, p_cnt = header

        # Pointer symbols are only a summary of the data file; discard them
        for i in range(int(p_cnt)):
            if scanner.skip(POINTER_SYMBOL) is None:
                return self.fail(f"couldn't skip pointer {i}", line_number, scanner)

        counts = scanner.scan(SENSE_COUNTS)
        if counts is None:
            return self.fail("couldn't parse sense counts", line_number, scanner)
        sense_cnt = int(counts[0])

        offsets, complete = scanner.scan_counted(sense_cnt, SYNSET_OFFSET)
        if not complete:
            return self.fail(f"couldn't parse synset {len(offsets)}", line_number, scanner)

        record = IndexRecord(
            lemma=lemma,
            pos=line_pos,
            offsets=tuple(groups[0] for groups in offsets),
        )
        for ordinal, offset in enumerate(record.offsets):
            self.sense_index.register(offset, line_pos, lemma, ordinal)

        return record
