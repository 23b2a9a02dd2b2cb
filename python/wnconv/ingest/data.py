"""Synset data file parser (data.noun, data.verb, data.adj, data.adv).

Format:
    offset lex_filenum ss_type w_cnt word lex_id [word lex_id...] p_cnt
        [ptr...] [frames...] | gloss

    05675987 04 n 01 boot 0 001 @ 00001740 n 0000 | the act of kicking
    00002325 29 v 01 breathe 0 000 01 + 02 00 | draw air into the lungs

w_cnt is two hex digits, p_cnt three decimal digits. Each pointer is
"symbol offset pos ssss" with ssss the source/target word numbers in hex.
Verb synsets add a frame count and "+ frame word" groups.

Every word must already be registered in the sense index by the index
phase; a word that cannot be resolved fails the line.
"""

import re
from typing import Optional

from ..normalizer import sense_key, strip_annotation
from ..scanner import LineScanner
from ..schema import Frame, PartOfSpeech, Pointer, SynsetRecord, SynsetWord, key_pos
from ..sense_index import SenseIndex
from .base import LineParser, ParseResult

SYNSET_HEADER = re.compile(r"(\d+)\s(\d{2})\s(\w)\s([0-9a-fA-F]{2})\s")
SYN_WORD = re.compile(r"(\S+)\s(\w)*\s*")
SYN_PTR_COUNT = re.compile(r"(\d{3})\s")
SYN_PTR = re.compile(r"(\S{1,2})\s(\d+)\s(\w)\s([0-9a-fA-F]{4})\s")
SYN_FRAME_COUNT = re.compile(r"\s*(\d{2})\s")
SYN_FRAME = re.compile(r"\+\s(\d{2})\s([0-9a-fA-F]{2})\s")
SYN_GLOSS = re.compile(r"\s*\|\s*(.+)?")


class SynsetParser(LineParser):
    """Parser for synset data lines.

    The sense index must be frozen: the data phase only reads it.
    """

    name = "data"

    def __init__(self, sense_index: SenseIndex):
        if not sense_index.frozen:
            raise ValueError("SynsetParser needs a frozen sense index; run the index phase first")
        self.sense_index = sense_index

    def parse_line(self, text: str, line_number: int, pos: str = "") -> ParseResult:
        scanner = LineScanner(text)

        header = scanner.scan(SYNSET_HEADER)
        if header is None:
            return self.fail("unable to parse synset", line_number, scanner)
        offset, lex_file, synset_type, word_cnt = header

        # Words
        raw_words, complete = scanner.scan_counted(int(word_cnt, 16), SYN_WORD)
        if not complete:
            return self.fail(f"unable to parse word {len(raw_words)}", line_number, scanner)

        words = []
        for lemma, _lex_id in raw_words:
            sense = self.sense_index.resolve(offset, pos, lemma)
            if sense is None:
                key = sense_key(offset, pos, lemma)
                return self.fail(
                    f"sense index does not contain sense '{key}' "
                    f"(tried '{strip_annotation(key)}', too)",
                    line_number,
                    scanner,
                )
            words.append(SynsetWord(lemma=lemma, sense=sense))

        # Pointers
        ptr_cnt = scanner.scan(SYN_PTR_COUNT)
        if ptr_cnt is None:
            return self.fail("couldn't parse pointer count", line_number, scanner)
        raw_ptrs, complete = scanner.scan_counted(int(ptr_cnt[0]), SYN_PTR)
        if not complete:
            return self.fail(f"unable to parse pointer {len(raw_ptrs)}", line_number, scanner)
        pointers = [
            Pointer(
                symbol=symbol,
                target_offset=target,
                target_pos=target_pos,
                source_wn=int(word_numbers[:2], 16),
                target_wn=int(word_numbers[2:], 16),
            )
            for symbol, target, target_pos, word_numbers in raw_ptrs
        ]

        # Frames, verbs only
        frames = []
        if synset_type == PartOfSpeech.VERB.value:
            frame_cnt = scanner.scan(SYN_FRAME_COUNT)
            if frame_cnt is None:
                return self.fail("couldn't parse frame count", line_number, scanner)
            raw_frames, complete = scanner.scan_counted(int(frame_cnt[0]), SYN_FRAME)
            if not complete:
                return self.fail(f"unable to parse frame {len(raw_frames)}", line_number, scanner)
            frames = [Frame(int(number), int(wn, 16)) for number, wn in raw_frames]

        gloss = self._scan_gloss(scanner)

        # The gloss pattern runs to end of line, so this only catches lines
        # with neither a gloss delimiter nor a clean end.
        if not scanner.at_end:
            return self.fail("trailing content at end of entry", line_number, scanner)

        return SynsetRecord(
            offset=offset,
            pos=key_pos(synset_type),
            lex_file=int(lex_file),
            synset_type=synset_type,
            words=tuple(words),
            pointers=tuple(pointers),
            frames=tuple(frames),
            gloss=gloss,
        )

    def _scan_gloss(self, scanner: LineScanner) -> Optional[str]:
        groups = scanner.scan(SYN_GLOSS)
        if groups is None or groups[0] is None:
            return None
        return groups[0].strip()
