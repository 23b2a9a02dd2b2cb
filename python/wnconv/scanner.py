"""Cursor-based line scanner.

Wraps one line of text and an advancing read position. Patterns are
matched exactly at the cursor; a failed match leaves the cursor where it
was so the caller can report the unparsed remainder.

Usage:
    scanner = LineScanner("boot n 3 2 @ ~ 3 1 05675987 ...")
    lemma, pos, synset_cnt, p_cnt = scanner.scan(INDEX_HEADER)
    scanner.skip(POINTER_SYMBOL)
    offsets, complete = scanner.scan_counted(sense_cnt, SYNSET_OFFSET)
"""

import re
from typing import Optional

Pattern = re.Pattern | str

# How much unparsed text to show in diagnostics
CONTEXT_WIDTH = 20


def _compile(pattern: Pattern) -> re.Pattern:
    if isinstance(pattern, re.Pattern):
        return pattern
    return re.compile(pattern)


class LineScanner:
    """Scanner over a single line of text."""

    def __init__(self, text: str = ""):
        self.text = text
        self.pos = 0

    def scan(self, pattern: Pattern) -> Optional[tuple[str, ...]]:
        """Match pattern at the cursor.

        Args:
            pattern: Regex (compiled or string) anchored at the cursor.

        Returns:
            The captured groups (unmatched optional groups are None), or
            None if the pattern does not match here.
        """
        match = _compile(pattern).match(self.text, self.pos)
        if match is None:
            return None
        self.pos = match.end()
        return match.groups()

    def skip(self, pattern: Pattern) -> Optional[int]:
        """Like scan() but discards captures; returns the length consumed."""
        match = _compile(pattern).match(self.text, self.pos)
        if match is None:
            return None
        self.pos = match.end()
        return match.end() - match.start()

    def scan_counted(
        self, count: int, pattern: Pattern
    ) -> tuple[list[tuple[str, ...]], bool]:
        """Read exactly count consecutive matches of pattern.

        This is the primitive for the length-prefixed groups of the
        dictionary grammar: a count field followed by that many items.

        Args:
            count: Number of items declared by the preceding count field.
            pattern: Pattern for one item.

        Returns:
            Tuple of (items, complete). When incomplete, items holds what
            was read before the failure, so len(items) is the index of the
            item that did not match.
        """
        compiled = _compile(pattern)
        items: list[tuple[str, ...]] = []
        for _ in range(count):
            groups = self.scan(compiled)
            if groups is None:
                return items, False
            items.append(groups)
        return items, True

    @property
    def rest(self) -> str:
        """Unconsumed suffix of the line."""
        return self.text[self.pos:]

    def remainder(self, width: int = CONTEXT_WIDTH) -> str:
        """Leading part of the unconsumed text, for error messages."""
        return self.rest[:width]

    @property
    def at_end(self) -> bool:
        return self.pos >= len(self.text)

    def __repr__(self) -> str:
        return f"LineScanner(pos={self.pos}, rest={self.remainder()!r})"
