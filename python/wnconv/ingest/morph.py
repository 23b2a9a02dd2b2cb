"""Morphological exception list parser (noun.exc, verb.exc, ...).

Format:
    inflected_form base_form [base_form...]

    geese goose
    axes ax axis

Only the first base form is kept. The part of speech comes from the file,
and is empty for cousin.exc.
"""

from ..scanner import CONTEXT_WIDTH
from ..schema import MorphRecord
from .base import LineParser, ParseResult


class MorphParser(LineParser):
    """Parser for exception list lines."""

    name = "morph"

    def parse_line(self, text: str, line_number: int, pos: str = "") -> ParseResult:
        tokens = text.split()
        if len(tokens) < 2:
            return self.fail(
                "expected a form and a lemma", line_number, context=text[:CONTEXT_WIDTH]
            )
        form, lemma = tokens[0], tokens[1]
        return MorphRecord(form=form, pos=pos, lemma=lemma)
