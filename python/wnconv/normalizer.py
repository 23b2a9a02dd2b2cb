"""Sense key normalization for wnconv.

Sense keys tie synset words back to the lemma index:
    "05675987%n%boot" → ordinal of boot's sense at offset 05675987

Data files decorate some adjectives with a syntactic marker that the index
files omit, e.g. "galore(ip)" in data.adj is "galore" in index.adj.
"""

import re

from .schema import make_key

# Trailing syntactic marker on adjective words: "(a)", "(p)", "(ip)"
ANNOTATION_PATTERN = re.compile(r"\(\w+\)$")


def sense_key(offset: str, pos: str, lemma: str) -> str:
    """Build the lowercased lookup key for one word sense.

    Args:
        offset: Synset offset as it appears on disk.
        pos: Part-of-speech code of the file being read.
        lemma: Word form.

    Returns:
        Key of the form "offset%pos%lemma", lowercased.
    """
    return make_key(offset, pos, lemma).lower()


def strip_annotation(key: str) -> str:
    """Remove a trailing parenthesized marker from a key or word.

    Args:
        key: Sense key or word form.

    Returns:
        The key without its marker, or unchanged if it has none.
    """
    return ANNOTATION_PATTERN.sub("", key)

