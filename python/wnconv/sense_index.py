"""Sense index: (offset, pos, lemma) -> sense ordinal.

Built while the index files are parsed and read while the data files are
parsed, so a synset's words can be numbered by their sense within the
lemma's entry. It lives only for one conversion run and is never stored.

Lifecycle:
    index = SenseIndex()
    index.register("05675987", "n", "boot", 0)   # index phase
    index.freeze()
    index.resolve("05675987", "n", "Boot")       # data phase → 0
"""

from typing import Optional

from .normalizer import sense_key, strip_annotation


class SenseIndexFrozen(RuntimeError):
    """Raised when registering into a sense index that is read-only."""


class SenseIndex:
    """Write-once-per-entry, then read-only, sense ordinal table."""

    def __init__(self):
        self._entries: dict[str, int] = {}
        self._frozen = False

    @property
    def frozen(self) -> bool:
        return self._frozen

    def register(self, offset: str, pos: str, lemma: str, ordinal: int) -> bool:
        """Record the ordinal for one word sense.

        Returns:
            False if the sense was already registered (the first ordinal
            is kept), True otherwise.
        """
        if self._frozen:
            raise SenseIndexFrozen("Sense index is read-only after the index phase")
        key = sense_key(offset, pos, lemma)
        if key in self._entries:
            return False
        self._entries[key] = ordinal
        return True

    def resolve(self, offset: str, pos: str, word: str) -> Optional[int]:
        """Find the ordinal for a synset word.

        Tries the word as written, then without its trailing syntactic
        marker ("galore(ip)" → "galore").
        """
        key = sense_key(offset, pos, word)
        ordinal = self._entries.get(key)
        if ordinal is None:
            ordinal = self._entries.get(strip_annotation(key))
        return ordinal

    def freeze(self) -> None:
        self._frozen = True

    def clear(self) -> None:
        """Empty the index and make it writable again."""
        self._entries.clear()
        self._frozen = False

    def __contains__(self, key: str) -> bool:
        return key in self._entries

    def __len__(self) -> int:
        return len(self._entries)

    def __repr__(self) -> str:
        state = "frozen" if self._frozen else "writable"
        return f"SenseIndex({len(self._entries)} senses, {state})"
