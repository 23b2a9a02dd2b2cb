"""wnconv - WordNet dictionary converter.

Parses the fixed-grammar WordNet dictionary files and bulk-loads them into
an embedded, transactional key-value store for later query use.

Core concepts:
    - Three file classes are loaded in a fixed order: index, morph, data
    - Index lines register (offset, pos, lemma) -> sense ordinal in a
      sense index, which the data phase needs to number synset words
    - Records are written in batched transactions; malformed lines are
      counted and skipped, never written

Example:
    "boot n 3 2 @ ~ 3 1 05675987 08477634 09937278"
    → index record boot%n = [05675987, 08477634, 09937278]
    → sense ordinals 0, 1, 2 for "boot" at those offsets

Usage:
    from wnconv.store import LexiconStore
    from wnconv.builder import Converter

    with LexiconStore("build/wordnet/lexicon.db") as store:
        converter = Converter(store, "/usr/local/WordNet-3.0/dict", error_limit=10)
        summary = converter.run()
        print(summary.total_entries, summary.total_errors)

        synset = store.get_synset("05675987", "n")
        print(synset.words, synset.gloss)
"""

__version__ = "0.1.0"
