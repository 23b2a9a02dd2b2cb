"""Record schema and constant tables for wnconv.

Core concept:
    - Every loaded line becomes one immutable record with a store key
    - Index records map (lemma, pos) to an ordered list of synset offsets
    - Morph records map (inflected form, pos) to a lemma
    - Synset records carry words, typed pointers, verb frames and a gloss

Example:
    "05675987 09 n 01 boot 0 001 @ 00001740 n 0000 | a kick"
    → SynsetRecord(offset="05675987", pos="n", words=[boot%0], ...)
    Stored under key "05675987%n"
"""

from dataclasses import dataclass
from enum import Enum
from typing import Any, Optional

# Store key component delimiter, e.g. "boot%n" or "05675987%n"
KEY_DELIM = "%"

OFFSET_WIDTH = 8


class PartOfSpeech(Enum):
    """Syntactic category codes used throughout the dictionary files."""

    NOUN = "n"
    VERB = "v"
    ADJECTIVE = "a"
    ADVERB = "r"
    SATELLITE = "s"  # adjective satellite

    @classmethod
    def from_symbol(cls, symbol: str) -> Optional["PartOfSpeech"]:
        """Get PartOfSpeech from its one-letter code."""
        for pos in cls:
            if pos.value == symbol:
                return pos
        return None

    @property
    def key_symbol(self) -> str:
        """Symbol used in store keys; satellites are keyed as adjectives."""
        if self is PartOfSpeech.SATELLITE:
            return PartOfSpeech.ADJECTIVE.value
        return self.value


def key_pos(symbol: str) -> str:
    """Normalize a synset type code for use as a key component."""
    pos = PartOfSpeech.from_symbol(symbol)
    return pos.key_symbol if pos else symbol


class Relation(Enum):
    """Pointer relation kinds, valued by their pointer symbol."""

    ANTONYM = "!"
    HYPERNYM = "@"
    INSTANCE_HYPERNYM = "@i"
    HYPONYM = "~"
    INSTANCE_HYPONYM = "~i"
    MEMBER_HOLONYM = "#m"
    SUBSTANCE_HOLONYM = "#s"
    PART_HOLONYM = "#p"
    PORTION_HOLONYM = "#o"
    FEATURE_HOLONYM = "#f"
    PHASE_HOLONYM = "#a"
    PLACE_HOLONYM = "#l"
    MEMBER_MERONYM = "%m"
    SUBSTANCE_MERONYM = "%s"
    PART_MERONYM = "%p"
    PORTION_MERONYM = "%o"
    FEATURE_MERONYM = "%f"
    PHASE_MERONYM = "%a"
    PLACE_MERONYM = "%l"
    ATTRIBUTE = "="
    DERIVATION = "+"
    DOMAIN_TOPIC = ";c"
    MEMBER_TOPIC = "-c"
    DOMAIN_REGION = ";r"
    MEMBER_REGION = "-r"
    DOMAIN_USAGE = ";u"
    MEMBER_USAGE = "-u"
    ENTAILMENT = "*"
    CAUSE = ">"
    ALSO_SEE = "^"
    VERB_GROUP = "$"
    SIMILAR_TO = "&"
    PARTICIPLE = "<"
    PERTAINYM = "\\"  # also "derived from adjective" on adverbs

    @classmethod
    def from_symbol(cls, symbol: str) -> Optional["Relation"]:
        """Get Relation from a pointer symbol, or None if unknown."""
        try:
            return cls(symbol)
        except ValueError:
            return None


# Lexicographer file names, indexed by the two-digit lex_filenum field
LEX_FILES = [
    "adj.all", "adj.pert", "adv.all", "noun.Tops", "noun.act",
    "noun.animal", "noun.artifact", "noun.attribute", "noun.body",
    "noun.cognition", "noun.communication", "noun.event", "noun.feeling",
    "noun.food", "noun.group", "noun.location", "noun.motive",
    "noun.object", "noun.person", "noun.phenomenon", "noun.plant",
    "noun.possession", "noun.process", "noun.quantity", "noun.relation",
    "noun.shape", "noun.state", "noun.substance", "noun.time",
    "verb.body", "verb.change", "verb.cognition", "verb.communication",
    "verb.competition", "verb.consumption", "verb.contact",
    "verb.creation", "verb.emotion", "verb.motion", "verb.perception",
    "verb.possession", "verb.social", "verb.stative", "verb.weather",
    "adj.ppl",
]

# Generic verb frame sentences, indexed by frame number (0 is unused)
VERB_FRAMES = [
    "",
    "Something ----s",
    "Somebody ----s",
    "It is ----ing",
    "Something is ----ing PP",
    "Something ----s something Adjective/Noun",
    "Something ----s Adjective/Noun",
    "Somebody ----s Adjective",
    "Somebody ----s something",
    "Somebody ----s somebody",
    "Something ----s somebody",
    "Something ----s something",
    "Something ----s to somebody",
    "Somebody ----s on something",
    "Somebody ----s somebody something",
    "Somebody ----s something to somebody",
    "Somebody ----s something from somebody",
    "Somebody ----s somebody with something",
    "Somebody ----s somebody of something",
    "Somebody ----s something on somebody",
    "Somebody ----s somebody PP",
    "Somebody ----s something PP",
    "Somebody ----s PP",
    "Somebody's (body part) ----s",
    "Somebody ----s somebody to INFINITIVE",
    "Somebody ----s somebody INFINITIVE",
    "Somebody ----s that CLAUSE",
    "Somebody ----s to somebody",
    "Somebody ----s to INFINITIVE",
    "Somebody ----s whether INFINITIVE",
    "Somebody ----s somebody into V-ing something",
    "Somebody ----s something with something",
    "Somebody ----s INFINITIVE",
    "Somebody ----s VERB-ing",
    "It ----s that CLAUSE",
    "Something ----s INFINITIVE",
]


def make_key(*parts: str) -> str:
    """Join key components with the key delimiter."""
    return KEY_DELIM.join(parts)


def format_offset(offset: int | str) -> str:
    """Zero-pad a synset offset to its on-disk width."""
    return f"{int(offset):0{OFFSET_WIDTH}d}"


@dataclass(frozen=True)
class Pointer:
    """A typed relation from one synset (or one of its words) to another.

    source_wn and target_wn are 1-based word numbers; both 0 means the
    relation holds between whole synsets.
    """

    symbol: str
    target_offset: str
    target_pos: str
    source_wn: int = 0
    target_wn: int = 0

    def __post_init__(self):
        object.__setattr__(self, "target_offset", format_offset(self.target_offset))

    @property
    def relation(self) -> Optional[Relation]:
        return Relation.from_symbol(self.symbol)

    @property
    def is_lexical(self) -> bool:
        """True if the pointer links specific words rather than synsets."""
        return bool(self.source_wn or self.target_wn)

    @property
    def target_key(self) -> str:
        """Store key of the target synset."""
        return make_key(self.target_offset, key_pos(self.target_pos))

    def to_string(self) -> str:
        """Serialize as '<symbol> <offset>%<pos> <ssss>' (word numbers in hex)."""
        return "%s %s%s%s %02x%02x" % (
            self.symbol,
            self.target_offset,
            KEY_DELIM,
            self.target_pos,
            self.source_wn,
            self.target_wn,
        )

    @classmethod
    def parse(cls, text: str) -> "Pointer":
        """Inverse of to_string()."""
        symbol, target, word_numbers = text.split()
        offset, pos = target.split(KEY_DELIM, 1)
        if len(word_numbers) != 4:
            raise ValueError(f"Malformed pointer word numbers: {word_numbers!r}")
        return cls(
            symbol=symbol,
            target_offset=offset,
            target_pos=pos,
            source_wn=int(word_numbers[:2], 16),
            target_wn=int(word_numbers[2:], 16),
        )

    def to_dict(self) -> dict[str, Any]:
        return {
            "symbol": self.symbol,
            "target_offset": self.target_offset,
            "target_pos": self.target_pos,
            "source_wn": self.source_wn,
            "target_wn": self.target_wn,
        }

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "Pointer":
        return cls(
            symbol=data["symbol"],
            target_offset=data["target_offset"],
            target_pos=data["target_pos"],
            source_wn=data.get("source_wn", 0),
            target_wn=data.get("target_wn", 0),
        )


@dataclass(frozen=True)
class SynsetWord:
    """A word form in a synset with its resolved sense ordinal."""

    lemma: str
    sense: int

    def __str__(self) -> str:
        return make_key(self.lemma, str(self.sense))


@dataclass(frozen=True)
class Frame:
    """A verb frame; word_number 0 means the frame applies to all words."""

    number: int
    word_number: int = 0

    @property
    def sentence(self) -> str:
        if 0 < self.number < len(VERB_FRAMES):
            return VERB_FRAMES[self.number]
        return ""


@dataclass(frozen=True)
class IndexRecord:
    """Lemma index entry: (lemma, pos) -> synset offsets in sense order."""

    lemma: str
    pos: str
    offsets: tuple[str, ...] = ()

    @property
    def key(self) -> tuple[str, str]:
        return (self.lemma, self.pos)

    def store_key(self) -> str:
        return make_key(self.lemma, self.pos)

    def to_dict(self) -> dict[str, Any]:
        return {
            "lemma": self.lemma,
            "pos": self.pos,
            "offsets": list(self.offsets),
        }

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "IndexRecord":
        return cls(
            lemma=data["lemma"],
            pos=data["pos"],
            offsets=tuple(data.get("offsets", [])),
        )


@dataclass(frozen=True)
class MorphRecord:
    """Exception list entry: (inflected form, pos) -> lemma.

    pos is empty for the cousin list, which has no syntactic category.
    """

    form: str
    pos: str
    lemma: str

    @property
    def key(self) -> tuple[str, str]:
        return (self.form, self.pos)

    def store_key(self) -> str:
        return make_key(self.form, self.pos)

    def to_dict(self) -> dict[str, Any]:
        return {"form": self.form, "pos": self.pos, "lemma": self.lemma}

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "MorphRecord":
        return cls(form=data["form"], pos=data.get("pos", ""), lemma=data["lemma"])


@dataclass(frozen=True)
class SynsetRecord:
    """A synonym set with its words, pointers, verb frames and gloss."""

    offset: str
    pos: str                                # key pos ("s" already mapped to "a")
    lex_file: int
    synset_type: str = ""                   # raw type code from the data line
    words: tuple[SynsetWord, ...] = ()
    pointers: tuple[Pointer, ...] = ()
    frames: tuple[Frame, ...] = ()
    gloss: Optional[str] = None

    @property
    def key(self) -> tuple[str, str]:
        return (self.offset, self.pos)

    @property
    def lex_file_name(self) -> Optional[str]:
        if 0 <= self.lex_file < len(LEX_FILES):
            return LEX_FILES[self.lex_file]
        return None

    def store_key(self) -> str:
        return make_key(self.offset, self.pos)

    def related(self, relation: Relation) -> list[Pointer]:
        """Get the pointers of one relation kind."""
        return [p for p in self.pointers if p.symbol == relation.value]

    def to_dict(self) -> dict[str, Any]:
        return {
            "offset": self.offset,
            "pos": self.pos,
            "lex_file": self.lex_file,
            "synset_type": self.synset_type,
            "words": [[w.lemma, w.sense] for w in self.words],
            "pointers": [p.to_string() for p in self.pointers],
            "frames": [[f.number, f.word_number] for f in self.frames],
            "gloss": self.gloss,
        }

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "SynsetRecord":
        return cls(
            offset=data["offset"],
            pos=data["pos"],
            lex_file=data["lex_file"],
            synset_type=data.get("synset_type", ""),
            words=tuple(SynsetWord(lemma, sense) for lemma, sense in data.get("words", [])),
            pointers=tuple(Pointer.parse(p) for p in data.get("pointers", [])),
            frames=tuple(Frame(number, wn) for number, wn in data.get("frames", [])),
            gloss=data.get("gloss"),
        )


Record = IndexRecord | MorphRecord | SynsetRecord
