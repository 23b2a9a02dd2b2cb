"""Tests for the schema module."""

import pytest
import json

from wnconv.schema import (
    Frame,
    IndexRecord,
    LEX_FILES,
    MorphRecord,
    PartOfSpeech,
    Pointer,
    Relation,
    SynsetRecord,
    SynsetWord,
    VERB_FRAMES,
    format_offset,
    key_pos,
)


class TestPartOfSpeech:
    """Tests for PartOfSpeech enum."""

    def test_from_symbol(self):
        """Test symbol lookups."""
        assert PartOfSpeech.from_symbol("n") == PartOfSpeech.NOUN
        assert PartOfSpeech.from_symbol("s") == PartOfSpeech.SATELLITE
        assert PartOfSpeech.from_symbol("x") is None

    def test_satellite_keyed_as_adjective(self):
        """Test satellites normalize to the adjective key symbol."""
        assert PartOfSpeech.SATELLITE.key_symbol == "a"
        assert key_pos("s") == "a"
        assert key_pos("v") == "v"


class TestPointer:
    """Tests for Pointer."""

    def test_round_trip(self):
        """Test to_string() and parse() are inverses."""
        pointer = Pointer(symbol="@", target_offset=471613, target_pos="n")
        text = pointer.to_string()
        assert text == "@ 00471613%n 0000"

        parsed = Pointer.parse(text)
        assert parsed == pointer
        assert (parsed.symbol, parsed.target_offset, parsed.target_pos) == ("@", "00471613", "n")
        assert (parsed.source_wn, parsed.target_wn) == (0, 0)

    def test_word_numbers_are_hex(self):
        """Test lexical pointer word numbers serialize as hex."""
        pointer = Pointer("!", "00002098", "a", source_wn=1, target_wn=12)
        assert pointer.to_string() == "! 00002098%a 010c"
        assert Pointer.parse("! 00002098%a 010c").target_wn == 12

    def test_is_lexical(self):
        """Test semantic vs lexical pointers."""
        assert Pointer("@", "00001740", "n").is_lexical is False
        assert Pointer("!", "00002098", "a", 1, 1).is_lexical is True

    def test_relation(self):
        """Test relation lookup from symbol."""
        assert Pointer("@", "1", "n").relation == Relation.HYPERNYM
        assert Pointer("%p", "1", "n").relation == Relation.PART_MERONYM
        assert Pointer("\\", "1", "a").relation == Relation.PERTAINYM
        assert Pointer("?!", "1", "n").relation is None

    def test_target_key(self):
        """Test target key maps satellites to adjectives."""
        assert Pointer("&", "00001740", "s").target_key == "00001740%a"

    def test_parse_malformed(self):
        """Test malformed pointer strings raise."""
        with pytest.raises(ValueError):
            Pointer.parse("@ 00001740%n 00")
        with pytest.raises(ValueError):
            Pointer.parse("@ 00001740%n")


class TestRecords:
    """Tests for record dataclasses."""

    def test_index_record_key(self):
        """Test IndexRecord keys."""
        record = IndexRecord("boot", "n", ("05675987", "08477634"))
        assert record.key == ("boot", "n")
        assert record.store_key() == "boot%n"

    def test_index_record_dict(self):
        """Test IndexRecord serialization."""
        record = IndexRecord("boot", "n", ("05675987", "08477634"))
        data = record.to_dict()
        assert data["offsets"] == ["05675987", "08477634"]
        assert IndexRecord.from_dict(json.loads(json.dumps(data))) == record

    def test_morph_record_empty_pos(self):
        """Test the cousin list's empty part of speech."""
        record = MorphRecord("acquisitive", "", "acquire")
        assert record.store_key() == "acquisitive%"

    def test_synset_record_dict(self):
        """Test SynsetRecord serialization through JSON."""
        record = SynsetRecord(
            offset="00002325",
            pos="v",
            lex_file=29,
            synset_type="v",
            words=(SynsetWord("breathe", 0), SynsetWord("respire", 1)),
            pointers=(Pointer("@", "00001740", "v"),),
            frames=(Frame(2, 0), Frame(8, 1)),
            gloss="draw air into the lungs",
        )
        data = json.loads(json.dumps(record.to_dict()))
        assert data["words"] == [["breathe", 0], ["respire", 1]]
        assert data["pointers"] == ["@ 00001740%v 0000"]
        assert SynsetRecord.from_dict(data) == record

    def test_synset_related(self):
        """Test filtering pointers by relation kind."""
        record = SynsetRecord(
            offset="05675987",
            pos="n",
            lex_file=4,
            pointers=(
                Pointer("@", "00001740", "n"),
                Pointer("~", "00001930", "n"),
                Pointer("@", "00002137", "n"),
            ),
        )
        hypernyms = record.related(Relation.HYPERNYM)
        assert [p.target_offset for p in hypernyms] == ["00001740", "00002137"]
        assert record.related(Relation.ANTONYM) == []

    def test_lex_file_name(self):
        """Test lexicographer file lookup."""
        assert SynsetRecord("1", "n", 3).lex_file_name == "noun.Tops"
        assert SynsetRecord("1", "a", 44).lex_file_name == "adj.ppl"
        assert SynsetRecord("1", "n", 99).lex_file_name is None

    def test_frame_sentence(self):
        """Test verb frame sentences."""
        assert Frame(2).sentence == "Somebody ----s"
        assert Frame(0).sentence == ""
        assert len(VERB_FRAMES) == 36


class TestHelpers:
    """Tests for module helpers."""

    def test_format_offset(self):
        """Test offsets are zero-padded to eight digits."""
        assert format_offset(471613) == "00471613"
        assert format_offset("05675987") == "05675987"

    def test_lex_files_count(self):
        """Test the lexicographer file table is complete."""
        assert len(LEX_FILES) == 45
        assert LEX_FILES[0] == "adj.all"
