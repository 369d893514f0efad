"""
Tests for the Session Assembler.
"""
import random

from speech_practice.models.phoneme import PhonemeLevel, PhonemePosition
from speech_practice.models.practice import PracticeWord
from speech_practice.utils.session_assembler import (
    assemble,
    configuration_for_word,
    expected_length,
    level_for_word
)


class TestAssemble:
    """Tests for building the practice sequence."""

    def test_length_is_sum_of_capped_counts(self, config_p, config_s, rng):
        items = assemble([config_p, config_s], 5, rng=rng)

        assert len(items) == 3 + 5
        assert len(items) == expected_length([config_p, config_s], 5)

    def test_small_configuration_taken_whole(self, config_p, config_s, rng):
        items = assemble([config_p, config_s], 5, rng=rng)
        ids = {w.id for w in items}

        assert config_p.selected_word_ids <= ids

    def test_items_come_from_selected_words(self, config_p, config_s, rng):
        items = assemble([config_p, config_s], 4, rng=rng)
        union = config_p.selected_word_ids | config_s.selected_word_ids

        assert all(w.id in union for w in items)
        assert len({w.id for w in items}) == len(items)

    def test_seeded_assembly_is_reproducible(self, config_p, config_s):
        first = assemble([config_p, config_s], 5, rng=random.Random(3))
        second = assemble([config_p, config_s], 5, rng=random.Random(3))

        assert [w.id for w in first] == [w.id for w in second]

    def test_empty_inputs_yield_empty_sequence(self, configuration_factory, rng):
        empty = configuration_factory("/k/", [])

        assert assemble([], 5, rng=rng) == []
        assert assemble([empty], 5, rng=rng) == []

    def test_cap_below_one_yields_nothing(self, config_p, rng):
        assert assemble([config_p], 0, rng=rng) == []
        assert assemble([config_p], -2, rng=rng) == []
        assert expected_length([config_p], -2) == 0

    def test_does_not_mutate_configuration(self, config_s, rng):
        before = [w.id for w in config_s.words]
        assemble([config_s], 3, rng=rng)

        assert [w.id for w in config_s.words] == before


class TestWordLookup:
    """Tests for mapping items back to their configuration."""

    def test_configuration_for_word(self, config_p, config_s):
        word = config_s.words[0]

        assert configuration_for_word([config_p, config_s], word) is config_s

    def test_level_for_word(self, configuration_factory):
        config = configuration_factory("/s/", ["sun"], level=PhonemeLevel.SENTENCE)

        assert level_for_word([config], config.words[0]) == PhonemeLevel.SENTENCE

    def test_unknown_word_defaults_to_word_level(self, config_p):
        stranger = PracticeWord(word="pat", phoneme_index=0, position=PhonemePosition.INITIAL)

        assert configuration_for_word([config_p], stranger) is None
        assert level_for_word([config_p], stranger) == PhonemeLevel.WORD
