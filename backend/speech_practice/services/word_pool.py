"""
Word Pool Builder
Produces the candidate practice words for a phoneme and a set of positions.
"""
from typing import Iterable

from speech_practice.models.phoneme import Phoneme, PhonemePosition
from speech_practice.models.practice import PracticeWord
from speech_practice.services.reference_catalog import ReferenceCatalog, reference_catalog


class WordPoolBuilder:
    """
    Looks up practice words per position through a word source.

    The source only needs `words_for(symbol, position)`; the reference
    catalog is the default, a real dictionary can be plugged in instead.
    """

    def __init__(self, source: ReferenceCatalog | None = None):
        self.source = source or reference_catalog

    def get_words(
        self,
        phoneme: Phoneme,
        positions: Iterable[PhonemePosition] = ()
    ) -> list[PracticeWord]:
        """
        Candidate words for the phoneme at the requested positions.

        No positions means all three. Results are concatenated in
        initial, medial, final order; duplicates across lists are kept.
        """
        requested = set(positions) or set(PhonemePosition.ordered())

        words: list[PracticeWord] = []
        for position in PhonemePosition.ordered():
            if position in requested:
                words.extend(self.source.words_for(phoneme.symbol, position))
        return words


# Singleton instance
word_pool = WordPoolBuilder()
