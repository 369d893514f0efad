"""
Session Assembler
Builds the randomized, flattened sequence of practice items for a session.

For each configuration the selected words are taken as-is, or a uniform
random subset of exactly `max_words_per_configuration` words when there are
more. The per-configuration subsets are concatenated in configuration order
and the whole sequence is shuffled once. The result is the presentation
order for the session and is never re-shuffled afterwards.
"""
import logging
import random
from typing import Optional, Iterable

from speech_practice.models.phoneme import PhonemeLevel
from speech_practice.models.practice import Configuration, PracticeWord


logger = logging.getLogger(__name__)


def assemble(
    configurations: Iterable[Configuration],
    max_words_per_configuration: int,
    rng: Optional[random.Random] = None
) -> list[PracticeWord]:
    """
    Assemble the ordered practice items for a session.

    Args:
        configurations: Configurations feeding the session, in order
        max_words_per_configuration: Word cap applied to each configuration
        rng: Random source (a fresh random.Random if None)

    Returns:
        Ordered list of practice words. Empty when no configuration has
        words; callers decide what "no session possible" means.
    """
    rng = rng or random.Random()
    cap = max(0, max_words_per_configuration)

    practice_words: list[PracticeWord] = []
    for config in configurations:
        words = config.selected_word_array
        if len(words) > cap:
            words = rng.sample(words, cap)
        practice_words.extend(words)

    rng.shuffle(practice_words)

    logger.debug(f"Assembled {len(practice_words)} practice items (cap {cap})")
    return practice_words


def expected_length(configurations: Iterable[Configuration], max_words_per_configuration: int) -> int:
    """Number of items assemble() will produce for these inputs."""
    cap = max(0, max_words_per_configuration)
    return sum(min(c.selected_word_count, cap) for c in configurations)


def configuration_for_word(
    configurations: Iterable[Configuration],
    word: PracticeWord
) -> Optional[Configuration]:
    """First configuration whose selected words contain this word."""
    for config in configurations:
        if config.contains(word):
            return config
    return None


def level_for_word(configurations: Iterable[Configuration], word: PracticeWord) -> PhonemeLevel:
    """Practice level of the word's configuration; word level when not found."""
    config = configuration_for_word(configurations, word)
    if config is None:
        return PhonemeLevel.WORD
    return config.level
