"""
Word Formatter
Renders a practice word at one of the five graduated difficulty levels.

Levels, from most reduced to most naturalistic:
isolation - the target sound alone (character at the phoneme index)
syllable  - a two or three character chunk around the target sound
word      - the word as written
phrase    - the word after a short modifier ("my little cup")
sentence  - the word inside a carrier sentence ("Look at the cup.")

Formatting never raises: all index arithmetic is clamped to the word.
Phrase and sentence choices are random; pass a seeded random.Random for
reproducible output.
"""
import random
from typing import Optional

from speech_practice.models.phoneme import PhonemeLevel, PhonemePosition


PHRASE_PREFIXES = ["the big", "my little", "a nice", "two red", "some blue"]

SENTENCE_TEMPLATES = [
    "I see the $.",
    "Look at the $.",
    "The $ is nice.",
    "We have a $.",
    "Can you find the $?",
]

WORD_PLACEHOLDER = "$"


def isolate(text: str, phoneme_index: int) -> str:
    """Character at the phoneme index, or the whole text when out of range."""
    if 0 <= phoneme_index < len(text):
        return text[phoneme_index]
    return text


def syllable(text: str, phoneme_index: int, position: PhonemePosition) -> str:
    """Lower-cased chunk of the word holding the target sound."""
    if position == PhonemePosition.INITIAL:
        return text[:2].lower()
    if position == PhonemePosition.FINAL:
        return text[-2:].lower()

    if not text:
        return text
    # Medial: one character either side of the sound, clamped to the word
    index = min(max(phoneme_index, 0), len(text) - 1)
    start = max(0, index - 1)
    end = min(len(text), index + 2)
    return text[start:end].lower()


def phrase(text: str, rng: Optional[random.Random] = None) -> str:
    rng = rng or random
    return f"{rng.choice(PHRASE_PREFIXES)} {text}"


def sentence(text: str, rng: Optional[random.Random] = None) -> str:
    rng = rng or random
    return rng.choice(SENTENCE_TEMPLATES).replace(WORD_PLACEHOLDER, text)


def format_word(word, level: PhonemeLevel, rng: Optional[random.Random] = None) -> str:
    """
    Render a PracticeWord at the given level.

    Args:
        word: PracticeWord (text, phoneme index and position are used)
        level: Target practice level
        rng: Random source for phrase/sentence choice (module random if None)

    Returns:
        The text to show for this practice item
    """
    text = word.word

    if level == PhonemeLevel.ISOLATION:
        return isolate(text, word.phoneme_index)
    if level == PhonemeLevel.SYLLABLE:
        return syllable(text, word.phoneme_index, word.position)
    if level == PhonemeLevel.PHRASE:
        return phrase(text, rng)
    if level == PhonemeLevel.SENTENCE:
        return sentence(text, rng)
    return text
