"""
Phoneme Models
Defines phoneme reference entities and the practice position/level enums.
"""
from enum import Enum
from pydantic import BaseModel, Field


class PhonemeCategory(str, Enum):
    """Top-level grouping of phonemes in the reference catalog"""
    CONSONANTS = "consonants"
    VOWELS = "vowels"
    BLENDS = "blends"
    DIPHTHONGS = "diphthongs"


class PhonemeLanguage(str, Enum):
    """Language a phoneme belongs to"""
    ENGLISH = "english"
    SPANISH = "spanish"


class PhonemePosition(str, Enum):
    """Where in the word the target phoneme occurs"""
    INITIAL = "initial"
    MEDIAL = "medial"
    FINAL = "final"

    @classmethod
    def ordered(cls) -> list["PhonemePosition"]:
        """Positions in canonical (initial, medial, final) order."""
        return [cls.INITIAL, cls.MEDIAL, cls.FINAL]

    @property
    def display_name(self) -> str:
        return self.value.capitalize()


class PhonemeLevel(str, Enum):
    """Graduated practice difficulty, most reduced first"""
    ISOLATION = "isolation"
    SYLLABLE = "syllable"
    WORD = "word"
    PHRASE = "phrase"
    SENTENCE = "sentence"

    @property
    def rank(self) -> int:
        """0 for isolation up to 4 for sentence."""
        return list(PhonemeLevel).index(self)

    @property
    def display_name(self) -> str:
        return self.value.capitalize()

    @property
    def description(self) -> str:
        return _LEVEL_DESCRIPTIONS[self]

    @property
    def examples(self) -> str:
        return _LEVEL_EXAMPLES[self]


_LEVEL_DESCRIPTIONS = {
    PhonemeLevel.ISOLATION: "Practice the sound by itself",
    PhonemeLevel.SYLLABLE: "Practice in simple syllables",
    PhonemeLevel.WORD: "Practice in single words",
    PhonemeLevel.PHRASE: "Practice in short phrases",
    PhonemeLevel.SENTENCE: "Practice in complete sentences",
}

_LEVEL_EXAMPLES = {
    PhonemeLevel.ISOLATION: "e.g., /s/, /t/, /k/",
    PhonemeLevel.SYLLABLE: "e.g., sa, si, so, su",
    PhonemeLevel.WORD: "e.g., sun, sock, say",
    PhonemeLevel.PHRASE: "e.g., sunny day, six socks",
    PhonemeLevel.SENTENCE: "e.g., Sam sees six seals.",
}


class Phoneme(BaseModel):
    """
    Immutable reference entry for a speech sound.

    Identity is the (symbol, language) pair: two Phoneme values with the
    same symbol and language are equal and hash alike, regardless of the
    display fields.
    """
    symbol: str = Field(..., description="IPA symbol between slashes (e.g., /p/, /tʃ/)")
    name: str
    example: str
    category: PhonemeCategory
    subcategory: str
    language: PhonemeLanguage = PhonemeLanguage.ENGLISH

    class Config:
        frozen = True

    @property
    def key(self) -> tuple[str, PhonemeLanguage]:
        return (self.symbol, self.language)

    @property
    def bare_symbol(self) -> str:
        """Symbol without the enclosing slashes (/tʃ/ -> tʃ)."""
        return self.symbol.strip("/")

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Phoneme):
            return NotImplemented
        return self.key == other.key

    def __hash__(self) -> int:
        return hash(self.key)


class PhonemeSubcategory(BaseModel):
    """A named group of phonemes (e.g., Stops, L-Blends)"""
    name: str
    items: list[Phoneme] = Field(default_factory=list)
