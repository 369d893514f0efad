"""
Catalog Schemas
Response schemas for the phoneme catalog and word pool endpoints.
"""
from typing import Optional
from pydantic import BaseModel, Field

from speech_practice.models.phoneme import (
    Phoneme,
    PhonemeCategory,
    PhonemeLanguage,
    PhonemeLevel,
    PhonemePosition
)
from speech_practice.models.practice import PracticeWord


# ==================== RESPONSE SCHEMAS ====================

class PhonemeResponse(BaseModel):
    """One phoneme of the catalog."""
    symbol: str = Field(..., description="IPA symbol between slashes")
    name: str
    example: str = Field(..., description="Example word containing the sound")
    category: PhonemeCategory
    subcategory: str
    language: PhonemeLanguage
    is_unlocked: bool = Field(..., description="Whether the phoneme can be practiced")
    has_curated_words: bool = Field(
        default=False,
        description="False when only placeholder words exist for this phoneme"
    )

    @classmethod
    def from_phoneme(cls, phoneme: Phoneme, is_unlocked: bool, has_curated_words: bool) -> "PhonemeResponse":
        return cls(
            symbol=phoneme.symbol,
            name=phoneme.name,
            example=phoneme.example,
            category=phoneme.category,
            subcategory=phoneme.subcategory,
            language=phoneme.language,
            is_unlocked=is_unlocked,
            has_curated_words=has_curated_words
        )


class PhonemeSubcategoryResponse(BaseModel):
    """Phonemes of one subcategory (e.g., Stops)."""
    name: str
    phonemes: list[PhonemeResponse] = Field(default_factory=list)


class PhonemeListResponse(BaseModel):
    """Catalog listing, optionally grouped by subcategory."""
    total: int = Field(default=0, description="Number of phonemes returned")
    premium_unlocked: bool = Field(default=False, description="Global premium flag")
    phonemes: list[PhonemeResponse] = Field(default_factory=list)
    subcategories: list[PhonemeSubcategoryResponse] = Field(
        default_factory=list,
        description="Grouping by subcategory, filled when a category filter is given"
    )


class PracticeWordResponse(BaseModel):
    """A practice word, with its rendering at the requested level."""
    id: str
    word: str
    phoneme_index: int
    position: PhonemePosition
    is_selected: bool = True
    display: Optional[str] = Field(default=None, description="Word formatted at the requested level")

    @classmethod
    def from_word(cls, word: PracticeWord, display: Optional[str] = None) -> "PracticeWordResponse":
        return cls(
            id=word.id,
            word=word.word,
            phoneme_index=word.phoneme_index,
            position=word.position,
            is_selected=word.is_selected,
            display=display
        )


class WordPoolResponse(BaseModel):
    """Candidate words for a phoneme at a set of positions."""
    symbol: str
    language: PhonemeLanguage
    positions: list[PhonemePosition] = Field(..., description="Positions in canonical order")
    level: PhonemeLevel
    is_unlocked: bool
    words: list[PracticeWordResponse] = Field(default_factory=list)


class PracticeLevelResponse(BaseModel):
    """A practice level with its display texts."""
    level: PhonemeLevel
    display_name: str
    description: str
    examples: str
