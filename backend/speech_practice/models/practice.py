"""
Practice Models
Defines practice words, configurations, practice lists and session records.
"""
import uuid
from datetime import datetime
from enum import Enum
from typing import Optional
from pydantic import BaseModel, Field

from speech_practice.models.phoneme import PhonemeLanguage, PhonemeLevel, PhonemePosition


def new_id() -> str:
    return str(uuid.uuid4())


class ProgressTrend(str, Enum):
    """Accuracy change between the two most recent sessions of a list"""
    POSITIVE = "positive"
    NEGATIVE = "negative"
    NEUTRAL = "neutral"

    @property
    def icon(self) -> str:
        return {
            ProgressTrend.POSITIVE: "arrow.up.circle.fill",
            ProgressTrend.NEGATIVE: "arrow.down.circle.fill",
            ProgressTrend.NEUTRAL: "equal.circle.fill",
        }[self]

    @property
    def color(self) -> str:
        return {
            ProgressTrend.POSITIVE: "green",
            ProgressTrend.NEGATIVE: "red",
            ProgressTrend.NEUTRAL: "gray",
        }[self]


class PracticeWord(BaseModel):
    """A candidate or selected practice item"""
    id: str = Field(default_factory=new_id)
    word: str
    phoneme_index: int = Field(..., description="Index of the target phoneme in the word")
    position: PhonemePosition
    is_selected: bool = True

    def for_level(self, level: PhonemeLevel, rng=None) -> str:
        """Render this word at the given practice level."""
        from speech_practice.utils.word_formatter import format_word

        return format_word(self, level, rng=rng)


class Configuration(BaseModel):
    """
    A saved phoneme + position + level + word-set practice target.
    Owned by a PracticeList; owns its selected words.
    """
    id: str = Field(default_factory=new_id)
    list_id: Optional[str] = None
    phoneme_symbol: str
    phoneme_name: str = ""
    language: PhonemeLanguage = PhonemeLanguage.ENGLISH
    position: PhonemePosition
    level: PhonemeLevel = PhonemeLevel.WORD
    words: list[PracticeWord] = Field(default_factory=list)

    @property
    def selected_word_ids(self) -> set[str]:
        return {w.id for w in self.words}

    @property
    def selected_word_array(self) -> list[PracticeWord]:
        """Selected words sorted alphabetically by text."""
        return sorted(self.words, key=lambda w: w.word)

    @property
    def selected_word_count(self) -> int:
        return len(self.words)

    def contains(self, word: PracticeWord) -> bool:
        return word.id in self.selected_word_ids

    @property
    def summary(self) -> str:
        return f"{self.phoneme_symbol} - {self.position.display_name} ({self.level.display_name})"


class ConfigurationResult(BaseModel):
    """Per-configuration row of a saved session"""
    id: str = Field(default_factory=new_id)
    configuration_id: str
    phoneme_symbol: str
    total_words: int = Field(default=0, ge=0)
    correct_count: int = Field(default=0, ge=0)

    class Config:
        frozen = True


class SessionRecord(BaseModel):
    """Snapshot of one completed practice run. Immutable once saved."""
    id: str = Field(default_factory=new_id)
    list_id: str
    date: datetime = Field(default_factory=datetime.utcnow)
    total_words: int = Field(default=0, ge=0)
    correct_count: int = Field(default=0, ge=0)
    incorrect_count: int = Field(default=0, ge=0)
    skipped_count: int = Field(default=0, ge=0)
    configuration_results: tuple[ConfigurationResult, ...] = ()

    class Config:
        frozen = True

    @property
    def accuracy_percentage(self) -> int:
        """Stored percentage: correct over total words, skips included."""
        from speech_practice.utils.results_aggregator import stored_percentage

        return stored_percentage(self.correct_count, self.total_words)

    @property
    def configuration_result_array(self) -> list[ConfigurationResult]:
        return sorted(self.configuration_results, key=lambda r: r.phoneme_symbol)


class PracticeList(BaseModel):
    """A named, user-created grouping of configurations and its session history"""
    id: str = Field(default_factory=new_id)
    name: str
    description: Optional[str] = None
    created_at: datetime = Field(default_factory=datetime.utcnow)
    last_practiced_at: Optional[datetime] = None

    # Insertion ordered; read through the sorted accessors below
    configurations: list[Configuration] = Field(default_factory=list)
    sessions: list[SessionRecord] = Field(default_factory=list)

    @property
    def configuration_array(self) -> list[Configuration]:
        """Configurations sorted alphabetically by phoneme symbol."""
        return sorted(self.configurations, key=lambda c: c.phoneme_symbol)

    @property
    def session_array(self) -> list[SessionRecord]:
        """Sessions newest first; equal dates keep the later-saved one first."""
        return sorted(reversed(self.sessions), key=lambda s: s.date, reverse=True)

    @property
    def total_word_count(self) -> int:
        """Number of unique word texts across all configurations."""
        return len({w.word for c in self.configurations for w in c.words})

    @property
    def most_recent_session(self) -> Optional[SessionRecord]:
        sessions = self.session_array
        return sessions[0] if sessions else None

    @property
    def progress_trend(self) -> ProgressTrend:
        from speech_practice.config import settings
        from speech_practice.utils.results_aggregator import compute_trend

        return compute_trend(self.session_array, threshold=settings.TREND_THRESHOLD)
