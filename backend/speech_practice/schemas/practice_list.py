"""
Practice List Schemas
Request and response schemas for practice lists, configurations and
session history.
"""
from datetime import datetime
from typing import Optional
from pydantic import BaseModel, Field

from speech_practice.models.phoneme import PhonemeLanguage, PhonemeLevel, PhonemePosition
from speech_practice.models.practice import (
    Configuration,
    ConfigurationResult,
    PracticeList,
    ProgressTrend,
    SessionRecord
)
from speech_practice.schemas.catalog import PracticeWordResponse
from speech_practice.utils.results_aggregator import stored_percentage


# ==================== REQUEST SCHEMAS ====================

class CreateListRequest(BaseModel):
    """Request to create a practice list."""
    name: str = Field(..., min_length=1, max_length=100, description="List name")
    description: Optional[str] = Field(default=None, max_length=500)


class WordInput(BaseModel):
    """A word chosen for a configuration."""
    word: str = Field(..., min_length=1, description="Word text")
    phoneme_index: int = Field(..., description="Index of the target phoneme in the word")
    position: Optional[PhonemePosition] = Field(
        default=None,
        description="Word position; defaults to the configuration's position"
    )


class AddConfigurationRequest(BaseModel):
    """
    Request to add a phoneme to a list.

    One configuration is created per position. Without explicit words the
    whole word pool for those positions is used.
    """
    phoneme_symbol: str = Field(..., description="IPA symbol, e.g. /p/")
    language: Optional[PhonemeLanguage] = Field(
        default=None,
        description="Phoneme language; the configured default when omitted"
    )
    positions: list[PhonemePosition] = Field(
        default_factory=list,
        description="Positions to practice (defaults to initial)"
    )
    level: PhonemeLevel = Field(default=PhonemeLevel.WORD)
    words: Optional[list[WordInput]] = Field(
        default=None,
        description="Words to include; omit to use the word pool"
    )


class SetWordsRequest(BaseModel):
    """Replace the words of a configuration."""
    words: list[WordInput] = Field(default_factory=list)


# ==================== RESPONSE SCHEMAS ====================

class ConfigurationResponse(BaseModel):
    """A configuration with its words sorted by text."""
    id: str
    list_id: Optional[str] = None
    phoneme_symbol: str
    phoneme_name: str
    language: PhonemeLanguage
    position: PhonemePosition
    level: PhonemeLevel
    summary: str = Field(..., description="e.g. /p/ - Initial (Word)")
    word_count: int = 0
    words: list[PracticeWordResponse] = Field(default_factory=list)

    @classmethod
    def from_configuration(cls, config: Configuration) -> "ConfigurationResponse":
        return cls(
            id=config.id,
            list_id=config.list_id,
            phoneme_symbol=config.phoneme_symbol,
            phoneme_name=config.phoneme_name,
            language=config.language,
            position=config.position,
            level=config.level,
            summary=config.summary,
            word_count=config.selected_word_count,
            words=[PracticeWordResponse.from_word(w) for w in config.selected_word_array]
        )


class ConfigurationResultResponse(BaseModel):
    """Per-configuration row of a saved session."""
    configuration_id: str
    phoneme_symbol: str
    total_words: int
    correct_count: int
    accuracy_percentage: int = Field(..., description="Correct over total, skips included")

    @classmethod
    def from_result(cls, result: ConfigurationResult) -> "ConfigurationResultResponse":
        return cls(
            configuration_id=result.configuration_id,
            phoneme_symbol=result.phoneme_symbol,
            total_words=result.total_words,
            correct_count=result.correct_count,
            accuracy_percentage=stored_percentage(result.correct_count, result.total_words)
        )


class SessionRecordResponse(BaseModel):
    """A saved session."""
    id: str
    list_id: str
    date: datetime
    total_words: int
    correct_count: int
    incorrect_count: int
    skipped_count: int
    accuracy_percentage: int
    configuration_results: list[ConfigurationResultResponse] = Field(default_factory=list)

    @classmethod
    def from_record(cls, record: SessionRecord) -> "SessionRecordResponse":
        return cls(
            id=record.id,
            list_id=record.list_id,
            date=record.date,
            total_words=record.total_words,
            correct_count=record.correct_count,
            incorrect_count=record.incorrect_count,
            skipped_count=record.skipped_count,
            accuracy_percentage=record.accuracy_percentage,
            configuration_results=[
                ConfigurationResultResponse.from_result(r)
                for r in record.configuration_result_array
            ]
        )


class TrendInfo(BaseModel):
    """Progress trend with its display hints."""
    trend: ProgressTrend
    icon: str
    color: str

    @classmethod
    def from_trend(cls, trend: ProgressTrend) -> "TrendInfo":
        return cls(trend=trend, icon=trend.icon, color=trend.color)


class PracticeListSummaryResponse(BaseModel):
    """Row of the practice list overview."""
    id: str
    name: str
    description: Optional[str] = None
    created_at: datetime
    last_practiced_at: Optional[datetime] = None
    configuration_count: int = 0
    total_word_count: int = Field(default=0, description="Unique word texts across configurations")
    session_count: int = 0
    last_accuracy_percentage: Optional[int] = None
    trend: TrendInfo

    @classmethod
    def from_list(cls, practice_list: PracticeList) -> "PracticeListSummaryResponse":
        recent = practice_list.most_recent_session
        return cls(
            id=practice_list.id,
            name=practice_list.name,
            description=practice_list.description,
            created_at=practice_list.created_at,
            last_practiced_at=practice_list.last_practiced_at,
            configuration_count=len(practice_list.configurations),
            total_word_count=practice_list.total_word_count,
            session_count=len(practice_list.sessions),
            last_accuracy_percentage=recent.accuracy_percentage if recent else None,
            trend=TrendInfo.from_trend(practice_list.progress_trend)
        )


class PracticeListDetailResponse(PracticeListSummaryResponse):
    """A practice list with its configurations."""
    configurations: list[ConfigurationResponse] = Field(default_factory=list)

    @classmethod
    def from_list(cls, practice_list: PracticeList) -> "PracticeListDetailResponse":
        summary = PracticeListSummaryResponse.from_list(practice_list)
        return cls(
            **summary.model_dump(),
            configurations=[
                ConfigurationResponse.from_configuration(c)
                for c in practice_list.configuration_array
            ]
        )


class PracticeListsResponse(BaseModel):
    """All practice lists, most recently practiced first."""
    total: int = 0
    lists: list[PracticeListSummaryResponse] = Field(default_factory=list)


class SessionHistoryResponse(BaseModel):
    """Saved sessions of a list, newest first."""
    list_id: str
    trend: TrendInfo
    sessions: list[SessionRecordResponse] = Field(default_factory=list)
