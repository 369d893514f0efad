"""
Session Schemas
Request and response schemas for running practice sessions.
"""
from typing import Optional
from pydantic import BaseModel, Field

from speech_practice.core.session_tracker import PracticeSessionTracker, SessionState
from speech_practice.models.phoneme import PhonemeLevel, PhonemePosition
from speech_practice.utils.results_aggregator import ConfigurationBreakdown, SessionSummary


# ==================== REQUEST SCHEMAS ====================

class StartSessionRequest(BaseModel):
    """Request to start a session for a practice list."""
    list_id: str = Field(..., description="Practice list to run")
    configuration_ids: Optional[list[str]] = Field(
        default=None,
        description="Configurations to include; omit for all of the list"
    )
    max_words_per_configuration: Optional[int] = Field(
        default=None,
        description="Word cap per configuration, clamped to the allowed range"
    )
    seed: Optional[int] = Field(
        default=None,
        description="Seed for a reproducible word order"
    )


class RecordResponseRequest(BaseModel):
    """Response for the current item."""
    correct: Optional[bool] = Field(
        default=None,
        description="true = correct, false = incorrect, null = skipped"
    )


# ==================== RESPONSE SCHEMAS ====================

class SessionItemResponse(BaseModel):
    """The item currently shown."""
    index: int
    word_id: str
    word: str
    position: PhonemePosition
    level: PhonemeLevel
    display: str = Field(..., description="Word formatted at its configuration's level")
    response: Optional[bool] = None


class SessionStateResponse(BaseModel):
    """Snapshot of a running session."""
    session_id: str
    list_id: str
    state: SessionState
    current_index: int
    position: int = Field(..., description="1-based position of the current item")
    total: int = Field(..., description="Number of items in the session")
    max_words_per_configuration: int
    current_item: Optional[SessionItemResponse] = None
    responses: list[Optional[bool]] = Field(default_factory=list)
    locked_configuration_ids: list[str] = Field(
        default_factory=list,
        description="Configurations left out because their phoneme is locked"
    )

    @classmethod
    def from_tracker(
        cls,
        tracker: PracticeSessionTracker,
        locked_configuration_ids: Optional[list[str]] = None
    ) -> "SessionStateResponse":
        data = tracker.to_dict()
        data.pop("created_at", None)

        current = None
        item = tracker.current_item
        if item is not None:
            responses = tracker.responses
            current = SessionItemResponse(
                index=tracker.current_index,
                word_id=item.id,
                word=item.word,
                position=item.position,
                level=tracker.current_level,
                display=tracker.render_current(),
                response=responses[tracker.current_index]
            )

        return cls(
            **data,
            current_item=current,
            responses=tracker.responses,
            locked_configuration_ids=locked_configuration_ids or []
        )


class ConfigurationBreakdownResponse(BaseModel):
    """Results for one configuration of the session."""
    configuration_id: str
    phoneme_symbol: str
    total: int
    correct: int
    incorrect: int
    skipped: int
    live_accuracy_percentage: int = Field(..., description="Correct over answered items")
    stored_percentage: int = Field(..., description="Correct over all items")

    @classmethod
    def from_breakdown(cls, breakdown: ConfigurationBreakdown) -> "ConfigurationBreakdownResponse":
        return cls(
            **breakdown.model_dump(),
            live_accuracy_percentage=breakdown.live_accuracy_percentage,
            stored_percentage=breakdown.stored_percentage
        )


class SessionResultsResponse(BaseModel):
    """Aggregated results of a completed session."""
    session_id: str
    list_id: str
    saved: bool = Field(default=False, description="Whether the session record was saved")
    record_id: Optional[str] = None
    save_error: Optional[str] = None
    total: int
    correct: int
    incorrect: int
    skipped: int
    live_accuracy_percentage: int = Field(..., description="Correct over answered items")
    stored_percentage: int = Field(..., description="Correct over all items, as saved")
    configuration_breakdowns: list[ConfigurationBreakdownResponse] = Field(default_factory=list)

    @classmethod
    def from_summary(
        cls,
        tracker: PracticeSessionTracker,
        summary: SessionSummary
    ) -> "SessionResultsResponse":
        return cls(
            session_id=tracker.session_id,
            list_id=tracker.list_id,
            saved=tracker.is_saved,
            record_id=tracker.record_id,
            save_error=tracker.save_error,
            total=summary.total,
            correct=summary.correct,
            incorrect=summary.incorrect,
            skipped=summary.skipped,
            live_accuracy_percentage=summary.live_accuracy_percentage,
            stored_percentage=summary.stored_percentage,
            configuration_breakdowns=[
                ConfigurationBreakdownResponse.from_breakdown(b)
                for b in summary.configuration_breakdowns
            ]
        )
