"""
Results Aggregator
Turns the responses of a practice session into counts, percentages and a
per-configuration breakdown, and classifies the trend between sessions.

Two percentage definitions coexist and are kept apart on purpose:

live accuracy       correct / (correct + incorrect)   skipped items excluded
                    (shown on the results screen right after a session)
stored percentage   correct / total words             skipped items included
                    (saved with the session and used for the trend)

Aggregation is pure: persisting the summary is the caller's job.
"""
import math
from typing import Optional, Sequence

from pydantic import BaseModel, Field

from speech_practice.models.practice import Configuration, PracticeWord, ProgressTrend, SessionRecord


Response = Optional[bool]

DEFAULT_TREND_THRESHOLD = 0.05


class ConfigurationBreakdown(BaseModel):
    """Counts for the items belonging to one configuration"""
    configuration_id: str
    phoneme_symbol: str
    total: int = 0
    correct: int = 0
    incorrect: int = 0
    skipped: int = 0

    @property
    def live_accuracy_percentage(self) -> int:
        return live_accuracy(self.correct, self.incorrect)

    @property
    def stored_percentage(self) -> int:
        return stored_percentage(self.correct, self.total)


class SessionSummary(BaseModel):
    """Aggregated result of one session, ready to be saved"""
    total: int = 0
    correct: int = 0
    incorrect: int = 0
    skipped: int = 0
    configuration_breakdowns: list[ConfigurationBreakdown] = Field(default_factory=list)

    @property
    def live_accuracy_percentage(self) -> int:
        return live_accuracy(self.correct, self.incorrect)

    @property
    def stored_percentage(self) -> int:
        return stored_percentage(self.correct, self.total)


def _round_half_up(value: float) -> int:
    return int(math.floor(value + 0.5))


def live_accuracy(correct: int, incorrect: int) -> int:
    """Accuracy over answered items only; 0 when nothing was answered."""
    answered = correct + incorrect
    if answered <= 0:
        return 0
    return _round_half_up(correct / answered * 100)


def stored_percentage(correct: int, total: int) -> int:
    """Accuracy over all items, skipped ones included; 0 for an empty session."""
    if total <= 0:
        return 0
    return _round_half_up(correct / total * 100)


def _count(responses: Sequence[Response]) -> tuple[int, int, int]:
    correct = sum(1 for r in responses if r is True)
    incorrect = sum(1 for r in responses if r is False)
    skipped = sum(1 for r in responses if r is None)
    return correct, incorrect, skipped


def aggregate(
    configurations: Sequence[Configuration],
    items: Sequence[PracticeWord],
    responses: Sequence[Response]
) -> SessionSummary:
    """
    Aggregate a session's responses.

    Args:
        configurations: Configurations the session was assembled from
        items: Practice items in presentation order
        responses: One tri-state response per item (True / False / None)

    Returns:
        SessionSummary with overall counts and one breakdown per configuration
    """
    # Missing responses count as skipped; extra ones are ignored
    padded = list(responses[:len(items)]) + [None] * max(0, len(items) - len(responses))

    correct, incorrect, skipped = _count(padded)

    breakdowns = []
    for config in configurations:
        word_ids = config.selected_word_ids
        config_responses = [
            padded[index] for index, item in enumerate(items) if item.id in word_ids
        ]
        c_correct, c_incorrect, c_skipped = _count(config_responses)
        breakdowns.append(ConfigurationBreakdown(
            configuration_id=config.id,
            phoneme_symbol=config.phoneme_symbol,
            total=len(config_responses),
            correct=c_correct,
            incorrect=c_incorrect,
            skipped=c_skipped
        ))

    return SessionSummary(
        total=len(items),
        correct=correct,
        incorrect=incorrect,
        skipped=skipped,
        configuration_breakdowns=breakdowns
    )


def compute_trend(
    sessions: Sequence[SessionRecord],
    threshold: float = DEFAULT_TREND_THRESHOLD
) -> ProgressTrend:
    """
    Compare the two most recent sessions (newest first) by stored ratio.

    Fewer than two sessions, or a compared session without words, is neutral.
    """
    if len(sessions) < 2:
        return ProgressTrend.NEUTRAL

    latest, previous = sessions[0], sessions[1]
    if latest.total_words <= 0 or previous.total_words <= 0:
        return ProgressTrend.NEUTRAL

    latest_ratio = latest.correct_count / latest.total_words
    previous_ratio = previous.correct_count / previous.total_words

    if latest_ratio > previous_ratio + threshold:
        return ProgressTrend.POSITIVE
    elif latest_ratio < previous_ratio - threshold:
        return ProgressTrend.NEGATIVE
    return ProgressTrend.NEUTRAL
