"""
Practice Session Service
Runs practice sessions end to end: picks configurations from a list,
assembles and steps through the items, aggregates the responses and saves
the session record exactly once.

The store, gate and session registry are injected; the module-level
singletons are only defaults.
"""
import random
from typing import Iterable, Optional

from speech_practice.config import settings
from speech_practice.core.session_tracker import PracticeSessionTracker, SessionRegistry, SessionState
from speech_practice.models.practice import Configuration, PracticeList, ProgressTrend
from speech_practice.models.practice_plan import PracticePlan
from speech_practice.services.base_service import BaseService, ServiceResult
from speech_practice.services.capability_gate import CapabilityGate, capability_gate
from speech_practice.services.practice_store import (
    EntityNotFoundError,
    PersistenceError,
    PracticeRepository,
    practice_store
)
from speech_practice.utils.results_aggregator import Response, aggregate, compute_trend


class PracticeSessionService(BaseService):
    """Orchestrates practice sessions against the persisted practice lists."""

    def __init__(
        self,
        store: PracticeRepository | None = None,
        gate: CapabilityGate | None = None,
        registry: SessionRegistry | None = None
    ):
        super().__init__()
        self.store = store or practice_store
        self.gate = gate or capability_gate
        self.registry = registry if registry is not None else SessionRegistry()

    @property
    def name(self) -> str:
        return "practice_session"

    # ==================== LIST AUTHORING ====================

    def save_plan_to_list(self, list_id: str, plan: PracticePlan) -> list[Configuration]:
        """
        Turn a practice plan into configurations of a list.

        One configuration per selected position, holding the plan's included
        words for that position.
        """
        self.store.get_list(list_id)
        included = plan.words_for_session()

        configurations = []
        for position in plan.ordered_positions():
            config = self.store.add_configuration(
                list_id,
                phoneme_symbol=plan.phoneme.symbol,
                position=position,
                level=plan.level,
                phoneme_name=plan.phoneme.name,
                language=plan.phoneme.language
            )
            self.store.set_selected_words(
                config.id, [w for w in included if w.position == position]
            )
            configurations.append(config)

        self.logger.debug(
            f"[{self.name}] Saved plan for {plan.phoneme.symbol} as "
            f"{len(configurations)} configurations in list {list_id}"
        )
        return configurations

    # ==================== SESSION LIFECYCLE ====================

    def _resolve_configurations(
        self,
        practice_list: PracticeList,
        configuration_ids: Optional[Iterable[str]]
    ) -> list[Configuration]:
        available = practice_list.configuration_array
        if configuration_ids is None:
            return available

        by_id = {c.id: c for c in available}
        selected = []
        for config_id in configuration_ids:
            if config_id not in by_id:
                raise EntityNotFoundError("Configuration", config_id)
            selected.append(by_id[config_id])
        return selected

    def start_session(
        self,
        list_id: str,
        configuration_ids: Optional[Iterable[str]] = None,
        max_words_per_configuration: Optional[int] = None,
        rng: Optional[random.Random] = None
    ) -> ServiceResult:
        """
        Configure and start a session for a practice list.

        Premium status is read once here; configurations whose phoneme is
        locked are left out of the session.

        Raises:
            EntityNotFoundError: unknown list or configuration id
        """
        self.log_event("Starting session", list_id=list_id)
        practice_list = self.store.get_list(list_id)
        configurations = self._resolve_configurations(practice_list, configuration_ids)

        premium_unlocked = self.gate.is_premium_unlocked()
        locked = [
            c for c in configurations
            if not self.gate.is_unlocked(c.phoneme_symbol, premium_unlocked)
        ]
        if locked:
            self.logger.warning(
                f"[{self.name}] Skipping {len(locked)} locked configurations: "
                f"{[c.phoneme_symbol for c in locked]}"
            )

        tracker = PracticeSessionTracker(
            list_id=list_id,
            max_words_per_configuration=(
                max_words_per_configuration
                if max_words_per_configuration is not None
                else settings.DEFAULT_MAX_WORDS_PER_CONFIGURATION
            )
        )
        locked_ids = {c.id for c in locked}
        for config in configurations:
            if config.id not in locked_ids:
                tracker.select_configuration(config)

        items = tracker.start(rng=rng)
        if not items:
            return ServiceResult.error_result(
                error="No words available for the selected configurations",
                data={"locked_configuration_ids": [c.id for c in locked]}
            )

        self.registry.register(tracker)
        self.log_event("Session started", session_id=tracker.session_id, items=len(items))
        return ServiceResult.success_result(
            data={
                "tracker": tracker,
                "locked_configuration_ids": [c.id for c in locked]
            }
        )

    def get_session(self, session_id: str) -> Optional[PracticeSessionTracker]:
        return self.registry.get(session_id)

    def record_response(self, session_id: str, value: Response) -> Optional[PracticeSessionTracker]:
        tracker = self.registry.get(session_id)
        if tracker is not None:
            tracker.record_response(value)
        return tracker

    def advance(self, session_id: str) -> Optional[PracticeSessionTracker]:
        tracker = self.registry.get(session_id)
        if tracker is not None:
            tracker.advance()
        return tracker

    def finish(self, session_id: str) -> Optional[PracticeSessionTracker]:
        """End a session early; unanswered items stay skipped."""
        tracker = self.registry.get(session_id)
        if tracker is not None:
            tracker.finish()
        return tracker

    # ==================== RESULTS ====================

    def complete_session(self, session_id: str) -> ServiceResult:
        """
        Aggregate a completed session and save it.

        The record is saved once: calling again after a successful save
        returns the same record id. After a failed save the summary is kept
        and calling again retries the save.
        """
        tracker = self.registry.get(session_id)
        if tracker is None:
            return ServiceResult.error_result(error=f"Session not found: {session_id}")
        if tracker.state != SessionState.COMPLETED:
            return ServiceResult.error_result(
                error="Session is not completed",
                data={"state": tracker.state.value}
            )

        if tracker.summary is None:
            tracker.summary = aggregate(
                tracker.selected_configurations, tracker.items, tracker.responses
            )

        if tracker.is_saved:
            return ServiceResult.success_result(
                data={"summary": tracker.summary, "record_id": tracker.record_id}
            )

        try:
            record = self.store.save_session(tracker.list_id, tracker.summary)
        except PersistenceError as e:
            tracker.save_error = str(e)
            self.log_error(e, session_id=session_id, list_id=tracker.list_id)
            return ServiceResult.error_result(
                error=f"Could not save session: {e}",
                data={"summary": tracker.summary}
            )

        tracker.record_id = record.id
        tracker.save_error = None
        self.log_event("Session saved", session_id=session_id, record_id=record.id)
        return ServiceResult.success_result(
            data={"summary": tracker.summary, "record": record, "record_id": record.id}
        )

    def retry_save(self, session_id: str) -> ServiceResult:
        """Re-attempt saving a session whose previous save failed."""
        return self.complete_session(session_id)

    def list_trend(self, list_id: str) -> ProgressTrend:
        """Trend of a list's two most recent saved sessions."""
        return compute_trend(self.store.get_sessions(list_id), threshold=settings.TREND_THRESHOLD)

    def discard_list(self, list_id: str) -> bool:
        """Delete a list and drop any session running for it."""
        self.registry.drop_list(list_id)
        return self.store.delete_list(list_id)


# Singleton instance
practice_session_service = PracticeSessionService()
