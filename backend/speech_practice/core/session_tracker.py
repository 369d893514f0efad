"""
Session Tracker
State machine that steps through an assembled practice sequence and records
one tri-state response per item.

    configuring --start()--> in_progress --advance() at last item--> completed
                                         --finish()---------------> completed

Everything is synchronous and single-threaded: the caller (an API request
or a UI event) drives each transition. Operations that do not apply to the
current state are ignored rather than raising.
"""
import logging
import random
import uuid
from datetime import datetime
from enum import Enum
from typing import Optional

from speech_practice.config import settings
from speech_practice.models.phoneme import PhonemeLevel
from speech_practice.models.practice import Configuration, PracticeWord
from speech_practice.utils.results_aggregator import Response, SessionSummary
from speech_practice.utils.session_assembler import assemble, level_for_word


logger = logging.getLogger(__name__)


class SessionState(str, Enum):
    """Lifecycle of a practice session"""
    CONFIGURING = "configuring"
    IN_PROGRESS = "in_progress"
    COMPLETED = "completed"


class PracticeSessionTracker:
    """
    Tracks one practice session for a practice list.

    While configuring, holds which configurations feed the session and the
    per-configuration word cap. Once started, the item sequence is fixed and
    a same-length response list starts out all skipped (None).
    """

    def __init__(
        self,
        list_id: str,
        max_words_per_configuration: int = settings.DEFAULT_MAX_WORDS_PER_CONFIGURATION,
        session_id: Optional[str] = None
    ):
        self.session_id = session_id or str(uuid.uuid4())
        self.list_id = list_id
        self.state = SessionState.CONFIGURING
        self.created_at = datetime.utcnow()

        self.selected_configurations: list[Configuration] = []
        self.max_words_per_configuration = settings.DEFAULT_MAX_WORDS_PER_CONFIGURATION
        self.set_max_words_per_configuration(max_words_per_configuration)

        self._items: list[PracticeWord] = []
        self._responses: list[Response] = []
        self.current_index = 0

        # Filled in once the session has been aggregated / saved
        self.summary: Optional[SessionSummary] = None
        self.record_id: Optional[str] = None
        self.save_error: Optional[str] = None

    # ==================== CONFIGURING ====================

    def select_configuration(self, configuration: Configuration, selected: bool = True) -> None:
        if self.state != SessionState.CONFIGURING:
            return
        if selected:
            if all(c.id != configuration.id for c in self.selected_configurations):
                self.selected_configurations.append(configuration)
        else:
            self.selected_configurations = [
                c for c in self.selected_configurations if c.id != configuration.id
            ]

    def set_max_words_per_configuration(self, value: int) -> int:
        """Set the cap, clamped to the configured range. Returns the applied value."""
        if self.state != SessionState.CONFIGURING:
            return self.max_words_per_configuration
        self.max_words_per_configuration = min(
            max(value, settings.MIN_WORDS_PER_CONFIGURATION),
            settings.MAX_WORDS_PER_CONFIGURATION
        )
        return self.max_words_per_configuration

    def start(self, rng: Optional[random.Random] = None) -> list[PracticeWord]:
        """
        Assemble the items and begin the session.

        Returns the item sequence. When nothing could be assembled the
        tracker stays in configuring and an empty list is returned.
        """
        if self.state != SessionState.CONFIGURING:
            return self.items

        # Frozen copies: later edits to the list do not reach a running session
        snapshot = [c.model_copy(deep=True) for c in self.selected_configurations]
        items = assemble(snapshot, self.max_words_per_configuration, rng=rng)
        if not items:
            logger.warning(f"Session {self.session_id}: no words available, not starting")
            return []

        self.selected_configurations = snapshot
        self._items = items
        self._responses = [None] * len(items)
        self.current_index = 0
        self.state = SessionState.IN_PROGRESS
        logger.info(
            f"Session {self.session_id} started: {len(items)} items from "
            f"{len(self.selected_configurations)} configurations"
        )
        return self.items

    # ==================== IN PROGRESS ====================

    @property
    def items(self) -> list[PracticeWord]:
        return list(self._items)

    @property
    def responses(self) -> list[Response]:
        return list(self._responses)

    @property
    def current_item(self) -> Optional[PracticeWord]:
        if self.state != SessionState.IN_PROGRESS:
            return None
        if self.current_index < len(self._items):
            return self._items[self.current_index]
        return None

    @property
    def current_level(self) -> PhonemeLevel:
        item = self.current_item
        if item is None:
            return PhonemeLevel.WORD
        return level_for_word(self.selected_configurations, item)

    def render_current(self, rng: Optional[random.Random] = None) -> Optional[str]:
        """Current item formatted at its configuration's level."""
        item = self.current_item
        if item is None:
            return None
        return item.for_level(self.current_level, rng=rng)

    @property
    def progress(self) -> tuple[int, int]:
        """(1-based position of the current item, total items)."""
        if not self._items:
            return (0, 0)
        return (min(self.current_index + 1, len(self._items)), len(self._items))

    def record_response(self, value: Response) -> None:
        """Write the response for the current item. Out-of-range writes are ignored."""
        if self.state != SessionState.IN_PROGRESS:
            return
        if self.current_index < len(self._responses):
            self._responses[self.current_index] = value

    def advance(self) -> SessionState:
        """Move to the next item, or complete the session after the last one."""
        if self.state != SessionState.IN_PROGRESS:
            return self.state
        if self.current_index < len(self._items) - 1:
            self.current_index += 1
        else:
            self._complete("reached end")
        return self.state

    def finish(self) -> SessionState:
        """End the session now, keeping the responses recorded so far."""
        if self.state == SessionState.IN_PROGRESS:
            self._complete("ended early")
        return self.state

    def _complete(self, reason: str) -> None:
        self.state = SessionState.COMPLETED
        answered = sum(1 for r in self._responses if r is not None)
        logger.info(
            f"Session {self.session_id} completed ({reason}): "
            f"{answered}/{len(self._responses)} answered"
        )

    @property
    def is_complete(self) -> bool:
        return self.state == SessionState.COMPLETED

    @property
    def is_saved(self) -> bool:
        return self.record_id is not None

    def to_dict(self) -> dict:
        position, total = self.progress
        return {
            "session_id": self.session_id,
            "list_id": self.list_id,
            "state": self.state.value,
            "current_index": self.current_index,
            "position": position,
            "total": total,
            "max_words_per_configuration": self.max_words_per_configuration,
            "created_at": self.created_at.isoformat()
        }


class SessionRegistry:
    """
    Keeps the active trackers in memory, keyed by session id.

    Only one session runs per practice list: registering a new tracker for a
    list drops the previous one.
    """

    def __init__(self):
        self._sessions: dict[str, PracticeSessionTracker] = {}

    def register(self, tracker: PracticeSessionTracker) -> PracticeSessionTracker:
        stale = [sid for sid, t in self._sessions.items() if t.list_id == tracker.list_id]
        for sid in stale:
            logger.info(f"Replacing session {sid} for list {tracker.list_id}")
            del self._sessions[sid]
        self._sessions[tracker.session_id] = tracker
        return tracker

    def get(self, session_id: str) -> Optional[PracticeSessionTracker]:
        return self._sessions.get(session_id)

    def remove(self, session_id: str) -> bool:
        return self._sessions.pop(session_id, None) is not None

    def for_list(self, list_id: str) -> Optional[PracticeSessionTracker]:
        for tracker in self._sessions.values():
            if tracker.list_id == list_id:
                return tracker
        return None

    def drop_list(self, list_id: str) -> None:
        self._sessions = {sid: t for sid, t in self._sessions.items() if t.list_id != list_id}

    def __len__(self) -> int:
        return len(self._sessions)
