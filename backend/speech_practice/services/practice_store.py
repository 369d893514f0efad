"""
Practice Store
Persistence port for practice lists, their configurations and session
history, plus the in-memory implementation used by the API.

A practice list owns its configurations and sessions: deleting the list
deletes both. Reads come back in documented orders: configurations
alphabetically by phoneme symbol, sessions newest first.
"""
import logging
from abc import ABC, abstractmethod
from datetime import datetime
from typing import Iterable, Optional

from speech_practice.models.phoneme import PhonemeLanguage, PhonemeLevel, PhonemePosition
from speech_practice.models.practice import (
    Configuration,
    ConfigurationResult,
    PracticeList,
    PracticeWord,
    SessionRecord
)
from speech_practice.utils.results_aggregator import SessionSummary


logger = logging.getLogger(__name__)


class PersistenceError(Exception):
    """A store operation could not be completed"""


class EntityNotFoundError(PersistenceError):
    """Referenced list / configuration / word does not exist"""

    def __init__(self, entity: str, entity_id: str):
        self.entity = entity
        self.entity_id = entity_id
        super().__init__(f"{entity} not found: {entity_id}")


class PracticeRepository(ABC):
    """Persisted-entity store used by the practice session engine"""

    # ==================== LISTS ====================

    @abstractmethod
    def create_list(self, name: str, description: Optional[str] = None) -> PracticeList:
        pass

    @abstractmethod
    def delete_list(self, list_id: str) -> bool:
        pass

    @abstractmethod
    def get_list(self, list_id: str) -> PracticeList:
        pass

    @abstractmethod
    def get_lists(self) -> list[PracticeList]:
        pass

    # ==================== CONFIGURATIONS ====================

    @abstractmethod
    def add_configuration(
        self,
        list_id: str,
        phoneme_symbol: str,
        position: PhonemePosition,
        level: PhonemeLevel,
        phoneme_name: str = "",
        language: PhonemeLanguage = PhonemeLanguage.ENGLISH
    ) -> Configuration:
        pass

    @abstractmethod
    def remove_configuration(self, configuration_id: str) -> bool:
        pass

    @abstractmethod
    def get_configuration(self, configuration_id: str) -> Configuration:
        pass

    @abstractmethod
    def get_configurations(self, list_id: str) -> list[Configuration]:
        pass

    # ==================== WORDS ====================

    @abstractmethod
    def add_word(
        self,
        configuration_id: str,
        word: str,
        phoneme_index: int,
        position: Optional[PhonemePosition] = None
    ) -> PracticeWord:
        pass

    @abstractmethod
    def remove_word(self, configuration_id: str, word_id: str) -> bool:
        pass

    @abstractmethod
    def set_selected_words(
        self,
        configuration_id: str,
        words: Iterable[PracticeWord]
    ) -> Configuration:
        pass

    # ==================== SESSIONS ====================

    @abstractmethod
    def save_session(
        self,
        list_id: str,
        summary: SessionSummary,
        date: Optional[datetime] = None
    ) -> SessionRecord:
        pass

    @abstractmethod
    def get_sessions(self, list_id: str) -> list[SessionRecord]:
        pass


class InMemoryPracticeRepository(PracticeRepository):
    """Process-local store; contents live as long as the instance."""

    def __init__(self):
        self._lists: dict[str, PracticeList] = {}
        # configuration id -> owning list id
        self._configuration_index: dict[str, str] = {}

    # ==================== LISTS ====================

    def create_list(self, name: str, description: Optional[str] = None) -> PracticeList:
        practice_list = PracticeList(name=name, description=description)
        self._lists[practice_list.id] = practice_list
        logger.debug(f"Created practice list {practice_list.id} ({name})")
        return practice_list

    def delete_list(self, list_id: str) -> bool:
        practice_list = self._lists.pop(list_id, None)
        if practice_list is None:
            return False
        for config in practice_list.configurations:
            self._configuration_index.pop(config.id, None)
        logger.debug(
            f"Deleted practice list {list_id} with {len(practice_list.configurations)} "
            f"configurations and {len(practice_list.sessions)} sessions"
        )
        return True

    def get_list(self, list_id: str) -> PracticeList:
        practice_list = self._lists.get(list_id)
        if practice_list is None:
            raise EntityNotFoundError("PracticeList", list_id)
        return practice_list

    def get_lists(self) -> list[PracticeList]:
        """Most recently practiced first; never-practiced lists last, newest first."""
        practiced = [pl for pl in self._lists.values() if pl.last_practiced_at is not None]
        unpracticed = [pl for pl in self._lists.values() if pl.last_practiced_at is None]
        practiced.sort(key=lambda pl: pl.last_practiced_at, reverse=True)
        unpracticed.sort(key=lambda pl: pl.created_at, reverse=True)
        return practiced + unpracticed

    # ==================== CONFIGURATIONS ====================

    def add_configuration(
        self,
        list_id: str,
        phoneme_symbol: str,
        position: PhonemePosition,
        level: PhonemeLevel,
        phoneme_name: str = "",
        language: PhonemeLanguage = PhonemeLanguage.ENGLISH
    ) -> Configuration:
        practice_list = self.get_list(list_id)
        config = Configuration(
            list_id=list_id,
            phoneme_symbol=phoneme_symbol,
            phoneme_name=phoneme_name,
            language=language,
            position=position,
            level=level
        )
        practice_list.configurations.append(config)
        self._configuration_index[config.id] = list_id
        logger.debug(f"Added configuration {config.summary} to list {list_id}")
        return config

    def remove_configuration(self, configuration_id: str) -> bool:
        list_id = self._configuration_index.pop(configuration_id, None)
        if list_id is None:
            return False
        practice_list = self._lists[list_id]
        practice_list.configurations = [
            c for c in practice_list.configurations if c.id != configuration_id
        ]
        return True

    def get_configuration(self, configuration_id: str) -> Configuration:
        list_id = self._configuration_index.get(configuration_id)
        if list_id is None:
            raise EntityNotFoundError("Configuration", configuration_id)
        for config in self._lists[list_id].configurations:
            if config.id == configuration_id:
                return config
        raise EntityNotFoundError("Configuration", configuration_id)

    def get_configurations(self, list_id: str) -> list[Configuration]:
        return self.get_list(list_id).configuration_array

    # ==================== WORDS ====================

    def add_word(
        self,
        configuration_id: str,
        word: str,
        phoneme_index: int,
        position: Optional[PhonemePosition] = None
    ) -> PracticeWord:
        config = self.get_configuration(configuration_id)
        practice_word = PracticeWord(
            word=word,
            phoneme_index=phoneme_index,
            position=position or config.position
        )
        config.words.append(practice_word)
        return practice_word

    def remove_word(self, configuration_id: str, word_id: str) -> bool:
        config = self.get_configuration(configuration_id)
        before = len(config.words)
        config.words = [w for w in config.words if w.id != word_id]
        return len(config.words) < before

    def set_selected_words(
        self,
        configuration_id: str,
        words: Iterable[PracticeWord]
    ) -> Configuration:
        """Replace the configuration's selection with the given words."""
        config = self.get_configuration(configuration_id)
        config.words = [w.model_copy(update={"is_selected": True}) for w in words]
        logger.debug(f"Configuration {configuration_id} now has {len(config.words)} words")
        return config

    # ==================== SESSIONS ====================

    def save_session(
        self,
        list_id: str,
        summary: SessionSummary,
        date: Optional[datetime] = None
    ) -> SessionRecord:
        practice_list = self.get_list(list_id)
        record = SessionRecord(
            list_id=list_id,
            date=date or datetime.utcnow(),
            total_words=summary.total,
            correct_count=summary.correct,
            incorrect_count=summary.incorrect,
            skipped_count=summary.skipped,
            configuration_results=tuple(
                ConfigurationResult(
                    configuration_id=b.configuration_id,
                    phoneme_symbol=b.phoneme_symbol,
                    total_words=b.total,
                    correct_count=b.correct
                )
                for b in summary.configuration_breakdowns
            )
        )
        practice_list.sessions.append(record)
        practice_list.last_practiced_at = record.date
        logger.info(
            f"Saved session {record.id} for list {list_id}: "
            f"{record.correct_count}/{record.total_words} correct"
        )
        return record

    def get_sessions(self, list_id: str) -> list[SessionRecord]:
        return self.get_list(list_id).session_array


# Singleton instance
practice_store = InMemoryPracticeRepository()
