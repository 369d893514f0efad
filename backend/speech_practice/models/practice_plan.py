"""
Practice Plan Model
Mutable selection state for practicing a single phoneme.
"""
from pydantic import BaseModel, Field, field_validator

from speech_practice.models.phoneme import Phoneme, PhonemeLevel, PhonemePosition
from speech_practice.models.practice import PracticeWord


class PracticePlan(BaseModel):
    """
    Chosen positions, level and words for one phoneme.

    At least one position is always selected: a plan created without
    positions starts on the initial position, and removing the last
    selected position puts it back.
    """
    phoneme: Phoneme
    selected_positions: set[PhonemePosition] = Field(
        default_factory=lambda: {PhonemePosition.INITIAL}
    )
    level: PhonemeLevel = PhonemeLevel.WORD
    words: list[PracticeWord] = Field(default_factory=list)

    @field_validator("selected_positions")
    @classmethod
    def _at_least_one_position(cls, value: set[PhonemePosition]) -> set[PhonemePosition]:
        return value or {PhonemePosition.INITIAL}

    # ==================== POSITIONS ====================

    def toggle_position(self, position: PhonemePosition) -> None:
        if position in self.selected_positions:
            self.selected_positions.discard(position)
            if not self.selected_positions:
                self.selected_positions.add(position)
        else:
            self.selected_positions.add(position)

    def ordered_positions(self) -> list[PhonemePosition]:
        return [p for p in PhonemePosition.ordered() if p in self.selected_positions]

    # ==================== WORDS ====================

    def load_words(self, pool) -> list[PracticeWord]:
        """Replace the word list with the pool's words for the selected positions."""
        self.words = pool.get_words(self.phoneme, set(self.selected_positions))
        return self.words

    def toggle_all(self, selected: bool) -> None:
        for word in self.words:
            word.is_selected = selected

    def toggle_word(self, index: int) -> None:
        if 0 <= index < len(self.words):
            self.words[index].is_selected = not self.words[index].is_selected

    @property
    def has_selected_words(self) -> bool:
        return any(w.is_selected for w in self.words)

    @property
    def selected_word_count(self) -> int:
        return sum(1 for w in self.words if w.is_selected)

    @property
    def all_selected(self) -> bool:
        return bool(self.words) and all(w.is_selected for w in self.words)

    def words_for_session(self) -> list[PracticeWord]:
        """Only the words currently included."""
        return [w for w in self.words if w.is_selected]
