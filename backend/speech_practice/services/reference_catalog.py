"""
Reference Catalog
Static phoneme reference data and the curated practice word lists.

Data is read once from the JSON files in the package `data/` directory
(or `settings.CATALOG_DATA_DIR` when set).
"""
import json
import logging
from pathlib import Path
from typing import Optional

from speech_practice.config import settings
from speech_practice.models.phoneme import (
    Phoneme,
    PhonemeCategory,
    PhonemeLanguage,
    PhonemePosition,
    PhonemeSubcategory
)
from speech_practice.models.practice import PracticeWord


logger = logging.getLogger(__name__)

DEFAULT_DATA_DIR = Path(__file__).resolve().parent.parent / "data"


class ReferenceCatalog:
    """Read-only phoneme catalog and word-list lookup"""

    def __init__(self, data_dir: Optional[str | Path] = None):
        self.data_dir = Path(data_dir or settings.CATALOG_DATA_DIR or DEFAULT_DATA_DIR)
        self._phonemes: list[Phoneme] = []
        self._words: dict[str, dict[str, list[tuple[str, int]]]] = {}
        self._placeholders: dict[str, list[tuple[str, int]]] = {}
        self._loaded = False

    def _load(self) -> None:
        """Load phonemes and word lists from JSON files."""
        if self._loaded:
            return

        with open(self.data_dir / "phonemes.json", "r", encoding="utf-8") as f:
            data = json.load(f)
            self._phonemes = [Phoneme(**entry) for entry in data.get("phonemes", [])]

        with open(self.data_dir / "practice_words.json", "r", encoding="utf-8") as f:
            data = json.load(f)
            self._placeholders = {
                position: [(text, index) for text, index in entries]
                for position, entries in data.get("placeholders", {}).items()
            }
            self._words = {
                symbol: {
                    position: [(text, index) for text, index in entries]
                    for position, entries in by_position.items()
                }
                for symbol, by_position in data.get("words", {}).items()
            }

        self._loaded = True
        logger.debug(
            f"Loaded {len(self._phonemes)} phonemes and word lists for "
            f"{len(self._words)} symbols from {self.data_dir}"
        )

    # ==================== PHONEMES ====================

    def all_phonemes(self) -> list[Phoneme]:
        self._load()
        return list(self._phonemes)

    @property
    def default_language(self) -> PhonemeLanguage:
        return PhonemeLanguage(settings.DEFAULT_LANGUAGE)

    def find_phoneme(
        self,
        symbol: str,
        language: Optional[PhonemeLanguage] = None
    ) -> Optional[Phoneme]:
        """Look up a phoneme; without a language the configured default is used."""
        self._load()
        language = language or self.default_language
        for phoneme in self._phonemes:
            if phoneme.symbol == symbol and phoneme.language == language:
                return phoneme
        return None

    def phonemes_for_category(
        self,
        category: PhonemeCategory,
        language: Optional[PhonemeLanguage] = None
    ) -> list[Phoneme]:
        self._load()
        return [
            p for p in self._phonemes
            if p.category == category and (language is None or p.language == language)
        ]

    def subcategories(self, category: PhonemeCategory) -> list[PhonemeSubcategory]:
        """Phonemes of a category grouped by subcategory, sorted by name."""
        phonemes = self.phonemes_for_category(category)
        names = sorted({p.subcategory for p in phonemes})
        return [
            PhonemeSubcategory(name=name, items=[p for p in phonemes if p.subcategory == name])
            for name in names
        ]

    # ==================== WORDS ====================

    def has_curated_words(self, symbol: str) -> bool:
        self._load()
        return symbol in self._words

    def words_for(self, symbol: str, position: PhonemePosition) -> list[PracticeWord]:
        """
        Practice words for a phoneme symbol at one position.

        Symbols without a curated list get the generic placeholder entries
        for that position. Every call returns new PracticeWord instances.
        """
        self._load()
        entries = self._words.get(symbol, {}).get(position.value)
        if entries is None:
            entries = self._placeholders.get(position.value, [])
        return [
            PracticeWord(word=text, phoneme_index=index, position=position)
            for text, index in entries
        ]

    # ==================== DATA CHECKS ====================

    def validate(self) -> list[str]:
        """
        Check the data files for consistency.

        Returns:
            Problems found, empty when the data is consistent
        """
        self._load()
        problems = []

        seen = set()
        for phoneme in self._phonemes:
            if phoneme.key in seen:
                problems.append(f"Duplicate phoneme {phoneme.symbol} ({phoneme.language.value})")
            seen.add(phoneme.key)

        positions = {p.value for p in PhonemePosition}
        for position in positions - set(self._placeholders):
            problems.append(f"No placeholder words for position {position}")

        symbols = {p.symbol for p in self._phonemes}
        for symbol, by_position in self._words.items():
            if symbol not in symbols:
                problems.append(f"Word list for unknown phoneme {symbol}")
            for position, entries in by_position.items():
                if position not in positions:
                    problems.append(f"{symbol}: unknown position '{position}'")
                    continue
                for text, index in entries:
                    if not 0 <= index < len(text):
                        problems.append(f"{symbol} {position}: index {index} outside '{text}'")

        if problems:
            logger.warning(f"Catalog data in {self.data_dir} has {len(problems)} problems")
        return problems


# Singleton instance
reference_catalog = ReferenceCatalog()
