"""
Pydantic Models Module
Contains data models for all entities in the application.
"""
from speech_practice.models.phoneme import (
    Phoneme, PhonemeCategory, PhonemeLanguage, PhonemePosition, PhonemeLevel, PhonemeSubcategory
)
from speech_practice.models.practice import (
    PracticeWord, Configuration, ConfigurationResult, SessionRecord, PracticeList, ProgressTrend
)
from speech_practice.models.practice_plan import PracticePlan

__all__ = [
    "Phoneme", "PhonemeCategory", "PhonemeLanguage", "PhonemePosition", "PhonemeLevel", "PhonemeSubcategory",
    "PracticeWord", "Configuration", "ConfigurationResult", "SessionRecord", "PracticeList", "ProgressTrend",
    "PracticePlan"
]
