"""
Utilities Module
Contains the pure practice-session algorithms.
"""
from speech_practice.utils.word_formatter import format_word
from speech_practice.utils.session_assembler import assemble, configuration_for_word, level_for_word
from speech_practice.utils.results_aggregator import (
    aggregate, compute_trend, live_accuracy, stored_percentage, SessionSummary, ConfigurationBreakdown
)

__all__ = [
    "format_word",
    "assemble", "configuration_for_word", "level_for_word",
    "aggregate", "compute_trend", "live_accuracy", "stored_percentage",
    "SessionSummary", "ConfigurationBreakdown"
]
