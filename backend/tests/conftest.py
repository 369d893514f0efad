"""
Pytest configuration and fixtures for tests.
"""
import random
from datetime import datetime, timedelta

import pytest

from speech_practice.models.phoneme import (
    Phoneme,
    PhonemeCategory,
    PhonemeLanguage,
    PhonemeLevel,
    PhonemePosition
)
from speech_practice.models.practice import Configuration, PracticeWord, SessionRecord
from speech_practice.core.session_tracker import SessionRegistry
from speech_practice.services.capability_gate import CapabilityGate
from speech_practice.services.practice_session_service import PracticeSessionService
from speech_practice.services.practice_store import InMemoryPracticeRepository
from speech_practice.services.reference_catalog import ReferenceCatalog
from speech_practice.services.word_pool import WordPoolBuilder


@pytest.fixture
def rng():
    """Seeded random source for reproducible shuffles."""
    return random.Random(42)


@pytest.fixture
def phoneme_p():
    return Phoneme(
        symbol="/p/",
        name="P",
        example="pat",
        category=PhonemeCategory.CONSONANTS,
        subcategory="Stops"
    )


@pytest.fixture
def phoneme_s():
    return Phoneme(
        symbol="/s/",
        name="S",
        example="sit",
        category=PhonemeCategory.CONSONANTS,
        subcategory="Fricatives"
    )


def make_words(texts, position=PhonemePosition.INITIAL, phoneme_index=0):
    return [PracticeWord(word=t, phoneme_index=phoneme_index, position=position) for t in texts]


def make_configuration(symbol, texts, position=PhonemePosition.INITIAL, level=PhonemeLevel.WORD):
    return Configuration(
        phoneme_symbol=symbol,
        position=position,
        level=level,
        words=make_words(texts, position)
    )


def make_record(correct, total, date, list_id="list-1"):
    return SessionRecord(
        list_id=list_id,
        date=date,
        total_words=total,
        correct_count=correct,
        incorrect_count=total - correct
    )


@pytest.fixture
def config_p():
    """/p/ initial with three words."""
    return make_configuration("/p/", ["pat", "pen", "pie"])


@pytest.fixture
def config_s():
    """/s/ initial with eight words, more than the default cap."""
    return make_configuration(
        "/s/", ["sun", "sock", "soap", "sit", "seal", "sand", "sip", "sea"]
    )


@pytest.fixture
def sample_sessions():
    """Two saved sessions, newest first: 8/10 then 5/10."""
    now = datetime(2024, 5, 2, 10, 0, 0)
    return [
        make_record(8, 10, now),
        make_record(5, 10, now - timedelta(days=1)),
    ]


@pytest.fixture
def catalog():
    """Catalog over the packaged data files."""
    return ReferenceCatalog()


@pytest.fixture
def pool(catalog):
    return WordPoolBuilder(catalog)


@pytest.fixture
def free_gate():
    """Gate with premium locked: only p, t, k are available."""
    return CapabilityGate(free_phonemes=["p", "t", "k"], subscription_status=lambda: False)


@pytest.fixture
def premium_gate():
    return CapabilityGate(free_phonemes=["p", "t", "k"], subscription_status=lambda: True)


@pytest.fixture
def store():
    return InMemoryPracticeRepository()


@pytest.fixture
def service(store, free_gate):
    return PracticeSessionService(store=store, gate=free_gate, registry=SessionRegistry())


@pytest.fixture
def populated_list(store):
    """A list with /p/ initial (3 words) and /s/ initial (2 words)."""
    practice_list = store.create_list("Stops and S", "Weekly homework")

    config_p = store.add_configuration(
        practice_list.id, "/p/", PhonemePosition.INITIAL, PhonemeLevel.WORD, phoneme_name="P"
    )
    store.set_selected_words(config_p.id, make_words(["pat", "pen", "pie"]))

    config_s = store.add_configuration(
        practice_list.id, "/s/", PhonemePosition.INITIAL, PhonemeLevel.PHRASE, phoneme_name="S"
    )
    store.set_selected_words(config_s.id, make_words(["sun", "sock"]))

    return practice_list


@pytest.fixture
def word_factory():
    return make_words


@pytest.fixture
def configuration_factory():
    return make_configuration


@pytest.fixture
def record_factory():
    return make_record
