"""
FastAPI Dependencies
Providers for the services used by the endpoints.

Endpoints never import the singletons directly; tests swap any of them
through `app.dependency_overrides`.
"""
import logging

from fastapi import Depends, HTTPException, status

from speech_practice.services.capability_gate import CapabilityGate, capability_gate
from speech_practice.services.practice_session_service import (
    PracticeSessionService,
    practice_session_service
)
from speech_practice.services.practice_store import PracticeRepository, practice_store
from speech_practice.services.reference_catalog import ReferenceCatalog, reference_catalog
from speech_practice.services.word_pool import WordPoolBuilder, word_pool
from speech_practice.core.session_tracker import PracticeSessionTracker


logger = logging.getLogger(__name__)


def get_store() -> PracticeRepository:
    return practice_store


def get_capability_gate() -> CapabilityGate:
    return capability_gate


def get_catalog() -> ReferenceCatalog:
    return reference_catalog


def get_word_pool() -> WordPoolBuilder:
    return word_pool


def get_session_service() -> PracticeSessionService:
    return practice_session_service


def get_active_session(
    session_id: str,
    service: PracticeSessionService = Depends(get_session_service)
) -> PracticeSessionTracker:
    """
    Resolve the running session from the path.

    Raises 404 if no session with that id is active.
    """
    tracker = service.get_session(session_id)
    if tracker is None:
        logger.info(f"Session lookup failed: {session_id}")
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail=f"Session not found: {session_id}"
        )
    return tracker
