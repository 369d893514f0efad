"""
Session API Endpoints
Start a practice session, step through its items and save the results.
"""
import logging
import random

from fastapi import APIRouter, Depends, HTTPException, status

from speech_practice.core.dependencies import get_active_session, get_session_service
from speech_practice.core.session_tracker import PracticeSessionTracker, SessionState
from speech_practice.schemas.session import (
    RecordResponseRequest,
    SessionResultsResponse,
    SessionStateResponse,
    StartSessionRequest
)
from speech_practice.services.practice_session_service import PracticeSessionService
from speech_practice.services.practice_store import EntityNotFoundError


logger = logging.getLogger(__name__)

router = APIRouter()


@router.post(
    "/sessions",
    response_model=SessionStateResponse,
    status_code=status.HTTP_201_CREATED,
    summary="Start a practice session",
    description="Assembles the session items from the list's configurations. Locked phonemes are skipped."
)
async def start_session(
    request: StartSessionRequest,
    service: PracticeSessionService = Depends(get_session_service)
) -> SessionStateResponse:
    rng = random.Random(request.seed) if request.seed is not None else None
    try:
        result = service.start_session(
            request.list_id,
            configuration_ids=request.configuration_ids,
            max_words_per_configuration=request.max_words_per_configuration,
            rng=rng
        )
    except EntityNotFoundError as e:
        raise HTTPException(status_code=404, detail=str(e))

    if not result.success:
        raise HTTPException(status_code=400, detail=result.error)

    return SessionStateResponse.from_tracker(
        result.data["tracker"],
        locked_configuration_ids=result.data.get("locked_configuration_ids")
    )


@router.get(
    "/sessions/{session_id}",
    response_model=SessionStateResponse,
    summary="Get session state"
)
async def get_session(
    tracker: PracticeSessionTracker = Depends(get_active_session)
) -> SessionStateResponse:
    return SessionStateResponse.from_tracker(tracker)


@router.post(
    "/sessions/{session_id}/responses",
    response_model=SessionStateResponse,
    summary="Record a response",
    description="Records correct / incorrect / skipped for the current item. Ignored unless the session is in progress."
)
async def record_response(
    request: RecordResponseRequest,
    tracker: PracticeSessionTracker = Depends(get_active_session),
    service: PracticeSessionService = Depends(get_session_service)
) -> SessionStateResponse:
    service.record_response(tracker.session_id, request.correct)
    return SessionStateResponse.from_tracker(tracker)


@router.post(
    "/sessions/{session_id}/advance",
    response_model=SessionStateResponse,
    summary="Advance to the next item",
    description="Moves to the next item; after the last item the session is completed."
)
async def advance(
    tracker: PracticeSessionTracker = Depends(get_active_session),
    service: PracticeSessionService = Depends(get_session_service)
) -> SessionStateResponse:
    service.advance(tracker.session_id)
    return SessionStateResponse.from_tracker(tracker)


@router.post(
    "/sessions/{session_id}/finish",
    response_model=SessionStateResponse,
    summary="End the session early",
    description="Completes the session now; unanswered items count as skipped."
)
async def finish(
    tracker: PracticeSessionTracker = Depends(get_active_session),
    service: PracticeSessionService = Depends(get_session_service)
) -> SessionStateResponse:
    service.finish(tracker.session_id)
    return SessionStateResponse.from_tracker(tracker)


@router.post(
    "/sessions/{session_id}/complete",
    response_model=SessionResultsResponse,
    summary="Save the session results",
    description=(
        "Aggregates the responses and saves the session record once. "
        "Calling again after a failed save retries it."
    )
)
async def complete(
    tracker: PracticeSessionTracker = Depends(get_active_session),
    service: PracticeSessionService = Depends(get_session_service)
) -> SessionResultsResponse:
    if tracker.state != SessionState.COMPLETED:
        raise HTTPException(
            status_code=status.HTTP_409_CONFLICT,
            detail=f"Session is {tracker.state.value}, not completed"
        )

    result = service.complete_session(tracker.session_id)
    summary = result.data.get("summary")
    if summary is None:
        raise HTTPException(status_code=400, detail=result.error)

    response = SessionResultsResponse.from_summary(tracker, summary)
    if not result.success:
        logger.error(f"Session {tracker.session_id} results not saved: {result.error}")
        raise HTTPException(
            status_code=status.HTTP_503_SERVICE_UNAVAILABLE,
            detail={"message": result.error, "results": response.model_dump(mode="json")}
        )
    return response


@router.get(
    "/sessions/{session_id}/results",
    response_model=SessionResultsResponse,
    summary="Get session results",
    description="Results of a completed session, saved or not."
)
async def get_results(
    tracker: PracticeSessionTracker = Depends(get_active_session)
) -> SessionResultsResponse:
    if tracker.summary is None:
        raise HTTPException(
            status_code=status.HTTP_409_CONFLICT,
            detail="Session results are not available yet"
        )
    return SessionResultsResponse.from_summary(tracker, tracker.summary)
