"""
Practice List API Endpoints
Create and edit practice lists, their configurations and words, and read
their session history.
"""
import logging

from fastapi import APIRouter, Depends, HTTPException, status

from speech_practice.core.dependencies import (
    get_catalog,
    get_session_service,
    get_store,
    get_word_pool
)
from speech_practice.models.phoneme import PhonemePosition
from speech_practice.models.practice import PracticeWord
from speech_practice.models.practice_plan import PracticePlan
from speech_practice.schemas.practice_list import (
    AddConfigurationRequest,
    ConfigurationResponse,
    CreateListRequest,
    PracticeListDetailResponse,
    PracticeListsResponse,
    PracticeListSummaryResponse,
    SessionHistoryResponse,
    SessionRecordResponse,
    SetWordsRequest,
    TrendInfo,
    WordInput
)
from speech_practice.services.practice_session_service import PracticeSessionService
from speech_practice.services.practice_store import EntityNotFoundError, PracticeRepository
from speech_practice.services.reference_catalog import ReferenceCatalog
from speech_practice.services.word_pool import WordPoolBuilder


logger = logging.getLogger(__name__)

router = APIRouter()


def _not_found(error: EntityNotFoundError) -> HTTPException:
    return HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=str(error))


def _to_practice_word(word: WordInput, default_position) -> PracticeWord:
    return PracticeWord(
        word=word.word,
        phoneme_index=word.phoneme_index,
        position=word.position or default_position
    )


# ==================== LISTS ====================

@router.post(
    "/lists",
    response_model=PracticeListDetailResponse,
    status_code=status.HTTP_201_CREATED,
    summary="Create a practice list"
)
async def create_list(
    request: CreateListRequest,
    store: PracticeRepository = Depends(get_store)
) -> PracticeListDetailResponse:
    practice_list = store.create_list(request.name, request.description)
    logger.info(f"Created practice list {practice_list.id}")
    return PracticeListDetailResponse.from_list(practice_list)


@router.get(
    "/lists",
    response_model=PracticeListsResponse,
    summary="List practice lists",
    description="Most recently practiced first; lists never practiced come last, newest first."
)
async def get_lists(store: PracticeRepository = Depends(get_store)) -> PracticeListsResponse:
    lists = store.get_lists()
    return PracticeListsResponse(
        total=len(lists),
        lists=[PracticeListSummaryResponse.from_list(pl) for pl in lists]
    )


@router.get(
    "/lists/{list_id}",
    response_model=PracticeListDetailResponse,
    summary="Get a practice list"
)
async def get_list(
    list_id: str,
    store: PracticeRepository = Depends(get_store)
) -> PracticeListDetailResponse:
    try:
        return PracticeListDetailResponse.from_list(store.get_list(list_id))
    except EntityNotFoundError as e:
        raise _not_found(e)


@router.delete(
    "/lists/{list_id}",
    status_code=status.HTTP_204_NO_CONTENT,
    summary="Delete a practice list",
    description="Deletes the list together with its configurations and session history."
)
async def delete_list(
    list_id: str,
    service: PracticeSessionService = Depends(get_session_service)
) -> None:
    if not service.discard_list(list_id):
        raise HTTPException(status_code=404, detail=f"PracticeList not found: {list_id}")


@router.get(
    "/lists/{list_id}/sessions",
    response_model=SessionHistoryResponse,
    summary="Get session history",
    description="Saved sessions of a list, newest first, with the progress trend."
)
async def get_session_history(
    list_id: str,
    store: PracticeRepository = Depends(get_store),
    service: PracticeSessionService = Depends(get_session_service)
) -> SessionHistoryResponse:
    try:
        sessions = store.get_sessions(list_id)
        trend = service.list_trend(list_id)
    except EntityNotFoundError as e:
        raise _not_found(e)

    return SessionHistoryResponse(
        list_id=list_id,
        trend=TrendInfo.from_trend(trend),
        sessions=[SessionRecordResponse.from_record(r) for r in sessions]
    )


# ==================== CONFIGURATIONS ====================

@router.post(
    "/lists/{list_id}/configurations",
    response_model=list[ConfigurationResponse],
    status_code=status.HTTP_201_CREATED,
    summary="Add a phoneme to a list",
    description="Creates one configuration per requested position."
)
async def add_configurations(
    list_id: str,
    request: AddConfigurationRequest,
    catalog: ReferenceCatalog = Depends(get_catalog),
    pool: WordPoolBuilder = Depends(get_word_pool),
    service: PracticeSessionService = Depends(get_session_service)
) -> list[ConfigurationResponse]:
    phoneme = catalog.find_phoneme(request.phoneme_symbol, request.language)
    if phoneme is None:
        raise HTTPException(
            status_code=404,
            detail=f"Phoneme not found: {request.phoneme_symbol}"
        )

    positions = set(request.positions)
    if not positions and request.words:
        positions = {w.position for w in request.words if w.position is not None}

    plan = PracticePlan(phoneme=phoneme, selected_positions=positions, level=request.level)
    if request.words is None:
        plan.load_words(pool)
    else:
        first_position = plan.ordered_positions()[0]
        plan.words = [_to_practice_word(w, first_position) for w in request.words]
        word_positions = {w.position for w in plan.words}
        unselected = [
            p for p in PhonemePosition.ordered()
            if p in word_positions and p not in plan.selected_positions
        ]
        empty = [p for p in plan.ordered_positions() if p not in word_positions]
        if unselected or empty:
            raise HTTPException(
                status_code=status.HTTP_400_BAD_REQUEST,
                detail={
                    "message": "Words do not match the selected positions",
                    "positions_without_words": [p.value for p in empty],
                    "word_positions_not_selected": [p.value for p in unselected]
                }
            )

    try:
        configurations = service.save_plan_to_list(list_id, plan)
    except EntityNotFoundError as e:
        raise _not_found(e)

    return [ConfigurationResponse.from_configuration(c) for c in configurations]


@router.delete(
    "/configurations/{configuration_id}",
    status_code=status.HTTP_204_NO_CONTENT,
    summary="Remove a configuration"
)
async def remove_configuration(
    configuration_id: str,
    store: PracticeRepository = Depends(get_store)
) -> None:
    if not store.remove_configuration(configuration_id):
        raise HTTPException(status_code=404, detail=f"Configuration not found: {configuration_id}")


@router.put(
    "/configurations/{configuration_id}/words",
    response_model=ConfigurationResponse,
    summary="Replace the words of a configuration"
)
async def set_configuration_words(
    configuration_id: str,
    request: SetWordsRequest,
    store: PracticeRepository = Depends(get_store)
) -> ConfigurationResponse:
    try:
        config = store.get_configuration(configuration_id)
        config = store.set_selected_words(
            configuration_id,
            [_to_practice_word(w, config.position) for w in request.words]
        )
    except EntityNotFoundError as e:
        raise _not_found(e)

    return ConfigurationResponse.from_configuration(config)
