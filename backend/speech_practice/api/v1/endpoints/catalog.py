"""
Catalog API Endpoints
Phoneme reference data, practice levels and candidate word pools.
"""
from typing import Optional

from fastapi import APIRouter, Depends, HTTPException, Query

from speech_practice.core.dependencies import get_capability_gate, get_catalog, get_word_pool
from speech_practice.models.phoneme import PhonemeCategory, PhonemeLanguage, PhonemeLevel, PhonemePosition
from speech_practice.schemas.catalog import (
    PhonemeListResponse,
    PhonemeResponse,
    PhonemeSubcategoryResponse,
    PracticeLevelResponse,
    PracticeWordResponse,
    WordPoolResponse
)
from speech_practice.services.capability_gate import CapabilityGate
from speech_practice.services.reference_catalog import ReferenceCatalog
from speech_practice.services.word_pool import WordPoolBuilder


router = APIRouter()


@router.get(
    "/phonemes",
    response_model=PhonemeListResponse,
    summary="List phonemes",
    description="Phoneme catalog with lock state, optionally filtered by category and language."
)
async def list_phonemes(
    category: Optional[PhonemeCategory] = Query(None, description="Filter by category"),
    language: Optional[PhonemeLanguage] = Query(None, description="Filter by language"),
    catalog: ReferenceCatalog = Depends(get_catalog),
    gate: CapabilityGate = Depends(get_capability_gate)
) -> PhonemeListResponse:
    premium_unlocked = gate.is_premium_unlocked()

    def to_response(phoneme) -> PhonemeResponse:
        return PhonemeResponse.from_phoneme(
            phoneme,
            is_unlocked=gate.is_unlocked(phoneme.symbol, premium_unlocked),
            has_curated_words=catalog.has_curated_words(phoneme.symbol)
        )

    if category is not None:
        phonemes = catalog.phonemes_for_category(category, language)
        subcategories = [
            PhonemeSubcategoryResponse(
                name=group.name,
                phonemes=[
                    to_response(p) for p in group.items
                    if language is None or p.language == language
                ]
            )
            for group in catalog.subcategories(category)
        ]
        subcategories = [group for group in subcategories if group.phonemes]
    else:
        phonemes = [
            p for p in catalog.all_phonemes()
            if language is None or p.language == language
        ]
        subcategories = []

    return PhonemeListResponse(
        total=len(phonemes),
        premium_unlocked=premium_unlocked,
        phonemes=[to_response(p) for p in phonemes],
        subcategories=subcategories
    )


@router.get(
    "/phonemes/words",
    response_model=WordPoolResponse,
    summary="Get candidate words",
    description="Practice words for a phoneme at the requested positions (all three if none)."
)
async def get_word_pool_for_phoneme(
    symbol: str = Query(..., description="IPA symbol, e.g. /p/"),
    language: Optional[PhonemeLanguage] = Query(None, description="Phoneme language (configured default if omitted)"),
    positions: list[PhonemePosition] = Query([], description="Positions to include"),
    level: PhonemeLevel = Query(PhonemeLevel.WORD, description="Level used for the display text"),
    catalog: ReferenceCatalog = Depends(get_catalog),
    pool: WordPoolBuilder = Depends(get_word_pool),
    gate: CapabilityGate = Depends(get_capability_gate)
) -> WordPoolResponse:
    phoneme = catalog.find_phoneme(symbol, language)
    if phoneme is None:
        raise HTTPException(status_code=404, detail=f"Phoneme not found: {symbol}")

    words = pool.get_words(phoneme, positions)
    requested = set(positions) or set(PhonemePosition.ordered())

    return WordPoolResponse(
        symbol=phoneme.symbol,
        language=phoneme.language,
        positions=[p for p in PhonemePosition.ordered() if p in requested],
        level=level,
        is_unlocked=gate.is_unlocked(phoneme.symbol),
        words=[PracticeWordResponse.from_word(w, display=w.for_level(level)) for w in words]
    )


@router.get(
    "/levels",
    response_model=list[PracticeLevelResponse],
    summary="List practice levels",
    description="Practice levels from most reduced (isolation) to most naturalistic (sentence)."
)
async def list_levels() -> list[PracticeLevelResponse]:
    return [
        PracticeLevelResponse(
            level=level,
            display_name=level.display_name,
            description=level.description,
            examples=level.examples
        )
        for level in PhonemeLevel
    ]
