"""
Study & spaced repetition router.

Endpoints:
  GET  /study/            — shuffled session over the owner's due cards
  POST /study/review      — submit a quality rating, run SM-2, persist
  POST /study/advance     — move a session to its next card
  GET  /study/statistics  — review totals, accuracy, cards due this week
"""
from __future__ import annotations

import logging

import aiosqlite
from fastapi import APIRouter, Depends

from langy.config import settings
from langy.db.sqlite import get_card, get_db, list_cards, replace_card
from langy.errors import CardNotFound
from langy.models.card import Card, ReviewRequest, StudyStatistics
from langy.models.study import AdvanceRequest, AdvanceResult, StudySession
from langy.routers.deps import get_owner_id
from langy.services.scheduler import (
    advance_session,
    build_study_session,
    compute_study_statistics,
    quality_from_answer,
    record_review,
    select_due_cards,
)

logger = logging.getLogger(__name__)
router = APIRouter()


@router.get("/", response_model=StudySession)
async def start_session(
    owner_id: str = Depends(get_owner_id),
    db: aiosqlite.Connection = Depends(get_db),
) -> StudySession:
    """Raises EmptyCollection (404) when the owner has no cards at all."""
    cards = await list_cards(db, owner_id)
    return build_study_session(select_due_cards(cards), limit=settings.session_size)


@router.post("/review", response_model=Card)
async def review_card(
    body: ReviewRequest,
    owner_id: str = Depends(get_owner_id),
    db: aiosqlite.Connection = Depends(get_db),
) -> Card:
    """Record one review. A conflicting concurrent review yields 409 and changes nothing."""
    quality = quality_from_answer(body.quality, body.correct)

    card = await get_card(db, owner_id, body.id)
    if not card:
        raise CardNotFound(body.id)

    updated = await replace_card(db, record_review(card, quality))
    logger.info(
        "Reviewed card %s: quality=%d interval=%d ef=%.2f",
        updated.id, quality, updated.interval, updated.ease_factor,
    )
    return updated


@router.post("/advance", response_model=AdvanceResult)
async def advance(body: AdvanceRequest) -> AdvanceResult:
    session = advance_session(body.session)
    return AdvanceResult(completed=session is None, session=session)


@router.get("/statistics", response_model=StudyStatistics)
async def study_statistics(
    owner_id: str = Depends(get_owner_id),
    db: aiosqlite.Connection = Depends(get_db),
) -> StudyStatistics:
    return compute_study_statistics(await list_cards(db, owner_id))
