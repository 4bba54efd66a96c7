"""
Card router.

Endpoints:
  POST   /cards/          — create a card
  GET    /cards/          — list the owner's cards
  GET    /cards/learned   — cards past their first two correct recalls
  GET    /cards/stats     — new / learn / due / learned counts
  GET    /cards/{id}      — single card
  DELETE /cards/{id}      — delete card
"""
from __future__ import annotations

import logging

import aiosqlite
from fastapi import APIRouter, Depends

from langy.db.sqlite import (
    create_card,
    delete_card,
    get_card,
    get_db,
    list_cards,
    list_learned_cards,
)
from langy.errors import CardNotFound
from langy.models.card import Card, CardCreate, CardList, CardStats
from langy.routers.deps import get_owner_id
from langy.services.scheduler import classify_cards

logger = logging.getLogger(__name__)
router = APIRouter()


@router.post("/", response_model=Card, status_code=201)
async def add_card(
    body: CardCreate,
    owner_id: str = Depends(get_owner_id),
    db: aiosqlite.Connection = Depends(get_db),
) -> Card:
    card = await create_card(db, owner_id, body)
    logger.info("Created card %s for %s", card.id, owner_id)
    return card


@router.get("/", response_model=CardList)
async def list_all(
    owner_id: str = Depends(get_owner_id),
    db: aiosqlite.Connection = Depends(get_db),
) -> CardList:
    items = await list_cards(db, owner_id)
    return CardList(items=items, total=len(items))


@router.get("/learned", response_model=CardList)
async def list_learned(
    owner_id: str = Depends(get_owner_id),
    db: aiosqlite.Connection = Depends(get_db),
) -> CardList:
    items = await list_learned_cards(db, owner_id)
    return CardList(items=items, total=len(items))


@router.get("/stats", response_model=CardStats)
async def card_stats(
    owner_id: str = Depends(get_owner_id),
    db: aiosqlite.Connection = Depends(get_db),
) -> CardStats:
    """Bucket counts for the dashboard. `due` is also counted in `learned`."""
    return classify_cards(await list_cards(db, owner_id))


@router.get("/{card_id}", response_model=Card)
async def get_one(
    card_id: str,
    owner_id: str = Depends(get_owner_id),
    db: aiosqlite.Connection = Depends(get_db),
) -> Card:
    card = await get_card(db, owner_id, card_id)
    if not card:
        raise CardNotFound(card_id)
    return card


@router.delete("/{card_id}", status_code=204)
async def remove_card(
    card_id: str,
    owner_id: str = Depends(get_owner_id),
    db: aiosqlite.Connection = Depends(get_db),
) -> None:
    if not await delete_card(db, owner_id, card_id):
        raise CardNotFound(card_id)
    logger.info("Deleted card %s for %s", card_id, owner_id)
