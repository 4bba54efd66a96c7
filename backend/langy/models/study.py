from __future__ import annotations

from pydantic import BaseModel, Field

from langy.models.card import Card, Direction


class StudySession(BaseModel):
    cards: list[Card]
    current_card_index: int = Field(default=0, ge=0)
    mode: Direction


class AdvanceRequest(BaseModel):
    session: StudySession


class AdvanceResult(BaseModel):
    completed: bool
    session: StudySession | None = None
