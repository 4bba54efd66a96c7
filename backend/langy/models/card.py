from __future__ import annotations

from datetime import datetime
from enum import Enum

from pydantic import BaseModel, Field, field_validator

DEFAULT_EASE_FACTOR = 2.5
MIN_EASE_FACTOR = 1.3


class Direction(str, Enum):
    FRONT_TO_BACK = "front-to-back"
    BACK_TO_FRONT = "back-to-front"

    def flipped(self) -> Direction:
        if self is Direction.FRONT_TO_BACK:
            return Direction.BACK_TO_FRONT
        return Direction.FRONT_TO_BACK


class Card(BaseModel):
    id: str
    owner_id: str
    front: str                            # Portuguese
    back: str                             # English
    review_count: int = 0
    correct_count: int = 0                # reviews with quality >= 3
    ease_factor: float = DEFAULT_EASE_FACTOR
    interval: int = 0                     # days until next review
    repetitions: int = 0                  # consecutive correct recalls
    last_reviewed: datetime | None = None
    next_review_due: datetime | None = None  # None = due immediately
    revision: int = 0                     # bumped on every persisted write
    created_at: str
    updated_at: str


class CardList(BaseModel):
    items: list[Card]
    total: int


class CardCreate(BaseModel):
    front: str
    back: str

    @field_validator("front", "back")
    @classmethod
    def _not_blank(cls, value: str) -> str:
        value = value.strip()
        if not value:
            raise ValueError("front and back text are required")
        return value


class ReviewRequest(BaseModel):
    # Shape errors (missing id, wrong JSON types) are 422 from FastAPI;
    # a missing answer or out-of-range quality is InvalidArgument (400).
    id: str = Field(min_length=1)
    quality: int | None = Field(default=None, strict=True)   # 0-5, no coercion
    correct: bool | None = Field(default=None, strict=True)  # used only when quality is omitted


class CardStats(BaseModel):
    new: int
    learning: int = Field(alias="learn")
    due: int
    learned: int

    model_config = {"populate_by_name": True}


class StudyStatistics(BaseModel):
    total_cards: int
    cards_reviewed: int
    total_reviews: int
    correct_reviews: int
    accuracy_rate: float  # percent, one decimal
    due_in_7_days: int
