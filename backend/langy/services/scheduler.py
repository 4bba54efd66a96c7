"""
Spaced-repetition scheduler (SM-2).

Pure functions over Card records; nothing here touches storage.

  select_due_cards     — cards to study now, or every card if none are due
  build_study_session  — shuffled session with a random starting direction
  advance_session      — move to the next card, flipping the direction
  record_review        — apply one quality rating (0–5) to a card
  classify_cards       — new / learning / due / learned counts
  compute_study_statistics — review totals and accuracy
"""
from __future__ import annotations

import random
from datetime import datetime, timedelta, timezone

from langy.errors import EmptyCollection, InvalidArgument
from langy.models.card import (
    MIN_EASE_FACTOR,
    Card,
    CardStats,
    Direction,
    StudyStatistics,
)
from langy.models.study import StudySession

MIN_QUALITY = 0
MAX_QUALITY = 5
CORRECT_THRESHOLD = 3       # quality >= 3 counts as a correct recall
QUALITY_IF_CORRECT = 4      # used when only a correct/incorrect answer is given
QUALITY_IF_INCORRECT = 0


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


def _is_due(card: Card, now: datetime) -> bool:
    return card.next_review_due is None or card.next_review_due <= now


def validate_quality(quality: object) -> int:
    """Reject anything that is not an int in [0, 5]. Out-of-range values are never clamped."""
    if isinstance(quality, bool) or not isinstance(quality, int):
        raise InvalidArgument("Quality must be an integer between 0 and 5")
    if not MIN_QUALITY <= quality <= MAX_QUALITY:
        raise InvalidArgument("Quality must be between 0 and 5")
    return quality


def quality_from_answer(quality: int | None, correct: bool | None) -> int:
    """Resolve the quality of a review, falling back to the correct/incorrect flag."""
    if quality is not None:
        return validate_quality(quality)
    if correct is None:
        raise InvalidArgument("Either quality (0-5) or correct (true/false) is required")
    return QUALITY_IF_CORRECT if correct else QUALITY_IF_INCORRECT


def select_due_cards(cards: list[Card], now: datetime | None = None) -> list[Card]:
    """Cards never reviewed or past due; all cards when none are due."""
    now = now or _utcnow()
    due = [c for c in cards if _is_due(c, now)]
    return due if due else list(cards)


def build_study_session(
    cards: list[Card],
    rng: random.Random | None = None,
    limit: int = 0,
) -> StudySession:
    if not cards:
        raise EmptyCollection()
    rng = rng or random.Random()
    shuffled = list(cards)
    rng.shuffle(shuffled)
    if limit > 0:
        shuffled = shuffled[:limit]
    mode = rng.choice([Direction.FRONT_TO_BACK, Direction.BACK_TO_FRONT])
    return StudySession(cards=shuffled, current_card_index=0, mode=mode)


def advance_session(session: StudySession) -> StudySession | None:
    """
    Answer the current card and move on.

    Returns the next session state, or None once the last card is answered.
    The direction alternates card by card. A cursor past the last card is
    rejected with InvalidArgument.
    """
    if session.current_card_index >= len(session.cards):
        raise InvalidArgument("Session cursor is past the last card")
    next_index = session.current_card_index + 1
    if next_index >= len(session.cards):
        return None
    return session.model_copy(
        update={"current_card_index": next_index, "mode": session.mode.flipped()}
    )


def record_review(card: Card, quality: int, now: datetime | None = None) -> Card:
    """
    Apply one SM-2 review to a card and return the updated copy.

    The ease factor is updated first; for repetitions past the second the new
    interval is the previous interval times the new ease factor.
    """
    q = validate_quality(quality)
    now = now or _utcnow()
    correct = q >= CORRECT_THRESHOLD

    ef_delta = 0.1 - (5 - q) * (0.08 + (5 - q) * 0.02)
    ease_factor = max(MIN_EASE_FACTOR, card.ease_factor + ef_delta)

    if not correct:
        # Incorrect recall: reset streak and retry tomorrow
        repetitions = 0
        interval = 1
    else:
        repetitions = card.repetitions + 1
        if repetitions == 1:
            interval = 1
        elif repetitions == 2:
            interval = 6
        else:
            interval = round(card.interval * ease_factor)

    return card.model_copy(
        update={
            "review_count": card.review_count + 1,
            "correct_count": card.correct_count + (1 if correct else 0),
            "ease_factor": ease_factor,
            "interval": interval,
            "repetitions": repetitions,
            "last_reviewed": now,
            "next_review_due": now + timedelta(days=interval),
        }
    )


def classify_cards(cards: list[Card], now: datetime | None = None) -> CardStats:
    """
    Count cards per study bucket.

    `due` is a subset of `learned`: every learned card past its due time is
    counted in both.
    """
    now = now or _utcnow()
    new = learning = due = learned = 0
    for card in cards:
        if card.review_count == 0:
            new += 1
        elif card.repetitions <= 1:
            learning += 1
        else:
            learned += 1
            if card.next_review_due is not None and card.next_review_due <= now:
                due += 1
    return CardStats(new=new, learning=learning, due=due, learned=learned)


def compute_study_statistics(
    cards: list[Card], now: datetime | None = None
) -> StudyStatistics:
    now = now or _utcnow()
    week_ahead = now + timedelta(days=7)
    total_reviews = sum(c.review_count for c in cards)
    correct_reviews = sum(c.correct_count for c in cards)
    accuracy = (correct_reviews / total_reviews) * 100 if total_reviews else 0.0
    return StudyStatistics(
        total_cards=len(cards),
        cards_reviewed=sum(1 for c in cards if c.review_count > 0),
        total_reviews=total_reviews,
        correct_reviews=correct_reviews,
        accuracy_rate=round(accuracy, 1),
        due_in_7_days=sum(
            1
            for c in cards
            if c.next_review_due is not None and now < c.next_review_due <= week_ahead
        ),
    )
