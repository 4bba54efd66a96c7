from langy.models.card import (
    Card,
    CardCreate,
    CardList,
    CardStats,
    Direction,
    ReviewRequest,
    StudyStatistics,
)
from langy.models.study import AdvanceRequest, AdvanceResult, StudySession

__all__ = [
    "AdvanceRequest",
    "AdvanceResult",
    "Card",
    "CardCreate",
    "CardList",
    "CardStats",
    "Direction",
    "ReviewRequest",
    "StudySession",
    "StudyStatistics",
]
