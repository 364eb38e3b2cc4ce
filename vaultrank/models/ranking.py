"""
Ranking output — a candidate with its score and the reason it was placed.
"""

from enum import Enum
from typing import List

from pydantic import BaseModel, Field

from .candidate import Candidate


class RankReason(str, Enum):
    """Why a candidate sits where it does. Attribution only; never re-ranked on."""

    TRENDING = "trending"
    PREFERENCE = "preference"
    EXPLORE = "explore"


class RankedCandidate(BaseModel):
    """A candidate with its final score and placement reason."""

    candidate: Candidate
    score: float
    reason: RankReason
    matched_tags: List[str] = Field(default_factory=list)


class ScoreBreakdown(BaseModel):
    """Components of one candidate's warm score."""

    tag_score: float = 0.0
    type_score: float = 0.0
    popularity_score: float = 0.0
    diversity_penalty: float = 0.0
    final_score: float = 0.0
    matched_tags: List[str] = Field(default_factory=list)
