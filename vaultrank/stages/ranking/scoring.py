"""
Per-candidate warm scoring against a preference profile.

final = mean tag weight + type weight + popularity_weight * popularity - diversity penalty
"""

from typing import Sequence

from ...models.candidate import Candidate
from ...models.config import RankingConfig
from ...models.preference import PreferenceProfile
from ...models.ranking import ScoreBreakdown
from .diversity import diversity_penalty


def score_candidate(
    candidate: Candidate,
    profile: PreferenceProfile,
    window: Sequence[Candidate],
    config: RankingConfig,
) -> ScoreBreakdown:
    """
    Score one candidate.

    Untracked tags count as 0 in the tag mean; a candidate with no tags has a
    tag score of 0. matched_tags lists tags with a positive learned weight.
    """
    tags = list(dict.fromkeys(candidate.tags))
    weights = [profile.tag_weight(t) for t in tags]
    tag_score = sum(weights) / len(weights) if weights else 0.0
    matched = [t for t, w in zip(tags, weights) if w > 0]

    type_score = profile.type_weight(candidate.type.value)
    pop_score = config.popularity_weight * candidate.popularity_score
    penalty = diversity_penalty(candidate, window, config)

    return ScoreBreakdown(
        tag_score=tag_score,
        type_score=type_score,
        popularity_score=pop_score,
        diversity_penalty=penalty,
        final_score=tag_score + type_score + pop_score - penalty,
        matched_tags=matched,
    )
