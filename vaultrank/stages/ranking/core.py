"""
Warm ranking: score every candidate against the profile, sort, then explore.

Sort key is final score (desc), then popularity (desc), then input order.
Submodules used: scoring, diversity, exploration.
"""

import logging
import random
from typing import Any, Dict, List, Optional, Sequence, Union

from ...models.candidate import Candidate, ensure_candidates
from ...models.config import RankingConfig, resolve_config
from ...models.preference import PreferenceProfile
from ...models.ranking import RankedCandidate, RankReason
from .diversity import recent_window
from .exploration import apply_exploration
from .scoring import score_candidate

logger = logging.getLogger(__name__)


def rank_candidates(
    candidates: List[Union[Dict, Candidate]],
    profile: PreferenceProfile,
    recently_seen: Optional[Sequence[Any]] = None,
    config: Optional[RankingConfig] = None,
    rng: Optional[random.Random] = None,
) -> List[RankedCandidate]:
    """Rank the whole pool; every candidate is scored before anything is cut."""
    config = resolve_config(config)
    pool = ensure_candidates(candidates)
    if not pool:
        return []
    window = recent_window(recently_seen, pool, config)

    # 1) Score each candidate
    scored = [
        (idx, c, score_candidate(c, profile, window, config))
        for idx, c in enumerate(pool)
    ]

    # 2) Sort: score desc, popularity desc, input order
    scored.sort(key=lambda x: (-x[2].final_score, -x[1].popularity_score, x[0]))

    ranked = [
        RankedCandidate(
            candidate=c,
            score=breakdown.final_score,
            reason=RankReason.PREFERENCE,
            matched_tags=breakdown.matched_tags,
        )
        for _, c, breakdown in scored
    ]

    # 3) Epsilon-greedy exploration
    ranked = apply_exploration(ranked, config.epsilon_explore, rng)

    logger.debug(
        "[warm] RANKED pool=%s window=%s explored=%s",
        len(ranked),
        len(window),
        sum(1 for r in ranked if r.reason == RankReason.EXPLORE),
    )
    return ranked


def get_warm_batch(
    candidates: List[Union[Dict, Candidate]],
    profile: PreferenceProfile,
    recently_seen: Optional[Sequence[Any]] = None,
    batch_size: Optional[int] = None,
    config: Optional[RankingConfig] = None,
    rng: Optional[random.Random] = None,
) -> List[RankedCandidate]:
    """
    Personalized batch. Output covers the whole pool unless batch_size is
    given, in which case the ranked list is truncated after ranking.
    """
    ranked = rank_candidates(candidates, profile, recently_seen, config, rng)
    if batch_size is not None:
        return ranked[: max(0, batch_size)]
    return ranked
