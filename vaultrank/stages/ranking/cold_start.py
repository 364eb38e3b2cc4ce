"""
Cold-start batch: stratified, popularity-sorted sampling across types.

Used while there is too little history to trust a learned profile. No
preference profile is consulted.
"""

import logging
from typing import Dict, List, Optional, Union

from ...models.candidate import Candidate, ensure_candidates
from ...models.config import RankingConfig, resolve_config
from ...models.ranking import RankedCandidate, RankReason

logger = logging.getLogger(__name__)


def _group_by_type(pool: List[Candidate]) -> List[List[Candidate]]:
    """Per-type lists sorted by popularity (desc), groups ordered by their top item."""
    by_type: Dict[str, List[Candidate]] = {}
    for c in pool:
        by_type.setdefault(c.type.value, []).append(c)
    groups = [
        sorted(items, key=lambda c: c.popularity_score, reverse=True)
        for items in by_type.values()
    ]
    groups.sort(key=lambda g: g[0].popularity_score, reverse=True)
    return groups


def get_cold_start_batch(
    candidates: List[Union[Dict, Candidate]],
    batch_size: Optional[int] = None,
    config: Optional[RankingConfig] = None,
) -> List[RankedCandidate]:
    """
    Interleave per-type popularity lists round-robin, truncated at batch_size.

    batch_size defaults to config.default_batch_size. Every item is marked
    trending and scored by its popularity. An empty pool yields an empty batch.
    """
    config = resolve_config(config)
    size = config.default_batch_size if batch_size is None else batch_size
    pool = ensure_candidates(candidates)
    if size <= 0 or not pool:
        return []

    groups = _group_by_type(pool)
    selected: List[Candidate] = []
    depth = 0
    while len(selected) < size:
        took = False
        for group in groups:
            if depth < len(group):
                selected.append(group[depth])
                took = True
                if len(selected) >= size:
                    break
        if not took:
            break
        depth += 1

    logger.debug(
        "[cold_start] BATCH size=%s types=%s pool=%s",
        len(selected),
        len(groups),
        len(pool),
    )
    return [
        RankedCandidate(candidate=c, score=c.popularity_score, reason=RankReason.TRENDING)
        for c in selected
    ]
