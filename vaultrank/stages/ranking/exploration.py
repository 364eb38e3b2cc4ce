"""
Epsilon-greedy exploration over a ranked list.

For each slot, with probability epsilon a random lower-ranked candidate is
pulled forward into that slot and marked as explore. Everything else keeps
its relative order, so non-explore items stay sorted by score.
"""

import random
from typing import List, Optional, Sequence

from ...models.ranking import RankedCandidate, RankReason


def apply_exploration(
    ranked: Sequence[RankedCandidate],
    epsilon: float,
    rng: Optional[random.Random] = None,
) -> List[RankedCandidate]:
    """Return a new list with exploration applied; epsilon=0 returns the input order."""
    result = list(ranked)
    if epsilon <= 0 or len(result) < 2:
        return result
    rng = rng if rng is not None else random.Random()

    for i in range(len(result) - 1):
        if rng.random() >= epsilon:
            continue
        j = i + 1 + rng.randrange(len(result) - i - 1)
        picked = result.pop(j)
        result.insert(i, picked.model_copy(update={"reason": RankReason.EXPLORE}))
    return result
