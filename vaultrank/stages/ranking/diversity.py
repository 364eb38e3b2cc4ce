"""
Diversity penalty against recently shown cards.

Looks at the newest diversity_window entries of the recently-seen list and
penalizes candidates whose type (and, more lightly, whose tags) keep coming up.
"""

import logging
from typing import Any, Dict, List, Optional, Sequence

from pydantic import ValidationError

from ...models.candidate import Candidate
from ...models.config import RankingConfig
from ...models.ranking import RankedCandidate

logger = logging.getLogger(__name__)


def recent_window(
    recently_seen: Optional[Sequence[Any]],
    pool: Sequence[Candidate],
    config: RankingConfig,
) -> List[Candidate]:
    """
    Resolve the newest diversity_window recently-seen entries to candidates.

    Entries may be ids, Candidates, RankedCandidates from a previous batch or
    candidate dicts. Ids, and dicts carrying an id, are looked up in the pool
    first. Ids not in the pool and unparsable dicts are ignored.
    """
    if not recently_seen or config.diversity_window <= 0:
        return []
    by_id: Dict[str, Candidate] = {c.id: c for c in pool}
    window: List[Candidate] = []
    unresolved = 0
    for entry in recently_seen[: config.diversity_window]:
        if isinstance(entry, RankedCandidate):
            entry = entry.candidate
        if isinstance(entry, Candidate):
            window.append(entry)
            continue
        if isinstance(entry, str):
            key = entry
        elif isinstance(entry, dict) and entry.get("id") is not None:
            key = str(entry["id"])
        else:
            key = None
        found = by_id.get(key) if key is not None else None
        if found is not None:
            window.append(found)
        elif isinstance(entry, str):
            unresolved += 1
        else:
            try:
                window.append(Candidate.model_validate(entry))
            except ValidationError:
                unresolved += 1
    if unresolved:
        logger.debug("[diversity] RECENT_UNRESOLVED unresolved=%s", unresolved)
    return window


def diversity_penalty(
    candidate: Candidate,
    window: Sequence[Candidate],
    config: RankingConfig,
) -> float:
    """
    Non-negative amount to subtract from a candidate's score.

    Type: diversity_penalty scaled by the share of the window taken by the
    candidate's type. Tags: tag_repeat_penalty for each of the candidate's
    tags seen at least tag_repeat_min_count times in the window.
    """
    if not window:
        return 0.0
    same_type = sum(1 for m in window if m.type == candidate.type)
    penalty = config.diversity_penalty * same_type / config.diversity_window

    min_count = max(1, config.tag_repeat_min_count)
    tag_counts: Dict[str, int] = {}
    for m in window:
        for tag in set(m.tags):
            tag_counts[tag] = tag_counts.get(tag, 0) + 1
    repeated = sum(1 for tag in set(candidate.tags) if tag_counts.get(tag, 0) >= min_count)
    return penalty + config.tag_repeat_penalty * repeated
