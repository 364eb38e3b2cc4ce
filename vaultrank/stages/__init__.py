"""Pipeline stages: preference learning, ranking (cold and warm), batch orchestration."""

from .orchestrator import get_ranked_batch, is_cold_start
from .preferences import (
    compute_preferences,
    compute_vault_preferences,
    merge_many,
    merge_preferences,
)
from .ranking import get_cold_start_batch, get_warm_batch, rank_candidates

__all__ = [
    "compute_preferences",
    "compute_vault_preferences",
    "get_cold_start_batch",
    "get_ranked_batch",
    "get_warm_batch",
    "is_cold_start",
    "merge_many",
    "merge_preferences",
    "rank_candidates",
]
