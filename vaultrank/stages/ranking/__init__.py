"""
Ranking: cold-start stratified batches and warm preference ranking.

Public API: get_cold_start_batch, get_warm_batch, rank_candidates, score_candidate.
- core: warm orchestration (rank_candidates, get_warm_batch).
- Submodules: cold_start, scoring, diversity, exploration.
"""

from .cold_start import get_cold_start_batch
from .core import get_warm_batch, rank_candidates
from .diversity import diversity_penalty, recent_window
from .exploration import apply_exploration
from .scoring import score_candidate

__all__ = [
    "apply_exploration",
    "diversity_penalty",
    "get_cold_start_batch",
    "get_warm_batch",
    "rank_candidates",
    "recent_window",
    "score_candidate",
]
