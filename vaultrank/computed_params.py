"""
Computed Parameters

Derives read-only values from a RankingConfig (and optionally a history
size) for display next to the tunable parameters. Nothing here feeds back
into ranking.
"""

from typing import Any, Dict, Optional

from .models.config import RankingConfig, resolve_config
from .models.interaction import Decision


def compute_parameters(
    config: Optional[RankingConfig] = None,
    event_count: Optional[int] = None,
) -> Dict[str, Any]:
    """
    Compute derived parameters from a config.

    Args:
        config: Ranking config (defaults when None)
        event_count: Optional number of explicit swipe events in the user's history

    Returns:
        Dictionary of computed parameter values
    """
    config = resolve_config(config)
    computed: Dict[str, Any] = {}

    # =========================================================================
    # Normalized Merge Weights
    # =========================================================================
    merge_total = config.merge_weight_swipe + config.merge_weight_vault
    if merge_total > 0:
        computed["normalized_merge_weight_swipe"] = config.merge_weight_swipe / merge_total
        computed["normalized_merge_weight_vault"] = config.merge_weight_vault / merge_total
    else:
        computed["normalized_merge_weight_swipe"] = 0.5
        computed["normalized_merge_weight_vault"] = 0.5
    computed["merge_is_convex"] = abs(merge_total - 1.0) <= 1e-9

    # =========================================================================
    # Decision Weight Ratios
    # =========================================================================
    weights = config.decision_weights
    like = weights[Decision.LIKE]
    computed["super_like_to_like_ratio"] = weights[Decision.SUPER_LIKE] / like
    computed["dislike_to_like_ratio"] = weights[Decision.DISLIKE] / like
    computed["skip_is_neutral"] = weights[Decision.SKIP] == 0
    computed["vault_to_like_ratio"] = config.vault_implicit_weight / like

    # =========================================================================
    # Recency Decay
    # =========================================================================
    computed["decay_enabled"] = config.decay_half_life_days is not None
    computed["decay_half_life_days"] = config.decay_half_life_days

    # =========================================================================
    # Diversity / Exploration
    # =========================================================================
    computed["max_type_penalty"] = config.diversity_penalty if config.diversity_window > 0 else 0.0
    computed["exploration_enabled"] = config.epsilon_explore > 0
    computed["expected_explore_per_batch"] = config.epsilon_explore * config.default_batch_size

    # =========================================================================
    # History (requires event_count)
    # =========================================================================
    if event_count is not None:
        computed["total_events"] = event_count
        computed["is_cold_start"] = event_count < config.cold_start_threshold
        computed["events_until_warm"] = max(0, config.cold_start_threshold - event_count)
    else:
        computed["total_events"] = 0
        computed["is_cold_start"] = True
        computed["events_until_warm"] = config.cold_start_threshold

    return computed
