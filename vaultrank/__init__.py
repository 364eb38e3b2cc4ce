"""
Vault swipe ranker — preference learning and ranking engine

Single entry point for the package:
- models/: RankingConfig, Candidate, InteractionEvent, VaultedItem, PreferenceProfile, RankedCandidate
- stages/: preferences (swipe, vault, merge), ranking (cold start, warm), orchestrator
- computed_params: derived read-only parameters

Everything is a pure, synchronous function over caller-supplied snapshots.
"""

from .computed_params import compute_parameters
from .models import (
    DEFAULT_CONFIG,
    Candidate,
    Decision,
    InteractionEvent,
    MediaType,
    PreferenceEntry,
    PreferenceProfile,
    RankedCandidate,
    RankingConfig,
    RankReason,
    VaultedItem,
    resolve_config,
)
from .stages import (
    compute_preferences,
    compute_vault_preferences,
    get_cold_start_batch,
    get_ranked_batch,
    get_warm_batch,
    merge_many,
    merge_preferences,
)

__all__ = [
    "Candidate",
    "DEFAULT_CONFIG",
    "Decision",
    "InteractionEvent",
    "MediaType",
    "PreferenceEntry",
    "PreferenceProfile",
    "RankReason",
    "RankedCandidate",
    "RankingConfig",
    "VaultedItem",
    "compute_parameters",
    "compute_preferences",
    "compute_vault_preferences",
    "get_cold_start_batch",
    "get_ranked_batch",
    "get_warm_batch",
    "merge_many",
    "merge_preferences",
    "resolve_config",
]
