"""Data models for the preference and ranking engine."""

from .candidate import Candidate, MediaType, ensure_candidates, normalize_media_type
from .config import DEFAULT_CONFIG, RankingConfig, resolve_config
from .interaction import Decision, InteractionEvent, ensure_events
from .preference import PreferenceEntry, PreferenceProfile
from .ranking import RankedCandidate, RankReason, ScoreBreakdown
from .vault import VaultedItem, ensure_vault_items

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
    "ScoreBreakdown",
    "VaultedItem",
    "ensure_candidates",
    "ensure_events",
    "ensure_vault_items",
    "normalize_media_type",
    "resolve_config",
]
