"""
Preference learning: swipe aggregation, vault aggregation, profile merge.

Public API: compute_preferences, compute_vault_preferences, merge_preferences, merge_many.
"""

from .merge import merge_many, merge_preferences
from .swipe import compute_preferences, event_contribution
from .vault import compute_vault_preferences

__all__ = [
    "compute_preferences",
    "compute_vault_preferences",
    "event_contribution",
    "merge_many",
    "merge_preferences",
]
