"""
Vault preference aggregation — saved items read as implicit likes.

Same accumulation as swipes, but every item contributes the fixed
vault_implicit_weight. Each item is one unit of evidence regardless of how
many tags it carries. Vault saves are never recency-decayed: decay_half_life_days
only applies to swipes, and an item's timestamp is carried for the store only.
"""

from datetime import datetime, timezone
from typing import Dict, List, Optional, Union

from ...models.config import RankingConfig, resolve_config
from ...models.preference import PreferenceProfile
from ...models.vault import VaultedItem, ensure_vault_items
from .accumulator import PreferenceAccumulator


def compute_vault_preferences(
    items: List[Union[Dict, VaultedItem]],
    config: Optional[RankingConfig] = None,
    now: Optional[datetime] = None,
) -> PreferenceProfile:
    """Fold vaulted items into a positive-only preference profile."""
    config = resolve_config(config)
    typed = ensure_vault_items(items)

    acc = PreferenceAccumulator()
    for item in typed:
        acc.add(item.tags, item.type, config.vault_implicit_weight)

    return PreferenceProfile(
        tag_preferences=acc.tag_preferences(),
        type_preferences=acc.type_preferences(),
        total_interactions=len(typed),
        last_updated=now or datetime.now(timezone.utc),
    )
