"""
Batch orchestrator — picks cold start or warm ranking from history volume.

The main entry point is get_ranked_batch. It owns no state: every call
works only on the snapshots it is handed.
"""

import logging
import random
from datetime import datetime
from typing import Any, Dict, List, Optional, Sequence, Union

from ..models.candidate import Candidate
from ..models.config import RankingConfig, resolve_config
from ..models.interaction import InteractionEvent
from ..models.preference import PreferenceProfile
from ..models.ranking import RankedCandidate
from ..models.vault import VaultedItem
from .preferences import compute_preferences, compute_vault_preferences, merge_preferences
from .ranking import get_cold_start_batch, get_warm_batch

logger = logging.getLogger(__name__)


def is_cold_start(event_count: int, config: RankingConfig) -> bool:
    """True while there are fewer explicit events than the cold-start threshold."""
    return event_count < config.cold_start_threshold


def _build_profile(
    events: List[Union[Dict, InteractionEvent]],
    vault_items: Optional[List[Union[Dict, VaultedItem]]],
    config: RankingConfig,
    now: Optional[datetime],
) -> PreferenceProfile:
    """Swipe profile, merged with the vault profile when vault items are supplied."""
    profile = compute_preferences(events, config, now)
    if vault_items is None:
        return profile
    vault_profile = compute_vault_preferences(vault_items, config, now)
    return merge_preferences(
        profile,
        vault_profile,
        config.merge_weight_swipe,
        config.merge_weight_vault,
    )


def get_ranked_batch(
    candidates: List[Union[Dict, Candidate]],
    events: List[Union[Dict, InteractionEvent]],
    recently_seen: Optional[Sequence[Any]] = None,
    config: Optional[RankingConfig] = None,
    vault_items: Optional[List[Union[Dict, VaultedItem]]] = None,
    batch_size: Optional[int] = None,
    rng: Optional[random.Random] = None,
    now: Optional[datetime] = None,
) -> List[RankedCandidate]:
    """
    Rank a candidate pool for one session.

    Fewer than cold_start_threshold events: stratified cold-start batch.
    Otherwise: profile from explicit events (merged with vault_items when
    given) and warm ranking. The cold/warm decision only counts explicit events.
    """
    config = resolve_config(config)

    if is_cold_start(len(events), config):
        logger.info(
            "[ranker] COLD_START events=%s threshold=%s",
            len(events),
            config.cold_start_threshold,
        )
        return get_cold_start_batch(candidates, batch_size, config)

    profile = _build_profile(events, vault_items, config, now)
    logger.info(
        "[ranker] WARM_START events=%s profile_interactions=%s vault=%s",
        len(events),
        profile.total_interactions,
        vault_items is not None,
    )
    return get_warm_batch(candidates, profile, recently_seen, batch_size, config, rng)
