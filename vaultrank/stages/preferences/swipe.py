"""
Swipe preference aggregation — explicit decisions into a signed profile.

contribution = decision_weight[decision] * strength (optionally recency-decayed),
folded into per-tag and per-type means.
"""

import logging
import math
from datetime import datetime, timezone
from typing import Dict, List, Optional, Union

from ...models.config import RankingConfig, resolve_config
from ...models.interaction import InteractionEvent, ensure_events
from ...models.preference import PreferenceProfile
from ...utils.decay import recency_decay
from .accumulator import PreferenceAccumulator

logger = logging.getLogger(__name__)


def event_contribution(
    event: InteractionEvent,
    config: RankingConfig,
    now: Optional[datetime] = None,
) -> Optional[float]:
    """
    Signed contribution of one swipe, or None when the event is malformed.

    Malformed means an unknown decision or a negative / non-finite strength.
    Strengths above 1 are clamped to 1.
    """
    weight = config.decision_weight(event.decision)
    if weight is None:
        return None
    strength = event.strength
    if not math.isfinite(strength) or strength < 0:
        return None
    strength = min(strength, 1.0)
    contribution = weight * strength
    if config.decay_half_life_days is not None and now is not None:
        contribution *= recency_decay(event.timestamp, now, config.decay_half_life_days)
    return contribution


def compute_preferences(
    events: List[Union[Dict, InteractionEvent]],
    config: Optional[RankingConfig] = None,
    now: Optional[datetime] = None,
) -> PreferenceProfile:
    """
    Fold swipe events into a preference profile.

    Each event adds its contribution to every topic label of its snapshot and
    to its snapshot type; weights are the mean contribution per key.
    total_interactions is len(events): malformed events still count but
    touch no keys. Inputs are not mutated.
    """
    config = resolve_config(config)
    now = now or datetime.now(timezone.utc)
    typed = ensure_events(events)

    acc = PreferenceAccumulator()
    malformed = 0
    for event in typed:
        contribution = event_contribution(event, config, now)
        if contribution is None:
            malformed += 1
            continue
        acc.add(event.media_tags, event.media_type, contribution)

    if malformed:
        logger.warning(
            "[malformed_event] ZERO_CONTRIBUTION malformed=%s total_events=%s",
            malformed,
            len(typed),
        )

    return PreferenceProfile(
        tag_preferences=acc.tag_preferences(),
        type_preferences=acc.type_preferences(),
        total_interactions=len(typed),
        last_updated=now,
    )
