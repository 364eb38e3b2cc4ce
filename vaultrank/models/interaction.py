"""
Interaction model — a single swipe decision on a candidate, with its snapshot.

Each event carries a denormalized copy of the candidate's type and topic
labels at swipe time so preference aggregation needs no live join.
Built from store dicts via InteractionEvent.model_validate(d) or ensure_events().
"""

import logging
import math
from datetime import datetime
from enum import Enum
from typing import Any, Dict, List, Optional, Union

from pydantic import AliasChoices, BaseModel, ConfigDict, Field, ValidationError, field_validator

from ..utils.tags import parse_tags
from .candidate import normalize_media_type

logger = logging.getLogger(__name__)


class Decision(str, Enum):
    """Swipe decisions a user can make on a card."""

    LIKE = "like"
    DISLIKE = "dislike"
    SKIP = "skip"
    SUPER_LIKE = "super_like"


class InteractionEvent(BaseModel):
    """
    A swipe on a candidate.

    decision is kept as the raw string so an unknown kind from an older client
    folds into a zero contribution instead of failing validation.
    media_type / media_tags: snapshot of the candidate at interaction time.
    """

    model_config = ConfigDict(extra="allow", populate_by_name=True, coerce_numbers_to_str=True)

    id: str = ""
    session_id: str = ""
    candidate_id: str = Field(default="", validation_alias=AliasChoices("candidate_id", "media_id"))
    decision: str = ""
    strength: float = 1.0
    timestamp: Optional[datetime] = Field(
        default=None, validation_alias=AliasChoices("timestamp", "created_at")
    )
    media_type: Optional[str] = None
    media_tags: List[str] = Field(
        default_factory=list,
        validation_alias=AliasChoices("media_tags", "media_tags_json"),
    )

    @field_validator("media_tags", mode="before")
    @classmethod
    def _parse_tags(cls, v: Any) -> List[str]:
        return parse_tags(v)

    @field_validator("media_type", mode="before")
    @classmethod
    def _normalize_type(cls, v: Any) -> Optional[str]:
        return normalize_media_type(v) if isinstance(v, str) and v else None

    @field_validator("strength", mode="before")
    @classmethod
    def _coerce_strength(cls, v: Any) -> float:
        if v is None:
            return 1.0
        try:
            return float(v)
        except (TypeError, ValueError):
            return math.nan

    @field_validator("decision", mode="before")
    @classmethod
    def _coerce_decision(cls, v: Any) -> str:
        if isinstance(v, Decision):
            return v.value
        return v if isinstance(v, str) else ""


def ensure_events(
    items: List[Union[Dict, "InteractionEvent"]],
) -> List["InteractionEvent"]:
    """
    Convert list of dicts or InteractionEvents to InteractionEvent models.

    A record that fails validation becomes an empty event (no snapshot) so it
    still counts as an interaction but touches no preference keys.
    """
    events: List[InteractionEvent] = []
    for e in items:
        if isinstance(e, InteractionEvent):
            events.append(e)
            continue
        try:
            events.append(InteractionEvent.model_validate(e))
        except ValidationError as exc:
            logger.warning(
                "[malformed_event] EVENT_VALIDATION_FAILED errors=%s", exc.error_count()
            )
            events.append(InteractionEvent())
    return events
