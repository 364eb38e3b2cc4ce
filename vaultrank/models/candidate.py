"""
Candidate model — a swipeable media card supplied by the catalog.

Used by cold start, the scorer and the warm ranker instead of raw dicts.
Built from store dicts via Candidate.model_validate(d) or ensure_candidates().
"""

import logging
import math
from enum import Enum
from typing import Any, Dict, List, Union

from pydantic import AliasChoices, BaseModel, ConfigDict, Field, ValidationError, field_validator

from ..utils.tags import parse_tags

logger = logging.getLogger(__name__)


class MediaType(str, Enum):
    """Closed set of card types shown in the swipe deck."""

    BOOK = "book"
    MOVIE = "movie"
    SHOW = "show"
    PODCAST = "podcast"
    GAME = "game"
    MUSIC = "music"
    VIDEO = "video"
    DOCUMENTARY = "documentary"
    STANDUP = "standup"
    SPORTS = "sports"
    ESSAY = "essay"
    PERSON = "person"


# Catalog names used by older seed data.
MEDIA_TYPE_ALIASES: Dict[str, MediaType] = {
    "tv": MediaType.SHOW,
    "youtube": MediaType.VIDEO,
    "public_figure": MediaType.PERSON,
}


def normalize_media_type(value: str) -> str:
    """Map catalog aliases onto MediaType values; other strings pass through."""
    alias = MEDIA_TYPE_ALIASES.get(value)
    return alias.value if alias is not None else value


class Candidate(BaseModel):
    """
    A card that can be ranked and shown.

    tags: normalized topic labels from the tagger (treated as opaque keys).
    popularity_score: catalog popularity in [0, 1].
    """

    model_config = ConfigDict(extra="allow", populate_by_name=True, coerce_numbers_to_str=True)

    id: str
    title: str = ""
    type: MediaType
    tags: List[str] = Field(default_factory=list, validation_alias=AliasChoices("tags", "tags_json"))
    popularity_score: float = 0.0

    @field_validator("type", mode="before")
    @classmethod
    def _normalize_type(cls, v: Any) -> Any:
        return normalize_media_type(v) if isinstance(v, str) else v

    @field_validator("tags", mode="before")
    @classmethod
    def _parse_tags(cls, v: Any) -> List[str]:
        return parse_tags(v)

    @field_validator("popularity_score", mode="before")
    @classmethod
    def _clamp_popularity(cls, v: Any) -> float:
        try:
            p = float(v)
        except (TypeError, ValueError):
            return 0.0
        if math.isnan(p):
            return 0.0
        return max(0.0, min(1.0, p))


def ensure_candidates(
    items: List[Union[Dict[str, Any], "Candidate"]],
) -> List["Candidate"]:
    """
    Convert list of dicts or Candidates to Candidate models for the pipeline.

    Records without an id or with an unknown type can never be shown, so they
    are dropped with a warning rather than failing the whole batch.
    """
    candidates: List[Candidate] = []
    skipped = 0
    for c in items:
        if isinstance(c, Candidate):
            candidates.append(c)
            continue
        try:
            candidates.append(Candidate.model_validate(c))
        except ValidationError:
            skipped += 1
    if skipped:
        logger.warning(
            "[malformed_candidate] CANDIDATE_SKIPPED skipped=%s total=%s",
            skipped,
            len(items),
        )
    return candidates
