"""
Preference profile — signed, averaged weights over topic labels and media types.

Produced by the swipe and vault aggregators, combined by the merger and read
by the scorer. weight is the mean of per-event contributions for a key and
count the number of events that touched it.
"""

from datetime import datetime
from typing import Dict, List, Optional, Tuple

from pydantic import BaseModel, Field


class PreferenceEntry(BaseModel):
    """Learned preference for one key (tag or type)."""

    weight: float = 0.0
    count: int = 0


class PreferenceProfile(BaseModel):
    """A user's preference model; empty mappings and zero interactions when there is no data."""

    tag_preferences: Dict[str, PreferenceEntry] = Field(default_factory=dict)
    type_preferences: Dict[str, PreferenceEntry] = Field(default_factory=dict)
    total_interactions: int = 0
    last_updated: Optional[datetime] = None

    def is_empty(self) -> bool:
        return self.total_interactions == 0 and not self.tag_preferences and not self.type_preferences

    def tag_weight(self, tag: str) -> float:
        """Learned weight for a tag, 0 when untracked."""
        entry = self.tag_preferences.get(tag)
        return entry.weight if entry is not None else 0.0

    def type_weight(self, media_type: str) -> float:
        """Learned weight for a media type, 0 when untracked."""
        entry = self.type_preferences.get(media_type)
        return entry.weight if entry is not None else 0.0

    def top_tags(self, k: int = 5) -> List[Tuple[str, PreferenceEntry]]:
        """Strongest positively weighted tags, ties broken by tag name."""
        positive = [(t, e) for t, e in self.tag_preferences.items() if e.weight > 0]
        positive.sort(key=lambda x: (-x[1].weight, x[0]))
        return positive[:k]

    def bottom_tags(self, k: int = 5) -> List[Tuple[str, PreferenceEntry]]:
        """Most negatively weighted tags, ties broken by tag name."""
        negative = [(t, e) for t, e in self.tag_preferences.items() if e.weight < 0]
        negative.sort(key=lambda x: (x[1].weight, x[0]))
        return negative[:k]
