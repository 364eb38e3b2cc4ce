"""
Running sum/count accumulation shared by the swipe and vault aggregators.

Every key keeps the sum of the contributions that touched it and how many
did; finalize() turns each sum into a mean so weights stay bounded no matter
how often a key was seen.
"""

from typing import Dict, Iterable, List, Optional

from ...models.preference import PreferenceEntry


class PreferenceAccumulator:
    """Folds signed contributions into per-key means for tags and types."""

    def __init__(self) -> None:
        self._tag_sums: Dict[str, float] = {}
        self._tag_counts: Dict[str, int] = {}
        self._type_sums: Dict[str, float] = {}
        self._type_counts: Dict[str, int] = {}

    def add(self, tags: Iterable[str], media_type: Optional[str], contribution: float) -> None:
        """Add one event's contribution to each of its distinct tags and to its type."""
        for tag in _distinct(tags):
            self._tag_sums[tag] = self._tag_sums.get(tag, 0.0) + contribution
            self._tag_counts[tag] = self._tag_counts.get(tag, 0) + 1
        if media_type:
            self._type_sums[media_type] = self._type_sums.get(media_type, 0.0) + contribution
            self._type_counts[media_type] = self._type_counts.get(media_type, 0) + 1

    def tag_preferences(self) -> Dict[str, PreferenceEntry]:
        return _means(self._tag_sums, self._tag_counts)

    def type_preferences(self) -> Dict[str, PreferenceEntry]:
        return _means(self._type_sums, self._type_counts)


def _distinct(tags: Iterable[str]) -> List[str]:
    seen = set()
    result = []
    for tag in tags:
        if tag not in seen:
            seen.add(tag)
            result.append(tag)
    return result


def _means(sums: Dict[str, float], counts: Dict[str, int]) -> Dict[str, PreferenceEntry]:
    return {
        key: PreferenceEntry(weight=sums[key] / counts[key], count=counts[key])
        for key in sums
    }
