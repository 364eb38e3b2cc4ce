"""
Profile merge — convex blend of two independently built profiles.

Shared keys: weight = weight_a * a.weight + weight_b * b.weight, counts summed.
Keys in only one profile are copied unchanged; missing corroboration is
neither penalized nor boosted.
"""

from typing import Dict, Sequence

from ...models.preference import PreferenceEntry, PreferenceProfile


def _merge_entries(
    a: Dict[str, PreferenceEntry],
    b: Dict[str, PreferenceEntry],
    weight_a: float,
    weight_b: float,
) -> Dict[str, PreferenceEntry]:
    merged: Dict[str, PreferenceEntry] = {}
    for key, entry in a.items():
        other = b.get(key)
        if other is None:
            merged[key] = entry.model_copy()
        else:
            merged[key] = PreferenceEntry(
                weight=weight_a * entry.weight + weight_b * other.weight,
                count=entry.count + other.count,
            )
    for key, entry in b.items():
        if key not in merged:
            merged[key] = entry.model_copy()
    return merged


def merge_preferences(
    a: PreferenceProfile,
    b: PreferenceProfile,
    weight_a: float = 0.7,
    weight_b: float = 0.3,
) -> PreferenceProfile:
    """
    Merge profile a (e.g. swipes) with profile b (e.g. vault).

    Deterministic; not associative across differing coefficients. Use
    merge_many() to fold more than two sources left to right.
    """
    stamps = [p.last_updated for p in (a, b) if p.last_updated is not None]
    return PreferenceProfile(
        tag_preferences=_merge_entries(a.tag_preferences, b.tag_preferences, weight_a, weight_b),
        type_preferences=_merge_entries(a.type_preferences, b.type_preferences, weight_a, weight_b),
        total_interactions=a.total_interactions + b.total_interactions,
        last_updated=max(stamps) if stamps else None,
    )


def merge_many(
    profiles: Sequence[PreferenceProfile],
    weights: Sequence[Sequence[float]],
) -> PreferenceProfile:
    """
    Fold profiles pairwise left to right.

    weights[i] is the (weight_acc, weight_next) pair used when merging
    profiles[i + 1] into the running result, so len(weights) == len(profiles) - 1.
    """
    if not profiles:
        return PreferenceProfile()
    if len(weights) != len(profiles) - 1:
        raise ValueError(
            f"merge_many needs {len(profiles) - 1} weight pairs, got {len(weights)}"
        )
    result: PreferenceProfile = profiles[0].model_copy(deep=True)
    for profile, (w_acc, w_next) in zip(profiles[1:], weights):
        result = merge_preferences(result, profile, w_acc, w_next)
    return result
