"""
Ranking configuration — preference learning, merge, cold start, diversity, exploration.

RankingConfig defaults are defined here. Callers may pass a dict (e.g. from a
config.json next to their data); from_dict() merges it with these defaults.
Nothing is read from the environment.
"""

import json
from pathlib import Path
from types import MappingProxyType
from typing import Any, Dict, Mapping, Optional, Union

from pydantic import BaseModel, ConfigDict, Field, field_serializer, field_validator, model_validator

from .interaction import Decision


def _default_decision_weights() -> Dict[Decision, float]:
    return {
        Decision.SUPER_LIKE: 2.0,
        Decision.LIKE: 1.0,
        Decision.SKIP: -0.1,
        Decision.DISLIKE: -0.5,
    }


# Grouped config.json sections: section -> {key in section: RankingConfig field}
_SECTION_KEYS: Dict[str, Dict[str, str]] = {
    "merge": {"swipe": "merge_weight_swipe", "vault": "merge_weight_vault"},
    "cold_start": {"threshold": "cold_start_threshold", "batch_size": "default_batch_size"},
    "diversity": {
        "window": "diversity_window",
        "penalty": "diversity_penalty",
        "tag_penalty": "tag_repeat_penalty",
        "tag_min_count": "tag_repeat_min_count",
    },
    "exploration": {"epsilon": "epsilon_explore"},
    "decay": {"half_life_days": "decay_half_life_days"},
}


class RankingConfig(BaseModel):
    """Configuration for preference aggregation and ranking. Immutable per call."""

    model_config = ConfigDict(frozen=True)

    # -------------------------------------------------------------------------
    # Preference Aggregation
    # contribution = decision_weights[decision] * strength
    # -------------------------------------------------------------------------

    # Signed weight per swipe decision. Must satisfy
    # super_like > like > 0 >= skip >= dislike. Stored as a read-only mapping.
    decision_weights: Mapping[Decision, float] = Field(
        default_factory=_default_decision_weights, validate_default=True
    )

    # Fixed positive contribution of a vaulted item ("implicit like").
    vault_implicit_weight: float = 1.0

    # Optional half-life for swipe contributions. None keeps every swipe at full weight.
    decay_half_life_days: Optional[float] = None

    # -------------------------------------------------------------------------
    # Profile Merge
    # merged = merge_weight_swipe * swipe + merge_weight_vault * vault (shared keys only)
    # -------------------------------------------------------------------------

    merge_weight_swipe: float = 0.7
    merge_weight_vault: float = 0.3

    # -------------------------------------------------------------------------
    # Cold Start
    # -------------------------------------------------------------------------

    # Explicit events required before the warm ranker is trusted.
    cold_start_threshold: int = 10
    # Cold-start batch size when the caller does not pass one.
    default_batch_size: int = 10

    # -------------------------------------------------------------------------
    # Scoring
    # score = mean(tag weights) + type weight + popularity_weight * popularity - penalties
    # -------------------------------------------------------------------------

    popularity_weight: float = 0.3

    # -------------------------------------------------------------------------
    # Diversity
    # type penalty = diversity_penalty * (same-type items in window / diversity_window)
    # tag penalty  = tag_repeat_penalty per tag seen >= tag_repeat_min_count times in window
    # -------------------------------------------------------------------------

    diversity_window: int = 3
    diversity_penalty: float = 0.3
    tag_repeat_penalty: float = 0.1
    tag_repeat_min_count: int = 2

    # -------------------------------------------------------------------------
    # Exploration
    # Per-slot probability of pulling a lower-ranked candidate forward. 0 disables.
    # -------------------------------------------------------------------------

    epsilon_explore: float = 0.15

    @field_validator("decision_weights", mode="after")
    @classmethod
    def _freeze_decision_weights(cls, v: Mapping[Decision, float]) -> Mapping[Decision, float]:
        return MappingProxyType(dict(v))

    @field_serializer("decision_weights")
    def _dump_decision_weights(self, v: Mapping[Decision, float]) -> Dict[str, float]:
        return {d.value: w for d, w in v.items()}

    @model_validator(mode="after")
    def decision_weights_are_ordered(self):
        missing = [d.value for d in Decision if d not in self.decision_weights]
        if missing:
            raise ValueError(f"decision_weights missing entries for: {missing}")
        w = self.decision_weights
        if not (
            w[Decision.SUPER_LIKE] > w[Decision.LIKE] > 0
            and 0 >= w[Decision.SKIP] >= w[Decision.DISLIKE]
        ):
            raise ValueError(
                "decision_weights must satisfy super_like > like > 0 >= skip >= dislike, "
                f"got {dict((d.value, v) for d, v in w.items())}"
            )
        return self

    @model_validator(mode="after")
    def ranges_are_valid(self):
        if not 0.0 <= self.epsilon_explore <= 1.0:
            raise ValueError(f"epsilon_explore must be in [0, 1], got {self.epsilon_explore}")
        if self.merge_weight_swipe < 0 or self.merge_weight_vault < 0:
            raise ValueError("merge weights must be non-negative")
        if self.vault_implicit_weight <= 0:
            raise ValueError("vault_implicit_weight must be positive")
        for name in (
            "cold_start_threshold",
            "default_batch_size",
            "diversity_window",
            "tag_repeat_min_count",
        ):
            if getattr(self, name) < 0:
                raise ValueError(f"{name} must be non-negative")
        for name in ("diversity_penalty", "tag_repeat_penalty", "popularity_weight"):
            if getattr(self, name) < 0:
                raise ValueError(f"{name} must be non-negative")
        if self.decay_half_life_days is not None and self.decay_half_life_days <= 0:
            raise ValueError("decay_half_life_days must be positive when set")
        return self

    def decision_weight(self, decision: Union[str, Decision]) -> Optional[float]:
        """Weight for a decision, or None when the decision is unknown."""
        try:
            return self.decision_weights[Decision(decision)]
        except ValueError:
            return None

    def with_overrides(self, **overrides: Any) -> "RankingConfig":
        """Return a validated copy with some fields replaced."""
        return RankingConfig.model_validate(self.model_dump() | overrides)

    @classmethod
    def from_dict(cls, config_dict: Dict) -> "RankingConfig":
        """
        Create config from dictionary (flat keys or grouped sections).

        Only keys present in a section are copied; missing ones keep the
        field defaults. A flat key wins over the same setting in a section.
        Unknown decision names fail validation like any other bad value.
        """
        flat: Dict[str, Any] = {}
        if "decision_weights" in config_dict:
            weights: Dict[Any, Any] = {d.value: w for d, w in _default_decision_weights().items()}
            for k, v in config_dict["decision_weights"].items():
                weights[k.value if isinstance(k, Decision) else k] = v
            flat["decision_weights"] = weights
        for section, keys in _SECTION_KEYS.items():
            values = config_dict.get(section) or {}
            for key, field in keys.items():
                if key in values:
                    flat[field] = values[key]
        allowed = set(cls.model_fields) - {"decision_weights"}
        for k, v in config_dict.items():
            if k in allowed:
                flat[k] = v
        return cls.model_validate(flat)

    @classmethod
    def from_json_file(cls, path: Union[str, Path]) -> "RankingConfig":
        """Load a config.json written in the from_dict() layout."""
        with open(path) as f:
            return cls.from_dict(json.load(f))


DEFAULT_CONFIG = RankingConfig()


def resolve_config(config: Optional["RankingConfig"]) -> "RankingConfig":
    """Return config or DEFAULT_CONFIG when none is provided."""
    return config if config is not None else DEFAULT_CONFIG
