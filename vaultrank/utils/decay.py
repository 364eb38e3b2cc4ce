"""
Time helpers — age of a signal and exponential half-life decay.
"""

from datetime import datetime, timezone
from typing import Optional


def _as_utc(dt: datetime) -> datetime:
    return dt.replace(tzinfo=timezone.utc) if dt.tzinfo is None else dt


def days_between(earlier: Optional[datetime], later: datetime) -> float:
    """Fractional days from earlier to later; 0 when earlier is unknown or in the future."""
    if earlier is None:
        return 0.0
    delta = (_as_utc(later) - _as_utc(earlier)).total_seconds() / 86400.0
    return max(0.0, delta)


def recency_decay(
    timestamp: Optional[datetime],
    now: datetime,
    half_life_days: Optional[float],
) -> float:
    """
    Decay factor in (0, 1] for a signal recorded at timestamp.

    half_life_days=None disables decay (factor 1.0). A signal exactly one
    half-life old counts half as much as a fresh one.
    """
    if half_life_days is None:
        return 1.0
    return 0.5 ** (days_between(timestamp, now) / half_life_days)
