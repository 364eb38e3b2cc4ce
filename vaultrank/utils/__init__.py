"""Shared helpers for tag parsing and recency decay."""

from .decay import days_between, recency_decay
from .tags import parse_tags

__all__ = [
    "days_between",
    "parse_tags",
    "recency_decay",
]
