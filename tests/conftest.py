"""
Shared fixtures: a small swipe catalog and a swipe history over it.

Records are plain dicts shaped like the store's rows so the tests exercise
the same coercion path the application uses.
"""

import random
from datetime import datetime, timedelta, timezone
from typing import Dict, List

import pytest

from vaultrank import RankingConfig

NOW = datetime(2026, 1, 15, 12, 0, tzinfo=timezone.utc)

CATALOG: List[Dict] = [
    {"id": "book-1", "title": "Meditations", "type": "book", "tags": ["philosophy", "stoicism", "classic"], "popularity_score": 0.95},
    {"id": "book-2", "title": "Atomic Habits", "type": "book", "tags": ["self-improvement", "productivity"], "popularity_score": 0.92},
    {"id": "book-3", "title": "The Great Gatsby", "type": "book", "tags_json": '["fiction","classic"]', "popularity_score": 0.85},
    {"id": "movie-1", "title": "Inception", "type": "movie", "tags": ["sci-fi", "thriller"], "popularity_score": 0.92},
    {"id": "movie-2", "title": "Arrival", "type": "movie", "tags": ["sci-fi", "drama"], "popularity_score": 0.81},
    {"id": "podcast-1", "title": "The Joe Rogan Experience", "type": "podcast", "tags": ["interview", "comedy"], "popularity_score": 0.88},
    {"id": "podcast-2", "title": "Hardcore History", "type": "podcast", "tags": ["history", "storytelling"], "popularity_score": 0.83},
    {"id": "show-1", "title": "Breaking Bad", "type": "tv", "tags": ["drama", "crime"], "popularity_score": 0.95},
    {"id": "show-2", "title": "The Wire", "type": "show", "tags": ["drama", "crime", "classic"], "popularity_score": 0.90},
    {"id": "standup-1", "title": "John Mulaney", "type": "standup", "tags": ["comedy", "observational"], "popularity_score": 0.90},
]

CATALOG_BY_ID = {c["id"]: c for c in CATALOG}

# (candidate id, decision) in chronological order
SWIPES = [
    ("book-3", "like"),
    ("movie-1", "super_like"),
    ("podcast-1", "dislike"),
    ("show-1", "like"),
    ("book-3", "skip"),
    ("movie-1", "like"),
    ("podcast-1", "dislike"),
    ("show-1", "super_like"),
    ("book-3", "like"),
    ("movie-1", "like"),
    ("podcast-1", "skip"),
    ("show-1", "like"),
    ("show-2", "super_like"),
    ("standup-1", "dislike"),
    ("movie-2", "like"),
    ("podcast-2", "skip"),
    ("show-2", "like"),
    ("standup-1", "dislike"),
    ("movie-2", "super_like"),
    ("podcast-1", "dislike"),
]


def make_event(idx: int, candidate_id: str, decision: str, strength: float = 1.0) -> Dict:
    """An event row joined with its candidate snapshot, as the store supplies it."""
    media = CATALOG_BY_ID[candidate_id]
    return {
        "id": f"event-{idx}",
        "session_id": "session-1",
        "media_id": candidate_id,
        "decision": decision,
        "strength": strength,
        "created_at": (NOW - timedelta(minutes=len(SWIPES) - idx)).isoformat(),
        "media_type": media["type"],
        "media_tags": media.get("tags") or media.get("tags_json"),
    }


@pytest.fixture
def catalog() -> List[Dict]:
    return [dict(c) for c in CATALOG]


@pytest.fixture
def events() -> List[Dict]:
    return [make_event(i, cid, d) for i, (cid, d) in enumerate(SWIPES)]


@pytest.fixture
def no_explore_config() -> RankingConfig:
    return RankingConfig(epsilon_explore=0.0)


@pytest.fixture
def rng() -> random.Random:
    return random.Random(1234)
