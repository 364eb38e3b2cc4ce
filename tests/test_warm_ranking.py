"""
Warm Ranking Tests

Scoring against a learned profile, diversity penalty, and epsilon-greedy exploration.

Run:
----
    pytest tests/test_warm_ranking.py -v
"""

import random

import pytest

from vaultrank import (
    Candidate,
    PreferenceEntry,
    PreferenceProfile,
    RankingConfig,
    RankReason,
    compute_preferences,
    get_warm_batch,
)
from vaultrank.models import ensure_candidates
from vaultrank.stages.ranking import (
    apply_exploration,
    diversity_penalty,
    recent_window,
    score_candidate,
)

from tests.conftest import NOW


@pytest.fixture
def profile(events):
    return compute_preferences(events, now=NOW)


def _non_explore_sorted(batch):
    scores = [r.score for r in batch if r.reason != RankReason.EXPLORE]
    return all(a >= b for a, b in zip(scores, scores[1:]))


class TestScoreCandidate:
    """Per-candidate score components."""

    def test_components(self):
        profile = PreferenceProfile(
            tag_preferences={"a": PreferenceEntry(weight=1.0, count=2), "b": PreferenceEntry(weight=-0.5, count=1)},
            type_preferences={"movie": PreferenceEntry(weight=0.4, count=3)},
            total_interactions=3,
        )
        c = Candidate(id="m", type="movie", tags=["a", "b", "untracked"], popularity_score=0.5)
        s = score_candidate(c, profile, [], RankingConfig())
        assert s.tag_score == pytest.approx((1.0 - 0.5 + 0.0) / 3)
        assert s.type_score == pytest.approx(0.4)
        assert s.popularity_score == pytest.approx(0.15)
        assert s.diversity_penalty == 0.0
        assert s.final_score == pytest.approx(s.tag_score + 0.4 + 0.15)
        assert s.matched_tags == ["a"]

    def test_untracked_everything_scores_popularity_only(self):
        c = Candidate(id="x", type="essay", tags=["new"], popularity_score=1.0)
        s = score_candidate(c, PreferenceProfile(), [], RankingConfig(popularity_weight=0.2))
        assert s.final_score == pytest.approx(0.2)

    def test_no_tags(self):
        c = Candidate(id="x", type="essay", popularity_score=0.0)
        assert score_candidate(c, PreferenceProfile(), [], RankingConfig()).final_score == 0.0


class TestDiversityPenalty:
    """Repeated types and tags in the recent window are suppressed."""

    def test_type_penalty_proportional_to_window_share(self):
        config = RankingConfig(diversity_window=4, diversity_penalty=0.4, tag_repeat_penalty=0.0)
        c = Candidate(id="c", type="book")
        window = [
            Candidate(id="1", type="book"),
            Candidate(id="2", type="movie"),
            Candidate(id="3", type="book"),
            Candidate(id="4", type="game"),
        ]
        assert diversity_penalty(c, window, config) == pytest.approx(0.2)

    def test_tag_penalty_needs_repetition(self):
        config = RankingConfig(diversity_penalty=0.0, tag_repeat_penalty=0.1, tag_repeat_min_count=2)
        c = Candidate(id="c", type="book", tags=["x", "y"])
        once = [Candidate(id="1", type="movie", tags=["x"])]
        twice = once + [Candidate(id="2", type="show", tags=["x", "y"])]
        assert diversity_penalty(c, once, config) == 0.0
        assert diversity_penalty(c, twice, config) == pytest.approx(0.1)

    def test_same_type_recent_lowers_score(self, catalog, profile, no_explore_config):
        plain = {r.candidate.id: r.score for r in get_warm_batch(catalog, profile, [], config=no_explore_config)}
        recent = ["book-1", "book-1", "book-1"]
        penalized = {
            r.candidate.id: r.score
            for r in get_warm_batch(catalog, profile, recent, config=no_explore_config)
        }
        # book-2 shares no tags with book-1: only the full type penalty applies
        assert plain["book-2"] - penalized["book-2"] == pytest.approx(0.3)
        assert penalized["movie-1"] == pytest.approx(plain["movie-1"])

    def test_only_window_entries_count(self, catalog, profile, no_explore_config):
        config = no_explore_config.with_overrides(diversity_window=1)
        recent = ["movie-1", "book-1", "book-2"]
        scores = {r.candidate.id: r.score for r in get_warm_batch(catalog, profile, recent, config=config)}
        plain = {r.candidate.id: r.score for r in get_warm_batch(catalog, profile, [], config=config)}
        assert scores["book-2"] == pytest.approx(plain["book-2"])
        assert scores["movie-2"] < plain["movie-2"]

    def test_recent_candidates_accepted_as_dicts(self, catalog, profile, no_explore_config):
        by_id = get_warm_batch(catalog, profile, ["book-1"], config=no_explore_config)
        by_dict = get_warm_batch(catalog, profile, [catalog[0]], config=no_explore_config)
        assert [r.score for r in by_id] == [r.score for r in by_dict]

    def test_previous_batch_feeds_window(self, catalog, profile, no_explore_config):
        previous = get_warm_batch(catalog, profile, config=no_explore_config)
        window = recent_window(previous, ensure_candidates(catalog), no_explore_config)
        assert [c.id for c in window] == [r.candidate.id for r in previous[:3]]

    def test_previous_batch_scores_like_its_ids(self, catalog, profile, no_explore_config):
        previous = get_warm_batch(catalog, profile, config=no_explore_config)[:3]
        by_batch = get_warm_batch(catalog, profile, previous, config=no_explore_config)
        by_ids = get_warm_batch(
            catalog, profile, [r.candidate.id for r in previous], config=no_explore_config
        )
        assert [r.score for r in by_batch] == [r.score for r in by_ids]

    def test_id_only_dicts_resolved_from_pool(self, catalog, profile, no_explore_config):
        by_id = get_warm_batch(catalog, profile, ["book-1", "show-1"], config=no_explore_config)
        by_dict = get_warm_batch(
            catalog, profile, [{"id": "book-1"}, {"id": "show-1"}], config=no_explore_config
        )
        assert [r.score for r in by_id] == [r.score for r in by_dict]

    def test_unknown_recent_ids_ignored(self, catalog, profile, no_explore_config):
        plain = get_warm_batch(catalog, profile, [], config=no_explore_config)
        unknown = get_warm_batch(catalog, profile, ["nope", "gone"], config=no_explore_config)
        assert [r.score for r in plain] == [r.score for r in unknown]


class TestWarmBatch:
    """get_warm_batch ordering, truncation and exploration."""

    def test_no_exploration_is_monotonic(self, catalog, profile, no_explore_config):
        batch = get_warm_batch(catalog, profile, catalog[:2], config=no_explore_config)
        assert len(batch) == len(catalog)
        scores = [r.score for r in batch]
        assert scores == sorted(scores, reverse=True)
        assert all(r.reason == RankReason.PREFERENCE for r in batch)

    def test_no_exploration_is_deterministic(self, catalog, profile, no_explore_config):
        first = get_warm_batch(catalog, profile, config=no_explore_config)
        second = get_warm_batch(catalog, profile, config=no_explore_config)
        assert [r.candidate.id for r in first] == [r.candidate.id for r in second]

    def test_preferred_content_ranks_first(self, catalog, profile, no_explore_config):
        batch = get_warm_batch(catalog, profile, config=no_explore_config)
        ids = [r.candidate.id for r in batch]
        assert ids.index("show-2") < ids.index("podcast-1")
        assert ids[-1] in {"podcast-1", "standup-1"}

    def test_ties_broken_by_popularity_then_input_order(self, no_explore_config):
        pool = [
            {"id": "a", "type": "game", "popularity_score": 0.0},
            {"id": "b", "type": "game", "popularity_score": 0.0},
            {"id": "popular", "type": "game", "popularity_score": 0.5},
        ]
        config = no_explore_config.with_overrides(popularity_weight=0.0)
        ids = [r.candidate.id for r in get_warm_batch(pool, PreferenceProfile(), config=config)]
        assert ids == ["popular", "a", "b"]

    def test_matched_tags_reported(self, catalog, profile, no_explore_config):
        batch = get_warm_batch(catalog, profile, config=no_explore_config)
        show = next(r for r in batch if r.candidate.id == "show-1")
        assert set(show.matched_tags) == {"drama", "crime"}

    def test_batch_size_truncates_after_ranking(self, catalog, profile, no_explore_config):
        full = get_warm_batch(catalog, profile, config=no_explore_config)
        top3 = get_warm_batch(catalog, profile, batch_size=3, config=no_explore_config)
        assert [r.candidate.id for r in top3] == [r.candidate.id for r in full[:3]]
        assert get_warm_batch(catalog, profile, batch_size=0, config=no_explore_config) == []

    def test_empty_pool(self, profile):
        assert get_warm_batch([], profile) == []

    def test_exploration_keeps_non_explore_sorted(self, catalog, profile):
        config = RankingConfig(epsilon_explore=0.5)
        for seed in range(20):
            batch = get_warm_batch(catalog, profile, config=config, rng=random.Random(seed))
            assert len(batch) == len(catalog)
            assert len({r.candidate.id for r in batch}) == len(catalog)
            assert _non_explore_sorted(batch)

    def test_exploration_reproducible_with_seed(self, catalog, profile):
        config = RankingConfig(epsilon_explore=0.3)
        a = get_warm_batch(catalog, profile, config=config, rng=random.Random(42))
        b = get_warm_batch(catalog, profile, config=config, rng=random.Random(42))
        assert [(r.candidate.id, r.reason) for r in a] == [(r.candidate.id, r.reason) for r in b]

    def test_full_exploration_marks_every_pulled_slot(self, catalog, profile, rng):
        batch = get_warm_batch(catalog, profile, config=RankingConfig(epsilon_explore=1.0), rng=rng)
        explored = [r for r in batch if r.reason == RankReason.EXPLORE]
        assert len(explored) == len(catalog) - 1
        assert batch[-1].reason == RankReason.PREFERENCE

    def test_does_not_mutate_candidates(self, catalog, profile):
        snapshot = [dict(c) for c in catalog]
        get_warm_batch(catalog, profile, catalog[:3], rng=random.Random(0))
        assert catalog == snapshot


class TestApplyExploration:
    """apply_exploration in isolation."""

    def test_zero_epsilon_returns_copy(self, catalog, profile, no_explore_config):
        ranked = get_warm_batch(catalog, profile, config=no_explore_config)
        out = apply_exploration(ranked, 0.0, random.Random(0))
        assert out == ranked
        assert out is not ranked

    def test_non_explore_items_keep_relative_order(self, catalog, profile, no_explore_config):
        ranked = get_warm_batch(catalog, profile, config=no_explore_config)
        original = [r.candidate.id for r in ranked]
        out = apply_exploration(ranked, 0.5, random.Random(7))
        kept = [r.candidate.id for r in out if r.reason != RankReason.EXPLORE]
        assert kept == [cid for cid in original if cid in set(kept)]
        assert sorted(r.candidate.id for r in out) == sorted(original)

    def test_first_slot_explores_from_below(self, catalog, profile, no_explore_config):
        ranked = get_warm_batch(catalog, profile, config=no_explore_config)
        out = apply_exploration(ranked, 1.0, random.Random(3))
        assert out[0].reason == RankReason.EXPLORE
        assert out[0].candidate.id != ranked[0].candidate.id
