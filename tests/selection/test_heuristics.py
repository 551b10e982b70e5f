"""
Tests for game_hub.selection.heuristics
"""

import random

from game_hub.selection.heuristics import (
    best_scored,
    best_scored_random_tie,
    by_priority,
    first_matching,
    random_move,
)


class TestBestScored:
    """best_scored tests."""

    def test_picks_highest(self, rng):
        """Without jitter the highest score wins."""
        assert best_scored([1, 5, 3], lambda m: m, rng) == 5

    def test_first_best_wins_ties(self, rng):
        """Ties keep the earliest move when there is no jitter."""
        assert best_scored(["a", "b", "c"], lambda m: 1, rng) == "a"

    def test_single_move(self, rng):
        """A single candidate is returned as is."""
        assert best_scored(["only"], lambda m: 0, rng) == "only"

    def test_jitter_never_overturns_large_gap(self):
        """Jitter below the score gap cannot change the winner."""
        for seed in range(20):
            assert best_scored([0, 10], lambda m: m, random.Random(seed), jitter=5) == 10

    def test_jitter_breaks_ties(self):
        """With jitter, equal scores are resolved differently across seeds."""
        picks = {best_scored(list(range(5)), lambda m: 0, random.Random(s), jitter=1) for s in range(30)}
        assert len(picks) > 1


class TestRandomTie:
    """best_scored_random_tie tests."""

    def test_only_top_scores_chosen(self):
        """Lower-scoring moves are never picked."""
        for seed in range(20):
            move = best_scored_random_tie([1, 2, 3, 4], lambda m: m % 2, random.Random(seed))
            assert move in (1, 3)

    def test_spreads_over_ties(self):
        """Equal top scores are all reachable."""
        picks = {best_scored_random_tie(["a", "b"], lambda m: 1, random.Random(s)) for s in range(30)}
        assert picks == {"a", "b"}


class TestPriority:
    """first_matching and by_priority tests."""

    def test_first_matching(self):
        """The first move satisfying the predicate is returned."""
        assert first_matching([1, 4, 6], lambda m: m % 2 == 0) == 4

    def test_first_matching_none(self):
        """None when nothing matches."""
        assert first_matching([1, 3], lambda m: m > 5) is None

    def test_by_priority(self):
        """The highest-priority available entry is returned."""
        assert by_priority([0, 2, 6], order=[4, 6, 2]) == 6
        assert by_priority([0], order=[4]) is None


class TestRandomMove:
    """random_move tests."""

    def test_member_of_moves(self, rng):
        """Always one of the candidates."""
        moves = ["x", "y", "z"]
        assert random_move(moves, rng) in moves

    def test_accepts_iterables(self, rng):
        """Tuples and other sequences work."""
        assert random_move((7,), rng) == 7
