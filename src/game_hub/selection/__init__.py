"""
Selection module - building blocks for the heuristic opponents.
"""

from game_hub.selection.heuristics import (
    best_scored,
    best_scored_random_tie,
    by_priority,
    first_matching,
    random_move,
)

__all__ = [
    "best_scored",
    "best_scored_random_tie",
    "by_priority",
    "first_matching",
    "random_move",
]
