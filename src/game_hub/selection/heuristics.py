"""
Move selection helpers for the one-ply heuristic opponents.

Every opponent reduces to one of three shapes:
- argmax over a static score plus a random jitter
- first move that satisfies a priority predicate
- uniform random choice
The rng is always injected so tests can seed it.
"""

from __future__ import annotations

import random
from typing import Any, Callable, Iterable, List, Optional, Sequence, TypeVar

Move = TypeVar("Move")


def best_scored(
    moves: Sequence[Move],
    score: Callable[[Move], float],
    rng: random.Random,
    jitter: float = 0.0,
) -> Move:
    """
    Pick the move with the highest score + U(0, jitter).

    Args:
        moves: Non-empty candidate moves
        score: Static one-ply score for a move
        rng: Random source for the jitter term
        jitter: Width of the random tie-breaker (0 = first best wins)

    Returns:
        Selected move
    """
    if len(moves) == 1:
        return moves[0]

    best, best_value = moves[0], float("-inf")
    for move in moves:
        value = score(move)
        if jitter:
            value += rng.random() * jitter
        if value > best_value:
            best, best_value = move, value
    return best


def best_scored_random_tie(
    moves: Sequence[Move],
    score: Callable[[Move], float],
    rng: random.Random,
) -> Move:
    """Highest score wins; equal scores are broken uniformly at random."""
    scored = [(score(m), m) for m in moves]
    top = max(s for s, _ in scored)
    return rng.choice([m for s, m in scored if s == top])


def first_matching(moves: Iterable[Move], predicate: Callable[[Move], bool]) -> Optional[Move]:
    """First move satisfying predicate, or None."""
    for move in moves:
        if predicate(move):
            return move
    return None


def random_move(moves: Sequence[Move], rng: random.Random) -> Move:
    """Uniform random choice."""
    return rng.choice(list(moves))


def by_priority(moves: Sequence[Move], order: Sequence[Any]) -> Optional[Move]:
    """First entry of `order` that is present in `moves`."""
    available: List[Move] = list(moves)
    for candidate in order:
        if candidate in available:
            return candidate
    return None
