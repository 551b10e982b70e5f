"""
Job data structures for self-play simulation.

Defines the input (GameJob) and output (JobResult) types used
by worker processes, plus the batch tally.
"""

from __future__ import annotations

from collections import Counter
from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional

from game_hub.core.types import Outcome, Result, Status


@dataclass
class MoveRecord:
    """A single action with its actor. `roll` is set for die rolls instead of moves."""
    player: int
    move: Any = None
    roll: Optional[int] = None


@dataclass(frozen=True)
class GameJob:
    """
    Self-contained job for a worker process.

    Contains everything needed to play one computer-vs-computer game
    without shared state. Engines are rebuilt from `game_name`.
    """
    game_name: str
    num_players: int
    seed: int
    max_turns: int
    index: int = 0
    record_moves: bool = False


@dataclass
class JobResult:
    """Result of one self-play game."""
    index: int
    outcome: Outcome
    turns: int
    results: Dict[int, Result]
    moves: List[MoveRecord] = field(default_factory=list)

    @property
    def finished(self) -> bool:
        """False when the game hit max_turns before a terminal outcome."""
        return self.outcome.is_over


@dataclass
class BatchSummary:
    """Win/draw tally over a batch of games."""
    games: int = 0
    wins: Counter = field(default_factory=Counter)
    draws: int = 0
    unfinished: int = 0

    @classmethod
    def from_results(cls, results: List[JobResult]) -> "BatchSummary":
        summary = cls(games=len(results))
        for result in results:
            if result.outcome.status is Status.WIN:
                summary.wins[result.outcome.winner] += 1
            elif result.outcome.status is Status.DRAW:
                summary.draws += 1
            else:
                summary.unfinished += 1
        return summary

    def describe(self) -> str:
        parts = [f"P{p}: {n}" for p, n in sorted(self.wins.items())]
        parts.append(f"draws: {self.draws}")
        if self.unfinished:
            parts.append(f"unfinished: {self.unfinished}")
        return f"{self.games} games - " + ", ".join(parts)
