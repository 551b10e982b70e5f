"""
Core types shared by every engine.

This module contains the small value types that flow across the
engine/host boundary:
- Status / Outcome: terminal detection result
- Result: per-player view of an outcome (for self-play tallies)
- Effects: side effects reported by a single move
- MoveResult: what apply_move hands back to the host
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum, auto
from typing import Any, NamedTuple, Tuple, TYPE_CHECKING

if TYPE_CHECKING:
    from game_hub.games.game_state import GameState


# Player ids. Two-sided piece games encode P1 as positive and P2 as negative
# board values; placement games store the id itself.
P1 = 1
P2 = 2
P3 = 3
P4 = 4

PLAYER_NAMES = {P1: "P1", P2: "P2", P3: "P3", P4: "P4"}


class Status(Enum):
    ONGOING = auto()
    WIN = auto()
    DRAW = auto()


class Result(Enum):
    """Outcome from a single player's point of view."""
    WIN = auto()
    TIE = auto()
    LOSS = auto()
    NEUTRAL = auto()


class Outcome(NamedTuple):
    """Terminal outcome: ongoing, a win for `winner`, or a draw."""

    status: Status = Status.ONGOING
    winner: int = 0

    @classmethod
    def win(cls, player: int) -> "Outcome":
        return cls(Status.WIN, player)

    @property
    def is_over(self) -> bool:
        return self.status is not Status.ONGOING

    def result_for(self, player: int) -> Result:
        if self.status is Status.WIN:
            return Result.WIN if self.winner == player else Result.LOSS
        if self.status is Status.DRAW:
            return Result.TIE
        return Result.NEUTRAL

    def describe(self) -> str:
        if self.status is Status.WIN:
            return f"{PLAYER_NAMES[self.winner]} wins"
        if self.status is Status.DRAW:
            return "Draw"
        return "In progress"


ONGOING = Outcome()
DRAW = Outcome(Status.DRAW, 0)


@dataclass(frozen=True)
class Effects:
    """
    Side effects of one executed move.

    Hosts may use these for feedback (sounds, highlights) but never need to
    act on them; the resulting state already reflects everything.
    """

    captures: Tuple[Any, ...] = ()      # squares/nodes/token ids removed or sent home
    flips: Tuple[Tuple[int, int], ...] = ()
    promotion: bool = False
    mill: bool = False
    extra_turn: bool = False           # same player acts again
    check: bool = False
    passed: Tuple[int, ...] = ()       # players skipped for lack of moves
    finished_token: bool = False


NO_EFFECTS = Effects()


class MoveResult(NamedTuple):
    state: "GameState"
    effects: Effects
    outcome: Outcome
