"""
Core module - shared value types and errors.
"""

from game_hub.core.types import (
    P1,
    P2,
    P3,
    P4,
    PLAYER_NAMES,
    Status,
    Result,
    Outcome,
    ONGOING,
    DRAW,
    Effects,
    NO_EFFECTS,
    MoveResult,
)
from game_hub.core.errors import GameError, IllegalMove, AlreadyFinished

__all__ = [
    # Players
    "P1",
    "P2",
    "P3",
    "P4",
    "PLAYER_NAMES",
    # Types
    "Status",
    "Result",
    "Outcome",
    "ONGOING",
    "DRAW",
    "Effects",
    "NO_EFFECTS",
    "MoveResult",
    # Errors
    "GameError",
    "IllegalMove",
    "AlreadyFinished",
]
