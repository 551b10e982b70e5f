"""
GameState - per-step game state container.

Optimized for fast copying. Engines never mutate a state they were handed:
they copy it, mutate the copy, and return the copy.
"""

from __future__ import annotations

from typing import Optional

import numpy as np

from game_hub.core.types import ONGOING, Outcome


class GameState:
    """
    Lightweight game state container.

    Uses int8 boards for fast copy:
        0 = empty
        player id (placement games) or signed piece code (piece games)

    Subclasses add their phase fields to __slots__. Every slot must hold either
    a numpy array (copied) or an immutable value (shared).
    """
    __slots__ = ('board', 'current_player', 'outcome', 'game')

    def __init__(self, board: np.ndarray, current_player: int, outcome: Outcome = ONGOING):
        self.board = board
        self.current_player = current_player
        self.outcome = outcome
        self.game: Optional[str] = None  # registry name, stamped by GameBase.start()

    @property
    def is_over(self) -> bool:
        return self.outcome.is_over

    def copy(self) -> "GameState":
        """Fast copy - arrays are copied, everything else is immutable and shared."""
        cls = type(self)
        clone = cls.__new__(cls)
        for klass in cls.__mro__:
            for name in getattr(klass, '__slots__', ()):
                value = getattr(self, name)
                setattr(clone, name, value.copy() if isinstance(value, np.ndarray) else value)
        return clone

    def __repr__(self) -> str:
        return (
            f"{type(self).__name__}(player={self.current_player}, "
            f"outcome={self.outcome.describe()})"
        )
