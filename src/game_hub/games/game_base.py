"""
GameBase - abstract base class for all board games.
"""

from __future__ import annotations

import random
from abc import ABC, abstractmethod
from typing import Any, List, Optional, Sequence, Tuple

from game_hub.core.errors import AlreadyFinished, IllegalMove
from game_hub.core.types import P1, P2, MoveResult, Outcome
from game_hub.games.game_state import GameState


class GameBase(ABC):
    """
    Abstract base class for all board games.

    IMPORTANT ARCHITECTURE NOTE:
    -----------------------------
    - Engines are stateless rule sets. The GameState is threaded through
      every call and is never mutated in place.
    - apply_move() validates against generate_moves(), copies the state and
      hands the copy to execute(). Subclasses only implement the rules.
    - Compound turns (multi-jump, mill removal, extra roll) are explicit
      fields on the state, so generate_moves() alone decides who may act.
    """

    MIN_PLAYERS = 2
    MAX_PLAYERS = 2

    @abstractmethod
    def game_id(self) -> str:
        """Return a stable identifier (e.g. 'chess')."""
        pass

    @abstractmethod
    def initial_state(self, num_players: int = 2) -> GameState:
        """Return the seeded starting position."""
        pass

    def start(self, num_players: int = 2) -> GameState:
        """Initial state tagged with this engine's id, so hosts can route it back."""
        if not self.MIN_PLAYERS <= num_players <= self.MAX_PLAYERS:
            raise ValueError(
                f"{self.game_id()} supports {self.MIN_PLAYERS}-{self.MAX_PLAYERS} players, "
                f"got {num_players}"
            )
        state = self.initial_state(num_players)
        state.game = self.game_id()
        return state

    def players(self, state: GameState) -> Tuple[int, ...]:
        """Player ids taking part, in turn order."""
        return (P1, P2)

    # ------------------------------------------------------------------
    # Move generation
    # ------------------------------------------------------------------

    def legal_moves(self, state: GameState) -> List[Any]:
        """
        Return all legal moves for the active player.

        Raises:
            AlreadyFinished: if the state is terminal.
        """
        if state.is_over:
            raise AlreadyFinished(f"{self.game_id()} is already over: {state.outcome.describe()}")
        return self.generate_moves(state)

    @abstractmethod
    def generate_moves(self, state: GameState) -> List[Any]:
        """Legal moves for state.current_player, in a stable order."""
        pass

    # ------------------------------------------------------------------
    # Execution
    # ------------------------------------------------------------------

    def apply_move(self, state: GameState, move: Any) -> MoveResult:
        """
        Apply a move and return the next state, its effects and outcome.

        The input state is left untouched.

        Raises:
            AlreadyFinished: if the game is already over.
            IllegalMove: if move is not legal for the active player.
        """
        legal = self.legal_moves(state)
        if move not in legal:
            raise IllegalMove(
                f"Illegal {self.game_id()} move {move!r} for player {state.current_player}"
            )
        # Hand execute() the engine's own move object; plain tuples compare equal to it
        move = legal[legal.index(move)]
        return self.execute(state.copy(), move)

    @abstractmethod
    def execute(self, state: GameState, move: Any) -> MoveResult:
        """
        Apply a validated move to a private copy of the state.

        Must resolve side effects, run terminal detection, and advance (or
        hold) the turn.
        """
        pass

    def outcome(self, state: GameState) -> Outcome:
        return state.outcome

    def is_over(self, state: GameState) -> bool:
        return state.is_over

    # ------------------------------------------------------------------
    # Chance (dice games only)
    # ------------------------------------------------------------------

    def awaiting_roll(self, state: GameState) -> bool:
        """True when the active player must roll before any move is legal."""
        return False

    def roll(self, state: GameState, value: int) -> MoveResult:
        raise IllegalMove(f"{self.game_id()} has no dice")

    # ------------------------------------------------------------------
    # Heuristic opponent
    # ------------------------------------------------------------------

    def choose_move(
        self,
        state: GameState,
        legal: Optional[Sequence[Any]] = None,
        rng: Optional[random.Random] = None,
    ) -> Any:
        """
        Pick a move for the active (computer) player.

        The caller guarantees the legal set is non-empty.
        """
        if legal is None:
            legal = self.legal_moves(state)
        assert len(legal) > 0, "choose_move called with no legal moves"
        return self.select_move(state, list(legal), rng or random.Random())

    @abstractmethod
    def select_move(self, state: GameState, legal: List[Any], rng: random.Random) -> Any:
        """One-ply heuristic choice among `legal`."""
        pass

    # ------------------------------------------------------------------
    # Display
    # ------------------------------------------------------------------

    def format_move(self, move: Any) -> str:
        return ",".join(str(v) for v in move) if isinstance(move, tuple) else str(move)

    @abstractmethod
    def state_string(self, state: GameState) -> str:
        """Pretty string representation of the state."""
        pass
