"""
Checkers (English draughts) on an 8x8 board.

Board encoding (int8):
    0 = empty
    Positive = Player 1 (red, bottom rows 5-7): 1=Man, 2=King
    Negative = Player 2 (black, top rows 0-2): -1=Man, -2=King

Only dark squares ((r + c) odd) are used. Captures are mandatory, and a piece
that captures must keep capturing while it can (multi-jump). While a jump
chain is pending, `state.chain` holds the jumping piece's square and it is
the only piece that may move.
"""

from __future__ import annotations

import random
from typing import List, NamedTuple, Optional, Tuple

import numpy as np

from game_hub.core.types import P1, Effects, MoveResult, Outcome
from game_hub.games.game_base import GameBase
from game_hub.games.game_rules import count_pieces, in_bounds, opponent, owner, render_grid, sign
from game_hub.games.game_state import GameState
from game_hub.selection.heuristics import random_move

EMPTY = 0
MAN = 1
KING = 2

SIZE = 8

CELL_STRINGS = {0: " ", 1: "r", 2: "R", -1: "b", -2: "B"}


class CheckersMove(NamedTuple):
    fr: int
    fc: int
    tr: int
    tc: int

    @property
    def is_capture(self) -> bool:
        return abs(self.tr - self.fr) == 2

    @property
    def jumped(self) -> Tuple[int, int]:
        return (self.fr + self.tr) // 2, (self.fc + self.tc) // 2


class CheckersState(GameState):
    """Board plus the square of a piece that owes a continuation capture."""
    __slots__ = ('chain',)

    def __init__(self, board: np.ndarray, current_player: int,
                 chain: Optional[Tuple[int, int]] = None):
        super().__init__(board, current_player)
        self.chain = chain


def _row_dirs(piece: int) -> Tuple[int, ...]:
    """Row directions a piece may move in: men forward only, kings both ways."""
    if abs(piece) == KING:
        return (-1, 1)
    return (-1,) if piece > 0 else (1,)


def back_rank(player: int) -> int:
    """Row on which player's men are crowned."""
    return 0 if player == P1 else SIZE - 1


class Checkers(GameBase):
    """Checkers with mandatory capture and multi-jump chains."""

    @staticmethod
    def _initial_board() -> np.ndarray:
        board = np.zeros((SIZE, SIZE), dtype=np.int8)
        for r in range(SIZE):
            for c in range(SIZE):
                if (r + c) % 2 == 1:
                    if r < 3:
                        board[r, c] = -MAN
                    elif r > 4:
                        board[r, c] = MAN
        return board

    def game_id(self) -> str:
        return "checkers"

    def initial_state(self, num_players: int = 2) -> CheckersState:
        return CheckersState(self._initial_board(), current_player=P1)

    # ------------------------------------------------------------------
    # Move generation
    # ------------------------------------------------------------------

    def captures_from(self, board: np.ndarray, r: int, c: int) -> List[CheckersMove]:
        """Jumps over an adjacent enemy onto an empty square."""
        piece = int(board[r, c])
        player = owner(piece)
        moves = []
        for dr in _row_dirs(piece):
            for dc in (-1, 1):
                jr, jc = r + 2 * dr, c + 2 * dc
                if not in_bounds(board, jr, jc) or board[jr, jc] != EMPTY:
                    continue
                over = owner(int(board[r + dr, c + dc]))
                if over and over != player:
                    moves.append(CheckersMove(r, c, jr, jc))
        return moves

    def steps_from(self, board: np.ndarray, r: int, c: int) -> List[CheckersMove]:
        """One-square diagonal moves onto empty squares."""
        moves = []
        for dr in _row_dirs(int(board[r, c])):
            for dc in (-1, 1):
                nr, nc = r + dr, c + dc
                if in_bounds(board, nr, nc) and board[nr, nc] == EMPTY:
                    moves.append(CheckersMove(r, c, nr, nc))
        return moves

    def moves_for(self, board: np.ndarray, player: int,
                  chain: Optional[Tuple[int, int]] = None) -> List[CheckersMove]:
        """
        Legal moves for player.

        A pending chain restricts play to that piece's captures. Otherwise any
        available capture makes every non-capture illegal.
        """
        if chain is not None:
            return self.captures_from(board, *chain)

        squares = [(int(r), int(c)) for r, c in zip(*np.nonzero(board * sign(player) > 0))]

        captures = [m for r, c in squares for m in self.captures_from(board, r, c)]
        if captures:
            return captures
        return [m for r, c in squares for m in self.steps_from(board, r, c)]

    def generate_moves(self, state: GameState) -> List[CheckersMove]:
        return self.moves_for(state.board, state.current_player, state.chain)

    def destinations(self, state: GameState, r: int, c: int) -> List[CheckersMove]:
        """Legal moves of the piece on (r, c)."""
        return [m for m in self.generate_moves(state) if m.fr == r and m.fc == c]

    # ------------------------------------------------------------------
    # Execution
    # ------------------------------------------------------------------

    def execute(self, state: CheckersState, move: CheckersMove) -> MoveResult:
        board = state.board
        mover = state.current_player
        piece = int(board[move.fr, move.fc])

        board[move.tr, move.tc] = piece
        board[move.fr, move.fc] = EMPTY

        captures = ()
        if move.is_capture:
            board[move.jumped] = EMPTY
            captures = (move.jumped,)

        promotion = abs(piece) == MAN and move.tr == back_rank(mover)
        if promotion:
            board[move.tr, move.tc] = sign(mover) * KING

        # Multi-jump: the same piece must continue before the turn passes
        if move.is_capture and self.captures_from(board, move.tr, move.tc):
            state.chain = (move.tr, move.tc)
            effects = Effects(captures=captures, promotion=promotion, extra_turn=True)
            return MoveResult(state, effects, state.outcome)

        state.chain = None
        nxt = opponent(mover)
        if count_pieces(board, nxt, signed=True) == 0 or not self.moves_for(board, nxt):
            state.outcome = Outcome.win(mover)
        state.current_player = nxt

        return MoveResult(state, Effects(captures=captures, promotion=promotion), state.outcome)

    # ------------------------------------------------------------------
    # Opponent
    # ------------------------------------------------------------------

    def select_move(self, state: GameState, legal: List[CheckersMove], rng: random.Random) -> CheckersMove:
        """Crown a man if possible, otherwise play any legal move."""
        rank = back_rank(state.current_player)
        crowning = [
            m for m in legal
            if m.tr == rank and abs(int(state.board[m.fr, m.fc])) == MAN
        ]
        return random_move(crowning or legal, rng)

    def state_string(self, state: GameState) -> str:
        lines = [render_grid(state.board, CELL_STRINGS)]
        side = "Red" if state.current_player == P1 else "Black"
        if state.chain is not None:
            lines.append(f"\n{side} must continue jumping from {state.chain}")
        else:
            lines.append(f"\n{side} to move")
        return "\n".join(lines)
