"""
Reversi (Othello) on an 8x8 board.

Uses int8 board:
    0 = empty
    1 = player 1 (black, moves first)
    2 = player 2 (white)

Discs are never removed, only flipped. A player with no legal placement is
passed automatically; the game ends when neither side can place.
"""

from __future__ import annotations

import random
from typing import List, NamedTuple, Tuple

import numpy as np

from game_hub.core.types import DRAW, P1, P2, Effects, MoveResult, Outcome
from game_hub.games.game_base import GameBase
from game_hub.games.game_rules import ALL_DIRS, count_pieces, opponent, ray, render_grid
from game_hub.games.game_state import GameState
from game_hub.selection.heuristics import best_scored

SIZE = 8

CELL_STRINGS = {0: " ", 1: "●", 2: "○"}

# Positional weights: corners best, squares next to corners worst
WEIGHTS = np.array([
    [100, -20, 10,  5,  5, 10, -20, 100],
    [-20, -50, -2, -2, -2, -2, -50, -20],
    [ 10,  -2,  5,  1,  1,  5,  -2,  10],
    [  5,  -2,  1,  1,  1,  1,  -2,   5],
    [  5,  -2,  1,  1,  1,  1,  -2,   5],
    [ 10,  -2,  5,  1,  1,  5,  -2,  10],
    [-20, -50, -2, -2, -2, -2, -50, -20],
    [100, -20, 10,  5,  5, 10, -20, 100],
], dtype=np.int16)


class ReversiMove(NamedTuple):
    row: int
    col: int


class Reversi(GameBase):
    """Reversi with automatic passing."""

    @staticmethod
    def _initial_board() -> np.ndarray:
        board = np.zeros((SIZE, SIZE), dtype=np.int8)
        board[3, 3] = P2
        board[4, 4] = P2
        board[3, 4] = P1
        board[4, 3] = P1
        return board

    def game_id(self) -> str:
        return "reversi"

    def initial_state(self, num_players: int = 2) -> GameState:
        return GameState(self._initial_board(), current_player=P1)

    def flips(self, board: np.ndarray, r: int, c: int, player: int) -> List[Tuple[int, int]]:
        """Opponent discs bracketed by a disc placed at (r, c), over all 8 directions."""
        if board[r, c] != 0:
            return []

        enemy = opponent(player)
        total: List[Tuple[int, int]] = []
        for dr, dc in ALL_DIRS:
            run: List[Tuple[int, int]] = []
            for nr, nc in ray(board, r, c, dr, dc):
                cell = board[nr, nc]
                if cell == enemy:
                    run.append((nr, nc))
                    continue
                if cell == player:
                    total.extend(run)
                break
        return total

    def moves_for(self, board: np.ndarray, player: int) -> List[ReversiMove]:
        return [
            ReversiMove(int(r), int(c))
            for r, c in np.argwhere(board == 0)
            if self.flips(board, int(r), int(c), player)
        ]

    def generate_moves(self, state: GameState) -> List[ReversiMove]:
        return self.moves_for(state.board, state.current_player)

    def execute(self, state: GameState, move: ReversiMove) -> MoveResult:
        board = state.board
        mover = state.current_player
        flipped = self.flips(board, move.row, move.col, mover)
        assert flipped, f"placement at {move} flips nothing"

        board[move.row, move.col] = mover
        for square in flipped:
            board[square] = mover

        nxt = opponent(mover)
        passed: Tuple[int, ...] = ()
        if self.moves_for(board, nxt):
            state.current_player = nxt
        elif self.moves_for(board, mover):
            passed = (nxt,)
        else:
            state.outcome = self.final_outcome(board)
            state.current_player = nxt

        effects = Effects(flips=tuple(flipped), passed=passed, extra_turn=bool(passed))
        return MoveResult(state, effects, state.outcome)

    def final_outcome(self, board: np.ndarray) -> Outcome:
        """Majority disc count wins; equal counts draw."""
        p1 = count_pieces(board, P1)
        p2 = count_pieces(board, P2)
        if p1 == p2:
            return DRAW
        return Outcome.win(P1 if p1 > p2 else P2)

    def select_move(self, state: GameState, legal: List[ReversiMove], rng: random.Random) -> ReversiMove:
        """Positional weight + flip count + jitter."""
        board = state.board
        player = state.current_player

        def score(m: ReversiMove) -> float:
            return int(WEIGHTS[m.row, m.col]) + len(self.flips(board, m.row, m.col, player))

        return best_scored(legal, score, rng, jitter=0.5)

    def state_string(self, state: GameState) -> str:
        board = state.board
        lines = [render_grid(board, CELL_STRINGS)]
        lines.append(
            f"\nBlack: {count_pieces(board, P1)}  White: {count_pieces(board, P2)}  "
            f"{'Black' if state.current_player == P1 else 'White'} to move"
        )
        return "\n".join(lines)
