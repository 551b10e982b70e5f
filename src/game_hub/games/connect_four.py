"""
Connect Four implementation.

Uses int8 board of 6 rows x 7 columns:
    0 = empty
    1 = player 1
    2 = player 2

Row 5 is the bottom. A move is a column index; the disc falls to the lowest
empty row of that column.
"""

from __future__ import annotations

import random
from typing import List

import numpy as np

from game_hub.core.types import DRAW, P1, Effects, MoveResult, Outcome
from game_hub.games.game_base import GameBase
from game_hub.games.game_rules import board_full, line_through, opponent, render_grid
from game_hub.games.game_state import GameState
from game_hub.selection.heuristics import by_priority, first_matching

ROWS = 6
COLS = 7
CONNECT = 4

# Column preference when there is nothing to win or block
CENTER_ORDER = (3, 2, 4, 1, 5, 0, 6)

CELL_STRINGS = {0: " ", 1: "X", 2: "O"}


class ConnectFour(GameBase):
    """Connect Four on the standard 6x7 grid."""

    def game_id(self) -> str:
        return "connect_four"

    def initial_state(self, num_players: int = 2) -> GameState:
        return GameState(np.zeros((ROWS, COLS), dtype=np.int8), current_player=P1)

    @staticmethod
    def drop_row(board: np.ndarray, col: int) -> int:
        """Lowest empty row in col, or -1 if the column is full."""
        empty = np.flatnonzero(board[:, col] == 0)
        return int(empty[-1]) if len(empty) else -1

    def generate_moves(self, state: GameState) -> List[int]:
        return [c for c in range(COLS) if state.board[0, c] == 0]

    def wins_with(self, board: np.ndarray, col: int, player: int) -> bool:
        """True if player dropping into col completes four in a line."""
        row = self.drop_row(board, col)
        if row < 0:
            return False
        trial = board.copy()
        trial[row, col] = player
        return bool(line_through(trial, row, col, CONNECT))

    def execute(self, state: GameState, move: int) -> MoveResult:
        board = state.board
        mover = state.current_player
        col = int(move)
        row = self.drop_row(board, col)
        assert row >= 0, f"column {col} is full"

        board[row, col] = mover

        if line_through(board, row, col, CONNECT):
            state.outcome = Outcome.win(mover)
        elif board_full(board):
            state.outcome = DRAW

        state.current_player = opponent(mover)
        return MoveResult(state, Effects(), state.outcome)

    def select_move(self, state: GameState, legal: List[int], rng: random.Random) -> int:
        """Win > block > center bias (CENTER_ORDER covers every column)."""
        board = state.board
        me = state.current_player
        them = opponent(me)

        move = first_matching(legal, lambda c: self.wins_with(board, c, me))
        if move is None:
            move = first_matching(legal, lambda c: self.wins_with(board, c, them))
        if move is None:
            move = by_priority(legal, CENTER_ORDER)
        return move

    def state_string(self, state: GameState) -> str:
        lines = [render_grid(state.board, CELL_STRINGS)]
        lines.append(f"\nPlayer {state.current_player} to drop")
        return "\n".join(lines)
