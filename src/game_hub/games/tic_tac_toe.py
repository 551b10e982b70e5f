"""
TicTacToe game implementation.

Uses int8 board:
    0 = empty
    1 = player 1 (X)
    2 = player 2 (O)
"""

from __future__ import annotations

import random
from typing import List, NamedTuple

import numpy as np

from game_hub.core.types import DRAW, P1, Effects, MoveResult, Outcome
from game_hub.games.game_base import GameBase
from game_hub.games.game_rules import board_full, opponent, render_grid
from game_hub.games.game_state import GameState
from game_hub.selection.heuristics import first_matching, random_move

# Cell strings: each cell value maps to its display string
CELL_STRINGS = {0: " ", 1: "X", 2: "O"}

# Pre-computed winning lines (indices into flattened 3x3 board)
_WIN_LINES = np.array([
    [0, 1, 2], [3, 4, 5], [6, 7, 8],  # rows
    [0, 3, 6], [1, 4, 7], [2, 5, 8],  # cols
    [0, 4, 8], [2, 4, 6],             # diagonals
], dtype=np.int8)


class TicTacToeMove(NamedTuple):
    row: int
    col: int


def winner_of(board: np.ndarray) -> int:
    """Owner of a completed line, 0 if none."""
    flat = board.ravel()
    for line in _WIN_LINES:
        v = flat[line[0]]
        if v != 0 and flat[line[1]] == v and flat[line[2]] == v:
            return int(v)
    return 0


class TicTacToe(GameBase):
    """TicTacToe with a win/block/center opponent."""

    def game_id(self) -> str:
        return "tic_tac_toe"

    def initial_state(self, num_players: int = 2) -> GameState:
        return GameState(np.zeros((3, 3), dtype=np.int8), current_player=P1)

    def generate_moves(self, state: GameState) -> List[TicTacToeMove]:
        """Empty cells in row-major order."""
        return [TicTacToeMove(int(r), int(c)) for r, c in np.argwhere(state.board == 0)]

    def execute(self, state: GameState, move: TicTacToeMove) -> MoveResult:
        player = state.current_player
        state.board[move.row, move.col] = player

        if winner_of(state.board) == player:
            state.outcome = Outcome.win(player)
        elif board_full(state.board):
            state.outcome = DRAW

        state.current_player = opponent(player)
        return MoveResult(state, Effects(), state.outcome)

    def _completes_line(self, board: np.ndarray, move: TicTacToeMove, player: int) -> bool:
        trial = board.copy()
        trial[move.row, move.col] = player
        return winner_of(trial) == player

    def select_move(self, state: GameState, legal: List[TicTacToeMove], rng: random.Random) -> TicTacToeMove:
        """Win > block > center > random."""
        board = state.board
        me = state.current_player

        move = first_matching(legal, lambda m: self._completes_line(board, m, me))
        if move is None:
            move = first_matching(legal, lambda m: self._completes_line(board, m, opponent(me)))
        if move is None and TicTacToeMove(1, 1) in legal:
            move = TicTacToeMove(1, 1)
        if move is None:
            move = random_move(legal, rng)
        return move

    def state_string(self, state: GameState) -> str:
        return render_grid(state.board, CELL_STRINGS)
