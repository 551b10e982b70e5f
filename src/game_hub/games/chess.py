"""
Chess implementation.

Board encoding (int8):
    0 = empty
    Positive = Player 1 (white): 1=Pawn, 2=Knight, 3=Bishop, 4=Rook, 5=Queen, 6=King
    Negative = Player 2 (black): same codes, negated

This allows fast player checks: piece > 0 → P1, piece < 0 → P2.
White starts on rows 6-7 and moves toward row 0.

Rules modelled: pawn single/double step and diagonal capture, knight jumps,
sliding rook/bishop/queen, one-step king, auto-queen promotion, check,
checkmate and stalemate. Castling, en passant and underpromotion are not.
"""

from __future__ import annotations

import random
from typing import List, NamedTuple

import numpy as np

from game_hub.core.types import DRAW, P1, Effects, MoveResult, Outcome
from game_hub.games.game_base import GameBase
from game_hub.games.game_rules import (
    ALL_DIRS,
    DIAGONAL,
    ORTHOGONAL,
    in_bounds,
    opponent,
    owner,
    ray,
    render_grid,
    sign,
)
from game_hub.games.game_state import GameState
from game_hub.selection.heuristics import best_scored


# Piece type constants
EMPTY = 0
PAWN = 1
KNIGHT = 2
BISHOP = 3
ROOK = 4
QUEEN = 5
KING = 6

KNIGHT_JUMPS = ((-2, -1), (-2, 1), (2, -1), (2, 1), (-1, -2), (-1, 2), (1, -2), (1, 2))
SLIDES = {
    ROOK: ORTHOGONAL,
    BISHOP: DIAGONAL,
    QUEEN: ALL_DIRS,
}

# Material values used by the opponent's capture scoring
VALUES = {PAWN: 1, KNIGHT: 3, BISHOP: 3, ROOK: 5, QUEEN: 9, KING: 100}

BACK_RANK = (ROOK, KNIGHT, BISHOP, QUEEN, KING, BISHOP, KNIGHT, ROOK)

CELL_STRINGS = {
    0: " ",
    1: "P", -1: "p",
    2: "N", -2: "n",
    3: "B", -3: "b",
    4: "R", -4: "r",
    5: "Q", -5: "q",
    6: "K", -6: "k",
}


class ChessMove(NamedTuple):
    fr: int
    fc: int
    tr: int
    tc: int


class ChessState(GameState):
    """Board plus whether the side to move is in check."""
    __slots__ = ('in_check',)

    def __init__(self, board: np.ndarray, current_player: int, in_check: bool = False):
        super().__init__(board, current_player)
        self.in_check = in_check


class Chess(GameBase):
    """Standard 8x8 chess without castling or en passant."""

    ROWS = 8
    COLS = 8

    @staticmethod
    def _initial_board() -> np.ndarray:
        """Create starting position."""
        board = np.zeros((8, 8), dtype=np.int8)
        # Player 2 (negative): top rows
        board[0] = [-p for p in BACK_RANK]
        board[1] = -PAWN
        # Player 1 (positive): bottom rows
        board[6] = PAWN
        board[7] = BACK_RANK
        return board

    def game_id(self) -> str:
        return "chess"

    def initial_state(self, num_players: int = 2) -> ChessState:
        return ChessState(self._initial_board(), current_player=P1)

    # ------------------------------------------------------------------
    # Pseudo-legal generation
    # ------------------------------------------------------------------

    def piece_moves(self, board: np.ndarray, r: int, c: int) -> List[ChessMove]:
        """Pseudo-legal moves for the piece on (r, c), ignoring king safety."""
        piece = int(board[r, c])
        if piece == EMPTY:
            return []

        moves: List[ChessMove] = []
        piece_type = abs(piece)
        player = owner(piece)

        if piece_type == PAWN:
            self._add_pawn_moves(moves, board, r, c, player)
        elif piece_type == KNIGHT:
            self._add_step_moves(moves, board, r, c, player, KNIGHT_JUMPS)
        elif piece_type == KING:
            self._add_step_moves(moves, board, r, c, player, ALL_DIRS)
        else:
            self._add_line_moves(moves, board, r, c, player, SLIDES[piece_type])
        return moves

    def _add_pawn_moves(self, moves: list, board: np.ndarray, r: int, c: int, player: int):
        """Add pawn moves: forward 1, forward 2 from the start rank, capture diagonal."""
        dr = -1 if player == P1 else 1
        start_row = 6 if player == P1 else 1
        nr = r + dr

        if not 0 <= nr < self.ROWS:
            return

        if board[nr, c] == EMPTY:
            moves.append(ChessMove(r, c, nr, c))
            if r == start_row and board[nr + dr, c] == EMPTY:
                moves.append(ChessMove(r, c, nr + dr, c))

        for dc in (-1, 1):
            nc = c + dc
            if 0 <= nc < self.COLS:
                target = owner(int(board[nr, nc]))
                if target and target != player:
                    moves.append(ChessMove(r, c, nr, nc))

    def _add_step_moves(self, moves: list, board: np.ndarray, r: int, c: int,
                        player: int, steps: tuple):
        """Add single-step moves (King, Knight)."""
        for dr, dc in steps:
            nr, nc = r + dr, c + dc
            if in_bounds(board, nr, nc) and owner(int(board[nr, nc])) != player:
                moves.append(ChessMove(r, c, nr, nc))

    def _add_line_moves(self, moves: list, board: np.ndarray, r: int, c: int,
                        player: int, directions: tuple):
        """Add sliding moves (Rook, Bishop, Queen), stopped by the first occupied square."""
        for dr, dc in directions:
            for nr, nc in ray(board, r, c, dr, dc):
                target = owner(int(board[nr, nc]))
                if target != player:
                    moves.append(ChessMove(r, c, nr, nc))
                if target:
                    break

    def pseudo_moves(self, board: np.ndarray, player: int) -> List[ChessMove]:
        moves: List[ChessMove] = []
        for r, c in zip(*np.nonzero(board > 0 if player == P1 else board < 0)):
            moves.extend(self.piece_moves(board, int(r), int(c)))
        return moves

    # ------------------------------------------------------------------
    # King safety
    # ------------------------------------------------------------------

    def is_king_in_check(self, board: np.ndarray, player: int) -> bool:
        """True if any enemy pseudo-legal move lands on player's king."""
        found = np.argwhere(board == sign(player) * KING)
        if len(found) == 0:
            return False
        kr, kc = int(found[0][0]), int(found[0][1])
        return any(
            m.tr == kr and m.tc == kc
            for m in self.pseudo_moves(board, opponent(player))
        )

    def _leaves_king_safe(self, board: np.ndarray, move: ChessMove, player: int) -> bool:
        trial = board.copy()
        trial[move.tr, move.tc] = trial[move.fr, move.fc]
        trial[move.fr, move.fc] = EMPTY
        return not self.is_king_in_check(trial, player)

    def moves_for(self, board: np.ndarray, player: int) -> List[ChessMove]:
        """All legal moves for player on an arbitrary board."""
        return [m for m in self.pseudo_moves(board, player) if self._leaves_king_safe(board, m, player)]

    def has_legal_move(self, board: np.ndarray, player: int) -> bool:
        return any(self._leaves_king_safe(board, m, player) for m in self.pseudo_moves(board, player))

    def generate_moves(self, state: GameState) -> List[ChessMove]:
        return self.moves_for(state.board, state.current_player)

    def destinations(self, state: GameState, r: int, c: int) -> List[ChessMove]:
        """Legal moves of the piece on (r, c) if it belongs to the side to move."""
        if owner(int(state.board[r, c])) != state.current_player:
            return []
        return [m for m in self.piece_moves(state.board, r, c)
                if self._leaves_king_safe(state.board, m, state.current_player)]

    # ------------------------------------------------------------------
    # Execution
    # ------------------------------------------------------------------

    def execute(self, state: ChessState, move: ChessMove) -> MoveResult:
        board = state.board
        mover = state.current_player
        piece = int(board[move.fr, move.fc])
        target = int(board[move.tr, move.tc])

        board[move.tr, move.tc] = piece
        board[move.fr, move.fc] = EMPTY

        # Promotion (auto-queen)
        last_rank = 0 if mover == P1 else self.ROWS - 1
        promotion = abs(piece) == PAWN and move.tr == last_rank
        if promotion:
            board[move.tr, move.tc] = sign(mover) * QUEEN

        nxt = opponent(mover)
        in_check = self.is_king_in_check(board, nxt)
        if not self.has_legal_move(board, nxt):
            state.outcome = Outcome.win(mover) if in_check else DRAW

        state.current_player = nxt
        state.in_check = in_check

        effects = Effects(
            captures=((move.tr, move.tc),) if target else (),
            promotion=promotion,
            check=in_check,
        )
        return MoveResult(state, effects, state.outcome)

    # ------------------------------------------------------------------
    # Opponent
    # ------------------------------------------------------------------

    def select_move(self, state: GameState, legal: List[ChessMove], rng: random.Random) -> ChessMove:
        """10x captured material plus a small jitter to avoid repetition."""
        board = state.board

        def score(m: ChessMove) -> float:
            target = abs(int(board[m.tr, m.tc]))
            return VALUES[target] * 10 if target else 0

        return best_scored(legal, score, rng, jitter=1.0)

    def state_string(self, state: GameState) -> str:
        """Pretty-print the board."""
        lines = [render_grid(state.board, CELL_STRINGS)]
        side = "White" if state.current_player == P1 else "Black"
        status = " (check)" if state.in_check else ""
        lines.append(f"\n{side} to move{status}")
        return "\n".join(lines)
