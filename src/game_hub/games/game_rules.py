"""
NumPy utilities shared by the grid games.

Direction tables, bounds checks, ray walking and run counting. All helpers
take the board as an explicit argument and never mutate it.
"""

from __future__ import annotations

from typing import Dict, Iterator, List, Tuple

import numpy as np

from game_hub.core.types import P1, P2

# Direction vectors (dr, dc)
ORTHOGONAL = ((0, 1), (0, -1), (1, 0), (-1, 0))
DIAGONAL = ((1, 1), (1, -1), (-1, 1), (-1, -1))
ALL_DIRS = ORTHOGONAL + DIAGONAL

# One representative per axis family: row, column, two diagonals
LINE_AXES = ((0, 1), (1, 0), (1, 1), (1, -1))


def in_bounds(board: np.ndarray, r: int, c: int) -> bool:
    """Return True if (r, c) is inside the board."""
    rows, cols = board.shape
    return 0 <= r < rows and 0 <= c < cols


def opponent(player: int) -> int:
    """Other side in a two-player game."""
    return P2 if player == P1 else P1


def sign(player: int) -> int:
    """Board sign for a player in signed-piece games: P1 > 0, P2 < 0."""
    return 1 if player == P1 else -1


def owner(piece: int) -> int:
    """Owner of a signed piece code, 0 for an empty square."""
    if piece > 0:
        return P1
    if piece < 0:
        return P2
    return 0


def ray(board: np.ndarray, r: int, c: int, dr: int, dc: int) -> Iterator[Tuple[int, int]]:
    """Yield squares from (r, c) outward along (dr, dc), excluding the origin."""
    nr, nc = r + dr, c + dc
    while in_bounds(board, nr, nc):
        yield nr, nc
        nr += dr
        nc += dc


def run_length(board: np.ndarray, r: int, c: int, dr: int, dc: int, value: int) -> int:
    """Count consecutive `value` cells from (r, c) along (dr, dc), origin excluded."""
    count = 0
    for nr, nc in ray(board, r, c, dr, dc):
        if board[nr, nc] != value:
            break
        count += 1
    return count


def line_through(board: np.ndarray, r: int, c: int, length: int) -> List[Tuple[int, int]]:
    """
    Return the cells of a line of at least `length` same-valued cells through
    (r, c), or an empty list. Checks row, column and both diagonals.
    """
    value = board[r, c]
    if value == 0:
        return []
    for dr, dc in LINE_AXES:
        forward = run_length(board, r, c, dr, dc, value)
        backward = run_length(board, r, c, -dr, -dc, value)
        if forward + backward + 1 >= length:
            return [(r + dr * i, c + dc * i) for i in range(-backward, forward + 1)]
    return []


def board_full(board: np.ndarray) -> bool:
    """Return True if no cell is empty."""
    return not np.any(board == 0)


def count_pieces(board: np.ndarray, player: int, signed: bool = False) -> int:
    """Number of cells owned by player (signed boards use the sign convention)."""
    if signed:
        return int(np.count_nonzero(board > 0 if player == P1 else board < 0))
    return int(np.count_nonzero(board == player))


def render_grid(board: np.ndarray, cell_strings: Dict[int, str], width: int = 1) -> str:
    """Box-drawn grid with row/column indices along the edges."""
    rows, cols = board.shape
    seg = "─" * (width + 2)
    header = "   " + " ".join(f"{c:^{width + 2}}" for c in range(cols))
    lines = [header, "  ╭" + "┬".join([seg] * cols) + "╮"]
    for i in range(rows):
        cells = " │ ".join(f"{cell_strings[int(board[i, j])]:^{width}}" for j in range(cols))
        lines.append(f"{i} │ {cells} │")
        if i < rows - 1:
            lines.append("  ├" + "┼".join([seg] * cols) + "┤")
    lines.append("  ╰" + "┴".join([seg] * cols) + "╯")
    return "\n".join(lines)
