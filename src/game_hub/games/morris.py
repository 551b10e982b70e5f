"""
Nine Men's Morris.

The board is a vector of 24 intersections (int8: 0 empty, 1/2 owner) with a
fixed adjacency relation and 16 mills. Phases:

    PLACING   each player drops their 9 pieces on empty nodes
    MOVING    slide one piece to an adjacent empty node
    FLYING    a player down to 3 pieces may jump to any empty node
    REMOVING  after forming a mill the mover removes one opposing piece

REMOVING is a sub-phase: `resume_phase` remembers the phase it interrupted.
"""

from __future__ import annotations

import random
from enum import Enum
from typing import Dict, List, NamedTuple, Optional, Tuple

import numpy as np

from game_hub.core.types import P1, P2, Effects, MoveResult, Outcome
from game_hub.games.game_base import GameBase
from game_hub.games.game_rules import count_pieces, opponent
from game_hub.games.game_state import GameState
from game_hub.selection.heuristics import best_scored_random_tie, random_move

NUM_NODES = 24
PIECES_PER_PLAYER = 9
FLYING_THRESHOLD = 3

# Node -> (x, y) on a 7x7 lattice, used only for display
NODE_COORDS = (
    (0, 0), (3, 0), (6, 0),
    (1, 1), (3, 1), (5, 1),
    (2, 2), (3, 2), (4, 2),
    (0, 3), (1, 3), (2, 3), (4, 3), (5, 3), (6, 3),
    (2, 4), (3, 4), (4, 4),
    (1, 5), (3, 5), (5, 5),
    (0, 6), (3, 6), (6, 6),
)

ADJACENCY: Dict[int, Tuple[int, ...]] = {
    0: (1, 9), 1: (0, 2, 4), 2: (1, 14),
    3: (4, 10), 4: (1, 3, 5, 7), 5: (4, 13),
    6: (7, 11), 7: (4, 6, 8), 8: (7, 12),
    9: (0, 10, 21), 10: (3, 9, 11, 18), 11: (6, 10, 15),
    12: (8, 13, 17), 13: (5, 12, 14, 20), 14: (2, 13, 23),
    15: (11, 16), 16: (15, 17, 19), 17: (12, 16),
    18: (10, 19), 19: (16, 18, 20, 22), 20: (13, 19),
    21: (9, 22), 22: (19, 21, 23), 23: (14, 22),
}

MILLS = (
    # horizontal
    (0, 1, 2), (3, 4, 5), (6, 7, 8), (9, 10, 11),
    (12, 13, 14), (15, 16, 17), (18, 19, 20), (21, 22, 23),
    # vertical
    (0, 9, 21), (3, 10, 18), (6, 11, 15), (1, 4, 7),
    (16, 19, 22), (8, 12, 17), (5, 13, 20), (2, 14, 23),
)

MILLS_BY_NODE: Dict[int, Tuple[Tuple[int, int, int], ...]] = {
    node: tuple(m for m in MILLS if node in m) for node in range(NUM_NODES)
}

CELL_STRINGS = {1: "X", 2: "O"}


class Phase(Enum):
    PLACING = "placing"
    MOVING = "moving"
    FLYING = "flying"
    REMOVING = "removing"


class MorrisMove(NamedTuple):
    """
    PLACING:         node = where to place, origin = None
    MOVING / FLYING: origin -> node
    REMOVING:        node = opposing piece to remove, origin = None
    """
    node: int
    origin: Optional[int] = None


class MorrisState(GameState):
    __slots__ = ('phase', 'resume_phase', 'placed')

    def __init__(self, board: np.ndarray, current_player: int,
                 phase: Phase = Phase.PLACING,
                 resume_phase: Optional[Phase] = None,
                 placed: Tuple[int, int] = (0, 0)):
        super().__init__(board, current_player)
        self.phase = phase
        self.resume_phase = resume_phase
        self.placed = placed

    def placed_by(self, player: int) -> int:
        return self.placed[player - 1]

    def in_hand(self, player: int) -> int:
        return PIECES_PER_PLAYER - self.placed[player - 1]


def forms_mill(board: np.ndarray, node: int, player: int) -> bool:
    """True if node lies on a mill completely owned by player."""
    return any(all(board[n] == player for n in mill) for mill in MILLS_BY_NODE[node])


def removable(board: np.ndarray, victim: int) -> List[int]:
    """
    Victim's pieces that may be removed: those outside mills, or all of them
    when every piece stands in a mill.
    """
    pieces = [int(n) for n in np.flatnonzero(board == victim)]
    free = [n for n in pieces if not forms_mill(board, n, victim)]
    return free or pieces


class NineMensMorris(GameBase):
    """Nine Men's Morris with flying and the all-in-mills removal exception."""

    def game_id(self) -> str:
        return "nine_mens_morris"

    def initial_state(self, num_players: int = 2) -> MorrisState:
        return MorrisState(np.zeros(NUM_NODES, dtype=np.int8), current_player=P1)

    # ------------------------------------------------------------------
    # Move generation
    # ------------------------------------------------------------------

    def moves_for(self, board: np.ndarray, player: int, phase: Phase) -> List[MorrisMove]:
        empty = [int(n) for n in np.flatnonzero(board == 0)]

        if phase is Phase.PLACING:
            return [MorrisMove(n) for n in empty]
        if phase is Phase.REMOVING:
            return [MorrisMove(n) for n in removable(board, opponent(player))]

        moves = []
        for origin in np.flatnonzero(board == player):
            origin = int(origin)
            targets = empty if phase is Phase.FLYING else [n for n in ADJACENCY[origin] if board[n] == 0]
            moves.extend(MorrisMove(n, origin) for n in targets)
        return moves

    def generate_moves(self, state: GameState) -> List[MorrisMove]:
        return self.moves_for(state.board, state.current_player, state.phase)

    def destinations(self, state: GameState, origin: int) -> List[int]:
        """Nodes the piece on `origin` may move to (MOVING / FLYING only)."""
        return [m.node for m in self.generate_moves(state) if m.origin == origin]

    @staticmethod
    def movement_phase(state: MorrisState, player: int) -> Phase:
        """Phase for player at the start of their turn."""
        if state.placed_by(P1) < PIECES_PER_PLAYER or state.placed_by(P2) < PIECES_PER_PLAYER:
            return Phase.PLACING
        if count_pieces(state.board, player) == FLYING_THRESHOLD:
            return Phase.FLYING
        return Phase.MOVING

    @staticmethod
    def material(state: MorrisState, player: int) -> int:
        """Pieces on the board plus pieces still to place."""
        return count_pieces(state.board, player) + state.in_hand(player)

    # ------------------------------------------------------------------
    # Execution
    # ------------------------------------------------------------------

    def execute(self, state: MorrisState, move: MorrisMove) -> MoveResult:
        board = state.board
        mover = state.current_player

        if state.phase is Phase.REMOVING:
            assert board[move.node] == opponent(mover)
            board[move.node] = 0
            victim = opponent(mover)
            if self.material(state, victim) < FLYING_THRESHOLD:
                state.outcome = Outcome.win(mover)
                state.phase = state.resume_phase
                state.resume_phase = None
                state.current_player = victim
            else:
                self._end_turn(state)
            return MoveResult(state, Effects(captures=(move.node,)), state.outcome)

        if state.phase is Phase.PLACING:
            board[move.node] = mover
            placed = list(state.placed)
            placed[mover - 1] += 1
            state.placed = tuple(placed)
        else:
            board[move.origin] = 0
            board[move.node] = mover

        if forms_mill(board, move.node, mover) and removable(board, opponent(mover)):
            state.resume_phase = state.phase
            state.phase = Phase.REMOVING
            return MoveResult(state, Effects(mill=True, extra_turn=True), state.outcome)

        self._end_turn(state)
        return MoveResult(state, Effects(), state.outcome)

    def _end_turn(self, state: MorrisState) -> None:
        """Pass the turn and check whether the next player is blocked."""
        mover = state.current_player
        nxt = opponent(mover)
        state.current_player = nxt
        state.resume_phase = None
        state.phase = self.movement_phase(state, nxt)

        if state.placed_by(nxt) == PIECES_PER_PLAYER and not self.moves_for(state.board, nxt, state.phase):
            state.outcome = Outcome.win(mover)

    # ------------------------------------------------------------------
    # Opponent
    # ------------------------------------------------------------------

    def select_move(self, state: GameState, legal: List[MorrisMove], rng: random.Random) -> MorrisMove:
        """
        Removal: any legal target at random.
        Otherwise: 100 for completing a mill, 50 for occupying a node that
        would complete an opponent mill, random among the best.
        """
        if state.phase is Phase.REMOVING:
            return random_move(legal, rng)

        board = state.board
        me = state.current_player
        them = opponent(me)

        def score(m: MorrisMove) -> int:
            value = 0
            trial = board.copy()
            if m.origin is not None:
                trial[m.origin] = 0
            trial[m.node] = me
            if forms_mill(trial, m.node, me):
                value += 100
            block = board.copy()
            block[m.node] = them
            if forms_mill(block, m.node, them):
                value += 50
            return value

        return best_scored_random_tie(legal, score, rng)

    def format_move(self, move: MorrisMove) -> str:
        if move.origin is None:
            return str(move.node)
        return f"{move.origin}->{move.node}"

    def state_string(self, state: GameState) -> str:
        """Board drawing; empty nodes show their index."""
        width, height = 6 * 5 + 2, 13
        canvas = [[" "] * width for _ in range(height)]

        def at(node: int) -> Tuple[int, int]:
            x, y = NODE_COORDS[node]
            return y * 2, x * 5

        for a, neighbours in ADJACENCY.items():
            for b in neighbours:
                (ra, ca), (rb, cb) = at(a), at(b)
                if ra == rb:
                    for col in range(min(ca, cb) + 2, max(ca, cb)):
                        canvas[ra][col] = "-"
                else:
                    for row in range(min(ra, rb) + 1, max(ra, rb)):
                        canvas[row][ca] = "|"

        for node in range(NUM_NODES):
            row, col = at(node)
            value = int(state.board[node])
            label = f" {CELL_STRINGS[value]}" if value else f"{node:02d}"
            canvas[row][col] = label[0]
            canvas[row][col + 1] = label[1]

        lines = ["".join(line).rstrip() for line in canvas]
        lines.append(
            f"\nPlayer {state.current_player} ({state.phase.value})  "
            f"in hand: X={state.in_hand(P1)} O={state.in_hand(P2)}"
        )
        return "\n".join(lines)
