"""
Ludo for 2-4 players.

Token positions are stored in an int8 array of shape (colors, 4):
    -1        = in base
    0..51     = absolute index on the shared main path
    100..105  = home stretch (105 = finished)

A turn is two steps: roll the die (`roll`), then move one token by that
amount (`apply_move`). A 6 is needed to leave base. Rolling a 6, capturing,
or finishing a token earns another roll. Tokens on a safe cell cannot be
captured. The first color with all four tokens finished wins.
"""

from __future__ import annotations

import random
from typing import List, NamedTuple, Optional, Tuple

import numpy as np

from game_hub.core.errors import AlreadyFinished, IllegalMove
from game_hub.core.types import P1, Effects, MoveResult, Outcome
from game_hub.games.game_base import GameBase
from game_hub.games.game_state import GameState
from game_hub.selection.heuristics import best_scored

TOKENS_PER_COLOR = 4
PATH_LENGTH = 52
LAST_MAIN_STEP = 50
BASE = -1
HOME = 100
FINISHED = HOME + 5
EXIT_ROLL = 6

START_INDICES = {"red": 0, "green": 13, "yellow": 26, "blue": 39}
SAFE_CELLS = frozenset((0, 8, 13, 21, 26, 34, 39, 47))

COLORS_BY_COUNT = {
    2: ("red", "yellow"),
    3: ("red", "green", "yellow"),
    4: ("red", "green", "yellow", "blue"),
}


class LudoMove(NamedTuple):
    token: int      # 0..3, index among the active color's tokens
    roll: int


class LudoState(GameState):
    """
    board[i] holds the token positions of colors[i], played by player i + 1.
    `dice` is the pending roll, or None while the active player must roll.
    """
    __slots__ = ('colors', 'dice')

    def __init__(self, board: np.ndarray, current_player: int,
                 colors: Tuple[str, ...], dice: Optional[int] = None):
        super().__init__(board, current_player)
        self.colors = colors
        self.dice = dice

    @property
    def active_color(self) -> str:
        return self.colors[self.current_player - 1]

    def tokens_of(self, player: int) -> np.ndarray:
        return self.board[player - 1]


def target_position(position: int, roll: int, start: int) -> Optional[int]:
    """
    Where a token at `position` lands after `roll`, or None if it cannot move.
    """
    if position == BASE:
        return start if roll == EXIT_ROLL else None

    if position >= HOME:
        return position + roll if position - HOME + roll <= FINISHED - HOME else None

    steps = (position - start) % PATH_LENGTH
    if steps + roll <= LAST_MAIN_STEP:
        return (position + roll) % PATH_LENGTH
    return HOME + roll - (LAST_MAIN_STEP - steps) - 1


class Ludo(GameBase):
    """Ludo with safe cells, capture to base and bonus rolls."""

    MIN_PLAYERS = 2
    MAX_PLAYERS = 4

    def game_id(self) -> str:
        return "ludo"

    def initial_state(self, num_players: int = 2) -> LudoState:
        if num_players not in COLORS_BY_COUNT:
            raise ValueError(
                f"Ludo supports {self.MIN_PLAYERS}-{self.MAX_PLAYERS} players, got {num_players}"
            )
        colors = COLORS_BY_COUNT[num_players]
        board = np.full((len(colors), TOKENS_PER_COLOR), BASE, dtype=np.int8)
        return LudoState(board, current_player=P1, colors=colors)

    def players(self, state: GameState) -> Tuple[int, ...]:
        return tuple(range(1, len(state.colors) + 1))

    def next_player(self, state: LudoState) -> int:
        return state.current_player % len(state.colors) + 1

    # ------------------------------------------------------------------
    # Dice
    # ------------------------------------------------------------------

    def awaiting_roll(self, state: GameState) -> bool:
        return not state.is_over and state.dice is None

    def roll(self, state: GameState, value: int) -> MoveResult:
        """
        Record a die roll for the active player.

        If no token can move with it, the turn passes straight away and the
        skipped player is reported in Effects.passed.
        """
        if state.is_over:
            raise AlreadyFinished(f"ludo is already over: {state.outcome.describe()}")
        if state.dice is not None:
            raise IllegalMove(f"Player {state.current_player} must move with the {state.dice} first")
        if not 1 <= value <= 6:
            raise IllegalMove(f"Die value must be 1-6, got {value}")

        state = state.copy()
        state.dice = value
        if self.generate_moves(state):
            return MoveResult(state, Effects(), state.outcome)

        skipped = state.current_player
        state.dice = None
        state.current_player = self.next_player(state)
        return MoveResult(state, Effects(passed=(skipped,)), state.outcome)

    # ------------------------------------------------------------------
    # Move generation
    # ------------------------------------------------------------------

    def generate_moves(self, state: GameState) -> List[LudoMove]:
        if state.dice is None:
            return []
        start = START_INDICES[state.active_color]
        return [
            LudoMove(i, state.dice)
            for i, position in enumerate(state.tokens_of(state.current_player))
            if target_position(int(position), state.dice, start) is not None
        ]

    # ------------------------------------------------------------------
    # Execution
    # ------------------------------------------------------------------

    def execute(self, state: LudoState, move: LudoMove) -> MoveResult:
        mover = state.current_player
        tokens = state.board
        assert move.roll == state.dice

        position = int(tokens[mover - 1, move.token])
        target = target_position(position, move.roll, START_INDICES[state.active_color])
        assert target is not None and (0 <= target < PATH_LENGTH or HOME <= target <= FINISHED)

        captures = []
        if target < HOME and target not in SAFE_CELLS:
            for i in range(len(state.colors)):
                if i == mover - 1:
                    continue
                for t in np.flatnonzero(tokens[i] == target):
                    tokens[i, t] = BASE
                    captures.append((i + 1, int(t)))

        tokens[mover - 1, move.token] = target
        finished = target == FINISHED
        state.dice = None

        if np.all(tokens[mover - 1] == FINISHED):
            state.outcome = Outcome.win(mover)

        extra_turn = move.roll == EXIT_ROLL or bool(captures) or finished
        if not extra_turn or state.is_over:
            state.current_player = self.next_player(state)

        effects = Effects(
            captures=tuple(captures),
            extra_turn=extra_turn and not state.is_over,
            finished_token=finished,
        )
        return MoveResult(state, effects, state.outcome)

    # ------------------------------------------------------------------
    # Opponent
    # ------------------------------------------------------------------

    def select_move(self, state: GameState, legal: List[LudoMove], rng: random.Random) -> LudoMove:
        """
        Finish 100, capture 50, leave base 30, land on a safe cell 20,
        any progress 5, plus up to 5 of jitter.
        """
        mover = state.current_player
        tokens = state.board
        start = START_INDICES[state.active_color]
        enemies = np.delete(tokens, mover - 1, axis=0)

        def score(m: LudoMove) -> float:
            position = int(tokens[mover - 1, m.token])
            target = target_position(position, m.roll, start)
            value = 5
            if target == FINISHED:
                value += 100
            if target < HOME and target not in SAFE_CELLS and np.any(enemies == target):
                value += 50
            if position == BASE:
                value += 30
            if target in SAFE_CELLS:
                value += 20
            return value

        return best_scored(legal, score, rng, jitter=5.0)

    # ------------------------------------------------------------------
    # Display
    # ------------------------------------------------------------------

    @staticmethod
    def describe_position(position: int) -> str:
        if position == BASE:
            return "base"
        if position == FINISHED:
            return "done"
        if position >= HOME:
            return f"home {position - HOME}"
        return f"{position}*" if position in SAFE_CELLS else str(position)

    def format_move(self, move: LudoMove) -> str:
        return f"token {move.token} +{move.roll}"

    def state_string(self, state: GameState) -> str:
        lines = []
        for i, color in enumerate(state.colors):
            marker = ">" if i + 1 == state.current_player else " "
            cells = "  ".join(f"{t}:{self.describe_position(int(p)):>7}" for t, p in enumerate(state.board[i]))
            lines.append(f"{marker} P{i + 1} {color:<6} {cells}")
        if state.dice is None:
            lines.append(f"\n{state.active_color.capitalize()} to roll")
        else:
            lines.append(f"\n{state.active_color.capitalize()} rolled {state.dice}")
        return "\n".join(lines)
