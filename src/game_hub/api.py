"""
Public API for the engine-to-host boundary.

Usage:
    from game_hub import VariantConfig, start_game, legal_moves, apply_move

    config = VariantConfig("connect_four", computer_players=[2])
    state = start_game(config)
    result = apply_move(state, legal_moves(state)[0])
    if is_computer_turn(result.state, config):
        move = choose_move(result.state)

Every function routes the state back to its engine through the registry
name stamped on it by start_game(). Hosts that want the thinking delay and
cancellation handled for them use GameSession instead.
"""

from __future__ import annotations

import logging
import random
from typing import Any, List, Optional

from game_hub.core.types import MoveResult, Outcome
from game_hub.games.game_base import GameBase
from game_hub.games.game_state import GameState
from game_hub.session import GameSession, ManualScheduler, ThreadingScheduler
from game_hub.utils.config import GAMES, VariantConfig
from game_hub.utils.factory import create_engine, create_session

logger = logging.getLogger(__name__)


def engine_for(state: GameState) -> GameBase:
    """Engine that produced `state`."""
    if state.game is None:
        raise ValueError("State carries no game id; create it with start_game()")
    return create_engine(state.game)


def start_game(config: VariantConfig) -> GameState:
    state = create_engine(config.game_name).start(config.num_players)
    logger.debug("New %s game for %d players", config.game_name, config.num_players)
    return state


def legal_moves(state: GameState) -> List[Any]:
    """Legal moves for the active player. Raises AlreadyFinished on a terminal state."""
    return engine_for(state).legal_moves(state)


def apply_move(state: GameState, move: Any) -> MoveResult:
    """Validate and apply a move; `state` itself is left unchanged."""
    return engine_for(state).apply_move(state, move)


def outcome(state: GameState) -> Outcome:
    return state.outcome


def awaiting_roll(state: GameState) -> bool:
    return engine_for(state).awaiting_roll(state)


def roll(state: GameState, value: int) -> MoveResult:
    """Record a die roll (Ludo). Other games raise IllegalMove."""
    return engine_for(state).roll(state, value)


def is_computer_turn(state: GameState, config: VariantConfig) -> bool:
    return not state.is_over and state.current_player in config.computer_players


def choose_move(state: GameState, rng: Optional[random.Random] = None) -> Any:
    """
    Heuristic move for the active player.

    Only valid when legal_moves(state) is non-empty; a Ludo player who has
    not rolled yet must roll first.
    """
    return engine_for(state).choose_move(state, rng=rng)


def describe(state: GameState) -> str:
    """Text rendering of the board."""
    return engine_for(state).state_string(state)


__all__ = [
    "GAMES",
    "VariantConfig",
    "GameSession",
    "ManualScheduler",
    "ThreadingScheduler",
    "create_engine",
    "create_session",
    "engine_for",
    "start_game",
    "legal_moves",
    "apply_move",
    "outcome",
    "awaiting_roll",
    "roll",
    "is_computer_turn",
    "choose_move",
    "describe",
]
