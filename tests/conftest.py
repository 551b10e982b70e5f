"""
Shared test fixtures for game_hub tests.

Design principles:
- Game-agnostic fixtures where possible
- Seeded randomness everywhere
- Minimal, focused fixtures
"""

import random
from typing import Any, List, Tuple

import pytest

from game_hub.games.game_base import GameBase
from game_hub.games.game_state import GameState
from game_hub.session import ManualScheduler
from game_hub.utils.config import GAMES


ALL_GAMES = sorted(GAMES.keys())


def play_until(engine: GameBase, state: GameState, rng: random.Random,
               max_actions: int = 400) -> List[Tuple[GameState, Any]]:
    """
    Play heuristic moves (and dice rolls) from state.

    Returns the (state before, action) pairs taken; rolls are recorded as
    ("roll", value).
    """
    history = []
    for _ in range(max_actions):
        if state.is_over:
            break
        if engine.awaiting_roll(state):
            value = rng.randint(1, 6)
            history.append((state, ("roll", value)))
            state = engine.roll(state, value).state
            continue
        move = engine.choose_move(state, rng=rng)
        history.append((state, move))
        state = engine.apply_move(state, move).state
    return history


# =============================================================================
# Randomness
# =============================================================================

@pytest.fixture
def rng() -> random.Random:
    """Seeded random source."""
    return random.Random(1234)


# =============================================================================
# Game Fixtures (Game-Agnostic)
# =============================================================================

@pytest.fixture(params=ALL_GAMES)
def any_engine(request) -> GameBase:
    """Every registered engine in turn."""
    return GAMES[request.param]()


@pytest.fixture
def two_player_engine() -> GameBase:
    """A small 2-player game for session tests."""
    return GAMES["tic_tac_toe"]()


# =============================================================================
# Scheduling Fixtures
# =============================================================================

@pytest.fixture
def manual_scheduler() -> ManualScheduler:
    """Deterministic scheduler advanced by the test."""
    return ManualScheduler()


@pytest.fixture
def play():
    """The play_until helper."""
    return play_until
