"""
Factory functions for creating engines and sessions.
"""

import random
from typing import Optional

from game_hub.games.game_base import GameBase
from game_hub.session import GameSession, TurnScheduler
from game_hub.utils.config import GAMES, VariantConfig, available_games


def create_engine(game_name: str) -> GameBase:
    """
    Create a rule engine by registry name.

    Args:
        game_name: Key from GAMES registry (e.g., "chess")

    Returns:
        Stateless engine instance
    """
    if game_name not in GAMES:
        raise ValueError(f"Unknown game: {game_name}. Available: {available_games()}")
    return GAMES[game_name]()


def create_session(
    config: VariantConfig,
    scheduler: Optional[TurnScheduler] = None,
    rng: Optional[random.Random] = None,
) -> GameSession:
    """
    Create an unstarted session for a configured variant.

    Args:
        config: Validated variant configuration
        scheduler: Where computer turns are deferred (default: threading timers)
        rng: Random source for the computer (default: seeded from config.seed)

    Returns:
        GameSession; call start() to begin
    """
    return GameSession(create_engine(config.game_name), config, scheduler=scheduler, rng=rng)
