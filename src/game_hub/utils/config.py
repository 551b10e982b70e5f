"""
Configuration and game registry.
"""

from typing import Iterable, Optional

from game_hub.games import (
    Checkers,
    Chess,
    ConnectFour,
    Ludo,
    NineMensMorris,
    Reversi,
    TicTacToe,
)
from game_hub.core.types import P2


# ---------------------------------------------------------------------------
# Game Registry
# ---------------------------------------------------------------------------

GAMES = {
    "chess": Chess,
    "checkers": Checkers,
    "reversi": Reversi,
    "nine_mens_morris": NineMensMorris,
    "connect_four": ConnectFour,
    "ludo": Ludo,
    "tic_tac_toe": TicTacToe,
}

# Seconds the computer "thinks" before acting
DEFAULT_THINKING_DELAY = 1.0

THINKING_DELAYS = {
    "chess": 0.8,
    "tic_tac_toe": 0.8,
}


def available_games() -> str:
    return ", ".join(GAMES.keys())


def thinking_delay_for(game_name: str) -> float:
    return THINKING_DELAYS.get(game_name, DEFAULT_THINKING_DELAY)


# ---------------------------------------------------------------------------
# Variant configuration
# ---------------------------------------------------------------------------

class VariantConfig:
    """
    One game variant: which game, how many players, who the computer plays.

    By default the computer plays player 2, as in a "vs computer" match.
    Pass computer_players=() for hot-seat play.
    """

    def __init__(
        self,
        game_name: str = "tic_tac_toe",
        num_players: Optional[int] = None,
        computer_players: Optional[Iterable[int]] = None,
        thinking_delay: Optional[float] = None,
        seed: Optional[int] = None,
    ):
        if game_name not in GAMES:
            raise ValueError(f"Unknown game: {game_name}. Available: {available_games()}")

        game_class = GAMES[game_name]
        if num_players is None:
            num_players = game_class.MIN_PLAYERS
        if not game_class.MIN_PLAYERS <= num_players <= game_class.MAX_PLAYERS:
            raise ValueError(
                f"{game_name} supports {game_class.MIN_PLAYERS}-{game_class.MAX_PLAYERS} "
                f"players, got {num_players}"
            )

        computer = frozenset((P2,) if computer_players is None else computer_players)
        invalid = sorted(p for p in computer if not 1 <= p <= num_players)
        if invalid:
            raise ValueError(
                f"Invalid computer player(s): {invalid}. {game_name} has players 1-{num_players}."
            )

        if thinking_delay is None:
            thinking_delay = thinking_delay_for(game_name)
        if thinking_delay < 0:
            raise ValueError(f"thinking_delay must be >= 0, got {thinking_delay}")

        self.game_name = game_name
        self.num_players = num_players
        self.computer_players = computer
        self.thinking_delay = thinking_delay
        self.seed = seed

    @property
    def human_players(self) -> frozenset:
        return frozenset(range(1, self.num_players + 1)) - self.computer_players

    def __repr__(self) -> str:
        return (
            f"VariantConfig(game_name={self.game_name!r}, num_players={self.num_players}, "
            f"computer_players={sorted(self.computer_players)}, "
            f"thinking_delay={self.thinking_delay}, seed={self.seed})"
        )


# Default configuration
DEFAULT_CONFIG = VariantConfig()
