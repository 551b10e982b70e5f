"""
Game Hub - rule engines and heuristic opponents for classic board games.

Quick Start:
    from game_hub import VariantConfig, start_game, legal_moves, apply_move, choose_move

    config = VariantConfig("chess")
    state = start_game(config)
    state = apply_move(state, legal_moves(state)[0]).state
    reply = choose_move(state)

Modules:
    core       - Shared value types (Outcome, Effects, MoveResult) and errors
    games      - One stateless engine per game on a common GameBase
    selection  - Building blocks for the one-ply heuristic opponents
    session    - GameSession and schedulers for the computer's thinking delay
    simulation - Computer-vs-computer self-play batches
"""

from game_hub.api import (
    GAMES,
    VariantConfig,
    GameSession,
    ManualScheduler,
    ThreadingScheduler,
    create_engine,
    create_session,
    start_game,
    legal_moves,
    apply_move,
    outcome,
    awaiting_roll,
    roll,
    is_computer_turn,
    choose_move,
    describe,
)

from game_hub.core import (
    AlreadyFinished,
    Effects,
    GameError,
    IllegalMove,
    MoveResult,
    Outcome,
    Status,
)

__version__ = "1.0.0"

__all__ = [
    # Main API
    "GAMES",
    "VariantConfig",
    "GameSession",
    "ManualScheduler",
    "ThreadingScheduler",
    "create_engine",
    "create_session",
    "start_game",
    "legal_moves",
    "apply_move",
    "outcome",
    "awaiting_roll",
    "roll",
    "is_computer_turn",
    "choose_move",
    "describe",
    # Types
    "Effects",
    "MoveResult",
    "Outcome",
    "Status",
    # Errors
    "GameError",
    "IllegalMove",
    "AlreadyFinished",
]
