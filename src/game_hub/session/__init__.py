"""
Session module - scheduling of computer turns around the pure engines.
"""

from game_hub.session.scheduler import (
    ScheduledCall,
    TurnScheduler,
    ThreadingScheduler,
    ManualScheduler,
)
from game_hub.session.game_session import GameSession, SessionClosed

__all__ = [
    "ScheduledCall",
    "TurnScheduler",
    "ThreadingScheduler",
    "ManualScheduler",
    "GameSession",
    "SessionClosed",
]
