"""
Simulation module - computer-vs-computer self-play batches.
"""

from game_hub.simulation.jobs import BatchSummary, GameJob, JobResult, MoveRecord
from game_hub.simulation.runner import SelfPlayRunner, DEFAULT_WORKER_COUNT, DEFAULT_MAX_TURNS
from game_hub.simulation.worker import run_game

__all__ = [
    "BatchSummary",
    "GameJob",
    "JobResult",
    "MoveRecord",
    "SelfPlayRunner",
    "DEFAULT_WORKER_COUNT",
    "DEFAULT_MAX_TURNS",
    "run_game",
]
