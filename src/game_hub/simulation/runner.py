"""
Self-play runner: computer-vs-computer batches, inline or on a process pool.
"""

from __future__ import annotations

import atexit
import logging
import multiprocessing as mp
import random
import signal
from multiprocessing.pool import Pool
from typing import List, Optional

from game_hub.simulation.jobs import GameJob, JobResult
from game_hub.simulation.worker import run_game
from game_hub.utils.config import GAMES, available_games

logger = logging.getLogger(__name__)

DEFAULT_WORKER_COUNT = max(1, mp.cpu_count() - 1)
DEFAULT_MAX_TURNS = 500

# ---------------------------------------------------------------------------
# Process cleanup
# ---------------------------------------------------------------------------

_active_runners: List["SelfPlayRunner"] = []


def _shutdown_all():
    for runner in _active_runners[:]:
        runner.shutdown(force=True)


def _worker_init():
    """Workers ignore SIGINT - only the main process handles Ctrl+C."""
    signal.signal(signal.SIGINT, signal.SIG_IGN)


atexit.register(_shutdown_all)


# ---------------------------------------------------------------------------
# Runner
# ---------------------------------------------------------------------------

class SelfPlayRunner:
    """
    Plays batches of computer-vs-computer games.

    With num_workers <= 1 games run inline in the calling process; otherwise
    they are mapped over a lazily created multiprocessing Pool.
    """

    def __init__(self, num_workers: int = DEFAULT_WORKER_COUNT):
        self.num_workers = num_workers
        self._pool: Optional[Pool] = None

        _active_runners.append(self)

    def __enter__(self):
        return self

    def __exit__(self, exc_type, *_):
        self.shutdown(force=exc_type is not None)

    @property
    def parallel(self) -> bool:
        return self.num_workers > 1

    def _ensure_pool(self) -> Pool:
        if self._pool is None:
            self._pool = Pool(processes=self.num_workers, initializer=_worker_init)
        return self._pool

    def shutdown(self, force: bool = False) -> None:
        if self in _active_runners:
            _active_runners.remove(self)

        if self._pool is None:
            return

        pool, self._pool = self._pool, None
        pool.terminate() if force else pool.close()
        pool.join()

    def make_jobs(
        self,
        game_name: str,
        num_games: int,
        num_players: Optional[int] = None,
        max_turns: int = DEFAULT_MAX_TURNS,
        seed: Optional[int] = None,
        record_moves: bool = False,
    ) -> List[GameJob]:
        if game_name not in GAMES:
            raise ValueError(f"Unknown game: {game_name}. Available: {available_games()}")
        if num_players is None:
            num_players = GAMES[game_name].MIN_PLAYERS

        rng = random.Random(seed)
        return [
            GameJob(
                game_name=game_name,
                num_players=num_players,
                seed=rng.randrange(2 ** 32),
                max_turns=max_turns,
                index=i,
                record_moves=record_moves,
            )
            for i in range(num_games)
        ]

    def run_batch(
        self,
        game_name: str,
        num_games: int,
        num_players: Optional[int] = None,
        max_turns: int = DEFAULT_MAX_TURNS,
        seed: Optional[int] = None,
        record_moves: bool = False,
    ) -> List[JobResult]:
        """
        Play num_games games and return their results in job order.

        Games still running after max_turns actions are returned unfinished.
        """
        if num_games <= 0:
            return []

        jobs = self.make_jobs(game_name, num_games, num_players, max_turns, seed, record_moves)

        try:
            if self.parallel:
                results = self._ensure_pool().map(run_game, jobs)
            else:
                results = [run_game(job) for job in jobs]
        except KeyboardInterrupt:
            logger.info("Interrupted - self-play batch abandoned")
            raise

        unfinished = sum(1 for r in results if not r.finished)
        if unfinished:
            logger.warning("%d of %d %s games hit the %d-turn cap", unfinished, num_games, game_name, max_turns)
        return results
