"""
Worker logic for self-play simulation.

Workers receive GameJob objects and return JobResult objects. Each job
builds its own engine and random source, so jobs run the same inline or
in a pool process.
"""

from __future__ import annotations

import random
from typing import List

from game_hub.simulation.jobs import GameJob, JobResult, MoveRecord
from game_hub.utils.factory import create_engine


def run_game(job: GameJob) -> JobResult:
    """Play one computer-vs-computer game. Rolls and moves both count as turns."""
    engine = create_engine(job.game_name)
    rng = random.Random(job.seed)
    state = engine.start(job.num_players)
    moves: List[MoveRecord] = []

    turns = 0
    while not state.is_over and turns < job.max_turns:
        player = state.current_player
        if engine.awaiting_roll(state):
            value = rng.randint(1, 6)
            state = engine.roll(state, value).state
            record = MoveRecord(player, roll=value)
        else:
            move = engine.choose_move(state, rng=rng)
            state = engine.apply_move(state, move).state
            record = MoveRecord(player, move=move)

        if job.record_moves:
            moves.append(record)
        turns += 1

    return JobResult(
        index=job.index,
        outcome=state.outcome,
        turns=turns,
        results={pid: state.outcome.result_for(pid) for pid in engine.players(state)},
        moves=moves,
    )
