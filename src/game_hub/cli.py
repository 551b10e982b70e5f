"""
Command-line interface for playing and simulating games.
"""

import argparse
import logging
import random
import threading
from typing import List, Optional

from game_hub.core.types import Effects, Outcome
from game_hub.games.game_state import GameState
from game_hub.session import GameSession
from game_hub.simulation import BatchSummary, SelfPlayRunner, DEFAULT_MAX_TURNS
from game_hub.utils.config import GAMES, VariantConfig
from game_hub.utils.factory import create_session

logger = logging.getLogger(__name__)


def parse_args(argv: Optional[List[str]] = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(
        description="Play classic board games against a heuristic computer opponent"
    )
    parser.add_argument(
        "--game", "-g",
        choices=list(GAMES.keys()),
        default="tic_tac_toe",
        help="Game to play (default: tic_tac_toe)",
    )
    parser.add_argument(
        "--num-players", "-n",
        type=int,
        default=None,
        help="Number of players (Ludo: 2-4, others: 2)",
    )
    parser.add_argument(
        "--players", "-p",
        type=str,
        default=None,
        help="Comma-separated list of human player numbers (e.g., '1,2'). Overrides --self-play.",
    )
    parser.add_argument(
        "--self-play",
        action="store_true",
        help="Computer plays for all players",
    )
    parser.add_argument(
        "--delay",
        type=float,
        default=None,
        help="Computer thinking delay in seconds (default: per game)",
    )
    parser.add_argument(
        "--seed",
        type=int,
        default=None,
        help="Random seed for the computer and dice",
    )
    parser.add_argument(
        "--games",
        type=int,
        default=0,
        help="Run N computer-vs-computer games and print a tally instead of playing",
    )
    parser.add_argument(
        "--max-turns", "-t",
        type=int,
        default=DEFAULT_MAX_TURNS,
        help=f"Max actions per simulated game (default: {DEFAULT_MAX_TURNS})",
    )
    parser.add_argument(
        "--workers", "-w",
        type=int,
        default=1,
        help="Worker processes for --games (default: 1, inline)",
    )
    parser.add_argument(
        "--log-level",
        default="WARNING",
        choices=["DEBUG", "INFO", "WARNING", "ERROR"],
        help="Logging level (default: WARNING)",
    )
    return parser.parse_args(argv)


def parse_human_players(players_str: Optional[str], num_players: int, game_name: str, self_play: bool) -> List[int]:
    """Parse and validate the human players argument."""
    if self_play and players_str is None:
        return []

    if players_str is None:
        return [1]  # Default: player 1 is human

    try:
        human_players = [int(p.strip()) for p in players_str.split(",") if p.strip()]
    except ValueError as e:
        raise ValueError(
            f"Invalid --players format: '{players_str}'. "
            "Expected comma-separated integers (e.g., '1,2')."
        ) from e

    invalid = [p for p in human_players if p < 1 or p > num_players]
    if invalid:
        raise ValueError(
            f"Invalid player number(s): {invalid}. {game_name} only supports players 1-{num_players}."
        )

    return sorted(set(human_players))


# ---------------------------------------------------------------------------
# Interactive play
# ---------------------------------------------------------------------------

def _describe_effects(effects: Effects) -> str:
    notes = []
    if effects.captures:
        notes.append(f"captured {len(effects.captures)}")
    if effects.flips:
        notes.append(f"flipped {len(effects.flips)}")
    if effects.promotion:
        notes.append("promotion")
    if effects.mill:
        notes.append("mill! remove a piece")
    if effects.check:
        notes.append("check")
    if effects.finished_token:
        notes.append("token home")
    if effects.passed:
        notes.append("passed: " + ", ".join(f"P{p}" for p in effects.passed))
    if effects.extra_turn and not effects.mill:
        notes.append("extra turn")
    return ", ".join(notes)


def _human_turn(session: GameSession, rng: random.Random) -> bool:
    """Prompt for one human action. Returns False if the player quits."""
    engine = session.engine
    player = session.state.current_player

    if engine.awaiting_roll(session.state):
        raw = input(f"\nPlayer {player}: press Enter to roll (q to quit) ").strip().lower()
        if raw == "q":
            return False
        session.submit_roll(rng.randint(1, 6))
        return True

    legal = session.legal_moves()
    print(f"\nYour turn (Player {player})")
    for i, move in enumerate(legal):
        print(f"  {i:>3}: {engine.format_move(move)}")

    while True:
        raw = input("Move number (q to quit): ").strip().lower()
        if raw == "q":
            return False
        try:
            session.submit_move(legal[int(raw)])
            return True
        except (ValueError, IndexError):
            print(f"Invalid input: pick 0-{len(legal) - 1}")


def play(session: GameSession, rng: random.Random) -> Outcome:
    """Drive a session from the terminal until it ends or the user quits."""
    changed = threading.Event()

    def on_state(state: GameState, effects: Effects) -> None:
        notes = _describe_effects(effects)
        if notes:
            print(f"  ({notes})")
        print(session.engine.state_string(state))
        changed.set()

    def on_terminal(outcome: Outcome) -> None:
        print("\n" + "=" * 40)
        print(f"GAME OVER - {outcome.describe()}")
        print("=" * 40)

    session.on_state.append(on_state)
    session.on_terminal.append(on_terminal)

    print(f"Starting {session.engine.game_id()} ({session.config.num_players} players)")
    with session:
        session.start()
        while not session.state.is_over:
            if session.is_computer_turn():
                changed.wait(timeout=0.1)
                changed.clear()
                continue
            if not _human_turn(session, rng):
                print("\nQuit.")
                break
    return session.state.outcome


# ---------------------------------------------------------------------------
# Self-play tally
# ---------------------------------------------------------------------------

def simulate(args: argparse.Namespace, num_players: int) -> BatchSummary:
    with SelfPlayRunner(num_workers=args.workers) as runner:
        results = runner.run_batch(
            args.game,
            args.games,
            num_players=num_players,
            max_turns=args.max_turns,
            seed=args.seed,
        )
    summary = BatchSummary.from_results(results)
    print(f"{args.game}: {summary.describe()}")
    return summary


def main(argv: Optional[List[str]] = None) -> None:
    args = parse_args(argv)
    logging.basicConfig(
        level=getattr(logging, args.log_level),
        format="%(asctime)s %(name)s %(levelname)s %(message)s",
    )

    num_players = args.num_players or GAMES[args.game].MIN_PLAYERS

    try:
        if args.games > 0:
            simulate(args, num_players)
            return

        humans = parse_human_players(args.players, num_players, args.game, args.self_play)
        config = VariantConfig(
            game_name=args.game,
            num_players=num_players,
            computer_players=[p for p in range(1, num_players + 1) if p not in humans],
            thinking_delay=args.delay,
            seed=args.seed,
        )
        rng = random.Random(args.seed)
        play(create_session(config), rng)

    except KeyboardInterrupt:
        print("\nInterrupted - shutting down...")
    except Exception:
        logger.exception("Fatal error in game loop")
        raise


if __name__ == "__main__":
    main()
