"""
GameSession - owns the canonical state of one running game.

The session is the only place where state is replaced. Human input arrives
through submit_move()/submit_roll(); computer turns are deferred through a
TurnScheduler by the configured thinking delay. Every start/restart/close
bumps `generation`, and a scheduled computer turn that wakes up under an
older generation does nothing.
"""

from __future__ import annotations

import logging
import random
import threading
from typing import Any, Callable, List, Optional

from game_hub.core.errors import GameError, IllegalMove
from game_hub.core.types import NO_EFFECTS, Effects, MoveResult, Outcome
from game_hub.games.game_base import GameBase
from game_hub.games.game_state import GameState
from game_hub.session.scheduler import ScheduledCall, ThreadingScheduler, TurnScheduler
from game_hub.utils.config import VariantConfig

logger = logging.getLogger(__name__)

StateListener = Callable[[GameState, Effects], None]
TerminalListener = Callable[[Outcome], None]


class SessionClosed(GameError):
    """Raised when a closed session receives input."""


class GameSession:
    """
    Runs one game between humans and/or the computer.

    Listeners:
        on_state(state, effects)  after every transition (and on start, with NO_EFFECTS)
        on_terminal(outcome)      once when the game ends
    """

    def __init__(
        self,
        engine: GameBase,
        config: VariantConfig,
        scheduler: Optional[TurnScheduler] = None,
        rng: Optional[random.Random] = None,
    ):
        self.engine = engine
        self.config = config
        self.scheduler = scheduler or ThreadingScheduler()
        self.rng = rng or random.Random(config.seed)

        self.on_state: List[StateListener] = []
        self.on_terminal: List[TerminalListener] = []

        self._lock = threading.RLock()
        self._generation = 0
        self._state: Optional[GameState] = None
        self._pending: Optional[ScheduledCall] = None
        self._closed = False

    # ------------------------------------------------------------------
    # Properties
    # ------------------------------------------------------------------

    @property
    def generation(self) -> int:
        return self._generation

    @property
    def state(self) -> GameState:
        if self._state is None:
            raise GameError("Session has not been started")
        return self._state

    @property
    def closed(self) -> bool:
        return self._closed

    @property
    def thinking(self) -> bool:
        """True while a computer turn is scheduled."""
        return self._pending is not None and self._pending.pending

    def is_computer_turn(self) -> bool:
        state = self.state
        return not state.is_over and state.current_player in self.config.computer_players

    # ------------------------------------------------------------------
    # Lifecycle
    # ------------------------------------------------------------------

    def start(self) -> GameState:
        """Start (or restart) from the initial position."""
        with self._lock:
            if self._closed:
                raise SessionClosed("Cannot start a closed session")
            self._cancel_pending()
            self._generation += 1
            self._state = self.engine.start(self.config.num_players)
            logger.info(
                "Started %s (generation %d, computer plays %s)",
                self.engine.game_id(), self._generation, sorted(self.config.computer_players),
            )
            self._notify_state(NO_EFFECTS)
            self._schedule_computer_turn()
            return self._state

    restart = start

    def close(self) -> None:
        with self._lock:
            if self._closed:
                return
            self._cancel_pending()
            self._generation += 1
            self._closed = True
            logger.debug("Closed %s session", self.engine.game_id())

    def __enter__(self):
        return self

    def __exit__(self, *_):
        self.close()

    # ------------------------------------------------------------------
    # Human input
    # ------------------------------------------------------------------

    def legal_moves(self) -> List[Any]:
        return self.engine.legal_moves(self.state)

    def submit_move(self, move: Any) -> MoveResult:
        """Apply a human move. Raises IllegalMove on the computer's turn."""
        with self._lock:
            self._require_human_turn()
            result = self.engine.apply_move(self._state, move)
            self._advance(result)
            return result

    def submit_roll(self, value: int) -> MoveResult:
        """Record a human die roll (dice games only)."""
        with self._lock:
            self._require_human_turn()
            result = self.engine.roll(self._state, value)
            self._advance(result)
            return result

    def _require_human_turn(self) -> None:
        if self._closed:
            raise SessionClosed("Session is closed")
        if self.is_computer_turn():
            raise IllegalMove(f"Player {self.state.current_player} is computer-controlled")

    # ------------------------------------------------------------------
    # Computer turns
    # ------------------------------------------------------------------

    def _schedule_computer_turn(self) -> None:
        if not self.is_computer_turn():
            return
        generation = self._generation
        self._pending = self.scheduler.schedule(
            self.config.thinking_delay,
            lambda: self._computer_turn(generation),
        )

    def _computer_turn(self, generation: int) -> None:
        with self._lock:
            if generation != self._generation or self._closed:
                logger.debug("Discarding stale computer turn (generation %d)", generation)
                return
            self._pending = None
            state = self._state
            player = state.current_player

            if self.engine.awaiting_roll(state):
                value = self.rng.randint(1, 6)
                logger.debug("Computer (P%d) rolled %d", player, value)
                result = self.engine.roll(state, value)
            else:
                move = self.engine.choose_move(state, rng=self.rng)
                logger.debug("Computer (P%d) plays %s", player, self.engine.format_move(move))
                result = self.engine.apply_move(state, move)

            self._advance(result)

    def _cancel_pending(self) -> None:
        if self._pending is not None:
            self._pending.cancel()
            self._pending = None

    # ------------------------------------------------------------------
    # Transitions
    # ------------------------------------------------------------------

    def _advance(self, result: MoveResult) -> None:
        self._state = result.state
        self._notify_state(result.effects)

        if result.outcome.is_over:
            logger.info("%s finished: %s", self.engine.game_id(), result.outcome.describe())
            for listener in self.on_terminal:
                listener(result.outcome)
            return

        self._schedule_computer_turn()

    def _notify_state(self, effects: Effects) -> None:
        for listener in self.on_state:
            listener(self._state, effects)
