"""
One-shot deferred callbacks for the computer's thinking delay.

Two implementations share the TurnScheduler interface:
- ThreadingScheduler: real wall-clock delays on threading.Timer threads
- ManualScheduler: a virtual clock advanced explicitly (tests, host loops)
"""

from __future__ import annotations

import heapq
import itertools
import logging
import threading
from abc import ABC, abstractmethod
from typing import Callable, List, Optional, Tuple

logger = logging.getLogger(__name__)


class ScheduledCall:
    """Handle for a pending callback. Cancelling is idempotent."""

    def __init__(self, callback: Callable[[], None], delay: float):
        self.callback = callback
        self.delay = delay
        self.cancelled = False
        self.fired = False
        self._timer: Optional[threading.Timer] = None

    @property
    def pending(self) -> bool:
        return not (self.cancelled or self.fired)

    def cancel(self) -> None:
        self.cancelled = True
        if self._timer is not None:
            self._timer.cancel()

    def _fire(self) -> None:
        if self.cancelled or self.fired:
            return
        self.fired = True
        self.callback()


class TurnScheduler(ABC):

    @abstractmethod
    def schedule(self, delay: float, callback: Callable[[], None]) -> ScheduledCall:
        """Run callback once after `delay` seconds unless cancelled first."""
        pass

    def shutdown(self) -> None:
        pass


class ThreadingScheduler(TurnScheduler):
    """Each call gets its own daemon timer thread."""

    def __init__(self):
        self._calls: List[ScheduledCall] = []
        self._lock = threading.Lock()

    def schedule(self, delay: float, callback: Callable[[], None]) -> ScheduledCall:
        call = ScheduledCall(callback, delay)
        timer = threading.Timer(delay, call._fire)
        timer.daemon = True
        call._timer = timer
        with self._lock:
            self._calls = [c for c in self._calls if c.pending]
            self._calls.append(call)
        timer.start()
        return call

    def shutdown(self) -> None:
        with self._lock:
            calls, self._calls = self._calls, []
        for call in calls:
            call.cancel()


class ManualScheduler(TurnScheduler):
    """
    Deterministic scheduler driven by a virtual clock.

    Nothing runs until the owner calls advance() or run_pending(), always on
    the caller's thread.
    """

    def __init__(self):
        self.now = 0.0
        self._queue: List[Tuple[float, int, ScheduledCall]] = []
        self._seq = itertools.count()

    def schedule(self, delay: float, callback: Callable[[], None]) -> ScheduledCall:
        call = ScheduledCall(callback, delay)
        heapq.heappush(self._queue, (self.now + delay, next(self._seq), call))
        return call

    @property
    def pending(self) -> int:
        return sum(1 for _, _, call in self._queue if call.pending)

    def advance(self, seconds: float) -> int:
        """Move the clock forward, running every call that falls due. Returns the count run."""
        deadline = self.now + seconds
        ran = 0
        while self._queue and self._queue[0][0] <= deadline:
            due, _, call = heapq.heappop(self._queue)
            self.now = max(self.now, due)
            if call.pending:
                call._fire()
                ran += 1
        self.now = deadline
        return ran

    def run_pending(self) -> int:
        """Run the calls queued right now, ignoring their delay. Returns the count run."""
        batch, self._queue = sorted(self._queue), []
        ran = 0
        for due, _, call in batch:
            self.now = max(self.now, due)
            if call.pending:
                call._fire()
                ran += 1
        return ran

    def shutdown(self) -> None:
        for _, _, call in self._queue:
            call.cancel()
        self._queue.clear()
        logger.debug("Manual scheduler cleared")
