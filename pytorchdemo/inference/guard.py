"""
Single-Flight Guard
====================

Lets at most one inference run per predictor. A request that arrives while
another is in flight is dropped, not queued and not blocked.
"""

import threading
from contextlib import contextmanager
from enum import Enum
from typing import Iterator


class PredictorState(str, Enum):
    IDLE = "idle"
    BUSY = "busy"


class SingleFlightGuard:
    """
    IDLE/BUSY state token for one predictor instance.

    The IDLE -> BUSY transition is a non-blocking lock acquire, so two
    threads racing for an idle guard cannot both win.

    Example:
        >>> guard = SingleFlightGuard()
        >>> with guard.flight() as acquired:
        ...     if acquired:
        ...         pass  # run inference
    """

    def __init__(self):
        self._lock = threading.Lock()

    @property
    def state(self) -> PredictorState:
        return PredictorState.BUSY if self._lock.locked() else PredictorState.IDLE

    @property
    def busy(self) -> bool:
        return self._lock.locked()

    def try_acquire(self) -> bool:
        """Move IDLE -> BUSY. Returns False, without waiting, if already BUSY."""
        return self._lock.acquire(blocking=False)

    def release(self) -> None:
        """Move BUSY -> IDLE."""
        self._lock.release()

    @contextmanager
    def flight(self) -> Iterator[bool]:
        """
        Hold the guard for the duration of the block.

        Yields True when the guard was acquired. The guard is released on
        every exit path, including exceptions.
        """
        acquired = self.try_acquire()
        try:
            yield acquired
        finally:
            if acquired:
                self.release()
