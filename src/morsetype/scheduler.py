"""Single-slot boundary deadline schedulers."""

import logging
import threading
from abc import ABC, abstractmethod
from enum import Enum
from typing import Callable, Optional, Tuple

logger = logging.getLogger(__name__)


class Boundary(Enum):
    """Kind of pause a deadline detects."""

    CHAR = "char"
    WORD = "word"


FireCallback = Callable[[Boundary, int], None]


class BoundaryScheduler(ABC):
    """
    Holds at most one pending boundary deadline.

    Arming replaces any earlier deadline, so only the most recently armed
    one can fire. Firing calls the bound callback with (boundary, token).
    """

    def __init__(self, callback: Optional[FireCallback] = None):
        self._callback = callback

    def bind(self, callback: FireCallback) -> None:
        """Set the function called when a deadline fires."""
        self._callback = callback

    @abstractmethod
    def arm(self, delay: float, boundary: Boundary, token: int) -> None:
        """Start a deadline, replacing any live one."""

    @abstractmethod
    def cancel(self) -> None:
        """Discard the live deadline, if any."""

    @property
    @abstractmethod
    def pending(self) -> Optional[Tuple[Boundary, int]]:
        """Get (boundary, token) of the live deadline, if any."""

    def _fire(self, boundary: Boundary, token: int) -> None:
        if self._callback is None:
            logger.warning("Deadline %s/%d fired with no callback bound", boundary.value, token)
            return
        self._callback(boundary, token)


class TimerScheduler(BoundaryScheduler):
    """
    Scheduler backed by threading.Timer.

    The timer thread only invokes the callback; callers that need
    single-threaded delivery bind a callback that enqueues the firing.
    """

    def __init__(self, callback: Optional[FireCallback] = None):
        super().__init__(callback)
        self._timer: Optional[threading.Timer] = None
        self._deadline: Optional[Tuple[Boundary, int]] = None
        self._timer_lock = threading.Lock()

    def arm(self, delay: float, boundary: Boundary, token: int) -> None:
        """
        Start counting down a new deadline, discarding the old one.

        Args:
            delay: Seconds until the deadline fires
            boundary: Boundary kind reported on firing
            token: Token reported on firing
        """
        with self._timer_lock:
            self._cancel_locked()
            self._deadline = (boundary, token)
            self._timer = threading.Timer(delay, self._timer_expired, args=(boundary, token))
            self._timer.daemon = True
            self._timer.start()

    def cancel(self) -> None:
        """Discard the current deadline without firing."""
        with self._timer_lock:
            self._cancel_locked()

    @property
    def pending(self) -> Optional[Tuple[Boundary, int]]:
        with self._timer_lock:
            return self._deadline

    def _cancel_locked(self) -> None:
        if self._timer is not None:
            self._timer.cancel()
            self._timer = None
        self._deadline = None

    def _timer_expired(self, boundary: Boundary, token: int) -> None:
        """Callback when the timer expires."""
        with self._timer_lock:
            if self._deadline != (boundary, token):
                return
            self._timer = None
            self._deadline = None
        self._fire(boundary, token)


class ManualScheduler(BoundaryScheduler):
    """
    Scheduler driven by an explicit virtual clock.

    Nothing fires until advance() moves the clock past the deadline,
    and firing happens synchronously on the caller's thread.
    """

    def __init__(self, callback: Optional[FireCallback] = None):
        super().__init__(callback)
        self.now = 0.0
        self._due: Optional[float] = None
        self._deadline: Optional[Tuple[Boundary, int]] = None

    def arm(self, delay: float, boundary: Boundary, token: int) -> None:
        self._due = self.now + delay
        self._deadline = (boundary, token)

    def cancel(self) -> None:
        self._due = None
        self._deadline = None

    @property
    def pending(self) -> Optional[Tuple[Boundary, int]]:
        return self._deadline

    @property
    def due(self) -> Optional[float]:
        """Get the virtual time the live deadline fires at."""
        return self._due

    def advance(self, seconds: float) -> None:
        """
        Move the virtual clock forward, firing the deadline if it is reached.

        A firing may arm a new deadline; that one fires too if it falls
        within the same advance.

        Args:
            seconds: Amount of virtual time to pass
        """
        target = self.now + seconds
        while self._due is not None and self._due <= target:
            self.now = self._due
            boundary, token = self._deadline
            self._due = None
            self._deadline = None
            self._fire(boundary, token)
        self.now = target
