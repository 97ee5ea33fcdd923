"""Key events and key roles for morse keying."""

import time
from enum import Enum
from typing import Optional, Set
from .config import MorseTypeConfig


class KeyEdge(Enum):
    """Key transition direction."""

    DOWN = "down"
    UP = "up"


class KeyRole(Enum):
    """What a key does for the decoder."""

    DECODE = "decode"  # Keying key, press duration becomes a dot or dash
    SPEED = "speed"  # Digit key, selects a speed level
    CANCEL = "cancel"  # Discards the pending codeword


class KeyEvent:
    """Represents a key transition (press or release)."""

    def __init__(self, key: str, edge: KeyEdge, timestamp: int):
        """
        Initialize key event.

        Args:
            key: Key id, e.g. "a", "5" or "backspace"
            edge: KeyEdge.DOWN or KeyEdge.UP
            timestamp: Monotonic timestamp in nanoseconds
        """
        self.key = key
        self.edge = edge
        self.timestamp = timestamp

    @classmethod
    def now(cls, key: str, edge: KeyEdge) -> "KeyEvent":
        """Create an event stamped with the monotonic clock."""
        return cls(key, edge, time.monotonic_ns())

    @property
    def is_down(self) -> bool:
        return self.edge is KeyEdge.DOWN

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, KeyEvent):
            return NotImplemented
        return (self.key, self.edge, self.timestamp) == (other.key, other.edge, other.timestamp)

    def __repr__(self) -> str:
        action = "DOWN" if self.is_down else "UP"
        return f"KeyEvent({self.key!r} {action} @ {self.timestamp}ns)"


def role_for(key: str, config: MorseTypeConfig) -> Optional[KeyRole]:
    """
    Get the role of a key under the given configuration.

    Args:
        key: Key id
        config: Configuration holding the key mappings

    Returns:
        KeyRole, or None if the key is not on the allow-list
    """
    if key == config.cancel_key:
        return KeyRole.CANCEL
    if key in config.speed_keys:
        return KeyRole.SPEED
    if len(key) == 1 and key in config.letter_keys:
        return KeyRole.DECODE
    return None


class KeyTracker:
    """
    Filters raw key callbacks down to allow-listed key transitions.

    Held keys auto-repeat their press callback; only the first press of a
    held key produces a DOWN event, and a release without a press produces
    nothing.
    """

    def __init__(self, config: MorseTypeConfig):
        self.config = config
        self._held: Set[str] = set()

    def press(self, key: Optional[str]) -> bool:
        """Record a press; returns True if it is a new DOWN transition."""
        if key is None or not self.config.is_tracked_key(key) or key in self._held:
            return False
        self._held.add(key)
        return True

    def release(self, key: Optional[str]) -> bool:
        """Record a release; returns True if it is a new UP transition."""
        if key is None or key not in self._held:
            return False
        self._held.discard(key)
        return True

    def clear(self) -> None:
        self._held.clear()
