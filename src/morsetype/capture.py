"""Global keyboard capture for morse keying."""

import logging
from typing import Callable, Optional
from pynput import keyboard
from .config import MorseTypeConfig
from .keys import KeyEdge, KeyEvent, KeyTracker

logger = logging.getLogger(__name__)

KeyCallback = Callable[[KeyEvent], None]


def key_id(key) -> Optional[str]:
    """
    Get the key id for a pynput key.

    Args:
        key: pynput Key or KeyCode

    Returns:
        Lowercase character for printable keys, the Key name for special
        keys (e.g. "backspace"), or None if unknown
    """
    if isinstance(key, keyboard.Key):
        return key.name
    char = getattr(key, "char", None)
    if char:
        return char.lower()
    return None


class KeyCapture:
    """
    Event source backed by a pynput keyboard listener.

    The listener is a global hook; stop() releases it and is safe to call
    more than once. Use as a context manager to release it on every exit path.
    """

    def __init__(self, config: Optional[MorseTypeConfig] = None):
        """
        Initialize keyboard capture.

        Args:
            config: Configuration object, uses defaults if None
        """
        self.config = config or MorseTypeConfig()
        self._tracker = KeyTracker(self.config)
        self._listener: Optional[keyboard.Listener] = None
        self._callback: Optional[KeyCallback] = None
        self._running = False

    def start(self, callback: KeyCallback) -> None:
        """
        Start listening for key transitions.

        Args:
            callback: Called with each KeyEvent, on the listener thread
        """
        if self._running:
            return

        self._callback = callback
        self._running = True
        self._listener = keyboard.Listener(
            on_press=self._on_key_press, on_release=self._on_key_release
        )
        self._listener.start()
        logger.info("Keyboard capture started")

    def stop(self) -> None:
        """Stop listening and release the keyboard hook."""
        if not self._running:
            return

        self._running = False
        if self._listener:
            self._listener.stop()
            self._listener = None
        self._tracker.clear()
        logger.info("Keyboard capture stopped")

    def _on_key_press(self, key) -> None:
        if not self._running:
            return
        name = key_id(key)
        if self._tracker.press(name):
            self._emit(KeyEvent.now(name, KeyEdge.DOWN))

    def _on_key_release(self, key) -> None:
        if not self._running:
            return
        name = key_id(key)
        if self._tracker.release(name):
            self._emit(KeyEvent.now(name, KeyEdge.UP))

    def _emit(self, event: KeyEvent) -> None:
        if self._callback is not None:
            self._callback(event)

    def is_running(self) -> bool:
        """Check if the capture is running."""
        return self._running

    def __enter__(self) -> "KeyCapture":
        """Context manager entry."""
        return self

    def __exit__(self, exc_type, exc_val, exc_tb) -> None:
        """Context manager exit."""
        self.stop()
