"""Real-time event loop wiring capture, decoder and sink together."""

import logging
import threading
from queue import Empty, Queue
from dataclasses import dataclass
from typing import Callable, Optional, Union
from .config import InvalidSpeedLevel, MorseTypeConfig, profile_for
from .controller import DecoderController
from .keys import KeyEvent
from .machine import BoundaryFired
from .scheduler import Boundary, BoundaryScheduler, TimerScheduler
from .sink import TerminalSink, TextSink

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class SpeedRequest:
    """A speed level change from outside the key stream."""

    level: int


QueueItem = Union[KeyEvent, BoundaryFired, SpeedRequest]


class DecodeStream:
    """
    Real-time morse keying decoder.

    Key events from the source and boundary firings from the scheduler are
    posted to one queue and handled in order on a single worker thread, so
    the decoder never sees two deliveries at once.
    """

    def __init__(
        self,
        config: Optional[MorseTypeConfig] = None,
        sink: Optional[TextSink] = None,
        source=None,
        scheduler: Optional[BoundaryScheduler] = None,
        fallthrough_callback: Optional[Callable[[KeyEvent], None]] = None,
    ):
        """
        Initialize decode stream.

        Args:
            config: Configuration object, uses defaults if None
            sink: Text sink, a TerminalSink on stdout if None
            source: Event source with start(callback)/stop(), a KeyCapture if None
            scheduler: Boundary scheduler, a TimerScheduler if None
            fallthrough_callback: Optional callback for keys the decoder did not consume
        """
        self.config = config or MorseTypeConfig()
        self.sink = sink if sink is not None else TerminalSink()
        if source is None:
            # Local import, pynput needs a display backend
            from .capture import KeyCapture
            source = KeyCapture(self.config)
        self.source = source
        self.scheduler = scheduler if scheduler is not None else TimerScheduler()
        self.controller = DecoderController(self.sink, self.scheduler, self.config)
        # Firings are routed through the queue instead of straight into the controller
        self.scheduler.bind(self._post_boundary)
        self.fallthrough_callback = fallthrough_callback

        self._queue: "Queue[QueueItem]" = Queue()
        self._running = False
        self._thread: Optional[threading.Thread] = None

    def start(self) -> None:
        """Start the decode stream."""
        if self._running:
            return

        self._running = True
        self._thread = threading.Thread(target=self._process_loop, daemon=True)
        self._thread.start()
        try:
            self.source.start(self.post)
        except Exception:
            self.stop()
            raise
        logger.info("Decoding at speed level %d", self.controller.speed_level)

    def stop(self) -> None:
        """Stop the decode stream and release the event source."""
        if not self._running:
            return

        self._running = False
        try:
            self.source.stop()
        finally:
            self.scheduler.cancel()
            if self._thread:
                self._thread.join(timeout=1.0)
                self._thread = None

    def post(self, event: KeyEvent) -> None:
        """Queue a key event for the worker thread."""
        self._queue.put(event)

    def set_speed(self, level: int) -> bool:
        """
        Queue a speed level change, e.g. from saved preferences.

        The change is applied on the worker thread in order with key events.

        Args:
            level: Speed level 1-9

        Returns:
            False if the level is invalid and nothing was queued
        """
        try:
            profile_for(level)
        except InvalidSpeedLevel as e:
            logger.warning("Ignoring speed change: %s", e)
            return False
        self._queue.put(SpeedRequest(level))
        return True

    def _post_boundary(self, boundary: Boundary, token: int) -> None:
        self._queue.put(BoundaryFired(boundary, token))

    def _process_loop(self) -> None:
        """Main processing loop."""
        while self._running:
            try:
                item = self._queue.get(timeout=0.05)
            except Empty:
                continue

            try:
                self._deliver(item)
            except Exception:
                logger.exception("Failed to process %r", item)

    def _deliver(self, item: QueueItem) -> None:
        if isinstance(item, BoundaryFired):
            self.controller.on_boundary(item.boundary, item.token)
            return
        if isinstance(item, SpeedRequest):
            self.controller.set_speed(item.level)
            return

        consumed = self.controller.handle(item)
        if not consumed and self.fallthrough_callback:
            self.fallthrough_callback(item)

    def get_text(self) -> Optional[str]:
        """Get the sink's text if it keeps one."""
        return getattr(self.sink, "text", None)

    def is_running(self) -> bool:
        """Check if the stream is running."""
        return self._running

    def __enter__(self) -> "DecodeStream":
        """Context manager entry."""
        self.start()
        return self

    def __exit__(self, exc_type, exc_val, exc_tb) -> None:
        """Context manager exit."""
        self.stop()
