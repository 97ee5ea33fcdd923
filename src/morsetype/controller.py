"""Applies decoder transitions to a text sink and a boundary scheduler."""

import logging
from dataclasses import replace
from typing import List, Optional
from .config import InvalidSpeedLevel, MorseTypeConfig, profile_for
from .effects import (
    ArmDeadline,
    CancelDeadline,
    Diagnostic,
    Effect,
    InsertText,
    PassThrough,
    SetMarkedText,
)
from .keys import KeyEvent
from .machine import (
    BoundaryFired,
    DecoderState,
    Event,
    initial_state,
    recover,
    transition,
    wants_caret,
)
from .scheduler import Boundary, BoundaryScheduler
from .sink import SinkUnavailable, TextSink

logger = logging.getLogger(__name__)


class DecoderController:
    """
    Drives the morse state machine against real collaborators.

    Events must be delivered from a single thread. Boundary firings from
    the scheduler are fed back through on_boundary().
    """

    def __init__(
        self,
        sink: TextSink,
        scheduler: BoundaryScheduler,
        config: Optional[MorseTypeConfig] = None,
    ):
        """
        Initialize controller.

        Args:
            sink: Document receiving provisional symbols and decoded text
            scheduler: Single-slot deadline timer; its callback is bound here
            config: Configuration object, uses defaults if None
        """
        self.config = config or MorseTypeConfig()
        self.sink = sink
        self.scheduler = scheduler
        self.scheduler.bind(self.on_boundary)
        self._state = initial_state(self.config)

    @property
    def state(self) -> DecoderState:
        return self._state

    @property
    def codeword(self) -> str:
        """Get the symbols keyed for the current character."""
        return self._state.pending.codeword

    @property
    def speed_level(self) -> int:
        return self._state.speed_level

    def handle(self, event: KeyEvent) -> bool:
        """
        Process a key transition.

        Args:
            event: Key event from the capture layer

        Returns:
            False if the key should fall through to default handling
            (e.g. backspace with nothing to cancel), True otherwise
        """
        return self._dispatch(event)

    def on_boundary(self, boundary: Boundary, token: int) -> None:
        """Process a boundary deadline firing."""
        self._dispatch(BoundaryFired(boundary, token))

    def set_speed(self, level: int) -> bool:
        """
        Change the speed level outside of keying, e.g. from saved preferences.

        Call from the thread that delivers events. DecodeStream.set_speed
        queues the change for its worker thread.

        Args:
            level: Speed level 1-9

        Returns:
            True if the level was applied
        """
        try:
            profile_for(level)
        except InvalidSpeedLevel as e:
            logger.warning("Ignoring speed change: %s", e)
            return False
        self._state = replace(self._state, speed_level=level)
        self.config.speed_level = level
        logger.info("Speed level set to %d", level)
        return True

    def reset(self) -> None:
        """Drop all pending input without touching the sink."""
        self.scheduler.cancel()
        self._state = replace(initial_state(self.config), speed_level=self._state.speed_level)

    def _dispatch(self, event: Event) -> bool:
        previous = self._state
        caret = None
        if wants_caret(previous, event):
            try:
                caret = self.sink.selection_position()
            except SinkUnavailable as e:
                logger.warning("Text sink unavailable, dropping %r: %s", event, e)
                self._recover(previous)
                return True

        new_state, effects = transition(previous, event, self.config, caret)

        if not self._apply(effects):
            self._recover(previous)
            return True

        if new_state.speed_level != previous.speed_level:
            self.config.speed_level = new_state.speed_level
            logger.info("Speed level set to %d", new_state.speed_level)

        self._state = new_state
        return not any(isinstance(effect, PassThrough) for effect in effects)

    def _apply(self, effects: List[Effect]) -> bool:
        """
        Apply effects in order.

        Returns:
            False if a sink request failed; later effects are skipped
        """
        for effect in effects:
            try:
                self._apply_one(effect)
            except SinkUnavailable as e:
                logger.warning("Text sink unavailable, aborting %r: %s", effect, e)
                return False
        return True

    def _recover(self, previous: DecoderState) -> None:
        """Fall back to the state from before a failed step, releasing any held key."""
        live = previous.deadline
        deadline_live = live is not None and self.scheduler.pending == (live.boundary, live.token)
        state, effects = recover(previous, deadline_live)
        for effect in effects:
            self._apply_one(effect)
        self._state = state

    def _apply_one(self, effect: Effect) -> None:
        if isinstance(effect, InsertText):
            self.sink.insert_text(effect.text, replacing=effect.replacing)
        elif isinstance(effect, SetMarkedText):
            self.sink.set_marked_text(effect.text, effect.text_range)
        elif isinstance(effect, ArmDeadline):
            self.scheduler.arm(effect.delay, effect.boundary, effect.token)
        elif isinstance(effect, CancelDeadline):
            self.scheduler.cancel()
        elif isinstance(effect, Diagnostic):
            logger.warning(effect.message)
        elif isinstance(effect, PassThrough):
            pass
        else:
            raise TypeError(f"Unknown effect {effect!r}")
