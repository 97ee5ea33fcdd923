"""
Morse keying state machine.

Every mutable decoder field lives in one immutable DecoderState value, and
transition() maps (state, event) to (new state, effects) without touching
the sink or the scheduler. The controller applies the effects.
"""

import logging
from dataclasses import dataclass, replace
from enum import Enum
from typing import List, Optional, Tuple, Union
from . import accumulator
from .accumulator import EMPTY, Accumulator, TranslationOutcome
from .config import InvalidSpeedLevel, MorseTypeConfig, profile_for
from .decoder import classify, duration_between
from .effects import ArmDeadline, CancelDeadline, Diagnostic, Effect, InsertText, PassThrough
from .keys import KeyEvent, KeyRole, role_for
from .scheduler import Boundary

logger = logging.getLogger(__name__)

WORD_SPACE = " "


class Phase(Enum):
    """Decoder phases."""

    IDLE = "idle"  # Nothing pending
    KEYING = "keying"  # Decode key down, waiting for its release
    CHAR_PENDING = "char_pending"  # Codeword pending, waiting for a char boundary
    WORD_PENDING = "word_pending"  # Character emitted, waiting for a word boundary


@dataclass(frozen=True)
class BoundaryFired:
    """A scheduled boundary deadline elapsed."""

    boundary: Boundary
    token: int


Event = Union[KeyEvent, BoundaryFired]


@dataclass(frozen=True)
class Deadline:
    """The single live boundary deadline."""

    token: int
    boundary: Boundary


@dataclass(frozen=True)
class DecoderState:
    """Complete decoder state threaded through every transition."""

    speed_level: int = 5
    phase: Phase = Phase.IDLE
    pending: Accumulator = EMPTY
    deadline: Optional[Deadline] = None
    next_token: int = 1
    speed_guard: bool = False
    held_key: Optional[str] = None
    down_timestamp: Optional[int] = None


Step = Tuple[DecoderState, List[Effect]]


def initial_state(config: MorseTypeConfig) -> DecoderState:
    """Get the idle state for a configuration."""
    return DecoderState(speed_level=config.speed_level)


def wants_caret(state: DecoderState, event: Event) -> bool:
    """
    Check if handling this event opens a new provisional range.

    The caller must then pass the sink's insertion point to transition().
    """
    return (
        isinstance(event, KeyEvent)
        and not event.is_down
        and not state.speed_guard
        and state.phase is Phase.KEYING
        and event.key == state.held_key
        and state.pending.is_empty
    )


def transition(
    state: DecoderState,
    event: Event,
    config: MorseTypeConfig,
    caret: Optional[int] = None,
) -> Step:
    """
    Compute the decoder's response to one event.

    Args:
        state: Current state
        event: Key transition or boundary firing
        config: Key mappings and policies
        caret: Sink insertion point, required when wants_caret() is true

    Returns:
        Tuple of (new state, effects to apply in order)
    """
    if isinstance(event, BoundaryFired):
        return _on_boundary(state, event, config)

    role = role_for(event.key, config)
    if role is None:
        return state, [PassThrough()]

    if event.is_down:
        if role is KeyRole.SPEED:
            return _on_speed_down(state, config.speed_keys[event.key])
        if role is KeyRole.CANCEL:
            return _on_cancel_down(state)
        return _on_decode_down(state, event)

    if role is KeyRole.CANCEL:
        return state, [PassThrough()]
    return _on_key_up(state, event, config, caret)


def _cancel_deadline(state: DecoderState) -> Step:
    return replace(state, deadline=None), [CancelDeadline()]


def _arm(state: DecoderState, boundary: Boundary) -> Step:
    profile = profile_for(state.speed_level)
    delay = profile.char_boundary if boundary is Boundary.CHAR else profile.word_boundary
    token = state.next_token
    state = replace(state, deadline=Deadline(token, boundary), next_token=token + 1)
    return state, [ArmDeadline(delay, boundary, token)]


def _on_speed_down(state: DecoderState, level: int) -> Step:
    state, effects = _cancel_deadline(state)
    try:
        profile_for(level)
    except InvalidSpeedLevel as e:
        effects.append(Diagnostic(f"Ignoring speed change: {e}"))
    else:
        state = replace(state, speed_level=level)
    return replace(state, speed_guard=True), effects


def _on_cancel_down(state: DecoderState) -> Step:
    state, effects = _cancel_deadline(state)
    pending, cancel_effects, cancelled = accumulator.cancel(state.pending)
    effects.extend(cancel_effects)
    if not cancelled:
        effects.append(PassThrough())
    state = replace(
        state, pending=pending, phase=Phase.IDLE, held_key=None, down_timestamp=None
    )
    return state, effects


def _on_decode_down(state: DecoderState, event: KeyEvent) -> Step:
    if state.phase is Phase.KEYING and state.held_key == event.key:
        # Auto-repeat of the held key
        return state, []

    state, effects = _cancel_deadline(state)
    state = replace(
        state,
        phase=Phase.KEYING,
        speed_guard=False,
        held_key=event.key,
        down_timestamp=event.timestamp,
    )
    return state, effects


def _on_key_up(
    state: DecoderState, event: KeyEvent, config: MorseTypeConfig, caret: Optional[int]
) -> Step:
    if state.speed_guard:
        state = replace(state, speed_guard=False)
        if state.phase is Phase.KEYING and event.key != state.held_key:
            return state, []
        return _resume(state)

    if state.phase is not Phase.KEYING or event.key != state.held_key:
        return state, []

    try:
        duration = duration_between(state.down_timestamp, event.timestamp)
    except ValueError as e:
        state, effects = _resume(state)
        return state, [Diagnostic(f"Dropping key release: {e}")] + effects

    symbol = classify(duration, profile_for(state.speed_level))
    if state.pending.is_empty and caret is None:
        raise ValueError("Insertion point is required to open a provisional range")

    pending, effects = accumulator.append(state.pending, symbol, caret)
    logger.debug("Keyed %s (%.3fs), codeword %r", symbol, duration, pending.codeword)

    state = replace(
        state,
        pending=pending,
        phase=Phase.CHAR_PENDING,
        held_key=None,
        down_timestamp=None,
    )
    state, arm_effects = _arm(state, Boundary.CHAR)
    return state, effects + arm_effects


def _resume(state: DecoderState) -> Step:
    """Return to the pending phase the decoder was in before a swallowed release."""
    state = replace(state, held_key=None, down_timestamp=None)
    if not state.pending.is_empty:
        return _arm(replace(state, phase=Phase.CHAR_PENDING), Boundary.CHAR)
    if state.phase is Phase.WORD_PENDING:
        return _arm(state, Boundary.WORD)
    return replace(state, phase=Phase.IDLE), []


def recover(state: DecoderState, deadline_live: bool) -> Step:
    """
    Settle the state kept after a sink request failed.

    The pending codeword and its provisional range stay as they were, so a
    retry or a later cancel still matches the sink. Any held key is treated
    as released, and a pending phase whose deadline is gone gets a new one.

    Args:
        state: State from before the failed step
        deadline_live: Whether the scheduler still holds state.deadline

    Returns:
        Tuple of (settled state, scheduler effects)
    """
    if deadline_live:
        return replace(state, held_key=None, down_timestamp=None), []
    return _resume(replace(state, deadline=None))


def _on_boundary(state: DecoderState, event: BoundaryFired, config: MorseTypeConfig) -> Step:
    live = state.deadline
    if live is None or live.token != event.token or live.boundary is not event.boundary:
        logger.debug("Ignoring stale %s boundary (token %d)", event.boundary.value, event.token)
        return state, []

    state = replace(state, deadline=None)

    if event.boundary is Boundary.WORD:
        return replace(state, phase=Phase.IDLE), [InsertText(WORD_SPACE)]

    codeword = state.pending.codeword
    pending, effects, outcome = accumulator.translate_and_clear(state.pending)
    state = replace(state, pending=pending)

    if outcome is TranslationOutcome.FAILURE:
        logger.debug("Unrecognized codeword %r", codeword)
        if not config.space_after_unrecognized:
            return replace(state, phase=Phase.IDLE), effects

    state, arm_effects = _arm(replace(state, phase=Phase.WORD_PENDING), Boundary.WORD)
    return state, effects + arm_effects
