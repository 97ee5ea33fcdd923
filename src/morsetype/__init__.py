"""
morsetype - type text by keying morse code on an ordinary keyboard.

Press durations on letter keys are classified as dots and dashes,
accumulated into codewords and decoded into characters and word spaces
once the keyer pauses. Digit keys select the typing speed level.
"""

__version__ = "0.1.0"

from .config import MorseTypeConfig, SpeedProfile, InvalidSpeedLevel, profile_for
from .decoder import Symbol, classify, translate, MORSE_CODE
from .keys import KeyEdge, KeyEvent
from .machine import DecoderState, Phase, transition
from .controller import DecoderController
from .scheduler import Boundary, TimerScheduler, ManualScheduler
from .sink import TextSink, BufferSink, TerminalSink, TextRange, SinkUnavailable
from .stream import DecodeStream

# Keyboard capture is optional (pynput needs a display or input backend)
try:
    from .capture import KeyCapture
    _capture_available = True
except (ImportError, OSError):
    KeyCapture = None
    _capture_available = False

__all__ = [
    "MorseTypeConfig",
    "SpeedProfile",
    "InvalidSpeedLevel",
    "profile_for",
    "Symbol",
    "classify",
    "translate",
    "MORSE_CODE",
    "KeyEdge",
    "KeyEvent",
    "DecoderState",
    "Phase",
    "transition",
    "DecoderController",
    "Boundary",
    "TimerScheduler",
    "ManualScheduler",
    "TextSink",
    "BufferSink",
    "TerminalSink",
    "TextRange",
    "SinkUnavailable",
    "DecodeStream",
]

if _capture_available:
    __all__.append("KeyCapture")
