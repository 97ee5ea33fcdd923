"""Duration classification and morse translation."""

from enum import Enum
from typing import Dict, Optional
from .config import SpeedProfile


NANOSECONDS_PER_SECOND = 1_000_000_000


# International Morse Code table
MORSE_CODE: Dict[str, str] = {
    ".-": "A",
    "-...": "B",
    "-.-.": "C",
    "-..": "D",
    ".": "E",
    "..-.": "F",
    "--.": "G",
    "....": "H",
    "..": "I",
    ".---": "J",
    "-.-": "K",
    ".-..": "L",
    "--": "M",
    "-.": "N",
    "---": "O",
    ".--.": "P",
    "--.-": "Q",
    ".-.": "R",
    "...": "S",
    "-": "T",
    "..-": "U",
    "...-": "V",
    ".--": "W",
    "-..-": "X",
    "-.--": "Y",
    "--..": "Z",
    "-----": "0",
    ".----": "1",
    "..---": "2",
    "...--": "3",
    "....-": "4",
    ".....": "5",
    "-....": "6",
    "--...": "7",
    "---..": "8",
    "----.": "9",
    ".-.-.-": ".",
    "--..--": ",",
    "..--..": "?",
    ".----.": "'",
    "-.-.--": "!",
    "-..-.": "/",
    "-.--.": "(",
    "-.--.-": ")",
    ".-...": "&",
    "---...": ":",
    "-.-.-.": ";",
    "-...-": "=",
    ".-.-.": "+",
    "-....-": "-",
    "..--.-": "_",
    ".-..-.": '"',
    ".--.-.": "@",
}


class Symbol(Enum):
    """A single keyed morse symbol."""

    DOT = "."
    DASH = "-"

    def __str__(self) -> str:
        return self.value


def duration_between(down_timestamp: int, up_timestamp: int) -> float:
    """
    Convert two monotonic nanosecond readings to a duration.

    Args:
        down_timestamp: Key down time in nanoseconds
        up_timestamp: Key up time in nanoseconds

    Returns:
        Press duration in seconds

    Raises:
        ValueError: If the key up precedes the key down
    """
    if up_timestamp < down_timestamp:
        raise ValueError(
            f"Key up ({up_timestamp}) precedes key down ({down_timestamp})"
        )
    return (up_timestamp - down_timestamp) / NANOSECONDS_PER_SECOND


def classify(duration: float, profile: SpeedProfile) -> Symbol:
    """
    Classify a press duration as a dot or a dash.

    A press exactly as long as the dit threshold is a dash.

    Args:
        duration: Press duration in seconds
        profile: Active speed profile

    Returns:
        Symbol.DOT or Symbol.DASH
    """
    if duration < profile.dit_threshold:
        return Symbol.DOT
    return Symbol.DASH


def translate(codeword: str) -> Optional[str]:
    """
    Translate a codeword to its character.

    Args:
        codeword: Sequence of "." and "-"

    Returns:
        Decoded character, or None if the codeword has no mapping
    """
    return MORSE_CODE.get(codeword)
