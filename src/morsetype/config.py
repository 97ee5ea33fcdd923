"""Configuration module for morsetype package."""

from dataclasses import dataclass, field
from typing import Dict


class InvalidSpeedLevel(ValueError):
    """Raised when a speed level outside 1-9 is requested."""


MIN_SPEED_LEVEL = 1
MAX_SPEED_LEVEL = 9


@dataclass(frozen=True)
class SpeedProfile:
    """Timing thresholds for one speed level (all in seconds)."""

    dit_threshold: float  # Presses shorter than this are dots
    char_boundary: float  # Pause after last keying that ends a character
    word_boundary: float  # Pause after a decoded character that ends a word


# Level 7 matches the classic 0.15/0.9/1.05s timing; every row keeps 1:6:7
SPEED_PROFILES: Dict[int, SpeedProfile] = {
    1: SpeedProfile(0.300, 1.800, 2.100),
    2: SpeedProfile(0.275, 1.650, 1.925),
    3: SpeedProfile(0.250, 1.500, 1.750),
    4: SpeedProfile(0.225, 1.350, 1.575),
    5: SpeedProfile(0.200, 1.200, 1.400),
    6: SpeedProfile(0.175, 1.050, 1.225),
    7: SpeedProfile(0.150, 0.900, 1.050),
    8: SpeedProfile(0.125, 0.750, 0.875),
    9: SpeedProfile(0.100, 0.600, 0.700),
}


def profile_for(level: int) -> SpeedProfile:
    """
    Look up the timing profile for a speed level.

    Args:
        level: Speed level, 1 (slowest) to 9 (fastest)

    Returns:
        SpeedProfile for that level

    Raises:
        InvalidSpeedLevel: If level is not an int in 1-9
    """
    if isinstance(level, bool) or not isinstance(level, int):
        raise InvalidSpeedLevel(f"Speed level must be an integer, got {level!r}")
    if level < MIN_SPEED_LEVEL or level > MAX_SPEED_LEVEL:
        raise InvalidSpeedLevel(
            f"Speed level must be {MIN_SPEED_LEVEL}-{MAX_SPEED_LEVEL}, got {level}"
        )
    return SPEED_PROFILES[level]


def _default_speed_keys() -> Dict[str, int]:
    return {str(level): level for level in range(MIN_SPEED_LEVEL, MAX_SPEED_LEVEL + 1)}


@dataclass
class MorseTypeConfig:
    """Configuration for the morse keying decoder."""

    # Speed
    speed_level: int = 5

    # Key mappings (key ids as produced by the capture layer)
    letter_keys: str = "abcdefghijklmnopqrstuvwxyz"
    speed_keys: Dict[str, int] = field(default_factory=_default_speed_keys)
    cancel_key: str = "backspace"

    # Insert a word space even after a codeword that failed to translate
    space_after_unrecognized: bool = False

    def __post_init__(self) -> None:
        profile_for(self.speed_level)

    @property
    def profile(self) -> SpeedProfile:
        """Get the timing profile for the current speed level."""
        return profile_for(self.speed_level)

    def set_speed(self, level: int) -> None:
        """
        Set the typing speed level.

        Args:
            level: Speed level 1-9, higher is faster

        Raises:
            InvalidSpeedLevel: If level is out of range; speed is left unchanged
        """
        profile_for(level)
        self.speed_level = level

    def is_tracked_key(self, key: str) -> bool:
        """Check if a key id belongs to the allow-list."""
        if len(key) == 1 and key in self.letter_keys:
            return True
        return key in self.speed_keys or key == self.cancel_key
