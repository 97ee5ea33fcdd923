"""Side effects requested by decoder transitions."""

from dataclasses import dataclass
from typing import Optional, Union
from .scheduler import Boundary
from .sink import TextRange


@dataclass(frozen=True)
class InsertText:
    """Insert text at the insertion point, or in place of a range."""

    text: str
    replacing: Optional[TextRange] = None


@dataclass(frozen=True)
class SetMarkedText:
    """Stage text over a provisional range; empty text removes it."""

    text: str
    text_range: TextRange


@dataclass(frozen=True)
class ArmDeadline:
    """Arm the boundary scheduler, replacing any live deadline."""

    delay: float
    boundary: Boundary
    token: int


@dataclass(frozen=True)
class CancelDeadline:
    """Discard the live deadline."""


@dataclass(frozen=True)
class PassThrough:
    """The key had nothing to act on and should get default handling."""


@dataclass(frozen=True)
class Diagnostic:
    """A non-fatal problem worth reporting."""

    message: str


Effect = Union[InsertText, SetMarkedText, ArmDeadline, CancelDeadline, PassThrough, Diagnostic]

SINK_EFFECTS = (InsertText, SetMarkedText)
