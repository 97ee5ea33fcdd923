"""Pending codeword and its provisional text in the sink."""

from dataclasses import dataclass, replace
from enum import Enum
from typing import List, Optional, Tuple
from .decoder import Symbol, translate
from .effects import Effect, InsertText, SetMarkedText
from .sink import TextRange


class TranslationOutcome(Enum):
    """Result of translating the pending codeword."""

    SUCCESS = "success"
    FAILURE = "failure"


@dataclass(frozen=True)
class Accumulator:
    """
    Symbols keyed so far for the current character.

    The symbols are already visible in the sink as raw "." and "-" text;
    `provisional` tracks where, so they can be replaced by the decoded
    character or removed.
    """

    codeword: str = ""
    provisional: Optional[TextRange] = None

    def __post_init__(self) -> None:
        if (self.provisional is None) != (self.codeword == ""):
            raise ValueError("Provisional range must exist exactly when a codeword is pending")
        if self.provisional is not None and self.provisional.length != len(self.codeword):
            raise ValueError(
                f"Provisional range length {self.provisional.length} "
                f"does not match codeword {self.codeword!r}"
            )

    @property
    def is_empty(self) -> bool:
        return self.codeword == ""


EMPTY = Accumulator()


def append(acc: Accumulator, symbol: Symbol, caret: int) -> Tuple[Accumulator, List[Effect]]:
    """
    Add a symbol to the pending codeword.

    Args:
        acc: Current accumulator
        symbol: Symbol just keyed
        caret: Sink insertion point before the symbol is written

    Returns:
        Tuple of (new accumulator, effects)
    """
    if acc.provisional is None:
        provisional = TextRange(caret, 1)
    else:
        provisional = acc.provisional.extended()

    new_acc = replace(acc, codeword=acc.codeword + symbol.value, provisional=provisional)
    return new_acc, [InsertText(symbol.value)]


def translate_and_clear(acc: Accumulator) -> Tuple[Accumulator, List[Effect], TranslationOutcome]:
    """
    Replace the provisional symbols with their decoded character.

    Unknown codewords are removed from the sink rather than left as raw
    dots and dashes.

    Args:
        acc: Current accumulator

    Returns:
        Tuple of (empty accumulator, effects, outcome)
    """
    if acc.is_empty:
        return EMPTY, [], TranslationOutcome.FAILURE

    char = translate(acc.codeword)
    if char is None:
        return EMPTY, [SetMarkedText("", acc.provisional)], TranslationOutcome.FAILURE

    return EMPTY, [InsertText(char, replacing=acc.provisional)], TranslationOutcome.SUCCESS


def cancel(acc: Accumulator) -> Tuple[Accumulator, List[Effect], bool]:
    """
    Discard the pending codeword and delete its provisional text.

    Args:
        acc: Current accumulator

    Returns:
        Tuple of (empty accumulator, effects, whether anything was cancelled)
    """
    if acc.is_empty:
        return EMPTY, [], False
    return EMPTY, [SetMarkedText("", acc.provisional)], True
