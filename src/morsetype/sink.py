"""Text sinks that receive decoded output."""

import sys
from abc import ABC, abstractmethod
from dataclasses import dataclass
from typing import List, Optional, TextIO


class SinkUnavailable(RuntimeError):
    """Raised when the text sink cannot be reached."""


@dataclass(frozen=True)
class TextRange:
    """A span of text in the sink."""

    location: int
    length: int

    def extended(self, count: int = 1) -> "TextRange":
        """Get the range grown by count characters."""
        return TextRange(self.location, self.length + count)


class TextSink(ABC):
    """
    Document that decoded text is written into.

    Provisional morse symbols are written as ordinary text and later
    replaced or removed through their TextRange.
    """

    @abstractmethod
    def insert_text(self, text: str, replacing: Optional[TextRange] = None) -> None:
        """
        Insert text at the insertion point, or in place of a range.

        Args:
            text: Text to insert
            replacing: Range to replace, None to insert at the insertion point
        """

    @abstractmethod
    def set_marked_text(self, text: str, text_range: TextRange) -> None:
        """
        Stage text over a range; empty text removes the range.

        Args:
            text: Replacement text
            text_range: Range of provisional text
        """

    @abstractmethod
    def selection_position(self) -> int:
        """Get the current insertion point."""


class BufferSink(TextSink):
    """In-memory document with a single insertion point."""

    def __init__(self, text: str = ""):
        self._chars: List[str] = list(text)
        self._caret = len(self._chars)

    @property
    def text(self) -> str:
        return "".join(self._chars)

    def insert_text(self, text: str, replacing: Optional[TextRange] = None) -> None:
        if replacing is None:
            self._splice(self._caret, 0, text)
        else:
            self._splice(replacing.location, replacing.length, text)

    def set_marked_text(self, text: str, text_range: TextRange) -> None:
        self._splice(text_range.location, text_range.length, text)

    def selection_position(self) -> int:
        return self._caret

    def _splice(self, location: int, length: int, text: str) -> None:
        if location < 0 or location + length > len(self._chars):
            raise SinkUnavailable(
                f"Range {location}+{length} outside document of {len(self._chars)} chars"
            )
        chars = self._chars[:location] + list(text) + self._chars[location + length:]
        self._render("".join(chars))
        self._chars = chars
        self._caret = location + len(text)

    def _render(self, text: str) -> None:
        """Hook called with the new document text before an edit is committed."""


class TerminalSink(BufferSink):
    """Buffer sink that redraws its text on a single terminal line."""

    def __init__(self, stream: Optional[TextIO] = None):
        super().__init__()
        self.stream = stream if stream is not None else sys.stdout

    def _render(self, text: str) -> None:
        try:
            self.stream.write("\r\x1b[K" + text)
            self.stream.flush()
        except (OSError, ValueError) as e:
            raise SinkUnavailable(f"Terminal not writable: {e}") from e
