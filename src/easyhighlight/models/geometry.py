"""Document coordinates, spans and content-change events.

Positions are ``(line, character)`` pairs ordered line-first. Ranges are
ordered pairs of positions; a ``Range`` can be built reversed so that
malformed input reaches the engine boundary, where it is rejected or
normalized depending on configuration.
"""

from __future__ import annotations

from dataclasses import dataclass


class InvalidRangeError(ValueError):
    """Raised when a range has its start after its end."""

    def __init__(self, start: Position, end: Position) -> None:
        self.start = start
        self.end = end
        super().__init__(f"Range start {start} is after end {end}")


class InvalidChangeError(ValueError):
    """Raised when a change event's old start is after its old end."""

    def __init__(self, start: Position, end: Position) -> None:
        self.start = start
        self.end = end
        super().__init__(f"Change start {start} is after end {end}")


@dataclass(frozen=True, order=True)
class Position:
    """A zero-based ``(line, character)`` coordinate in a document."""

    line: int
    character: int

    def __post_init__(self) -> None:
        for name in ("line", "character"):
            value = getattr(self, name)
            if isinstance(value, bool) or not isinstance(value, int):
                msg = f"Position.{name} must be an int, got {value!r}"
                raise ValueError(msg)
            if value < 0:
                msg = f"Position.{name} must be non-negative, got {value}"
                raise ValueError(msg)

    def __str__(self) -> str:
        return f"({self.line},{self.character})"


@dataclass(frozen=True)
class Range:
    """A span of text between two positions.

    Attributes:
        start: First position of the span.
        end: Position just past the span for edit arithmetic.
    """

    start: Position
    end: Position

    @classmethod
    def of(
        cls, start_line: int, start_char: int, end_line: int, end_char: int
    ) -> Range:
        """Build a range from four integers."""
        return cls(Position(start_line, start_char), Position(end_line, end_char))

    @property
    def is_empty(self) -> bool:
        return self.start == self.end

    @property
    def is_reversed(self) -> bool:
        return self.start > self.end

    def normalized(self) -> Range:
        """Return this range with its endpoints in document order."""
        if self.is_reversed:
            return Range(self.end, self.start)
        return self

    def validate(self) -> Range:
        """Return this range, raising ``InvalidRangeError`` if reversed."""
        if self.is_reversed:
            raise InvalidRangeError(self.start, self.end)
        return self

    def contains(self, position: Position) -> bool:
        """Check membership with both endpoints treated as inside."""
        return self.start <= position <= self.end

    def overlaps(self, other: Range) -> bool:
        """Check whether *other* cuts into this range.

        Touching at an endpoint does not count; an empty *other* overlaps
        only when it sits strictly inside.
        """
        return not (other.end <= self.start or other.start >= self.end)

    def __str__(self) -> str:
        return f"{self.start}-{self.end}"


@dataclass(frozen=True)
class ChangeEvent:
    """The old document span ``[start, end)`` was replaced by ``text``.

    The derived properties describe where the old ``end`` lands once the
    replacement has been applied, which is all the shift arithmetic needs.
    """

    start: Position
    end: Position
    text: str = ""

    @classmethod
    def insert(cls, position: Position, text: str) -> ChangeEvent:
        return cls(position, position, text)

    @classmethod
    def delete(cls, span: Range) -> ChangeEvent:
        return cls(span.start, span.end, "")

    @property
    def is_reversed(self) -> bool:
        return self.start > self.end

    def normalized(self) -> ChangeEvent:
        if self.is_reversed:
            return ChangeEvent(self.end, self.start, self.text)
        return self

    def validate(self) -> ChangeEvent:
        if self.is_reversed:
            raise InvalidChangeError(self.start, self.end)
        return self

    @property
    def inserted_line_count(self) -> int:
        """Number of line breaks in the inserted text (CRLF counts once)."""
        return self.text.count("\n")

    @property
    def last_line_length(self) -> int:
        """Length of the inserted text after its last line break."""
        return len(self.text) - self.text.rfind("\n") - 1

    @property
    def line_delta(self) -> int:
        return self.inserted_line_count - (self.end.line - self.start.line)

    @property
    def inserted_end(self) -> Position:
        """Where the old ``end`` sits immediately after the edit."""
        if self.inserted_line_count == 0:
            character = self.start.character + self.last_line_length
        else:
            character = self.last_line_length
        return Position(self.start.line + self.inserted_line_count, character)

    @property
    def char_delta(self) -> int:
        """Character shift for positions on the old ``end`` line."""
        return self.inserted_end.character - self.end.character
