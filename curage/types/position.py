"""Zero-based source positions and half-open ranges.

Positions are ordered line-major, column-minor. Columns count characters of
the Python ``str`` holding the line. Two positions can be composed as an
offset (``base + delta``) and subtracted back (``pos - origin``), which lets a
caller keep spans relative to some anchor and re-anchor them later.
"""

from __future__ import annotations

from dataclasses import dataclass


@dataclass(frozen=True, order=True)
class Position:
    line: int
    column: int

    def __add__(self, delta: Position) -> Position:
        if not isinstance(delta, Position):
            return NotImplemented
        if delta.line == 0:
            return Position(self.line, self.column + delta.column)
        return Position(self.line + delta.line, delta.column)

    def __sub__(self, origin: Position) -> Position:
        """Offset of ``self`` relative to ``origin`` (requires ``origin <= self``)."""
        if not isinstance(origin, Position):
            return NotImplemented
        if self.line == origin.line:
            return Position(0, self.column - origin.column)
        return Position(self.line - origin.line, self.column)

    def advance(self, text: str) -> Position:
        # text never contains a line break here; the lexer works line by line
        return Position(self.line, self.column + len(text))

    def __repr__(self):
        return f"Position({self.line}, {self.column})"


@dataclass(frozen=True, order=True)
class Range:
    start: Position
    end: Position

    @classmethod
    def at(cls, pos: Position) -> Range:
        """Zero-length range at ``pos``."""
        return cls(pos, pos)

    @classmethod
    def of_text(cls, start: Position, text: str) -> Range:
        return cls(start, start.advance(text))

    @classmethod
    def cover(cls, first: Range, last: Range) -> Range:
        return cls(min(first.start, last.start), max(first.end, last.end))

    @property
    def is_empty(self) -> bool:
        return self.start == self.end

    def contains(self, pos: Position) -> bool:
        return self.start <= pos < self.end

    def relative_to(self, origin: Position) -> Range:
        return Range(self.start - origin, self.end - origin)

    def shifted(self, origin: Position) -> Range:
        return Range(origin + self.start, origin + self.end)

    def __repr__(self):
        return f"Range({self.start.line}:{self.start.column}-{self.end.line}:{self.end.column})"
