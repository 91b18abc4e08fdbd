"""Line-addressed text storage for trainer buffers."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import List, Sequence

from .state import Position


@dataclass(slots=True)
class BufferDocument:
    """Immutable-ish text value stored as a list of lines.

    Lines never contain ``\\n``; the text always has at least one (possibly
    empty) line. Absolute offsets count one character per line break.
    """

    _lines: List[str] = field(default_factory=lambda: [""])
    version: int = 0
    dirty: bool = False

    @classmethod
    def from_text(cls, text: str) -> "BufferDocument":
        normalized = text.replace("\r\n", "\n")
        return cls(_lines=normalized.split("\n"), version=0, dirty=False)

    def with_text(self, text: str) -> "BufferDocument":
        """Return a document holding ``text`` with a bumped version."""

        updated = BufferDocument.from_text(text)
        updated.version = self.version + 1
        updated.dirty = True
        return updated

    def snapshot(self) -> Sequence[str]:
        """Return the current lines without exposing internal mutability."""

        return tuple(self._lines)

    @property
    def text(self) -> str:
        return "\n".join(self._lines)

    @property
    def line_count(self) -> int:
        return len(self._lines)

    @property
    def last_line(self) -> int:
        return len(self._lines) - 1

    def get_line(self, index: int) -> str:
        return self._lines[index]

    def line_length(self, index: int) -> int:
        return len(self._lines[index])

    def end_position(self) -> Position:
        return Position(self.last_line, len(self._lines[-1]))

    def clamp(self, line: int, column: int) -> Position:
        line = max(0, min(line, self.last_line))
        column = max(0, min(column, len(self._lines[line])))
        return Position(line, column)

    def offset_of(self, position: Position) -> int:
        offset = 0
        for index in range(position.line):
            offset += len(self._lines[index]) + 1  # newline
        return offset + position.column

    def position_at(self, offset: int) -> Position:
        running = 0
        for line, content in enumerate(self._lines):
            if offset <= running + len(content):
                return Position(line, max(0, offset - running))
            running += len(content) + 1
        return self.end_position()
