"""Cursor, selection, and register-choice state tied to a buffer."""

from __future__ import annotations

from dataclasses import dataclass, field, replace
from enum import Enum
from typing import Iterable, List, Optional


@dataclass(frozen=True, slots=True, order=True)
class Position:
    """A (line, column) address; ordering is document order."""

    line: int = 0
    column: int = 0


class Anchor(str, Enum):
    """Which end of a selection stays fixed while the other end moves."""

    START = "start"
    END = "end"


@dataclass(frozen=True, slots=True)
class Selection:
    """End-exclusive range ``[start, end)`` with ``start <= end``."""

    start: Position
    end: Position
    anchor: Anchor = Anchor.START

    def __post_init__(self) -> None:
        if self.end < self.start:
            raise ValueError(f"selection end {self.end} precedes start {self.start}")

    @classmethod
    def between(cls, anchor: Position, head: Position) -> "Selection":
        """Build the selection spanned by a fixed ``anchor`` and a moving ``head``."""

        if head >= anchor:
            return cls(start=anchor, end=head, anchor=Anchor.START)
        return cls(start=head, end=anchor, anchor=Anchor.END)

    @classmethod
    def caret(cls, position: Position) -> "Selection":
        return cls(start=position, end=position)

    @property
    def is_empty(self) -> bool:
        return self.start == self.end

    @property
    def anchor_position(self) -> Position:
        return self.start if self.anchor is Anchor.START else self.end

    @property
    def head(self) -> Position:
        return self.end if self.anchor is Anchor.START else self.start

    def with_bounds(self, start: Position, end: Position) -> "Selection":
        if end < start:
            start, end = end, start
        return replace(self, start=start, end=end)


@dataclass(slots=True)
class BufferState:
    """Mutable cursor + selection set. The last selection is the primary one."""

    cursor: Position = field(default_factory=Position)
    selections: List[Selection] = field(default_factory=list)
    active_register: str = '"'
    last_change_tick: int = 0

    @property
    def primary(self) -> Optional[Selection]:
        return self.selections[-1] if self.selections else None

    def set_cursor(self, line: int, column: int) -> None:
        self.cursor = Position(line, column)

    def clear_selections(self) -> None:
        self.selections = []

    def set_selections(self, selections: Iterable[Selection]) -> None:
        self.selections = list(selections)

    def replace_primary(self, selection: Selection) -> None:
        if self.selections:
            self.selections[-1] = selection
        else:
            self.selections.append(selection)

    def keep_primary(self) -> None:
        if self.selections:
            self.selections = [self.selections[-1]]
