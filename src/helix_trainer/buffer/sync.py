"""Adapter boundary types for handing buffer state to a presentation layer."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Protocol

from .state import Position, Selection


@dataclass(frozen=True, slots=True)
class BufferMirror:
    """Host-friendly snapshot describing what the presentation should render."""

    text: str
    cursor: Position
    selections: tuple[Selection, ...]
    attributes: dict[str, str] = field(default_factory=dict)


class BufferSync(Protocol):
    """How presentation adapters read buffer state."""

    def pull_buffer(self) -> BufferMirror:
        """Return the latest buffer snapshot that the host should render."""
        ...


class BufferValidationError(RuntimeError):
    """Raised when a caller hands the buffer an out-of-range position."""

    def __init__(self, message: str, *, position: Position | None = None) -> None:
        super().__init__(message)
        self.position = position
