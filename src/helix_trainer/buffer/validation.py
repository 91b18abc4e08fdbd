"""Validation helpers shared across buffer services."""

from __future__ import annotations

from .document import BufferDocument
from .state import Position
from .sync import BufferValidationError


def ensure_position(document: BufferDocument, position: Position) -> Position:
    if position.line < 0 or position.line >= document.line_count:
        raise BufferValidationError("Line out of range", position=position)
    if position.column < 0 or position.column > document.line_length(position.line):
        raise BufferValidationError("Column out of range", position=position)
    return position


def ensure_offset(document: BufferDocument, offset: int) -> int:
    if offset < 0 or offset > len(document.text):
        raise BufferValidationError(f"Offset {offset} out of range")
    return offset
