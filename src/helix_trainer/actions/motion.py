"""Cursor motions. In select mode the same motions extend the primary selection.

Every motion clamps to the buffer: columns stay within ``0..len(line)`` and
lines within ``0..last_line``. Word motions never cross a line boundary, and
``e`` lands on the last character of the word rather than one past it.
"""

from __future__ import annotations

import re
from typing import Callable, Optional

from helix_trainer.buffer import Anchor, Buffer, Position, Selection
from helix_trainer.keymaps import ResolutionMatch
from helix_trainer.modes.base_mode import ModeContext, ModeResult

from .core import line_selection

Target = Callable[[Buffer], Optional[Position]]

_WORD_AHEAD = re.compile(r"\s*\S+")
_WORD_BEHIND = re.compile(r"\S+\s*$")
_WORD = re.compile(r"\S+")


def _left(buffer: Buffer) -> Position:
    cursor = buffer.state.cursor
    return buffer.document.clamp(cursor.line, cursor.column - 1)


def _right(buffer: Buffer) -> Position:
    cursor = buffer.state.cursor
    return buffer.document.clamp(cursor.line, cursor.column + 1)


def _up(buffer: Buffer) -> Position:
    cursor = buffer.state.cursor
    return buffer.document.clamp(cursor.line - 1, cursor.column)


def _down(buffer: Buffer) -> Position:
    cursor = buffer.state.cursor
    return buffer.document.clamp(cursor.line + 1, cursor.column)


def _word_forward(buffer: Buffer) -> Optional[Position]:
    cursor = buffer.state.cursor
    line = buffer.document.get_line(cursor.line)
    found = _WORD_AHEAD.match(line, cursor.column)
    if found is None:
        return None
    return Position(cursor.line, found.end())


def _word_backward(buffer: Buffer) -> Optional[Position]:
    cursor = buffer.state.cursor
    line = buffer.document.get_line(cursor.line)
    found = _WORD_BEHIND.search(line[: cursor.column])
    if found is None:
        return None
    return Position(cursor.line, found.start())


def _word_end(buffer: Buffer) -> Optional[Position]:
    cursor = buffer.state.cursor
    line = buffer.document.get_line(cursor.line)
    found = _WORD.search(line, cursor.column + 1)
    if found is None:
        return None
    return Position(cursor.line, found.end() - 1)


def _line_start(buffer: Buffer) -> Position:
    return Position(buffer.state.cursor.line, 0)


def _line_end(buffer: Buffer) -> Position:
    line = buffer.state.cursor.line
    return Position(line, buffer.document.line_length(line))


def _buffer_start(buffer: Buffer) -> Position:
    del buffer
    return Position(0, 0)


def _buffer_end(buffer: Buffer) -> Position:
    return buffer.document.end_position()


def _find_char(buffer: Buffer, char: Optional[str], *, till: bool) -> Optional[Position]:
    if not char:
        return None
    cursor = buffer.state.cursor
    line = buffer.document.get_line(cursor.line)
    index = line.find(char, cursor.column + 1)
    if index < 0:
        return None
    return Position(cursor.line, index - 1 if till else index)


def _move_to(context: ModeContext, target: Optional[Position]) -> ModeResult:
    if target is None:
        return ModeResult(consumed=True, status="noop")
    context.buffer.state.cursor = target
    return ModeResult(consumed=True)


def _extend_to(context: ModeContext, target: Optional[Position]) -> ModeResult:
    if target is None:
        return ModeResult(consumed=True, status="noop")
    state = context.buffer.state
    anchor = state.primary.anchor_position if state.primary else state.cursor
    state.cursor = target
    state.replace_primary(Selection.between(anchor, target))
    context.bus.emit("select.extend", {"anchor": anchor, "cursor": target})
    return ModeResult(consumed=True)


def _extend_lines(context: ModeContext, delta: int) -> ModeResult:
    buffer = context.buffer
    state = buffer.state
    document = buffer.document
    primary = state.primary
    if primary is None:
        cursor_line = state.cursor.line
        primary = line_selection(document, cursor_line, cursor_line)
    anchor_line = primary.anchor_position.line
    head_line = max(0, min(primary.head.line + delta, document.last_line))
    first, last = sorted((anchor_line, head_line))
    selection = line_selection(document, first, last)
    if head_line < anchor_line:
        selection = Selection(selection.start, selection.end, anchor=Anchor.END)
    state.replace_primary(selection)
    state.cursor = document.clamp(head_line, state.cursor.column)
    return ModeResult(consumed=True)


def _motion(target: Target) -> Callable[[ModeContext, ResolutionMatch], ModeResult]:
    def move(context: ModeContext, match: ResolutionMatch) -> ModeResult:
        del match
        return _move_to(context, target(context.buffer))

    return move


def _extension(target: Target) -> Callable[[ModeContext, ResolutionMatch], ModeResult]:
    def extend(context: ModeContext, match: ResolutionMatch) -> ModeResult:
        del match
        return _extend_to(context, target(context.buffer))

    return extend


move_left = _motion(_left)
move_right = _motion(_right)
move_up = _motion(_up)
move_down = _motion(_down)
move_word_forward = _motion(_word_forward)
move_word_backward = _motion(_word_backward)
move_word_end = _motion(_word_end)
move_line_start = _motion(_line_start)
move_line_end = _motion(_line_end)
goto_buffer_start = _motion(_buffer_start)
goto_buffer_end = _motion(_buffer_end)

extend_left = _extension(_left)
extend_right = _extension(_right)
extend_up = _extension(_up)
extend_down = _extension(_down)
extend_word_forward = _extension(_word_forward)
extend_word_backward = _extension(_word_backward)
extend_word_end = _extension(_word_end)
extend_line_start = _extension(_line_start)
extend_line_end = _extension(_line_end)
extend_buffer_start = _extension(_buffer_start)
extend_buffer_end = _extension(_buffer_end)


def find_char(context: ModeContext, match: ResolutionMatch) -> ModeResult:
    return _move_to(context, _find_char(context.buffer, match.char, till=False))


def till_char(context: ModeContext, match: ResolutionMatch) -> ModeResult:
    return _move_to(context, _find_char(context.buffer, match.char, till=True))


def extend_find_char(context: ModeContext, match: ResolutionMatch) -> ModeResult:
    return _extend_to(context, _find_char(context.buffer, match.char, till=False))


def extend_till_char(context: ModeContext, match: ResolutionMatch) -> ModeResult:
    return _extend_to(context, _find_char(context.buffer, match.char, till=True))


def extend_line_down(context: ModeContext, match: ResolutionMatch) -> ModeResult:
    del match
    return _extend_lines(context, 1)


def extend_line_up(context: ModeContext, match: ResolutionMatch) -> ModeResult:
    del match
    return _extend_lines(context, -1)


__all__ = [
    "move_left",
    "move_right",
    "move_up",
    "move_down",
    "move_word_forward",
    "move_word_backward",
    "move_word_end",
    "move_line_start",
    "move_line_end",
    "goto_buffer_start",
    "goto_buffer_end",
    "find_char",
    "till_char",
    "extend_left",
    "extend_right",
    "extend_up",
    "extend_down",
    "extend_word_forward",
    "extend_word_backward",
    "extend_word_end",
    "extend_line_start",
    "extend_line_end",
    "extend_buffer_start",
    "extend_buffer_end",
    "extend_find_char",
    "extend_till_char",
    "extend_line_down",
    "extend_line_up",
]
