"""Entering insert mode and typing into the buffer."""

from __future__ import annotations

from typing import Callable, Optional

from helix_trainer.buffer import Buffer, Edit, Position, Selection
from helix_trainer.keymaps import ResolutionMatch
from helix_trainer.modes.base_mode import ModeContext, ModeResult

from .core import insertion_points


def _collapse(buffer: Buffer, *, at_end: bool) -> None:
    state = buffer.state
    if not state.selections:
        return
    points = [sel.end if at_end else sel.start for sel in state.selections]
    state.set_selections(Selection.caret(point) for point in dict.fromkeys(points))
    state.cursor = points[-1]


def _enter(message: str) -> ModeResult:
    return ModeResult(consumed=True, switch_to="insert", message=message)


def enter_insert_mode(context: ModeContext, match: ResolutionMatch) -> ModeResult:
    del match
    _collapse(context.buffer, at_end=False)
    return _enter("enter_insert")


def enter_append_mode(context: ModeContext, match: ResolutionMatch) -> ModeResult:
    del match
    buffer = context.buffer
    if buffer.state.selections:
        _collapse(buffer, at_end=True)
    else:
        cursor = buffer.state.cursor
        buffer.state.cursor = buffer.document.clamp(cursor.line, cursor.column + 1)
    return _enter("enter_append")


def insert_at_line_start(context: ModeContext, match: ResolutionMatch) -> ModeResult:
    del match
    state = context.buffer.state
    state.clear_selections()
    state.set_cursor(state.cursor.line, 0)
    return _enter("enter_insert")


def insert_at_line_end(context: ModeContext, match: ResolutionMatch) -> ModeResult:
    del match
    buffer = context.buffer
    line = buffer.state.cursor.line
    buffer.state.clear_selections()
    buffer.state.set_cursor(line, buffer.document.line_length(line))
    return _enter("enter_append")


def open_below(context: ModeContext, match: ResolutionMatch) -> ModeResult:
    del match
    buffer = context.buffer
    line = buffer.state.cursor.line
    buffer.state.clear_selections()
    offset = buffer.offset_of(Position(line, buffer.document.line_length(line)))
    buffer.apply_edits([Edit(offset, offset, "\n")], label="open_below")
    buffer.state.set_cursor(line + 1, 0)
    return _enter("open_below")


def open_above(context: ModeContext, match: ResolutionMatch) -> ModeResult:
    del match
    buffer = context.buffer
    line = buffer.state.cursor.line
    buffer.state.clear_selections()
    offset = buffer.offset_of(Position(line, 0))
    buffer.apply_edits([Edit(offset, offset, "\n")], label="open_above")
    buffer.state.set_cursor(line, 0)
    return _enter("open_above")


def _edit_each(
    buffer: Buffer, build: Callable[[int], Optional[Edit]], *, label: str
) -> ModeResult:
    edits = []
    for point in insertion_points(buffer):
        edit = build(buffer.offset_of(point))
        if edit is not None:
            edits.append(edit)
    if not edits:
        return ModeResult(consumed=True, status="noop")
    buffer.apply_edits(edits, label=label)
    return ModeResult(consumed=True)


def _insert_each(buffer: Buffer, text: str, *, label: str) -> ModeResult:
    return _edit_each(buffer, lambda offset: Edit(offset, offset, text), label=label)


def type_char(context: ModeContext, match: ResolutionMatch) -> ModeResult:
    if not match.char:
        return ModeResult(consumed=False, status="noop")
    return _insert_each(context.buffer, match.char, label="type")


def insert_newline(context: ModeContext, match: ResolutionMatch) -> ModeResult:
    del match
    return _insert_each(context.buffer, "\n", label="newline")


def insert_indent(context: ModeContext, match: ResolutionMatch) -> ModeResult:
    del match
    return _insert_each(context.buffer, context.config.indent_unit, label="indent")


def delete_backward(context: ModeContext, match: ResolutionMatch) -> ModeResult:
    del match
    return _edit_each(
        context.buffer,
        lambda offset: Edit(offset - 1, offset) if offset > 0 else None,
        label="backspace",
    )


def delete_forward(context: ModeContext, match: ResolutionMatch) -> ModeResult:
    del match
    size = len(context.buffer.text)
    return _edit_each(
        context.buffer,
        lambda offset: Edit(offset, offset + 1) if offset < size else None,
        label="delete",
    )


__all__ = [
    "enter_insert_mode",
    "enter_append_mode",
    "insert_at_line_start",
    "insert_at_line_end",
    "open_below",
    "open_above",
    "type_char",
    "insert_newline",
    "insert_indent",
    "delete_backward",
    "delete_forward",
]
