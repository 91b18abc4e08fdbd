"""Change commands applied to every selection, or to the cursor without one.

Multi-selection edits go through ``Buffer.apply_edits`` in a single batch so
every tracked position is remapped by the same offset ledger.
"""

from __future__ import annotations

from dataclasses import replace
from typing import List, Optional

from helix_trainer.buffer import Buffer, Edit, Position, Selection
from helix_trainer.keymaps import ResolutionMatch
from helix_trainer.modes.base_mode import ModeContext, ModeResult
from helix_trainer.runtime import telemetry


def _char_at_cursor(buffer: Buffer, text: str = "") -> Optional[Edit]:
    """Edit over the absolute character under the cursor (may be a newline)."""

    offset = buffer.offset_of(buffer.state.cursor)
    if offset >= len(buffer.text):
        return None
    return Edit(offset, offset + 1, text)


def _char_on_line(buffer: Buffer, text: str) -> Optional[Edit]:
    """Like ``_char_at_cursor`` but never touches the line break."""

    cursor = buffer.state.cursor
    if cursor.column >= buffer.document.line_length(cursor.line):
        return None
    offset = buffer.offset_of(cursor)
    return Edit(offset, offset + 1, text)


def _filled(buffer: Buffer) -> List[Selection]:
    return [sel for sel in buffer.state.selections if not sel.is_empty]


def _active_selections(buffer: Buffer) -> List[Selection]:
    """Selections covering text; leftover carets are dropped when there are none."""

    filled = _filled(buffer)
    if not filled:
        buffer.state.clear_selections()
    return filled


def _swap_case(text: str) -> str:
    swapped = []
    for char in text:
        other = char.swapcase()
        swapped.append(other if len(other) == 1 else char)
    return "".join(swapped)


def _touched_lines(buffer: Buffer) -> List[int]:
    state = buffer.state
    if not state.selections:
        return [state.cursor.line]
    lines = {
        line
        for selection in state.selections
        for line in range(selection.start.line, selection.end.line + 1)
    }
    return sorted(lines)


def _line_end_offset(buffer: Buffer, line: int) -> int:
    return buffer.offset_of(Position(line, buffer.document.line_length(line)))


def delete_selection(context: ModeContext, match: ResolutionMatch) -> ModeResult:
    """Delete every selection, or the character under a bare cursor."""

    del match
    buffer = context.buffer
    state = buffer.state
    filled = _active_selections(buffer)
    if filled:
        buffer.apply_edits(
            [Edit(*buffer.selection_offsets(sel)) for sel in filled],
            label="delete_selection",
        )
        state.clear_selections()
        return ModeResult(consumed=True, message="delete")

    edit = _char_at_cursor(buffer)
    if edit is None:
        return ModeResult(consumed=True, status="noop")
    buffer.apply_edits([edit], label="delete_char")
    return ModeResult(consumed=True, message="delete")


def change_selection(context: ModeContext, match: ResolutionMatch) -> ModeResult:
    """Delete like ``d`` and enter insert mode at the deletion points.

    Every selection collapses to a caret where its text used to be.
    """

    del match
    buffer = context.buffer
    state = buffer.state
    filled = _active_selections(buffer)
    if filled:
        buffer.apply_edits(
            [Edit(*buffer.selection_offsets(sel)) for sel in filled],
            label="change_selection",
        )
        carets = dict.fromkeys(Selection.caret(sel.start) for sel in state.selections)
        state.set_selections(carets)
        state.cursor = state.selections[-1].start
    else:
        edit = _char_at_cursor(buffer)
        if edit is not None:
            buffer.apply_edits([edit], label="change_char")
    return ModeResult(consumed=True, switch_to="insert", message="change")


def replace_char(context: ModeContext, match: ResolutionMatch) -> ModeResult:
    buffer = context.buffer
    edit = _char_on_line(buffer, match.char) if match.char else None
    if edit is None:
        return ModeResult(consumed=True, status="noop")
    buffer.apply_edits([edit], label="replace_char")
    return ModeResult(consumed=True, message="replace")


def yank_selection(context: ModeContext, match: ResolutionMatch) -> ModeResult:
    del match
    buffer = context.buffer
    primary = buffer.state.primary
    if primary is None or primary.is_empty:
        return ModeResult(consumed=True, status="noop")
    text = buffer.selection_text(primary)
    register_name = buffer.state.active_register or '"'
    context.registers.yank_to(register_name, text, register_type="character")
    context.bus.emit("register.yank", {"register": register_name, "text": text})
    return ModeResult(consumed=True, message=register_name)


def _paste(context: ModeContext, *, after: bool) -> ModeResult:
    buffer = context.buffer
    register_name = buffer.state.active_register or '"'
    value = context.registers.get(register_name)
    if not value.text:
        return ModeResult(consumed=True, status="register_empty")

    text = value.text[:-1] if value.text.endswith("\n") else value.text
    line = buffer.state.cursor.line
    if after:
        offset = _line_end_offset(buffer, line)
        buffer.apply_edits([Edit(offset, offset, "\n" + text)], label="paste_after")
        line += 1
    else:
        offset = buffer.offset_of(Position(line, 0))
        buffer.apply_edits([Edit(offset, offset, text + "\n")], label="paste_before")
    buffer.state.set_cursor(line, 0)
    return ModeResult(consumed=True, message="paste")


def paste_after(context: ModeContext, match: ResolutionMatch) -> ModeResult:
    del match
    return _paste(context, after=True)


def paste_before(context: ModeContext, match: ResolutionMatch) -> ModeResult:
    del match
    return _paste(context, after=False)


def switch_case(context: ModeContext, match: ResolutionMatch) -> ModeResult:
    del match
    buffer = context.buffer
    filled = _active_selections(buffer)
    if filled:
        edits = []
        for selection in filled:
            start, end = buffer.selection_offsets(selection)
            edits.append(Edit(start, end, _swap_case(buffer.text[start:end])))
    else:
        cursor = buffer.state.cursor
        line = buffer.document.get_line(cursor.line)
        under = line[cursor.column : cursor.column + 1]
        edit = _char_on_line(buffer, _swap_case(under))
        edits = [edit] if edit is not None else []

    if not edits:
        return ModeResult(consumed=True, status="noop")
    buffer.apply_edits(edits, label="switch_case")
    return ModeResult(consumed=True)


def _reindent(context: ModeContext, *, outdent: bool) -> ModeResult:
    buffer = context.buffer
    unit = context.config.indent_unit
    document = buffer.document
    edits = []
    for line in _touched_lines(buffer):
        start = buffer.offset_of(Position(line, 0))
        if not outdent:
            edits.append(Edit(start, start, unit))
        elif document.get_line(line).startswith(unit):
            edits.append(Edit(start, start + len(unit)))
    if not edits:
        return ModeResult(consumed=True, status="noop")

    state = buffer.state
    pinned = [sel.start.column == 0 for sel in state.selections]
    with telemetry.span(
        "edit::indent",
        component="actions",
        metadata={"outdent": outdent, "lines": len(edits)},
    ):
        buffer.apply_edits(edits, label="outdent" if outdent else "indent")
    # Selections that began at column 0 keep covering the whole line.
    state.set_selections(
        replace(sel, start=Position(sel.start.line, 0)) if keep else sel
        for sel, keep in zip(state.selections, pinned)
    )
    return ModeResult(consumed=True)


def indent(context: ModeContext, match: ResolutionMatch) -> ModeResult:
    del match
    return _reindent(context, outdent=False)


def outdent(context: ModeContext, match: ResolutionMatch) -> ModeResult:
    del match
    return _reindent(context, outdent=True)


def join_lines(context: ModeContext, match: ResolutionMatch) -> ModeResult:
    del match
    buffer = context.buffer
    line = buffer.state.cursor.line
    if line >= buffer.document.last_line:
        return ModeResult(consumed=True, status="noop")
    offset = _line_end_offset(buffer, line)
    buffer.apply_edits([Edit(offset, offset + 1, " ")], label="join_lines")
    return ModeResult(consumed=True)


def delete_and_exit(context: ModeContext, match: ResolutionMatch) -> ModeResult:
    return replace(delete_selection(context, match), switch_to="normal")


__all__ = [
    "delete_selection",
    "change_selection",
    "replace_char",
    "yank_selection",
    "paste_after",
    "paste_before",
    "switch_case",
    "indent",
    "outdent",
    "join_lines",
    "delete_and_exit",
]
