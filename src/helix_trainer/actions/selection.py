"""Selection-set commands: line selection, collapsing and multi-cursor copies."""

from __future__ import annotations

from helix_trainer.buffer import BufferDocument, Position, Selection
from helix_trainer.keymaps import ResolutionMatch
from helix_trainer.modes.base_mode import ModeContext, ModeResult

from .core import after_line, line_selection


def _spans_full_lines(document: BufferDocument, selection: Selection) -> bool:
    return (
        selection.start.column == 0
        and selection.end.column == document.line_length(selection.end.line)
    )


def select_line(context: ModeContext, match: ResolutionMatch) -> ModeResult:
    """Select the cursor's line; repeating grows the selection by one line.

    The selection grows when the primary selection already spans whole lines
    and the cursor still sits where the previous ``x`` left it.
    """

    del match
    buffer = context.buffer
    document = buffer.document
    state = buffer.state
    primary = state.primary

    if (
        primary is not None
        and _spans_full_lines(document, primary)
        and state.cursor == after_line(document, primary.end.line)
    ):
        if primary.end.line == document.last_line:
            return ModeResult(consumed=True, status="noop")
        last = primary.end.line + 1
        state.set_selections([line_selection(document, primary.start.line, last)])
        state.cursor = after_line(document, last)
        return ModeResult(consumed=True, message="extend_line")

    line = state.cursor.line
    state.set_selections([line_selection(document, line, line)])
    state.cursor = after_line(document, line)
    return ModeResult(consumed=True, message="select_line")


def extend_to_line_bounds(context: ModeContext, match: ResolutionMatch) -> ModeResult:
    del match
    document = context.buffer.document
    state = context.buffer.state
    if not state.selections:
        line = state.cursor.line
        state.set_selections([line_selection(document, line, line)])
        return ModeResult(consumed=True)

    state.set_selections(
        selection.with_bounds(
            Position(selection.start.line, 0),
            Position(selection.end.line, document.line_length(selection.end.line)),
        )
        for selection in state.selections
    )
    return ModeResult(consumed=True)


def collapse_selections(context: ModeContext, match: ResolutionMatch) -> ModeResult:
    del match
    context.buffer.state.clear_selections()
    return ModeResult(consumed=True)


def keep_primary_selection(context: ModeContext, match: ResolutionMatch) -> ModeResult:
    del match
    context.buffer.state.keep_primary()
    return ModeResult(consumed=True)


def select_all(context: ModeContext, match: ResolutionMatch) -> ModeResult:
    del match
    document = context.buffer.document
    end = document.end_position()
    context.buffer.state.set_selections([Selection(Position(0, 0), end)])
    context.buffer.state.cursor = end
    return ModeResult(consumed=True)


def copy_selection_down(context: ModeContext, match: ResolutionMatch) -> ModeResult:
    """Duplicate the primary selection onto the lines directly below it.

    The copy is shifted by the primary's line span, with columns clamped to
    the target lines, and becomes the new primary. A bare cursor turns into
    a caret at the cursor plus a caret on the next line.
    """

    del match
    document = context.buffer.document
    state = context.buffer.state
    primary = state.primary
    if primary is None:
        cursor = state.cursor
        if cursor.line >= document.last_line:
            return ModeResult(consumed=True, status="noop")
        below = document.clamp(cursor.line + 1, cursor.column)
        state.set_selections([Selection.caret(cursor), Selection.caret(below)])
        state.cursor = below
        return ModeResult(consumed=True, message="add_cursor")

    span = primary.end.line - primary.start.line + 1
    if primary.end.line + span > document.last_line:
        return ModeResult(consumed=True, status="noop")

    copy = primary.with_bounds(
        document.clamp(primary.start.line + span, primary.start.column),
        document.clamp(primary.end.line + span, primary.end.column),
    )
    if copy in state.selections:
        return ModeResult(consumed=True, status="noop")
    state.selections.append(copy)
    state.cursor = copy.head
    context.bus.emit("selection.copy_down", {"count": len(state.selections)})
    return ModeResult(consumed=True, message="add_cursor")


__all__ = [
    "select_line",
    "extend_to_line_bounds",
    "collapse_selections",
    "keep_primary_selection",
    "select_all",
    "copy_selection_down",
]
