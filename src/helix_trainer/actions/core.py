"""Core action implementations shared across modes."""

from __future__ import annotations

from typing import List, MutableMapping, cast

from helix_trainer.buffer import Buffer, BufferDocument, Position, Selection
from helix_trainer.keymaps import ResolutionMatch
from helix_trainer.modes.base_mode import ModeContext, ModeResult


def line_selection(document: BufferDocument, first: int, last: int) -> Selection:
    """Selection covering whole lines ``first..last`` (inclusive)."""

    return Selection(
        start=Position(first, 0),
        end=Position(last, document.line_length(last)),
    )


def after_line(document: BufferDocument, line: int) -> Position:
    """Start of the next line, or the end of ``line`` when it is the last one."""

    if line < document.last_line:
        return Position(line + 1, 0)
    return Position(line, document.line_length(line))


def insertion_points(buffer: Buffer) -> List[Position]:
    """Carets when any exist, otherwise the lone cursor."""

    carets = [sel.start for sel in buffer.state.selections if sel.is_empty]
    if carets:
        return list(dict.fromkeys(carets))
    return [buffer.state.cursor]


def select_state(context: ModeContext) -> MutableMapping[str, object]:
    return cast(
        MutableMapping[str, object],
        context.extras.setdefault("select_state", {}),
    )


def enter_select_mode(context: ModeContext, match: ResolutionMatch) -> ModeResult:
    del match
    state = context.buffer.state
    if state.primary is None:
        state.replace_primary(Selection.caret(state.cursor))
    select_state(context)["line_wise"] = False
    return ModeResult(consumed=True, switch_to="select", message="enter_select")


def enter_line_select_mode(
    context: ModeContext, match: ResolutionMatch
) -> ModeResult:
    del match
    document = context.buffer.document
    line = context.buffer.state.cursor.line
    context.buffer.state.replace_primary(line_selection(document, line, line))
    select_state(context)["line_wise"] = True
    return ModeResult(consumed=True, switch_to="select", message="enter_line_select")


def enter_match_mode(context: ModeContext, match: ResolutionMatch) -> ModeResult:
    del context, match
    return ModeResult(consumed=True, switch_to="match", message="enter_match")


def undo(context: ModeContext, match: ResolutionMatch) -> ModeResult:
    del context, match
    return ModeResult(consumed=True, status="undo_unavailable")


def redo(context: ModeContext, match: ResolutionMatch) -> ModeResult:
    del context, match
    return ModeResult(consumed=True, status="undo_unavailable")


def split_selection(context: ModeContext, match: ResolutionMatch) -> ModeResult:
    # Regex splitting is not supported; the key is acknowledged and ignored.
    del context, match
    return ModeResult(consumed=True, status="split_unsupported")


__all__ = [
    "after_line",
    "insertion_points",
    "line_selection",
    "select_state",
    "enter_select_mode",
    "enter_line_select_mode",
    "enter_match_mode",
    "undo",
    "redo",
    "split_selection",
]
