"""Match-mode actions: select inside/around a delimiter pair, add a surround.

Delimiter lookup is a plain forward search from the cursor: the first open
character, then the first close character after it. Nested pairs of the same
kind are not balanced.
"""

from __future__ import annotations

from typing import Optional, Tuple

from helix_trainer.buffer import Buffer, Edit, Selection
from helix_trainer.keymaps import ResolutionMatch
from helix_trainer.modes.base_mode import ModeContext, ModeResult

PAIRS = {"(": ")", "[": "]", "{": "}"}


def delimiter_pair(char: str) -> Tuple[str, str]:
    """Open/close characters for ``char``; unknown characters pair with themselves."""

    return char, PAIRS.get(char, char)


def _find_pair(buffer: Buffer, char: str) -> Optional[Tuple[int, int]]:
    opening, closing = delimiter_pair(char)
    text = buffer.text
    open_at = text.find(opening, buffer.offset_of(buffer.state.cursor))
    if open_at < 0:
        return None
    close_at = text.find(closing, open_at + 1)
    if close_at < 0:
        return None
    return open_at, close_at


def _select_pair(context: ModeContext, match: ResolutionMatch, *, around: bool) -> ModeResult:
    buffer = context.buffer
    found = _find_pair(buffer, match.char) if match.char else None
    if found is None:
        return ModeResult(consumed=True, switch_to="normal", status="no_match")

    open_at, close_at = found
    start, end = (open_at, close_at + 1) if around else (open_at + 1, close_at)
    selection = Selection(buffer.position_at(start), buffer.position_at(end))
    # An empty pair leaves nothing selected; the cursor sits between the delimiters.
    buffer.state.set_selections([] if selection.is_empty else [selection])
    buffer.state.cursor = selection.end
    return ModeResult(
        consumed=True,
        switch_to="normal",
        message="select_around" if around else "select_inside",
    )


def select_inside(context: ModeContext, match: ResolutionMatch) -> ModeResult:
    return _select_pair(context, match, around=False)


def select_around(context: ModeContext, match: ResolutionMatch) -> ModeResult:
    return _select_pair(context, match, around=True)


def surround_add(context: ModeContext, match: ResolutionMatch) -> ModeResult:
    """Wrap every non-empty selection in the delimiter pair for ``match.char``.

    Each wrapped selection grows to cover the inserted delimiters.
    """

    buffer = context.buffer
    state = buffer.state
    char = match.char
    targets = [sel for sel in state.selections if not sel.is_empty]
    if not char or not targets:
        return ModeResult(consumed=True, switch_to="normal", status="noop")

    opening, closing = delimiter_pair(char)
    before = [buffer.selection_offsets(sel) for sel in state.selections]
    edits = []
    for start, end in before:
        if start == end:
            continue
        edits.append(Edit(start, start, opening))
        edits.append(Edit(end, end, closing))
    ledger = buffer.apply_edits(edits, label="surround_add")

    wrapped = []
    for selection, (start, end) in zip(state.selections, before):
        if start == end:
            wrapped.append(selection)
            continue
        # The end is measured from the new start so a neighbour's opening
        # delimiter at the same offset is not swallowed.
        new_start = ledger.map(start) - len(opening)
        new_end = new_start + len(opening) + (end - start) + len(closing)
        wrapped.append(
            selection.with_bounds(
                buffer.position_at(new_start),
                buffer.position_at(new_end),
            )
        )
    state.set_selections(wrapped)
    return ModeResult(consumed=True, switch_to="normal", message="surround_add")


__all__ = [
    "PAIRS",
    "delimiter_pair",
    "select_inside",
    "select_around",
    "surround_add",
]
