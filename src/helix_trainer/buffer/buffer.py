"""High-level buffer façade combining document, selection state, and registers."""

from __future__ import annotations

from contextlib import AbstractContextManager
from dataclasses import dataclass
from typing import ContextManager, Iterable, List, Optional, Sequence, Tuple

from helix_trainer.runtime import telemetry

from .document import BufferDocument
from .registers import RegisterBank
from .state import BufferState, Position, Selection
from .sync import BufferMirror
from .validation import ensure_offset, ensure_position


@dataclass(frozen=True, slots=True)
class Edit:
    """Replace the absolute offset range ``[start, end)`` with ``text``."""

    start: int
    end: int
    text: str = ""

    @property
    def is_noop(self) -> bool:
        return self.start == self.end and not self.text


@dataclass(frozen=True, slots=True)
class BufferView:
    version: int
    text: str
    cursor: Position
    selections: Tuple[Selection, ...]

    @property
    def primary(self) -> Optional[Selection]:
        return self.selections[-1] if self.selections else None


class OffsetLedger:
    """Maps offsets from before a batch of edits to offsets after it.

    An offset inside a replaced range lands on the start of the replacement;
    an offset sitting exactly on a pure insertion moves past the inserted text.
    """

    def __init__(self, edits: Sequence[Edit]) -> None:
        self._entries = [(edit.start, edit.end, len(edit.text)) for edit in edits]

    def map(self, offset: int) -> int:
        shift = 0
        for start, end, inserted in self._entries:
            if offset < start:
                break
            if offset >= end:
                shift += inserted - (end - start)
                continue
            return start + shift
        return offset + shift


class Buffer:
    def __init__(
        self,
        *,
        name: str = "default",
        document: Optional[BufferDocument] = None,
        state: Optional[BufferState] = None,
        registers: Optional[RegisterBank] = None,
    ) -> None:
        self.name = name
        self.document = document or BufferDocument()
        self.state = state or BufferState()
        self.registers = registers or RegisterBank()

    @classmethod
    def from_text(cls, text: str, *, name: str = "default") -> "Buffer":
        return cls(name=name, document=BufferDocument.from_text(text))

    @property
    def text(self) -> str:
        return self.document.text

    def load(self, text: str) -> None:
        """Replace the whole buffer and drop cursor, selections, and registers."""

        self.document = BufferDocument.from_text(text)
        self.state = BufferState()
        self.registers.clear()

    def snapshot(self) -> BufferView:
        return BufferView(
            version=self.document.version,
            text=self.document.text,
            cursor=self.state.cursor,
            selections=tuple(self.state.selections),
        )

    def mirror(self, *, attributes: Optional[dict[str, str]] = None) -> BufferMirror:
        return BufferMirror(
            text=self.document.text,
            cursor=self.state.cursor,
            selections=tuple(self.state.selections),
            attributes=dict(attributes or {}),
        )

    def offset_of(self, position: Position) -> int:
        return self.document.offset_of(ensure_position(self.document, position))

    def position_at(self, offset: int) -> Position:
        return self.document.position_at(ensure_offset(self.document, offset))

    def selection_offsets(self, selection: Selection) -> Tuple[int, int]:
        return self.offset_of(selection.start), self.offset_of(selection.end)

    def get_text_range(self, start: Position, end: Position) -> str:
        start = ensure_position(self.document, start)
        end = ensure_position(self.document, end)
        if start > end:
            start, end = end, start
        text = self.document.text
        return text[self.document.offset_of(start) : self.document.offset_of(end)]

    def selection_text(self, selection: Selection) -> str:
        return self.get_text_range(selection.start, selection.end)

    def apply_edits(self, edits: Iterable[Edit], *, label: str) -> OffsetLedger:
        """Apply non-overlapping edits as one change and remap tracked positions.

        Edits are applied in reverse document order so earlier offsets stay
        valid. Edits overlapping an earlier one are dropped. The cursor and
        every selection bound are carried through the returned ledger.
        """

        ordered = _normalize_edits(self.document, edits)
        ledger = OffsetLedger(ordered)
        if not ordered:
            return ledger

        with Transaction(self, label) as tx:
            before_text = self.document.text
            after_text = before_text
            for edit in reversed(ordered):
                after_text = after_text[: edit.start] + edit.text + after_text[edit.end :]

            old_document = self.document
            self.document = old_document.with_text(after_text)

            def carry(position: Position) -> Position:
                offset = ledger.map(old_document.offset_of(position))
                return self.document.position_at(offset)

            self.state.cursor = carry(self.state.cursor)
            self.state.selections = [
                selection.with_bounds(carry(selection.start), carry(selection.end))
                for selection in self.state.selections
            ]
            self.state.last_change_tick = self.document.version
            tx.commit(before_text, after_text, len(ordered))
        return ledger

    def replace_range(
        self, start: Position, end: Position, text: str, *, label: str
    ) -> OffsetLedger:
        """Replace ``[start, end)`` and leave the cursor after the new text."""

        start_offset = self.offset_of(start)
        end_offset = self.offset_of(end)
        if start_offset > end_offset:
            start_offset, end_offset = end_offset, start_offset
        ledger = self.apply_edits([Edit(start_offset, end_offset, text)], label=label)
        self.state.cursor = self.document.position_at(start_offset + len(text))
        return ledger

    def delete_range(self, start: Position, end: Position) -> OffsetLedger:
        return self.replace_range(start, end, "", label="delete_range")


class Transaction(AbstractContextManager["Transaction"]):
    def __init__(self, buffer: Buffer, label: str) -> None:
        self.buffer = buffer
        self.label = label
        self._span_cm: Optional[ContextManager[telemetry.SpanHandle]] = None
        self._handle: Optional[telemetry.SpanHandle] = None

    def __enter__(self) -> "Transaction":
        self._span_cm = telemetry.span(
            name=f"buffer::{self.label}",
            component=True,
            metadata={"buffer": self.buffer.name},
        )
        self._handle = self._span_cm.__enter__()
        return self

    def commit(self, before_text: str, after_text: str, edit_count: int) -> None:
        if self._handle is None:
            return
        self._handle.add_metadata("edits", edit_count)
        self._handle.add_metadata("delta", len(after_text) - len(before_text))

    def __exit__(self, exc_type, exc, tb) -> bool:
        if self._span_cm is not None:
            self._span_cm.__exit__(exc_type, exc, tb)
        return False


def _normalize_edits(document: BufferDocument, edits: Iterable[Edit]) -> List[Edit]:
    candidates = []
    for edit in edits:
        ensure_offset(document, edit.start)
        ensure_offset(document, edit.end)
        if edit.end < edit.start:
            edit = Edit(edit.end, edit.start, edit.text)
        candidates.append(edit)

    ordered: List[Edit] = []
    for edit in sorted(candidates, key=lambda item: (item.start, item.end)):
        if edit.is_noop:
            continue
        if ordered:
            previous = ordered[-1]
            if edit == previous or edit.start < previous.end:
                continue
        ordered.append(edit)
    return ordered
