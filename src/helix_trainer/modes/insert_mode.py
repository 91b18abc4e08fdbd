"""Insert mode: typed characters go into the buffer at every insertion point."""

from __future__ import annotations

from .keymap_mode import KeymapMode
from .state import EditorMode, InsertState


class InsertMode(KeymapMode):
    name = "insert"

    def on_exit(self, next_mode: str | None) -> None:
        super().on_exit(next_mode)
        # Carets only live for the duration of an insert session.
        state = self.context.buffer.state
        state.set_selections(sel for sel in state.selections if not sel.is_empty)

    def state(self) -> EditorMode:
        return InsertState()
