"""Select mode: motions extend the primary selection instead of moving."""

from __future__ import annotations

from typing import MutableMapping, cast

from .keymap_helpers import update_flag
from .keymap_mode import KeymapMode
from .state import EditorMode, SelectState


class SelectMode(KeymapMode):
    name = "select"

    def on_enter(self, previous: str | None) -> None:
        del previous
        self._pending.clear()
        update_flag(self.context, "line_wise", self.line_wise)

    def on_exit(self, next_mode: str | None) -> None:
        # Selections survive leaving select mode; the flag and, on the way
        # back to normal, a selection that never grew are dropped.
        super().on_exit(next_mode)
        update_flag(self.context, "line_wise", False)
        self._select_state()["line_wise"] = False
        if next_mode == "normal":
            state = self.context.buffer.state
            state.set_selections(sel for sel in state.selections if not sel.is_empty)

    @property
    def line_wise(self) -> bool:
        return bool(self._select_state().get("line_wise", False))

    def state(self) -> EditorMode:
        return SelectState(line_wise=self.line_wise)

    def _select_state(self) -> MutableMapping[str, object]:
        return cast(
            MutableMapping[str, object],
            self.context.extras.setdefault("select_state", {}),
        )
