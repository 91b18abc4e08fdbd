"""Match mode: ``i``/``a``/``s`` followed by a delimiter."""

from __future__ import annotations

from .keymap_mode import KeymapMode
from .state import EditorMode, MatchPending, MatchState

_PENDING_BY_KEY = {
    "i": MatchPending.INSIDE,
    "a": MatchPending.AROUND,
    "s": MatchPending.SURROUND,
}


class MatchMode(KeymapMode):
    name = "match"

    def state(self) -> EditorMode:
        pending = MatchPending.NONE
        if self._pending:
            pending = _PENDING_BY_KEY.get(self._pending[0], MatchPending.NONE)
        return MatchState(pending=pending)
