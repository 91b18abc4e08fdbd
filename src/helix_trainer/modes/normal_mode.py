"""Normal mode: movement, selection and change commands."""

from __future__ import annotations

from .keymap_mode import KeymapMode
from .state import EditorMode, NormalState


class NormalMode(KeymapMode):
    name = "normal"

    def state(self) -> EditorMode:
        return NormalState()
