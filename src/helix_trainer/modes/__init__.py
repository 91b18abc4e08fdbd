"""Editor modes and their shared dispatch plumbing.

:mod:`helix_trainer.modes.mode_manager` is imported explicitly; it pulls in
the default keymaps and with them the action modules.
"""

from .base_mode import KeyInput, Mode, ModeBus, ModeContext, ModeResult
from .insert_mode import InsertMode
from .keymap_mode import KeymapMode
from .match_mode import MatchMode
from .normal_mode import NormalMode
from .select_mode import SelectMode
from .state import (
    EditorMode,
    InsertState,
    MODE_STYLES,
    MatchPending,
    MatchState,
    ModeStyle,
    NormalState,
    SelectState,
    mode_label,
)

__all__ = [
    "KeyInput",
    "Mode",
    "ModeBus",
    "ModeContext",
    "ModeResult",
    "KeymapMode",
    "NormalMode",
    "InsertMode",
    "SelectMode",
    "MatchMode",
    "EditorMode",
    "NormalState",
    "InsertState",
    "SelectState",
    "MatchState",
    "MatchPending",
    "ModeStyle",
    "MODE_STYLES",
    "mode_label",
]
