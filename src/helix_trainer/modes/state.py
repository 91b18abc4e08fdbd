"""Tagged mode variant exposed to the presentation layer."""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import ClassVar, Dict, Union


class MatchPending(str, Enum):
    NONE = "none"
    INSIDE = "inside"
    AROUND = "around"
    SURROUND = "surround"


@dataclass(frozen=True, slots=True)
class NormalState:
    name: ClassVar[str] = "normal"


@dataclass(frozen=True, slots=True)
class InsertState:
    name: ClassVar[str] = "insert"


@dataclass(frozen=True, slots=True)
class SelectState:
    name: ClassVar[str] = "select"
    line_wise: bool = False


@dataclass(frozen=True, slots=True)
class MatchState:
    name: ClassVar[str] = "match"
    pending: MatchPending = MatchPending.NONE


EditorMode = Union[NormalState, InsertState, SelectState, MatchState]


@dataclass(frozen=True, slots=True)
class ModeStyle:
    label: str
    color: str


MODE_STYLES: Dict[str, ModeStyle] = {
    "normal": ModeStyle("NORMAL", "#7a9e7e"),
    "insert": ModeStyle("INSERT", "#c4705a"),
    "select": ModeStyle("SELECT", "#a855f7"),
    "match": ModeStyle("MATCH", "#d4a574"),
}

_PENDING_SUFFIX = {
    MatchPending.INSIDE: " I",
    MatchPending.AROUND: " A",
    MatchPending.SURROUND: " S",
}


def mode_label(mode: EditorMode) -> str:
    """Status-line label, e.g. ``SELECT LINE`` or ``MATCH I``."""

    if isinstance(mode, (NormalState, InsertState)):
        return MODE_STYLES[mode.name].label
    if isinstance(mode, SelectState):
        label = MODE_STYLES[mode.name].label
        return f"{label} LINE" if mode.line_wise else label
    if isinstance(mode, MatchState):
        return MODE_STYLES[mode.name].label + _PENDING_SUFFIX.get(mode.pending, "")
    raise TypeError(f"Unknown mode variant {mode!r}")


__all__ = [
    "EditorMode",
    "InsertState",
    "MODE_STYLES",
    "MatchPending",
    "MatchState",
    "ModeStyle",
    "NormalState",
    "SelectState",
    "mode_label",
]
