"""Base classes and shared utilities for editor modes."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Callable, Dict, Optional, Tuple

from helix_trainer.buffer import Buffer, RegisterBank
from helix_trainer.config import EngineConfig

from .state import EditorMode


@dataclass(slots=True)
class KeyInput:
    """Normalized key event passed to modes."""

    key: str
    modifiers: Tuple[str, ...] = ()
    text: Optional[str] = None


@dataclass(slots=True)
class ModeResult:
    """Result returned from ``Mode.handle_key``."""

    consumed: bool
    switch_to: Optional[str] = None
    status: str = "ok"
    message: Optional[str] = None


@dataclass(slots=True)
class ModeContext:
    """Shared services every mode and action can access."""

    buffer: Buffer
    registers: RegisterBank
    bus: "ModeBus"
    config: EngineConfig = field(default_factory=EngineConfig)
    extras: Dict[str, object] = field(default_factory=dict)


class ModeBus:
    """Minimal event bus letting modes exchange structured signals."""

    def __init__(self) -> None:
        self._subscribers: Dict[str, list[Callable[[object], None]]] = {}

    def subscribe(self, event: str, callback: Callable[[object], None]) -> None:
        self._subscribers.setdefault(event, []).append(callback)

    def emit(self, event: str, payload: object | None = None) -> None:
        for callback in self._subscribers.get(event, []):
            callback(payload)


class Mode:
    """Base class all concrete editor modes inherit from."""

    name: str = "mode"

    def __init__(self, context: ModeContext) -> None:
        self.context = context

    def on_enter(
        self, previous: Optional[str]
    ) -> None:  # pragma: no cover - default no-op
        del previous

    def on_exit(
        self, next_mode: Optional[str]
    ) -> None:  # pragma: no cover - default no-op
        del next_mode

    def handle_key(
        self, key: KeyInput
    ) -> ModeResult:  # pragma: no cover - abstract override
        raise NotImplementedError

    def cancel_pending(self) -> None:
        """Drop any half-typed key sequence."""

    @property
    def pending_keys(self) -> str:
        return ""

    def state(self) -> EditorMode:  # pragma: no cover - abstract override
        raise NotImplementedError
