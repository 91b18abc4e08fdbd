"""Mode manager owning the active mode and dispatching key events."""

from __future__ import annotations

from typing import Dict, Optional, Type

from helix_trainer.buffer import Buffer
from helix_trainer.config import EngineConfig
from helix_trainer.keymaps import KeymapRegistry, KeymapResolver
from helix_trainer.keymaps.defaults import load_default_keymaps
from helix_trainer.runtime import telemetry

from .base_mode import KeyInput, Mode, ModeBus, ModeContext, ModeResult
from .insert_mode import InsertMode
from .keymap_helpers import is_escape
from .match_mode import MatchMode
from .normal_mode import NormalMode
from .select_mode import SelectMode
from .state import EditorMode, mode_label


class ModeManager:
    """Owns active mode, handles transitions, and dispatches key events.

    ``Escape`` is intercepted here before any per-mode dispatch: it drops the
    pending sequence of every registered mode and lands in ``normal``.
    """

    def __init__(
        self,
        context: ModeContext,
        *,
        keymap_registry: KeymapRegistry | None = None,
        keymap_resolver: KeymapResolver | None = None,
        load_defaults: bool = True,
    ) -> None:
        self.context = context
        self._modes: Dict[str, Mode] = {}
        self._active: Optional[str] = None
        self.logger = telemetry.get_logger("helix_trainer.modes")
        self.keymap_registry = keymap_registry or KeymapRegistry(
            logger_name="helix_trainer.keymaps"
        )
        if load_defaults and keymap_registry is None:
            load_default_keymaps(self.keymap_registry)
        self.keymap_resolver = keymap_resolver or KeymapResolver(
            self.keymap_registry, logger_name="helix_trainer.keymaps"
        )
        self.context.extras.setdefault("keymap_registry", self.keymap_registry)
        self.context.extras.setdefault("keymap_resolver", self.keymap_resolver)
        self.context.extras.setdefault("keymap_flags", {})
        self.context.extras.setdefault("mode_manager", self)

    @property
    def active_mode(self) -> Optional[Mode]:
        if self._active is None:
            return None
        return self._modes.get(self._active)

    @property
    def state(self) -> EditorMode:
        return self._require_active().state()

    @property
    def label(self) -> str:
        return mode_label(self.state)

    @property
    def pending(self) -> str:
        mode = self.active_mode
        return mode.pending_keys if mode else ""

    def register_mode(
        self,
        mode_cls: Type[Mode],
        /,
        *mode_args: object,
        **mode_kwargs: object,
    ) -> Mode:
        mode = mode_cls(self.context, *mode_args, **mode_kwargs)
        if mode.name in self._modes:
            raise ValueError(f"Mode '{mode.name}' already registered")
        self._modes[mode.name] = mode
        if self._active is None:
            self._active = mode.name
            mode.on_enter(None)
        return mode

    def switch_mode(self, name: str) -> None:
        if name not in self._modes:
            raise KeyError(f"Unknown mode '{name}'")
        previous = self.active_mode
        if previous and previous.name == name:
            return
        if previous:
            previous.on_exit(name)
        self._active = name
        self._modes[name].on_enter(previous.name if previous else None)
        telemetry.record_event("mode.switch", data={"mode": name})

    def handle_key(self, key: KeyInput) -> ModeResult:
        mode = self._require_active()
        if is_escape(key):
            return self.escape()
        with telemetry.span(
            name=f"mode::{mode.name}",
            component=True,
            metadata={"key": key.key, "mode": mode.name},
        ):
            result = mode.handle_key(key)
        if result.switch_to:
            self.switch_mode(result.switch_to)
        return result

    def escape(self) -> ModeResult:
        """Cancel every pending sequence and return to normal mode."""

        previous = self._require_active().name
        for mode in self._modes.values():
            mode.cancel_pending()
        self.switch_mode("normal")
        return ModeResult(
            consumed=True,
            switch_to="normal",
            status="escape",
            message=f"exit_{previous}",
        )

    def reset(self) -> None:
        """Return to a fresh normal mode, as after loading a new buffer."""

        self.escape()
        flags = self.context.extras.get("keymap_flags")
        if isinstance(flags, dict):
            flags.clear()
        self.context.extras.pop("select_state", None)

    def _require_active(self) -> Mode:
        mode = self.active_mode
        if mode is None:
            raise RuntimeError("No active mode registered")
        return mode


def create_default_manager(
    buffer: Buffer | None = None,
    config: EngineConfig | None = None,
) -> ModeManager:
    """Build a manager with the four editor modes and the default keymaps."""

    buffer = buffer or Buffer()
    context = ModeContext(
        buffer=buffer,
        registers=buffer.registers,
        bus=ModeBus(),
        config=config or EngineConfig(),
    )
    manager = ModeManager(context)
    manager.register_mode(NormalMode)
    manager.register_mode(InsertMode)
    manager.register_mode(SelectMode)
    manager.register_mode(MatchMode)
    return manager


__all__ = ["ModeManager", "create_default_manager"]
