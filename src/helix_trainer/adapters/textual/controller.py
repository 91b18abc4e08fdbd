"""Minimal Textual adapter that wires a ChallengeSession into UI callbacks."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Callable, Dict, Iterable, Optional

from helix_trainer.buffer import BufferMirror
from helix_trainer.challenges import ChallengeResult
from helix_trainer.modes import ModeResult
from helix_trainer.session import ChallengeSession


def _noop(*_args, **_kwargs) -> None:  # pragma: no cover - default hook
    return None


@dataclass(slots=True)
class TextualUIHooks:
    """Callbacks invoked by the adapter to update Textual widgets."""

    update_buffer: Callable[[BufferMirror], None]
    update_status: Callable[[str], None] = _noop
    show_pending: Callable[[str], None] = _noop
    show_result: Callable[[ChallengeResult], None] = _noop
    handle_event: Callable[[str, object | None], None] = _noop
    log: Callable[[str], None] = _noop


_FORWARDED_EVENTS = (
    "select.extend",
    "selection.copy_down",
    "register.yank",
    "challenge.complete",
)


class TextualTrainerAdapter:
    """Bridges a session and its bus events to a Textual-friendly surface.

    Implements :class:`helix_trainer.buffer.BufferSync` through ``pull_buffer``.
    """

    def __init__(self, session: ChallengeSession, hooks: TextualUIHooks) -> None:
        self.session = session
        self.hooks = hooks
        self._subscribe_events()
        self.refresh()

    def handle_textual_key(
        self,
        key: str,
        *,
        text: Optional[str] = None,
        modifiers: Iterable[str] = (),
        timestamp: Optional[int] = None,
    ) -> ModeResult:
        """Translate a Textual key event and feed it to the session."""

        normalized_modifiers = tuple(str(mod).upper() for mod in modifiers)
        self._log_state("key ->", key=key, text=text, mods=normalized_modifiers)
        result = self.session.handle_key(
            key, timestamp, text=text, modifiers=normalized_modifiers
        )
        status = result.message or result.status
        if status:
            self.hooks.update_status(status)
        self.refresh()
        self._log_state(
            "result <-",
            consumed=result.consumed,
            status=result.status,
            message=result.message,
            switch_to=result.switch_to,
        )
        return result

    def use_hint(self) -> Optional[str]:
        hint = self.session.use_hint()
        self.hooks.update_status(f"hint: {hint}" if hint else "no more hints")
        self.refresh()
        return hint

    def reset(self) -> None:
        self.session.reset()
        self.hooks.update_status("reset")
        self.refresh()

    def pull_buffer(self) -> BufferMirror:
        view = self.session.view()
        return self.session.buffer.mirror(
            attributes={
                "mode": view.mode_label,
                "keystrokes": str(view.keystrokes),
            }
        )

    def refresh(self) -> None:
        self.hooks.update_buffer(self.pull_buffer())
        self.hooks.show_pending(self.session.manager.pending)

    def _subscribe_events(self) -> None:
        bus = self.session.manager.context.bus
        for event in _FORWARDED_EVENTS:
            bus.subscribe(
                event, lambda payload, name=event: self._handle_event(name, payload)
            )

    def _handle_event(self, name: str, payload: object | None) -> None:
        self._log_state("event ->", event=name, payload=payload)
        self.hooks.handle_event(name, payload)
        if name == "challenge.complete" and isinstance(payload, ChallengeResult):
            self.hooks.show_result(payload)

    def _log_state(self, prefix: str, **fields: object) -> None:
        snapshot = self._state_metadata()
        snapshot.update({k: v for k, v in fields.items() if v is not None})
        parts = [prefix]
        for key, value in snapshot.items():
            parts.append(f"{key}={value!r}")
        self.hooks.log(" ".join(parts))

    def _state_metadata(self) -> Dict[str, object]:
        buffer = self.session.buffer
        active_mode = self.session.manager.active_mode
        return {
            "mode": active_mode.name if active_mode else "?",
            "cursor": buffer.state.cursor,
            "selections": len(buffer.state.selections),
            "pending": self.session.manager.pending,
            "buffer_version": buffer.document.version,
        }


__all__ = ["TextualTrainerAdapter", "TextualUIHooks"]
