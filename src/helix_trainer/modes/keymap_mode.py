"""Shared key dispatch for modes driven by the keymap resolver."""

from __future__ import annotations

from typing import List

from helix_trainer.keymaps import ResolutionMatch
from helix_trainer.runtime import telemetry

from .base_mode import KeyInput, Mode, ModeContext, ModeResult
from .keymap_helpers import (
    ESCAPE,
    key_to_token,
    keymap_flag_context,
    require_keymap_resolver,
)


class KeymapMode(Mode):
    """Resolves keys through the trie, buffering prefixes of longer sequences.

    A key that extends no pending prefix drops the prefix and is resolved on
    its own. Keys that match nothing fall through to ``handle_unmatched``.
    """

    def __init__(self, context: ModeContext) -> None:
        super().__init__(context)
        self.logger = telemetry.get_logger(f"helix_trainer.modes.{self.name}")
        self._resolver = require_keymap_resolver(context)
        self._flags = keymap_flag_context(context)
        self._pending: List[str] = []

    @property
    def pending_keys(self) -> str:
        return "".join(self._pending)

    def cancel_pending(self) -> None:
        self._pending.clear()

    def on_exit(self, next_mode: str | None) -> None:
        del next_mode
        self._pending.clear()

    def handle_key(self, key: KeyInput) -> ModeResult:
        token = key_to_token(key)
        if token == ESCAPE:
            self._pending.clear()
            return ModeResult(
                consumed=True, switch_to="normal", status="escape", message=f"exit_{self.name}"
            )

        tokens = (*self._pending, token)
        result = self._resolver.resolve(self.name, tokens, context=self._flags)
        if result.status == "miss" and self._pending:
            self._pending.clear()
            tokens = (token,)
            result = self._resolver.resolve(self.name, tokens, context=self._flags)

        if result.status == "match" and result.match:
            self._pending.clear()
            return self._execute_match(result.match)

        if result.status == "pending":
            self._pending[:] = tokens
            return ModeResult(
                consumed=True,
                status="pending",
                message="awaiting_sequence",
            )

        self._pending.clear()
        return self.handle_unmatched(key)

    def handle_unmatched(self, key: KeyInput) -> ModeResult:
        del key
        return ModeResult(consumed=False, status="noop")

    def _execute_match(self, match: ResolutionMatch) -> ModeResult:
        with telemetry.span(
            "keymaps::execute",
            component="keymaps",
            metadata={"binding_id": match.binding.id, "action": match.action.id},
        ):
            outcome = match.action(self.context, match)

        if isinstance(outcome, ModeResult):
            return outcome
        return ModeResult(consumed=True)
