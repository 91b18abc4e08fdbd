"""Keymap registry: the (mode, key sequence) -> action command table."""

from __future__ import annotations

from typing import Dict, Iterable, Iterator, Optional

from helix_trainer.runtime.telemetry import span

from .models import ActionRef, Binding


class KeymapConflictError(RuntimeError):
    """Raised when a new binding conflicts with existing entries."""

    def __init__(self, binding: Binding, conflicts: Iterable[Binding]):
        conflicts_tuple = tuple(conflicts)
        message = (
            f"Binding '{binding.id}' conflicts with {[b.id for b in conflicts_tuple]}"
        )
        super().__init__(message)
        self.binding = binding
        self.conflicts = conflicts_tuple


class KeymapRegistry:
    """Owns action references and binding metadata, indexed per mode."""

    def __init__(self, *, logger_name: str | None = None) -> None:
        self._actions: Dict[str, ActionRef] = {}
        self._bindings: Dict[str, Binding] = {}
        self._mode_index: Dict[str, Dict[str, set[str]]] = {}
        self._logger_name = logger_name
        self._revision = 0

    def revision(self) -> int:
        return self._revision

    def get_action(self, action_id: str) -> ActionRef:
        try:
            return self._actions[action_id]
        except KeyError as exc:
            raise KeyError(f"Action '{action_id}' is not registered") from exc

    def get_binding(self, binding_id: str) -> Binding:
        try:
            return self._bindings[binding_id]
        except KeyError as exc:
            raise KeyError(f"Binding '{binding_id}' is not registered") from exc

    def register_action(self, action: ActionRef, *, replace: bool = False) -> ActionRef:
        with span(
            "keymaps::register_action",
            logger_name=self._logger_name,
            component="keymaps",
            metadata={"action_id": action.id},
        ):
            if not replace and action.id in self._actions:
                raise ValueError(f"Action '{action.id}' already registered")
            self._actions[action.id] = action
            return action

    def register_binding(self, binding: Binding, *, replace: bool = False) -> Binding:
        with span(
            "keymaps::register_binding",
            logger_name=self._logger_name,
            component="keymaps",
            metadata={"binding_id": binding.id, "mode": binding.mode},
        ) as handle:
            if binding.action_id not in self._actions:
                handle.add_metadata("missing_action", binding.action_id)
                raise KeyError(
                    f"Binding '{binding.id}' references unknown action '{binding.action_id}'"
                )

            conflicts = self.detect_conflicts(binding)
            if conflicts and not replace:
                handle.add_metadata(
                    "conflicts", ",".join(conflict.id for conflict in conflicts)
                )
                raise KeymapConflictError(binding, conflicts)

            if replace:
                for conflict in conflicts:
                    self._remove_binding(conflict)
                    self._bindings.pop(conflict.id, None)
                existing = self._bindings.get(binding.id)
                if existing:
                    self._remove_binding(existing)
                    self._bindings.pop(existing.id, None)
            elif binding.id in self._bindings:
                raise ValueError(f"Binding id '{binding.id}' already registered")

            self._bindings[binding.id] = binding
            self._index_binding(binding)
            self._touch_bindings()
            return binding

    def iter_bindings(self, mode: Optional[str] = None) -> Iterator[Binding]:
        if mode is None:
            yield from self._bindings.values()
            return
        for bucket in self._mode_index.get(mode, {}).values():
            for binding_id in bucket:
                yield self._bindings[binding_id]

    def detect_conflicts(self, binding: Binding) -> list[Binding]:
        conflicts: list[Binding] = []
        for match_id in self._mode_index.get(binding.mode, {}).get(
            binding.key_signature, set()
        ):
            existing = self._bindings[match_id]
            if _contexts_overlap(binding, existing):
                conflicts.append(existing)
        return conflicts

    def _index_binding(self, binding: Binding) -> None:
        by_signature = self._mode_index.setdefault(binding.mode, {})
        bucket = by_signature.setdefault(binding.key_signature, set())
        bucket.add(binding.id)

    def _remove_binding(self, binding: Binding) -> None:
        mode_bucket = self._mode_index.get(binding.mode)
        if not mode_bucket:
            return
        signatures = mode_bucket.get(binding.key_signature)
        if not signatures:
            return
        signatures.discard(binding.id)
        if not signatures:
            mode_bucket.pop(binding.key_signature, None)
        if not mode_bucket:
            self._mode_index.pop(binding.mode, None)

    def _touch_bindings(self) -> None:
        self._revision += 1


def _contexts_overlap(left: Binding, right: Binding) -> bool:
    left_map = left.when_map
    right_map = right.when_map

    if not left.when and not right.when:
        return True

    for flag, expected in left_map.items():
        if flag in right_map and right_map[flag] != expected:
            return False

    if not left.when or not right.when:
        return False

    return left_map == right_map


__all__ = [
    "KeymapRegistry",
    "KeymapConflictError",
]
