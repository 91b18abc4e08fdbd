"""Trie-based keymap resolution with telemetry instrumentation."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Dict, Literal, Mapping, Optional, Sequence

from helix_trainer.runtime.telemetry import span

from .models import ANY_CHAR, ActionRef, Binding, is_char_token
from .registry import KeymapRegistry


@dataclass(slots=True)
class TrieNode:
    """Single trie node tracking bindings and child transitions."""

    bindings: list[str] = field(default_factory=list)
    children: Dict[str, "TrieNode"] = field(default_factory=dict)

    def child(self, token: str) -> "TrieNode":
        return self.children.setdefault(token, TrieNode())

    def step(self, token: str) -> tuple[Optional["TrieNode"], bool]:
        """Follow ``token``; the flag reports whether a ``<char>`` slot took it."""

        exact = self.children.get(token)
        if exact is not None:
            return exact, False
        wildcard = self.children.get(ANY_CHAR)
        if wildcard is not None and is_char_token(token):
            return wildcard, True
        return None, False

    def next_tokens(self) -> tuple[str, ...]:
        return tuple(sorted(self.children.keys()))


@dataclass(slots=True)
class KeymapTrie:
    """Concrete trie built for a given mode."""

    mode: str
    root: TrieNode = field(default_factory=TrieNode)

    def add_binding(self, binding: Binding) -> None:
        node = self.root
        for token in binding.sequence.tokens:
            node = node.child(token)
        node.bindings.append(binding.id)


@dataclass(frozen=True, slots=True)
class ResolutionMatch:
    """Resolved binding paired with its action and any captured characters."""

    binding: Binding
    action: ActionRef
    captured: tuple[str, ...] = ()

    @property
    def char(self) -> Optional[str]:
        return self.captured[-1] if self.captured else None


@dataclass(frozen=True, slots=True)
class ResolutionResult:
    """Outcome returned from the resolver."""

    status: Literal["match", "pending", "miss"]
    match: Optional[ResolutionMatch] = None
    consumed: int = 0
    next_expected: tuple[str, ...] = ()


class KeymapResolver:
    """Builds mode-specific tries and resolves sequences."""

    def __init__(
        self, registry: KeymapRegistry, *, logger_name: str | None = None
    ) -> None:
        self._registry = registry
        self._logger_name = logger_name
        self._cache: Dict[str, tuple[int, KeymapTrie]] = {}

    @property
    def registry(self) -> KeymapRegistry:
        return self._registry

    def resolve(
        self,
        mode: str,
        tokens: Sequence[str],
        *,
        context: Optional[Mapping[str, bool]] = None,
    ) -> ResolutionResult:
        ctx = context or {}
        normalized = tuple(tokens)
        with span(
            "keymaps::resolve",
            logger_name=self._logger_name,
            component="keymaps",
            metadata={"mode": mode, "length": len(normalized)},
        ) as handle:
            trie = self._ensure_trie(mode)
            node = trie.root
            consumed = 0
            captured: list[str] = []
            for token in normalized:
                child, wildcard = node.step(token)
                if child is None:
                    handle.add_metadata("status", "miss")
                    return ResolutionResult(status="miss", consumed=consumed)
                if wildcard:
                    captured.append(token)
                node = child
                consumed += 1

            match = self._select_match(node, ctx, tuple(captured))
            if match:
                handle.add_metadata("status", "match")
                handle.add_metadata("binding_id", match.binding.id)
                return ResolutionResult(
                    status="match",
                    match=match,
                    consumed=consumed,
                )

            next_expected = node.next_tokens()
            if next_expected:
                handle.add_metadata("status", "pending")
                return ResolutionResult(
                    status="pending",
                    consumed=consumed,
                    next_expected=next_expected,
                )

            handle.add_metadata("status", "miss")
            return ResolutionResult(status="miss", consumed=consumed)

    def reset(self, mode: Optional[str] = None) -> None:
        if mode is None:
            self._cache.clear()
        else:
            self._cache.pop(mode, None)

    def _ensure_trie(self, mode: str) -> KeymapTrie:
        revision = self._registry.revision()
        cached = self._cache.get(mode)
        if cached and cached[0] == revision:
            return cached[1]

        trie = KeymapTrie(mode=mode)
        for binding in self._registry.iter_bindings(mode):
            trie.add_binding(binding)
        self._cache[mode] = (revision, trie)
        return trie

    def _select_match(
        self,
        node: TrieNode,
        context: Mapping[str, bool],
        captured: tuple[str, ...],
    ) -> Optional[ResolutionMatch]:
        if not node.bindings:
            return None

        matches: list[ResolutionMatch] = []
        for binding_id in node.bindings:
            binding = self._registry.get_binding(binding_id)
            if not binding.allows(context):
                continue
            action = self._registry.get_action(binding.action_id)
            matches.append(
                ResolutionMatch(binding=binding, action=action, captured=captured)
            )

        if not matches:
            return None

        matches.sort(key=lambda m: (-m.binding.priority, m.binding.id))
        return matches[0]


__all__ = [
    "KeymapResolver",
    "ResolutionResult",
    "ResolutionMatch",
]
