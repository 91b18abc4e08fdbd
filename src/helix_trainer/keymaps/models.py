"""Dataclasses describing keymap bindings and action metadata."""

from __future__ import annotations

from dataclasses import dataclass, field
from types import MappingProxyType
from typing import Callable, Iterable, Mapping, MutableMapping

# Sequence slot that matches any single printable character (``r<char>``).
ANY_CHAR = "<char>"


def _normalize_modifiers(modifiers: Iterable[str]) -> tuple[str, ...]:
    values = tuple(m.strip().lower() for m in modifiers if m.strip())
    return tuple(sorted(dict.fromkeys(values)))


def is_char_token(token: str) -> bool:
    """True for tokens a ``<char>`` slot may capture."""

    return len(token) == 1 and token.isprintable()


@dataclass(frozen=True, slots=True)
class KeyStroke:
    """Single normalized key press used by key sequences."""

    key: str
    modifiers: tuple[str, ...] = ()

    def __post_init__(self) -> None:
        if not self.key:
            raise ValueError("key cannot be empty")
        object.__setattr__(self, "modifiers", _normalize_modifiers(self.modifiers))

    @property
    def is_wildcard(self) -> bool:
        return self.key == ANY_CHAR and not self.modifiers

    @property
    def token(self) -> str:
        if self.modifiers:
            modifier = "+".join(self.modifiers)
            return f"{modifier}+{self.key}"
        return self.key


@dataclass(frozen=True, slots=True)
class KeySequence:
    """Immutable collection of keystrokes; a wildcard may only come last."""

    strokes: tuple[KeyStroke, ...]

    def __post_init__(self) -> None:
        if not self.strokes:
            raise ValueError("KeySequence requires at least one stroke")
        if any(stroke.is_wildcard for stroke in self.strokes[:-1]):
            raise ValueError(f"'{ANY_CHAR}' is only allowed as the final stroke")

    @property
    def tokens(self) -> tuple[str, ...]:
        return tuple(stroke.token for stroke in self.strokes)

    @property
    def captures_char(self) -> bool:
        return self.strokes[-1].is_wildcard

    @classmethod
    def from_strings(cls, *keys: str) -> "KeySequence":
        strokes = tuple(KeyStroke(key) for key in keys if key)
        return cls(strokes=strokes)


@dataclass(frozen=True, slots=True)
class WhenClause:
    """Simple boolean condition used to gate bindings."""

    flag: str
    expected: bool = True

    def __post_init__(self) -> None:
        if not self.flag:
            raise ValueError("flag cannot be empty")

    @classmethod
    def parse(cls, expression: str) -> "WhenClause":
        expr = expression.strip()
        if not expr:
            raise ValueError("expression cannot be empty")
        expected = True
        if expr.startswith("!"):
            expected = False
            expr = expr[1:]
        return cls(expr, expected)

    def evaluate(self, context: Mapping[str, bool]) -> bool:
        return bool(context.get(self.flag, False)) is self.expected


@dataclass(frozen=True, slots=True)
class ActionRef:
    """Callable metadata used during binding execution."""

    id: str
    handler: Callable[..., object]
    description: str = ""
    metadata: Mapping[str, object] = field(default_factory=dict)

    def __post_init__(self) -> None:
        if not self.id:
            raise ValueError("ActionRef id cannot be empty")
        if not callable(self.handler):
            raise TypeError("handler must be callable")
        object.__setattr__(self, "metadata", MappingProxyType(dict(self.metadata)))

    def __call__(self, *args: object, **kwargs: object) -> object:
        return self.handler(*args, **kwargs)


def _normalize_tags(tags: Iterable[str]) -> tuple[str, ...]:
    seen: MutableMapping[str, None] = {}
    result: list[str] = []
    for tag in tags:
        cleaned = tag.strip()
        if cleaned and cleaned not in seen:
            seen[cleaned] = None
            result.append(cleaned)
    return tuple(result)


@dataclass(frozen=True, slots=True)
class Binding:
    """Associates a key sequence in one mode with an action."""

    id: str
    mode: str
    sequence: KeySequence
    action_id: str
    description: str = ""
    when: tuple[WhenClause, ...] = ()
    tags: tuple[str, ...] = ()
    priority: int = 0

    def __post_init__(self) -> None:
        if not self.id:
            raise ValueError("binding id cannot be empty")
        if not self.mode:
            raise ValueError("binding mode cannot be empty")
        if not self.action_id:
            raise ValueError("binding action_id cannot be empty")
        object.__setattr__(self, "tags", _normalize_tags(self.tags))
        normalized_when = tuple(
            clause if isinstance(clause, WhenClause) else WhenClause.parse(str(clause))
            for clause in self.when
        )
        object.__setattr__(self, "when", normalized_when)

    @property
    def when_map(self) -> Mapping[str, bool]:
        return MappingProxyType({clause.flag: clause.expected for clause in self.when})

    def allows(self, context: Mapping[str, bool]) -> bool:
        return all(clause.evaluate(context) for clause in self.when)

    @property
    def key_signature(self) -> str:
        return " ".join(self.sequence.tokens)


__all__ = [
    "ANY_CHAR",
    "KeyStroke",
    "KeySequence",
    "WhenClause",
    "ActionRef",
    "Binding",
    "is_char_token",
]
