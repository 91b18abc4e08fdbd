"""Helper utilities for keymap-driven modes."""

from __future__ import annotations

from typing import Mapping, MutableMapping, cast

from helix_trainer.keymaps import KeymapResolver

from .base_mode import KeyInput, ModeContext

ESCAPE = "Escape"

NAMED_KEYS = {
    "esc": ESCAPE,
    "<esc>": ESCAPE,
    "escape": ESCAPE,
    "enter": "Enter",
    "return": "Enter",
    "backspace": "Backspace",
    "delete": "Delete",
    "tab": "Tab",
    "space": " ",
}


def key_to_token(key: KeyInput) -> str:
    """Map a raw key event to the token used in keymap sequences.

    Named keys are folded to one spelling (``ESC``/``escape`` -> ``Escape``);
    a key that produced a single character is keyed by that character.
    """

    name = NAMED_KEYS.get(key.key.lower(), key.key) if len(key.key) > 1 else key.key
    if not key.modifiers and key.text and len(key.text) == 1 and len(name) > 1:
        name = key.text
    if key.modifiers:
        modifier = "+".join(mod.lower() for mod in key.modifiers)
        return f"{modifier}+{name}"
    return name


def is_escape(key: KeyInput) -> bool:
    return key_to_token(key) == ESCAPE


def require_keymap_resolver(context: ModeContext) -> KeymapResolver:
    resolver = context.extras.get("keymap_resolver")
    if not isinstance(resolver, KeymapResolver):
        raise RuntimeError("ModeContext.extras missing 'keymap_resolver'")
    return resolver


def keymap_flag_context(context: ModeContext) -> Mapping[str, bool]:
    flags = context.extras.setdefault("keymap_flags", {})
    return cast(Mapping[str, bool], flags)


def update_flag(context: ModeContext, key: str, value: bool) -> None:
    flags = cast(
        MutableMapping[str, bool], context.extras.setdefault("keymap_flags", {})
    )
    flags[key] = value


__all__ = [
    "ESCAPE",
    "NAMED_KEYS",
    "is_escape",
    "key_to_token",
    "require_keymap_resolver",
    "keymap_flag_context",
    "update_flag",
]
