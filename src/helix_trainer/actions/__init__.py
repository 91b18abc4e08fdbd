"""Editing verbs bound to keys by :mod:`helix_trainer.keymaps.defaults`.

Every action takes ``(context, match)`` and returns a ``ModeResult``.
"""

from . import core, edit, insert, match, motion, selection

__all__ = [
    "core",
    "edit",
    "insert",
    "match",
    "motion",
    "selection",
]
