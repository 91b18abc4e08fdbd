"""Declarative keymap registry and resolver.

Default bindings live in :mod:`helix_trainer.keymaps.defaults`; it is not
imported here because it pulls in the action modules.
"""

from .models import ANY_CHAR, ActionRef, Binding, KeySequence, KeyStroke, WhenClause
from .registry import KeymapConflictError, KeymapRegistry
from .resolver import KeymapResolver, ResolutionMatch, ResolutionResult

__all__ = [
    "ANY_CHAR",
    "ActionRef",
    "Binding",
    "KeySequence",
    "KeyStroke",
    "WhenClause",
    "KeymapRegistry",
    "KeymapConflictError",
    "KeymapResolver",
    "ResolutionResult",
    "ResolutionMatch",
]
