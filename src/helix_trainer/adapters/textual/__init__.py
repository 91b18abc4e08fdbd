"""Textual host for a challenge session."""

from .controller import TextualTrainerAdapter, TextualUIHooks

__all__ = ["TextualTrainerAdapter", "TextualUIHooks"]
