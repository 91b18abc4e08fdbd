"""Text buffer, selection model, and registers."""

from .buffer import Buffer, BufferView, Edit, OffsetLedger, Transaction
from .document import BufferDocument
from .registers import DEFAULT_REGISTER, RegisterBank, RegisterValue
from .state import Anchor, BufferState, Position, Selection
from .sync import BufferMirror, BufferSync, BufferValidationError
from .validation import ensure_offset, ensure_position

__all__ = [
    "Anchor",
    "Buffer",
    "BufferDocument",
    "BufferMirror",
    "BufferState",
    "BufferSync",
    "BufferValidationError",
    "BufferView",
    "DEFAULT_REGISTER",
    "Edit",
    "OffsetLedger",
    "Position",
    "RegisterBank",
    "RegisterValue",
    "Selection",
    "Transaction",
    "ensure_offset",
    "ensure_position",
]
