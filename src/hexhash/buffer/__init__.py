"""Buffer model: points, documents, change events and undo history."""

from .buffer import Buffer, Transaction
from .changes import BufferChange, ChangeEvent
from .document import BufferDocument
from .state import BufferState, Point
from .sync import BufferMirror, BufferValidationError
from .undo import Checkpoint, UndoEntry, UndoTimeline
from .validation import ensure_point

__all__ = [
    "Buffer",
    "BufferChange",
    "BufferDocument",
    "BufferMirror",
    "BufferState",
    "BufferValidationError",
    "ChangeEvent",
    "Checkpoint",
    "Point",
    "Transaction",
    "UndoEntry",
    "UndoTimeline",
    "ensure_point",
]
