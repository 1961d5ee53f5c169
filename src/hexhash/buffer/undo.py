"""Linear undo/redo history with checkpoint grouping."""

from __future__ import annotations

from dataclasses import dataclass
from typing import List, Optional, Tuple

from .state import Point


@dataclass(slots=True)
class UndoEntry:
    label: str
    before_text: str
    after_text: str
    cursors_before: Tuple[Point, ...]
    cursors_after: Tuple[Point, ...]


@dataclass(frozen=True, slots=True)
class Checkpoint:
    """Timeline position; entries pushed after ``index`` are "since" it."""

    index: int


class UndoTimeline:
    """Linear undo/redo history. Pushing after an undo discards the redo tail."""

    def __init__(self) -> None:
        self._entries: List[UndoEntry] = []
        self._index: int = -1

    def __len__(self) -> int:
        return self._index + 1

    def push(self, entry: UndoEntry) -> None:
        if self._index < len(self._entries) - 1:
            self._entries = self._entries[: self._index + 1]
        self._entries.append(entry)
        self._index = len(self._entries) - 1

    def can_undo(self) -> bool:
        return self._index >= 0

    def can_redo(self) -> bool:
        return self._index < len(self._entries) - 1

    def undo(self) -> Optional[UndoEntry]:
        if not self.can_undo():
            return None
        entry = self._entries[self._index]
        self._index -= 1
        return entry

    def redo(self) -> Optional[UndoEntry]:
        if not self.can_redo():
            return None
        self._index += 1
        return self._entries[self._index]

    def checkpoint(self, anchor: Optional[int] = None) -> Checkpoint:
        """Mark the current position, or ``anchor`` when given."""

        index = self._index if anchor is None else anchor
        if index < -1 or index > self._index:
            raise ValueError(f"Checkpoint anchor {index} is outside the timeline")
        return Checkpoint(index=index)

    def group_since(self, checkpoint: Checkpoint, *, label: Optional[str] = None) -> bool:
        """Collapse every entry pushed after ``checkpoint`` into one.

        Returns ``True`` when entries were merged. Raises ``ValueError`` if the
        checkpoint lies beyond the current position (e.g. after an undo).
        """

        if checkpoint.index > self._index:
            raise ValueError("Checkpoint is no longer part of the undo history")
        grouped = self._entries[checkpoint.index + 1 : self._index + 1]
        if len(grouped) < 2:
            return False
        first, last = grouped[0], grouped[-1]
        merged = UndoEntry(
            label=label or first.label,
            before_text=first.before_text,
            after_text=last.after_text,
            cursors_before=first.cursors_before,
            cursors_after=last.cursors_after,
        )
        self._entries[checkpoint.index + 1 :] = [merged]
        self._index = checkpoint.index + 1
        return True
