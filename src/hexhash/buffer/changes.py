"""Change records delivered to buffer listeners."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Iterator, Tuple

from .state import Point


@dataclass(frozen=True, slots=True)
class BufferChange:
    """One atomic edit. ``start``/``end`` bound ``new_text`` after the edit."""

    start: Point
    end: Point
    new_text: str
    old_text: str = ""


@dataclass(frozen=True, slots=True)
class ChangeEvent:
    """Every change applied by one buffer transaction, in application order."""

    changes: Tuple[BufferChange, ...]
    buffer: str = "default"
    version: int = 0
    label: str = ""

    def __iter__(self) -> Iterator[BufferChange]:
        return iter(self.changes)

    def __len__(self) -> int:
        return len(self.changes)
