"""Boundary types exchanged with host adapters."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Tuple

from .state import Point


@dataclass(slots=True)
class BufferMirror:
    """Host-friendly snapshot describing the current buffer state."""

    text: str
    cursors: Tuple[Point, ...]
    version: int = 0
    attributes: dict[str, str] = field(default_factory=dict)

    @property
    def cursor(self) -> Point:
        return self.cursors[-1]


class BufferValidationError(RuntimeError):
    """Raised when a buffer is handed an out-of-bounds position."""

    def __init__(self, message: str, *, point: Point | None = None) -> None:
        super().__init__(message)
        self.point = point
