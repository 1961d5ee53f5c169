"""Validation helpers shared across buffer services."""

from __future__ import annotations

from .document import BufferDocument
from .state import Point
from .sync import BufferValidationError


def ensure_point(document: BufferDocument, point: object) -> Point:
    coerced = Point.coerce(point)
    if coerced is None:
        raise BufferValidationError(f"Not a (row, column) position: {point!r}")
    row, column = coerced
    if row < 0 or row >= document.line_count:
        raise BufferValidationError("Row out of range", point=coerced)
    if column < 0 or column > len(document.get_line(row)):
        raise BufferValidationError("Column out of range", point=coerced)
    return coerced
