"""Points and cursor sets for buffers."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Iterable, List, NamedTuple, Optional, Tuple


class Point(NamedTuple):
    """Zero-based ``(row, column)`` location; compares in document order."""

    row: int
    column: int

    def translate(self, *, rows: int = 0, columns: int = 0) -> "Point":
        return Point(self.row + rows, self.column + columns)

    @classmethod
    def coerce(cls, value: object) -> Optional["Point"]:
        """Build a Point from any ``(row, column)`` pair, or ``None`` if malformed."""

        if isinstance(value, Point):
            return value
        try:
            row, column = value  # type: ignore[misc]
        except (TypeError, ValueError):
            return None
        if type(row) is not int or type(column) is not int:
            return None
        return cls(row, column)


@dataclass(slots=True)
class BufferState:
    """Ordered cursor set; the last cursor is primary."""

    _cursors: List[Point] = field(default_factory=lambda: [Point(0, 0)])

    @property
    def cursor(self) -> Point:
        return self._cursors[-1]

    @property
    def cursors(self) -> Tuple[Point, ...]:
        return tuple(self._cursors)

    def set_cursor(self, row: int, column: int) -> None:
        self._cursors = [Point(row, column)]

    def set_cursors(self, points: Iterable[Point]) -> None:
        ordered: List[Point] = []
        for point in points:
            if point not in ordered:
                ordered.append(point)
        if not ordered:
            raise ValueError("At least one cursor is required")
        self._cursors = ordered

    def add_cursor(self, point: Point) -> None:
        if point in self._cursors:
            self._cursors.remove(point)
        self._cursors.append(point)
