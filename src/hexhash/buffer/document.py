"""Line-based text storage for hexhash buffers."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import List, Sequence

from .state import Point


@dataclass(slots=True)
class BufferDocument:
    """Text stored as a list of lines without trailing newlines.

    A document always has at least one (possibly empty) line. Every edit
    produces a new document with a bumped ``version``.
    """

    _lines: List[str] = field(default_factory=lambda: [""])
    version: int = 0

    @classmethod
    def from_text(cls, text: str, *, version: int = 0) -> "BufferDocument":
        return cls(_lines=text.split("\n"), version=version)

    @property
    def text(self) -> str:
        return "\n".join(self._lines)

    def snapshot(self) -> Sequence[str]:
        return tuple(self._lines)

    def replace_text(self, text: str) -> "BufferDocument":
        return BufferDocument.from_text(text, version=self.version + 1)

    @property
    def line_count(self) -> int:
        return len(self._lines)

    def get_line(self, index: int) -> str:
        return self._lines[index]

    def end_point(self) -> Point:
        return Point(len(self._lines) - 1, len(self._lines[-1]))

    def offset_for_point(self, point: Point) -> int:
        row, column = point
        offset = sum(len(line) + 1 for line in self._lines[:row])  # newline
        return offset + column

    def point_for_offset(self, offset: int) -> Point:
        running = 0
        for row, line in enumerate(self._lines):
            if offset <= running + len(line):
                return Point(row, max(offset - running, 0))
            running += len(line) + 1
        return self.end_point()

    def text_in_range(self, start: Point, end: Point) -> str:
        if start > end:
            start, end = end, start
        text = self.text
        return text[self.offset_for_point(start) : self.offset_for_point(end)]
