"""Per-editor façade over a ``Buffer``: cursors, insertion, history, lifetime."""

from __future__ import annotations

import itertools
from typing import Callable, Iterable, Optional, Tuple

from hexhash.buffer import Buffer, BufferChange, Checkpoint, Point, ensure_point
from hexhash.events import Disposable, Emitter

DID_DESTROY = "did-destroy"

_editor_ids = itertools.count(1)


class EditorDestroyedError(RuntimeError):
    """Raised when a destroyed editor is asked to do anything."""

    def __init__(self, editor_id: int) -> None:
        super().__init__(f"Editor {editor_id} has been destroyed")
        self.editor_id = editor_id


class TextEditor:
    def __init__(
        self,
        buffer: Optional[Buffer] = None,
        *,
        text: str = "",
        name: Optional[str] = None,
    ) -> None:
        self.id = next(_editor_ids)
        self.buffer = buffer or Buffer.from_text(text, name=name or f"editor-{self.id}")
        self._emitter = Emitter()
        self._destroyed = False

    def __repr__(self) -> str:
        return f"TextEditor(id={self.id}, buffer={self.buffer.name!r})"

    def _live(self) -> Buffer:
        if self._destroyed:
            raise EditorDestroyedError(self.id)
        return self.buffer

    def get_buffer(self) -> Buffer:
        return self._live()

    def get_text(self) -> str:
        return self._live().text

    def get_text_in_buffer_range(self, start: Point, end: Point) -> str:
        return self._live().get_text_range(start, end)

    # -- cursors -----------------------------------------------------------

    def get_cursor_buffer_positions(self) -> Tuple[Point, ...]:
        return self._live().state.cursors

    def get_cursor_buffer_position(self) -> Point:
        return self._live().state.cursor

    def set_cursor_buffer_position(self, point: Point) -> None:
        """Collapse every cursor into a single one at ``point``."""

        buffer = self._live()
        buffer.state.set_cursor(*ensure_point(buffer.document, point))

    def add_cursor_at_buffer_position(self, point: Point) -> None:
        buffer = self._live()
        buffer.state.add_cursor(ensure_point(buffer.document, point))

    def set_cursor_buffer_positions(self, points: Iterable[Point]) -> None:
        """Replace the cursor set with ``points``, keeping their order."""

        buffer = self._live()
        buffer.state.set_cursors(
            [ensure_point(buffer.document, point) for point in points]
        )

    def move_cursors(self, *, rows: int = 0, columns: int = 0) -> None:
        buffer = self._live()
        document = buffer.document
        moved = []
        for point in buffer.state.cursors:
            row = min(max(point.row + rows, 0), document.line_count - 1)
            column = min(max(point.column + columns, 0), len(document.get_line(row)))
            moved.append(Point(row, column))
        buffer.state.set_cursors(moved)

    # -- editing -----------------------------------------------------------

    def insert_text(self, text: str) -> Tuple[BufferChange, ...]:
        return self._live().insert_text(text)

    def backspace(self) -> Tuple[BufferChange, ...]:
        return self._live().delete_backward()

    def create_checkpoint(self) -> Checkpoint:
        return self._live().create_checkpoint()

    def group_changes_since_checkpoint(
        self, checkpoint: Checkpoint, *, label: Optional[str] = None
    ) -> bool:
        return self._live().group_changes_since_checkpoint(checkpoint, label=label)

    def undo(self) -> bool:
        return self._live().undo()

    def redo(self) -> bool:
        return self._live().redo()

    # -- lifetime ----------------------------------------------------------

    @property
    def is_destroyed(self) -> bool:
        return self._destroyed

    def on_did_destroy(self, callback: Callable[["TextEditor"], None]) -> Disposable:
        return self._emitter.on(DID_DESTROY, callback)  # type: ignore[arg-type]

    def destroy(self) -> None:
        if self._destroyed:
            return
        self._destroyed = True
        self._emitter.emit(DID_DESTROY, self)
        self._emitter.clear()
