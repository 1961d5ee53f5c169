"""Buffer façade combining document, cursor state, history and change events."""

from __future__ import annotations

from contextlib import AbstractContextManager
from typing import Callable, ContextManager, Iterable, List, Optional, Tuple

from hexhash.events import Disposable, Emitter
from hexhash.runtime import telemetry

from .changes import BufferChange, ChangeEvent
from .document import BufferDocument
from .state import BufferState, Point
from .sync import BufferMirror
from .undo import Checkpoint, UndoEntry, UndoTimeline
from .validation import ensure_point

DID_CHANGE = "did-change"


class Buffer:
    def __init__(
        self,
        *,
        name: str = "default",
        document: Optional[BufferDocument] = None,
        state: Optional[BufferState] = None,
        history: Optional[UndoTimeline] = None,
    ) -> None:
        self.name = name
        self.document = document or BufferDocument()
        self.state = state or BufferState()
        self.history = history if history is not None else UndoTimeline()
        self._emitter = Emitter()
        self._transaction: Optional[Transaction] = None
        self._dispatch_anchors: List[int] = []

    @classmethod
    def from_text(cls, text: str, *, name: str = "default") -> "Buffer":
        return cls(name=name, document=BufferDocument.from_text(text))

    @property
    def text(self) -> str:
        return self.document.text

    def mirror(self, *, attributes: Optional[dict[str, str]] = None) -> BufferMirror:
        return BufferMirror(
            text=self.document.text,
            cursors=self.state.cursors,
            version=self.document.version,
            attributes=dict(attributes or {}),
        )

    def on_did_change(self, callback: Callable[[ChangeEvent], None]) -> Disposable:
        """Call ``callback`` with a ``ChangeEvent`` after each committed transaction."""

        return self._emitter.on(DID_CHANGE, callback)  # type: ignore[arg-type]

    def transact(self, label: str) -> "Transaction":
        return Transaction(self, label)

    def replace_range(
        self, start: Point, end: Point, text: str, *, label: str = "replace_range"
    ) -> BufferChange:
        with self.transact(label):
            change = self._apply(start, end, text)
            self.state.set_cursor(*change.end)
        return change

    def delete_range(self, start: Point, end: Point) -> BufferChange:
        return self.replace_range(start, end, "", label="delete_range")

    def insert_text(
        self, text: str, *, at: Optional[Iterable[Point]] = None
    ) -> Tuple[BufferChange, ...]:
        """Insert ``text`` at every cursor (or every point in ``at``).

        Insertions are applied in document order inside one transaction, so
        each recorded change is valid in the final buffer coordinates. The
        cursors end up right after each insertion.
        """

        targets = self.state.cursors if at is None else tuple(at)
        points = sorted({ensure_point(self.document, point) for point in targets})
        offsets = [self.document.offset_for_point(point) for point in points]
        changes: List[BufferChange] = []
        with self.transact("insert_text"):
            for offset in offsets:
                start = self.document.point_for_offset(
                    offset + len(text) * len(changes)
                )
                changes.append(self._apply(start, start, text))
            if changes:
                self.state.set_cursors(change.end for change in changes)
        return tuple(changes)

    def delete_backward(self) -> Tuple[BufferChange, ...]:
        """Remove the character before every cursor not at the buffer start."""

        offsets = sorted(
            {self.document.offset_for_point(point) for point in self.state.cursors}
        )
        changes: List[BufferChange] = []
        cursors: List[Point] = []
        with self.transact("delete_backward"):
            for offset in offsets:
                current = offset - len(changes)
                if current == 0:
                    cursors.append(Point(0, 0))
                    continue
                start = self.document.point_for_offset(current - 1)
                end = self.document.point_for_offset(current)
                changes.append(self._apply(start, end, ""))
                cursors.append(start)
            self.state.set_cursors(cursors)
        return tuple(changes)

    def get_text_range(self, start: Point, end: Point) -> str:
        start = ensure_point(self.document, start)
        end = ensure_point(self.document, end)
        return self.document.text_in_range(start, end)

    def character_before(self, point: Point) -> str:
        """Single character preceding ``point`` on its row; ``""`` at column 0."""

        point = ensure_point(self.document, point)
        if point.column == 0:
            return ""
        return self.document.get_line(point.row)[point.column - 1]

    def create_checkpoint(self) -> Checkpoint:
        """Mark the history so later edits can be grouped into one undo step.

        While a change event is being dispatched the checkpoint is anchored
        before the transaction that produced it, so grouping also swallows
        the triggering edit.
        """

        anchor = self._dispatch_anchors[-1] if self._dispatch_anchors else None
        return self.history.checkpoint(anchor)

    def group_changes_since_checkpoint(
        self, checkpoint: Checkpoint, *, label: Optional[str] = None
    ) -> bool:
        return self.history.group_since(checkpoint, label=label)

    def undo(self) -> bool:
        self._require_idle()
        return self._restore(self.history.undo(), forward=False)

    def redo(self) -> bool:
        self._require_idle()
        return self._restore(self.history.redo(), forward=True)

    def _require_idle(self) -> None:
        if self._transaction is not None:
            raise RuntimeError("Cannot navigate history inside a transaction")

    def _restore(self, entry: Optional[UndoEntry], *, forward: bool) -> bool:
        if entry is None:
            return False
        text = entry.after_text if forward else entry.before_text
        cursors = entry.cursors_after if forward else entry.cursors_before
        self.document = self.document.replace_text(text)
        self.state.set_cursors(ensure_point(self.document, point) for point in cursors)
        telemetry.record_event(
            "buffer.redo" if forward else "buffer.undo",
            level="debug",
            data={"buffer": self.name, "label": entry.label},
        )
        return True

    def _apply(self, start: Point, end: Point, text: str) -> BufferChange:
        transaction = self._transaction
        if transaction is None:
            raise RuntimeError("Buffer edits must run inside a transaction")
        start = ensure_point(self.document, start)
        end = ensure_point(self.document, end)
        if end < start:
            start, end = end, start
        before = self.document.text
        start_offset = self.document.offset_for_point(start)
        end_offset = self.document.offset_for_point(end)
        self.document = self.document.replace_text(
            before[:start_offset] + text + before[end_offset:]
        )
        change = BufferChange(
            start=start,
            end=self.document.point_for_offset(start_offset + len(text)),
            new_text=text,
            old_text=before[start_offset:end_offset],
        )
        transaction.changes.append(change)
        return change

    def _dispatch(self, event: ChangeEvent) -> None:
        self._dispatch_anchors.append(len(self.history) - 2)
        try:
            self._emitter.emit(DID_CHANGE, event)
        finally:
            self._dispatch_anchors.pop()


class Transaction(AbstractContextManager["Transaction"]):
    """Batches buffer edits into one undo entry and one change event.

    Nested transactions join the outermost one. If the block raises, the
    document and cursors are rolled back and nothing is recorded.
    """

    def __init__(self, buffer: Buffer, label: str) -> None:
        self.buffer = buffer
        self.label = label
        self.changes: List[BufferChange] = []
        self._outer: Optional[Transaction] = None
        self._span_cm: Optional[ContextManager[object]] = None
        self._document_before: Optional[BufferDocument] = None
        self._cursors_before: Tuple[Point, ...] = ()

    def __enter__(self) -> "Transaction":
        active = self.buffer._transaction
        if active is not None:
            self._outer = active
            self.changes = active.changes
            return self
        self.buffer._transaction = self
        self._document_before = self.buffer.document
        self._cursors_before = self.buffer.state.cursors
        self._span_cm = telemetry.span(
            name=f"buffer::{self.label}",
            component=True,
            metadata={"buffer": self.buffer.name},
        )
        self._span_cm.__enter__()
        return self

    def __exit__(self, exc_type, exc, tb) -> bool:
        if self._outer is not None:
            return False
        buffer = self.buffer
        buffer._transaction = None
        if exc_type is not None:
            assert self._document_before is not None
            buffer.document = self._document_before
            buffer.state.set_cursors(self._cursors_before)
        elif self.changes:
            self._commit()
        if self._span_cm is not None:
            self._span_cm.__exit__(exc_type, exc, tb)
        if exc_type is None and self.changes:
            buffer._dispatch(
                ChangeEvent(
                    changes=tuple(self.changes),
                    buffer=buffer.name,
                    version=buffer.document.version,
                    label=self.label,
                )
            )
        return False

    def _commit(self) -> None:
        assert self._document_before is not None
        self.buffer.history.push(
            UndoEntry(
                label=self.label,
                before_text=self._document_before.text,
                after_text=self.buffer.document.text,
                cursors_before=self._cursors_before,
                cursors_after=self.buffer.state.cursors,
            )
        )
