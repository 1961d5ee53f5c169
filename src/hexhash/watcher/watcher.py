"""Prefix bare hex color literals with ``#`` as they land in a buffer."""

from __future__ import annotations

from typing import Dict, List, Optional

from hexhash.buffer import BufferValidationError, ChangeEvent, Point
from hexhash.editor import TextEditor, Workspace
from hexhash.events import CompositeDisposable, Disposable
from hexhash.runtime import telemetry
from hexhash.settings import WatcherSettings, load_settings

from .hex import HEX_LENGTHS, is_hex

PREFIX = "#"


class HexPasteWatcher:
    """Watches every editor of a workspace and prefixes pasted hex literals.

    Each change event is handled as one undo group: the ``#`` insertions are
    folded into the edit that triggered them, and the editor's cursors are
    moved to just after every prefixed literal.
    """

    def __init__(
        self,
        settings: Optional[WatcherSettings] = None,
        *,
        logger_name: str = "hexhash.watcher",
    ) -> None:
        self.settings = settings or load_settings()
        self.logger_name = logger_name
        self._subscriptions = CompositeDisposable()
        self._per_editor: Dict[int, Disposable] = {}
        self._active = False

    @property
    def active(self) -> bool:
        return self._active

    @property
    def watched_editors(self) -> int:
        return len(self._per_editor)

    def _disabled(self) -> bool:
        if self.settings.enabled:
            return False
        telemetry.record_event("watcher.disabled", logger_name=self.logger_name)
        return True

    def activate(self, workspace: Workspace) -> None:
        if self._disabled():
            return
        if self._subscriptions.disposed:
            self._subscriptions = CompositeDisposable()
        self._active = True
        self._subscriptions.add(workspace.observe_text_editors(self.watch))
        telemetry.record_event(
            "watcher.activate",
            data={"editors": len(workspace.editors)},
            logger_name=self.logger_name,
        )

    def watch(self, editor: TextEditor) -> Disposable:
        """Attach to a single editor; released on ``deactivate`` or editor destroy.

        A disabled watcher attaches nothing and returns an inert ``Disposable``.
        """

        if self._disabled():
            return Disposable()
        existing = self._per_editor.get(editor.id)
        if existing is not None:
            return existing
        if self._subscriptions.disposed:
            self._subscriptions = CompositeDisposable()
        self._active = True

        listener = editor.get_buffer().on_did_change(
            lambda event: self.handle(editor, event)
        )
        on_destroy = editor.on_did_destroy(lambda _editor: self._release(editor.id))
        subscription = CompositeDisposable(listener, on_destroy)
        self._per_editor[editor.id] = subscription
        self._subscriptions.add(subscription)
        return subscription

    def _release(self, editor_id: int) -> None:
        subscription = self._per_editor.pop(editor_id, None)
        if subscription is None:
            return
        self._subscriptions.remove(subscription)
        subscription.dispose()

    def deactivate(self) -> None:
        self._subscriptions.dispose()
        self._per_editor.clear()
        self._active = False
        telemetry.record_event("watcher.deactivate", logger_name=self.logger_name)

    def handle(self, editor: TextEditor, event: ChangeEvent) -> None:
        if not self._active or editor.is_destroyed:
            return

        with telemetry.span(
            "watcher::handle",
            logger_name=self.logger_name,
            component="watcher",
            metadata={"editor": editor.id, "changes": len(event.changes)},
        ):
            checkpoint = editor.create_checkpoint()
            cursor_positions: List[Point] = []
            # columns already prefixed during this event, per row
            inserted: Dict[int, List[int]] = {}

            for change in event.changes:
                try:
                    end = self._prefix(editor, change, inserted)
                except BufferValidationError as exc:
                    telemetry.record_event(
                        "watcher.skip",
                        level="warning",
                        data={"editor": editor.id, "reason": str(exc)},
                        logger_name=self.logger_name,
                    )
                    continue
                if end is not None:
                    cursor_positions.append(end)

            editor.group_changes_since_checkpoint(checkpoint, label="paste_hex")

            if cursor_positions:
                editor.set_cursor_buffer_positions(cursor_positions)

    def _prefix(
        self, editor: TextEditor, change: object, inserted: Dict[int, List[int]]
    ) -> Optional[Point]:
        """Prefix one change if it is a bare hex literal; return the new end."""

        start = Point.coerce(getattr(change, "start", None))
        end = Point.coerce(getattr(change, "end", None))
        text = getattr(change, "new_text", None)
        if start is None or end is None or not isinstance(text, str):
            return None

        shift = sum(1 for column in inserted.get(start.row, ()) if column <= start.column)
        start = start.translate(columns=shift)
        end = end.translate(columns=shift) if end.row == start.row else end

        if self.settings.check_prefix and self.is_prefixed(editor, start):
            return None

        if len(text) not in HEX_LENGTHS:
            return None

        if not is_hex(text):
            return None

        editor.set_cursor_buffer_position(start)
        editor.insert_text(PREFIX)
        inserted.setdefault(start.row, []).append(start.column - shift)

        telemetry.record_event(
            "watcher.prefix",
            level="debug",
            data={"editor": editor.id, "row": start.row, "column": start.column},
            logger_name=self.logger_name,
        )
        return end.translate(columns=1)

    def is_prefixed(self, editor: TextEditor, position: Point) -> bool:
        """True when the character right before ``position`` is ``#``."""

        if position.column == 0:
            return False
        return editor.get_buffer().character_before(position) == PREFIX


__all__ = ["HexPasteWatcher", "PREFIX"]
