"""Minimal Textual adapter that drives a TextEditor from UI input."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Callable, Dict, Iterable, Optional

from hexhash.buffer import BufferMirror, ChangeEvent, Point
from hexhash.editor import TextEditor
from hexhash.events import Disposable


def _noop(*_args, **_kwargs) -> None:  # pragma: no cover - default hook
    return None


@dataclass(slots=True)
class TextualUIHooks:
    """Callbacks invoked by the adapter to update Textual widgets."""

    update_buffer: Callable[[BufferMirror], None]
    update_status: Callable[[str], None] = _noop
    # Optional realtime log callback a host may use to surface debug lines
    log: Callable[[str], None] = _noop


_MOVES: Dict[str, tuple[int, int]] = {
    "LEFT": (0, -1),
    "RIGHT": (0, 1),
    "UP": (-1, 0),
    "DOWN": (1, 0),
}


class TextualEditorAdapter:
    """Translates Textual keys and pastes into TextEditor operations."""

    def __init__(self, editor: TextEditor, hooks: TextualUIHooks) -> None:
        self.editor = editor
        self.hooks = hooks
        self._subscription: Disposable = editor.get_buffer().on_did_change(
            self._on_change
        )
        self._refresh_buffer()

    def dispose(self) -> None:
        self._subscription.dispose()

    def handle_textual_key(
        self,
        key: str,
        *,
        text: Optional[str] = None,
        modifiers: Iterable[str] = (),
    ) -> bool:
        """Apply one normalized key; return ``True`` when it was consumed."""

        mods = frozenset(str(mod).upper() for mod in modifiers)
        key = key.upper() if len(key) > 1 else key
        self._log_state("key ->", key=key, text=text, mods=tuple(sorted(mods)))

        consumed = True
        if "CTRL" in mods and key.lower() == "z":
            self.undo()
            return True
        if "CTRL" in mods and key.lower() == "y":
            self.redo()
            return True
        if key == "DOWN" and "ALT" in mods:
            self._add_cursor_below()
        elif key in _MOVES:
            rows, columns = _MOVES[key]
            self.editor.move_cursors(rows=rows, columns=columns)
        elif key == "ENTER":
            self.editor.insert_text("\n")
        elif key == "TAB":
            self.editor.insert_text("\t")
        elif key == "BACKSPACE":
            self.editor.backspace()
        elif text and not mods.intersection({"CTRL", "ALT"}):
            self.editor.insert_text(text)
        else:
            consumed = False

        self._after_edit()
        return consumed

    def handle_paste(self, text: str) -> None:
        """Insert clipboard text at every cursor as a single edit."""

        if not text:
            return
        self._log_state("paste ->", text=text)
        self.editor.insert_text(text)
        self._after_edit()

    def undo(self) -> bool:
        undone = self.editor.undo()
        self.hooks.update_status("undo" if undone else "nothing to undo")
        self._refresh_buffer()
        return undone

    def redo(self) -> bool:
        redone = self.editor.redo()
        self.hooks.update_status("redo" if redone else "nothing to redo")
        self._refresh_buffer()
        return redone

    def _add_cursor_below(self) -> None:
        buffer = self.editor.get_buffer()
        primary = buffer.state.cursor
        row = primary.row + 1
        if row >= buffer.document.line_count:
            return
        column = min(primary.column, len(buffer.document.get_line(row)))
        self.editor.add_cursor_at_buffer_position(Point(row, column))

    def _after_edit(self) -> None:
        cursors = self.editor.get_cursor_buffer_positions()
        listed = " ".join(f"{row + 1}:{column + 1}" for row, column in cursors)
        self.hooks.update_status(f"{len(cursors)} cursor(s) @ {listed}")
        self._refresh_buffer()

    def _on_change(self, event: ChangeEvent) -> None:
        for change in event.changes:
            self._log_state(
                "change ->",
                label=event.label,
                start=tuple(change.start),
                end=tuple(change.end),
                text=change.new_text,
            )

    def _refresh_buffer(self) -> None:
        self.hooks.update_buffer(self.editor.get_buffer().mirror())

    def _log_state(self, prefix: str, **fields: object) -> None:
        snapshot = self._state_metadata()
        snapshot.update({k: v for k, v in fields.items() if v is not None})
        parts = [prefix]
        for key, value in snapshot.items():
            parts.append(f"{key}={value!r}")
        self.hooks.log(" ".join(parts))

    def _state_metadata(self) -> Dict[str, object]:
        buffer = self.editor.get_buffer()
        return {
            "editor": self.editor.id,
            "cursors": buffer.state.cursors,
            "buffer_version": buffer.document.version,
        }


__all__ = ["TextualEditorAdapter", "TextualUIHooks"]
