"""Workspace that owns open editors and announces new ones."""

from __future__ import annotations

from typing import Callable, List, Optional, Tuple

from hexhash.events import Disposable, Emitter
from hexhash.runtime import telemetry

from .text_editor import TextEditor

DID_OPEN_EDITOR = "did-open-editor"


class Workspace:
    def __init__(self) -> None:
        self._editors: List[TextEditor] = []
        self._emitter = Emitter()

    @property
    def editors(self) -> Tuple[TextEditor, ...]:
        return tuple(self._editors)

    def open_editor(self, text: str = "", *, name: Optional[str] = None) -> TextEditor:
        editor = TextEditor(text=text, name=name)
        self._editors.append(editor)
        editor.on_did_destroy(self._forget)
        telemetry.record_event(
            "workspace.open", level="debug", data={"editor": editor.id}
        )
        self._emitter.emit(DID_OPEN_EDITOR, editor)
        return editor

    def close_editor(self, editor: TextEditor) -> None:
        editor.destroy()

    def _forget(self, editor: TextEditor) -> None:
        if editor in self._editors:
            self._editors.remove(editor)
            telemetry.record_event(
                "workspace.close", level="debug", data={"editor": editor.id}
            )

    def on_did_open_editor(self, callback: Callable[[TextEditor], None]) -> Disposable:
        return self._emitter.on(DID_OPEN_EDITOR, callback)  # type: ignore[arg-type]

    def observe_text_editors(
        self, callback: Callable[[TextEditor], None]
    ) -> Disposable:
        """Call ``callback`` for every open editor now and every editor opened later."""

        for editor in self.editors:
            callback(editor)
        return self.on_did_open_editor(callback)

    def close_all(self) -> None:
        for editor in self.editors:
            editor.destroy()
