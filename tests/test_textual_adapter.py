from __future__ import annotations

from typing import List

import pytest

from hexhash.adapters.textual import TextualEditorAdapter, TextualUIHooks
from hexhash.buffer import BufferMirror, Point
from hexhash.editor import TextEditor, Workspace
from hexhash.settings import WatcherSettings
from hexhash.watcher import HexPasteWatcher


def make_editor(text: str = "") -> TextEditor:
    workspace = Workspace()
    HexPasteWatcher(WatcherSettings()).activate(workspace)
    return workspace.open_editor(text)


def test_adapter_pushes_initial_buffer() -> None:
    editor = make_editor("abc")
    mirrors: List[BufferMirror] = []

    TextualEditorAdapter(editor, TextualUIHooks(update_buffer=mirrors.append))

    assert mirrors[-1].text == "abc"


def test_adapter_paste_is_prefixed_and_reported() -> None:
    editor = make_editor("")
    mirrors: List[BufferMirror] = []
    statuses: List[str] = []
    hooks = TextualUIHooks(update_buffer=mirrors.append, update_status=statuses.append)
    adapter = TextualEditorAdapter(editor, hooks)

    adapter.handle_paste("c0ffee")

    assert mirrors[-1].text == "#c0ffee"
    assert mirrors[-1].cursors == (Point(0, 7),)
    assert statuses[-1] == "1 cursor(s) @ 1:8"


def test_adapter_multi_cursor_paste_and_single_undo() -> None:
    editor = make_editor("a\nb")
    mirrors: List[BufferMirror] = []
    adapter = TextualEditorAdapter(editor, TextualUIHooks(update_buffer=mirrors.append))

    adapter.handle_textual_key("RIGHT")
    adapter.handle_textual_key("down", modifiers=("alt",))
    adapter.handle_textual_key(" ", text=" ")
    adapter.handle_paste("fff")

    assert mirrors[-1].text == "a #fff\nb #fff"
    assert len(mirrors[-1].cursors) == 2

    adapter.handle_textual_key("z", modifiers=("ctrl",))
    assert mirrors[-1].text == "a \nb "


def test_adapter_typing_and_backspace() -> None:
    editor = make_editor("")
    mirrors: List[BufferMirror] = []
    adapter = TextualEditorAdapter(editor, TextualUIHooks(update_buffer=mirrors.append))

    for character in "ab":
        adapter.handle_textual_key(character, text=character)
    adapter.handle_textual_key("ENTER")
    adapter.handle_textual_key("backspace")

    assert mirrors[-1].text == "ab"


def test_adapter_ignores_unknown_chords() -> None:
    editor = make_editor("abc")
    adapter = TextualEditorAdapter(editor, TextualUIHooks(update_buffer=lambda _: None))

    consumed = adapter.handle_textual_key("k", modifiers=("ctrl",))

    assert consumed is False
    assert editor.get_text() == "abc"


def test_adapter_emits_log_lines_for_keys_and_changes() -> None:
    editor = make_editor("")
    logs: List[str] = []
    hooks = TextualUIHooks(update_buffer=lambda _: None, log=logs.append)
    adapter = TextualEditorAdapter(editor, hooks)

    adapter.handle_paste("123")

    assert any(line.startswith("paste ->") for line in logs)
    assert any("change ->" in line and "'#'" in line for line in logs)


def test_dispose_stops_change_logging() -> None:
    editor = make_editor("")
    logs: List[str] = []
    adapter = TextualEditorAdapter(
        editor, TextualUIHooks(update_buffer=lambda _: None, log=logs.append)
    )

    adapter.dispose()
    editor.insert_text("x")

    assert not any(line.startswith("change ->") for line in logs)


def test_render_mirror_marks_every_cursor() -> None:
    pytest.importorskip("textual")
    from hexhash.adapters.textual.app import CURSOR_MARK, render_mirror

    mirror = BufferMirror(
        text="#fff\n#000", cursors=(Point(0, 4), Point(1, 4))
    )

    assert render_mirror(mirror) == f"#fff{CURSOR_MARK}\n#000{CURSOR_MARK}"
