from typing import List

import pytest

from hexhash.buffer import BufferChange, ChangeEvent, Point
from hexhash.editor import TextEditor, Workspace
from hexhash.settings import WatcherSettings
from hexhash.watcher import HexPasteWatcher


def make_watched(
    text: str = "", *, settings: WatcherSettings | None = None
) -> tuple[HexPasteWatcher, Workspace, TextEditor]:
    workspace = Workspace()
    watcher = HexPasteWatcher(settings or WatcherSettings())
    watcher.activate(workspace)
    editor = workspace.open_editor(text)
    return watcher, workspace, editor


def test_three_digit_paste_gets_prefixed() -> None:
    _, _, editor = make_watched("\n\n")
    editor.set_cursor_buffer_position(Point(2, 0))

    editor.insert_text("fff")

    assert editor.get_text() == "\n\n#fff"
    assert editor.get_cursor_buffer_positions() == (Point(2, 4),)


def test_six_digit_paste_gets_prefixed() -> None:
    _, _, editor = make_watched("color: ")
    editor.set_cursor_buffer_position(Point(0, 7))

    editor.insert_text("abcdef")

    assert editor.get_text() == "color: #abcdef"
    assert editor.get_cursor_buffer_position() == Point(0, 14)


def test_already_prefixed_paste_is_untouched() -> None:
    _, _, editor = make_watched("\n\n")
    editor.set_cursor_buffer_position(Point(2, 0))

    editor.insert_text("#fff")

    assert editor.get_text() == "\n\n#fff"


def test_paste_after_existing_hash_is_not_double_prefixed() -> None:
    _, _, editor = make_watched("#")
    editor.set_cursor_buffer_position(Point(0, 1))

    editor.insert_text("c0ffee")

    assert editor.get_text() == "#c0ffee"


@pytest.mark.parametrize("text", ["abcdg", "ggg", "ff", "ffff", "a"])
def test_non_hex_or_wrong_length_is_untouched(text: str) -> None:
    _, _, editor = make_watched("")

    editor.insert_text(text)

    assert editor.get_text() == text


def test_typing_one_character_at_a_time_is_not_prefixed() -> None:
    _, _, editor = make_watched("")

    for character in "fff":
        editor.insert_text(character)

    assert editor.get_text() == "fff"


def test_multi_cursor_paste_prefixes_each_literal_and_keeps_cursor_order() -> None:
    _, _, editor = make_watched("a: \nb: ")
    editor.set_cursor_buffer_positions([Point(0, 3), Point(1, 3)])

    editor.insert_text("fff")

    assert editor.get_text() == "a: #fff\nb: #fff"
    assert editor.get_cursor_buffer_positions() == (Point(0, 7), Point(1, 7))


def test_same_row_multi_cursor_paste_stays_aligned() -> None:
    _, _, editor = make_watched("x y")
    editor.set_cursor_buffer_positions([Point(0, 1), Point(0, 3)])

    editor.insert_text("fff")

    assert editor.get_text() == "x#fff y#fff"
    assert editor.get_cursor_buffer_positions() == (Point(0, 5), Point(0, 11))


def test_single_undo_reverts_paste_and_prefixes() -> None:
    _, _, editor = make_watched("one\ntwo")
    editor.set_cursor_buffer_positions([Point(0, 3), Point(1, 3)])
    editor.insert_text(" ")
    before = editor.get_text()

    editor.insert_text("000")
    assert editor.get_text() == "one #000\ntwo #000"

    assert editor.undo()
    assert editor.get_text() == before


def test_mixed_event_only_prefixes_qualifying_changes() -> None:
    watcher, _, editor = make_watched("ab\ncd")
    event = ChangeEvent(
        changes=(
            BufferChange(start=Point(0, 0), end=Point(0, 2), new_text="ab"),
            BufferChange(start=Point(1, 0), end=Point(1, 2), new_text="cd"),
        )
    )

    watcher.handle(editor, event)

    assert editor.get_text() == "ab\ncd"


def test_handle_skips_malformed_and_out_of_range_changes() -> None:
    watcher, _, editor = make_watched("fff\nabc")

    class Broken:
        start = None
        end = None
        new_text = "fff"

    event = ChangeEvent(
        changes=(
            Broken(),  # type: ignore[arg-type]
            BufferChange(start=Point(9, 1), end=Point(9, 4), new_text="abc"),
            BufferChange(start=Point(1, 0), end=Point(1, 3), new_text="abc"),
        )
    )

    watcher.handle(editor, event)

    assert editor.get_text() == "fff\n#abc"
    assert editor.get_cursor_buffer_positions() == (Point(1, 4),)


def test_host_change_records_are_not_mutated() -> None:
    watcher, _, editor = make_watched("fff")
    change = BufferChange(start=Point(0, 0), end=Point(0, 3), new_text="fff")

    watcher.handle(editor, ChangeEvent(changes=(change,)))

    assert change.end == Point(0, 3)
    assert editor.get_text() == "#fff"


def test_empty_event_leaves_cursors_alone() -> None:
    watcher, _, editor = make_watched("abc")
    editor.set_cursor_buffer_position(Point(0, 2))

    watcher.handle(editor, ChangeEvent(changes=()))

    assert editor.get_cursor_buffer_positions() == (Point(0, 2),)


def test_check_prefix_disabled_prefixes_again() -> None:
    _, _, editor = make_watched(
        "#", settings=WatcherSettings(enabled=True, check_prefix=False)
    )
    editor.set_cursor_buffer_position(Point(0, 1))

    editor.insert_text("fff")

    assert editor.get_text() == "##fff"


def test_is_prefixed_at_column_zero_is_false() -> None:
    watcher, _, editor = make_watched("#fff")

    assert watcher.is_prefixed(editor, Point(0, 0)) is False
    assert watcher.is_prefixed(editor, Point(0, 1)) is True
    assert watcher.is_prefixed(editor, Point(0, 2)) is False


def test_watcher_attaches_to_editors_opened_before_and_after_activation() -> None:
    workspace = Workspace()
    early = workspace.open_editor("")
    watcher = HexPasteWatcher(WatcherSettings())
    watcher.activate(workspace)
    late = workspace.open_editor("")

    early.insert_text("123")
    late.insert_text("456")

    assert early.get_text() == "#123"
    assert late.get_text() == "#456"
    assert watcher.watched_editors == 2


def test_deactivate_stops_processing() -> None:
    watcher, workspace, editor = make_watched("")

    watcher.deactivate()
    editor.insert_text("fff")
    workspace.open_editor("").insert_text("000")

    assert editor.get_text() == "fff"
    assert watcher.watched_editors == 0
    assert not watcher.active


def test_reactivation_uses_a_fresh_registry() -> None:
    watcher, workspace, editor = make_watched("")
    watcher.deactivate()

    watcher.activate(workspace)
    editor.insert_text("fff")

    assert editor.get_text() == "#fff"


def test_destroyed_editor_is_released() -> None:
    watcher, workspace, editor = make_watched("")

    workspace.close_editor(editor)

    assert watcher.watched_editors == 0


def test_disabled_settings_skip_activation() -> None:
    watcher, _, editor = make_watched(
        "", settings=WatcherSettings(enabled=False)
    )

    editor.insert_text("fff")

    assert editor.get_text() == "fff"
    assert not watcher.active


def test_watch_is_idempotent_per_editor() -> None:
    watcher = HexPasteWatcher(WatcherSettings())
    editor = TextEditor(text="")

    first = watcher.watch(editor)
    second = watcher.watch(editor)
    editor.insert_text("abc")

    assert first is second
    assert editor.get_text() == "#abc"


def test_prefix_insertion_is_visible_to_other_listeners() -> None:
    _, _, editor = make_watched("")
    seen: List[str] = []
    editor.get_buffer().on_did_change(
        lambda event: seen.extend(change.new_text for change in event.changes)
    )

    editor.insert_text("fff")

    assert "#" in seen
    assert editor.get_text() == "#fff"


def test_redo_after_undo_restores_a_single_prefix_without_events() -> None:
    _, _, editor = make_watched("")
    editor.insert_text("fff")
    events: List[ChangeEvent] = []
    editor.get_buffer().on_did_change(events.append)

    assert editor.undo()
    assert editor.get_text() == ""
    assert editor.redo()

    assert editor.get_text() == "#fff"
    assert events == []


def test_one_event_with_two_literals_prefixes_both_and_undoes_together() -> None:
    _, _, editor = make_watched("")
    buffer = editor.get_buffer()

    with buffer.transact("paste"):
        buffer.replace_range(Point(0, 0), Point(0, 0), "fff")
        buffer.replace_range(Point(0, 3), Point(0, 3), "000")

    assert editor.get_text() == "#fff#000"
    assert editor.get_cursor_buffer_positions() == (Point(0, 4), Point(0, 8))

    assert editor.undo()
    assert editor.get_text() == ""
    assert editor.redo()
    assert editor.get_text() == "#fff#000"


def test_disabled_watcher_does_not_attach_through_watch() -> None:
    watcher = HexPasteWatcher(WatcherSettings(enabled=False))
    editor = TextEditor(text="")

    watcher.watch(editor)
    editor.insert_text("fff")

    assert editor.get_text() == "fff"
    assert watcher.watched_editors == 0
    assert not watcher.active
