"""Executable Textual app hosting a single editor with the hex paste watcher."""

from __future__ import annotations

import argparse
import os
from dataclasses import dataclass
from typing import Optional, Sequence, Tuple

try:  # pragma: no cover - imported only when demo is run
    from textual import events
    from textual.app import App, ComposeResult
    from textual.containers import Vertical
    from textual.widgets import Footer, Header, Static
except ModuleNotFoundError as exc:  # pragma: no cover - friendly error for missing dep
    raise RuntimeError(
        "Install the 'textual' extra to use hexhash.adapters.textual.app"
    ) from exc

from hexhash.buffer import BufferMirror
from hexhash.editor import TextEditor, Workspace
from hexhash.settings import WatcherSettings, load_settings
from hexhash.watcher import HexPasteWatcher

from .controller import TextualEditorAdapter, TextualUIHooks

CURSOR_MARK = "▏"


def render_mirror(mirror: BufferMirror) -> str:
    """Plain-text rendering of ``mirror`` with a marker at every cursor."""

    lines = mirror.text.split("\n")
    for row, column in sorted(set(mirror.cursors), reverse=True):
        line = lines[row]
        lines[row] = line[:column] + CURSOR_MARK + line[column:]
    return "\n".join(lines)


@dataclass
class UIState:
    buffer_text: str = ""
    status_text: str = ""


class HexHashApp(App[None]):
    """Textual UI embedding one editor watched for bare hex pastes."""

    CSS = """
	Screen {
		layout: vertical;
	}

	#buffer-view {
		height: 1fr;
		border: round $accent;
		padding: 1 1;
		content-align: left top;
		overflow: auto;
	}

	#status-line {
		height: 1;
		background: $surface-darken-1;
		padding: 0 1;
	}
	"""

    BINDINGS = [
        ("ctrl+c", "quit", "Quit"),
        ("ctrl+q", "quit", "Quit"),
    ]

    def __init__(
        self,
        *,
        text: str = "",
        settings: WatcherSettings | None = None,
    ) -> None:
        super().__init__()
        self._state = UIState()
        self._initial_text = text
        self.workspace = Workspace()
        self.watcher = HexPasteWatcher(settings or load_settings())
        self.editor: TextEditor | None = None
        self.adapter: TextualEditorAdapter | None = None
        self._buffer_widget: Static | None = None
        self._status_widget: Static | None = None

    def compose(self) -> ComposeResult:
        yield Header(show_clock=True)
        with Vertical(id="buffer-area"):
            self._buffer_widget = Static("", id="buffer-view", markup=False)
            yield self._buffer_widget
        self._status_widget = Static("", id="status-line", markup=False)
        yield self._status_widget
        yield Footer()

    def on_mount(self) -> None:
        self.watcher.activate(self.workspace)
        self.editor = self.workspace.open_editor(self._initial_text, name="scratch")
        hooks = TextualUIHooks(
            update_buffer=self._update_buffer,
            update_status=self._update_status,
            log=self.log.info,
        )
        self.adapter = TextualEditorAdapter(self.editor, hooks)
        state = "on" if self.watcher.active else "off"
        self._update_status(f"hex watcher {state}; paste a color like fff or c0ffee")

    def on_unmount(self) -> None:
        if self.adapter:
            self.adapter.dispose()
        self.watcher.deactivate()
        self.workspace.close_all()

    def on_paste(self, event: events.Paste) -> None:
        if self.adapter:
            self.adapter.handle_paste(event.text)
        event.stop()

    def on_key(self, event: events.Key) -> None:
        if not self.adapter:
            return
        normalized = self._normalize_key(event)
        if normalized is None:
            return
        key, text, modifiers = normalized
        if self.adapter.handle_textual_key(key, text=text, modifiers=modifiers):
            event.stop()

    def _update_buffer(self, mirror: BufferMirror) -> None:
        self._state.buffer_text = render_mirror(mirror)
        if self._buffer_widget:
            self._buffer_widget.update(self._state.buffer_text)

    def _update_status(self, status: str) -> None:
        self._state.status_text = status
        if self._status_widget:
            self._status_widget.update(status)

    @staticmethod
    def _normalize_key(
        event: events.Key,
    ) -> Optional[Tuple[str, Optional[str], Tuple[str, ...]]]:
        key = event.key
        if key in {"ctrl+c", "ctrl+q"}:
            return None
        *prefixes, base = key.split("+")
        modifiers = tuple(prefix.upper() for prefix in prefixes)
        if base in {"enter", "return"}:
            return ("ENTER", None, modifiers)
        if event.is_printable and event.character and not modifiers:
            return (event.character, event.character, modifiers)
        return (base if len(base) == 1 else base.upper(), None, modifiers)


def _parse_args(argv: Optional[Sequence[str]] = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(
        description="Run the hexhash Textual demo editor."
    )
    parser.add_argument(
        "--text",
        default=os.environ.get("HEXHASH_DEMO_TEXT", ""),
        help="Initial buffer contents (default: empty)",
    )
    parser.add_argument(
        "--no-watcher",
        action="store_true",
        help="Start with the hex paste watcher disabled",
    )
    return parser.parse_args(argv)


def main(argv: Optional[Sequence[str]] = None) -> None:
    args = _parse_args(argv)
    settings = load_settings()
    if args.no_watcher:
        settings = WatcherSettings(enabled=False, check_prefix=settings.check_prefix)
    app = HexHashApp(text=args.text.replace("\\n", "\n"), settings=settings)
    app.run()


if __name__ == "__main__":  # pragma: no cover - manual demo
    main()
