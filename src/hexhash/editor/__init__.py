"""Editor façade and workspace hosting the watcher."""

from .text_editor import EditorDestroyedError, TextEditor
from .workspace import Workspace

__all__ = ["EditorDestroyedError", "TextEditor", "Workspace"]
