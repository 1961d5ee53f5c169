"""Textual host adapter; ``app`` additionally needs the ``textual`` extra."""

from .controller import TextualEditorAdapter, TextualUIHooks

__all__ = ["TextualEditorAdapter", "TextualUIHooks"]
