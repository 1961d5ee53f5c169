"""Hex paste watcher and the hex literal predicate it relies on."""

from .hex import HEX_LENGTHS, HEX_PATTERN, is_hex
from .watcher import PREFIX, HexPasteWatcher

__all__ = ["HEX_LENGTHS", "HEX_PATTERN", "HexPasteWatcher", "PREFIX", "is_hex"]
