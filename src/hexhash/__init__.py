"""Prefix pasted hex color literals with ``#`` in a multi-cursor text editor."""

__all__ = [
    "adapters",
    "buffer",
    "editor",
    "events",
    "runtime",
    "settings",
    "watcher",
]

__version__ = "0.1.0"
