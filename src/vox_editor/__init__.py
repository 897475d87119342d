"""Undo/redo-aware editing core for text-to-speech projects."""

__all__ = [
    "adapters",
    "history",
    "project",
    "runtime",
    "session",
    "workspace",
]

__version__ = "0.1.0"
