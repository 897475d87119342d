"""Host adapters translating UI events into editor session calls."""

from .controller import EditorController, EditorUIHooks

__all__ = ["EditorController", "EditorUIHooks"]
