"""Editor session façade pairing one document with its history."""

from __future__ import annotations

from contextlib import AbstractContextManager
from typing import Any, ContextManager, Mapping, Optional, Tuple

from vox_editor.history import Diff, DiffKind, History, HistoryView, Value
from vox_editor.project import Document, Line, ensure_consistent
from vox_editor.runtime import telemetry


class EditorSession:
    """One open project (tab): a document and the history that edits it."""

    def __init__(
        self,
        document: Optional[Document] = None,
        *,
        name: str = "untitled",
        history: Optional[History] = None,
    ) -> None:
        self.name = name
        self.document = ensure_consistent(
            document if document is not None else Document()
        )
        self.history = history or History()

    @classmethod
    def from_project(
        cls, data: Mapping[str, Any], *, name: str = "untitled"
    ) -> "EditorSession":
        session = cls(Document.from_project(data), name=name)
        session.history.mark_saved()
        return session

    def apply(self, kind: DiffKind | str, target_id: str, value: Value) -> Diff:
        return self.history.apply(kind, target_id, value, self.document)

    def commit(self) -> Tuple[Diff, ...]:
        return self.history.commit()

    def undo(self) -> Optional[Diff]:
        return self.history.undo(self.document)

    def redo(self) -> Optional[Diff]:
        return self.history.redo(self.document)

    def history_view(self) -> HistoryView:
        return self.history.view()

    def gesture(self, label: str) -> "Gesture":
        return Gesture(self, label)

    def add_line(
        self, line: Line, *, line_id: str | None = None, index: int | None = None
    ) -> str:
        return self.document.add_line(line, line_id=line_id, index=index)

    def remove_line(self, line_id: str) -> Line:
        return self.document.remove_line(line_id)

    def mark_saved(self) -> None:
        self.history.mark_saved()

    @property
    def is_dirty(self) -> bool:
        return self.history.is_dirty

    def to_project(self) -> dict[str, Any]:
        return self.document.snapshot().to_project()


class Gesture(AbstractContextManager["Gesture"]):
    """Groups the edits of one continuous gesture into a single undo step.

    The pending buffer is committed on exit, also when the block raises,
    so the document never holds edits that history does not know about.
    """

    def __init__(self, session: EditorSession, label: str) -> None:
        self.session = session
        self.label = label
        self.committed: Tuple[Diff, ...] = ()
        self._span_cm: Optional[ContextManager[telemetry.SpanHandle]] = None

    def __enter__(self) -> "Gesture":
        self._span_cm = telemetry.span(
            name=f"gesture::{self.label}",
            component=True,
            metadata={"session": self.session.name},
        )
        self._span_cm.__enter__()
        return self

    def apply(self, kind: DiffKind | str, target_id: str, value: Value) -> Diff:
        return self.session.apply(kind, target_id, value)

    def __exit__(self, exc_type, exc, tb) -> bool:
        try:
            self.committed = self.session.commit()
        finally:
            if self._span_cm is not None:
                self._span_cm.__exit__(exc_type, exc, tb)
        return False


__all__ = ["EditorSession", "Gesture"]
