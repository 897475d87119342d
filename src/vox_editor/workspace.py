"""Set of open projects, one editor session per tab."""

from __future__ import annotations

from typing import Iterator, List, Optional

from vox_editor.project import Document
from vox_editor.runtime import telemetry

from .session import EditorSession


class Workspace:
    """Owns the open sessions and tracks which tab is active."""

    def __init__(self) -> None:
        self._sessions: List[EditorSession] = []
        self._active: Optional[int] = None

    def __len__(self) -> int:
        return len(self._sessions)

    def __iter__(self) -> Iterator[EditorSession]:
        return iter(self._sessions)

    @property
    def sessions(self) -> tuple[EditorSession, ...]:
        return tuple(self._sessions)

    @property
    def active_index(self) -> Optional[int]:
        return self._active

    @property
    def active(self) -> Optional[EditorSession]:
        if self._active is None:
            return None
        return self._sessions[self._active]

    def open(self, document: Optional[Document] = None, *, name: str = "untitled") -> int:
        return self.attach(EditorSession(document, name=name))

    def attach(self, session: EditorSession) -> int:
        self._sessions.append(session)
        index = len(self._sessions) - 1
        self._active = index
        telemetry.record_event(
            "workspace.open", data={"tab": index, "session": session.name}
        )
        return index

    def activate(self, index: int) -> EditorSession:
        session = self._get(index)
        self._active = index
        telemetry.record_event("workspace.activate", data={"tab": index})
        return session

    def close(self, index: int) -> EditorSession:
        session = self._get(index)
        del self._sessions[index]
        if not self._sessions:
            self._active = None
        elif self._active is not None and self._active >= index:
            self._active = max(0, self._active - 1)
        telemetry.record_event(
            "workspace.close",
            data={"tab": index, "session": session.name, "dirty": session.is_dirty},
        )
        return session

    def _get(self, index: int) -> EditorSession:
        if not 0 <= index < len(self._sessions):
            raise IndexError(f"No open tab at index {index}")
        return self._sessions[index]


__all__ = ["Workspace"]
