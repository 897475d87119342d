"""Toolkit-neutral controller that routes widget events into a session."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Callable, Dict, Mapping, Optional

from vox_editor.history import Diff, DiffKind, HistoryView
from vox_editor.project import (
    PARAMETER_RANGES,
    Document,
    ParameterRange,
    clamp_parameter,
)
from vox_editor.session import EditorSession


def _noop(*_args, **_kwargs) -> None:  # pragma: no cover - default hook
    return None


@dataclass(slots=True)
class EditorUIHooks:
    """Callbacks invoked by the controller to refresh host widgets."""

    update_document: Callable[[Document], None]
    update_history: Callable[[HistoryView], None] = _noop
    update_status: Callable[[str], None] = _noop
    log: Callable[[str], None] = _noop


class EditorController:
    """Bridges slider, text-field, style-picker and toolbar events.

    Slider drags and keystrokes call ``change_parameter``/``edit_text``
    many times; the matching release or submit event calls ``release`` or
    ``submit`` to turn them into one undo step.
    """

    def __init__(
        self,
        session: EditorSession,
        hooks: EditorUIHooks,
        *,
        ranges: Optional[Mapping[str, ParameterRange]] = None,
    ) -> None:
        self.session = session
        self.hooks = hooks
        self.ranges: Mapping[str, ParameterRange] = dict(ranges or PARAMETER_RANGES)
        self._refresh()

    def change_parameter(
        self, kind: DiffKind | str, line_id: str, value: float
    ) -> Diff:
        kind = DiffKind(kind)
        if not kind.is_parameter:
            raise ValueError(f"'{kind.value}' is not a synthesis parameter")
        clamped = clamp_parameter(kind.value, value, ranges=self.ranges)
        diff = self.session.apply(kind, line_id, clamped)
        self._log_state("parameter ->", kind=kind.value, line=line_id, value=clamped)
        self._refresh()
        return diff

    def edit_text(self, line_id: str, text: str) -> Diff:
        diff = self.session.apply(DiffKind.TEXT, line_id, text)
        self._log_state("text ->", line=line_id)
        self._refresh()
        return diff

    def pick_style(self, line_id: str, style_id: int) -> Diff:
        # a dropdown pick is a complete gesture on its own; fold any
        # unfinished gesture first so the two stay separate undo steps
        if self.session.history.pending:
            self.session.commit()
        diff = self.session.apply(DiffKind.VOICE_STYLE, line_id, style_id)
        self.session.commit()
        self._log_state("style ->", line=line_id, style=style_id)
        self.hooks.update_status("voice_changed")
        self._refresh()
        return diff

    def release(self) -> tuple[Diff, ...]:
        committed = self.session.commit()
        self._log_state("commit <-", entries=len(committed))
        if committed:
            self.hooks.update_status("committed")
        self._refresh()
        return committed

    submit = release

    def undo(self) -> Optional[Diff]:
        diff = self.session.undo()
        self.hooks.update_status("undo" if diff else "nothing_to_undo")
        self._refresh()
        return diff

    def redo(self) -> Optional[Diff]:
        diff = self.session.redo()
        self.hooks.update_status("redo" if diff else "nothing_to_redo")
        self._refresh()
        return diff

    def _refresh(self) -> None:
        self.hooks.update_document(self.session.document)
        self.hooks.update_history(self.session.history_view())

    def _log_state(self, prefix: str, **fields: object) -> None:
        snapshot = self._state_metadata()
        snapshot.update({k: v for k, v in fields.items() if v is not None})
        parts = [prefix]
        for key, value in snapshot.items():
            parts.append(f"{key}={value!r}")
        self.hooks.log(" ".join(parts))

    def _state_metadata(self) -> Dict[str, object]:
        history = self.session.history
        return {
            "session": self.session.name,
            "undo": len(history.undo_stack),
            "redo": len(history.redo_stack),
            "pending": len(history.pending),
            "dirty": history.is_dirty,
        }


__all__ = ["EditorController", "EditorUIHooks"]
