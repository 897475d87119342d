"""Two-stack undo/redo history with gesture squashing."""

from __future__ import annotations

from typing import List, Optional, Tuple

from vox_editor.project import Document
from vox_editor.runtime import telemetry

from .diff import Diff, DiffKind, Value
from .fields import coerce_value, read_field, write_field
from .view import HistoryView

LOGGER_NAME = "vox_editor.history"


class History:
    """Linear history for one open document.

    Edits land in a pending buffer via ``apply`` and become a single undo
    step on ``commit``. Undo and redo only move entries between the two
    stacks; ``apply`` is the only call that discards redo entries.
    """

    def __init__(self, *, logger_name: str | None = LOGGER_NAME) -> None:
        self._undo: List[Diff] = []
        self._redo: List[Diff] = []
        self._pending: List[Diff] = []
        self._saved_top: Optional[Diff] = None
        self._logger_name = logger_name

    @property
    def undo_stack(self) -> Tuple[Diff, ...]:
        return tuple(self._undo)

    @property
    def redo_stack(self) -> Tuple[Diff, ...]:
        return tuple(self._redo)

    @property
    def pending(self) -> Tuple[Diff, ...]:
        return tuple(self._pending)

    @property
    def depth(self) -> int:
        """Number of undone steps between the document and the latest edit."""

        return len(self._redo)

    def can_undo(self) -> bool:
        return bool(self._undo)

    def can_redo(self) -> bool:
        return bool(self._redo)

    def apply(
        self, kind: DiffKind | str, target_id: str, after: Value, document: Document
    ) -> Diff:
        return self.apply_diff(Diff.template(kind, target_id, after), document)

    def apply_diff(self, template: Diff, document: Document) -> Diff:
        """Fill in ``before`` from ``document``, write ``after``, buffer it."""

        template = template.with_after(coerce_value(template.kind, template.after))
        before = read_field(document, template.kind, template.target_id)
        if before is None:
            diff = template
            self._event(
                "history.missing_target",
                kind=template.kind.value,
                target=template.target_id,
            )
        else:
            diff = template.with_before(before)
            write_field(document, diff.kind, diff.target_id, diff.after)

        self._redo.clear()
        self._pending.append(diff)
        return diff

    def commit(self) -> Tuple[Diff, ...]:
        """Fold the pending buffer onto the undo stack.

        Returns the entries pushed: one squashed Diff when the first and
        last buffered edits share kind and target, otherwise every buffered
        Diff in order.
        """

        if not self._pending:
            self._event("history.commit_empty")
            return ()

        with telemetry.span(
            "history::commit",
            logger_name=self._logger_name,
            component="history",
            metadata={"pending": len(self._pending)},
        ) as handle:
            first, last = self._pending[0], self._pending[-1]
            if first.squashes_with(last):
                pushed: Tuple[Diff, ...] = (first.squash(last),)
            else:
                pushed = tuple(self._pending)
                handle.add_metadata("squashed", False)
                telemetry.record_event(
                    "history.squash_rejected",
                    level="warning",
                    data={
                        "first": f"{first.kind.value}@{first.target_id}",
                        "last": f"{last.kind.value}@{last.target_id}",
                        "count": len(pushed),
                    },
                    logger_name=self._logger_name,
                )
            self._pending.clear()
            self._undo.extend(pushed)
            return pushed

    def undo(self, document: Document) -> Optional[Diff]:
        if not self._undo:
            return None
        diff = self._undo.pop()
        self._redo.append(diff)
        applied = write_field(document, diff.kind, diff.target_id, diff.before)
        self._event(
            "history.undo", kind=diff.kind.value, target=diff.target_id, applied=applied
        )
        return diff

    def redo(self, document: Document) -> Optional[Diff]:
        if not self._redo:
            return None
        diff = self._redo.pop()
        self._undo.append(diff)
        applied = write_field(document, diff.kind, diff.target_id, diff.after)
        self._event(
            "history.redo", kind=diff.kind.value, target=diff.target_id, applied=applied
        )
        return diff

    def view(self) -> HistoryView:
        return HistoryView.from_stacks(self._undo, self._redo)

    def clear(self) -> None:
        self._undo.clear()
        self._redo.clear()
        self._pending.clear()
        self._saved_top = None

    def mark_saved(self) -> None:
        self._saved_top = self._undo[-1] if self._undo else None

    @property
    def is_dirty(self) -> bool:
        if self._pending:
            return True
        top = self._undo[-1] if self._undo else None
        return top is not self._saved_top

    def _event(self, name: str, **data: object) -> None:
        telemetry.record_event(
            name, level="debug", data=dict(data), logger_name=self._logger_name
        )


__all__ = ["History"]
