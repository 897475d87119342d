"""Read-only projection of the history stacks for a history pane."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Optional, Sequence, Tuple

from .diff import Diff, DiffKind

LATEST_LABEL = "Latest"

_LABELS = {
    DiffKind.TEXT: "Text edit",
    DiffKind.VOICE_STYLE: "Voice change",
    DiffKind.PITCH: "Pitch change",
    DiffKind.SPEED: "Speed change",
    DiffKind.INTONATION: "Intonation change",
    DiffKind.VOLUME: "Volume change",
    DiffKind.PRE_SILENCE: "Leading silence change",
    DiffKind.POST_SILENCE: "Trailing silence change",
}


def _format_value(kind: DiffKind, value: object) -> str:
    if value is None:
        return "?"
    if kind.is_parameter:
        return f"{float(value):.2f}"  # type: ignore[arg-type]
    return str(value)


def describe(diff: Diff) -> str:
    """Human label, e.g. ``"Pitch change 0.00 -> 0.10"``."""

    before = _format_value(diff.kind, diff.before)
    after = _format_value(diff.kind, diff.after)
    return f"{_LABELS[diff.kind]} {before} -> {after}"


@dataclass(frozen=True, slots=True)
class HistoryRow:
    index: int
    label: str
    current: bool
    applied: bool
    diff: Optional[Diff] = None


@dataclass(frozen=True, slots=True)
class HistoryView:
    """Display-ordered stacks, most recent first.

    ``redo_entries`` sit above the document's position and
    ``undo_entries`` below it. Row 0 of ``rows()`` is the latest-state
    marker; the row at ``current_marker_position`` is the document's
    current position.
    """

    redo_entries: Tuple[Diff, ...]
    undo_entries: Tuple[Diff, ...]
    current_marker_position: int

    @classmethod
    def from_stacks(
        cls, undo_stack: Sequence[Diff], redo_stack: Sequence[Diff]
    ) -> "HistoryView":
        return cls(
            redo_entries=tuple(redo_stack),
            undo_entries=tuple(reversed(undo_stack)),
            current_marker_position=len(redo_stack),
        )

    def rows(self) -> list[HistoryRow]:
        position = self.current_marker_position
        rows = [
            HistoryRow(
                index=0, label=LATEST_LABEL, current=position == 0, applied=True
            )
        ]
        entries = [(diff, False) for diff in self.redo_entries]
        entries.extend((diff, True) for diff in self.undo_entries)
        for index, (diff, applied) in enumerate(entries, start=1):
            rows.append(
                HistoryRow(
                    index=index,
                    label=describe(diff),
                    current=index == position,
                    applied=applied,
                    diff=diff,
                )
            )
        return rows

    def lines(self) -> list[str]:
        return [f"{'*' if row.current else ' '} {row.label}" for row in self.rows()]


__all__ = ["HistoryRow", "HistoryView", "describe", "LATEST_LABEL"]
