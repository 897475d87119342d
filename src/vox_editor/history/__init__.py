"""Edit history: diffs, field dispatch, the undo/redo engine and its view."""

from .diff import Diff, DiffKind, Value
from .engine import History
from .fields import FIELD_ACCESSORS, FieldAccessor, read_field, write_field
from .view import HistoryRow, HistoryView, describe

__all__ = [
    "Diff",
    "DiffKind",
    "Value",
    "History",
    "FieldAccessor",
    "FIELD_ACCESSORS",
    "read_field",
    "write_field",
    "HistoryRow",
    "HistoryView",
    "describe",
]
