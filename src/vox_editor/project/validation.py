"""Consistency checks for project documents."""

from __future__ import annotations

from .document import Document, ProjectFormatError


def ensure_consistent(document: Document) -> Document:
    seen: set[str] = set()
    for line_id in document.line_order:
        if line_id in seen:
            raise ProjectFormatError("Duplicate line id in order", line_id=line_id)
        seen.add(line_id)
        if document.get_line(line_id) is None:
            raise ProjectFormatError("Ordered line has no record", line_id=line_id)
    return document
