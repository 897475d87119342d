"""Kind-to-field dispatch used by apply, undo and redo alike."""

from __future__ import annotations

from dataclasses import dataclass
from types import MappingProxyType
from typing import Callable, Mapping, Optional

from vox_editor.project import Document, Line

from .diff import DiffKind, Value


@dataclass(frozen=True, slots=True)
class FieldAccessor:
    """Reads and writes one field of a line; ``owner`` picks the object."""

    attribute: str
    owner: Callable[[Line], object | None]
    coerce: Callable[[Value], Value]

    def read(self, line: Line) -> Optional[Value]:
        target = self.owner(line)
        if target is None:
            return None
        return getattr(target, self.attribute)

    def write(self, line: Line, value: Value) -> bool:
        target = self.owner(line)
        if target is None:
            return False
        setattr(target, self.attribute, self.coerce(value))
        return True


def _line(line: Line) -> Line:
    return line


def _bundle(line: Line) -> object | None:
    return line.parameters


def _parameter(name: str) -> FieldAccessor:
    return FieldAccessor(attribute=name, owner=_bundle, coerce=float)


FIELD_ACCESSORS: Mapping[DiffKind, FieldAccessor] = MappingProxyType(
    {
        DiffKind.TEXT: FieldAccessor(attribute="text", owner=_line, coerce=str),
        DiffKind.VOICE_STYLE: FieldAccessor(
            attribute="voice_style_id", owner=_line, coerce=int
        ),
        DiffKind.PITCH: _parameter("pitch"),
        DiffKind.SPEED: _parameter("speed"),
        DiffKind.INTONATION: _parameter("intonation"),
        DiffKind.VOLUME: _parameter("volume"),
        DiffKind.PRE_SILENCE: _parameter("pre_silence"),
        DiffKind.POST_SILENCE: _parameter("post_silence"),
    }
)


def coerce_value(kind: DiffKind, value: Value) -> Value:
    """Normalise ``value`` to the type stored in the field for ``kind``."""

    return FIELD_ACCESSORS[kind].coerce(value)


def read_field(document: Document, kind: DiffKind, target_id: str) -> Optional[Value]:
    """Current value of the field, or ``None`` when it cannot be reached."""

    line = document.get_line(target_id)
    if line is None:
        return None
    return FIELD_ACCESSORS[kind].read(line)


def write_field(
    document: Document, kind: DiffKind, target_id: str, value: Optional[Value]
) -> bool:
    """Write ``value`` into the field; returns ``False`` when absorbed.

    A missing line, a line without parameters, or a placeholder ``None``
    value all leave the document untouched.
    """

    if value is None:
        return False
    line = document.get_line(target_id)
    if line is None:
        return False
    return FIELD_ACCESSORS[kind].write(line, value)


__all__ = [
    "FieldAccessor",
    "FIELD_ACCESSORS",
    "coerce_value",
    "read_field",
    "write_field",
]
