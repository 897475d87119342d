"""Immutable records describing one field change on one line."""

from __future__ import annotations

from dataclasses import dataclass, replace
from enum import Enum
from typing import Optional, Union

Value = Union[str, float, int]


class DiffKind(str, Enum):
    """Editable field a Diff targets."""

    TEXT = "text"
    PITCH = "pitch"
    SPEED = "speed"
    INTONATION = "intonation"
    VOLUME = "volume"
    PRE_SILENCE = "pre_silence"
    POST_SILENCE = "post_silence"
    VOICE_STYLE = "voice_style"

    @property
    def is_parameter(self) -> bool:
        return self not in (DiffKind.TEXT, DiffKind.VOICE_STYLE)


@dataclass(frozen=True, slots=True)
class Diff:
    """Before/after snapshot of one field on the line ``target_id``.

    ``before`` is ``None`` only while the Diff is a template waiting for
    ``History.apply`` to read the live value, or when the target could not
    be found at apply time.
    """

    kind: DiffKind
    target_id: str
    before: Optional[Value]
    after: Value

    def __post_init__(self) -> None:
        object.__setattr__(self, "kind", DiffKind(self.kind))

    @classmethod
    def template(cls, kind: DiffKind | str, target_id: str, after: Value) -> "Diff":
        return cls(kind=DiffKind(kind), target_id=target_id, before=None, after=after)

    def with_before(self, before: Optional[Value]) -> "Diff":
        return replace(self, before=before)

    def with_after(self, after: Value) -> "Diff":
        return replace(self, after=after)

    def squashes_with(self, other: "Diff") -> bool:
        return self.kind is other.kind and self.target_id == other.target_id

    def squash(self, last: "Diff") -> "Diff":
        """Collapse ``self``..``last`` into one start-to-end Diff."""

        if not self.squashes_with(last):
            raise ValueError(
                f"Cannot squash {self.kind.value}@{self.target_id} "
                f"with {last.kind.value}@{last.target_id}"
            )
        return Diff(
            kind=self.kind, target_id=self.target_id, before=self.before, after=last.after
        )


__all__ = ["Diff", "DiffKind", "Value"]
