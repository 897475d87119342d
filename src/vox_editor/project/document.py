"""In-memory project document: ordered lines keyed by opaque ids."""

from __future__ import annotations

import copy
import uuid
from dataclasses import dataclass, field
from typing import Any, Dict, Iterator, List, Mapping, Optional, Tuple

from .parameters import ParameterBundle

DEFAULT_APP_VERSION = "0.14.0"


class ProjectFormatError(ValueError):
    """Raised when a project mapping or document breaks the line invariants."""

    def __init__(self, message: str, *, line_id: str | None = None) -> None:
        super().__init__(message)
        self.line_id = line_id


@dataclass(slots=True)
class Line:
    """One addressable unit of text plus its voice and parameters."""

    text: str = ""
    voice_style_id: int = 0
    parameters: Optional[ParameterBundle] = None
    preset_key: Optional[str] = None


@dataclass(slots=True)
class Document:
    """Project state mutated by the history engine and by structural edits.

    ``line_order`` is playback/display order. Field edits go through
    ``History.apply``; adding, removing and reordering lines happen here
    directly and are not recorded as history.
    """

    line_order: List[str] = field(default_factory=list)
    lines: Dict[str, Line] = field(default_factory=dict)
    app_version: str = DEFAULT_APP_VERSION

    def get_line(self, line_id: str) -> Optional[Line]:
        return self.lines.get(line_id)

    def __contains__(self, line_id: object) -> bool:
        return line_id in self.lines

    def __len__(self) -> int:
        return len(self.line_order)

    def iter_lines(self) -> Iterator[Tuple[str, Line]]:
        for line_id in self.line_order:
            yield line_id, self.lines[line_id]

    def add_line(
        self,
        line: Line,
        *,
        line_id: Optional[str] = None,
        index: Optional[int] = None,
    ) -> str:
        """Register ``line`` and return its id (a fresh uuid4 when omitted)."""

        key = line_id or str(uuid.uuid4())
        if key in self.lines:
            raise ValueError(f"Line '{key}' already exists")
        self.lines[key] = line
        if index is None:
            self.line_order.append(key)
        else:
            self.line_order.insert(index, key)
        return key

    def remove_line(self, line_id: str) -> Line:
        try:
            line = self.lines.pop(line_id)
        except KeyError as exc:
            raise KeyError(f"Line '{line_id}' is not in the document") from exc
        self.line_order.remove(line_id)
        return line

    def move_line(self, line_id: str, index: int) -> None:
        if line_id not in self.lines:
            raise KeyError(f"Line '{line_id}' is not in the document")
        self.line_order.remove(line_id)
        self.line_order.insert(index, line_id)

    def snapshot(self) -> "Document":
        """Deep copy suitable for handing to a background save."""

        return copy.deepcopy(self)

    @classmethod
    def from_project(cls, data: Mapping[str, Any]) -> "Document":
        try:
            keys = [str(key) for key in data["audioKeys"]]
            items = dict(data["audioItems"].items())
        except (KeyError, TypeError, AttributeError) as exc:
            raise ProjectFormatError(f"Missing project field: {exc}") from exc

        lines: Dict[str, Line] = {}
        for key, item in items.items():
            try:
                query = item.get("query")
                lines[str(key)] = Line(
                    text=str(item["text"]),
                    voice_style_id=int(item["styleId"]),
                    parameters=(
                        ParameterBundle.from_query(query) if query is not None else None
                    ),
                    preset_key=item.get("presetKey"),
                )
            except (KeyError, TypeError, ValueError, AttributeError) as exc:
                raise ProjectFormatError(
                    f"Malformed audio item: {exc}", line_id=str(key)
                ) from exc

        for key in keys:
            if key not in lines:
                raise ProjectFormatError("Ordered line has no record", line_id=key)

        return cls(
            line_order=keys,
            lines=lines,
            app_version=str(data.get("appVersion", DEFAULT_APP_VERSION)),
        )

    def to_project(self) -> Dict[str, Any]:
        items: Dict[str, Any] = {}
        for key, line in self.lines.items():
            item: Dict[str, Any] = {
                "text": line.text,
                "styleId": line.voice_style_id,
                "query": line.parameters.to_query() if line.parameters else None,
            }
            if line.preset_key is not None:
                item["presetKey"] = line.preset_key
            items[key] = item
        return {
            "appVersion": self.app_version,
            "audioKeys": list(self.line_order),
            "audioItems": items,
        }
