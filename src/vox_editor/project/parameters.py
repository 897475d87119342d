"""Synthesis parameter bundle and the editor's slider ranges."""

from __future__ import annotations

from dataclasses import dataclass, field
from types import MappingProxyType
from typing import Any, Dict, Mapping

# project-file key for each editable bundle field
QUERY_KEYS: Mapping[str, str] = MappingProxyType(
    {
        "pitch": "pitchScale",
        "speed": "speedScale",
        "intonation": "intonationScale",
        "volume": "volumeScale",
        "pre_silence": "prePhonemeLength",
        "post_silence": "postPhonemeLength",
    }
)


@dataclass(slots=True)
class ParameterBundle:
    """Continuous synthesis parameters attached to one line.

    ``extras`` keeps every query field the editor does not touch (accent
    phrases, sampling rate, kana, ...) so it survives a load/save cycle.
    """

    pitch: float = 0.0
    speed: float = 1.0
    intonation: float = 1.0
    volume: float = 1.0
    pre_silence: float = 0.1
    post_silence: float = 0.1
    extras: Dict[str, Any] = field(default_factory=dict)

    @classmethod
    def from_query(cls, query: Mapping[str, Any]) -> "ParameterBundle":
        values = {
            name: float(query[key]) for name, key in QUERY_KEYS.items() if key in query
        }
        known = set(QUERY_KEYS.values())
        extras = {key: value for key, value in query.items() if key not in known}
        return cls(**values, extras=extras)

    def to_query(self) -> Dict[str, Any]:
        query: Dict[str, Any] = dict(self.extras)
        for name, key in QUERY_KEYS.items():
            query[key] = getattr(self, name)
        return query


@dataclass(frozen=True, slots=True)
class ParameterRange:
    minimum: float
    maximum: float
    step: float = 0.001

    def __post_init__(self) -> None:
        if self.minimum > self.maximum:
            raise ValueError("range minimum must not exceed maximum")

    def clamp(self, value: float) -> float:
        return max(self.minimum, min(self.maximum, float(value)))

    def __contains__(self, value: object) -> bool:
        if not isinstance(value, (int, float)):
            return False
        return self.minimum <= value <= self.maximum


PARAMETER_RANGES: Mapping[str, ParameterRange] = MappingProxyType(
    {
        "speed": ParameterRange(0.50, 2.00),
        "pitch": ParameterRange(-0.15, 0.15),
        "intonation": ParameterRange(0.00, 2.00),
        "volume": ParameterRange(0.00, 2.00),
        "pre_silence": ParameterRange(0.00, 1.50),
        "post_silence": ParameterRange(0.00, 1.50),
    }
)


def clamp_parameter(
    name: str,
    value: float,
    *,
    ranges: Mapping[str, ParameterRange] = PARAMETER_RANGES,
) -> float:
    """Clamp ``value`` into the slider range registered for ``name``."""

    try:
        bounds = ranges[name]
    except KeyError as exc:
        raise KeyError(f"No range registered for parameter '{name}'") from exc
    return bounds.clamp(value)


__all__ = [
    "ParameterBundle",
    "ParameterRange",
    "PARAMETER_RANGES",
    "QUERY_KEYS",
    "clamp_parameter",
]
