"""Project document model: lines, synthesis parameters, validation."""

from .document import Document, Line, ProjectFormatError
from .parameters import (
    PARAMETER_RANGES,
    QUERY_KEYS,
    ParameterBundle,
    ParameterRange,
    clamp_parameter,
)
from .validation import ensure_consistent

__all__ = [
    "Document",
    "Line",
    "ParameterBundle",
    "ParameterRange",
    "PARAMETER_RANGES",
    "QUERY_KEYS",
    "ProjectFormatError",
    "clamp_parameter",
    "ensure_consistent",
]
