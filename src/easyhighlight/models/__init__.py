"""Data models for positions, ranges, change events and highlights."""

from easyhighlight.models.geometry import (
    ChangeEvent,
    InvalidChangeError,
    InvalidRangeError,
    Position,
    Range,
)
from easyhighlight.models.highlight import FileHighlights, Highlight, StyleHandle

__all__ = [
    "ChangeEvent",
    "FileHighlights",
    "Highlight",
    "InvalidChangeError",
    "InvalidRangeError",
    "Position",
    "Range",
    "StyleHandle",
]
