"""Position arithmetic that keeps highlights valid as documents change."""

from easyhighlight.adjust.shift import shift_highlights, shift_position, shift_range
from easyhighlight.adjust.subtract import SubtractResult, overlaps, subtract_range

__all__ = [
    "SubtractResult",
    "overlaps",
    "shift_highlights",
    "shift_position",
    "shift_range",
    "subtract_range",
]
