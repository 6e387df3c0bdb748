"""Carve an explicit span out of a highlight.

Used when the user clears highlighting over a selection. The result is the
part of the highlight left over: nothing, one trimmed range, or two
fragments around a hole.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import TYPE_CHECKING

from easyhighlight.models import Range

if TYPE_CHECKING:
    from easyhighlight.models import Position


@dataclass(frozen=True)
class SubtractResult:
    """What remains of a highlight after subtracting a span.

    Attributes:
        first: The remaining range, or the fragment before the span.
        second: The fragment after the span when the span split the range.
    """

    first: Range
    second: Range | None = None

    @property
    def is_split(self) -> bool:
        return self.second is not None


def overlaps(span: Range, target: Range) -> bool:
    """Check whether removing *span* would change *target*."""
    return target.overlaps(span)


def subtract_range(span: Range, target: Range) -> SubtractResult | None:
    """Remove *span* from *target*.

    Args:
        span: The span to clear, with ``start <= end``.
        target: The highlight's current range.

    Returns:
        ``None`` when *span* covers all of *target*, otherwise the remaining
        range(s). A *span* that does not cut into *target* returns *target*
        unchanged.
    """
    s: Position = span.start
    e: Position = span.end
    start, end = target.start, target.end

    if e <= start or s >= end:
        return SubtractResult(target)
    if s <= start and e >= end:
        return None
    if s <= start:
        # start < e < end
        return SubtractResult(Range(e, end))
    if e >= end:
        # start < s < end
        return SubtractResult(Range(start, s))
    return SubtractResult(Range(start, s), Range(e, end))
