"""Keep highlight ranges aligned with incremental document edits.

A change event replaces the old span ``[s, e)`` with some text. Each
endpoint ``P`` of a highlight is translated independently:

- ``P <= s``: unchanged, the edit is at or after it. This rule is checked
  first, so an end endpoint sitting exactly at ``s`` stays put: typing
  right at a highlight's end does not extend it. Typing at its start
  does grow it, since only the end moves.
- ``P >= e``: moved by the edit's line delta, and by its character delta
  when ``P`` sits on the same line as ``e``.
- ``s < P < e``: a start endpoint moves to ``s``; an end endpoint moves to
  where ``e`` lands after the edit.

So typing inside a highlight grows it, deleting inside it shrinks it, and a
highlight whose whole span is replaced ends up covering the replacement
text (zero width when the replacement is empty).

Events must be applied in the order the editor produced them; each one is
only meaningful against the document state right before it.
"""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING

from easyhighlight.models import Position, Range

if TYPE_CHECKING:
    from collections.abc import Iterable

    from easyhighlight.models import ChangeEvent, Highlight

logger = logging.getLogger(__name__)


def _translate(position: Position, change: ChangeEvent) -> Position:
    """Move a position at or after the edit's old end."""
    character = position.character
    if position.line == change.end.line:
        character += change.char_delta
    return Position(position.line + change.line_delta, character)


def shift_position(
    position: Position, change: ChangeEvent, *, is_end: bool
) -> Position:
    """Return where *position* lands after *change*.

    Args:
        position: Endpoint in the pre-edit document.
        change: The edit, with ``start <= end``.
        is_end: Whether *position* is the end endpoint of its range.
    """
    if position <= change.start:
        return position
    if position >= change.end:
        return _translate(position, change)
    return change.inserted_end if is_end else change.start


def shift_range(range: Range, change: ChangeEvent) -> Range:
    """Return *range* as it stands after *change*."""
    start = shift_position(range.start, change, is_end=False)
    end = shift_position(range.end, change, is_end=True)
    return Range(start, end)


def shift_highlights(highlights: Iterable[Highlight], change: ChangeEvent) -> list[str]:
    """Update every highlight's range in place for *change*.

    No highlight is added or removed here.

    Returns:
        Keys of highlights that had a non-empty range before the edit and are
        zero width after it.
    """
    collapsed: list[str] = []
    moved = 0
    for highlight in highlights:
        before = highlight.range
        after = shift_range(before, change)
        if after == before:
            continue
        highlight.range = after
        moved += 1
        if after.is_empty and not before.is_empty:
            collapsed.append(highlight.key)
    if moved:
        logger.debug(
            "Edit %s-%s moved %d highlight(s), %d collapsed",
            change.start,
            change.end,
            moved,
            len(collapsed),
        )
    return collapsed
