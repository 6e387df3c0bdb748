"""Highlight records held by the recorder.

These are plain dataclasses for in-memory use; nothing here is persisted.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import TypeAlias

from easyhighlight.models.geometry import Range

# Rendering resource owned by the editor (a decoration type, a text format,
# an id). Stored and returned, never inspected.
StyleHandle: TypeAlias = object


@dataclass
class Highlight:
    """A highlighted span in one file.

    Attributes:
        key: Lookup handle, unique within the file.
        range: Current span; shift and subtract update it in place.
        color: Display color, e.g. ``"#fdff322f"``.
        style: Opaque rendering handle supplied by the editor.
    """

    key: str
    range: Range
    color: str
    style: StyleHandle = None


FileHighlights: TypeAlias = dict[str, Highlight]
