"""Range key derivation.

A key is a lookup handle for a highlight within one file, derived from the
four integers of its range. Keys are never parsed back into positions.

Two schemes exist:

- ``concat``: the four integers joined with no separator. This is the
  historical format (``(5,10)-(5,20)`` -> ``"510520"``) and it can collide,
  e.g. ``(1,23)-(45,6)`` and ``(12,3)-(45,6)`` both give ``"123456"``.
- ``delimited``: ``"5:10-5:20"``, which cannot collide.

Callers that need uniqueness among live highlights go through
``unique_key``.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Literal, TypeAlias

if TYPE_CHECKING:
    from collections.abc import Container

    from easyhighlight.models import Position

KeyScheme: TypeAlias = Literal["concat", "delimited"]

# Separator for disambiguated keys; digits and ":" / "-" never produce it.
_SUFFIX_SEP = "~"


def generate_key(start: Position, end: Position, scheme: KeyScheme = "concat") -> str:
    """Derive the key for the range ``start``-``end``.

    Args:
        start: Range start.
        end: Range end.
        scheme: Key format, see module docstring.

    Returns:
        A deterministic string for the four coordinates.
    """
    if scheme == "concat":
        return f"{start.line}{start.character}{end.line}{end.character}"
    if scheme == "delimited":
        return f"{start.line}:{start.character}-{end.line}:{end.character}"
    msg = f"Unknown key scheme: {scheme!r}"
    raise ValueError(msg)


def unique_key(base: str, taken: Container[str]) -> str:
    """Return *base*, or the first ``base~N`` not in *taken*."""
    if base not in taken:
        return base
    n = 1
    while f"{base}{_SUFFIX_SEP}{n}" in taken:
        n += 1
    return f"{base}{_SUFFIX_SEP}{n}"
