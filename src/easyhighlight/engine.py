"""Highlight engine: the operations the editor integration calls.

Composes the recorder with the shift and subtract algorithms to answer two
questions: "the document changed, keep my highlights aligned" and "the user
asked to clear highlighting over this span". Everything else (commands,
menus, color prompts, drawing) belongs to the caller, which reads the
updated highlight set after each operation or listens through the render
callback.
"""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING

from easyhighlight.adjust import shift_highlights, subtract_range
from easyhighlight.config import HighlightConfig, get_settings
from easyhighlight.keys import generate_key, unique_key
from easyhighlight.recorder import Recorder

if TYPE_CHECKING:
    from collections.abc import Callable

    from easyhighlight.models import (
        ChangeEvent,
        Highlight,
        Position,
        Range,
        StyleHandle,
    )

logger = logging.getLogger(__name__)


class HighlightEngine:
    """Tracks highlights for open documents and keeps them anchored.

    Not thread-safe. Calls for one file must be serialized, and change
    events must arrive in the order the editor produced them (see
    ``easyhighlight.events``).

    Attributes:
        recorder: The highlight store this engine mutates.
        config: Engine behaviour (colors, key scheme, validation).
    """

    def __init__(
        self,
        recorder: Recorder | None = None,
        config: HighlightConfig | None = None,
    ) -> None:
        """Initialize the engine.

        Args:
            recorder: Store to use; a fresh empty one if omitted.
            config: Engine settings; read from ``get_settings()`` if omitted.
        """
        self.recorder = recorder if recorder is not None else Recorder()
        self.config = config if config is not None else get_settings().highlight
        self._render_callback: Callable[[str], None] | None = None

    def set_render_callback(self, callback: Callable[[str], None] | None) -> None:
        """Set the callback notified with a path whenever its highlights change."""
        self._render_callback = callback

    def _changed(self, path: str) -> None:
        if self._render_callback is not None:
            self._render_callback(path)

    # ------------------------------------------------------------------
    # Boundary validation
    # ------------------------------------------------------------------

    def _check_range(self, range: Range) -> Range:
        if not range.is_reversed:
            return range
        if self.config.strict:
            range.validate()
        logger.warning("Normalizing reversed range %s", range)
        return range.normalized()

    def _check_change(self, change: ChangeEvent) -> ChangeEvent:
        if not change.is_reversed:
            return change
        if self.config.strict:
            change.validate()
        logger.warning("Normalizing reversed change %s-%s", change.start, change.end)
        return change.normalized()

    def _new_key(self, path: str, range: Range) -> str:
        base = generate_key(range.start, range.end, self.config.key_scheme)
        return unique_key(base, self.recorder.get_file_ranges(path))

    # ------------------------------------------------------------------
    # File lifecycle
    # ------------------------------------------------------------------

    def track_file(self, path: str) -> None:
        """Start tracking *path* with no highlights. Keeps existing state."""
        if not self.recorder.has_file(path):
            self.recorder.set_file(path)

    def untrack_file(self, path: str) -> None:
        """Stop tracking *path*, dropping its highlights."""
        self.recorder.remove_file(path)

    def is_tracked(self, path: str) -> bool:
        return self.recorder.has_file(path)

    # ------------------------------------------------------------------
    # Queries
    # ------------------------------------------------------------------

    def highlights(self, path: str) -> list[Highlight]:
        """Return the highlights of *path* in document order."""
        return sorted(
            self.recorder.get_file_ranges(path).values(),
            key=lambda h: (h.range.start, h.range.end),
        )

    def ranges_by_color(self, path: str) -> dict[str, list[Range]]:
        """Group the ranges of *path* by color, for one decoration per color."""
        grouped: dict[str, list[Range]] = {}
        for highlight in self.highlights(path):
            grouped.setdefault(highlight.color, []).append(highlight.range)
        return grouped

    # ------------------------------------------------------------------
    # Commands
    # ------------------------------------------------------------------

    def add_highlight(
        self,
        path: str,
        range: Range,
        style: StyleHandle = None,
        color: str | None = None,
    ) -> str | None:
        """Highlight *range* in *path*.

        Highlighting a span that already carries a highlight with the exact
        same range replaces it (e.g. to change its color).

        Args:
            path: Tracked file path.
            range: Span to highlight.
            style: Opaque rendering handle from the editor.
            color: Display color; the configured default if omitted.

        Returns:
            The key of the stored highlight, or None if *path* is untracked.

        Raises:
            InvalidRangeError: If *range* is reversed and strict mode is on.
        """
        range = self._check_range(range)
        if not self.recorder.has_file(path):
            logger.debug("Ignoring highlight for untracked file %s", path)
            return None

        # Match by range, not key: keys go stale once a highlight is shifted.
        existing = next(
            (
                h
                for h in self.recorder.get_file_ranges(path).values()
                if h.range == range
            ),
            None,
        )
        key = existing.key if existing is not None else self._new_key(path, range)

        self.recorder.add_file_range(
            path, key, range, style, color or self.config.default_color
        )
        logger.debug("Added highlight %s at %s in %s", key, range, path)
        self._changed(path)
        return key

    def remove_highlight_at(self, path: str, position: Position) -> list[Highlight]:
        """Remove every highlight in *path* whose range contains *position*.

        Returns:
            The removed highlights, empty if none covered *position*.
        """
        removed = [
            h
            for h in self.recorder.get_file_ranges(path).values()
            if h.range.contains(position)
        ]
        for highlight in removed:
            self.recorder.remove_file_range(path, highlight.key)
        if removed:
            logger.debug(
                "Removed %d highlight(s) at %s in %s", len(removed), position, path
            )
            self._changed(path)
        return removed

    def remove_all_highlights(self, path: str) -> int:
        """Remove every highlight of *path*, keeping the file tracked.

        Returns:
            Number of highlights removed.
        """
        count = len(self.recorder.get_file_ranges(path))
        self.recorder.clear_file(path)
        if count:
            logger.debug("Removed all %d highlight(s) in %s", count, path)
            self._changed(path)
        return count

    def remove_highlight_over_span(self, path: str, span: Range) -> int:
        """Clear highlighting over *span*, trimming or splitting highlights.

        A highlight fully covered by *span* is removed. A trimmed one keeps
        its key. A split one keeps its key on the leading fragment; the
        trailing fragment is stored under a new key with the same color and
        style.

        Returns:
            Number of highlights that were removed, trimmed or split.

        Raises:
            InvalidRangeError: If *span* is reversed and strict mode is on.
        """
        span = self._check_range(span)
        highlights = self.recorder.get_file_ranges(path)
        affected = [h for h in highlights.values() if h.range.overlaps(span)]

        for highlight in affected:
            result = subtract_range(span, highlight.range)
            if result is None:
                self.recorder.remove_file_range(path, highlight.key)
                continue
            self.recorder.replace_range(path, highlight.key, result.first)
            if result.second is not None:
                key = self._new_key(path, result.second)
                self.recorder.add_file_range(
                    path, key, result.second, highlight.style, highlight.color
                )
                logger.debug("Split %s, new fragment %s", highlight.key, key)

        if affected:
            logger.debug(
                "Cleared %s in %s, %d highlight(s) affected", span, path, len(affected)
            )
            self._changed(path)
        return len(affected)

    def remove_highlight(self, path: str, selection: Range) -> int:
        """Remove highlighting for a user selection.

        An empty selection (a bare cursor) removes the highlights under the
        cursor; otherwise the selected span is cleared.

        Returns:
            Number of highlights affected.
        """
        selection = self._check_range(selection)
        if selection.is_empty:
            return len(self.remove_highlight_at(path, selection.start))
        return self.remove_highlight_over_span(path, selection)

    # ------------------------------------------------------------------
    # Document edits
    # ------------------------------------------------------------------

    def on_text_changed(self, path: str, change: ChangeEvent) -> list[str]:
        """Realign the highlights of *path* after *change*.

        Highlights whose text was entirely deleted are removed unless
        ``keep_collapsed`` is set.

        Returns:
            Keys of the highlights removed because they collapsed.

        Raises:
            InvalidChangeError: If *change* is reversed and strict mode is on.
        """
        change = self._check_change(change)
        highlights = self.recorder.get_file_ranges(path)
        if not highlights:
            return []

        before = {key: h.range for key, h in highlights.items()}
        collapsed = shift_highlights(highlights.values(), change)

        removed: list[str] = []
        if not self.config.keep_collapsed:
            for key in collapsed:
                self.recorder.remove_file_range(path, key)
            removed = collapsed
            if removed:
                logger.debug("Dropped collapsed highlight(s) %s in %s", removed, path)

        if removed or any(h.range != before[key] for key, h in highlights.items()):
            self._changed(path)
        return removed
