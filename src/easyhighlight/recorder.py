"""Per-file store of highlight records.

The recorder is a plain state container: a mapping from file path to the
highlights of that file, keyed by range key. It never renders, never calls
the adjustment algorithms, and never raises for a missing file or key.
"""

from __future__ import annotations

import logging
from types import MappingProxyType
from typing import TYPE_CHECKING

from easyhighlight.models import Highlight

if TYPE_CHECKING:
    from collections.abc import Mapping

    from easyhighlight.models import FileHighlights, Range, StyleHandle

logger = logging.getLogger(__name__)


class Recorder:
    """Holds the highlights of every tracked file.

    A file is tracked from ``set_file`` until ``remove_file``. Highlights can
    only be added to tracked files, so edits arriving for a file that was
    closed are dropped instead of resurrecting its state.
    """

    def __init__(self, files: Mapping[str, FileHighlights] | None = None) -> None:
        """Initialize the recorder.

        Args:
            files: Optional initial state, copied per file.
        """
        self._files: dict[str, FileHighlights] = {}
        for path, highlights in (files or {}).items():
            self.set_file(path, highlights)

    @property
    def files(self) -> Mapping[str, FileHighlights]:
        """Read-only view of the tracked files."""
        return MappingProxyType(self._files)

    def has_file(self, path: str) -> bool:
        return path in self._files

    def set_file(
        self, path: str, initial: Mapping[str, Highlight] | None = None
    ) -> None:
        """Create or overwrite the highlight set for *path*."""
        self._files[path] = dict(initial or {})
        logger.debug("Tracking %s with %d highlight(s)", path, len(self._files[path]))

    def remove_file(self, path: str) -> None:
        """Forget *path* and all its highlights. No-op if untracked."""
        if self._files.pop(path, None) is not None:
            logger.debug("Stopped tracking %s", path)

    def clear_file(self, path: str) -> None:
        """Remove every highlight of *path* but keep it tracked."""
        highlights = self._files.get(path)
        if highlights is not None:
            highlights.clear()

    def get_file_ranges(self, path: str) -> FileHighlights:
        """Return the highlight set of *path*.

        An untracked path yields a fresh empty dict that is not stored.
        """
        return self._files.get(path, {})

    def has_file_range(self, path: str, key: str) -> bool:
        return key in self._files.get(path, {})

    def get_file_range(self, path: str, key: str) -> Highlight | None:
        return self._files.get(path, {}).get(key)

    def add_file_range(
        self,
        path: str,
        key: str,
        range: Range,
        style: StyleHandle,
        color: str,
    ) -> None:
        """Insert or overwrite the highlight at *key*.

        Does nothing when *path* is not tracked.
        """
        highlights = self._files.get(path)
        if highlights is None:
            logger.debug("Dropped highlight %s for untracked file %s", key, path)
            return
        highlights[key] = Highlight(key=key, range=range, color=color, style=style)

    def replace_range(self, path: str, key: str, range: Range) -> bool:
        """Update the range of an existing highlight in place.

        Returns:
            True if the highlight existed, False otherwise.
        """
        highlight = self.get_file_range(path, key)
        if highlight is None:
            return False
        highlight.range = range
        return True

    def remove_file_range(self, path: str, key: str) -> None:
        """Remove the highlight at *key*. No-op if file or key is absent."""
        self._files.get(path, {}).pop(key, None)
