"""Ordered delivery of document change events to the engine.

Shift arithmetic is only correct against the document state immediately
before each event, so events for one file must be applied one at a time
in the order the editor produced them. ``ChangeQueue`` buffers events per
file for editors that batch notifications; ``pump_changes`` is the
single-consumer loop for integrations that deliver events through an
``asyncio.Queue``.
"""

from __future__ import annotations

import asyncio
import logging
from collections import deque
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from easyhighlight.engine import HighlightEngine
    from easyhighlight.models import ChangeEvent

logger = logging.getLogger(__name__)


class ChangeQueue:
    """Per-file FIFO buffers of change events.

    Attributes:
        engine: Engine that applies drained events.
    """

    def __init__(self, engine: HighlightEngine) -> None:
        self.engine = engine
        self._queues: dict[str, deque[ChangeEvent]] = {}

    def submit(self, path: str, change: ChangeEvent) -> None:
        """Queue *change* behind any pending events for *path*."""
        self._queues.setdefault(path, deque()).append(change)

    def pending(self, path: str) -> int:
        """Number of events waiting for *path*."""
        return len(self._queues.get(path, ()))

    def drain(self, path: str) -> int:
        """Apply the pending events for *path* in submission order.

        If applying an event raises, that event is consumed and the error
        propagates; the events behind it stay queued for the next drain.

        Returns:
            Number of events applied.
        """
        queue = self._queues.get(path)
        if not queue:
            return 0
        applied = 0
        try:
            while queue:
                self.engine.on_text_changed(path, queue.popleft())
                applied += 1
        finally:
            if not queue:
                self._queues.pop(path, None)
        return applied

    def drain_all(self) -> int:
        """Drain every file's queue. Files are independent of each other."""
        return sum(self.drain(path) for path in list(self._queues))

    def discard(self, path: str) -> int:
        """Drop the pending events for *path*, e.g. when it is closed.

        Returns:
            Number of events dropped.
        """
        queue = self._queues.pop(path, None)
        dropped = len(queue) if queue else 0
        if dropped:
            logger.debug("Discarded %d pending change(s) for %s", dropped, path)
        return dropped


async def pump_changes(
    engine: HighlightEngine,
    queue: asyncio.Queue[tuple[str, ChangeEvent] | None],
) -> int:
    """Apply ``(path, change)`` items from *queue* until a ``None`` arrives.

    Being the only consumer of *queue*, the pump preserves the producer's
    ordering for every file. An event that fails to apply is logged and
    skipped; the pump keeps consuming so that ``queue.join()`` returns.

    Returns:
        Number of events applied.
    """
    applied = 0
    while True:
        item = await queue.get()
        try:
            if item is None:
                logger.debug("Change pump stopped after %d event(s)", applied)
                return applied
            path, change = item
            try:
                engine.on_text_changed(path, change)
            except Exception:
                logger.exception("Failed to apply change to %s", path)
                continue
            applied += 1
        finally:
            queue.task_done()
