"""Tests for ordered change delivery."""

from __future__ import annotations

import asyncio
import logging

import pytest

from easyhighlight.config import HighlightConfig
from easyhighlight.engine import HighlightEngine
from easyhighlight.events import ChangeQueue, pump_changes
from easyhighlight.models import ChangeEvent, InvalidChangeError, Position, Range

FILE = "/test/file.ts"
OTHER = "/test/other.ts"


@pytest.fixture
def engine() -> HighlightEngine:
    eng = HighlightEngine(config=HighlightConfig())
    eng.track_file(FILE)
    eng.track_file(OTHER)
    return eng


def _ranges(engine: HighlightEngine, path: str = FILE) -> list[Range]:
    return [h.range for h in engine.highlights(path)]


class TestChangeQueue:
    """Per-file buffering."""

    def test_events_applied_in_submission_order(self, engine: HighlightEngine) -> None:
        """Queued events are applied first in, first out."""
        engine.add_highlight(FILE, Range.of(2, 0, 2, 5))
        queue = ChangeQueue(engine)
        # Type "ab" on line 0, then break line 0 after "a".
        queue.submit(FILE, ChangeEvent.insert(Position(0, 0), "ab"))
        queue.submit(FILE, ChangeEvent.insert(Position(0, 1), "\n"))
        assert queue.pending(FILE) == 2

        assert queue.drain(FILE) == 2
        assert queue.pending(FILE) == 0
        assert _ranges(engine) == [Range.of(3, 0, 3, 5)]

    def test_order_matters(self, engine: HighlightEngine) -> None:
        """Later events see positions produced by earlier ones."""
        engine.add_highlight(FILE, Range.of(0, 4, 0, 6))
        queue = ChangeQueue(engine)
        queue.submit(FILE, ChangeEvent.insert(Position(0, 2), "\n"))
        queue.submit(FILE, ChangeEvent.insert(Position(1, 0), "xyz"))
        queue.drain(FILE)
        assert _ranges(engine) == [Range.of(1, 5, 1, 7)]

    def test_drain_empty(self, engine: HighlightEngine) -> None:
        """Draining a file with nothing queued applies nothing."""
        assert ChangeQueue(engine).drain(FILE) == 0

    def test_drain_all_keeps_files_separate(self, engine: HighlightEngine) -> None:
        """drain_all applies each file's events to that file."""
        engine.add_highlight(FILE, Range.of(5, 0, 5, 5))
        engine.add_highlight(OTHER, Range.of(5, 0, 5, 5))
        queue = ChangeQueue(engine)
        queue.submit(FILE, ChangeEvent.insert(Position(0, 0), "\n"))
        queue.submit(OTHER, ChangeEvent.insert(Position(0, 0), "\n\n"))
        queue.submit(FILE, ChangeEvent.insert(Position(0, 0), "\n"))

        assert queue.drain_all() == 3
        assert _ranges(engine, FILE) == [Range.of(7, 0, 7, 5)]
        assert _ranges(engine, OTHER) == [Range.of(7, 0, 7, 5)]

    def test_discard_drops_pending(self, engine: HighlightEngine) -> None:
        """Discarded events are never applied."""
        engine.add_highlight(FILE, Range.of(5, 0, 5, 5))
        queue = ChangeQueue(engine)
        queue.submit(FILE, ChangeEvent.insert(Position(0, 0), "\n"))
        assert queue.discard(FILE) == 1
        assert queue.discard(FILE) == 0
        assert queue.drain(FILE) == 0
        assert _ranges(engine) == [Range.of(5, 0, 5, 5)]

    def test_failed_event_keeps_later_events_queued(
        self, engine: HighlightEngine
    ) -> None:
        """An event that fails to apply does not drop the events behind it."""
        engine.add_highlight(FILE, Range.of(5, 0, 5, 5))
        queue = ChangeQueue(engine)
        queue.submit(FILE, ChangeEvent(Position(0, 5), Position(0, 1)))
        queue.submit(FILE, ChangeEvent.insert(Position(0, 0), "\n"))

        with pytest.raises(InvalidChangeError):
            queue.drain(FILE)

        assert queue.pending(FILE) == 1
        assert queue.drain(FILE) == 1
        assert queue.pending(FILE) == 0
        assert _ranges(engine) == [Range.of(6, 0, 6, 5)]


class TestPumpChanges:
    """Single-consumer asyncio delivery."""

    async def test_applies_until_sentinel(self, engine: HighlightEngine) -> None:
        """The pump applies queued events until None arrives."""
        engine.add_highlight(FILE, Range.of(10, 0, 10, 5))
        queue: asyncio.Queue[tuple[str, ChangeEvent] | None] = asyncio.Queue()
        for _ in range(3):
            queue.put_nowait((FILE, ChangeEvent.insert(Position(0, 0), "\n")))
        queue.put_nowait(None)

        applied = await pump_changes(engine, queue)

        assert applied == 3
        assert _ranges(engine) == [Range.of(13, 0, 13, 5)]
        assert queue.empty()

    async def test_concurrent_producer(self, engine: HighlightEngine) -> None:
        """Events put while the pump runs are applied in order."""
        engine.add_highlight(FILE, Range.of(0, 10, 0, 12))
        queue: asyncio.Queue[tuple[str, ChangeEvent] | None] = asyncio.Queue()
        pump = asyncio.create_task(pump_changes(engine, queue))

        for char in "abcd":
            await queue.put((FILE, ChangeEvent.insert(Position(0, 0), char)))
            await asyncio.sleep(0)
        await queue.put(None)

        assert await pump == 4
        assert _ranges(engine) == [Range.of(0, 14, 0, 16)]

    async def test_failed_event_is_logged_and_skipped(
        self, engine: HighlightEngine, caplog: pytest.LogCaptureFixture
    ) -> None:
        """A failing event is logged; the events after it are still applied."""
        engine.add_highlight(FILE, Range.of(5, 0, 5, 5))
        queue: asyncio.Queue[tuple[str, ChangeEvent] | None] = asyncio.Queue()
        queue.put_nowait((FILE, ChangeEvent(Position(0, 5), Position(0, 1))))
        queue.put_nowait((FILE, ChangeEvent.insert(Position(0, 0), "\n")))
        queue.put_nowait(None)

        with caplog.at_level(logging.ERROR, logger="easyhighlight"):
            applied = await pump_changes(engine, queue)

        assert applied == 1
        assert _ranges(engine) == [Range.of(6, 0, 6, 5)]
        assert "Failed to apply change" in caplog.text
        await asyncio.wait_for(queue.join(), timeout=1)
