import itertools
import os

import pytest

from levels import LevelConfig, WordEntry

os.environ.setdefault("SDL_AUDIODRIVER", "dummy")  # No sound card needed


class FakeScheduler:
    """Virtual-time stand-in for tk's after/after_cancel."""

    def __init__(self):
        self.now = 0
        self._ids = itertools.count(1)
        self._queue = {}  # handle -> (due, handle, callback)

    def after(self, ms, callback):
        handle = f"after#{next(self._ids)}"
        self._queue[handle] = (self.now + ms, handle, callback)
        return handle

    def after_cancel(self, handle):
        self._queue.pop(handle, None)

    @property
    def pending(self):
        return len(self._queue)

    def advance(self, ms):
        """Run everything due within the next ``ms`` milliseconds, in order."""
        end = self.now + ms
        while True:
            due = [entry for entry in self._queue.values() if entry[0] <= end]
            if not due:
                break
            when, handle, callback = min(due, key=lambda e: (e[0], int(e[1].split("#")[1])))
            del self._queue[handle]
            self.now = when
            callback()
        self.now = end


@pytest.fixture
def scheduler():
    return FakeScheduler()


@pytest.fixture
def tiny_level():
    return LevelConfig(
        level_id="test",
        title="Test",
        rule="Short A",
        words=(WordEntry("cat", True), WordEntry("cake", False)),
        spawn_interval_ms=1000,
        tick_interval_ms=100,
        fall_step=10,
        catch_delta=5,
        miss_delta=5,
        round_duration_sec=10,
        lane_count=3,
        catch_line=40,
        bottom_bound=60,
    )
