import pytest

from backend.timer_state import TimerDisplayState


class ManualScheduler:
    """FrameScheduler that only runs frames when the test says so."""

    def __init__(self):
        self.pending = {}
        self._next_handle = 0
        self.cancelled = []

    def schedule(self, callback):
        self._next_handle += 1
        self.pending[self._next_handle] = callback
        return self._next_handle

    def cancel(self, handle):
        self.cancelled.append(handle)
        self.pending.pop(handle, None)

    def run_frame(self):
        """Run every callback pending right now (one redraw)."""
        callbacks = list(self.pending.values())
        self.pending.clear()
        for callback in callbacks:
            callback()


class FakeClock:
    def __init__(self, now=1000.0):
        self.now = now

    def __call__(self):
        return self.now

    def advance(self, ms):
        self.now += ms


@pytest.fixture
def scheduler():
    return ManualScheduler()


@pytest.fixture
def clock():
    return FakeClock()


@pytest.fixture
def display(scheduler, clock):
    return TimerDisplayState(scheduler, clock=clock)
