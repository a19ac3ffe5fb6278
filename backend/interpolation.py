"""
Interpolation loop for Split Station.

The timing engine only tells us the real elapsed time when it sends a tick,
and ticks may be coarse or irregular. To keep the clock moving smoothly we
extrapolate linearly from the last tick on every redraw:

    estimate = anchor.elapsed_at_last_tick + (now - anchor.wall_clock_at_last_tick)

Every tick re-anchors, so drift never exceeds one tick interval. Large gaps
(e.g. after the machine slept) are not clamped; the next tick corrects them.

Frames are scheduled through a FrameScheduler so the loop works with any
host event loop (Tk's after(), a test harness, ...).
"""

import logging
import time
from dataclasses import dataclass
from typing import Any, Callable, Optional, Protocol

from .events import TimerStatus

logger = logging.getLogger("SplitStation.Interpolation")


def monotonic_ms() -> float:
    """Default clock: monotonic milliseconds."""
    return time.perf_counter() * 1000.0


class FrameScheduler(Protocol):
    """Schedules a callback at the next redraw opportunity."""

    def schedule(self, callback: Callable[[], None]) -> Any:
        """Schedule `callback` once. Returns a handle for cancel()."""
        ...

    def cancel(self, handle: Any) -> None:
        """Cancel a pending callback. Must be synchronous."""
        ...


@dataclass
class InterpolationAnchor:
    """The (wall clock, elapsed) pair the loop extrapolates from."""
    wall_clock_at_last_tick: float = 0.0
    elapsed_at_last_tick: int = 0


class InterpolationLoop:
    """
    Frame-paced elapsed-time estimator.

    Owns the published (interpolated) elapsed value. Other components never
    write it directly; they call publish().

    Args:
        scheduler: FrameScheduler used to request frames
        anchor: Anchor written by the tick ingestor
        status_reader: Returns the current TimerStatus
        clock: Returns "now" in milliseconds on the same timeline as the anchor
        on_publish: Called with every published value
    """

    def __init__(
        self,
        scheduler: FrameScheduler,
        anchor: InterpolationAnchor,
        status_reader: Callable[[], TimerStatus],
        clock: Callable[[], float] = monotonic_ms,
        on_publish: Optional[Callable[[int], None]] = None,
    ):
        self.scheduler = scheduler
        self.anchor = anchor
        self.status_reader = status_reader
        self.clock = clock
        self.on_publish = on_publish

        self._value: int = 0
        self._frame_handle: Any = None
        self._active: bool = False

    @property
    def value(self) -> int:
        """The most recently published elapsed estimate (ms)."""
        return self._value

    @property
    def is_active(self) -> bool:
        return self._active

    def publish(self, elapsed_ms: int) -> None:
        """Set the published value and notify the listener."""
        self._value = int(elapsed_ms)
        if self.on_publish:
            self.on_publish(self._value)

    def estimate(self) -> int:
        """Project elapsed time from the anchor to now."""
        now = self.clock()
        projected = self.anchor.elapsed_at_last_tick + (now - self.anchor.wall_clock_at_last_tick)
        return int(projected)

    def start(self) -> None:
        """(Re)start the loop. Any pending frame is cancelled first."""
        self._cancel_pending()
        self._active = True
        self._frame_handle = self.scheduler.schedule(self._frame)
        logger.debug("Interpolation started")

    def stop(self) -> None:
        """Stop the loop. No publish happens after this returns."""
        was_active = self._active
        self._active = False
        self._cancel_pending()
        if was_active:
            logger.debug("Interpolation stopped")

    def _cancel_pending(self) -> None:
        if self._frame_handle is not None:
            self.scheduler.cancel(self._frame_handle)
            self._frame_handle = None

    def _frame(self) -> None:
        self._frame_handle = None
        # A scheduler that could not cancel in time may still fire us
        if not self._active:
            return
        if self.status_reader() is not TimerStatus.RUNNING:
            self._active = False
            return

        self.publish(self.estimate())
        self._frame_handle = self.scheduler.schedule(self._frame)
