"""
Timer Display State for Split Station.

Acts as the controller layer between the engine's event feed and the UI.
Tracks the authoritative snapshot, drives the interpolation loop, and emits
events for the UI.

This follows an event-driven architecture:
- The feed delivers 'tick' / 'state' / 'deltas' events on a TimerEventChannel
- TickIngestor records each tick (snapshot + interpolation anchor)
- TimerStateMachine starts/stops the interpolation loop on state events
- TimerDisplayState emits UI events when anything visible changes

Everything here runs on a single thread (the UI thread). No locks needed.
"""

import logging
from dataclasses import dataclass
from typing import Callable, Dict, List, Optional, Tuple

from .events import Delta, TickEvent, TimerEventChannel, TimerStatus
from .interpolation import FrameScheduler, InterpolationAnchor, InterpolationLoop, monotonic_ms

logger = logging.getLogger("SplitStation.TimerState")


@dataclass(frozen=True)
class TickSnapshot:
    """Latest authoritative values from the engine. Replaced on every tick."""
    elapsed_ms: int = 0
    current_segment: int = 0
    split_times_ms: Tuple[int, ...] = ()
    segment_times_ms: Tuple[int, ...] = ()
    split_names: Tuple[str, ...] = ()

    @classmethod
    def from_tick(cls, event: TickEvent) -> "TickSnapshot":
        return cls(
            elapsed_ms=event.elapsed_ms,
            current_segment=event.current_segment,
            split_times_ms=tuple(event.split_times_ms or ()),
            segment_times_ms=tuple(event.segment_times_ms or ()),
            split_names=tuple(event.split_names or ()),
        )


class TickIngestor:
    """
    Records tick events.

    Sole writer of the snapshot and the interpolation anchor.
    """

    def __init__(self, anchor: InterpolationAnchor, loop: InterpolationLoop,
                 clock: Callable[[], float] = monotonic_ms):
        self.anchor = anchor
        self.loop = loop
        self.clock = clock
        self.snapshot = TickSnapshot()
        self._last_status: Optional[TimerStatus] = None

    def ingest(self, event: TickEvent) -> None:
        """Apply one tick: re-anchor, replace the snapshot, publish if running."""
        self.anchor.wall_clock_at_last_tick = self.clock()
        self.anchor.elapsed_at_last_tick = event.elapsed_ms

        previous = self.snapshot
        self.snapshot = TickSnapshot.from_tick(event)
        self._check_invariants(previous, event)
        self._last_status = event.state

        if event.state is TimerStatus.RUNNING:
            self.loop.publish(event.elapsed_ms)

    def reanchor(self) -> None:
        """Anchor to the current snapshot at the current time."""
        self.anchor.wall_clock_at_last_tick = self.clock()
        self.anchor.elapsed_at_last_tick = self.snapshot.elapsed_ms

    def _check_invariants(self, previous: TickSnapshot, event: TickEvent) -> None:
        # The engine is authoritative, so these only get logged
        snap = self.snapshot
        if len(snap.split_times_ms) > len(snap.split_names):
            logger.warning(
                f"Tick has {len(snap.split_times_ms)} split times "
                f"but only {len(snap.split_names)} names")
        if (self._last_status is TimerStatus.RUNNING and event.state is TimerStatus.RUNNING
                and snap.elapsed_ms < previous.elapsed_ms):
            logger.warning(
                f"Elapsed went backwards while running: "
                f"{previous.elapsed_ms}ms -> {snap.elapsed_ms}ms")


class TimerStateMachine:
    """
    Follows the engine's timer state.

    States come only from state events; ticks never change them. Entering
    'running' (re)starts the interpolation loop; any other state stops it
    and freezes the display on the authoritative elapsed time.
    """

    def __init__(self, ingestor: TickIngestor, loop: InterpolationLoop):
        self.ingestor = ingestor
        self.loop = loop
        self.status = TimerStatus.IDLE

    def apply(self, status: TimerStatus) -> None:
        """Handle a state event."""
        previous = self.status
        self.status = status
        if previous is not status:
            logger.info(f"Timer state: {previous.value} -> {status.value}")

        elapsed = self.ingestor.snapshot.elapsed_ms
        if status is TimerStatus.RUNNING:
            # Re-anchor so the first frame continues from the authoritative
            # value instead of jumping by however long we were paused
            self.ingestor.reanchor()
            self.loop.publish(elapsed)
            self.loop.start()
        else:
            self.loop.stop()
            self.loop.publish(elapsed)

    @property
    def is_idle(self) -> bool:
        return self.status is TimerStatus.IDLE

    @property
    def is_running(self) -> bool:
        return self.status is TimerStatus.RUNNING

    @property
    def is_paused(self) -> bool:
        return self.status is TimerStatus.PAUSED

    @property
    def is_finished(self) -> bool:
        return self.status is TimerStatus.FINISHED


class TimerDisplayState:
    """
    Everything the UI needs to draw the timer.

    Responsibilities:
    - Owns one anchor, one interpolation loop, one ingestor and one state machine
    - Subscribes to a TimerEventChannel (attach) and detaches cleanly (detach)
    - Keeps the latest deltas from the engine
    - Emits callbacks for UI updates

    Event System:
    - Register callbacks with: state.on('event_name', callback_function)

    Available Events:
    - 'elapsed_update': (elapsed_ms: int)           - every published estimate
    - 'state_change': (status: TimerStatus)
    - 'tick': (snapshot: TickSnapshot)
    - 'deltas_changed': (deltas: List[Delta])
    """

    def __init__(self, scheduler: FrameScheduler, clock: Callable[[], float] = monotonic_ms):
        self.anchor = InterpolationAnchor()
        self.loop = InterpolationLoop(
            scheduler,
            self.anchor,
            status_reader=lambda: self.machine.status,
            clock=clock,
            on_publish=self._on_publish,
        )
        self.ingestor = TickIngestor(self.anchor, self.loop, clock=clock)
        self.machine = TimerStateMachine(self.ingestor, self.loop)

        self.deltas: List[Delta] = []

        self._channel: Optional[TimerEventChannel] = None
        self._unsubscribers: List[Callable[[], None]] = []

        # Callbacks for UI updates
        self._callbacks: Dict[str, List[Callable]] = {
            'elapsed_update': [],   # (elapsed_ms)
            'state_change': [],     # (TimerStatus)
            'tick': [],             # (TickSnapshot)
            'deltas_changed': [],   # (deltas_list)
        }

        logger.info("TimerDisplayState initialized")

    # =========================================================================
    # EVENT SYSTEM
    # =========================================================================

    def on(self, event: str, callback: Callable) -> None:
        """
        Register a callback for an event.

        Args:
            event: Event name (see class docstring for available events)
            callback: Function to call when event occurs
        """
        if event in self._callbacks:
            self._callbacks[event].append(callback)
        else:
            logger.warning(f"Unknown event: {event}. Available: {list(self._callbacks.keys())}")

    def off(self, event: str, callback: Callable) -> None:
        """Unregister a callback for an event."""
        if event in self._callbacks and callback in self._callbacks[event]:
            self._callbacks[event].remove(callback)

    def _emit(self, event: str, *args) -> None:
        """Emit an event to all registered callbacks."""
        for callback in self._callbacks.get(event, []):
            try:
                callback(*args)
            except Exception as e:
                logger.error(f"Error in callback for {event}: {e}")

    # =========================================================================
    # FEED SUBSCRIPTION
    # =========================================================================

    def attach(self, channel: TimerEventChannel) -> None:
        """Start consuming engine events from a channel."""
        if self._channel is channel:
            return
        self.detach()
        self._channel = channel
        self._unsubscribers = [
            channel.subscribe('tick', self.handle_tick),
            channel.subscribe('state', self.handle_state),
            channel.subscribe('deltas', self.handle_deltas),
        ]
        logger.debug("Attached to event channel")

    def detach(self) -> None:
        """Stop consuming events and cancel any pending frame."""
        for unsubscribe in self._unsubscribers:
            unsubscribe()
        self._unsubscribers = []
        if self._channel is not None:
            logger.debug("Detached from event channel")
        self._channel = None
        self.loop.stop()

    # =========================================================================
    # EVENT HANDLERS
    # =========================================================================

    def handle_tick(self, event: TickEvent) -> None:
        self.ingestor.ingest(event)
        self._emit('tick', self.ingestor.snapshot)

    def handle_state(self, status: TimerStatus) -> None:
        self.machine.apply(TimerStatus.parse(status))
        self._emit('state_change', self.machine.status)

    def handle_deltas(self, deltas: List[Delta]) -> None:
        self.deltas = list(deltas or [])
        self._emit('deltas_changed', self.deltas)

    def _on_publish(self, elapsed_ms: int) -> None:
        self._emit('elapsed_update', elapsed_ms)

    # =========================================================================
    # QUERIES
    # =========================================================================

    @property
    def status(self) -> TimerStatus:
        return self.machine.status

    @property
    def snapshot(self) -> TickSnapshot:
        return self.ingestor.snapshot

    @property
    def interpolated_elapsed(self) -> int:
        return self.loop.value

    @property
    def is_idle(self) -> bool:
        return self.machine.is_idle

    @property
    def is_running(self) -> bool:
        return self.machine.is_running

    @property
    def is_paused(self) -> bool:
        return self.machine.is_paused

    @property
    def is_finished(self) -> bool:
        return self.machine.is_finished
