"""
Timer events for Split Station.

The external timing engine is the single source of truth. It sends three
kinds of events, which arrive here already decoded:

- 'tick':   TickEvent    - authoritative elapsed time + split table
- 'state':  TimerStatus  - the engine's timer state changed
- 'deltas': List[Delta]  - comparison deltas for the current run

Wire payloads use camelCase keys (elapsedMs, currentSegment, ...). The
from_dict() constructors raise ValueError on malformed payloads so the
ingress layer can reject them; optional arrays simply default to empty.

TimerEventChannel is the typed subscribe/unsubscribe seam between whatever
delivers those events (the HTTP feed, a test) and the display state.
"""

import logging
from dataclasses import dataclass
from enum import Enum
from typing import Any, Callable, Dict, List, Tuple

logger = logging.getLogger("SplitStation.Events")


class TimerStatus(Enum):
    """Timer state enumeration. Values are the wire names."""
    IDLE = "idle"
    RUNNING = "running"
    PAUSED = "paused"
    FINISHED = "finished"

    @classmethod
    def parse(cls, value: Any) -> "TimerStatus":
        """Decode a wire value ("running") or pass an existing status through."""
        if isinstance(value, cls):
            return value
        if isinstance(value, str):
            try:
                return cls(value.strip().lower())
            except ValueError:
                pass
        raise ValueError(f"Unknown timer state: {value!r}")


def _int_field(data: dict, key: str, default=None) -> int:
    value = data.get(key, default)
    # bool is an int subclass; reject it so true/false never become 1/0
    if isinstance(value, bool) or not isinstance(value, int):
        raise ValueError(f"'{key}' must be an integer, got {value!r}")
    if value < 0:
        raise ValueError(f"'{key}' must be non-negative, got {value}")
    return value


def _int_list(data: dict, key: str) -> Tuple[int, ...]:
    values = data.get(key) or []
    if not isinstance(values, list):
        raise ValueError(f"'{key}' must be a list")
    for v in values:
        if isinstance(v, bool) or not isinstance(v, int):
            raise ValueError(f"'{key}' must contain integers, got {v!r}")
    return tuple(values)


def _str_list(data: dict, key: str) -> Tuple[str, ...]:
    values = data.get(key) or []
    if not isinstance(values, list) or not all(isinstance(v, str) for v in values):
        raise ValueError(f"'{key}' must be a list of strings")
    return tuple(values)


@dataclass(frozen=True)
class TickEvent:
    """
    One authoritative snapshot from the timing engine.

    Attributes:
        elapsed_ms: Run time in milliseconds
        state: Engine state at the time of the tick
        current_segment: Index of the segment being timed
        split_times_ms: Cumulative split times (0 = not reached / skipped)
        segment_times_ms: Individual segment durations
        split_names: Segment names, one per segment of the run
    """
    elapsed_ms: int
    state: TimerStatus
    current_segment: int = 0
    split_times_ms: Tuple[int, ...] = ()
    segment_times_ms: Tuple[int, ...] = ()
    split_names: Tuple[str, ...] = ()

    def to_dict(self):
        """Serialize to the wire format."""
        return {
            'elapsedMs': self.elapsed_ms,
            'state': self.state.value,
            'currentSegment': self.current_segment,
            'splitTimesMs': list(self.split_times_ms),
            'segmentTimesMs': list(self.segment_times_ms),
            'splitNames': list(self.split_names),
        }

    @classmethod
    def from_dict(cls, data):
        """Deserialize from the wire format."""
        if not isinstance(data, dict):
            raise ValueError("Tick payload must be a JSON object")
        if 'elapsedMs' not in data:
            raise ValueError("Tick payload is missing 'elapsedMs'")
        return cls(
            elapsed_ms=_int_field(data, 'elapsedMs'),
            state=TimerStatus.parse(data.get('state')),
            current_segment=_int_field(data, 'currentSegment', 0),
            split_times_ms=_int_list(data, 'splitTimesMs'),
            segment_times_ms=_int_list(data, 'segmentTimesMs'),
            split_names=_str_list(data, 'splitNames'),
        )


@dataclass(frozen=True)
class Delta:
    """
    Comparison result for one segment, computed by the engine.

    Split Station never computes these; it only formats and colors them.
    """
    segment_index: int
    delta_ms: int
    is_best_ever: bool = False
    is_ahead: bool = False
    gained_time: bool = False
    skipped: bool = False

    def to_dict(self):
        return {
            'segmentIndex': self.segment_index,
            'deltaMs': self.delta_ms,
            'isBestEver': self.is_best_ever,
            'isAhead': self.is_ahead,
            'gainedTime': self.gained_time,
            'skipped': self.skipped,
        }

    @classmethod
    def from_dict(cls, data):
        if not isinstance(data, dict):
            raise ValueError("Delta must be a JSON object")
        delta_ms = data.get('deltaMs', 0)
        if isinstance(delta_ms, bool) or not isinstance(delta_ms, int):
            raise ValueError(f"'deltaMs' must be an integer, got {delta_ms!r}")
        return cls(
            segment_index=_int_field(data, 'segmentIndex'),
            delta_ms=delta_ms,
            is_best_ever=bool(data.get('isBestEver', False)),
            is_ahead=bool(data.get('isAhead', False)),
            gained_time=bool(data.get('gainedTime', False)),
            skipped=bool(data.get('skipped', False)),
        )

    @classmethod
    def list_from_json(cls, data) -> List["Delta"]:
        """Decode the JSON array sent with a 'deltas' event."""
        if data is None:
            return []
        if not isinstance(data, list):
            raise ValueError("Deltas payload must be a JSON array")
        return [cls.from_dict(d) for d in data]


EVENT_KINDS = ('tick', 'state', 'deltas')


class TimerEventChannel:
    """
    Typed event channel carrying engine events to subscribers.

    Usage:
        channel = TimerEventChannel()
        unsubscribe = channel.subscribe('tick', on_tick)
        channel.publish('tick', tick_event)
        unsubscribe()

    Delivery is synchronous, on the caller's thread. Callers must publish
    from a single thread (the UI thread).
    """

    def __init__(self):
        self._subscribers: Dict[str, List[Callable]] = {kind: [] for kind in EVENT_KINDS}

    def subscribe(self, kind: str, callback: Callable) -> Callable[[], None]:
        """
        Register a callback for an event kind.

        Args:
            kind: One of 'tick', 'state', 'deltas'
            callback: Called with the decoded event payload

        Returns:
            A function that removes this subscription (safe to call twice)
        """
        if kind not in self._subscribers:
            raise ValueError(f"Unknown event kind: {kind}. Available: {list(EVENT_KINDS)}")
        self._subscribers[kind].append(callback)

        def unsubscribe():
            self.unsubscribe(kind, callback)
        return unsubscribe

    def unsubscribe(self, kind: str, callback: Callable) -> None:
        if kind in self._subscribers and callback in self._subscribers[kind]:
            self._subscribers[kind].remove(callback)

    def subscriber_count(self, kind: str) -> int:
        return len(self._subscribers.get(kind, []))

    def publish(self, kind: str, payload: Any) -> None:
        """Deliver a payload to every subscriber of `kind`."""
        if kind not in self._subscribers:
            raise ValueError(f"Unknown event kind: {kind}")
        # Copy so a callback may unsubscribe itself mid-dispatch
        for callback in list(self._subscribers[kind]):
            try:
                callback(payload)
            except Exception as e:
                logger.error(f"Error in subscriber for {kind}: {e}")
