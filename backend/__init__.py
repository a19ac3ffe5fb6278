"""
Backend module for Split Station.

Contains the timer event model, the event channel and the tick
interpolation state machine, plus the HTTP feed/monitor server.
These modules are UI-agnostic and can be used independently for testing.
"""

from .events import TimerStatus, TickEvent, Delta, TimerEventChannel
from .interpolation import InterpolationAnchor, InterpolationLoop
from .timer_state import TimerDisplayState, TimerStateMachine, TickIngestor, TickSnapshot

__all__ = [
    'TimerStatus',
    'TickEvent',
    'Delta',
    'TimerEventChannel',
    'InterpolationAnchor',
    'InterpolationLoop',
    'TimerDisplayState',
    'TimerStateMachine',
    'TickIngestor',
    'TickSnapshot',
]
