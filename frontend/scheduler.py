"""
Tk frame scheduler for Split Station.

Implements the FrameScheduler protocol on top of Tk's after()/after_cancel(),
which is the closest thing Tk has to requestAnimationFrame.
"""

import tkinter as tk

import sys
import os
sys.path.insert(0, os.path.dirname(os.path.dirname(__file__)))

from config import FRAME_INTERVAL_MS


class TkFrameScheduler:
    """Schedules interpolation frames on a widget's Tk event loop."""

    def __init__(self, widget: tk.Misc, interval_ms: int = FRAME_INTERVAL_MS):
        self.widget = widget
        self.interval_ms = interval_ms

    def schedule(self, callback):
        return self.widget.after(self.interval_ms, callback)

    def cancel(self, handle):
        try:
            self.widget.after_cancel(handle)
        except tk.TclError:
            # Widget already destroyed; nothing left to cancel
            pass
