"""
Timer Display Widget for Split Station.

The big running clock plus a status badge and the total run time.
"""

import logging
import tkinter as tk

import customtkinter as ctk

import sys
import os
sys.path.insert(0, os.path.dirname(os.path.dirname(__file__)))

from config import (
    COLOR_TEXT, COLOR_TEXT_DIM, COLOR_STATUS,
    FONT_CLOCK, FONT_STATUS, PADDING_SMALL, PADDING_MEDIUM
)
from backend.events import TimerStatus
from utils.formatting import format_time, format_run_time

logger = logging.getLogger("SplitStation.TimerDisplay")


class TimerDisplay(ctk.CTkFrame):
    """
    Main clock. Shows the interpolated elapsed time while running and the
    exact authoritative time otherwise.
    """

    def __init__(self, parent: tk.Widget, **kwargs):
        super().__init__(parent, fg_color="transparent", **kwargs)

        self._last_text = ""
        self._create_widgets()
        logger.debug("TimerDisplay initialized")

    def _create_widgets(self):
        """Create the clock widgets."""
        # Status badge
        self.status_label = ctk.CTkLabel(
            self,
            text=TimerStatus.IDLE.value.upper(),
            font=FONT_STATUS,
            text_color=COLOR_STATUS.get(TimerStatus.IDLE.value, COLOR_TEXT_DIM)
        )
        self.status_label.pack(anchor="e", padx=PADDING_MEDIUM)

        # Clock
        self.clock_label = ctk.CTkLabel(
            self,
            text=format_time(0),
            font=FONT_CLOCK,
            text_color=COLOR_TEXT
        )
        self.clock_label.pack(anchor="e", padx=PADDING_MEDIUM)

        # Run time (final value once finished)
        self.run_time_label = ctk.CTkLabel(
            self,
            text="",
            font=("Consolas", 13),
            text_color=COLOR_TEXT_DIM
        )
        self.run_time_label.pack(anchor="e", padx=PADDING_MEDIUM, pady=(0, PADDING_SMALL))

    def set_elapsed(self, elapsed_ms: int):
        """Update the clock. Skips the redraw when the text is unchanged."""
        text = format_time(elapsed_ms)
        if text != self._last_text:
            self._last_text = text
            self.clock_label.configure(text=text)

    def set_status(self, status: TimerStatus, elapsed_ms: int = 0):
        """Update the status badge and the run time line."""
        self.status_label.configure(
            text=status.value.upper(),
            text_color=COLOR_STATUS.get(status.value, COLOR_TEXT_DIM)
        )
        if status is TimerStatus.FINISHED:
            self.run_time_label.configure(text=f"Run time  {format_run_time(elapsed_ms)}")
        else:
            self.run_time_label.configure(text="")
