"""
Split Editor Modal for Split Station.

Lets the runner correct split times by hand (e.g. after a missed split).
Every entry is checked with parse_time as the user types; Save stays
disabled until all entries are valid. "-" or an empty entry means the split
was not reached.
"""

import logging
import tkinter as tk
from typing import Callable, List, Optional, Sequence

import customtkinter as ctk

import sys
import os
sys.path.insert(0, os.path.dirname(os.path.dirname(__file__)))

from config import (
    COLOR_BG_MEDIUM, COLOR_BTN_PRIMARY, COLOR_BTN_DANGER,
    COLOR_BTN_DISABLED, COLOR_BTN_TEXT, COLOR_TEXT, COLOR_TEXT_DIM,
    COLOR_INVALID, BTN_HEIGHT, PADDING_SMALL, PADDING_MEDIUM, PADDING_LARGE
)
from utils.formatting import format_split_time, parse_time

logger = logging.getLogger("SplitStation.SplitEditor")

EDITOR_WIDTH = 380
EDITOR_HEIGHT = 520


class SplitEditor(ctk.CTkToplevel):
    """
    Modal with one time entry per split.

    Args:
        parent: Owning window
        split_names: Names of every split in the run
        split_times_ms: Current split times (may be shorter than split_names)
        on_save: Called with the edited split times, one per name
    """

    def __init__(
        self,
        parent: tk.Widget,
        split_names: Sequence[str],
        split_times_ms: Sequence[int],
        on_save: Optional[Callable[[List[int]], None]] = None
    ):
        super().__init__(parent)

        self.split_names = list(split_names)
        self.split_times_ms = list(split_times_ms)
        self.on_save = on_save

        self.entries: List[ctk.CTkEntry] = []
        self._default_border = None

        # Window setup
        self.title("Edit Splits")
        self.geometry(f"{EDITOR_WIDTH}x{EDITOR_HEIGHT}")
        self.resizable(False, True)

        # Make modal
        self.transient(parent)
        self.grab_set()

        self._create_widgets()
        self._validate()

        # Center on parent
        self.update_idletasks()
        x = parent.winfo_x() + (parent.winfo_width() // 2) - (EDITOR_WIDTH // 2)
        y = parent.winfo_y() + (parent.winfo_height() // 2) - (EDITOR_HEIGHT // 2)
        self.geometry(f"+{x}+{y}")

    def _create_widgets(self):
        """Create all modal widgets."""
        main = ctk.CTkFrame(self, fg_color=COLOR_BG_MEDIUM, corner_radius=0)
        main.pack(fill="both", expand=True)

        ctk.CTkLabel(
            main, text="Split times  (H:MM:SS.mmm, M:SS.mmm or S.mmm)",
            font=("Segoe UI", 11),
            text_color=COLOR_TEXT_DIM
        ).pack(anchor="w", padx=PADDING_LARGE, pady=(PADDING_MEDIUM, 0))

        scroll_frame = ctk.CTkScrollableFrame(main, fg_color="transparent")
        scroll_frame.pack(fill="both", expand=True, padx=PADDING_LARGE, pady=PADDING_MEDIUM)
        scroll_frame.columnconfigure(0, weight=1)

        for i, name in enumerate(self.split_names):
            ms = self.split_times_ms[i] if i < len(self.split_times_ms) else 0

            ctk.CTkLabel(
                scroll_frame, text=name, text_color=COLOR_TEXT, anchor="w"
            ).grid(row=i, column=0, sticky="w", pady=2)

            entry = ctk.CTkEntry(scroll_frame, width=130, justify="right")
            entry.insert(0, format_split_time(ms))
            entry.grid(row=i, column=1, pady=2)
            entry.bind("<KeyRelease>", lambda e: self._validate())
            self.entries.append(entry)

        if self.entries:
            self._default_border = self.entries[0].cget("border_color")

        self.error_label = ctk.CTkLabel(main, text="", text_color=COLOR_INVALID)
        self.error_label.pack(anchor="w", padx=PADDING_LARGE)

        # Buttons
        buttons = ctk.CTkFrame(main, fg_color="transparent")
        buttons.pack(fill="x", padx=PADDING_LARGE, pady=(PADDING_SMALL, PADDING_LARGE))

        self.btn_save = ctk.CTkButton(
            buttons, text="Save", width=100, height=BTN_HEIGHT,
            fg_color=COLOR_BTN_PRIMARY, text_color=COLOR_BTN_TEXT,
            command=self._on_save_click
        )
        self.btn_save.pack(side="right")

        ctk.CTkButton(
            buttons, text="Cancel", width=100, height=BTN_HEIGHT,
            fg_color=COLOR_BTN_DANGER, text_color="#ffffff",
            command=self._on_cancel_click
        ).pack(side="right", padx=(0, PADDING_SMALL))

    def _parsed_values(self) -> List[Optional[int]]:
        return [parse_time(entry.get()) for entry in self.entries]

    def _validate(self) -> bool:
        """Highlight invalid entries and enable Save only when all are valid."""
        values = self._parsed_values()
        invalid = 0
        for entry, value in zip(self.entries, values):
            if value is None:
                invalid += 1
                entry.configure(border_color=COLOR_INVALID)
            elif self._default_border is not None:
                entry.configure(border_color=self._default_border)

        if invalid:
            self.error_label.configure(text=f"{invalid} invalid time(s)")
            self.btn_save.configure(state="disabled", fg_color=COLOR_BTN_DISABLED)
        else:
            self.error_label.configure(text="")
            self.btn_save.configure(state="normal", fg_color=COLOR_BTN_PRIMARY)
        return invalid == 0

    def _on_save_click(self):
        """Hand the edited split times to the app and close."""
        if not self._validate():
            return
        values = self._parsed_values()
        logger.info(f"Split edits saved: {values}")
        if self.on_save:
            self.on_save(values)
        self.destroy()

    def _on_cancel_click(self):
        """Close without saving."""
        self.destroy()
