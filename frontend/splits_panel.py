"""
Splits Panel for Split Station.

Table of the run's segments: name, delta against the comparison, and the
split time. Rows come from utils.display.build_split_rows so the desktop
window and the web monitor show identical text.
"""

import logging
import tkinter as tk
from typing import Callable, List, Optional

import customtkinter as ctk

import sys
import os
sys.path.insert(0, os.path.dirname(os.path.dirname(__file__)))

from config import (
    COLOR_BG_LIGHT, COLOR_BTN_PRIMARY, COLOR_BTN_TEXT,
    COLOR_TEXT, COLOR_TEXT_DIM, COLOR_CURRENT_ROW,
    FONT_SPLIT_NAME, FONT_SPLIT_TIME, BTN_HEIGHT,
    PADDING_SMALL, PADDING_MEDIUM
)
from utils.display import SplitRow

logger = logging.getLogger("SplitStation.SplitsPanel")


class SplitsPanel(ctk.CTkFrame):
    """
    Scrollable split table with an "Edit Splits" button.
    """

    def __init__(
        self,
        parent: tk.Widget,
        on_edit_splits: Optional[Callable] = None,
        **kwargs
    ):
        super().__init__(parent, fg_color="transparent", **kwargs)

        self.on_edit_splits = on_edit_splits

        self._rows: List[SplitRow] = []
        self._row_widgets = []

        self._create_widgets()

    def _create_widgets(self):
        """Create the table container and toolbar."""
        self.table = ctk.CTkScrollableFrame(
            self,
            fg_color="transparent",
            scrollbar_button_color=COLOR_BG_LIGHT
        )
        self.table.pack(fill="both", expand=True)
        self.table.columnconfigure(0, weight=1)

        self.empty_label = ctk.CTkLabel(
            self.table,
            text="Waiting for the timer...",
            text_color=COLOR_TEXT_DIM
        )
        self.empty_label.grid(row=0, column=0, columnspan=3, pady=PADDING_MEDIUM)

        toolbar = ctk.CTkFrame(self, fg_color="transparent")
        toolbar.pack(fill="x", pady=(PADDING_SMALL, 0))

        self.btn_edit = ctk.CTkButton(
            toolbar,
            text="✏  Edit Splits",
            height=BTN_HEIGHT,
            fg_color=COLOR_BTN_PRIMARY,
            text_color=COLOR_BTN_TEXT,
            command=self._on_edit_click
        )
        self.btn_edit.pack(side="right")

    def _on_edit_click(self):
        if self.on_edit_splits:
            self.on_edit_splits()

    def set_rows(self, rows: List[SplitRow]):
        """Redraw the table. Only rebuilds widgets when the row count changes."""
        if rows == self._rows:
            return

        if len(rows) != len(self._row_widgets):
            self._rebuild(len(rows))

        for row, widgets in zip(rows, self._row_widgets):
            frame, name_lbl, delta_lbl, time_lbl = widgets
            frame.configure(fg_color=COLOR_CURRENT_ROW if row.is_current else "transparent")
            name_lbl.configure(text=row.name)
            delta_lbl.configure(text=row.delta_text, text_color=row.delta_color or COLOR_TEXT)
            time_lbl.configure(text=row.split_text)

        self._rows = list(rows)

    def _rebuild(self, count: int):
        for widgets in self._row_widgets:
            widgets[0].destroy()
        self._row_widgets = []

        if count == 0:
            self.empty_label.grid()
            return
        self.empty_label.grid_remove()

        for i in range(count):
            frame = ctk.CTkFrame(self.table, fg_color="transparent", corner_radius=4)
            frame.grid(row=i + 1, column=0, sticky="ew", pady=1)
            frame.columnconfigure(0, weight=1)

            name_lbl = ctk.CTkLabel(frame, text="", font=FONT_SPLIT_NAME,
                                    text_color=COLOR_TEXT, anchor="w")
            name_lbl.grid(row=0, column=0, sticky="w", padx=(PADDING_SMALL, 0))

            delta_lbl = ctk.CTkLabel(frame, text="", font=FONT_SPLIT_TIME,
                                     width=70, anchor="e")
            delta_lbl.grid(row=0, column=1, padx=PADDING_SMALL)

            time_lbl = ctk.CTkLabel(frame, text="", font=FONT_SPLIT_TIME,
                                    text_color=COLOR_TEXT, width=90, anchor="e")
            time_lbl.grid(row=0, column=2, padx=(0, PADDING_SMALL))

            self._row_widgets.append((frame, name_lbl, delta_lbl, time_lbl))

        logger.debug(f"Split table rebuilt with {count} rows")
