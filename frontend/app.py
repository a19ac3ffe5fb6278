"""
Split Station - Main Application Window.

Wires the pieces together:
- the web server receives engine events on its own thread and queues them
- this window drains the queue on the Tk thread into a TimerEventChannel
- TimerDisplayState turns those events into clock / table updates
- the shared monitor state is refreshed for the web monitor
"""

import logging
import queue
import time

import customtkinter as ctk

import sys
import os
sys.path.insert(0, os.path.dirname(os.path.dirname(__file__)))

import config
from config import (
    WINDOW_TITLE, WINDOW_WIDTH, WINDOW_HEIGHT, WINDOW_MIN_WIDTH, WINDOW_MIN_HEIGHT,
    COLOR_BG_DARK, COLOR_TEXT_DIM,
    QUEUE_POLL_INTERVAL_MS, WEB_PUSH_INTERVAL, WEB_DEFAULT_HOST, WEB_DEFAULT_PORT,
    DELTA_COLORS, PADDING_SMALL, PADDING_MEDIUM
)
from backend import TimerDisplayState, TimerEventChannel
from backend.web_server import SharedTimerState, TimerWebServer
from utils.display import build_split_rows
from .scheduler import TkFrameScheduler
from .timer_display import TimerDisplay
from .splits_panel import SplitsPanel
from .split_editor import SplitEditor

logger = logging.getLogger("SplitStation.App")


class SplitStationApp(ctk.CTk):
    def __init__(self, host: str = WEB_DEFAULT_HOST, port: int = WEB_DEFAULT_PORT,
                 enable_web: bool = True):
        super().__init__()

        # Thread safety queue: (kind, payload) from the web server thread
        self.feed_queue = queue.Queue()

        self.title(WINDOW_TITLE)
        self.geometry(f"{WINDOW_WIDTH}x{WINDOW_HEIGHT}")
        self.minsize(WINDOW_MIN_WIDTH, WINDOW_MIN_HEIGHT)
        self.resizable(True, True)
        self.configure(fg_color=COLOR_BG_DARK)

        ctk.set_appearance_mode(config.APPEARANCE_MODE)
        ctk.set_default_color_theme("blue")

        # Timer core (single-threaded, lives on the Tk thread)
        self.channel = TimerEventChannel()
        self.display_state = TimerDisplayState(TkFrameScheduler(self))
        self.display_state.attach(self.channel)

        # Web server
        self._shared_state = SharedTimerState()
        self._web_server = TimerWebServer(self._shared_state, self.feed_queue, host=host, port=port) \
            if enable_web else None
        self._last_web_push = 0.0

        self._create_widgets()
        self._wire_callbacks()

        self.protocol("WM_DELETE_WINDOW", self._on_close)

        # Start queue polling loop (Main Thread)
        self._poll_after_id = self.after(QUEUE_POLL_INTERVAL_MS, self._check_feed_queue)

        logger.info("SplitStationApp UI initialized")

    # =========================================================================
    # LAYOUT
    # =========================================================================

    def _create_widgets(self):
        self.timer_display = TimerDisplay(self)
        self.timer_display.pack(fill="x", pady=(PADDING_MEDIUM, 0))

        self.splits_panel = SplitsPanel(self, on_edit_splits=self._open_split_editor)
        self.splits_panel.pack(fill="both", expand=True, padx=PADDING_MEDIUM, pady=PADDING_SMALL)

        self.footer_label = ctk.CTkLabel(
            self,
            text="Web feed disabled",
            font=("Segoe UI", 10),
            text_color=COLOR_TEXT_DIM
        )
        self.footer_label.pack(fill="x", padx=PADDING_MEDIUM, pady=(0, PADDING_SMALL))

    def _wire_callbacks(self):
        """Wire TimerDisplayState events to UI updates (all on the Tk thread)."""
        self.display_state.on('elapsed_update', self._on_elapsed_update)
        self.display_state.on('state_change', self._on_state_change)
        self.display_state.on('tick', lambda snapshot: self._refresh_splits())
        self.display_state.on('deltas_changed', lambda deltas: self._refresh_splits())

    # =========================================================================
    # FEED
    # =========================================================================

    def start_web_server(self):
        if not self._web_server:
            return
        try:
            self._web_server.start()
            self.footer_label.configure(text=f"Feed & monitor: {self._web_server.get_url()}")
        except OSError as e:
            logger.error(f"Could not start web server: {e}")
            self.footer_label.configure(text=f"Web server failed: {e}")

    def _check_feed_queue(self):
        """
        Poll the feed queue for events from the web server thread.
        This runs strictly on the main thread.
        """
        try:
            while True:
                # Non-blocking get
                kind, payload = self.feed_queue.get_nowait()
                self.channel.publish(kind, payload)
        except queue.Empty:
            pass

        self._poll_after_id = self.after(QUEUE_POLL_INTERVAL_MS, self._check_feed_queue)

    # =========================================================================
    # State -> UI
    # =========================================================================

    def _on_elapsed_update(self, elapsed_ms):
        self.timer_display.set_elapsed(elapsed_ms)
        self._push_web_state()

    def _on_state_change(self, status):
        self.timer_display.set_status(status, self.display_state.snapshot.elapsed_ms)
        self.timer_display.set_elapsed(self.display_state.interpolated_elapsed)
        self._push_web_state(force=True)

    def _refresh_splits(self):
        rows = build_split_rows(self.display_state.snapshot, self.display_state.deltas, DELTA_COLORS)
        self.splits_panel.set_rows(rows)
        self._push_web_state(force=True)

    def _push_web_state(self, force: bool = False):
        """Push to web server shared state (throttled unless forced)."""
        if not self._web_server or not self._web_server.running:
            return
        now = time.time()
        if not force and now - self._last_web_push < WEB_PUSH_INTERVAL:
            return
        self._last_web_push = now
        self._shared_state.update_from_display(self.display_state, DELTA_COLORS)

    # =========================================================================
    # SPLIT EDITOR
    # =========================================================================

    def _open_split_editor(self):
        snapshot = self.display_state.snapshot
        if not snapshot.split_names:
            self.footer_label.configure(text="No splits to edit yet")
            return
        if self.display_state.is_running:
            self.footer_label.configure(text="Pause or finish the run to edit splits")
            return
        SplitEditor(self, snapshot.split_names, snapshot.split_times_ms, on_save=self._on_splits_edited)

    def _on_splits_edited(self, split_times_ms):
        self._shared_state.queue_split_edit(split_times_ms)
        self.footer_label.configure(text="Split edits queued for the timer")

    # =========================================================================
    # LIFECYCLE
    # =========================================================================

    def _on_close(self):
        """Handle application shutdown."""
        logger.info("Application closing")

        # 1. Stop web server if running
        if self._web_server and self._web_server.running:
            self._web_server.stop()

        # 2. Detach from the feed and stop the frame loop
        self.display_state.detach()
        if self._poll_after_id:
            self.after_cancel(self._poll_after_id)

        # 3. Destroy window
        self.destroy()

    def run(self):
        logger.info("Starting application")
        self.start_web_server()
        self.mainloop()
