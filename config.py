"""
Configuration constants for Split Station.

Frame pacing, the web feed, delta colors, theme colors and layout live here.
"""

import sys
import os
from themes import THEMES, DEFAULT_THEME

# =============================================================================
# PATHS
# =============================================================================

def get_base_path():
    """Folder next to the frozen executable, or this source folder."""
    if getattr(sys, "frozen", False):
        return os.path.dirname(sys.executable)
    return os.path.dirname(os.path.abspath(__file__))

# ROOT DIR
BASE_DIR = get_base_path()

# Log files go here (created on demand by main.setup_logging)
LOG_DIR = os.path.join(BASE_DIR, "logs")

# =============================================================================
# FRAME PACING
# =============================================================================

# Delay between interpolation frames (milliseconds)
# 16ms ≈ 60fps. TUNABLE: raise on slow machines if the clock stutters
FRAME_INTERVAL_MS = 16

# How often the UI thread drains the feed queue (milliseconds)
QUEUE_POLL_INTERVAL_MS = 16

# =============================================================================
# WEB FEED / MONITOR
# =============================================================================

# The engine posts events here; phones and tablets read the monitor page
WEB_DEFAULT_HOST = "0.0.0.0"
WEB_DEFAULT_PORT = 8080

# Minimum time between monitor state pushes from the UI thread (seconds)
# The monitor page polls at 250ms, so pushing faster than this is wasted work
WEB_PUSH_INTERVAL = 0.1

# =============================================================================
# DELTA COLORS
# =============================================================================

DELTA_COLORS = {
    "ahead_gaining": "#30d158",
    "ahead_losing": "#7ec890",
    "behind_gaining": "#cc6b65",
    "behind_losing": "#ff453a",
    "best_segment": "#ffd60a",
}

# =============================================================================
# UI SETTINGS - WINDOW
# =============================================================================

WINDOW_TITLE = "Split Station"
WINDOW_WIDTH = 420
WINDOW_HEIGHT = 640
WINDOW_MIN_WIDTH = 320
WINDOW_MIN_HEIGHT = 400

# =============================================================================
# UI SETTINGS - COLORS (DYNAMIC LOADING)
# =============================================================================

# Filled in by load_theme() below
COLOR_BG_DARK = ""
COLOR_BG_MEDIUM = ""
COLOR_BG_LIGHT = ""
COLOR_BTN_PRIMARY = ""
COLOR_BTN_DANGER = ""
COLOR_BTN_DISABLED = "#3a3f4a"
COLOR_BTN_TEXT = ""
COLOR_TEXT = ""
COLOR_TEXT_DIM = ""
COLOR_CURRENT_ROW = ""
COLOR_INVALID = ""
COLOR_STATUS = {}
APPEARANCE_MODE = "dark"

def load_theme(theme_name=None):
    """
    Load a theme by name and update the global color variables.

    Unknown or missing names fall back to DEFAULT_THEME.

    Returns:
        "light" or "dark", for customtkinter's appearance mode
    """
    global COLOR_BG_DARK, COLOR_BG_MEDIUM, COLOR_BG_LIGHT, COLOR_BTN_PRIMARY, \
           COLOR_BTN_DANGER, COLOR_BTN_TEXT, COLOR_TEXT, COLOR_TEXT_DIM, \
           COLOR_CURRENT_ROW, COLOR_INVALID, COLOR_STATUS, APPEARANCE_MODE

    # 1. Resolve the name
    if not theme_name or theme_name not in THEMES:
        theme_name = DEFAULT_THEME

    # 2. Palette
    _palette = THEMES[theme_name]

    # 3. Publish as module globals
    COLOR_BG_DARK = _palette["bg_primary"]
    COLOR_BG_MEDIUM = _palette["bg_secondary"]
    COLOR_BG_LIGHT = _palette["bg_secondary"]
    COLOR_BTN_PRIMARY = _palette["fg_primary"]
    COLOR_BTN_DANGER = _palette.get("btn_danger", "#d63031")
    COLOR_BTN_TEXT = _palette.get("btn_text", "#ffffff")
    COLOR_TEXT = _palette["text_main"]
    COLOR_TEXT_DIM = _palette["text_dim"]
    COLOR_CURRENT_ROW = _palette.get("current_row", _palette["bg_secondary"])
    COLOR_INVALID = _palette.get("invalid", "#d63031")
    COLOR_STATUS = {
        "idle": _palette["text_dim"],
        "running": _palette.get("status_running", "#2cc985"),
        "paused": _palette.get("status_paused", "#d68f29"),
        "finished": _palette.get("status_finished", "#4fa3e0"),
    }

    # Pick the appearance mode from background brightness
    bg_brightness = int(COLOR_BG_DARK[1:3], 16) + int(COLOR_BG_DARK[3:5], 16) + int(COLOR_BG_DARK[5:7], 16)
    APPEARANCE_MODE = "light" if bg_brightness > 382 else "dark"  # (255*3)/2
    return APPEARANCE_MODE


# Load the default theme immediately when config is imported
load_theme()


# =============================================================================
# UI SETTINGS - LAYOUT & FONTS
# =============================================================================

# Button sizes
BTN_HEIGHT = 32
BTN_FONT_SIZE = 13

# Spacing
PADDING_SMALL = 5
PADDING_MEDIUM = 10
PADDING_LARGE = 20

FONT_CLOCK = ("Consolas", 48, "bold")
FONT_STATUS = ("Segoe UI", 12, "bold")
FONT_SPLIT_NAME = ("Segoe UI", 13)
FONT_SPLIT_TIME = ("Consolas", 13)
