#!/usr/bin/env python3
"""
Split Station - Live Split Timer Display

Shows a speedrun timer driven by an external timing engine. The engine posts
tick/state/delta events over HTTP; the display interpolates the clock between
ticks so it runs smoothly at frame rate.

Usage:
    python main.py [--host HOST] [--port PORT] [--theme NAME] [--no-web] [--debug]
"""

import os
import sys
import logging
import argparse
import ctypes
from datetime import datetime

# Ensure we can import from our package
sys.path.insert(0, os.path.dirname(__file__))

import config
from config import WINDOW_WIDTH, WINDOW_HEIGHT, LOG_DIR, WEB_DEFAULT_HOST, WEB_DEFAULT_PORT
from themes import THEMES, DEFAULT_THEME

# =============================================================================
# HELPER: CENTER WINDOW & HIGH DPI FIX
# =============================================================================
def make_dpi_aware():
    """Fixes blurry UI and incorrect positioning on Windows."""
    if os.name != 'nt':
        return
    try:
        ctypes.windll.shcore.SetProcessDpiAwareness(1)
    except (AttributeError, OSError):
        try:
            ctypes.windll.user32.SetProcessDPIAware()
        except (AttributeError, OSError):
            pass

def center_window(window, width, height):
    """Centers a tkinter window on the screen reliably."""
    window.update_idletasks()
    screen_width = window.winfo_screenwidth()
    screen_height = window.winfo_screenheight()
    x = int((screen_width / 2) - (width / 2))
    y = int((screen_height / 2) - (height / 2))
    window.geometry(f"{width}x{height}+{x}+{y}")

# =============================================================================
# UTILS
# =============================================================================

def setup_logging(debug: bool = False) -> logging.Logger:
    os.makedirs(LOG_DIR, exist_ok=True)
    timestamp = datetime.now().strftime("%Y%m%d_%H%M%S")
    log_file = os.path.join(LOG_DIR, f"split_station_{timestamp}.log")

    logging.basicConfig(
        level=logging.DEBUG if debug else logging.INFO,
        format="%(asctime)s.%(msecs)03d [%(levelname)s] %(message)s",
        datefmt="%H:%M:%S",
        handlers=[logging.StreamHandler(sys.stdout), logging.FileHandler(log_file)]
    )
    return logging.getLogger("SplitStation")


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(description="Live split timer display")
    parser.add_argument("--host", default=WEB_DEFAULT_HOST,
                        help="Interface for the feed/monitor server")
    parser.add_argument("--port", type=int, default=WEB_DEFAULT_PORT,
                        help="Port for the feed/monitor server")
    parser.add_argument("--theme", default=DEFAULT_THEME, choices=sorted(THEMES),
                        help="Color theme")
    parser.add_argument("--no-web", action="store_true",
                        help="Do not start the feed/monitor server")
    parser.add_argument("--debug", action="store_true")
    return parser


# =============================================================================
# MAIN
# =============================================================================

def main(argv=None):
    make_dpi_aware()

    # 1. SETUP & LOGGING (Must happen first!)
    args = build_parser().parse_args(argv)
    logger = setup_logging(debug=args.debug)
    logger.info("Split Station Starting")

    # 2. THEME (before the UI modules read their colors from config)
    mode = config.load_theme(args.theme)
    logger.info(f"Theme: {args.theme} ({mode})")

    # Late import to ensure it uses the loaded theme
    from frontend.app import SplitStationApp

    try:
        app = SplitStationApp(host=args.host, port=args.port, enable_web=not args.no_web)
        center_window(app, WINDOW_WIDTH, WINDOW_HEIGHT)
        app.run()
    except Exception as e:
        logger.exception(f"Critical Error: {e}")
        return 1

    logger.info("Split Station Exiting")
    return 0


if __name__ == "__main__":
    sys.exit(main())
