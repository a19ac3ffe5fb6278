"""
Theme Definitions for Split Station.
Each palette also carries the status badge colors and the current-split highlight.
Delta colors are not themed; see config.DELTA_COLORS.
"""

DEFAULT_THEME = "Overlay Dark"

THEMES = {
    # =========================================================================
    # GROUP 1: DARK (stream overlays, capture-friendly)
    # =========================================================================
    "Overlay Dark": {
        "bg_primary": "#0b0d12", "bg_secondary": "#161a22",
        "fg_primary": "#3d8bfd", "text_main": "#f4f6fa", "text_dim": "#8b93a3",
        "btn_danger": "#c9362f", "btn_text": "#ffffff",
        "current_row": "#1d2b42", "invalid": "#ff5c52",
        "status_running": "#30d158", "status_paused": "#ffb340", "status_finished": "#5ac8fa"
    },
    # Pure black keys out cleanly in OBS
    "Chroma Black": {
        "bg_primary": "#000000", "bg_secondary": "#0d0d0d",
        "fg_primary": "#5e5e5e", "text_main": "#e6e6e6", "text_dim": "#6b6b6b",
        "btn_danger": "#7a2a2a", "btn_text": "#ffffff",
        "current_row": "#202020", "invalid": "#d9443b",
        "status_running": "#3fae5a", "status_paused": "#c98a2e", "status_finished": "#8a8a8a"
    },
    "Retro Arcade": {
        "bg_primary": "#120b1f", "bg_secondary": "#1e1433",
        "fg_primary": "#b05cff", "text_main": "#fbeaff", "text_dim": "#8673a6",
        "btn_danger": "#e0357a", "btn_text": "#ffffff",
        "current_row": "#2d1f4d", "invalid": "#ff4f8b",
        "status_running": "#4dff9a", "status_paused": "#ffd23f", "status_finished": "#4fd8ff"
    },
    "Nord Night": {
        "bg_primary": "#2e3440", "bg_secondary": "#3b4252",
        "fg_primary": "#88c0d0", "text_main": "#eceff4", "text_dim": "#7b8598",
        "btn_danger": "#bf616a", "btn_text": "#2e3440",
        "current_row": "#434c5e", "invalid": "#bf616a",
        "status_running": "#a3be8c", "status_paused": "#ebcb8b", "status_finished": "#81a1c1"
    },

    # =========================================================================
    # GROUP 2: LIGHT (bright rooms, projectors)
    # =========================================================================
    "Daylight": {
        "bg_primary": "#fafafa", "bg_secondary": "#ececec",
        "fg_primary": "#2463c9", "text_main": "#111418", "text_dim": "#6a707c",
        "btn_danger": "#b3261e", "btn_text": "#ffffff",
        "current_row": "#d9e6fb", "invalid": "#b3261e",
        "status_running": "#1f8a3b", "status_paused": "#b36b00", "status_finished": "#2463c9"
    },
    "Sepia": {
        "bg_primary": "#f5ecd9", "bg_secondary": "#e8dcc2",
        "fg_primary": "#8a5a2b", "text_main": "#3b2f22", "text_dim": "#8c7a62",
        "btn_danger": "#a8382a", "btn_text": "#ffffff",
        "current_row": "#dccaa4", "invalid": "#a8382a",
        "status_running": "#5c7f2a", "status_paused": "#b2621c", "status_finished": "#3f6f8f"
    },
}
