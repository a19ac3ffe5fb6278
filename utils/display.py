"""
Display helpers for Split Station.

Turns the engine's split table and deltas into ready-to-draw rows. Shared
by the desktop splits panel and the web monitor so both show the same text.
"""

from dataclasses import asdict, dataclass
from typing import Dict, Iterable, List, Optional

from config import DELTA_COLORS
from .formatting import PLACEHOLDER, format_delta, format_split_time


@dataclass(frozen=True)
class SplitRow:
    index: int
    name: str
    split_text: str
    segment_text: str
    delta_text: str
    delta_color: Optional[str]
    is_current: bool

    def to_dict(self):
        return asdict(self)


def delta_color(delta, colors: Optional[Dict[str, str]] = None) -> str:
    """
    Pick the color for a delta from the flags the engine set.

    Args:
        delta: Delta with is_best_ever / is_ahead / gained_time flags
        colors: Mapping with ahead_gaining, ahead_losing, behind_gaining,
                behind_losing and best_segment keys

    Returns:
        Hex color string
    """
    colors = colors or DELTA_COLORS
    if delta.is_best_ever:
        return colors['best_segment']
    if delta.is_ahead:
        return colors['ahead_gaining'] if delta.gained_time else colors['ahead_losing']
    return colors['behind_gaining'] if delta.gained_time else colors['behind_losing']


def _time_at(values, index: int) -> str:
    if index < len(values):
        return format_split_time(values[index])
    return PLACEHOLDER


def build_split_rows(snapshot, deltas: Iterable = (),
                     colors: Optional[Dict[str, str]] = None) -> List[SplitRow]:
    """
    Build one row per split name.

    Args:
        snapshot: TickSnapshot from the display state
        deltas: Deltas from the engine (matched by segment_index)
        colors: Delta color mapping (defaults to config.DELTA_COLORS)
    """
    by_segment = {d.segment_index: d for d in deltas}

    rows = []
    for i, name in enumerate(snapshot.split_names):
        delta = by_segment.get(i)
        if delta is not None and not delta.skipped:
            delta_text = format_delta(delta.delta_ms)
            color = delta_color(delta, colors)
        else:
            delta_text = ""
            color = None

        rows.append(SplitRow(
            index=i,
            name=name,
            split_text=_time_at(snapshot.split_times_ms, i),
            segment_text=_time_at(snapshot.segment_times_ms, i),
            delta_text=delta_text,
            delta_color=color,
            is_current=(i == snapshot.current_segment),
        ))
    return rows
