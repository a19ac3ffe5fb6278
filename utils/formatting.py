"""
Time formatting utilities for Split Station.

All durations are integer milliseconds. The format_* functions are the
only way durations leave the app as text, and parse_time is the only way
typed text comes back in.
"""

from typing import Optional

PLACEHOLDER = "-"


def _split_ms(ms: int):
    """Break milliseconds into (hours, minutes, seconds, milliseconds)."""
    total_seconds = ms // 1000
    millis = ms % 1000
    hours = total_seconds // 3600
    minutes = (total_seconds % 3600) // 60
    seconds = total_seconds % 60
    return hours, minutes, seconds, millis


def format_time(ms: int) -> str:
    """
    Format milliseconds as a clock string.

    The hour field is dropped when zero, and the minute field is dropped
    too when both are zero.

    Args:
        ms: Duration in milliseconds (negative values clamp to 0)

    Returns:
        Formatted string like "5.000", "1:01.234" or "1:01:01.001"
    """
    ms = max(0, int(ms))
    hours, minutes, seconds, millis = _split_ms(ms)

    if hours > 0:
        return f"{hours}:{minutes:02d}:{seconds:02d}.{millis:03d}"
    if minutes > 0:
        return f"{minutes}:{seconds:02d}.{millis:03d}"
    return f"{seconds}.{millis:03d}"


def format_delta(ms: int) -> str:
    """
    Format a signed delta with centisecond precision.

    Sub-second precision is truncated, not rounded: 1509 ms is "+1.50".

    Args:
        ms: Delta in milliseconds (negative = ahead of comparison)

    Returns:
        Formatted string like "+1.50" or "-1:05.25"
    """
    ms = int(ms)
    sign = "-" if ms < 0 else "+"
    value = abs(ms)

    total_seconds = value // 1000
    centis = (value % 1000) // 10
    minutes = total_seconds // 60
    seconds = total_seconds % 60

    if minutes > 0:
        return f"{sign}{minutes}:{seconds:02d}.{centis:02d}"
    return f"{sign}{seconds}.{centis:02d}"


def format_split_time(ms: int) -> str:
    """Format a split time, showing the placeholder for a split not yet reached."""
    if ms == 0:
        return PLACEHOLDER
    return format_time(ms)


def format_run_time(ms: int) -> str:
    """
    Format a total run time. Always shows at least M:SS.mmm.

    Args:
        ms: Duration in milliseconds

    Returns:
        Formatted string like "0:01.000", or the placeholder for ms <= 0
    """
    if ms <= 0:
        return PLACEHOLDER

    hours, minutes, seconds, millis = _split_ms(int(ms))
    if hours > 0:
        return f"{hours}:{minutes:02d}:{seconds:02d}.{millis:03d}"
    return f"{minutes}:{seconds:02d}.{millis:03d}"


def _parse_uint(text: str) -> Optional[int]:
    # str.isdigit() accepts things like superscripts, so check ASCII explicitly
    if not text or not text.isascii() or not text.isdigit():
        return None
    return int(text)


def parse_time(text: str) -> Optional[int]:
    """
    Parse a time string to milliseconds.

    Accepts formats:
    - "1:02:03.456" (H:MM:SS.mmm)
    - "1:23.45" (M:SS.ms, fraction padded to "450")
    - "83.4" (seconds with a 1-3 digit fraction)
    - "83" (just seconds, integer)
    - "" or "-" (zero)

    Args:
        text: Time string to parse

    Returns:
        Time in milliseconds, or None if the text is not a valid time
    """
    text = text.strip()
    if text == "" or text == PLACEHOLDER:
        return 0

    parts = text.split(':')
    if len(parts) > 3:
        return None

    hours = 0
    minutes = 0
    if len(parts) == 3:
        hours = _parse_uint(parts[0])
        minutes = _parse_uint(parts[1])
    elif len(parts) == 2:
        minutes = _parse_uint(parts[0])
    if hours is None or minutes is None:
        return None

    sec_parts = parts[-1].split('.')
    if len(sec_parts) > 2:
        return None

    seconds = _parse_uint(sec_parts[0])
    if seconds is None:
        return None

    millis = 0
    if len(sec_parts) == 2:
        frac = sec_parts[1]
        if len(frac) < 1 or len(frac) > 3:
            return None
        millis = _parse_uint(frac.ljust(3, '0'))
        if millis is None:
            return None

    return (hours * 3600 + minutes * 60 + seconds) * 1000 + millis
