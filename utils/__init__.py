"""
Utility functions for Split Station.
"""

from .formatting import format_time, format_delta, format_split_time, format_run_time, parse_time

__all__ = ['format_time', 'format_delta', 'format_split_time', 'format_run_time', 'parse_time']
