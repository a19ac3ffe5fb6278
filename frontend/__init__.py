"""
Frontend module for Split Station.

Contains all UI components built with CustomTkinter.
Each component is a separate class for easy modification and testing.
"""

from .app import SplitStationApp

__all__ = ['SplitStationApp']
