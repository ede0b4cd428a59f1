"""
Use Case Implementations

Mission control console: simulate, preview, confirm, preset playback,
derived views and export, on top of explicitly owned engine state.
"""

from .mission_control import MissionControl

__all__ = [
    "MissionControl"
]
