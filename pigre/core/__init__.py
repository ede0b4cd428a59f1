"""
Core error taxonomy and logging setup shared by every engine component.
"""

from .errors import (
    PigreError,
    ValidationError,
    InvalidBatchSize,
    InvalidAllocation,
    UnknownMode,
    PlaybackError,
    UnknownPreset,
    AlreadyRunning,
    NotRunning,
    LedgerError,
    CorruptResult
)
from .logging import configure_logging

__all__ = [
    "PigreError",
    "ValidationError",
    "InvalidBatchSize",
    "InvalidAllocation",
    "UnknownMode",
    "PlaybackError",
    "UnknownPreset",
    "AlreadyRunning",
    "NotRunning",
    "LedgerError",
    "CorruptResult",
    "configure_logging"
]
