"""
Mission State

The two owned pieces of mutable state:
- LedgerStore: cumulative KPIs (energy, mass, fuel, parts, ESM, efficiency)
- EventLog: bounded newest-first operational history

Each is an explicit instance handed to the components that need it.
"""

from .store import (
    MissionLedger,
    LedgerTransition,
    LedgerStore
)
from .events import (
    EventSource,
    EventKind,
    EventRecord,
    EventLog
)

__all__ = [
    "MissionLedger",
    "LedgerTransition",
    "LedgerStore",
    "EventSource",
    "EventKind",
    "EventRecord",
    "EventLog"
]
