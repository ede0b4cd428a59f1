"""
Resource Conversion Simulation

Models how a batch of waste material becomes usable outputs:
- Pyrolysis: fuel oil (the only energy-positive route)
- Fusion: recovered metal for fabricated parts
- Compaction: reduced stowage volume

Formulas are illustrative approximations, not physical models. The
headline metric is the logistics savings (ESM, kg-eq): resupply mass the
mission avoids launching.
"""

from .entities import (
    Mode,
    SavingsBreakdown,
    SimulationResult
)
from .conversion import (
    convert,
    clamp_allocation
)
from .engine import SimulationEngine

__all__ = [
    "Mode",
    "SavingsBreakdown",
    "SimulationResult",
    "convert",
    "clamp_allocation",
    "SimulationEngine"
]
