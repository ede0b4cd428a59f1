"""
Simulation Entities

Value types produced by the conversion engine:
- Processing modes
- Logistics savings (ESM) breakdown
- Per-batch simulation results
"""

from dataclasses import dataclass, field
from datetime import datetime
from enum import Enum
from typing import Optional, Union

from ..core.errors import UnknownMode


class Mode(str, Enum):
    """Processing modes; each selects one conversion formula."""
    PYROLYSIS = "pyrolysis"
    FUSION = "fusion"
    COMPACTION = "compaction"

    @classmethod
    def parse(cls, value: Union["Mode", str]) -> "Mode":
        """Resolve a mode or mode name (case-insensitive, accepts "compact")."""
        if isinstance(value, cls):
            return value
        name = str(value).strip().lower()
        if name == "compact":
            return cls.COMPACTION
        try:
            return cls(name)
        except ValueError:
            raise UnknownMode(value, [m.value for m in cls]) from None


@dataclass(frozen=True)
class SavingsBreakdown:
    """Unclamped components of the logistics savings."""
    from_energy: float = 0.0
    from_primary_output: float = 0.0

    @property
    def total(self) -> float:
        return self.from_energy + self.from_primary_output


@dataclass(frozen=True)
class SimulationResult:
    """
    Outcome of converting one batch.

    Fuel fields are only set for pyrolysis. Energy is in kWh, mass in kg,
    volume in litres. logistics_savings_kg is the clamped ESM headline
    (never negative); the breakdown keeps the signed components.
    """
    mode: Mode
    batch_mass_kg: float

    process_energy_kwh: float
    net_energy_kwh: float
    logistics_savings_kg: float
    logistics_savings_breakdown: SavingsBreakdown
    confidence: float

    # Pyrolysis only
    fuel_mass_kg: Optional[float] = None
    fuel_volume_l: Optional[float] = None
    fuel_energy_kwh: Optional[float] = None

    created_at: datetime = field(default_factory=datetime.now, compare=False)

    @property
    def primary_output_kg(self) -> float:
        """Mass leaving the primary stage: fuel if produced, else the primary ESM share."""
        if self.fuel_mass_kg:
            return self.fuel_mass_kg
        return self.logistics_savings_breakdown.from_primary_output or 0.0

    def numeric_fields(self) -> dict[str, Optional[float]]:
        """All numeric fields keyed by name, breakdown included."""
        return {
            "batch_mass_kg": self.batch_mass_kg,
            "process_energy_kwh": self.process_energy_kwh,
            "net_energy_kwh": self.net_energy_kwh,
            "logistics_savings_kg": self.logistics_savings_kg,
            "from_energy": self.logistics_savings_breakdown.from_energy,
            "from_primary_output": self.logistics_savings_breakdown.from_primary_output,
            "confidence": self.confidence,
            "fuel_mass_kg": self.fuel_mass_kg,
            "fuel_volume_l": self.fuel_volume_l,
            "fuel_energy_kwh": self.fuel_energy_kwh
        }

    def to_dict(self) -> dict:
        """Serialize for display or export."""
        data = {"mode": Mode.parse(self.mode).value, "created_at": self.created_at.isoformat()}
        data.update(self.numeric_fields())
        return data
