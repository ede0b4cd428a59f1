"""
Derived Views

Presentation-ready breakdowns recomputed from a single simulation result:
- Category distribution (fuel, primary output, leftover, loss equivalent)
- Two-stage flow split (primary vs leftover percentage)

These never read or write the cumulative ledger.
"""

from dataclasses import dataclass
from typing import Optional
import math

from ..config.settings import ConversionConfig
from ..simulation.entities import Mode, SimulationResult


@dataclass(frozen=True)
class CategorySlice:
    """One weighted category of the distribution."""
    key: str
    label: str
    value: float
    share: float  # 0..1

    @property
    def share_pct(self) -> float:
        return self.share * 100


@dataclass(frozen=True)
class CategoryBreakdown:
    """Category distribution; total is floored at 1 to keep shares finite."""
    slices: tuple[CategorySlice, ...] = ()
    total: float = 0.0

    @property
    def is_empty(self) -> bool:
        return not self.slices

    def shares(self) -> dict[str, float]:
        return {s.key: s.share for s in self.slices}


@dataclass(frozen=True)
class FlowSplit:
    """Primary vs leftover share of a batch, in whole percent."""
    primary_pct: int = 0
    leftover_pct: int = 100

    def to_dict(self) -> dict[str, int]:
        return {"primary": self.primary_pct, "leftover": self.leftover_pct}


def round_half_up(value: float) -> int:
    return int(math.floor(value + 0.5))


class DerivedViews:
    """Computes the display breakdowns for the most recent result."""

    def __init__(self, config: ConversionConfig = None):
        self.config = config or ConversionConfig()

    def category_breakdown(self, result: Optional[SimulationResult]) -> CategoryBreakdown:
        if result is None:
            return CategoryBreakdown()

        fuel = result.fuel_mass_kg or 0.0
        primary = result.logistics_savings_breakdown.from_primary_output or 0.0
        leftover = max(0.0, result.batch_mass_kg - (fuel + primary))
        loss = 0.0
        if result.net_energy_kwh < 0:
            loss = abs(result.net_energy_kwh) / (self.config.fuel_energy_density_kwh_per_kg or 1)

        values = [
            ("fuel", "Fuel (usable)", fuel),
            ("primary", "Parts (3D)" if result.mode == Mode.FUSION else "Reusable material", primary),
            ("leftover", "Residue (leftover)", leftover),
            ("loss", "Losses (eq)", loss)
        ]
        total = max(sum(v for _, _, v in values), 1.0)

        return CategoryBreakdown(
            slices=tuple(
                CategorySlice(key=key, label=label, value=value, share=value / total)
                for key, label, value in values
            ),
            total=total
        )

    def flow_split(self, result: Optional[SimulationResult]) -> FlowSplit:
        if result is None or result.batch_mass_kg <= 0:
            return FlowSplit()

        primary_pct = round_half_up(100 * result.primary_output_kg / result.batch_mass_kg)
        primary_pct = min(100, max(0, primary_pct))
        return FlowSplit(primary_pct=primary_pct, leftover_pct=100 - primary_pct)
