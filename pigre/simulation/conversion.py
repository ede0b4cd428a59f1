"""
Conversion Model

Illustrative formulas for the three processing modes:
- Pyrolysis: plastics -> fuel oil; net energy positive
- Fusion: metal scrap -> feedstock for fabricated parts; energy negative
- Compaction: volume reduction; small energy cost

All functions here are pure. Same inputs give bit-identical outputs.
"""

from typing import Callable, Union
import math

from ..config.settings import ConversionConfig
from ..core.errors import InvalidAllocation, InvalidBatchSize
from .entities import Mode, SavingsBreakdown, SimulationResult


def _finite(value) -> bool:
    try:
        return math.isfinite(value)
    except TypeError:
        return False


def clamp_allocation(allocation_pct: float, config: ConversionConfig) -> float:
    """Clamp an allocation percentage and return it as a fraction."""
    if not _finite(allocation_pct):
        raise InvalidAllocation(allocation_pct)
    pct = min(max(allocation_pct, config.min_allocation_pct), config.max_allocation_pct)
    return pct / 100


def _savings(from_energy: float, from_primary: float) -> tuple[float, SavingsBreakdown]:
    breakdown = SavingsBreakdown(from_energy=from_energy, from_primary_output=from_primary)
    return max(0.0, from_energy + from_primary), breakdown


def _pyrolysis(batch: float, allocation: float, c: ConversionConfig) -> SimulationResult:
    fuel_mass = batch * c.pyrolysis_oil_yield
    fuel_energy = fuel_mass * c.fuel_energy_density_kwh_per_kg * c.process_efficiency
    process_energy = batch * c.reactor_energy_kwh_per_kg
    net_energy = fuel_energy - process_energy
    total, breakdown = _savings(net_energy * c.kwh_to_esm_factor, fuel_mass)

    return SimulationResult(
        mode=Mode.PYROLYSIS,
        batch_mass_kg=batch,
        process_energy_kwh=process_energy,
        net_energy_kwh=net_energy,
        logistics_savings_kg=total,
        logistics_savings_breakdown=breakdown,
        confidence=c.process_efficiency * allocation,
        fuel_mass_kg=fuel_mass,
        fuel_volume_l=fuel_mass / c.fuel_density_kg_per_l,
        fuel_energy_kwh=fuel_energy
    )


def _fusion(batch: float, allocation: float, c: ConversionConfig) -> SimulationResult:
    metal_recovered = batch * c.fusion_metal_yield
    process_energy = batch * c.reactor_energy_kwh_per_kg * c.fusion_energy_multiplier
    # Always energy-negative
    net_energy = -process_energy
    total, breakdown = _savings(
        net_energy * c.kwh_to_esm_factor,
        metal_recovered * c.metal_to_esm_factor
    )

    return SimulationResult(
        mode=Mode.FUSION,
        batch_mass_kg=batch,
        process_energy_kwh=process_energy,
        net_energy_kwh=net_energy,
        logistics_savings_kg=total,
        logistics_savings_breakdown=breakdown,
        confidence=c.fusion_confidence * allocation
    )


def _compaction(batch: float, allocation: float, c: ConversionConfig) -> SimulationResult:
    volume_saved_m3 = batch / c.compaction_bulk_density_kg_per_m3
    process_energy = batch * c.compaction_energy_kwh_per_kg
    net_energy = -process_energy
    total, breakdown = _savings(
        net_energy * c.kwh_to_esm_factor,
        volume_saved_m3 * c.volume_equivalent_kg_per_m3
    )

    return SimulationResult(
        mode=Mode.COMPACTION,
        batch_mass_kg=batch,
        process_energy_kwh=process_energy,
        net_energy_kwh=net_energy,
        logistics_savings_kg=total,
        logistics_savings_breakdown=breakdown,
        confidence=c.compaction_confidence * allocation
    )


FORMULAS: dict[Mode, Callable[[float, float, ConversionConfig], SimulationResult]] = {
    Mode.PYROLYSIS: _pyrolysis,
    Mode.FUSION: _fusion,
    Mode.COMPACTION: _compaction
}


def convert(
    mode: Union[Mode, str],
    batch_mass_kg: float,
    allocation_pct: float = 100.0,
    config: ConversionConfig = None
) -> SimulationResult:
    """
    Convert one batch under the given processing mode.

    allocation_pct is clamped to [10, 100] and only affects confidence.
    Raises InvalidBatchSize for non-finite or non-positive batches.
    """
    config = config or ConversionConfig()
    mode = Mode.parse(mode)

    if not _finite(batch_mass_kg) or batch_mass_kg <= 0:
        raise InvalidBatchSize(batch_mass_kg)

    allocation = clamp_allocation(allocation_pct, config)
    return FORMULAS[mode](batch_mass_kg, allocation, config)
