"""
Mission Ledger

Cumulative mission KPIs and the only code allowed to change them.

Mutation rules for one applied simulation result:
1. Energy drops by the process energy, floored at zero
2. Fuel grows by the produced fuel volume (pyrolysis only)
3. Processed mass grows by the batch, truncated at the mission total
4. Fusion converts half of its recovered metal share into fabricated parts
5. Logistics savings grow by the result's clamped savings
6. Efficiency rises by at most 3 points per result and stays below 100

Quick actions (optimize energy, prioritize fuel, produce parts) adjust the
ledger directly with the same floors and caps.
"""

from dataclasses import asdict, dataclass, replace
from datetime import datetime
from typing import Callable, Optional
import logging
import math
import threading

from ..config.settings import LedgerConfig
from ..core.errors import CorruptResult, UnknownMode
from ..simulation.entities import Mode, SimulationResult
from .events import _label

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class MissionLedger:
    """Immutable snapshot of the mission KPIs."""
    energy_kwh: float
    materials_processed_kg: float
    materials_total_kg: float
    fuel_liters: float
    parts_kg: float
    efficiency_pct: float
    esm_saved_kg: float

    @classmethod
    def from_config(cls, config: LedgerConfig) -> "MissionLedger":
        return cls(
            energy_kwh=config.energy_kwh,
            materials_processed_kg=min(config.materials_processed_kg, config.materials_total_kg),
            materials_total_kg=config.materials_total_kg,
            fuel_liters=config.fuel_liters,
            parts_kg=config.parts_kg,
            efficiency_pct=config.efficiency_pct,
            esm_saved_kg=config.esm_saved_kg
        )

    @property
    def processed_pct(self) -> float:
        """Share of the mission's material already processed."""
        if self.materials_total_kg <= 0:
            return 0.0
        return self.materials_processed_kg / self.materials_total_kg * 100

    def to_dict(self) -> dict:
        return asdict(self)


@dataclass(frozen=True)
class LedgerTransition:
    """Ledger state before and after one applied result."""
    before: MissionLedger
    after: MissionLedger

    def deltas(self) -> dict[str, float]:
        """Per-field change (after - before)."""
        before = self.before.to_dict()
        return {
            name: value - before[name]
            for name, value in self.after.to_dict().items()
        }


class LedgerStore:
    """
    Owns the mission ledger.

    Every mutation builds a complete new snapshot and swaps it in under a
    lock, so a failed apply leaves no partial update behind.
    """

    def __init__(self, config: LedgerConfig = None):
        self.config = config or LedgerConfig()
        self._ledger = MissionLedger.from_config(self.config)
        self._lock = threading.Lock()
        self._applied_count = 0
        self._last_applied_at: Optional[datetime] = None

    @property
    def snapshot(self) -> MissionLedger:
        """Current ledger (immutable value)."""
        return self._ledger

    @property
    def applied_count(self) -> int:
        return self._applied_count

    @property
    def last_applied_at(self) -> Optional[datetime]:
        return self._last_applied_at

    def preview(self, result: SimulationResult) -> LedgerTransition:
        """Compute the transition apply() would make, without mutating."""
        mode = self._validate(result)
        before = self._ledger
        return LedgerTransition(before=before, after=self._project(before, result, mode))

    def apply(self, result: SimulationResult) -> LedgerTransition:
        """Fold a simulation result into the ledger."""
        mode = self._validate(result)

        with self._lock:
            before = self._ledger
            after = self._project(before, result, mode)
            self._ledger = after
            self._applied_count += 1
            self._last_applied_at = datetime.now()

        logger.info(
            "Applied %s kg via %s: esm %.2f -> %.2f kg-eq, energy %.1f -> %.1f kWh",
            result.batch_mass_kg, mode.value,
            before.esm_saved_kg, after.esm_saved_kg,
            before.energy_kwh, after.energy_kwh
        )
        return LedgerTransition(before=before, after=after)

    def reset(self) -> MissionLedger:
        """Restore the configured initial ledger."""
        with self._lock:
            self._ledger = MissionLedger.from_config(self.config)
            self._applied_count = 0
            self._last_applied_at = None
        return self._ledger

    # Quick actions

    def optimize_energy(self) -> LedgerTransition:
        """Route spare capacity to storage: more energy, a small efficiency bump."""
        c = self.config
        return self._adjust(
            "optimize_energy",
            lambda ledger: replace(
                ledger,
                energy_kwh=ledger.energy_kwh + c.optimize_energy_kwh,
                efficiency_pct=min(c.efficiency_ceiling_pct, ledger.efficiency_pct + c.optimize_efficiency_pct)
            )
        )

    def prioritize_fuel(self) -> LedgerTransition:
        """Trade energy for fuel; energy is floored at zero."""
        c = self.config
        return self._adjust(
            "prioritize_fuel",
            lambda ledger: replace(
                ledger,
                fuel_liters=ledger.fuel_liters + c.fuel_priority_liters,
                energy_kwh=max(0.0, ledger.energy_kwh - c.fuel_priority_energy_kwh)
            )
        )

    def produce_parts(self) -> LedgerTransition:
        """Fabricate one parts batch from processed material."""
        c = self.config
        return self._adjust(
            "produce_parts",
            lambda ledger: replace(
                ledger,
                parts_kg=ledger.parts_kg + c.parts_batch_kg,
                materials_processed_kg=min(
                    ledger.materials_total_kg,
                    ledger.materials_processed_kg + c.parts_batch_kg
                )
            )
        )

    def _adjust(self, action: str, update: Callable[[MissionLedger], MissionLedger]) -> LedgerTransition:
        with self._lock:
            before = self._ledger
            after = update(before)
            self._ledger = after

        logger.info("Quick action %s applied", action)
        return LedgerTransition(before=before, after=after)

    def _validate(self, result: SimulationResult) -> Mode:
        """Reject non-finite or non-numeric values, a non-positive batch or negative savings."""
        invalid = {}
        for name, value in result.numeric_fields().items():
            if value is None:
                continue
            try:
                if not math.isfinite(value):
                    invalid[name] = value
            except TypeError:
                invalid[name] = value

        try:
            mode = Mode.parse(result.mode)
        except UnknownMode:
            invalid["mode"] = result.mode
            mode = None

        if "batch_mass_kg" not in invalid and not (result.batch_mass_kg or 0) > 0:
            invalid["batch_mass_kg"] = result.batch_mass_kg
        savings = result.logistics_savings_kg
        if "logistics_savings_kg" not in invalid and (savings is None or savings < 0):
            invalid["logistics_savings_kg"] = result.logistics_savings_kg

        if invalid:
            logger.error("Refusing corrupt %s result: %s", _label(result.mode), invalid)
            raise CorruptResult(invalid)
        return mode

    def _project(self, ledger: MissionLedger, result: SimulationResult, mode: Mode) -> MissionLedger:
        """Pure ledger update for one result."""
        c = self.config
        savings = result.logistics_savings_kg
        from_primary = result.logistics_savings_breakdown.from_primary_output

        fuel = ledger.fuel_liters
        if result.fuel_volume_l:
            fuel = max(0.0, fuel + result.fuel_volume_l)

        parts = ledger.parts_kg
        if mode == Mode.FUSION and from_primary > 0:
            parts = parts + from_primary * c.parts_yield

        efficiency_gain = min(c.max_efficiency_gain_pct, (savings / 100) * 0.5)

        return replace(
            ledger,
            energy_kwh=max(0.0, ledger.energy_kwh - (result.process_energy_kwh or 0.0)),
            fuel_liters=fuel,
            materials_processed_kg=min(
                ledger.materials_total_kg,
                ledger.materials_processed_kg + result.batch_mass_kg
            ),
            parts_kg=parts,
            esm_saved_kg=max(0.0, ledger.esm_saved_kg + savings),
            efficiency_pct=min(c.efficiency_ceiling_pct, ledger.efficiency_pct + efficiency_gain)
        )
