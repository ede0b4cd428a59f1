"""
Use Case: Mission Control Console

The entry point the rendering layer calls on user action. It owns one
instance of every engine component and wires them together:

1. Operator picks mode, batch size and allocation -> simulate()
2. Optional preview of the ledger before/after -> preview()
3. Operator confirms -> confirm() applies the result and logs it
4. Views are recomputed from the same result -> breakdown(), flow_split()

Quick actions (optimize_energy, prioritize_fuel, produce_parts) adjust the
ledger directly and log an "action" event.

Presets, CSV export and the dashboard snapshot hang off the same object.
"""

from typing import Callable, Optional, Union
import time

from ..config.settings import Settings, get_settings
from ..core.errors import CorruptResult
from ..ledger.events import EventKind, EventLog, EventRecord, EventSource
from ..ledger.store import LedgerStore, LedgerTransition, MissionLedger
from ..metrics.dashboard import DashboardData, DashboardGenerator
from ..metrics.export import export_csv
from ..metrics.views import CategoryBreakdown, DerivedViews, FlowSplit
from ..playback.sequencer import PresetSequencer, StepOutcome, process_message
from ..simulation.engine import SimulationEngine
from ..simulation.entities import Mode, SimulationResult


class MissionControl:
    """Composes engine, ledger, log, sequencer and views for one mission."""

    def __init__(self, settings: Settings = None):
        self.settings = settings or get_settings()

        self.engine = SimulationEngine(self.settings.engine, self.settings.conversion)
        self.ledger = LedgerStore(self.settings.ledger)
        self.events = EventLog(self.settings.events)
        self.sequencer = PresetSequencer(
            self.engine,
            self.ledger,
            self.events,
            self.settings.playback
        )
        self.views = DerivedViews(self.settings.conversion)
        self._dashboard = DashboardGenerator(self.settings.mission, self.views)

        self.last_result: Optional[SimulationResult] = None

        self.events.record(
            EventSource.SYSTEM,
            EventKind.INFO,
            f"{self.settings.app_name} initialized",
            f"{self.settings.mission.name} SOL {self.settings.mission.sol}"
        )

    def simulate(
        self,
        mode: Union[Mode, str],
        batch_mass_kg: float,
        allocation_pct: float = 100.0
    ) -> SimulationResult:
        """Run a simulation and keep it as the pending result."""
        result = self.engine.simulate(mode, batch_mass_kg, allocation_pct)
        self.last_result = result
        return result

    def preview(self, result: SimulationResult = None) -> LedgerTransition:
        """Before/after ledger for a result, without applying it."""
        return self.ledger.preview(self._pending(result))

    def confirm(self, result: SimulationResult = None) -> LedgerTransition:
        """Apply a result (default: the last simulation) and log it."""
        result = self._pending(result)
        try:
            transition = self.ledger.apply(result)
        except CorruptResult as e:
            self.events.record(EventSource.SYSTEM, EventKind.CRITICAL, "Rejected corrupt simulation result", e.message)
            raise

        message, detail = process_message(result)
        self.events.record(EventSource.SIM, EventKind.PROCESS, message, detail)
        return transition

    def run_preset(
        self,
        name: str,
        sleep: Callable[[float], None] = time.sleep,
        allocation_pct: float = None
    ) -> list[StepOutcome]:
        """
        Play a preset to completion; the last step becomes the pending result.

        allocation_pct is the operator's current allocation; it defaults to
        the playback configuration.
        """
        previous = self.sequencer.last_outcome
        try:
            return self.sequencer.run(name, sleep=sleep, allocation_pct=allocation_pct)
        finally:
            latest = self.sequencer.last_outcome
            if latest is not None and latest is not previous:
                self.last_result = latest.result

    def optimize_energy(self) -> LedgerTransition:
        transition = self.ledger.optimize_energy()
        self.events.record(
            EventSource.SYSTEM,
            EventKind.ACTION,
            "Optimize Energy",
            f"Energy +{self.settings.ledger.optimize_energy_kwh:g}"
        )
        return transition

    def prioritize_fuel(self) -> LedgerTransition:
        transition = self.ledger.prioritize_fuel()
        self.events.record(
            EventSource.SYSTEM,
            EventKind.ACTION,
            "Prioritize Fuel",
            f"Fuel +{self.settings.ledger.fuel_priority_liters:g} L"
        )
        return transition

    def produce_parts(self) -> LedgerTransition:
        transition = self.ledger.produce_parts()
        self.events.record(
            EventSource.SYSTEM,
            EventKind.ACTION,
            "Produce Parts",
            f"{self.settings.ledger.parts_batch_kg:g} kg parts"
        )
        return transition

    def breakdown(self) -> CategoryBreakdown:
        return self.views.category_breakdown(self.last_result)

    def flow_split(self) -> FlowSplit:
        return self.views.flow_split(self.last_result)

    @property
    def kpis(self) -> MissionLedger:
        return self.ledger.snapshot

    def export(self) -> str:
        """CSV of the ledger and the most recent events; logged as an export."""
        csv_text = export_csv(
            self.ledger.snapshot,
            self.events.recent(self.settings.events.export_limit),
            limit=self.settings.events.export_limit
        )
        self.events.record(EventSource.SYSTEM, EventKind.EXPORT, "Export CSV generated")
        return csv_text

    def snapshot(self) -> dict:
        """Ledger, ESM total and event history as plain data."""
        ledger = self.ledger.snapshot
        return {
            "kpis": ledger.to_dict(),
            "esm_total": ledger.esm_saved_kg,
            "events": [
                {
                    "id": e.id,
                    "time": e.time,
                    "source": e.source,
                    "type": e.kind,
                    "message": e.message,
                    "detail": e.detail
                }
                for e in self.events.recent()
            ]
        }

    def dashboard(self, max_events: int = 12) -> DashboardData:
        return self._dashboard.generate(
            self.ledger.snapshot,
            self.events.recent(max_events),
            self.last_result
        )

    def summary(self) -> str:
        return self._dashboard.format_summary(self.dashboard())

    def recent_events(self, n: int = None) -> list[EventRecord]:
        return self.events.recent(n)

    def _pending(self, result: Optional[SimulationResult]) -> SimulationResult:
        if result is None:
            result = self.last_result
        if result is None:
            raise ValueError("No simulation result to apply; run simulate() first")
        return result
