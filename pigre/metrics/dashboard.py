"""
Dashboard Data Generation

Assembles the read-only snapshot the rendering layer draws from.
"""

from dataclasses import dataclass, field
from datetime import datetime
from typing import Optional

from ..config.settings import MissionConfig
from ..ledger.events import EventRecord
from ..ledger.store import MissionLedger
from ..simulation.entities import SimulationResult
from .views import CategoryBreakdown, DerivedViews, FlowSplit


@dataclass
class DashboardData:
    """Complete dashboard data snapshot."""
    generated_at: datetime = field(default_factory=datetime.now)

    # Header
    mission: dict = field(default_factory=dict)

    # Ledger
    kpis: dict = field(default_factory=dict)
    processed_pct: float = 0.0
    esm_total: float = 0.0

    # Last simulation
    last_result: Optional[dict] = None
    breakdown: CategoryBreakdown = field(default_factory=CategoryBreakdown)
    flow: FlowSplit = field(default_factory=FlowSplit)

    # History
    events: list = field(default_factory=list)


class DashboardGenerator:
    """Generates dashboard data from ledger, log and last result."""

    def __init__(self, mission: MissionConfig = None, views: DerivedViews = None):
        self._mission = mission or MissionConfig()
        self._views = views or DerivedViews()

    def generate(
        self,
        ledger: MissionLedger,
        events: list[EventRecord],
        last_result: Optional[SimulationResult] = None
    ) -> DashboardData:
        """Generate complete dashboard data."""
        return DashboardData(
            generated_at=datetime.now(),
            mission={
                "name": self._mission.name,
                "sol": self._mission.sol,
                "sol_total": self._mission.sol_total,
                "status": self._mission.status
            },
            kpis=ledger.to_dict(),
            processed_pct=ledger.processed_pct,
            esm_total=ledger.esm_saved_kg,
            last_result=last_result.to_dict() if last_result else None,
            breakdown=self._views.category_breakdown(last_result),
            flow=self._views.flow_split(last_result),
            events=list(events)
        )

    def format_summary(self, dashboard: DashboardData, max_events: int = 5) -> str:
        """Format dashboard as text summary."""
        mission = dashboard.mission
        kpis = dashboard.kpis
        lines = [
            f"{mission['name']} · SOL {mission['sol']}/{mission['sol_total']} · {mission['status']}",
            f"Generated: {dashboard.generated_at.strftime('%Y-%m-%d %H:%M')}",
            "",
            "Ledger:",
            f"  Energy:     {kpis['energy_kwh']:.1f} kWh",
            f"  Processed:  {kpis['materials_processed_kg']:.0f} / {kpis['materials_total_kg']:.0f} kg "
            f"({dashboard.processed_pct:.1f}%)",
            f"  Fuel:       {kpis['fuel_liters']:.0f} L",
            f"  Parts:      {kpis['parts_kg']:.1f} kg",
            f"  ESM saved:  {kpis['esm_saved_kg']:.1f} kg-eq",
            f"  Efficiency: {kpis['efficiency_pct']:.1f}%"
        ]

        if not dashboard.breakdown.is_empty:
            lines.extend(["", f"Last batch ({dashboard.last_result['mode']}):"])
            for s in dashboard.breakdown.slices:
                lines.append(f"  {s.label}: {s.value:.1f} kg ({s.share_pct:.1f}%)")
            lines.append(
                f"  Flow: {dashboard.flow.primary_pct}% primary / {dashboard.flow.leftover_pct}% leftover"
            )

        if dashboard.events:
            lines.extend(["", "Recent events:"])
            for e in dashboard.events[:max_events]:
                lines.append(f"  #{e.id} [{e.source}/{e.kind}] {e.message} {e.detail}".rstrip())

        return "\n".join(lines)
