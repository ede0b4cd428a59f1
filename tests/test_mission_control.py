"""
Mission Control Use Case Tests

End-to-end flow through the facade: simulate, preview, confirm, presets,
views, export and snapshot.
"""

import math

import pytest

from pigre.config import Settings
from pigre.core import CorruptResult, InvalidBatchSize
from pigre.simulation import Mode, SavingsBreakdown, SimulationResult
from pigre.use_cases import MissionControl


class TestLifecycle:

    def test_initialized_event(self, console):
        events = console.recent_events()

        assert len(events) == 1
        assert events[0].kind == "info"
        assert "initialized" in events[0].message

    def test_instances_are_independent(self, settings):
        first = MissionControl(settings)
        second = MissionControl(settings)

        first.simulate(Mode.PYROLYSIS, 100)
        first.confirm()

        assert second.kpis.materials_processed_kg == 7820
        assert len(second.recent_events()) == 1


class TestSimulateAndConfirm:

    def test_simulate_has_no_side_effects(self, console):
        ledger_before = console.kpis
        events_before = console.recent_events()

        console.simulate(Mode.FUSION, 200, 50)

        assert console.kpis is ledger_before
        assert console.recent_events() == events_before
        assert console.last_result.mode == Mode.FUSION

    def test_rejected_simulation_keeps_previous_result(self, console):
        console.simulate(Mode.PYROLYSIS, 100)
        events_before = console.recent_events()

        with pytest.raises(InvalidBatchSize):
            console.simulate(Mode.PYROLYSIS, 800)

        assert console.last_result.batch_mass_kg == 100
        assert console.recent_events() == events_before

    def test_preview_then_confirm(self, console):
        console.simulate(Mode.PYROLYSIS, 100)
        preview = console.preview()
        transition = console.confirm()

        assert preview == transition
        assert console.kpis == transition.after

    def test_confirm_logs_process_event(self, console):
        console.simulate(Mode.PYROLYSIS, 100)
        console.confirm()
        event = console.recent_events(1)[0]

        assert event.source == "SIM"
        assert event.kind == "process"
        assert event.message == "Processed 100 kg via PYROLYSIS"
        assert event.detail == "ΔESM=85.60 kg-eq"

    def test_confirm_without_simulation(self, console):
        with pytest.raises(ValueError):
            console.confirm()

    def test_corrupt_result_logged_as_critical(self, console):
        bad = SimulationResult(
            mode=Mode.PYROLYSIS,
            batch_mass_kg=100.0,
            process_energy_kwh=math.nan,
            net_energy_kwh=0.0,
            logistics_savings_kg=0.0,
            logistics_savings_breakdown=SavingsBreakdown(),
            confidence=0.5
        )
        ledger_before = console.kpis

        with pytest.raises(CorruptResult):
            console.confirm(bad)

        assert console.kpis is ledger_before
        assert console.recent_events(1)[0].kind == "critical"


    def test_confirm_accepts_plain_string_mode(self, console):
        result = SimulationResult(
            mode="compact",
            batch_mass_kg=50.0,
            process_energy_kwh=5.0,
            net_energy_kwh=-5.0,
            logistics_savings_kg=17.4,
            logistics_savings_breakdown=SavingsBreakdown(-0.2, 17.6),
            confidence=0.95
        )
        console.confirm(result)

        assert console.recent_events(1)[0].message == "Processed 50 kg via COMPACTION"

    def test_unknown_mode_logged_as_critical(self, console):
        bad = SimulationResult(
            mode="smelting",
            batch_mass_kg=50.0,
            process_energy_kwh=5.0,
            net_energy_kwh=-5.0,
            logistics_savings_kg=1.0,
            logistics_savings_breakdown=SavingsBreakdown(),
            confidence=0.5
        )

        with pytest.raises(CorruptResult):
            console.confirm(bad)

        assert console.recent_events(1)[0].kind == "critical"


class TestQuickActions:

    def test_optimize_energy_logs_action(self, console):
        transition = console.optimize_energy()
        event = console.recent_events(1)[0]

        assert transition.after.energy_kwh == 2540
        assert transition.after.efficiency_pct == pytest.approx(95.5)
        assert event.source == "SYSTEM"
        assert event.kind == "action"
        assert event.message == "Optimize Energy"
        assert event.detail == "Energy +200"

    def test_prioritize_fuel_logs_action(self, console):
        console.prioritize_fuel()
        event = console.recent_events(1)[0]

        assert console.kpis.fuel_liters == 920
        assert console.kpis.energy_kwh == 2290
        assert (event.kind, event.message, event.detail) == ("action", "Prioritize Fuel", "Fuel +30 L")

    def test_produce_parts_logs_action(self, console):
        console.produce_parts()
        event = console.recent_events(1)[0]

        assert console.kpis.parts_kg == 287
        assert console.kpis.materials_processed_kg == 7832
        assert (event.kind, event.message, event.detail) == ("action", "Produce Parts", "12 kg parts")

    def test_efficiency_cap_and_energy_floor(self, settings):
        settings.ledger.energy_kwh = 40.0
        settings.ledger.efficiency_pct = 99.0
        console = MissionControl(settings)

        console.optimize_energy()
        assert console.kpis.efficiency_pct == 99.9

        for _ in range(6):
            console.prioritize_fuel()
        assert console.kpis.energy_kwh == 0.0

    def test_processed_capped_at_total(self, settings):
        settings.ledger.materials_processed_kg = 12590.0
        console = MissionControl(settings)

        console.produce_parts()
        console.produce_parts()

        assert console.kpis.materials_processed_kg == 12600
        assert console.kpis.parts_kg == 275 + 24
        assert len(console.events.of_kind("action")) == 2

    def test_quick_actions_leave_pending_result(self, console):
        console.simulate(Mode.COMPACTION, 75)
        console.produce_parts()

        assert console.last_result.batch_mass_kg == 75


class TestViews:

    def test_defaults_without_simulation(self, console):
        assert console.breakdown().is_empty
        assert console.flow_split().to_dict() == {"primary": 0, "leftover": 100}

    def test_views_follow_last_result(self, console):
        console.simulate(Mode.FUSION, 100)

        assert console.flow_split().primary_pct == 68
        assert not console.breakdown().is_empty

    def test_preset_updates_last_result(self, console, no_sleep):
        console.run_preset("SteadyRun", sleep=no_sleep)

        assert console.last_result.mode == Mode.COMPACTION
        assert console.flow_split().to_dict() == {"primary": 35, "leftover": 65}
        assert console.kpis.materials_processed_kg == 8120

    def test_preset_uses_operator_allocation(self, console, no_sleep):
        outcomes = console.run_preset("SteadyRun", sleep=no_sleep, allocation_pct=50)

        assert outcomes[-1].result.confidence == pytest.approx(0.475)
        assert console.last_result.confidence == pytest.approx(0.475)


class TestExportAndSnapshot:

    def test_export_records_event_after_serializing(self, console):
        csv_text = console.export()

        assert "Export CSV generated" not in csv_text
        assert console.recent_events(1)[0].kind == "export"

    def test_export_limited_to_recent_events(self, settings):
        settings.events.export_limit = 5
        console = MissionControl(settings)
        for _ in range(10):
            console.simulate(Mode.COMPACTION, 20)
            console.confirm()

        lines = console.export().strip().split("\n")
        assert len(lines) == 4 + 5

    def test_snapshot(self, console):
        console.simulate(Mode.PYROLYSIS, 100)
        console.confirm()
        snap = console.snapshot()

        assert snap["esm_total"] == pytest.approx(85.6032)
        assert snap["kpis"]["materials_processed_kg"] == 7920
        assert [e["type"] for e in snap["events"]] == ["process", "info"]

    def test_summary_mentions_mission(self, console):
        console.simulate(Mode.COMPACTION, 75)
        summary = console.summary()

        assert "Mars Alpha" in summary
        assert "Flow: 35% primary / 65% leftover" in summary

    def test_dashboard(self, console):
        dashboard = console.dashboard()

        assert dashboard.mission["sol"] == 892
        assert dashboard.processed_pct == pytest.approx(7820 / 12600 * 100)
        assert dashboard.last_result is None


class TestSettingsOverride:

    def test_custom_ledger(self):
        settings = Settings.from_env()
        settings.ledger.energy_kwh = 10.0
        console = MissionControl(settings)

        console.simulate(Mode.FUSION, 100)
        console.confirm()

        assert console.kpis.energy_kwh == 0.0
