#!/usr/bin/env python3
"""
PIGRE Mission Control - Console Demo

Plays the role of the dashboard's rendering layer:
1. Simulates one batch per processing mode
2. Previews and confirms a pyrolysis batch
3. Plays the SteadyRun preset
4. Applies the quick actions
5. Prints the dashboard summary and the CSV export
"""

from pigre.config import get_settings
from pigre.core import PigreError, configure_logging
from pigre.simulation import Mode
from pigre.use_cases import MissionControl


def run_mode_comparison(console: MissionControl) -> None:
    """Compare the three processing modes on the same batch."""
    print("=" * 60)
    print("MODE COMPARISON (100 kg batch, 100% allocation)")
    print("=" * 60)
    print()
    print(f"{'Mode':<12} {'Process kWh':<12} {'Net kWh':<12} {'ΔESM kg-eq':<12} {'Conf.':<6}")
    print("-" * 60)

    for mode in Mode:
        result = console.engine.simulate(mode, 100, 100)
        print(
            f"{mode.value:<12} {result.process_energy_kwh:<12.1f} {result.net_energy_kwh:<12.1f} "
            f"{result.logistics_savings_kg:<12.2f} {result.confidence:<6.2f}"
        )
    print()


def run_confirm_demo(console: MissionControl) -> None:
    """Simulate, preview and confirm one batch."""
    print("=" * 60)
    print("SIMULATE -> PREVIEW -> CONFIRM")
    print("=" * 60)
    print()

    console.simulate(Mode.PYROLYSIS, 150, 80)
    transition = console.preview()
    for name, delta in transition.deltas().items():
        if delta:
            print(f"  {name:<24} {getattr(transition.before, name):>10.1f} -> {getattr(transition.after, name):>10.1f}")

    console.confirm()
    split = console.flow_split()
    print()
    print(f"Flow split: {split.primary_pct}% primary / {split.leftover_pct}% leftover")

    try:
        console.simulate(Mode.FUSION, 900)
    except PigreError as e:
        print(f"Rejected: {e}")
    print()


def run_quick_actions(console: MissionControl) -> None:
    """Apply the three quick actions and show their ledger deltas."""
    print("=" * 60)
    print("QUICK ACTIONS")
    print("=" * 60)
    print()

    for action in (console.optimize_energy, console.prioritize_fuel, console.produce_parts):
        deltas = {name: delta for name, delta in action().deltas().items() if delta}
        event = console.recent_events(1)[0]
        print(f"  {event.message:<18} {deltas}")
    print()


def run_preset_demo(console: MissionControl, name: str = "SteadyRun") -> None:
    """Play a preset without wall-clock waits."""
    print("=" * 60)
    print(f"PRESET PLAYBACK: {name}")
    print("=" * 60)
    print()

    outcomes = console.run_preset(name, sleep=lambda _: None)
    for outcome in outcomes:
        print(f"  step {outcome.index + 1}: {outcome.event.message} ({outcome.event.detail})")
    print()


def main():
    """Main entry point."""
    settings = get_settings()
    configure_logging(settings.log_level, debug=settings.debug)

    console = MissionControl(settings)

    run_mode_comparison(console)
    run_confirm_demo(console)
    run_preset_demo(console)
    run_quick_actions(console)

    print("=" * 60)
    print("DASHBOARD")
    print("=" * 60)
    print(console.summary())
    print()

    print("=" * 60)
    print("CSV EXPORT")
    print("=" * 60)
    print(console.export())


if __name__ == "__main__":
    main()
