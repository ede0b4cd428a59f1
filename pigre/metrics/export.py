"""
Snapshot Export

Serializes the current ledger and the most recent events as CSV text for
the reporting collaborator. Layout:

    header row
    ledger row
    (empty line)
    EVENTS
    event rows: time, source, kind, message, detail
"""

from datetime import datetime, timezone
from typing import Iterable
import csv
import io

from ..ledger.events import EventRecord
from ..ledger.store import MissionLedger

EXPORT_HEADERS = (
    "timestamp",
    "energy_kwh",
    "materials_processed_kg",
    "materials_total_kg",
    "fuel_liters",
    "parts_kg",
    "efficiency_pct",
    "esm_saved_kg"
)


def export_filename(now: datetime = None) -> str:
    now = now or datetime.now(timezone.utc)
    return f"pigre_snapshot_{now.isoformat()}.csv"


def export_csv(
    ledger: MissionLedger,
    events: Iterable[EventRecord] = (),
    limit: int = 30,
    now: datetime = None
) -> str:
    """Render the export contract as CSV text."""
    now = now or datetime.now(timezone.utc)
    buffer = io.StringIO()
    writer = csv.writer(buffer, lineterminator="\n")

    writer.writerow(EXPORT_HEADERS)
    writer.writerow([
        now.isoformat(),
        ledger.energy_kwh,
        ledger.materials_processed_kg,
        ledger.materials_total_kg,
        ledger.fuel_liters,
        ledger.parts_kg,
        ledger.efficiency_pct,
        ledger.esm_saved_kg
    ])
    writer.writerow([])
    writer.writerow(["EVENTS"])

    for i, event in enumerate(events):
        if i >= limit:
            break
        writer.writerow(event.to_row())

    return buffer.getvalue()
