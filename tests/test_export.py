"""CSV export contract tests."""

from datetime import datetime, timezone
import csv
import io

from pigre.ledger import EventLog
from pigre.metrics import EXPORT_HEADERS, export_csv, export_filename

NOW = datetime(2025, 9, 30, 14, 23, 45, tzinfo=timezone.utc)


def parse(text):
    return list(csv.reader(io.StringIO(text)))


class TestExportCsv:

    def test_header_order(self, ledger):
        lines = export_csv(ledger.snapshot, now=NOW).split("\n")

        assert lines[0] == (
            "timestamp,energy_kwh,materials_processed_kg,materials_total_kg,"
            "fuel_liters,parts_kg,efficiency_pct,esm_saved_kg"
        )

    def test_ledger_row(self, ledger):
        rows = parse(export_csv(ledger.snapshot, now=NOW))

        assert rows[1][0] == NOW.isoformat()
        assert dict(zip(EXPORT_HEADERS[1:], map(float, rows[1][1:]))) == {
            "energy_kwh": 2340.0,
            "materials_processed_kg": 7820.0,
            "materials_total_kg": 12600.0,
            "fuel_liters": 890.0,
            "parts_kg": 275.0,
            "efficiency_pct": 94.0,
            "esm_saved_kg": 0.0
        }

    def test_events_section(self, ledger, events):
        events.record("SIM", "process", "Processed 100 kg via PYROLYSIS", "ΔESM=85.60 kg-eq")
        rows = parse(export_csv(ledger.snapshot, events.recent(), now=NOW))

        assert rows[2] == []
        assert rows[3] == ["EVENTS"]
        assert rows[4][1:] == ["SIM", "process", "Processed 100 kg via PYROLYSIS", "ΔESM=85.60 kg-eq"]

    def test_event_limit(self, ledger, events):
        for i in range(45):
            events.record("SYSTEM", "info", f"event {i}")
        rows = parse(export_csv(ledger.snapshot, events.recent(), limit=30, now=NOW))

        event_rows = rows[4:]
        assert len(event_rows) == 30
        assert event_rows[0][3] == "event 44"

    def test_commas_are_quoted(self, ledger):
        log = EventLog()
        log.record("SYSTEM", "info", "alpha, beta", "x,y")
        rows = parse(export_csv(ledger.snapshot, log.recent(), now=NOW))

        assert rows[4][3:] == ["alpha, beta", "x,y"]

    def test_filename(self):
        assert export_filename(NOW) == "pigre_snapshot_2025-09-30T14:23:45+00:00.csv"
