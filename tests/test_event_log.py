"""Event log ordering, capacity and read contract."""

from pigre.config import EventLogConfig
from pigre.ledger import EventKind, EventLog, EventSource


class TestRecord:

    def test_record_returns_entry(self, events):
        event = events.record(EventSource.SIM, EventKind.PROCESS, "Processed 100 kg via PYROLYSIS", "ΔESM=85.60 kg-eq")

        assert event.source == "SIM"
        assert event.kind == "process"
        assert event.detail == "ΔESM=85.60 kg-eq"
        assert event.timestamp.tzinfo is not None
        assert events.recent(1) == [event]

    def test_plain_string_labels(self, events):
        event = events.record("OPERATOR", "note", "Manual note")

        assert event.source == "OPERATOR"
        assert event.kind == "note"
        assert event.detail == ""

    def test_ids_strictly_increasing(self, events):
        ids = [events.record("SYSTEM", "info", f"event {i}").id for i in range(10)]

        assert ids == sorted(ids)
        assert len(set(ids)) == 10


class TestCapacity:

    def test_never_exceeds_capacity(self, events):
        for i in range(250):
            events.record("SYSTEM", "info", f"event {i}")
            assert len(events) <= 200

        assert len(events) == 200

    def test_drops_oldest(self, events):
        recorded = [events.record("SYSTEM", "info", f"event {i}") for i in range(250)]
        kept = events.recent()

        assert kept[0] == recorded[-1]
        assert kept[-1] == recorded[50]

    def test_custom_capacity(self):
        log = EventLog(EventLogConfig(capacity=3))
        for i in range(5):
            log.record("SYSTEM", "info", f"event {i}")

        assert [e.message for e in log] == ["event 4", "event 3", "event 2"]


class TestRecent:

    def test_newest_first_strictly_decreasing_ids(self, events):
        for i in range(30):
            events.record("SYSTEM", "info", f"event {i}")

        ids = [e.id for e in events.recent(12)]
        assert len(ids) == 12
        assert all(a > b for a, b in zip(ids, ids[1:]))

    def test_recent_does_not_mutate(self, events):
        for i in range(5):
            events.record("SYSTEM", "info", f"event {i}")

        view = events.recent(3)
        view.clear()

        assert len(events) == 5
        assert len(events.recent(3)) == 3

    def test_recent_more_than_available(self, events):
        events.record("SYSTEM", "info", "only")

        assert len(events.recent(50)) == 1
        assert events.recent(0) == []

    def test_of_kind(self, events):
        events.record(EventSource.SIM, EventKind.PROCESS, "a")
        events.record(EventSource.SYSTEM, EventKind.EXPORT, "b")
        events.record(EventSource.SIM, EventKind.PROCESS, "c")

        assert [e.message for e in events.of_kind(EventKind.PROCESS)] == ["c", "a"]
