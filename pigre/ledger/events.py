"""
Event Log

Bounded, newest-first history of operational events. Every state-changing
action in the mission records one entry here.
"""

from dataclasses import dataclass, field
from datetime import datetime, timezone
from enum import Enum
from typing import Iterator, Optional, Union
import itertools
import logging
import threading

from ..config.settings import EventLogConfig

logger = logging.getLogger(__name__)


class EventSource(str, Enum):
    """Who produced an event."""
    SYSTEM = "SYSTEM"
    SIM = "SIM"


class EventKind(str, Enum):
    """What an event reports."""
    INFO = "info"
    PROCESS = "process"
    STARTED = "started"
    FINISHED = "finished"
    CANCELLED = "cancelled"
    EXPORT = "export"
    ACTION = "action"
    CRITICAL = "critical"


@dataclass(frozen=True)
class EventRecord:
    """One entry of the operational history."""
    id: int
    source: str
    kind: str
    message: str
    detail: str = ""
    timestamp: datetime = field(default_factory=lambda: datetime.now(timezone.utc))

    @property
    def time(self) -> str:
        return self.timestamp.isoformat()

    def to_row(self) -> list[str]:
        return [self.time, self.source, self.kind, self.message, self.detail]


def _label(value: Union[Enum, str]) -> str:
    return value.value if isinstance(value, Enum) else str(value)


class EventLog:
    """
    Append-only event history, newest first.

    Ids are strictly increasing. When the log grows past its capacity the
    oldest entries are dropped.
    """

    def __init__(self, config: EventLogConfig = None, first_id: int = 1):
        self.config = config or EventLogConfig()
        self._records: list[EventRecord] = []
        self._ids = itertools.count(first_id)
        self._lock = threading.Lock()

    @property
    def capacity(self) -> int:
        return self.config.capacity

    def record(
        self,
        source: Union[EventSource, str],
        kind: Union[EventKind, str],
        message: str,
        detail: str = ""
    ) -> EventRecord:
        """Insert an event at the head of the log and return it."""
        with self._lock:
            event = EventRecord(
                id=next(self._ids),
                source=_label(source),
                kind=_label(kind),
                message=message,
                detail=detail or ""
            )
            self._records.insert(0, event)
            del self._records[self.capacity:]

        log = logger.error if event.kind == EventKind.CRITICAL.value else logger.debug
        log("[%s/%s] %s %s", event.source, event.kind, event.message, event.detail)
        return event

    def recent(self, n: Optional[int] = None) -> list[EventRecord]:
        """First n entries, newest first (all entries when n is None)."""
        if n is None:
            return list(self._records)
        return self._records[:max(0, n)]

    def of_kind(self, kind: Union[EventKind, str]) -> list[EventRecord]:
        """Entries of one kind, newest first."""
        label = _label(kind)
        return [e for e in self._records if e.kind == label]

    def __len__(self) -> int:
        return len(self._records)

    def __iter__(self) -> Iterator[EventRecord]:
        return iter(list(self._records))
