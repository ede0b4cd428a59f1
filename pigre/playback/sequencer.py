"""
Preset Sequencer

Plays a preset back step by step as an explicit state machine:

    IDLE --start()--> RUNNING --advance() x (steps + 1)--> IDLE

Each advance() runs one step (simulate, apply, record a "process" event).
The advance() after the last step records "finished" and returns to IDLE.
The sequencer never sleeps on its own; run() is a convenience driver with
an injectable sleep, so tests and hosts control the clock.
"""

from dataclasses import dataclass
from enum import Enum
from typing import Callable, Mapping, Optional
import logging
import time

from ..config.settings import PlaybackConfig
from ..core.errors import AlreadyRunning, NotRunning, PigreError
from ..ledger.events import EventKind, EventLog, EventRecord, EventSource
from ..ledger.store import LedgerStore, LedgerTransition
from ..simulation.conversion import clamp_allocation
from ..simulation.engine import SimulationEngine
from ..simulation.entities import Mode, SimulationResult
from .presets import PRESETS, PresetSequence, PresetStep, get_preset

logger = logging.getLogger(__name__)


class SequencerState(Enum):
    """Sequencer lifecycle."""
    IDLE = "idle"
    RUNNING = "running"


@dataclass(frozen=True)
class StepOutcome:
    """Everything one playback step produced."""
    preset: str
    index: int
    step: PresetStep
    result: SimulationResult
    transition: LedgerTransition
    event: EventRecord


def process_message(result: SimulationResult) -> tuple[str, str]:
    """Message and detail of the "process" event for an applied result."""
    return (
        f"Processed {result.batch_mass_kg:g} kg via {Mode.parse(result.mode).value.upper()}",
        f"ΔESM={result.logistics_savings_kg:.2f} kg-eq"
    )


class PresetSequencer:
    """
    Runs at most one preset at a time.

    start() refuses while a preset is running and refuses unknown names or
    a non-finite allocation; no refusal touches the ledger or the log.
    """

    def __init__(
        self,
        engine: SimulationEngine,
        ledger: LedgerStore,
        events: EventLog,
        config: PlaybackConfig = None,
        catalog: Mapping[str, PresetSequence] = None
    ):
        self.engine = engine
        self.ledger = ledger
        self.events = events
        self.config = config or PlaybackConfig()
        self.catalog = PRESETS if catalog is None else catalog

        self._state = SequencerState.IDLE
        self._active: Optional[PresetSequence] = None
        self._position = 0
        self._allocation_pct = self.config.allocation_pct
        self._last_outcome: Optional[StepOutcome] = None

    @property
    def state(self) -> SequencerState:
        return self._state

    @property
    def is_running(self) -> bool:
        return self._state == SequencerState.RUNNING

    @property
    def active_preset(self) -> Optional[str]:
        return self._active.name if self._active else None

    @property
    def position(self) -> int:
        """Index of the next step to run."""
        return self._position

    @property
    def last_outcome(self) -> Optional[StepOutcome]:
        return self._last_outcome

    @property
    def allocation_pct(self) -> float:
        """Allocation used by the steps of the active preset."""
        return self._allocation_pct

    @property
    def step_delay(self) -> float:
        return self.config.step_delay_seconds

    def available_presets(self) -> list[str]:
        return sorted(self.catalog)

    def start(self, name: str, allocation_pct: float = None) -> PresetSequence:
        """Begin playing a preset at the given allocation (default: the configured one)."""
        if self.is_running:
            logger.warning("Preset %s refused: %s still running", name, self.active_preset)
            raise AlreadyRunning(name, self.active_preset)

        preset = get_preset(name, self.catalog)
        if allocation_pct is None:
            allocation_pct = self.config.allocation_pct
        clamp_allocation(allocation_pct, self.engine.conversion_config)

        self._active = preset
        self._position = 0
        self._allocation_pct = allocation_pct
        self._state = SequencerState.RUNNING
        self.events.record(EventSource.SYSTEM, EventKind.STARTED, f"Preset {name} started")
        logger.info("Preset %s started (%d steps, %g%% allocation)", name, len(preset), self._allocation_pct)
        return preset

    def advance(self) -> Optional[StepOutcome]:
        """
        Run the next step.

        Returns the step outcome, or None when this call finished the preset.
        """
        if not self.is_running:
            raise NotRunning("advance")

        preset = self._active
        if self._position >= len(preset.steps):
            self.events.record(EventSource.SYSTEM, EventKind.FINISHED, f"Preset {preset.name} finished")
            logger.info("Preset %s finished", preset.name)
            self._reset()
            return None

        index = self._position
        step = preset.steps[index]
        try:
            result = self.engine.simulate(step.mode, step.batch_mass_kg, self._allocation_pct)
            transition = self.ledger.apply(result)
        except PigreError as e:
            self.events.record(
                EventSource.SYSTEM,
                EventKind.CRITICAL,
                f"Preset {preset.name} aborted at step {index + 1}",
                e.message
            )
            self._reset()
            raise

        message, detail = process_message(result)
        event = self.events.record(EventSource.SIM, EventKind.PROCESS, message, detail)

        self._position += 1
        self._last_outcome = StepOutcome(
            preset=preset.name,
            index=index,
            step=step,
            result=result,
            transition=transition,
            event=event
        )
        return self._last_outcome

    def cancel(self) -> EventRecord:
        """Stop the running preset; steps already applied stay applied."""
        if not self.is_running:
            raise NotRunning("cancel")

        name = self._active.name
        event = self.events.record(
            EventSource.SYSTEM,
            EventKind.CANCELLED,
            f"Preset {name} cancelled",
            f"after {self._position} of {len(self._active.steps)} steps"
        )
        logger.info("Preset %s cancelled at step %d", name, self._position)
        self._reset()
        return event

    def run(
        self,
        name: str,
        sleep: Callable[[float], None] = time.sleep,
        allocation_pct: float = None
    ) -> list[StepOutcome]:
        """Play a whole preset, sleeping step_delay between advances."""
        self.start(name, allocation_pct)
        outcomes = []

        while self.is_running:
            outcome = self.advance()
            if outcome is not None:
                outcomes.append(outcome)
            if self.is_running:
                sleep(self.step_delay)

        return outcomes

    def _reset(self) -> None:
        self._state = SequencerState.IDLE
        self._active = None
        self._position = 0
        self._allocation_pct = self.config.allocation_pct
