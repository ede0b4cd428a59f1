"""
Presets - Scripted Demonstration Sequences

A preset is a named, fixed, ordered list of (mode, batch) steps that the
sequencer plays back through the engine and the ledger. The catalog is
defined once at import time and never changes.
"""

from dataclasses import dataclass
from types import MappingProxyType
from typing import Mapping

from ..core.errors import UnknownPreset
from ..simulation.entities import Mode


@dataclass(frozen=True)
class PresetStep:
    """A single simulate + apply step."""
    mode: Mode
    batch_mass_kg: float


@dataclass(frozen=True)
class PresetSequence:
    """Named ordered steps."""
    name: str
    steps: tuple[PresetStep, ...]
    description: str = ""

    @classmethod
    def of(cls, name: str, steps: list, description: str = "") -> "PresetSequence":
        """Build from (mode, batch) pairs."""
        return cls(
            name=name,
            steps=tuple(PresetStep(Mode.parse(mode), batch) for mode, batch in steps),
            description=description
        )

    @property
    def total_batch_kg(self) -> float:
        return sum(step.batch_mass_kg for step in self.steps)

    def __len__(self) -> int:
        return len(self.steps)


PRESETS: Mapping[str, PresetSequence] = MappingProxyType({
    preset.name: preset
    for preset in (
        PresetSequence.of(
            "Day210Surge",
            [(Mode.PYROLYSIS, 100), (Mode.PYROLYSIS, 150), (Mode.PYROLYSIS, 200)],
            "Ramp of increasing pyrolysis batches"
        ),
        PresetSequence.of(
            "EmergencyFuel",
            [(Mode.PYROLYSIS, 200), (Mode.PYROLYSIS, 200)],
            "Repeated large pyrolysis batch for fuel"
        ),
        PresetSequence.of(
            "SteadyRun",
            [(Mode.COMPACTION, 75)] * 4,
            "Repeated compaction batch"
        )
    )
})


def get_preset(name: str, catalog: Mapping[str, PresetSequence] = None) -> PresetSequence:
    """Look up a preset by name."""
    catalog = PRESETS if catalog is None else catalog
    preset = catalog.get(name)
    if preset is None:
        raise UnknownPreset(name, sorted(catalog))
    return preset
