"""
Preset Playback

Named demonstration scripts and the sequencer that plays them:
- Day210Surge: ramp of pyrolysis batches (100, 150, 200 kg)
- EmergencyFuel: two 200 kg pyrolysis batches
- SteadyRun: four 75 kg compaction batches
"""

from .presets import (
    PresetStep,
    PresetSequence,
    PRESETS,
    get_preset
)
from .sequencer import (
    SequencerState,
    StepOutcome,
    PresetSequencer,
    process_message
)

__all__ = [
    "PresetStep",
    "PresetSequence",
    "PRESETS",
    "get_preset",
    "SequencerState",
    "StepOutcome",
    "PresetSequencer",
    "process_message"
]
