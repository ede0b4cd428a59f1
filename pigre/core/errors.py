"""
Error Hierarchy

    PigreError (base)
    ├── ValidationError
    │   ├── InvalidBatchSize
    │   ├── InvalidAllocation
    │   └── UnknownMode
    ├── PlaybackError
    │   ├── UnknownPreset
    │   ├── AlreadyRunning
    │   └── NotRunning
    └── LedgerError
        └── CorruptResult

Every error carries a human-readable message, a generated error code and a
context dict, so callers can report or log it without parsing strings.
Rejected calls never change ledger or event log state.
"""

from datetime import datetime
from typing import Any, Optional
import re


class PigreError(Exception):
    """Base exception for all engine errors."""

    ERROR_PREFIX = "PIGRE"

    def __init__(self, message: str, context: Optional[dict] = None):
        super().__init__(message)
        self.message = message
        self.context = context or {}
        self.error_code = self._generate_error_code()
        self.timestamp = datetime.now()

    def _generate_error_code(self) -> str:
        # CamelCase -> SCREAMING_SNAKE_CASE
        error_type = re.sub(r"(?<!^)(?=[A-Z])", "_", self.__class__.__name__).upper()
        return f"{self.ERROR_PREFIX}_{error_type}"

    def to_dict(self) -> dict[str, Any]:
        """Convert the error to a serializable dict."""
        return {
            "error_type": self.__class__.__name__,
            "error_code": self.error_code,
            "message": self.message,
            "context": self.context,
            "timestamp": self.timestamp.isoformat()
        }

    def __str__(self) -> str:
        return f"[{self.error_code}] {self.message}"


# =============================================================================
# Input validation
# =============================================================================

class ValidationError(PigreError):
    """Caller supplied an input outside the accepted domain."""


class InvalidBatchSize(ValidationError):
    """Batch mass is non-finite, non-positive or outside the operator range."""

    def __init__(self, batch_mass_kg: Any, min_kg: float = None, max_kg: float = None):
        if min_kg is not None and max_kg is not None:
            message = f"Batch size {batch_mass_kg} kg outside [{min_kg:g}, {max_kg:g}] kg"
        else:
            message = f"Batch size {batch_mass_kg} kg must be a finite value > 0"
        super().__init__(message, {
            "batch_mass_kg": batch_mass_kg,
            "min_kg": min_kg,
            "max_kg": max_kg
        })


class InvalidAllocation(ValidationError):
    """Allocation percentage is not a finite number."""

    def __init__(self, allocation_pct: Any):
        super().__init__(
            f"Allocation {allocation_pct} % must be a finite number",
            {"allocation_pct": allocation_pct}
        )


class UnknownMode(ValidationError):
    """Processing mode name is not recognised."""

    def __init__(self, mode: Any, valid_modes: list = None):
        super().__init__(
            f"Unknown processing mode: {mode}",
            {"mode": mode, "valid_modes": valid_modes or []}
        )


# =============================================================================
# Preset playback
# =============================================================================

class PlaybackError(PigreError):
    """Preset sequencer refused an operation."""


class UnknownPreset(PlaybackError):
    """Preset name is not in the catalog."""

    def __init__(self, name: str, available: list = None):
        super().__init__(
            f"Preset not found: {name}",
            {"preset": name, "available": available or []}
        )


class AlreadyRunning(PlaybackError):
    """A preset sequence is already active."""

    def __init__(self, requested: str, active: str):
        super().__init__(
            f"Cannot start preset {requested}: preset {active} is still running",
            {"requested": requested, "active": active}
        )


class NotRunning(PlaybackError):
    """The sequencer was advanced or cancelled while idle."""

    def __init__(self, operation: str):
        super().__init__(
            f"Cannot {operation}: no preset is running",
            {"operation": operation}
        )


# =============================================================================
# Ledger
# =============================================================================

class LedgerError(PigreError):
    """Ledger refused a mutation."""


class CorruptResult(LedgerError):
    """
    Simulation result carries non-finite, non-numeric or impossible values.

    Impossible includes an unknown mode, a non-positive batch and negative
    logistics_savings_kg. Negative savings are refused rather than clamped
    to zero so ESM and efficiency never decrease.
    """

    def __init__(self, fields: dict):
        names = ", ".join(sorted(fields))
        super().__init__(
            f"Simulation result has invalid fields: {names}",
            {"fields": fields}
        )
