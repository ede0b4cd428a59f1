"""
Simulation Engine

Operator-facing entry point for batch simulations. Validates the batch
against the configured operating range and delegates the arithmetic to the
conversion model. Never touches the ledger or the event log.
"""

from typing import Union
import logging
import math

from ..config.settings import ConversionConfig, EngineConfig
from ..core.errors import InvalidBatchSize
from .conversion import convert
from .entities import Mode, SimulationResult

logger = logging.getLogger(__name__)


class SimulationEngine:
    """
    Runs single-batch simulations.

    Batches outside [min_batch_kg, max_batch_kg] are rejected, not clamped.
    """

    def __init__(
        self,
        engine_config: EngineConfig = None,
        conversion_config: ConversionConfig = None
    ):
        self.engine_config = engine_config or EngineConfig()
        self.conversion_config = conversion_config or ConversionConfig()

    @property
    def batch_range(self) -> tuple[float, float]:
        return self.engine_config.min_batch_kg, self.engine_config.max_batch_kg

    def validate_batch(self, batch_mass_kg: float) -> None:
        """Raise InvalidBatchSize unless the batch is inside the operating range."""
        low, high = self.batch_range
        try:
            in_range = math.isfinite(batch_mass_kg) and low <= batch_mass_kg <= high
        except TypeError:
            in_range = False
        if not in_range:
            logger.warning("Rejected batch of %s kg (range %s-%s kg)", batch_mass_kg, low, high)
            raise InvalidBatchSize(batch_mass_kg, low, high)

    def simulate(
        self,
        mode: Union[Mode, str],
        batch_mass_kg: float,
        allocation_pct: float = 100.0
    ) -> SimulationResult:
        """Simulate one batch and return a fresh result."""
        mode = Mode.parse(mode)
        self.validate_batch(batch_mass_kg)

        result = convert(mode, batch_mass_kg, allocation_pct, self.conversion_config)
        logger.debug(
            "Simulated %s kg via %s: savings=%.2f kg-eq net=%.2f kWh",
            batch_mass_kg, mode.value, result.logistics_savings_kg, result.net_energy_kwh
        )
        return result
