"""
Settings Management with Pydantic

Provides type-safe configuration management with:
- Environment variable support (one prefix per concern)
- Validation
- Mission defaults taken from the operations dashboard
"""

from functools import lru_cache

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class ConversionConfig(BaseSettings):
    """Constants of the illustrative conversion formulas."""
    model_config = SettingsConfigDict(
        env_prefix="CONVERSION_",
        extra="ignore"
    )

    fuel_energy_density_kwh_per_kg: float = 15.4
    pyrolysis_oil_yield: float = 0.6
    reactor_energy_kwh_per_kg: float = 2.1
    process_efficiency: float = 0.92
    kwh_to_esm_factor: float = 0.04
    fuel_density_kg_per_l: float = 0.7

    # Fusion
    fusion_metal_yield: float = 0.85
    fusion_energy_multiplier: float = 1.5
    metal_to_esm_factor: float = 0.8
    fusion_confidence: float = 0.85

    # Compaction
    compaction_bulk_density_kg_per_m3: float = 50.0
    volume_equivalent_kg_per_m3: float = 17.6
    compaction_energy_kwh_per_kg: float = 0.1
    compaction_confidence: float = 0.95

    # Allocation clamp (percent)
    min_allocation_pct: float = 10.0
    max_allocation_pct: float = 100.0


class EngineConfig(BaseSettings):
    """Operator-facing batch limits."""
    model_config = SettingsConfigDict(
        env_prefix="ENGINE_",
        extra="ignore"
    )

    min_batch_kg: float = 10.0
    max_batch_kg: float = 500.0


class LedgerConfig(BaseSettings):
    """Initial mission ledger and mutation limits."""
    model_config = SettingsConfigDict(
        env_prefix="LEDGER_",
        extra="ignore"
    )

    energy_kwh: float = 2340.0
    materials_processed_kg: float = 7820.0
    materials_total_kg: float = 12600.0
    fuel_liters: float = 890.0
    parts_kg: float = 275.0
    efficiency_pct: float = 94.0
    esm_saved_kg: float = 0.0

    parts_yield: float = 0.5
    max_efficiency_gain_pct: float = 3.0
    efficiency_ceiling_pct: float = 99.9

    # Quick actions
    optimize_energy_kwh: float = 200.0
    optimize_efficiency_pct: float = 1.5
    fuel_priority_liters: float = 30.0
    fuel_priority_energy_kwh: float = 50.0
    parts_batch_kg: float = 12.0


class EventLogConfig(BaseSettings):
    """Event history configuration."""
    model_config = SettingsConfigDict(
        env_prefix="EVENTLOG_",
        extra="ignore"
    )

    capacity: int = Field(default=200, gt=0)
    export_limit: int = Field(default=30, ge=0)


class PlaybackConfig(BaseSettings):
    """Preset playback configuration."""
    model_config = SettingsConfigDict(
        env_prefix="PLAYBACK_",
        extra="ignore"
    )

    step_delay_seconds: float = Field(default=0.7, ge=0.0)
    allocation_pct: float = 100.0


class MissionConfig(BaseSettings):
    """Mission header shown by the dashboard."""
    model_config = SettingsConfigDict(
        env_prefix="MISSION_",
        extra="ignore"
    )

    name: str = "Mars Alpha"
    sol: int = 892
    sol_total: int = 1095
    status: str = "OPERATIONAL"


class Settings(BaseSettings):
    """Main application settings."""
    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore"
    )

    # Application
    app_name: str = "PIGRE Mission Control"
    debug: bool = False  # forces DEBUG logging
    log_level: str = "INFO"

    # Sub-configurations
    conversion: ConversionConfig = Field(default_factory=ConversionConfig)
    engine: EngineConfig = Field(default_factory=EngineConfig)
    ledger: LedgerConfig = Field(default_factory=LedgerConfig)
    events: EventLogConfig = Field(default_factory=EventLogConfig)
    playback: PlaybackConfig = Field(default_factory=PlaybackConfig)
    mission: MissionConfig = Field(default_factory=MissionConfig)

    @classmethod
    def from_env(cls) -> "Settings":
        """Create settings from environment variables."""
        return cls(
            conversion=ConversionConfig(),
            engine=EngineConfig(),
            ledger=LedgerConfig(),
            events=EventLogConfig(),
            playback=PlaybackConfig(),
            mission=MissionConfig()
        )


@lru_cache()
def get_settings() -> Settings:
    """Get cached settings instance."""
    return Settings.from_env()
