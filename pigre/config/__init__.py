"""
Configuration Management

Centralized configuration for:
- Conversion formula constants
- Operator batch limits
- Initial mission ledger
- Event history and playback
"""

from .settings import (
    Settings,
    ConversionConfig,
    EngineConfig,
    LedgerConfig,
    EventLogConfig,
    PlaybackConfig,
    MissionConfig,
    get_settings
)

__all__ = [
    "Settings",
    "ConversionConfig",
    "EngineConfig",
    "LedgerConfig",
    "EventLogConfig",
    "PlaybackConfig",
    "MissionConfig",
    "get_settings"
]
