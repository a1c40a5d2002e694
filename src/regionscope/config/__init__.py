"""Config module exports."""

from regionscope.config.loader import load_config
from regionscope.config.models import (
    LoggingConfig,
    ModifiersConfig,
    OutlineConfig,
    PatternPairConfig,
    RegionScopeConfig,
    RegionsConfig,
    SyncConfig,
)

__all__ = [
    "load_config",
    "RegionScopeConfig",
    "LoggingConfig",
    "ModifiersConfig",
    "OutlineConfig",
    "PatternPairConfig",
    "RegionsConfig",
    "SyncConfig",
]
