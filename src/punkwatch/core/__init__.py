"""Core data models, configuration and interfaces.

This package provides:
- Data models (RawLog, DecodedEvent, WatchStats, WatchOutcome)
- Configuration classes (WatchConfig, WatchMode) and the env loader
"""

from punkwatch.core.config import WatchConfig, WatchMode, load_config
from punkwatch.core.models import DecodedEvent, RawLog, WatchOutcome, WatchStats

__all__ = [
    "WatchConfig",
    "WatchMode",
    "load_config",
    "DecodedEvent",
    "RawLog",
    "WatchOutcome",
    "WatchStats",
]
