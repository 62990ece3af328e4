from __future__ import annotations

from .constants import CRYPTOPUNKS_MARKET
from .core.config import WatchConfig, WatchMode, load_config
from .core.models import DecodedEvent, RawLog
from .decoding.decoder import decode_log, describe_log, render_message
from .decoding.registries import make_bid_entered_registry, make_cryptopunks_registry
from .decoding.registry_builder import make_registry
from .decoding.specs import DataFieldSpec, EventRegistry, EventSpec, TopicFieldSpec

__all__ = [
    "make_registry",
    "make_cryptopunks_registry",
    "make_bid_entered_registry",
    "decode_log",
    "describe_log",
    "render_message",
    "EventSpec",
    "TopicFieldSpec",
    "DataFieldSpec",
    "EventRegistry",
    "DecodedEvent",
    "RawLog",
    "WatchConfig",
    "WatchMode",
    "load_config",
    "CRYPTOPUNKS_MARKET",
]
