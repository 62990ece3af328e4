"""Event decoding.

This package provides:
- Event specification system (EventSpec, TopicFieldSpec, DataFieldSpec)
- Decoder that translates raw logs into DecodedEvent objects and messages
- Registry management for event specs
- Pre-built registries for the CryptoPunks market contract
"""

from punkwatch.decoding.decoder import decode_log, describe_log, render_message
from punkwatch.decoding.registries import make_bid_entered_registry, make_cryptopunks_registry
from punkwatch.decoding.registry import add_event_spec, add_many, restrict_registry
from punkwatch.decoding.registry_builder import event_spec_from_signature, make_registry
from punkwatch.decoding.specs import DataFieldSpec, EventRegistry, EventSpec, TopicFieldSpec

__all__ = [
    "decode_log",
    "describe_log",
    "render_message",
    "make_bid_entered_registry",
    "make_cryptopunks_registry",
    "add_event_spec",
    "add_many",
    "restrict_registry",
    "event_spec_from_signature",
    "make_registry",
    "DataFieldSpec",
    "EventRegistry",
    "EventSpec",
    "TopicFieldSpec",
]
