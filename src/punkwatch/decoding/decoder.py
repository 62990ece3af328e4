"""Event decoder: raw logs → `DecodedEvent` → message text.

The leading topic selects the candidate specs from the `EventRegistry` in
constant time. Candidates are tried in declaration order and the first one
whose layout fits the log wins. A log that fits no candidate is
"unrecognized"; decoding never raises.
"""

from __future__ import annotations

from typing import Any

from punkwatch.core.models import DecodedEvent, RawLog
from punkwatch.decoding.specs import EventRegistry, EventSpec
from punkwatch.decoding.utils import parse_data_word, parse_topic_field
from punkwatch.errors import LogDecodeError

UNRECOGNIZED_PREFIX = "Unrecognized event"


# ---------- helper functions ----------


def _candidates(log: RawLog, registry: EventRegistry) -> list[EventSpec]:
    """Specs registered under the log's topic0 (empty if unknown or anonymous)."""
    topic0 = log.topic0
    if topic0 is None:
        return []
    return registry.get(topic0, [])


def _parse_values(log: RawLog, spec: EventSpec) -> dict[str, Any]:
    """Parse every field of `spec` out of `log`; raise LogDecodeError on mismatch."""
    expected_topics = 1 + len(spec.topic_fields)
    if len(log.topics) != expected_topics:
        raise LogDecodeError(f"{spec.name} expects {expected_topics} topics, got {len(log.topics)}")

    values: dict[str, Any] = {}
    for tf in spec.topic_fields:
        values[tf.name] = parse_topic_field(log.topics[tf.index], tf.type)
    for df in spec.data_fields:
        values[df.name] = parse_data_word(log.data, df.word_index, df.type)
    return values


# ---------- main decoder ----------


def decode_log(log: RawLog, registry: EventRegistry) -> DecodedEvent | None:
    """Decode `log` against the registry, or return None if nothing fits."""
    for spec in _candidates(log, registry):
        try:
            values = _parse_values(log, spec)
        except LogDecodeError:
            continue
        return DecodedEvent(name=spec.name, values=values, log=log, spec=spec)
    return None


def render_message(decoded: DecodedEvent | None, log: RawLog) -> str:
    """Human-readable line for a decoded event, or the unrecognized fallback."""
    if decoded is None:
        return f"{UNRECOGNIZED_PREFIX}: {log.describe()}"
    return decoded.render()


def describe_log(log: RawLog, registry: EventRegistry) -> str:
    """Decode and render in one step."""
    return render_message(decode_log(log, registry), log)
