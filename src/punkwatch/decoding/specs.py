"""Event specification primitives and registry typing.

Defines lightweight dataclasses to describe how to decode events:
- `TopicFieldSpec` / `DataFieldSpec`: typed sources for indexed topics / data words
- `EventSpec`: one event rule (topic0, fields, message template)
- `EventRegistry`: mapping from topic0 → candidate EventSpecs in priority order
"""

from __future__ import annotations

from collections.abc import Iterable
from dataclasses import dataclass
from string import Formatter
from typing import Any


@dataclass(frozen=True)
class TopicFieldSpec:
    """Describe one indexed topic field (by 0-based topic index and ABI type)."""

    name: str
    index: int
    type: str  # e.g., "address", "uint256"


@dataclass(frozen=True)
class DataFieldSpec:
    """Describe one 32-byte ABI word in the data section (0-based word index)."""

    name: str
    word_index: int
    type: str  # e.g., "address", "uint256"


@dataclass(frozen=True)
class EventSpec:
    """One event decoding rule + the message template used to render it.

    `template` is a `str.format` pattern whose placeholders are field names,
    e.g. "punk {punkIndex} bid {value} wei by {fromAddress}".
    """

    topic0: str
    name: str
    signature: str
    topic_fields: list[TopicFieldSpec]
    data_fields: list[DataFieldSpec]
    template: str

    def __post_init__(self):
        known = set(self.field_names)
        for _, field_name, _, _ in Formatter().parse(self.template):
            if field_name is not None and field_name not in known:
                raise ValueError(f"{self.name} template refers to a non-existent field {field_name!r}")

    @property
    def field_names(self) -> list[str]:
        return [f.name for f in self.topic_fields] + [f.name for f in self.data_fields]

    def render(self, values: dict[str, Any]) -> str:
        """Format decoded values as '<Name>: <template>'."""
        return f"{self.name}: {self.template.format(**values)}"


def default_template(topic_fields: Iterable[TopicFieldSpec], data_fields: Iterable[DataFieldSpec]) -> str:
    """Template listing every field as `name={name}`."""
    names = [f.name for f in topic_fields] + [f.name for f in data_fields]
    return " ".join(f"{n}={{{n}}}" for n in names)


# The full registry keyed by topic0 (lowercased 0x-hex). Candidates sharing a
# selector are kept in declaration order; the first that parses wins.
EventRegistry = dict[str, list[EventSpec]]


def iter_registry_specs(registry: EventRegistry) -> Iterable[EventSpec]:
    for specs in registry.values():
        yield from specs
