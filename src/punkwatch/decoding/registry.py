"""Registry mutation helpers.

This module exposes:
- `add_event_spec(registry, spec)` → append one spec under its lowercased topic0
- `add_many(registry, specs)` → append multiple, keeping their order
- `restrict_registry(registry, names)` → copy holding only the named events
"""

from __future__ import annotations

from collections.abc import Iterable

from punkwatch.decoding.specs import EventRegistry, EventSpec, iter_registry_specs


def add_event_spec(registry: EventRegistry, spec: EventSpec) -> None:
    """Append one spec to the candidates of its lowercased topic0."""
    registry.setdefault(spec.topic0.lower(), []).append(spec)


def add_many(registry: EventRegistry, specs: Iterable[EventSpec]) -> None:
    """Insert many specs into the registry."""
    for s in specs:
        add_event_spec(registry, s)


def restrict_registry(registry: EventRegistry, names: Iterable[str]) -> EventRegistry:
    """Return a new registry that only decodes the given event names."""
    wanted = set(names)
    reg: EventRegistry = {}
    add_many(reg, (s for s in iter_registry_specs(registry) if s.name in wanted))
    missing = wanted - {s.name for s in iter_registry_specs(reg)}
    if missing:
        raise ValueError(f"Unknown event(s): {', '.join(sorted(missing))}")
    return reg
