"""Core data models.

This module defines:
- `RawLog`: one log record as delivered by the subscription (topics + data).
- `DecodedEvent`: a log matched against an `EventSpec`, with typed values.
- `WatchStats` / `WatchOutcome`: counters and stop reason of a watch run.

Design notes
------------
- Topics are kept as raw 32-byte values; hex rendering happens at the edges.
- Decoded addresses are lowercase 0x-hex strings, integers stay Python ints.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import TYPE_CHECKING, Any, Literal

if TYPE_CHECKING:
    from punkwatch.decoding.specs import EventSpec

StopReason = Literal["stream_end", "rejected"]


# === Subscription record ===


@dataclass(slots=True, frozen=True)
class RawLog:
    """Raw log as received from the node, minimally normalized."""

    topics: tuple[bytes, ...]  # 32-byte words, topic0 first
    data: bytes
    address: str | None = None  # lowercased 0x...
    block_number: int | None = None
    tx_hash: str | None = None  # lowercased 0x...
    log_index: int | None = None

    @property
    def topic0(self) -> str | None:
        """Leading topic as lowercase 0x-hex, or None for anonymous logs."""
        if not self.topics:
            return None
        return "0x" + self.topics[0].hex()

    def describe(self) -> str:
        """Render topics and data for diagnostics."""
        topics = ", ".join("0x" + t.hex() for t in self.topics)
        return f"topics=[{topics}] data=0x{self.data.hex()}"


# === Decoded record ===


@dataclass(slots=True)
class DecodedEvent:
    """Event name plus typed field values keyed by parameter name."""

    name: str
    values: dict[str, Any]
    log: RawLog
    spec: EventSpec  # the candidate that matched

    def render(self) -> str:
        return self.spec.render(self.values)


# === Watch results ===


@dataclass(kw_only=True)
class WatchStats:
    """
    Counters for one watch run.

    `delivered` counts 2xx webhook responses; every other delivery attempt is
    counted in `delivery_failed`.
    """

    received: int = 0
    recognized: int = 0
    unrecognized: int = 0
    delivered: int = 0
    delivery_failed: int = 0


@dataclass(slots=True)
class WatchOutcome:
    """Why a watch run returned, plus its counters."""

    stop_reason: StopReason
    stats: WatchStats = field(default_factory=WatchStats)
