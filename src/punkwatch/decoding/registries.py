"""Event registries for the CryptoPunks market contract.

The order of `CRYPTOPUNKS_EVENTS` is the decode priority order: when two
candidates could both parse a log, the one listed first wins.

Example
-------
>>> from punkwatch.decoding.registries import make_cryptopunks_registry
>>> reg = make_cryptopunks_registry()
"""

from __future__ import annotations

from punkwatch.constants import BID_ENTERED_EVENT

from .registry import restrict_registry
from .registry_builder import SignatureEntry, make_registry
from .specs import EventRegistry

CRYPTOPUNKS_EVENTS: list[SignatureEntry] = [
    (
        "Assign(address indexed to, uint256 punkIndex)",
        "punk {punkIndex} assigned to {to}",
    ),
    (
        "Transfer(address indexed from, address indexed to, uint256 value)",
        "{value} punks transferred from {from} to {to}",
    ),
    (
        "PunkTransfer(address indexed from, address indexed to, uint256 punkIndex)",
        "punk {punkIndex} transferred from {from} to {to}",
    ),
    (
        "PunkOffered(uint256 indexed punkIndex, uint256 minValue, address indexed toAddress)",
        "punk {punkIndex} offered for {minValue} wei to {toAddress}",
    ),
    (
        "PunkBidEntered(uint256 indexed punkIndex, uint256 value, address indexed fromAddress)",
        "punk {punkIndex} bid {value} wei by {fromAddress}",
    ),
    (
        "PunkBidWithdrawn(uint256 indexed punkIndex, uint256 value, address indexed fromAddress)",
        "punk {punkIndex} bid {value} wei withdrawn by {fromAddress}",
    ),
    (
        "PunkBought(uint256 indexed punkIndex, uint256 value, address indexed fromAddress, address indexed toAddress)",
        "punk {punkIndex} bought for {value} wei from {fromAddress} to {toAddress}",
    ),
    (
        "PunkNoLongerForSale(uint256 indexed punkIndex)",
        "punk {punkIndex} no longer for sale",
    ),
]


def make_cryptopunks_registry() -> EventRegistry:
    """Return registry for all eight CryptoPunks market events."""
    return make_registry(CRYPTOPUNKS_EVENTS)


def make_bid_entered_registry() -> EventRegistry:
    """Return registry that only decodes PunkBidEntered."""
    return restrict_registry(make_cryptopunks_registry(), [BID_ENTERED_EVENT])
