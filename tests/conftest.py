from collections.abc import AsyncIterator, Iterable
from unittest.mock import AsyncMock

import pytest
from eth_utils import keccak

from punkwatch.core.models import RawLog
from punkwatch.decoding.registries import make_cryptopunks_registry
from punkwatch.decoding.specs import EventRegistry

ADDR_A = "0x" + "aa" * 20
ADDR_B = "0x" + "bb" * 20


def topic0(canonical_signature: str) -> bytes:
    return keccak(text=canonical_signature)


def uint_word(v: int) -> bytes:
    return v.to_bytes(32, "big")


def address_word(addr: str) -> bytes:
    return b"\x00" * 12 + bytes.fromhex(addr[2:])


def make_log(canonical_signature: str, topics: Iterable[bytes] = (), data: Iterable[bytes] = ()) -> RawLog:
    return RawLog(topics=(topic0(canonical_signature), *topics), data=b"".join(data))


async def iter_logs(logs: Iterable[RawLog]) -> AsyncIterator[RawLog]:
    for log in logs:
        yield log


@pytest.fixture
def punks_registry() -> EventRegistry:
    return make_cryptopunks_registry()


@pytest.fixture
def mock_notifier():
    notifier = AsyncMock()
    notifier.notify = AsyncMock(return_value=204)
    return notifier
