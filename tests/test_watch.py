import io
import json

import httpx
import pytest
from rich.console import Console

from conftest import ADDR_A, ADDR_B, address_word, iter_logs, make_log, uint_word
from punkwatch.clients.webhook import WebhookNotifier
from punkwatch.core.config import WatchMode
from punkwatch.core.use_cases.watch import accepts, watch
from punkwatch.decoding.decoder import decode_log
from punkwatch.decoding.registries import make_bid_entered_registry
from punkwatch.decoding.specs import EventRegistry

SINGLE = WatchMode(kind="single", punk_index=1943)


def _bid(punk_index: int, value: int = 5):
    return make_log("PunkBidEntered(uint256,uint256,address)", [uint_word(punk_index), address_word(ADDR_A)], [uint_word(value)])


def _no_longer_for_sale(punk_index: int):
    return make_log("PunkNoLongerForSale(uint256)", [uint_word(punk_index)])


def _punk_bought():
    return make_log(
        "PunkBought(uint256,uint256,address,address)",
        [uint_word(42), address_word("0x" + "AA" * 20), address_word("0x" + "BB" * 20)],
        [uint_word(1000000000000000000)],
    )


def _console() -> tuple[Console, io.StringIO]:
    out = io.StringIO()
    return Console(file=out, width=80), out


@pytest.mark.asyncio
async def test_watch_prints_and_notifies_every_log(punks_registry: EventRegistry, mock_notifier) -> None:
    console, out = _console()
    unknown = make_log("Approval(address,address,uint256)", [address_word(ADDR_A), address_word(ADDR_B)])

    outcome = await watch(
        logs=iter_logs([_no_longer_for_sale(3), unknown]),
        registry=punks_registry,
        notifier=mock_notifier,
        console=console,
    )

    assert outcome.stop_reason == "stream_end"
    assert outcome.stats.received == 2
    assert outcome.stats.recognized == 1
    assert outcome.stats.unrecognized == 1
    assert outcome.stats.delivered == 2
    lines = out.getvalue().splitlines()
    assert lines[0] == "PunkNoLongerForSale: punk 3 no longer for sale"
    assert lines[1].startswith("Unrecognized event: topics=[")
    sent = [call.args[0] for call in mock_notifier.notify.await_args_list]
    assert sent == [lines[0], lines[1]]


@pytest.mark.asyncio
async def test_delivery_failure_does_not_stop_the_loop(punks_registry: EventRegistry) -> None:
    requests: list[httpx.Request] = []

    def handler(request: httpx.Request) -> httpx.Response:
        requests.append(request)
        if len(requests) == 1:
            raise httpx.ConnectError("connection refused", request=request)
        if len(requests) == 2:
            return httpx.Response(500)
        return httpx.Response(204)

    console, _out = _console()
    err = io.StringIO()
    async with httpx.AsyncClient(transport=httpx.MockTransport(handler)) as client:
        notifier = WebhookNotifier(
            "https://hooks.example/x", client=client, console=console, err_console=Console(file=err)
        )
        outcome = await watch(
            logs=iter_logs([_no_longer_for_sale(1), _no_longer_for_sale(2), _no_longer_for_sale(3)]),
            registry=punks_registry,
            notifier=notifier,
            console=console,
        )

    assert outcome.stop_reason == "stream_end"
    assert len(requests) == 3
    assert outcome.stats.received == 3
    assert outcome.stats.delivery_failed == 2
    assert outcome.stats.delivered == 1
    assert err.getvalue().count("Failed to send webhook notification") == 2


@pytest.mark.asyncio
async def test_punk_bought_end_to_end(punks_registry: EventRegistry) -> None:
    bodies: list[dict] = []

    def handler(request: httpx.Request) -> httpx.Response:
        bodies.append(json.loads(request.content))
        return httpx.Response(204)

    expected = (
        "PunkBought: punk 42 bought for 1000000000000000000 wei "
        "from 0xaaaaaaaaaaaaaaaaaaaaaaaaaaaaaaaaaaaaaaaa to 0xbbbbbbbbbbbbbbbbbbbbbbbbbbbbbbbbbbbbbbbb"
    )
    console, out = _console()
    async with httpx.AsyncClient(transport=httpx.MockTransport(handler)) as client:
        notifier = WebhookNotifier("https://hooks.example/x", client=client, console=console)
        await watch(logs=iter_logs([_punk_bought()]), registry=punks_registry, notifier=notifier, console=console)

    assert bodies == [{"content": expected}]
    assert expected in out.getvalue().splitlines()


@pytest.mark.asyncio
async def test_single_mode_continues_on_target_bid(mock_notifier) -> None:
    console, out = _console()

    outcome = await watch(
        logs=iter_logs([_bid(1943, 5), _bid(1943, 6)]),
        registry=make_bid_entered_registry(),
        notifier=mock_notifier,
        mode=SINGLE,
        console=console,
    )

    assert outcome.stop_reason == "stream_end"
    assert outcome.stats.received == 2
    assert mock_notifier.notify.await_count == 2
    assert out.getvalue().splitlines() == [
        f"PunkBidEntered: punk 1943 bid 5 wei by {ADDR_A}",
        f"PunkBidEntered: punk 1943 bid 6 wei by {ADDR_A}",
    ]


@pytest.mark.parametrize(
    "stopper",
    [_bid(7), _no_longer_for_sale(1943), _punk_bought()],
    ids=["other-punk", "other-event", "punk-bought"],
)
@pytest.mark.asyncio
async def test_single_mode_stops_on_anything_else(mock_notifier, stopper) -> None:
    console, out = _console()

    outcome = await watch(
        logs=iter_logs([_bid(1943), stopper, _bid(1943)]),
        registry=make_bid_entered_registry(),
        notifier=mock_notifier,
        mode=SINGLE,
        console=console,
    )

    assert outcome.stop_reason == "rejected"
    assert outcome.stats.received == 2
    assert mock_notifier.notify.await_count == 1
    assert len(out.getvalue().splitlines()) == 1


def test_accepts_all_mode_takes_unrecognized() -> None:
    assert accepts(WatchMode(), None)


def test_accepts_single_mode(punks_registry: EventRegistry) -> None:
    assert accepts(SINGLE, decode_log(_bid(1943), punks_registry))
    assert not accepts(SINGLE, decode_log(_bid(1944), punks_registry))
    assert not accepts(SINGLE, decode_log(_no_longer_for_sale(1943), punks_registry))
    assert not accepts(SINGLE, None)
