from __future__ import annotations

from rich.console import Console

from punkwatch.core.config import WatchMode
from punkwatch.core.interfaces import ILogSource, INotifier
from punkwatch.core.models import DecodedEvent, WatchOutcome, WatchStats
from punkwatch.decoding.decoder import decode_log, render_message
from punkwatch.decoding.specs import EventRegistry


# ---------------------------------------------------------------------------
# Acceptance rule
# ---------------------------------------------------------------------------


def accepts(mode: WatchMode, decoded: DecodedEvent | None) -> bool:
    """
    Whether the loop keeps listening after this log.

    In "all" mode every log is accepted, recognized or not. In "single" mode
    only `mode.event_name` for `mode.punk_index` is accepted; any other log,
    including other valid events of the contract, ends the watch.
    """
    if mode.kind == "all":
        return True
    return (
        decoded is not None
        and decoded.name == mode.event_name
        and decoded.values.get("punkIndex") == mode.punk_index
    )


def _is_success(status: int | None) -> bool:
    return status is not None and 200 <= status < 300


# ---------------------------------------------------------------------------
# Watch loop
# ---------------------------------------------------------------------------


async def watch(
    *,
    logs: ILogSource,
    registry: EventRegistry,
    notifier: INotifier,
    mode: WatchMode = WatchMode(),
    console: Console | None = None,
) -> WatchOutcome:
    """
    Consume `logs` one at a time: decode, print, notify.

    Each notification is awaited before the next log is pulled. Delivery
    failures only show up in the stats. Returns when the source ends or when
    `mode` rejects a log; the rejected log is neither printed nor notified.
    """
    console = console or Console()
    stats = WatchStats()

    async for log in logs:
        stats.received += 1
        decoded = decode_log(log, registry)

        if not accepts(mode, decoded):
            return WatchOutcome(stop_reason="rejected", stats=stats)

        if decoded is None:
            stats.unrecognized += 1
        else:
            stats.recognized += 1

        message = render_message(decoded, log)
        console.print(message, markup=False, highlight=False, soft_wrap=True)

        status = await notifier.notify(message)
        if _is_success(status):
            stats.delivered += 1
        else:
            stats.delivery_failed += 1

    return WatchOutcome(stop_reason="stream_end", stats=stats)
