"""Websocket log subscription for Ethereum-compatible nodes.

This module provides:
- `LogSubscription`: an async context manager that opens a websocket, sends
  `eth_subscribe("logs", {"address": ...})` and iterates `RawLog` records
- Helpers to build the subscribe request and map notifications to `RawLog`

The stream ends when the node closes the connection; there is no reconnect.
"""

from __future__ import annotations

import asyncio
import json
from collections.abc import AsyncIterator
from typing import Any

import websockets
from websockets.exceptions import ConnectionClosed, WebSocketException
from eth_utils import decode_hex
from rich.console import Console

from punkwatch.core.models import RawLog
from punkwatch.errors import SubscriptionError

_stderr = Console(stderr=True)


def subscribe_request(address: str, request_id: int = 1) -> dict[str, Any]:
    """JSON-RPC payload subscribing to every log emitted by `address`."""
    return {
        "jsonrpc": "2.0",
        "id": request_id,
        "method": "eth_subscribe",
        "params": ["logs", {"address": address.lower()}],
    }


def _hex_int(v: Any) -> int | None:
    if isinstance(v, str) and v.startswith("0x"):
        return int(v, 16)
    return v if isinstance(v, int) else None


def _lower_str(v: Any) -> str | None:
    if v is None:
        return None
    if not isinstance(v, str):
        raise ValueError(f"expected a hex string, got {type(v).__name__}")
    return v.lower() or None


def log_from_notification(message: Any) -> RawLog | None:
    """Map an `eth_subscription` notification to a RawLog (None if not a log).

    Raises ValueError when the log payload has malformed hex.
    """
    if not isinstance(message, dict):
        return None
    params = message.get("params")
    if message.get("method") != "eth_subscription" or not isinstance(params, dict):
        return None
    rl = params.get("result")
    if not isinstance(rl, dict) or "topics" not in rl:
        return None

    topics = tuple(decode_hex(t) for t in rl["topics"])
    if any(len(t) != 32 for t in topics):
        raise ValueError("log topic is not 32 bytes")
    return RawLog(
        topics=topics,
        data=decode_hex(rl.get("data") or "0x"),
        address=_lower_str(rl.get("address")),
        block_number=_hex_int(rl.get("blockNumber")),
        tx_hash=_lower_str(rl.get("transactionHash")),
        log_index=_hex_int(rl.get("logIndex")),
    )


class LogSubscription:
    """Live log feed for one contract address.

    Parameters
    ----------
    ws_url : str
        Websocket endpoint of the node (credential embedded in the URL).
    address : str
        Contract whose logs are streamed.
    console : Console | None
        Where skipped notifications and connection closes are reported.
    """

    def __init__(self, ws_url: str, address: str, *, console: Console | None = None) -> None:
        self.ws_url = ws_url
        self.address = address.lower()
        self.console = console or _stderr
        self.subscription_id: str | None = None
        self._ws: Any = None

    async def __aenter__(self) -> LogSubscription:
        await self.connect()
        return self

    async def __aexit__(self, *exc_info: object) -> None:
        await self.aclose()

    async def connect(self) -> None:
        """Open the websocket and register the subscription; raise SubscriptionError on failure."""
        try:
            self._ws = await websockets.connect(self.ws_url)
            await self._ws.send(json.dumps(subscribe_request(self.address)))
            reply = json.loads(await self._ws.recv())
        except (OSError, TimeoutError, asyncio.TimeoutError, WebSocketException, json.JSONDecodeError) as e:
            await self.aclose()
            raise SubscriptionError(f"Cannot subscribe to logs: {type(e).__name__}: {e}") from e

        if "error" in reply or "result" not in reply:
            await self.aclose()
            e = reply.get("error") or {}
            raise SubscriptionError(f"eth_subscribe rejected: {e.get('code')} {e.get('message')}")
        self.subscription_id = reply["result"]

    async def __aiter__(self) -> AsyncIterator[RawLog]:
        if self._ws is None:
            raise SubscriptionError("Subscription is not connected")
        try:
            async for message in self._ws:
                try:
                    log = log_from_notification(json.loads(message))
                except (ValueError, TypeError) as e:
                    self.console.print(f"Skipping malformed log notification: {e}", markup=False, highlight=False)
                    continue
                if log is not None:
                    yield log
        except ConnectionClosed as e:
            self.console.print(f"Log subscription closed: {e}", markup=False, highlight=False)

    async def aclose(self) -> None:
        """Close the underlying websocket."""
        if self._ws is not None:
            ws, self._ws = self._ws, None
            await ws.close()
