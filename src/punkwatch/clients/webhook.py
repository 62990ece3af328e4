"""Fire-and-forget webhook notifier (Discord-style `{"content": ...}` payload)."""

from __future__ import annotations

import httpx
from rich.console import Console

WEBHOOK_FIELD = "content"


class WebhookNotifier:
    """POST each message once to a webhook URL; never raise on delivery failure.

    Parameters
    ----------
    url : str
        Webhook endpoint; any credential is part of the URL.
    client : httpx.AsyncClient | None
        Shared client reused for every call. Created without a timeout if omitted.
    console / err_console : Console | None
        Where response statuses / delivery failures are printed.
    """

    def __init__(
        self,
        url: str,
        *,
        client: httpx.AsyncClient | None = None,
        console: Console | None = None,
        err_console: Console | None = None,
    ) -> None:
        self.url = url
        self._owns_client = client is None
        self.client = client or httpx.AsyncClient(timeout=None)
        self.console = console or Console()
        self.err_console = err_console or Console(stderr=True)

    async def __aenter__(self) -> WebhookNotifier:
        return self

    async def __aexit__(self, *exc_info: object) -> None:
        await self.aclose()

    async def notify(self, message: str) -> int | None:
        """Send `message`; return the HTTP status, or None if no response arrived."""
        try:
            r = await self.client.post(self.url, json={WEBHOOK_FIELD: message})
        except httpx.HTTPError as e:
            self.err_console.print(
                f"Failed to send webhook notification: {type(e).__name__}: {e}", markup=False, highlight=False
            )
            return None

        self.console.print(f"Webhook response: {r.status_code}", markup=False, highlight=False)
        try:
            r.raise_for_status()
        except httpx.HTTPStatusError as e:
            self.err_console.print(f"Failed to send webhook notification: {e}", markup=False, highlight=False)
        return r.status_code

    async def aclose(self) -> None:
        """Close the HTTP client if this notifier created it."""
        if self._owns_client:
            await self.client.aclose()
