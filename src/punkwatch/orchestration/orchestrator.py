"""Watch orchestrator: subscribe → decode → print → notify.

This module wires concrete implementations (LogSubscription, WebhookNotifier,
CryptoPunks registry) around the `watch` use case for CLI / script usage.
"""

from __future__ import annotations

from eth_utils import to_checksum_address
from rich.console import Console

from punkwatch.clients.subscription import LogSubscription
from punkwatch.clients.webhook import WebhookNotifier
from punkwatch.core.config import WatchConfig, WatchMode
from punkwatch.core.models import WatchOutcome
from punkwatch.core.use_cases.watch import watch
from punkwatch.decoding.registries import make_bid_entered_registry, make_cryptopunks_registry
from punkwatch.decoding.specs import EventRegistry


def registry_for_mode(mode: WatchMode) -> EventRegistry:
    """All eight events, or only PunkBidEntered in single mode."""
    if mode.kind == "single":
        return make_bid_entered_registry()
    return make_cryptopunks_registry()


async def run_watch(
    config: WatchConfig,
    *,
    console: Console | None = None,
    err_console: Console | None = None,
) -> WatchOutcome:
    """Open the subscription and the webhook client, then run the watch loop.

    Raises SubscriptionError if the subscription cannot be established; no
    notification is attempted in that case.
    """
    console = console or Console()
    err_console = err_console or Console(stderr=True)
    registry = registry_for_mode(config.mode)

    async with LogSubscription(config.ws_url, config.contract_address, console=err_console) as logs:
        console.print(
            f"Listening for events from contract {to_checksum_address(config.contract_address)}...",
            markup=False,
            highlight=False,
            soft_wrap=True,
        )
        async with WebhookNotifier(config.webhook_url, console=console, err_console=err_console) as notifier:
            return await watch(
                logs=logs,
                registry=registry,
                notifier=notifier,
                mode=config.mode,
                console=console,
            )
