from __future__ import annotations

import os
from collections.abc import Mapping
from dataclasses import dataclass
from typing import Literal

from eth_utils import is_address

from punkwatch.constants import BID_ENTERED_EVENT, CRYPTOPUNKS_MARKET, DEFAULT_PUNK_INDEX, INFURA_WS_URL
from punkwatch.errors import ConfigError

ModeKind = Literal["all", "single"]


@dataclass(frozen=True)
class WatchMode:
    """Which logs the watch loop accepts.

    - "all": every log is decoded, printed and notified.
    - "single": only `event_name` for `punk_index`; anything else stops the loop.
    """

    kind: ModeKind = "all"
    event_name: str = BID_ENTERED_EVENT
    punk_index: int = DEFAULT_PUNK_INDEX


@dataclass(frozen=True)
class WatchConfig:
    """Configuration for one watch run, built once at startup."""

    ws_url: str
    webhook_url: str
    contract_address: str = CRYPTOPUNKS_MARKET
    mode: WatchMode = WatchMode()


def _required(env: Mapping[str, str], name: str) -> str:
    value = env.get(name, "").strip()
    if not value:
        raise ConfigError(f"{name} must be set")
    return value


def load_config(environ: Mapping[str, str] | None = None) -> WatchConfig:
    """Build a `WatchConfig` from environment variables.

    Required: INFURA_PROJECT_ID, DISCORD_WEBHOOK_URL.
    Optional: CONTRACT_ADDRESS, WATCH_MODE ("all" | "single"), WATCH_PUNK_INDEX.
    """
    env = os.environ if environ is None else environ

    project_id = _required(env, "INFURA_PROJECT_ID")
    webhook_url = _required(env, "DISCORD_WEBHOOK_URL")

    contract = env.get("CONTRACT_ADDRESS", "").strip() or CRYPTOPUNKS_MARKET
    if not is_address(contract):
        raise ConfigError(f"CONTRACT_ADDRESS is not a valid address: {contract}")

    kind = env.get("WATCH_MODE", "").strip().lower() or "all"
    if kind not in ("all", "single"):
        raise ConfigError(f"WATCH_MODE must be 'all' or 'single', got {kind!r}")

    raw_index = env.get("WATCH_PUNK_INDEX", "").strip()
    try:
        punk_index = int(raw_index) if raw_index else DEFAULT_PUNK_INDEX
    except ValueError as e:
        raise ConfigError(f"WATCH_PUNK_INDEX must be an integer, got {raw_index!r}") from e
    if punk_index < 0:
        raise ConfigError(f"WATCH_PUNK_INDEX must be non-negative, got {punk_index}")

    return WatchConfig(
        ws_url=INFURA_WS_URL.format(project_id=project_id),
        webhook_url=webhook_url,
        contract_address=contract.lower(),
        mode=WatchMode(kind=kind, punk_index=punk_index),
    )
