"""Orchestration for watching a contract's logs and notifying a webhook.

This package provides:
- `run_watch`: wires the subscription, decoder registry and notifier
- `registry_for_mode`: registry matching the configured watch mode
"""

from punkwatch.orchestration.orchestrator import registry_for_mode, run_watch

__all__ = [
    "registry_for_mode",
    "run_watch",
]
