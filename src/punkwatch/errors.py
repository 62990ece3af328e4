"""Exception types raised by punkwatch.

Only `ConfigError` and `SubscriptionError` ever escape to the CLI; decode
mismatches stay inside the decoder and webhook failures inside the notifier.
"""

from __future__ import annotations


class ConfigError(ValueError):
    """A required setting is missing or a setting has an invalid value."""


class SubscriptionError(RuntimeError):
    """The log subscription could not be established."""


class LogDecodeError(ValueError):
    """A raw log does not fit the layout of one event spec."""
