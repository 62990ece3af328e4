from __future__ import annotations

from collections.abc import AsyncIterator
from typing import Protocol, runtime_checkable

from punkwatch.core.models import RawLog


# ---------------------------------------------------------------------------
# ILogSource
# ---------------------------------------------------------------------------

@runtime_checkable
class ILogSource(Protocol):
    """
    Abstract source of raw logs for one contract.

    Domain expectations:
    - It yields RawLog objects in delivery order, one at a time.
    - It is not restartable; when it ends, the watch ends.
    - It hides the underlying transport (websocket subscription, replay file...).
    """

    def __aiter__(self) -> AsyncIterator[RawLog]:
        """
        Iterate logs as they arrive.

        Implementations:
        - LogSubscription (eth_subscribe over websocket)
        - In-memory list of logs for testing
        """
        ...


# ---------------------------------------------------------------------------
# INotifier
# ---------------------------------------------------------------------------

@runtime_checkable
class INotifier(Protocol):
    """
    Best-effort sink for rendered messages.

    Domain expectations:
    - Delivery failures are reported through the return value, never raised.
    - No retries; one attempt per message.
    """

    async def notify(self, message: str) -> int | None:
        """
        Deliver one message.

        Returns
        -------
        int | None
            HTTP status of the attempt, or None if no response was received.
        """
        ...
